"""Prompt helpers for the chat assistant and the guidance forms."""

from __future__ import annotations

from typing import Iterable


def chat_system_prompt() -> str:
	"""Return the system prompt for the live chat assistant."""
	return (
		"You are StudyPath AI, a friendly study-abroad advisor for international students. "
		"Answer questions about universities, scholarships, visas, documents and life abroad. "
		"Keep replies short, concrete and encouraging, and suggest talking to a human advisor "
		"when a question needs a personal review."
	)


def guidance_system_prompt() -> str:
	"""Return the system prompt for JSON guidance requests."""
	return (
		"You are an AI assistant for international students. "
		"Provide helpful, accurate responses in JSON format as requested."
	)


def profile_evaluation_prompt(
	gpa: str, toefl_score: int, sat_gre_score: int, budget: int, field_of_study: str, extracurriculars: str
) -> str:
	return (
		"Analyze this student profile and provide a strength score (0-100) and university recommendations:\n"
		f"GPA: {gpa}\n"
		f"TOEFL: {toefl_score}\n"
		f"SAT/GRE: {sat_gre_score}\n"
		f"Budget: ${budget}\n"
		f"Field: {field_of_study}\n"
		f"Extracurriculars: {extracurriculars}\n\n"
		"Return JSON with: strengthScore, universityMatches (array with name, program, cost, matchScore)"
	)


def document_preparation_prompt(document_type: str, content: str) -> str:
	return (
		f"Analyze and improve this {document_type}:\n{content}\n\n"
		"Provide JSON response with:\n"
		"- suggestions: array of improvement suggestions\n"
		"- enhancedContent: improved version of the content"
	)


def research_matching_prompt(primary_area: str, specific_topics: str, universities: Iterable[str]) -> str:
	return (
		"Find professors matching these research interests:\n"
		f"Primary Area: {primary_area}\n"
		f"Topics: {specific_topics}\n"
		f"Universities: {', '.join(universities)}\n\n"
		"Return JSON with professorMatches array containing: name, university, specialization, matchScore, publications"
	)


def visa_support_prompt(nationality: str, destination_country: str, program_type: str) -> str:
	return (
		"Provide visa requirements and interview tips for:\n"
		f"Nationality: {nationality}\n"
		f"Destination: {destination_country}\n"
		f"Program: {program_type}\n\n"
		"Return JSON with: visaType, documentStatus, interviewTips array, processingInfo"
	)


def cultural_adaptation_prompt(origin_country: str, destination_country: str) -> str:
	return (
		f"Provide cultural adaptation tips for someone from {origin_country} going to {destination_country}.\n\n"
		"Return JSON with: culturalTips array, communities array with student groups"
	)


def career_development_prompt(field_of_study: str, career_interests: str, preferred_location: str) -> str:
	return (
		"Provide career guidance for:\n"
		f"Field: {field_of_study}\n"
		f"Interests: {career_interests}\n"
		f"Location: {preferred_location}\n\n"
		"Return JSON with: careerPaths array, jobMatches array, immigrationInfo"
	)
