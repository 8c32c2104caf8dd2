"""Guidance form handlers: canned answers, or AI answers persisted per user."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import HTTPException, Request

from dal.guidance_dal import GuidanceDAL
from models.guidance_payloads import (
	CareerDevelopmentPayload,
	CulturalAdaptationPayload,
	DocumentPreparationPayload,
	ProfileEvaluationPayload,
	ResearchMatchingPayload,
	VisaSupportPayload,
)
from models.guidance_records import (
	CareerProfile,
	CulturalAdaptation,
	Document,
	Profile,
	ResearchInterest,
	VisaApplication,
)
from services import mock_guidance
from services.ai import prompts
from services.ai.guidance_client import GuidanceClient

# Accounts are not wired in yet; every submission belongs to the demo user.
MOCK_USER_ID = 1


def _guidance_client(request: Request) -> GuidanceClient:
	client = getattr(request.app.state, "guidance_client", None)
	if client is None:
		raise HTTPException(status_code=500, detail="Guidance client not initialized.")
	return client


def _dal(request: Request) -> GuidanceDAL:
	db_initializer = getattr(request.app.state, "db_initializer", None)
	if db_initializer is None:
		raise HTTPException(status_code=500, detail="Database not initialized.")
	return GuidanceDAL(db_initializer)


async def evaluate_profile(request: Request, payload: ProfileEvaluationPayload) -> Dict[str, Any]:
	"""Score a student profile and suggest universities."""
	profile_data = payload.model_dump(by_alias=True)
	if not payload.ai_enabled:
		return {"profile": profile_data, **mock_guidance.profile_evaluation(), "aiEnabled": False}

	analysis = await _guidance_client(request).request_json(
		prompts.profile_evaluation_prompt(
			payload.gpa,
			payload.toefl_score,
			payload.sat_gre_score,
			payload.budget,
			payload.field_of_study,
			payload.extracurriculars,
		)
	)
	matches = analysis.get("universityMatches") or []

	dal = _dal(request)
	profile = await dal.create(
		Profile(
			id=None,
			user_id=MOCK_USER_ID,
			gpa=payload.gpa,
			toefl_score=payload.toefl_score,
			sat_gre_score=payload.sat_gre_score,
			budget=payload.budget,
			field_of_study=payload.field_of_study,
			extracurriculars=payload.extracurriculars,
			strength_score=analysis.get("strengthScore"),
		)
	)
	if isinstance(matches, list):
		await dal.replace_university_matches(profile.id, matches)

	return {
		"profile": profile_data,
		"strengthScore": analysis.get("strengthScore"),
		"universityMatches": matches,
		"aiEnabled": True,
	}


async def prepare_document(request: Request, payload: DocumentPreparationPayload) -> Dict[str, Any]:
	"""Suggest improvements for a statement, essay or CV."""
	if not payload.ai_enabled:
		guidance = mock_guidance.document_preparation()
	else:
		guidance = await _guidance_client(request).request_json(
			prompts.document_preparation_prompt(payload.document_type, payload.content)
		)
		await _dal(request).create(
			Document(
				id=None,
				user_id=MOCK_USER_ID,
				document_type=payload.document_type,
				original_content=payload.content,
				enhanced_content=guidance.get("enhancedContent"),
				suggestions=guidance.get("suggestions"),
			)
		)

	return {
		"documentType": payload.document_type,
		"input": payload.content,
		"suggestions": guidance.get("suggestions"),
		"enhancedContent": guidance.get("enhancedContent"),
		"aiEnabled": payload.ai_enabled,
	}


async def match_research(request: Request, payload: ResearchMatchingPayload) -> Dict[str, Any]:
	"""Find professors whose work matches the student's research interests."""
	if not payload.ai_enabled:
		guidance = mock_guidance.research_matching()
		return {
			"researchInterest": payload.primary_area,
			"professorMatches": guidance["professorMatches"],
			"proposalEnhancement": guidance["proposalEnhancement"],
			"aiEnabled": False,
		}

	analysis = await _guidance_client(request).request_json(
		prompts.research_matching_prompt(
			payload.primary_area, payload.specific_topics, payload.preferred_universities
		)
	)
	matches = analysis.get("professorMatches") or []

	dal = _dal(request)
	interest = await dal.create(
		ResearchInterest(
			id=None,
			user_id=MOCK_USER_ID,
			primary_area=payload.primary_area,
			specific_topics=payload.specific_topics,
			preferred_universities=payload.preferred_universities,
		)
	)
	if isinstance(matches, list):
		await dal.replace_professor_matches(interest.id, matches)

	return {
		"researchInterest": payload.primary_area,
		"professorMatches": matches,
		"proposalEnhancement": analysis.get("proposalEnhancement") or mock_guidance.PROPOSAL_ENHANCEMENT,
		"aiEnabled": True,
	}


async def visa_support(request: Request, payload: VisaSupportPayload) -> Dict[str, Any]:
	"""Return visa type, document status and interview tips."""
	request_fields = payload.model_dump(by_alias=True, exclude={"ai_enabled"})
	if not payload.ai_enabled:
		guidance = mock_guidance.visa_support()
	else:
		guidance = await _guidance_client(request).request_json(
			prompts.visa_support_prompt(payload.nationality, payload.destination_country, payload.program_type)
		)
		await _dal(request).create(
			VisaApplication(
				id=None,
				user_id=MOCK_USER_ID,
				nationality=payload.nationality,
				destination_country=payload.destination_country,
				program_type=payload.program_type,
				visa_type=guidance.get("visaType"),
				document_status=guidance.get("documentStatus"),
				interview_tips=guidance.get("interviewTips"),
			)
		)

	return {
		**request_fields,
		"visaType": guidance.get("visaType"),
		"documentStatus": guidance.get("documentStatus"),
		"interviewTips": guidance.get("interviewTips"),
		"aiEnabled": payload.ai_enabled,
	}


async def cultural_adaptation(request: Request, payload: CulturalAdaptationPayload) -> Dict[str, Any]:
	"""Return cultural tips and student communities for the destination."""
	request_fields = payload.model_dump(by_alias=True, exclude={"ai_enabled"})
	if not payload.ai_enabled:
		guidance = mock_guidance.cultural_adaptation()
	else:
		guidance = await _guidance_client(request).request_json(
			prompts.cultural_adaptation_prompt(payload.origin_country, payload.destination_country)
		)
		await _dal(request).create(
			CulturalAdaptation(
				id=None,
				user_id=MOCK_USER_ID,
				origin_country=payload.origin_country,
				destination_country=payload.destination_country,
				cultural_tips=guidance.get("culturalTips"),
				communities=guidance.get("communities"),
			)
		)

	return {
		**request_fields,
		"culturalTips": guidance.get("culturalTips"),
		"communities": guidance.get("communities"),
		"aiEnabled": payload.ai_enabled,
	}


async def career_development(request: Request, payload: CareerDevelopmentPayload) -> Dict[str, Any]:
	"""Return career paths, job matches and post-study immigration notes."""
	if not payload.ai_enabled:
		guidance = mock_guidance.career_development()
	else:
		guidance = await _guidance_client(request).request_json(
			prompts.career_development_prompt(
				payload.field_of_study, payload.career_interests, payload.preferred_location
			)
		)
		await _dal(request).create(
			CareerProfile(
				id=None,
				user_id=MOCK_USER_ID,
				field_of_study=payload.field_of_study,
				career_interests=payload.career_interests,
				preferred_location=payload.preferred_location,
				career_paths=guidance.get("careerPaths"),
				job_matches=guidance.get("jobMatches"),
				immigration_info=guidance.get("immigrationInfo"),
			)
		)

	return {
		"profile": payload.field_of_study,
		"goal": payload.career_interests,
		"careerPaths": guidance.get("careerPaths"),
		"jobMatches": guidance.get("jobMatches"),
		"immigrationInfo": guidance.get("immigrationInfo"),
		"aiEnabled": payload.ai_enabled,
	}
