"""Canned guidance returned when a form is submitted with AI turned off."""

from typing import Any, Dict


def profile_evaluation() -> Dict[str, Any]:
    return {
        "strengthScore": 85,
        "universityMatches": [
            {"name": "University A", "program": "Computer Science", "cost": 28000, "matchScore": 90},
            {"name": "University B", "program": "Engineering", "cost": 29000, "matchScore": 85},
            {"name": "University C", "program": "Computer Science", "cost": 32000, "matchScore": 80},
        ],
    }


def document_preparation() -> Dict[str, Any]:
    return {
        "suggestions": [
            "Rephrase: I am deeply committed to advancing AI through innovative research.",
            "Add: Highlight a specific AI project to strengthen impact.",
        ],
        "enhancedContent": (
            "I am deeply committed to advancing AI through innovative research and practical applications. "
            "During my undergraduate studies, I developed a robust foundation in computer science while "
            "leading a machine learning project that achieved 95% accuracy in image classification tasks."
        ),
    }


PROPOSAL_ENHANCEMENT = "Add a section on recent NLP trends to strengthen proposal."


def research_matching() -> Dict[str, Any]:
    return {
        "professorMatches": [
            {"name": "Prof. Smith", "specialization": "NLP", "university": "University A", "matchScore": 95},
            {"name": "Prof. Jones", "specialization": "Machine Learning", "university": "University B", "matchScore": 88},
        ],
        "proposalEnhancement": PROPOSAL_ENHANCEMENT,
    }


def visa_support() -> Dict[str, Any]:
    return {
        "visaType": "F-1",
        "documentStatus": "Valid",
        "interviewTips": ["Practice questions about study plans", "Bring financial proof"],
    }


def cultural_adaptation() -> Dict[str, Any]:
    return {
        "culturalTips": ["Purchase winter clothing", "Understand academic norms"],
        "communities": ["Nigerian Students Association", "International Student Group"],
    }


def career_development() -> Dict[str, Any]:
    return {
        "careerPaths": ["Software Engineer", "Data Scientist"],
        "jobMatches": ["Google", "Microsoft"],
        "immigrationInfo": "Eligible for OPT in USA",
    }


EDUBOT_QUICK_REPLIES = [
    "Find a university",
    "Help with visa application",
    "Find a scholarship",
    "Cultural tips",
    "Mental health support",
    "Document preparation",
]
