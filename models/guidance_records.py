from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Tuple


@dataclass
class Profile:
    """Row in the `profiles` table: a student's academic profile and its score.

    Attributes:
        id: Primary key (None for new records).
        user_id: Owning user.
        gpa: GPA as entered by the student (free text, e.g. "3.8/4.0").
        toefl_score: TOEFL total.
        sat_gre_score: SAT or GRE total.
        budget: Yearly budget in USD.
        field_of_study: Intended field.
        extracurriculars: Free-text activities.
        strength_score: AI strength score (0-100) when evaluated with AI.
        created_at: Unix timestamp (seconds) when the row was inserted.
        updated_at: Unix timestamp (seconds) of the last update.
    """

    TABLE: ClassVar[str] = "profiles"
    JSON_FIELDS: ClassVar[Tuple[str, ...]] = ()

    id: Optional[int]
    user_id: Optional[int]
    gpa: Optional[str] = None
    toefl_score: Optional[int] = None
    sat_gre_score: Optional[int] = None
    budget: Optional[int] = None
    field_of_study: Optional[str] = None
    extracurriculars: Optional[str] = None
    strength_score: Optional[int] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None


@dataclass
class UniversityMatch:
    """Row in `university_matches`, owned by a profile."""

    TABLE: ClassVar[str] = "university_matches"
    JSON_FIELDS: ClassVar[Tuple[str, ...]] = ()

    id: Optional[int]
    profile_id: int
    university_name: str
    program: Optional[str] = None
    cost: Optional[int] = None
    match_score: Optional[int] = None
    requirements: Optional[str] = None

    @classmethod
    def from_payload(cls, profile_id: int, item: Dict[str, Any]) -> "UniversityMatch":
        """Build a match from the `universityMatches` JSON shape."""
        return cls(
            id=None,
            profile_id=profile_id,
            university_name=str(item.get("name") or item.get("universityName") or ""),
            program=item.get("program"),
            cost=item.get("cost"),
            match_score=item.get("matchScore"),
            requirements=item.get("requirements"),
        )


@dataclass
class Document:
    """Row in `documents`: an uploaded text and its enhanced version."""

    TABLE: ClassVar[str] = "documents"
    JSON_FIELDS: ClassVar[Tuple[str, ...]] = ("suggestions",)

    id: Optional[int]
    user_id: Optional[int]
    document_type: str
    original_content: str
    enhanced_content: Optional[str] = None
    suggestions: Optional[List[Any]] = None
    created_at: Optional[int] = None


@dataclass
class ResearchInterest:
    TABLE: ClassVar[str] = "research_interests"
    JSON_FIELDS: ClassVar[Tuple[str, ...]] = ("preferred_universities",)

    id: Optional[int]
    user_id: Optional[int]
    primary_area: str
    specific_topics: Optional[str] = None
    preferred_universities: Optional[List[str]] = None


@dataclass
class ProfessorMatch:
    """Row in `professor_matches`, owned by a research interest."""

    TABLE: ClassVar[str] = "professor_matches"
    JSON_FIELDS: ClassVar[Tuple[str, ...]] = ()

    id: Optional[int]
    research_interest_id: int
    professor_name: str
    university: Optional[str] = None
    specialization: Optional[str] = None
    match_score: Optional[int] = None
    publications: Optional[str] = None

    @classmethod
    def from_payload(cls, research_interest_id: int, item: Dict[str, Any]) -> "ProfessorMatch":
        """Build a match from the `professorMatches` JSON shape."""
        return cls(
            id=None,
            research_interest_id=research_interest_id,
            professor_name=str(item.get("name") or item.get("professorName") or ""),
            university=item.get("university"),
            specialization=item.get("specialization"),
            match_score=item.get("matchScore"),
            publications=item.get("publications"),
        )


@dataclass
class VisaApplication:
    TABLE: ClassVar[str] = "visa_applications"
    JSON_FIELDS: ClassVar[Tuple[str, ...]] = ("interview_tips",)

    id: Optional[int]
    user_id: Optional[int]
    nationality: str
    destination_country: str
    program_type: str
    visa_type: Optional[str] = None
    document_status: Optional[str] = None
    interview_tips: Optional[List[Any]] = None


@dataclass
class CulturalAdaptation:
    TABLE: ClassVar[str] = "cultural_adaptation"
    JSON_FIELDS: ClassVar[Tuple[str, ...]] = ("cultural_tips", "communities")

    id: Optional[int]
    user_id: Optional[int]
    origin_country: str
    destination_country: str
    cultural_tips: Optional[List[Any]] = None
    communities: Optional[List[Any]] = None


@dataclass
class CareerProfile:
    TABLE: ClassVar[str] = "career_profiles"
    JSON_FIELDS: ClassVar[Tuple[str, ...]] = ("career_paths", "job_matches")

    id: Optional[int]
    user_id: Optional[int]
    field_of_study: str
    career_interests: Optional[str] = None
    preferred_location: Optional[str] = None
    career_paths: Optional[List[Any]] = None
    job_matches: Optional[List[Any]] = None
    immigration_info: Optional[str] = None


@dataclass
class Application:
    """Row in `applications`: one university application on the student's tracker.

    `status` is one of not-started, in-progress, submitted, accepted,
    rejected or waitlisted. `documents` holds the names of the documents
    gathered for the application.
    """

    TABLE: ClassVar[str] = "applications"
    JSON_FIELDS: ClassVar[Tuple[str, ...]] = ("documents",)

    id: Optional[int]
    user_id: Optional[int]
    university: str
    program: str
    deadline: str
    status: str = "not-started"
    documents: Optional[List[Any]] = None
    notes: Optional[str] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
