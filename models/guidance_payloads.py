"""Request bodies for the guidance and chat HTTP endpoints.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProfileEvaluationPayload(CamelModel):
    gpa: str
    toefl_score: int
    sat_gre_score: int
    budget: int
    field_of_study: str
    extracurriculars: str
    ai_enabled: bool = False


class DocumentPreparationPayload(CamelModel):
    document_type: str
    content: str
    ai_enabled: bool = False


class ResearchMatchingPayload(CamelModel):
    primary_area: str
    specific_topics: str
    preferred_universities: List[str]
    ai_enabled: bool = False


class VisaSupportPayload(CamelModel):
    nationality: str
    destination_country: str
    program_type: str
    ai_enabled: bool = False


class CulturalAdaptationPayload(CamelModel):
    origin_country: str
    destination_country: str
    ai_enabled: bool = False


class CareerDevelopmentPayload(CamelModel):
    field_of_study: str
    career_interests: str
    preferred_location: str
    ai_enabled: bool = False


class ChatPayload(CamelModel):
    message: str = Field(min_length=1)


class EduBotPayload(CamelModel):
    message: str = Field(min_length=1)
    context: Optional[str] = None


class AgentMessagePayload(CamelModel):
    message: str = Field(min_length=1)
    sender: Literal["agent", "system"] = "agent"
    sender_name: Optional[str] = None


ApplicationStatus = Literal["not-started", "in-progress", "submitted", "accepted", "rejected", "waitlisted"]


class ApplicationPayload(CamelModel):
    university: str = Field(min_length=1)
    program: str = Field(min_length=1)
    deadline: str = Field(min_length=1)
    status: ApplicationStatus = "not-started"
    documents: Optional[List[str]] = None
    notes: Optional[str] = None


class ApplicationUpdatePayload(CamelModel):
    """Partial update; only the fields present in the body are changed."""

    university: Optional[str] = Field(default=None, min_length=1)
    program: Optional[str] = Field(default=None, min_length=1)
    deadline: Optional[str] = Field(default=None, min_length=1)
    status: Optional[ApplicationStatus] = None
    documents: Optional[List[str]] = None
    notes: Optional[str] = None
