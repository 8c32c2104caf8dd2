"""FastAPI routes for the study-abroad guidance forms."""

import logging

from fastapi import APIRouter, HTTPException, Request

from controllers import guidance_controller
from models.guidance_payloads import (
	CareerDevelopmentPayload,
	CulturalAdaptationPayload,
	DocumentPreparationPayload,
	ProfileEvaluationPayload,
	ResearchMatchingPayload,
	VisaSupportPayload,
)

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["guidance"])


def _failed(feature: str, exc: Exception) -> HTTPException:
	LOGGER.error("%s error: %s", feature, exc, exc_info=exc)
	return HTTPException(status_code=500, detail=f"{feature} failed")


@router.post("/profile-evaluation")
async def profile_evaluation_route(request: Request, payload: ProfileEvaluationPayload):
	try:
		return await guidance_controller.evaluate_profile(request, payload)
	except HTTPException:
		raise
	except Exception as exc:
		raise _failed("Profile evaluation", exc) from exc


@router.post("/document-preparation")
async def document_preparation_route(request: Request, payload: DocumentPreparationPayload):
	try:
		return await guidance_controller.prepare_document(request, payload)
	except HTTPException:
		raise
	except Exception as exc:
		raise _failed("Document preparation", exc) from exc


@router.post("/research-matching")
async def research_matching_route(request: Request, payload: ResearchMatchingPayload):
	try:
		return await guidance_controller.match_research(request, payload)
	except HTTPException:
		raise
	except Exception as exc:
		raise _failed("Research matching", exc) from exc


@router.post("/visa-support")
async def visa_support_route(request: Request, payload: VisaSupportPayload):
	try:
		return await guidance_controller.visa_support(request, payload)
	except HTTPException:
		raise
	except Exception as exc:
		raise _failed("Visa support", exc) from exc


@router.post("/cultural-adaptation")
async def cultural_adaptation_route(request: Request, payload: CulturalAdaptationPayload):
	try:
		return await guidance_controller.cultural_adaptation(request, payload)
	except HTTPException:
		raise
	except Exception as exc:
		raise _failed("Cultural adaptation", exc) from exc


@router.post("/career-development")
async def career_development_route(request: Request, payload: CareerDevelopmentPayload):
	try:
		return await guidance_controller.career_development(request, payload)
	except HTTPException:
		raise
	except Exception as exc:
		raise _failed("Career development", exc) from exc
