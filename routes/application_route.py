"""FastAPI routes for the application tracker."""

import logging

from fastapi import APIRouter, HTTPException, Request

from controllers import application_controller
from models.guidance_payloads import ApplicationPayload, ApplicationUpdatePayload

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.get("")
async def list_applications_route(request: Request):
	try:
		return await application_controller.list_applications(request)
	except HTTPException:
		raise
	except Exception as exc:
		LOGGER.error("Listing applications failed: %s", exc, exc_info=exc)
		raise HTTPException(status_code=500, detail="Failed to load applications") from exc


@router.post("", status_code=201)
async def create_application_route(request: Request, payload: ApplicationPayload):
	try:
		return await application_controller.create_application(request, payload)
	except HTTPException:
		raise
	except Exception as exc:
		LOGGER.error("Creating application failed: %s", exc, exc_info=exc)
		raise HTTPException(status_code=500, detail="Failed to create application") from exc


@router.patch("/{application_id}")
async def update_application_route(request: Request, application_id: int, payload: ApplicationUpdatePayload):
	try:
		return await application_controller.update_application(request, application_id, payload)
	except HTTPException:
		raise
	except Exception as exc:
		LOGGER.error("Updating application %s failed: %s", application_id, exc, exc_info=exc)
		raise HTTPException(status_code=500, detail="Failed to update application") from exc
