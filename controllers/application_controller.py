"""Application tracker handlers: list, add and update university applications."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, Request

from controllers.guidance_controller import MOCK_USER_ID
from dal.guidance_dal import GuidanceDAL
from models.guidance_payloads import ApplicationPayload, ApplicationUpdatePayload
from models.guidance_records import Application


def _dal(request: Request) -> GuidanceDAL:
	db_initializer = getattr(request.app.state, "db_initializer", None)
	if db_initializer is None:
		raise HTTPException(status_code=500, detail="Database not initialized.")
	return GuidanceDAL(db_initializer)


def _timestamp(value: Optional[int]) -> Optional[str]:
	if value is None:
		return None
	return datetime.fromtimestamp(value, tz=timezone.utc).isoformat()


def application_to_wire(application: Application) -> Dict[str, Any]:
	"""Render an application the way the tracker widget reads it."""
	return {
		"id": application.id,
		"userId": application.user_id,
		"university": application.university,
		"program": application.program,
		"deadline": application.deadline,
		"status": application.status,
		"documents": application.documents or [],
		"notes": application.notes,
		"createdAt": _timestamp(application.created_at),
		"updatedAt": _timestamp(application.updated_at),
	}


async def list_applications(request: Request) -> List[Dict[str, Any]]:
	"""Return the demo user's applications, oldest first."""
	applications = await _dal(request).list_by_user_id(Application, MOCK_USER_ID)
	return [application_to_wire(app) for app in applications]


async def create_application(request: Request, payload: ApplicationPayload) -> Dict[str, Any]:
	application = await _dal(request).create(
		Application(
			id=None,
			user_id=MOCK_USER_ID,
			university=payload.university,
			program=payload.program,
			deadline=payload.deadline,
			status=payload.status,
			documents=payload.documents,
			notes=payload.notes,
		)
	)
	return application_to_wire(application)


async def update_application(
	request: Request, application_id: int, payload: ApplicationUpdatePayload
) -> Dict[str, Any]:
	"""Apply the fields present in `payload` to one of the demo user's applications.

	Raises:
		HTTPException: 404 when the application does not exist or belongs to
			another user.
	"""
	dal = _dal(request)
	existing = await dal.get_by_id(Application, application_id)
	if existing is None or existing.user_id != MOCK_USER_ID:
		raise HTTPException(status_code=404, detail="Application not found")

	# null only clears the optional columns
	changes = {
		name: value
		for name, value in payload.model_dump(exclude_unset=True).items()
		if value is not None or name in ("documents", "notes")
	}
	updated = await dal.update(Application, application_id, **changes)
	return application_to_wire(updated)
