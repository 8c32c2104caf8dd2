"""Stateless chat endpoints and the agent console push."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request

from models.chat_models import ChatMessage, SenderRole
from services.mock_guidance import EDUBOT_QUICK_REPLIES
from services.relay.session_relay import FALLBACK_NOTICE, SessionRelay

LOGGER = logging.getLogger(__name__)

CHAT_ERROR_MESSAGE = "Sorry, I encountered an error. Please try again later."


def _reply_generator(request: Request):
	generator = getattr(request.app.state, "reply_generator", None)
	if generator is None:
		raise HTTPException(status_code=500, detail="Reply generator not initialized.")
	return generator


def _relay(request: Request) -> SessionRelay:
	relay = getattr(request.app.state, "chat_relay", None)
	if relay is None:
		raise HTTPException(status_code=500, detail="Chat relay not initialized.")
	return relay


async def chat_reply(request: Request, message: str) -> Dict[str, Any]:
	"""Answer a single chat-bot message."""
	generator = _reply_generator(request)
	try:
		reply = await generator.generate(message)
	except Exception:
		LOGGER.exception("Chat reply failed")
		reply = CHAT_ERROR_MESSAGE
	return {"message": reply}


async def edubot_reply(request: Request, message: str, context: Optional[str] = None) -> Dict[str, Any]:
	"""Answer an EduBot message with follow-up quick replies."""
	generator = _reply_generator(request)
	try:
		reply = await generator.generate(message)
	except Exception:
		LOGGER.exception("EduBot reply failed (context=%s)", context)
		return {"response": FALLBACK_NOTICE, "quickReplies": []}
	return {"response": reply, "quickReplies": list(EDUBOT_QUICK_REPLIES)}


async def push_agent_message(
	request: Request,
	session_id: str,
	message: str,
	sender: str = "agent",
	sender_name: Optional[str] = None,
) -> Dict[str, Any]:
	"""Deliver a human agent's (or system) message into a live chat session."""
	relay = _relay(request)
	delivered = await relay.push(
		ChatMessage(
			sender=SenderRole(sender),
			message=message,
			session_id=session_id,
			sender_name=sender_name,
		)
	)
	return {"sessionId": session_id, "delivered": delivered}
