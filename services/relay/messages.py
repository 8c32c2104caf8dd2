"""Decode inbound chat frames and encode outbound ones."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from models.chat_models import ChatMessage, InboundMessage, JoinChat, StudentMessage

LOGGER = logging.getLogger(__name__)


def _session_id(payload: dict) -> Optional[str]:
	value = payload.get("sessionId")
	if not isinstance(value, str) or not value.strip():
		return None
	return value


def parse_inbound(raw: Any) -> Optional[InboundMessage]:
	"""Return the typed inbound message for a text frame, or None if malformed.

	Malformed covers invalid JSON, non-object payloads, unknown `type`
	values and missing or non-string fields. Callers drop None silently.
	"""
	try:
		payload = json.loads(raw)
	except (TypeError, ValueError, RecursionError):
		LOGGER.debug("Dropping undecodable chat frame")
		return None
	if not isinstance(payload, dict):
		LOGGER.debug("Dropping chat frame that is not a JSON object")
		return None

	message_type = payload.get("type")
	session_id = _session_id(payload)
	if session_id is None:
		LOGGER.debug("Dropping %r frame without a sessionId", message_type)
		return None

	if message_type == "join_chat":
		return JoinChat(session_id=session_id)
	if message_type == "student_message":
		content = payload.get("content")
		if not isinstance(content, str):
			LOGGER.debug("Dropping student_message without string content")
			return None
		return StudentMessage(session_id=session_id, content=content)

	LOGGER.debug("Dropping chat frame with unsupported type %r", message_type)
	return None


def encode_outbound(message: ChatMessage) -> str:
	"""Serialize a chat message as a JSON text frame."""
	return json.dumps(message.to_wire())
