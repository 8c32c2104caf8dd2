"""Chat domain models for the realtime session relay."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union


class SenderRole(str, Enum):
	"""Origin tag the client uses to render a chat bubble."""

	STUDENT = "student"
	AI_ASSISTANT = "ai_assistant"
	AGENT = "agent"
	SYSTEM = "system"


class ConnectionState(str, Enum):
	"""Lifecycle of a single relay connection."""

	UNBOUND = "unbound"
	BOUND = "bound"
	CLOSED = "closed"


def _utc_now() -> datetime:
	return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ChatMessage:
	"""Immutable message routed by the relay to a session."""

	sender: SenderRole
	message: str
	session_id: str
	sender_name: Optional[str] = None
	created_at: datetime = field(default_factory=_utc_now)

	def to_wire(self) -> Dict[str, Any]:
		"""Return the outbound `chat_message` frame for this message."""
		frame: Dict[str, Any] = {
			"type": "chat_message",
			"sender": self.sender.value,
			"message": self.message,
			"timestamp": self.created_at.isoformat(),
		}
		if self.sender_name:
			frame["senderName"] = self.sender_name
		return frame


@dataclass(frozen=True)
class JoinChat:
	"""Client request to bind its connection to a session."""

	session_id: str


@dataclass(frozen=True)
class StudentMessage:
	"""Chat text typed by the student for a session."""

	session_id: str
	content: str


InboundMessage = Union[JoinChat, StudentMessage]
