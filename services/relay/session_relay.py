"""Route chat messages between relay connections and the reply generator.

A failed or timed-out reply is replaced by one notice with the `system` role,
not `ai_assistant`. Chat widgets clear their typing indicator on any frame
that is not from the student.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Awaitable, Callable, Optional, Set

from models.chat_models import ChatMessage, ConnectionState, InboundMessage, JoinChat, SenderRole, StudentMessage
from services.relay.connection import RelayConnection
from services.relay.registry import ConnectionRegistry

LOGGER = logging.getLogger(__name__)

ReplyFn = Callable[[str], Awaitable[str]]

DEFAULT_REPLY_TIMEOUT = float(os.getenv("REPLY_TIMEOUT_SECONDS", "30"))
ASSISTANT_NAME = "StudyPath AI"
FALLBACK_NOTICE = (
	"I'm having trouble connecting right now. Please try again in a moment, "
	"or feel free to explore the platform features in the meantime!"
)


class SessionRelay:
	"""Bind connections to sessions and fan chat messages out to them.

	Each `student_message` is echoed to the session immediately; the reply is
	produced in a task owned by the sending connection and delivered once it
	resolves. A failed or timed-out reply becomes a single system notice.
	"""

	def __init__(
		self,
		generate_reply: ReplyFn,
		registry: Optional[ConnectionRegistry] = None,
		reply_timeout: Optional[float] = DEFAULT_REPLY_TIMEOUT,
		assistant_name: str = ASSISTANT_NAME,
	) -> None:
		self.registry = registry if registry is not None else ConnectionRegistry()
		self.reply_timeout = reply_timeout
		self.assistant_name = assistant_name
		self._generate_reply = generate_reply
		self._live: Set[RelayConnection] = set()

	async def handle(self, connection: RelayConnection, message: InboundMessage) -> None:
		"""Dispatch a decoded inbound frame."""
		if isinstance(message, JoinChat):
			self.join(connection, message.session_id)
		elif isinstance(message, StudentMessage):
			await self.send(connection, message.session_id, message.content)
		else:
			raise TypeError(f"Unsupported inbound message: {message!r}")

	def join(self, connection: RelayConnection, session_id: str) -> bool:
		"""Bind `connection` to `session_id`; returns False when the join is ignored."""
		if connection.state is ConnectionState.CLOSED or not session_id:
			return False
		if connection.state is ConnectionState.BOUND and connection.session_id != session_id:
			LOGGER.debug(
				"Ignoring join for %s: connection already bound to %s", session_id, connection.session_id
			)
			return False
		connection.bind(session_id)
		self._live.add(connection)
		displaced = self.registry.bind(session_id, connection)
		if displaced is not None:
			LOGGER.info("Session %s rejoined; the earlier connection no longer receives messages", session_id)
		return True

	async def send(
		self, connection: RelayConnection, session_id: str, content: str
	) -> Optional[asyncio.Task]:
		"""Echo a student message and schedule the generated reply.

		Messages from unbound connections, or naming a session other than the
		one the connection joined, are dropped. Returns the reply task.
		"""
		if connection.state is not ConnectionState.BOUND or connection.session_id != session_id:
			LOGGER.debug("Dropping student_message for %s from a connection not bound to it", session_id)
			return None

		echo = ChatMessage(sender=SenderRole.STUDENT, message=content, session_id=session_id)
		await self._deliver(echo)

		task = asyncio.create_task(self._reply(connection, session_id, content))
		connection.track(task)
		return task

	async def push(self, message: ChatMessage) -> bool:
		"""Deliver an externally authored message (agent or system) to its session."""
		return await self._deliver(message)

	def close(self, connection: RelayConnection) -> None:
		"""Unregister `connection` and discard any reply still being generated."""
		if connection.state is ConnectionState.CLOSED:
			return
		self._live.discard(connection)
		self.registry.unbind(connection)
		connection.mark_closed()

	async def aclose(self) -> None:
		"""Close every joined connection and wait for their reply tasks to unwind.

		Includes connections displaced from the registry by a later join.
		"""
		pending = []
		for connection in list(self._live):
			pending.extend(connection.pending)
			self.close(connection)
		if pending:
			await asyncio.gather(*pending, return_exceptions=True)

	async def _reply(self, connection: RelayConnection, session_id: str, content: str) -> None:
		try:
			text = await asyncio.wait_for(self._generate_reply(content), timeout=self.reply_timeout)
			if not isinstance(text, str) or not text.strip():
				raise ValueError("Reply generator returned no text.")
			reply = ChatMessage(
				sender=SenderRole.AI_ASSISTANT,
				message=text.strip(),
				session_id=session_id,
				sender_name=self.assistant_name,
			)
		except asyncio.TimeoutError:
			LOGGER.warning("Reply generation timed out for session %s", session_id)
			reply = self._fallback(session_id)
		except Exception:
			LOGGER.exception("Reply generation failed for session %s", session_id)
			reply = self._fallback(session_id)

		if connection.state is ConnectionState.CLOSED:
			return
		await self._deliver(reply)

	async def _deliver(self, message: ChatMessage) -> bool:
		target = self.registry.lookup(message.session_id)
		if target is None:
			return False
		return await target.deliver(message)

	@staticmethod
	def _fallback(session_id: str) -> ChatMessage:
		return ChatMessage(sender=SenderRole.SYSTEM, message=FALLBACK_NOTICE, session_id=session_id)
