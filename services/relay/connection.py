"""Duplex channels the relay delivers chat messages through."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Set

from fastapi import WebSocket
from starlette.websockets import WebSocketDisconnect, WebSocketState

from models.chat_models import ChatMessage, ConnectionState
from services.relay.messages import encode_outbound

LOGGER = logging.getLogger(__name__)


class RelayConnection:
	"""Base connection tracking its session binding and pending reply tasks.

	Subclasses provide `_transmit` and may refine `_channel_open`.
	"""

	def __init__(self) -> None:
		self.state = ConnectionState.UNBOUND
		self.session_id: Optional[str] = None
		self.pending: Set[asyncio.Task] = set()

	@property
	def is_open(self) -> bool:
		return self.state is not ConnectionState.CLOSED and self._channel_open()

	def bind(self, session_id: str) -> None:
		self.session_id = session_id
		self.state = ConnectionState.BOUND

	def track(self, task: asyncio.Task) -> None:
		"""Tie a reply task to this connection's lifetime."""
		self.pending.add(task)
		task.add_done_callback(self.pending.discard)

	def mark_closed(self) -> None:
		"""Close the connection and cancel any reply still in flight."""
		self.state = ConnectionState.CLOSED
		for task in list(self.pending):
			task.cancel()

	async def deliver(self, message: ChatMessage) -> bool:
		"""Send `message` if the channel is open and bound to its session.

		Returns False when the delivery was dropped.
		"""
		if not self.is_open or message.session_id != self.session_id:
			return False
		return await self._transmit(encode_outbound(message))

	def _channel_open(self) -> bool:
		return True

	async def _transmit(self, text: str) -> bool:
		raise NotImplementedError


class WebSocketConnection(RelayConnection):
	"""Relay connection backed by a Starlette websocket."""

	def __init__(self, websocket: WebSocket) -> None:
		super().__init__()
		self.websocket = websocket

	def _channel_open(self) -> bool:
		return (
			self.websocket.client_state == WebSocketState.CONNECTED
			and self.websocket.application_state == WebSocketState.CONNECTED
		)

	async def _transmit(self, text: str) -> bool:
		try:
			await self.websocket.send_text(text)
		except (WebSocketDisconnect, RuntimeError, OSError) as exc:
			LOGGER.debug("Dropping delivery to closed websocket for session %s: %s", self.session_id, exc)
			return False
		return True
