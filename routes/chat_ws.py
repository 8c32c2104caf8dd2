"""WebSocket endpoint for the live support chat."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, WebSocket
from starlette.websockets import WebSocketDisconnect

from services.relay.connection import WebSocketConnection
from services.relay.messages import parse_inbound
from services.relay.session_relay import SessionRelay

router = APIRouter()


def _require_relay(websocket: WebSocket) -> SessionRelay:
	relay = getattr(websocket.app.state, "chat_relay", None)
	if relay is None:
		raise HTTPException(status_code=500, detail="Chat relay unavailable")
	return relay


@router.websocket("/ws")
async def chat_socket(websocket: WebSocket, relay: SessionRelay = Depends(_require_relay)):
	"""Relay join_chat / student_message frames for one browser chat widget."""
	await websocket.accept()
	connection = WebSocketConnection(websocket)
	try:
		while True:
			try:
				frame = await websocket.receive()
			except WebSocketDisconnect:
				break
			if frame["type"] == "websocket.disconnect":
				break
			raw = frame.get("text")
			if raw is None:
				# binary frames are not part of the chat protocol
				continue
			message = parse_inbound(raw)
			if message is None:
				continue
			await relay.handle(connection, message)
	finally:
		relay.close(connection)
