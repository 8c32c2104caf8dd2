"""In-memory registry of session bindings for the chat relay."""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

from services.relay.connection import RelayConnection


class ConnectionRegistry:
	"""Map each session id to the connection currently bound to it.

	One slot per session: a later bind for the same session replaces the
	earlier connection. Only the event loop mutates the map.
	"""

	def __init__(self) -> None:
		self._bindings: Dict[str, RelayConnection] = {}

	def bind(self, session_id: str, connection: RelayConnection) -> Optional[RelayConnection]:
		"""Bind `connection` to `session_id` and return any connection it displaced."""
		previous = self._bindings.get(session_id)
		self._bindings[session_id] = connection
		if previous is connection:
			return None
		return previous

	def unbind(self, connection: RelayConnection) -> bool:
		"""Remove the slot held by `connection`, if it still holds one."""
		session_id = connection.session_id
		if session_id is None:
			return False
		if self._bindings.get(session_id) is not connection:
			return False
		del self._bindings[session_id]
		return True

	def lookup(self, session_id: str) -> Optional[RelayConnection]:
		"""Return the connection bound to `session_id`, or None."""
		return self._bindings.get(session_id)

	def items(self) -> Iterator[Tuple[str, RelayConnection]]:
		return iter(list(self._bindings.items()))

	def __contains__(self, session_id: object) -> bool:
		return session_id in self._bindings

	def __len__(self) -> int:
		return len(self._bindings)
