"""Room-addressed messaging over websocket connections."""

from __future__ import annotations

import logging
import threading
from typing import Any

from luxurystay.domain.exceptions import TransportError

logger = logging.getLogger(__name__)


def identity_room(identity_id: str) -> str:
    return f"user:{identity_id}"


def role_room(role: str) -> str:
    return f"role:{role}"


class WebSocketTransport:
    """Send JSON messages to connections and to named groups of connections.

    A connection handle is any object exposing an awaitable
    ``send_json(message)``, which is what FastAPI websockets provide. Rooms
    are plain strings; a connection may belong to any number of them.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._handles: dict[int, Any] = {}
        self._rooms: dict[str, dict[int, Any]] = {}
        self._memberships: dict[int, set[str]] = {}

    def attach(self, handle: Any) -> None:
        """Start tracking ``handle`` so it receives transport-wide broadcasts."""

        with self._lock:
            self._handles[id(handle)] = handle

    def detach(self, handle: Any) -> None:
        """Forget ``handle`` and remove it from every room it joined."""

        key = id(handle)
        with self._lock:
            self._handles.pop(key, None)
            for room in self._memberships.pop(key, set()):
                self._drop_member(room, key)

    def join(self, handle: Any, room: str) -> None:
        key = id(handle)
        with self._lock:
            self._rooms.setdefault(room, {})[key] = handle
            self._memberships.setdefault(key, set()).add(room)

    def leave(self, handle: Any, room: str) -> None:
        key = id(handle)
        with self._lock:
            rooms = self._memberships.get(key)
            if rooms is not None:
                rooms.discard(room)
                if not rooms:
                    self._memberships.pop(key, None)
            self._drop_member(room, key)

    def rooms_of(self, handle: Any) -> set[str]:
        with self._lock:
            return set(self._memberships.get(id(handle), set()))

    def members(self, room: str) -> list[Any]:
        """Return a snapshot of the handles currently joined to ``room``."""

        with self._lock:
            return list(self._rooms.get(room, {}).values())

    def attached(self) -> list[Any]:
        with self._lock:
            return list(self._handles.values())

    async def send(self, handle: Any, message: dict[str, Any]) -> None:
        """Push ``message`` to a single connection."""

        try:
            await handle.send_json(message)
        except Exception as exc:
            raise TransportError(f"Failed to push {message.get('type')!r} message") from exc

    async def broadcast(
        self, room: str, message: dict[str, Any], *, exclude: Any = None
    ) -> int:
        """Send ``message`` to every member of ``room``; return the failure count."""

        targets = [handle for handle in self.members(room) if handle is not exclude]
        return await self._send_each(targets, message)

    async def broadcast_all(self, message: dict[str, Any]) -> int:
        """Send ``message`` to every attached connection; return the failure count."""

        return await self._send_each(self.attached(), message)

    async def _send_each(self, handles: list[Any], message: dict[str, Any]) -> int:
        failed = 0
        for handle in handles:
            try:
                await self.send(handle, dict(message))
            except TransportError as exc:
                failed += 1
                logger.warning("%s: %s", exc, exc.__cause__)
        return failed

    def _drop_member(self, room: str, key: int) -> None:
        members = self._rooms.get(room)
        if members is None:
            return
        members.pop(key, None)
        if not members:
            self._rooms.pop(room, None)


__all__ = ["WebSocketTransport", "identity_room", "role_room"]
