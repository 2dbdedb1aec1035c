"""Registry of live notification connections grouped by identity."""

from __future__ import annotations

import threading
from typing import Any

from luxurystay.domain.entities import LiveConnection


class ConnectionDirectory:
    """Track which authenticated connections are open for each identity.

    The directory answers reachability questions for the dispatcher. It holds
    no history: it starts empty on every process start and only mirrors the
    connections that are currently open.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._entries: dict[int, LiveConnection] = {}
        self._by_identity: dict[str, dict[int, Any]] = {}

    def register(
        self,
        identity_id: str,
        role: str,
        handle: Any,
        *,
        display_name: str = "",
    ) -> LiveConnection:
        """Add ``handle`` to the connections owned by ``identity_id``.

        Registering a handle that already belongs to another identity moves it.
        """

        key = id(handle)
        entry = LiveConnection(
            identity_id=identity_id,
            role=role,
            display_name=display_name,
            handle=handle,
        )
        with self._lock:
            if key in self._entries:
                self._discard(key)
            self._entries[key] = entry
            self._by_identity.setdefault(identity_id, {})[key] = handle
        return entry

    def unregister(self, handle: Any) -> LiveConnection | None:
        """Remove ``handle`` from the directory; unknown handles are ignored."""

        with self._lock:
            return self._discard(id(handle))

    def entry_for(self, handle: Any) -> LiveConnection | None:
        with self._lock:
            return self._entries.get(id(handle))

    def connections_for(self, identity_id: str) -> list[Any]:
        """Return a snapshot of the live handles for ``identity_id``."""

        with self._lock:
            return list(self._by_identity.get(identity_id, {}).values())

    def is_reachable(self, identity_id: str) -> bool:
        with self._lock:
            return bool(self._by_identity.get(identity_id))

    def count_for(self, identity_id: str) -> int:
        with self._lock:
            return len(self._by_identity.get(identity_id, {}))

    def identities(self) -> list[str]:
        """Return every reachable identity in registration order."""

        with self._lock:
            return list(self._by_identity)

    def all_by_role(self, role: str) -> list[str]:
        """Return the identities with at least one connection under ``role``."""

        with self._lock:
            seen: dict[str, None] = {}
            for entry in self._entries.values():
                if entry.role == role:
                    seen.setdefault(entry.identity_id, None)
            return list(seen)

    def entries_by_role(self, role: str) -> list[LiveConnection]:
        with self._lock:
            return [entry for entry in self._entries.values() if entry.role == role]

    def connection_count(self) -> int:
        with self._lock:
            return len(self._entries)

    def _discard(self, key: int) -> LiveConnection | None:
        entry = self._entries.pop(key, None)
        if entry is None:
            return None
        handles = self._by_identity.get(entry.identity_id)
        if handles is not None:
            handles.pop(key, None)
            if not handles:
                self._by_identity.pop(entry.identity_id, None)
        return entry


__all__ = ["ConnectionDirectory"]
