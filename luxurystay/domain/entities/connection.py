"""Domain entity describing a live client connection."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LiveConnection:
    """Authenticated connection tracked by the connection directory.

    ``handle`` is the transport object used to push messages (a websocket in
    production). Identity fields are copied from the session so the directory
    can filter without further lookups.
    """

    identity_id: str
    role: str
    display_name: str
    handle: Any


__all__ = ["LiveConnection"]
