"""Target selectors describing who a dispatched notification is for."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

ROLE_BROADCAST = "role_broadcast"
SYSTEM_BROADCAST = "system_broadcast"
ROOM_BROADCAST = "room_broadcast"


@dataclass(frozen=True)
class ToIdentity:
    identity_id: str


@dataclass(frozen=True)
class ToIdentities:
    """Explicit fan-out list; each identity is handled independently."""

    identity_ids: tuple[str, ...]

    @classmethod
    def of(cls, identity_ids: Iterable[str]) -> "ToIdentities":
        return cls(identity_ids=tuple(identity_ids))


@dataclass(frozen=True)
class ToRole:
    """Every identity live under ``role`` when the dispatch starts."""

    role: str


@dataclass(frozen=True)
class ToAll:
    """Every identity reachable when the dispatch starts."""


@dataclass(frozen=True)
class ToRoom:
    """Every identity with a connection joined to transport room ``room``."""

    room: str


TargetSelector = Union[ToIdentity, ToIdentities, ToRole, ToAll, ToRoom]


def broadcast_kind(selector: TargetSelector) -> str | None:
    """Return the wire discriminator for broadcast selectors."""

    if isinstance(selector, ToRole):
        return ROLE_BROADCAST
    if isinstance(selector, ToAll):
        return SYSTEM_BROADCAST
    if isinstance(selector, ToRoom):
        return ROOM_BROADCAST
    return None


__all__ = [
    "ROLE_BROADCAST",
    "ROOM_BROADCAST",
    "SYSTEM_BROADCAST",
    "TargetSelector",
    "ToAll",
    "ToIdentities",
    "ToIdentity",
    "ToRole",
    "ToRoom",
    "broadcast_kind",
]
