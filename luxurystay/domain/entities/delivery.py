"""Outcome of a notification dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field

from .notification import Notification

STAGE_PERSIST = "persist"
STAGE_PUSH = "push"


@dataclass(frozen=True)
class DeliveryFailure:
    """Diagnostic entry for one target that could not be served."""

    identity_id: str
    stage: str
    error: str


@dataclass
class DeliveryResult:
    """Summary returned by the dispatcher for a single dispatch call."""

    targets: list[str] = field(default_factory=list)
    persisted: list[Notification] = field(default_factory=list)
    push_attempted: int = 0
    push_failed: int = 0
    failures: list[DeliveryFailure] = field(default_factory=list)

    @property
    def persisted_count(self) -> int:
        return len(self.persisted)

    @property
    def notification_ids(self) -> list[int]:
        return [notification.id for notification in self.persisted if notification.id is not None]

    @property
    def failed_targets(self) -> list[str]:
        return [
            failure.identity_id for failure in self.failures if failure.stage == STAGE_PERSIST
        ]


__all__ = [
    "DeliveryFailure",
    "DeliveryResult",
    "STAGE_PERSIST",
    "STAGE_PUSH",
]
