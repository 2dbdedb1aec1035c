"""Domain entity representing a notification addressed to a hotel user."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from luxurystay.utils import ensure_app_timezone, now_in_app_timezone

TITLE_MAX_LENGTH = 200
MESSAGE_MAX_LENGTH = 1000
RECIPIENT_ID_MAX_LENGTH = 64

UNREAD_BONUS = 5
MAX_AGE_PENALTY_HOURS = 24
MIN_PRIORITY_SCORE = 1


class NotificationType(str, Enum):
    """Category of the domain event that produced the notification."""

    RESERVATION = "reservation"
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
    MAINTENANCE = "maintenance"
    HOUSEKEEPING = "housekeeping"
    BILLING = "billing"
    FEEDBACK = "feedback"
    SERVICE_REQUEST = "service_request"
    SYSTEM = "system"
    OTHER = "other"


class NotificationPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class RecipientType(str, Enum):
    """Staff and system accounts are ``user``; hotel guests are ``guest``."""

    USER = "user"
    GUEST = "guest"


PRIORITY_BASE_SCORES: dict[NotificationPriority, int] = {
    NotificationPriority.URGENT: 10,
    NotificationPriority.HIGH: 7,
    NotificationPriority.MEDIUM: 4,
    NotificationPriority.LOW: 1,
}


@dataclass(frozen=True)
class NotificationContent:
    """Recipient-independent part of a notification.

    The dispatcher fans one content out to many recipients, substituting the
    recipient for each stored record.
    """

    title: str
    message: str
    type: NotificationType | str
    priority: NotificationPriority | str = NotificationPriority.MEDIUM
    action_url: str | None = None
    recipient_type: RecipientType | str = RecipientType.USER

    def for_recipient(self, recipient_id: str) -> "NotificationDraft":
        """Return the draft that would be stored for ``recipient_id``."""

        return NotificationDraft(
            recipient_id=recipient_id,
            recipient_type=self.recipient_type,
            title=self.title,
            message=self.message,
            type=self.type,
            priority=self.priority,
            action_url=self.action_url,
        )


@dataclass(frozen=True)
class NotificationDraft:
    """Payload accepted by the notification store before persistence."""

    recipient_id: str
    recipient_type: RecipientType | str
    title: str
    message: str
    type: NotificationType | str
    priority: NotificationPriority | str = NotificationPriority.MEDIUM
    action_url: str | None = None


@dataclass
class Notification:
    """Notification persisted for a single recipient."""

    id: int | None
    recipient_id: str
    recipient_type: RecipientType
    title: str
    message: str
    type: NotificationType
    priority: NotificationPriority = NotificationPriority.MEDIUM
    is_read: bool = False
    read_date: datetime | None = None
    action_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_urgent(self) -> bool:
        """Return ``True`` for ``high`` and ``urgent`` notifications."""

        return self.priority in (NotificationPriority.HIGH, NotificationPriority.URGENT)

    def age(self, now: datetime | None = None) -> int:
        """Return the whole minutes elapsed since creation, rounded up."""

        if self.created_at is None:
            return 0
        reference = ensure_app_timezone(now) if now else now_in_app_timezone()
        created_at = ensure_app_timezone(self.created_at)
        elapsed = abs((reference - created_at).total_seconds())
        return math.ceil(elapsed / 60)

    def time_based_priority(self, now: datetime | None = None) -> float:
        """Return the decaying urgency score used by sort-by-urgency views.

        The score starts from the priority base, adds a bonus while the
        notification is unread and loses one point per hour of age for at
        most 24 hours. It never drops below 1.
        """

        score: float = PRIORITY_BASE_SCORES[NotificationPriority(self.priority)]
        if not self.is_read:
            score += UNREAD_BONUS
        age_in_hours = self.age(now) / 60
        score -= min(age_in_hours, MAX_AGE_PENALTY_HOURS)
        return max(score, MIN_PRIORITY_SCORE)


__all__ = [
    "MESSAGE_MAX_LENGTH",
    "RECIPIENT_ID_MAX_LENGTH",
    "TITLE_MAX_LENGTH",
    "Notification",
    "NotificationContent",
    "NotificationDraft",
    "NotificationPriority",
    "NotificationType",
    "PRIORITY_BASE_SCORES",
    "RecipientType",
]
