"""Wire representations of notification events."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

from luxurystay.domain.entities import Notification
from luxurystay.utils import iso_or_none, now_in_app_timezone

NOTIFICATION_EVENT = "notification"
READ_STATE_EVENT = "notification.read"


def serialize_notification(
    notification: Notification, *, now: datetime | None = None
) -> dict[str, Any]:
    """Return the JSON-serializable representation of ``notification``.

    Derived fields are evaluated against ``now`` so every connection receiving
    the same push sees the same scores.
    """

    reference = now or now_in_app_timezone()
    return {
        "id": notification.id,
        "recipient_id": notification.recipient_id,
        "recipient_type": notification.recipient_type.value,
        "title": notification.title,
        "message": notification.message,
        "type": notification.type.value,
        "priority": notification.priority.value,
        "is_read": notification.is_read,
        "read_date": iso_or_none(notification.read_date),
        "action_url": notification.action_url,
        "created_at": iso_or_none(notification.created_at),
        "updated_at": iso_or_none(notification.updated_at),
        "age": notification.age(reference),
        "is_urgent": notification.is_urgent,
        "time_based_priority": notification.time_based_priority(reference),
    }


def notification_event(
    notification: Notification,
    *,
    kind: str | None = None,
    **context: Any,
) -> dict[str, Any]:
    """Build the ``notification`` envelope pushed to live connections."""

    message: dict[str, Any] = {
        "type": NOTIFICATION_EVENT,
        "data": serialize_notification(notification),
    }
    if kind is not None:
        message["kind"] = kind
        message.update({key: value for key, value in context.items() if value is not None})
    return message


def read_state_event(ids: Iterable[int], read_date: datetime | None) -> dict[str, Any]:
    """Build the event telling every device that ``ids`` were read."""

    return {
        "type": READ_STATE_EVENT,
        "data": {"ids": list(ids), "read_date": iso_or_none(read_date)},
    }


__all__ = [
    "NOTIFICATION_EVENT",
    "READ_STATE_EVENT",
    "notification_event",
    "read_state_event",
    "serialize_notification",
]
