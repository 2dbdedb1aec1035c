"""Tests for the wire format of notification events."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from luxurystay.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationType,
    RecipientType,
)
from luxurystay.infrastructure.notifications import (
    notification_event,
    read_state_event,
    serialize_notification,
)

NOW = datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc)


def _notification() -> Notification:
    return Notification(
        id=7,
        recipient_id="G1",
        recipient_type=RecipientType.GUEST,
        title="Bill Issued",
        message="A bill was issued",
        type=NotificationType.BILLING,
        priority=NotificationPriority.HIGH,
        action_url="/bills/B-1",
        created_at=NOW - timedelta(minutes=90),
        updated_at=NOW - timedelta(minutes=90),
    )


def test_serialized_record_uses_snake_case_and_derived_fields():
    data = serialize_notification(_notification(), now=NOW)

    assert data["recipient_type"] == "guest"
    assert data["type"] == "billing"
    assert data["priority"] == "high"
    assert data["created_at"] == "2025-06-01T07:30:00+00:00"
    assert data["read_date"] is None
    assert data["age"] == 90
    assert data["is_urgent"] is True
    assert data["time_based_priority"] == 7 + 5 - 1.5


def test_direct_notification_event_has_no_broadcast_context():
    event = notification_event(_notification())

    assert event["type"] == "notification"
    assert set(event) == {"type", "data"}


def test_role_broadcast_event_carries_kind_and_role():
    event = notification_event(_notification(), kind="role_broadcast", role="maintenance")

    assert event["kind"] == "role_broadcast"
    assert event["role"] == "maintenance"


def test_read_state_event():
    read_at = datetime(2025, 6, 1, 10, 0, tzinfo=timezone.utc)

    assert read_state_event((1, 2), read_at) == {
        "type": "notification.read",
        "data": {"ids": [1, 2], "read_date": "2025-06-01T10:00:00+00:00"},
    }
