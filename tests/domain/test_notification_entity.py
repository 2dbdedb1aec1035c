"""Tests for derived notification fields."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from luxurystay.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationType,
    RecipientType,
)

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def _notification(
    priority: NotificationPriority = NotificationPriority.URGENT,
    *,
    age: timedelta = timedelta(0),
    is_read: bool = False,
) -> Notification:
    return Notification(
        id=1,
        recipient_id="U1",
        recipient_type=RecipientType.USER,
        title="Leak",
        message="Water leak in room 204",
        type=NotificationType.MAINTENANCE,
        priority=priority,
        is_read=is_read,
        created_at=NOW - age,
    )


def test_fresh_unread_urgent_notification_scores_fifteen():
    assert _notification().time_based_priority(NOW) == 15


def test_reading_removes_the_unread_bonus():
    unread = _notification(age=timedelta(minutes=30))
    read = _notification(age=timedelta(minutes=30), is_read=True)

    assert read.time_based_priority(NOW) < unread.time_based_priority(NOW)
    assert read.time_based_priority(NOW) == pytest.approx(10 - 0.5)


@pytest.mark.parametrize(
    ("priority", "expected"),
    [
        (NotificationPriority.URGENT, 15),
        (NotificationPriority.HIGH, 12),
        (NotificationPriority.MEDIUM, 9),
        (NotificationPriority.LOW, 6),
    ],
)
def test_base_scores_per_priority(priority, expected):
    assert _notification(priority).time_based_priority(NOW) == expected


def test_older_notification_never_outranks_newer_one():
    newer = _notification(NotificationPriority.HIGH, age=timedelta(hours=2))
    older = _notification(NotificationPriority.HIGH, age=timedelta(hours=5))

    assert older.time_based_priority(NOW) <= newer.time_based_priority(NOW)


def test_age_penalty_stops_after_twenty_four_hours():
    day_old = _notification(age=timedelta(hours=24))
    week_old = _notification(age=timedelta(days=7))

    assert day_old.time_based_priority(NOW) == week_old.time_based_priority(NOW) == 1


def test_score_never_drops_below_one():
    stale = _notification(NotificationPriority.LOW, age=timedelta(days=3), is_read=True)

    assert stale.time_based_priority(NOW) == 1


def test_age_rounds_partial_minutes_up():
    notification = _notification(age=timedelta(seconds=61))

    assert notification.age(NOW) == 2


def test_is_urgent_covers_high_and_urgent():
    assert _notification(NotificationPriority.URGENT).is_urgent
    assert _notification(NotificationPriority.HIGH).is_urgent
    assert not _notification(NotificationPriority.MEDIUM).is_urgent
    assert not _notification(NotificationPriority.LOW).is_urgent
