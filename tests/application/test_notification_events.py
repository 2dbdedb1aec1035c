"""Tests for the hotel domain event helpers."""

from __future__ import annotations

from datetime import date

import pytest

from luxurystay.application.use_cases.notifications import (
    SYSTEM_UPDATE_EVENT,
    build_notification_runtime,
    notify_bill_issued,
    notify_booking_confirmed,
    notify_check_in,
    notify_check_out,
    notify_housekeeping_assigned,
    notify_maintenance_alert,
    notify_system_announcement,
)
from luxurystay.domain.entities import (
    BillIssued,
    BookingConfirmation,
    HousekeepingTask,
    MaintenanceAlert,
    NotificationType,
    RecipientType,
    StayReminder,
    SystemAnnouncement,
)

pytestmark = pytest.mark.anyio


@pytest.fixture
def runtime(session_factory):
    return build_notification_runtime(session_factory)


def _online(runtime, identity_id, role, handle):
    runtime.transport.attach(handle)
    runtime.directory.register(identity_id, role, handle)
    return handle


async def test_booking_confirmation_goes_to_the_guest(runtime):
    sent = await notify_booking_confirmed(
        runtime.service,
        guest_id="G1",
        booking=BookingConfirmation(
            reservation_id="R-77",
            room_number="301",
            check_in_date=date(2025, 3, 1),
            check_out_date="2025-03-04",
        ),
    )

    assert sent is True
    (notification,) = await runtime.service.list_recent("G1")
    assert notification.type is NotificationType.RESERVATION
    assert notification.recipient_type is RecipientType.GUEST
    assert notification.action_url == "/reservations/R-77"
    assert "Room 301 from 2025-03-01 to 2025-03-04" in notification.message


async def test_maintenance_alert_reaches_only_online_maintenance_staff(
    runtime, make_connection
):
    tech = _online(runtime, "tech-1", "maintenance", make_connection("tech"))
    desk = _online(runtime, "desk-1", "receptionist", make_connection("desk"))

    sent = await notify_maintenance_alert(
        runtime.service,
        alert=MaintenanceAlert(
            room_id="204", issue="Broken AC", priority="urgent", reported_by="desk-1"
        ),
    )

    assert sent is True
    (message,) = tech.of_type("notification")
    assert message["data"]["title"] == "Maintenance Alert"
    assert message["data"]["priority"] == "urgent"
    assert message["data"]["action_url"] == "/maintenance/requests"
    assert message["role"] == "maintenance"
    assert desk.sent == []


async def test_maintenance_alert_with_unknown_priority_fails(runtime, make_connection):
    _online(runtime, "tech-1", "maintenance", make_connection())

    sent = await notify_maintenance_alert(
        runtime.service,
        alert=MaintenanceAlert(
            room_id="204", issue="Broken AC", priority="whenever", reported_by="desk-1"
        ),
    )

    assert sent is False


async def test_housekeeping_assignment_targets_the_assignee(runtime):
    sent = await notify_housekeeping_assigned(
        runtime.service,
        task=HousekeepingTask(
            room_id="118", task_type="deep clean", priority="low", assigned_to="hk-4"
        ),
    )

    assert sent is True
    (notification,) = await runtime.service.list_unread("hk-4")
    assert notification.type is NotificationType.HOUSEKEEPING
    assert notification.action_url == "/housekeeping/tasks"
    assert notification.message == "Room 118: deep clean (Priority: low)"


async def test_system_announcement_stores_and_emits_system_update(runtime, make_connection):
    staff = _online(runtime, "U1", "manager", make_connection("staff"))

    sent = await notify_system_announcement(
        runtime.service,
        announcement=SystemAnnouncement(
            title="Fire drill", message="Drill at 3pm", priority="high"
        ),
    )

    assert sent is True
    assert staff.of_type("notification")[0]["kind"] == "system_broadcast"
    (update,) = staff.of_type(SYSTEM_UPDATE_EVENT)
    assert update["data"]["type"] == "system_announcement"
    assert update["data"]["data"] == {"title": "Fire drill", "priority": "high"}
    assert await runtime.service.get_unread_count("U1") == 1


async def test_stay_reminders_use_check_in_and_check_out_categories(runtime):
    reminder = StayReminder(
        guest_id="G2", reservation_id="R-9", room_number="12", scheduled_for="2025-05-01"
    )

    assert await notify_check_in(runtime.service, reminder=reminder) is True
    assert await notify_check_out(runtime.service, reminder=reminder) is True

    types = {n.type for n in await runtime.service.list_recent("G2")}
    assert types == {NotificationType.CHECK_IN, NotificationType.CHECK_OUT}


async def test_bill_issued_is_a_high_priority_billing_notification(runtime):
    sent = await notify_bill_issued(
        runtime.service,
        bill=BillIssued(guest_id="G3", bill_id="B-1", reservation_id="R-1", amount="420.00"),
    )

    assert sent is True
    (notification,) = await runtime.service.list_recent("G3")
    assert notification.type is NotificationType.BILLING
    assert notification.is_urgent
    assert notification.action_url == "/bills/B-1"
    assert "420.00 USD" in notification.message
