"""Utility helpers to generate and dispatch hotel domain notifications."""

from __future__ import annotations

import logging
from datetime import date

from luxurystay.domain.entities import (
    ROLE_MAINTENANCE,
    BillIssued,
    BookingConfirmation,
    HousekeepingTask,
    MaintenanceAlert,
    NotificationContent,
    NotificationPriority,
    NotificationType,
    RecipientType,
    StayReminder,
    SystemAnnouncement,
)

from .service import NotificationService

logger = logging.getLogger(__name__)


def _format_date(value: date | str) -> str:
    return value.isoformat() if isinstance(value, date) else str(value)


async def notify_booking_confirmed(
    service: NotificationService, *, guest_id: str, booking: BookingConfirmation
) -> bool:
    """Tell the guest that their reservation is confirmed."""

    notification_id = await service.notify(
        guest_id,
        "Booking Confirmed",
        (
            f"Your booking for Room {booking.room_number} from "
            f"{_format_date(booking.check_in_date)} to "
            f"{_format_date(booking.check_out_date)} has been confirmed."
        ),
        NotificationType.RESERVATION,
        NotificationPriority.MEDIUM,
        f"/reservations/{booking.reservation_id}",
        recipient_type=RecipientType.GUEST,
    )
    if notification_id is None:
        return False
    logger.info(
        "Booking confirmation sent to %s for reservation %s",
        guest_id,
        booking.reservation_id,
    )
    return True


async def notify_maintenance_alert(
    service: NotificationService, *, alert: MaintenanceAlert
) -> bool:
    """Alert every maintenance staff member currently online."""

    content = NotificationContent(
        title="Maintenance Alert",
        message=f"Room {alert.room_id}: {alert.issue} (Priority: {alert.priority})",
        type=NotificationType.MAINTENANCE,
        priority=alert.priority,
        action_url="/maintenance/requests",
    )
    sent = await service.notify_role(ROLE_MAINTENANCE, content)
    if sent:
        logger.info(
            "Maintenance alert for room %s reported by %s sent",
            alert.room_id,
            alert.reported_by,
        )
    return sent


async def notify_housekeeping_assigned(
    service: NotificationService, *, task: HousekeepingTask
) -> bool:
    notification_id = await service.notify(
        task.assigned_to,
        "Housekeeping Task Assigned",
        f"Room {task.room_id}: {task.task_type} (Priority: {task.priority})",
        NotificationType.HOUSEKEEPING,
        task.priority,
        "/housekeeping/tasks",
    )
    return notification_id is not None


async def notify_system_announcement(
    service: NotificationService, *, announcement: SystemAnnouncement
) -> bool:
    """Store the announcement for everyone online and emit ``system-update``."""

    content = NotificationContent(
        title=announcement.title,
        message=announcement.message,
        type=NotificationType.SYSTEM,
        priority=announcement.priority,
    )
    sent = await service.notify_all(content)
    if not sent:
        return False
    await service.broadcast_system_update(
        "system_announcement",
        announcement.message,
        {
            "title": announcement.title,
            "priority": NotificationPriority(announcement.priority).value,
        },
    )
    return True


async def notify_check_in(service: NotificationService, *, reminder: StayReminder) -> bool:
    notification_id = await service.notify(
        reminder.guest_id,
        "Check-in Reminder",
        (
            f"Your check-in for Room {reminder.room_number} is scheduled for "
            f"{_format_date(reminder.scheduled_for)}."
        ),
        NotificationType.CHECK_IN,
        NotificationPriority.MEDIUM,
        f"/reservations/{reminder.reservation_id}",
        recipient_type=RecipientType.GUEST,
    )
    return notification_id is not None


async def notify_check_out(service: NotificationService, *, reminder: StayReminder) -> bool:
    notification_id = await service.notify(
        reminder.guest_id,
        "Check-out Reminder",
        (
            f"Your check-out from Room {reminder.room_number} is scheduled for "
            f"{_format_date(reminder.scheduled_for)}."
        ),
        NotificationType.CHECK_OUT,
        NotificationPriority.MEDIUM,
        f"/reservations/{reminder.reservation_id}",
        recipient_type=RecipientType.GUEST,
    )
    return notification_id is not None


async def notify_bill_issued(service: NotificationService, *, bill: BillIssued) -> bool:
    """Tell the guest that a bill is ready for their reservation."""

    notification_id = await service.notify(
        bill.guest_id,
        "Bill Issued",
        f"A bill of {bill.amount} {bill.currency} was issued for reservation "
        f"{bill.reservation_id}.",
        NotificationType.BILLING,
        NotificationPriority.HIGH,
        f"/bills/{bill.bill_id}",
        recipient_type=RecipientType.GUEST,
    )
    return notification_id is not None


__all__ = [
    "notify_bill_issued",
    "notify_booking_confirmed",
    "notify_check_in",
    "notify_check_out",
    "notify_housekeeping_assigned",
    "notify_maintenance_alert",
    "notify_system_announcement",
]
