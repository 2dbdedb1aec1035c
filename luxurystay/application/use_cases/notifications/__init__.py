"""Notification use cases."""

from .events import (
    notify_bill_issued,
    notify_booking_confirmed,
    notify_check_in,
    notify_check_out,
    notify_housekeeping_assigned,
    notify_maintenance_alert,
    notify_system_announcement,
)
from .runtime import NotificationRuntime, build_notification_runtime
from .service import SYSTEM_UPDATE_EVENT, NotificationService

__all__ = [
    "NotificationRuntime",
    "NotificationService",
    "SYSTEM_UPDATE_EVENT",
    "build_notification_runtime",
    "notify_bill_issued",
    "notify_booking_confirmed",
    "notify_check_in",
    "notify_check_out",
    "notify_housekeeping_assigned",
    "notify_maintenance_alert",
    "notify_system_announcement",
]
