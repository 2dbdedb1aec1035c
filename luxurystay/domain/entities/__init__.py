"""Domain entities exposed by the application."""

from .connection import LiveConnection
from .delivery import STAGE_PERSIST, STAGE_PUSH, DeliveryFailure, DeliveryResult
from .hotel_event import (
    BillIssued,
    BookingConfirmation,
    HousekeepingTask,
    MaintenanceAlert,
    StayReminder,
    SystemAnnouncement,
)
from .role import (
    BROADCAST_ROLES,
    ROLE_ADMIN,
    ROLE_GUEST,
    ROLE_HOUSEKEEPING,
    ROLE_MAINTENANCE,
    ROLE_MANAGER,
    ROLE_RECEPTIONIST,
)
from .notification import (
    MESSAGE_MAX_LENGTH,
    RECIPIENT_ID_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Notification,
    NotificationContent,
    NotificationDraft,
    NotificationPriority,
    NotificationType,
    RecipientType,
)
from .targets import (
    ROLE_BROADCAST,
    ROOM_BROADCAST,
    SYSTEM_BROADCAST,
    TargetSelector,
    ToAll,
    ToIdentities,
    ToIdentity,
    ToRole,
    ToRoom,
    broadcast_kind,
)

__all__ = [
    "BROADCAST_ROLES",
    "ROLE_ADMIN",
    "ROLE_GUEST",
    "ROLE_HOUSEKEEPING",
    "ROLE_MAINTENANCE",
    "ROLE_MANAGER",
    "ROLE_RECEPTIONIST",
    "BillIssued",
    "BookingConfirmation",
    "DeliveryFailure",
    "DeliveryResult",
    "HousekeepingTask",
    "LiveConnection",
    "MESSAGE_MAX_LENGTH",
    "RECIPIENT_ID_MAX_LENGTH",
    "MaintenanceAlert",
    "Notification",
    "NotificationContent",
    "NotificationDraft",
    "NotificationPriority",
    "NotificationType",
    "RecipientType",
    "ROLE_BROADCAST",
    "ROOM_BROADCAST",
    "STAGE_PERSIST",
    "STAGE_PUSH",
    "SYSTEM_BROADCAST",
    "StayReminder",
    "SystemAnnouncement",
    "TITLE_MAX_LENGTH",
    "TargetSelector",
    "ToAll",
    "ToIdentities",
    "ToIdentity",
    "ToRole",
    "ToRoom",
    "broadcast_kind",
]
