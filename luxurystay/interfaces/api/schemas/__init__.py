from .notification import (
    DeliveryResultRead,
    MarkReadResult,
    NotificationBroadcastRequest,
    NotificationMarkReadRequest,
    NotificationRead,
    UnreadCountRead,
)

__all__ = [
    "DeliveryResultRead",
    "MarkReadResult",
    "NotificationBroadcastRequest",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "UnreadCountRead",
]
