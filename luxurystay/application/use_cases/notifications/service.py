"""Notification API consumed by the rest of the hotel application."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Iterable

from luxurystay.domain.entities import (
    DeliveryResult,
    Notification,
    NotificationContent,
    NotificationPriority,
    NotificationType,
    RecipientType,
    TargetSelector,
    ToAll,
    ToIdentities,
    ToIdentity,
    ToRole,
    ToRoom,
)
from luxurystay.domain.exceptions import NotificationValidationError, PersistenceError
from luxurystay.infrastructure.notifications import DeliveryDispatcher, NotificationStore
from luxurystay.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

SYSTEM_UPDATE_EVENT = "system-update"


class NotificationService:
    """Translate application requests into dispatcher and store calls.

    Send helpers report success as long as at least one record was stored;
    whether it was also delivered live is not visible to callers.
    """

    def __init__(self, dispatcher: DeliveryDispatcher, store: NotificationStore) -> None:
        self._dispatcher = dispatcher
        self._store = store

    async def deliver(
        self, selector: TargetSelector, content: NotificationContent
    ) -> DeliveryResult:
        """Dispatch ``content`` and return the full delivery summary.

        Unlike the ``notify*`` helpers this propagates validation and
        persistence errors.
        """

        return await self._dispatcher.dispatch(selector, content)

    async def notify(
        self,
        identity_id: str,
        title: str,
        message: str,
        type: NotificationType | str,
        priority: NotificationPriority | str = NotificationPriority.MEDIUM,
        action_url: str | None = None,
        *,
        recipient_type: RecipientType | str = RecipientType.USER,
    ) -> int | None:
        """Send a notification to one identity and return the stored id."""

        content = NotificationContent(
            title=title,
            message=message,
            type=type,
            priority=priority,
            action_url=action_url,
            recipient_type=recipient_type,
        )
        result = await self._safe_deliver(ToIdentity(identity_id), content)
        if result is None or not result.notification_ids:
            return None
        return result.notification_ids[0]

    async def notify_many(
        self, identity_ids: Iterable[str], content: NotificationContent
    ) -> list[int]:
        """Send ``content`` to each identity; return the ids that were stored."""

        selector = ToIdentities.of(identity_ids)
        result = await self._safe_deliver(selector, content)
        if result is None:
            return []
        logger.info(
            "Bulk notifications sent: total=%s stored=%s failed=%s",
            len(result.targets),
            result.persisted_count,
            len(result.failed_targets),
        )
        return result.notification_ids

    async def notify_role(self, role: str, content: NotificationContent) -> bool:
        """Send ``content`` to every identity currently connected under ``role``."""

        return await self._safe_deliver(ToRole(role), content) is not None

    async def notify_all(self, content: NotificationContent) -> bool:
        return await self._safe_deliver(ToAll(), content) is not None

    async def notify_room(self, room: str, content: NotificationContent) -> bool:
        return await self._safe_deliver(ToRoom(room), content) is not None

    async def broadcast_system_update(
        self, update_type: str, message: str, data: dict[str, Any] | None = None
    ) -> None:
        """Emit the raw ``system-update`` event to every open connection."""

        await self._dispatcher.emit_to_all(
            SYSTEM_UPDATE_EVENT,
            {
                "type": update_type,
                "message": message,
                "data": data or {},
                "timestamp": now_in_app_timezone().isoformat(),
            },
        )

    async def get(self, notification_id: int) -> Notification | None:
        try:
            return await self._store.get(notification_id)
        except PersistenceError:
            return None

    async def get_unread_count(self, identity_id: str) -> int:
        try:
            return await self._store.count_unread(identity_id)
        except PersistenceError as exc:
            logger.error("Failed to get unread count for %s: %s", identity_id, exc)
            return 0

    async def mark_read(self, notification_id: int) -> bool:
        """Mark one notification as read; ``False`` when it does not exist."""

        try:
            notification, transitioned = await self._store.mark_read_detailed(notification_id)
        except PersistenceError as exc:
            logger.error("Failed to mark notification %s as read: %s", notification_id, exc)
            return False
        if notification is None:
            return False
        if transitioned:
            await self.publish_read_state([notification])
        return True

    async def mark_read_bulk(
        self, notification_ids: Iterable[int], *, recipient_id: str | None = None
    ) -> int:
        """Mark several notifications as read; return how many changed state."""

        try:
            updated = await self._store.mark_read_bulk_detailed(
                notification_ids, recipient_id=recipient_id
            )
        except PersistenceError as exc:
            logger.error("Failed to mark notifications as read: %s", exc)
            return 0

        await self.publish_read_state(updated)
        return len(updated)

    async def publish_read_state(self, notifications: Iterable[Notification]) -> None:
        """Tell each recipient's open devices which of their notifications were read."""

        by_recipient: dict[str, list[Notification]] = defaultdict(list)
        for notification in notifications:
            by_recipient[notification.recipient_id].append(notification)
        for owner, owned in by_recipient.items():
            await self._dispatcher.publish_read_state(
                owner,
                [notification.id for notification in owned],
                owned[0].read_date,
            )

    async def list_recent(
        self, identity_id: str, limit: int = 10, offset: int = 0
    ) -> list[Notification]:
        try:
            return await self._store.list_for_recipient(identity_id, limit, offset)
        except PersistenceError as exc:
            logger.error("Failed to list notifications for %s: %s", identity_id, exc)
            return []

    async def list_unread(self, identity_id: str, limit: int = 50) -> list[Notification]:
        try:
            return await self._store.list_unread_for_recipient(identity_id, limit)
        except PersistenceError as exc:
            logger.error("Failed to list unread notifications for %s: %s", identity_id, exc)
            return []

    async def _safe_deliver(
        self, selector: TargetSelector, content: NotificationContent
    ) -> DeliveryResult | None:
        try:
            return await self._dispatcher.dispatch(selector, content)
        except (NotificationValidationError, PersistenceError) as exc:
            logger.error("Failed to send notification to %s: %s", selector, exc)
            return None


__all__ = ["NotificationService", "SYSTEM_UPDATE_EVENT"]
