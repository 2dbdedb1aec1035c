"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable

from sqlalchemy import false, func
from sqlalchemy.orm import Session

from luxurystay.domain.entities import (
    Notification,
    NotificationDraft,
    NotificationPriority,
    NotificationType,
    RecipientType,
)
from luxurystay.infrastructure.models import NotificationModel
from luxurystay.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, draft: NotificationDraft) -> Notification:
        now = ensure_app_naive_datetime(now_in_app_timezone())
        model = NotificationModel(
            recipient_id=draft.recipient_id,
            recipient_type=RecipientType(draft.recipient_type).value,
            title=draft.title,
            message=draft.message,
            type=NotificationType(draft.type).value,
            priority=NotificationPriority(draft.priority).value,
            is_read=False,
            read_date=None,
            action_url=draft.action_url,
            created_at=now,
            updated_at=now,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model is not None else None

    def list_for_recipient(
        self,
        recipient_id: str,
        *,
        limit: int,
        offset: int = 0,
    ) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == recipient_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_unread_for_recipient(
        self, recipient_id: str, *, limit: int | None = 50
    ) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == recipient_id)
            .filter(NotificationModel.is_read == false())
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, recipient_id: str) -> int:
        count = (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.recipient_id == recipient_id)
            .filter(NotificationModel.is_read == false())
            .scalar()
        )
        return int(count or 0)

    def mark_as_read(self, notification_id: int) -> tuple[Notification | None, bool]:
        """Mark one notification as read.

        Returns the stored record (``None`` when unknown) and whether this call
        performed the unread to read transition.
        """

        transitioned = self._mark_unread_row(notification_id)
        self.session.commit()
        return self.get(notification_id), transitioned

    def mark_many_as_read(
        self, notification_ids: Iterable[int], *, recipient_id: str | None = None
    ) -> list[Notification]:
        """Mark ``notification_ids`` as read and return the records that transitioned.

        When ``recipient_id`` is given, ids owned by someone else are skipped.
        """

        ids = list(dict.fromkeys(i for i in notification_ids if i is not None))
        if not ids:
            return []
        transitioned = [i for i in ids if self._mark_unread_row(i, recipient_id)]
        self.session.commit()
        if not transitioned:
            return []
        models = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id.in_(transitioned))
            .order_by(NotificationModel.id)
            .all()
        )
        return [self._to_entity(model) for model in models]

    def _mark_unread_row(self, notification_id: int, recipient_id: str | None = None) -> bool:
        # The is_read guard makes the first writer win when callers race.
        now = ensure_app_naive_datetime(now_in_app_timezone())
        query = self.session.query(NotificationModel).filter(
            NotificationModel.id == notification_id,
            NotificationModel.is_read == false(),
        )
        if recipient_id is not None:
            query = query.filter(NotificationModel.recipient_id == recipient_id)
        updated = query.update(
            {
                NotificationModel.is_read: True,
                NotificationModel.read_date: now,
                NotificationModel.updated_at: now,
            },
            synchronize_session=False,
        )
        return updated == 1

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            recipient_type=RecipientType(model.recipient_type),
            title=model.title,
            message=model.message,
            type=NotificationType(model.type),
            priority=NotificationPriority(model.priority),
            is_read=bool(model.is_read),
            read_date=ensure_app_timezone(model.read_date),
            action_url=model.action_url,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationRepository"]
