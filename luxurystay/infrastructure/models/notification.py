"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text

from luxurystay.domain.entities import (
    MESSAGE_MAX_LENGTH,
    RECIPIENT_ID_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)
from luxurystay.infrastructure.database import Base
from luxurystay.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for hotel notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_recipient_read", "recipient_id", "is_read"),
        Index("ix_notification_recipient_category", "recipient_id", "type"),
        Index("ix_notification_type_priority", "type", "priority"),
        Index("ix_notification_read_created", "is_read", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(String(RECIPIENT_ID_MAX_LENGTH), nullable=False, index=True)
    recipient_type = Column(String(16), nullable=False, index=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    message = Column(String(MESSAGE_MAX_LENGTH), nullable=False)
    type = Column(String(32), nullable=False, index=True)
    priority = Column(String(16), nullable=False, default="medium", index=True)
    is_read = Column(Boolean, nullable=False, default=False, index=True)
    read_date = Column(DateTime(), nullable=True)
    action_url = Column(Text, nullable=True)
    created_at = Column(
        DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True
    )
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["NotificationModel"]
