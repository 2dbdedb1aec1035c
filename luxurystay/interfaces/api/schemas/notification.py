"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from luxurystay.domain.entities import (
    MESSAGE_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    DeliveryResult,
    NotificationContent,
    NotificationPriority,
    NotificationType,
    RecipientType,
    TargetSelector,
    ToAll,
    ToIdentities,
    ToRole,
    ToRoom,
)


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[int] = Field(..., min_length=1, description="Notification identifiers")

    def unique_ids(self) -> list[int]:
        """Return the list of identifiers without duplicates preserving order."""

        unique: list[int] = []
        seen: set[int] = set()
        for notification_id in self.ids:
            if notification_id in seen:
                continue
            seen.add(notification_id)
            unique.append(notification_id)
        return unique


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    recipient_id: str
    recipient_type: RecipientType
    title: str
    message: str
    type: NotificationType
    priority: NotificationPriority
    is_read: bool
    read_date: datetime | None = None
    action_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    age: int
    is_urgent: bool
    time_based_priority: float


class UnreadCountRead(BaseModel):
    count: int


class MarkReadResult(BaseModel):
    updated: int


class NotificationBroadcastRequest(BaseModel):
    """Notification sent by staff to a role, a room, a list of users or everyone."""

    target: Literal["role", "all", "room", "users"]
    role: str | None = None
    room: str | None = None
    user_ids: list[str] = Field(default_factory=list)
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    message: str = Field(..., min_length=1, max_length=MESSAGE_MAX_LENGTH)
    type: NotificationType = NotificationType.SYSTEM
    priority: NotificationPriority = NotificationPriority.MEDIUM
    action_url: str | None = None
    recipient_type: RecipientType = RecipientType.USER

    @model_validator(mode="after")
    def _check_target(self) -> "NotificationBroadcastRequest":
        if self.target == "role" and not (self.role and self.role.strip()):
            raise ValueError("role is required when target is 'role'")
        if self.target == "room" and not (self.room and self.room.strip()):
            raise ValueError("room is required when target is 'room'")
        if self.target == "users" and not self.user_ids:
            raise ValueError("user_ids is required when target is 'users'")
        return self

    def selector(self) -> TargetSelector:
        if self.target == "role":
            return ToRole(self.role.strip())
        if self.target == "room":
            return ToRoom(self.room.strip())
        if self.target == "users":
            return ToIdentities.of(self.user_ids)
        return ToAll()

    def content(self) -> NotificationContent:
        return NotificationContent(
            title=self.title,
            message=self.message,
            type=self.type,
            priority=self.priority,
            action_url=self.action_url,
            recipient_type=self.recipient_type,
        )


class DeliveryResultRead(BaseModel):
    """Summary of a broadcast returned to the caller."""

    targets: list[str]
    notification_ids: list[int]
    persisted: int
    push_attempted: int
    push_failed: int
    failed_targets: list[str]

    @classmethod
    def from_result(cls, result: DeliveryResult) -> "DeliveryResultRead":
        return cls(
            targets=result.targets,
            notification_ids=result.notification_ids,
            persisted=result.persisted_count,
            push_attempted=result.push_attempted,
            push_failed=result.push_failed,
            failed_targets=result.failed_targets,
        )


__all__ = [
    "DeliveryResultRead",
    "MarkReadResult",
    "NotificationBroadcastRequest",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "UnreadCountRead",
]
