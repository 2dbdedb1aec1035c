"""Validation helpers applied to notification payloads before persistence."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from .entities import (
    MESSAGE_MAX_LENGTH,
    RECIPIENT_ID_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    NotificationContent,
    NotificationDraft,
    NotificationPriority,
    NotificationType,
    RecipientType,
)
from .exceptions import NotificationValidationError

_EnumT = TypeVar("_EnumT", bound=Enum)


def _coerce_enum(enum_cls: type[_EnumT], value: object, field_name: str) -> _EnumT:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        msg = f"{field_name} must be one of: {allowed}"
        raise NotificationValidationError(msg) from exc


def _clean_text(value: object, field_name: str, max_length: int) -> str:
    if not isinstance(value, str):
        raise NotificationValidationError(f"{field_name} is required")
    cleaned = value.strip()
    if not cleaned:
        raise NotificationValidationError(f"{field_name} is required")
    if len(cleaned) > max_length:
        msg = f"{field_name} cannot exceed {max_length} characters"
        raise NotificationValidationError(msg)
    return cleaned


def _clean_action_url(value: object) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise NotificationValidationError("action_url must be a string")
    return value.strip() or None


def ensure_valid_content(content: NotificationContent) -> NotificationContent:
    """Return ``content`` with trimmed text and enum-typed categories."""

    return NotificationContent(
        title=_clean_text(content.title, "title", TITLE_MAX_LENGTH),
        message=_clean_text(content.message, "message", MESSAGE_MAX_LENGTH),
        type=_coerce_enum(NotificationType, content.type, "type"),
        priority=_coerce_enum(
            NotificationPriority,
            content.priority if content.priority is not None else NotificationPriority.MEDIUM,
            "priority",
        ),
        action_url=_clean_action_url(content.action_url),
        recipient_type=_coerce_enum(RecipientType, content.recipient_type, "recipient_type"),
    )


def ensure_valid_identity_id(value: object, field_name: str = "recipient_id") -> str:
    """Return the trimmed identity id or raise ``NotificationValidationError``."""

    return _clean_text(value, field_name, RECIPIENT_ID_MAX_LENGTH)


def ensure_valid_draft(draft: NotificationDraft) -> NotificationDraft:
    """Return a normalized copy of ``draft`` or raise ``NotificationValidationError``."""

    recipient_id = ensure_valid_identity_id(draft.recipient_id)
    content = ensure_valid_content(
        NotificationContent(
            title=draft.title,
            message=draft.message,
            type=draft.type,
            priority=draft.priority,
            action_url=draft.action_url,
            recipient_type=draft.recipient_type,
        )
    )
    return content.for_recipient(recipient_id)


def ensure_page_window(limit: int, offset: int) -> None:
    """Validate a ``limit``/``offset`` page window."""

    if limit <= 0:
        raise NotificationValidationError("limit must be greater than zero")
    if offset < 0:
        raise NotificationValidationError("offset cannot be negative")


__all__ = [
    "ensure_page_window",
    "ensure_valid_content",
    "ensure_valid_draft",
    "ensure_valid_identity_id",
]
