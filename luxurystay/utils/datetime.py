"""Timezone handling for notification timestamps.

Timestamps are kept timezone-aware in the domain layer. The database stores
them as naive values expressed in the application timezone, since SQLite
drops ``tzinfo`` on ``DATETIME`` columns.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from luxurystay.config import get_settings

logger = logging.getLogger(__name__)

_UTC_OFFSET = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


def _parse_offset(name: str) -> tzinfo | None:
    """Return a fixed-offset zone for names like ``UTC+05:30`` or ``GMT-3``."""

    match = _UTC_OFFSET.match(name)
    if match is None:
        return None
    delta = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
    )
    return timezone(-delta if match.group("sign") == "-" else delta)


def _resolve_timezone(name: str) -> tzinfo:
    offset = _parse_offset(name)
    if offset is not None:
        return offset
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r; using UTC", name)
        return timezone.utc


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the zone configured through ``APP_TIMEZONE`` (UTC when unset)."""

    name = (get_settings().app_timezone or "").strip()
    return _resolve_timezone(name) if name else timezone.utc


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Current time in the app timezone, ready to be written to the database."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Express ``value`` in the app timezone; naive values are assumed local."""

    if value is None:
        return None
    zone = get_app_timezone()
    return value.replace(tzinfo=zone) if value.tzinfo is None else value.astimezone(zone)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None


def iso_or_none(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
