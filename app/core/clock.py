"""
Timezone and "now" resolution for the HTTP boundary.

Services never read the wall clock or a process-wide zone themselves: the
router resolves both once per request and passes them down.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.core.config import settings
from app.core.errors import InvalidArgumentError


def resolve_timezone(name: Optional[str] = None) -> ZoneInfo:
    """Return the IANA zone `name`, or the configured default when omitted."""
    key = (name or "").strip() or settings.DEFAULT_TIMEZONE
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        raise InvalidArgumentError(f"Unknown timezone '{key}'.", field="tz", value=key)


def parse_day(raw: Optional[str], field: str = "day") -> Optional[date]:
    """Parse an ISO `YYYY-MM-DD` string; malformed input is an InvalidArgument."""
    if raw is None or not raw.strip():
        return None
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        raise InvalidArgumentError(
            f"'{raw}' is not a valid ISO date (YYYY-MM-DD).", field=field, value=raw
        )


def now_in(tz: ZoneInfo) -> datetime:
    return datetime.now(tz=tz)


def today_in(tz: ZoneInfo) -> date:
    return now_in(tz).date()
