from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Optional, Union

from ..core.exceptions import ValidationError

DateLike = Union[date, datetime, str, None]

# Seconds fraction of a time of day; PostgREST trims trailing zeros (".12").
_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d+)")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_date(value: DateLike) -> Optional[date]:
    """Normalize a calendar date input to a whole day.

    Accepts date objects, datetimes (time part dropped) and ISO strings with
    or without a time component. Empty values return None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    if not s:
        return None
    try:
        return parse_iso_date(s[:10])
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def to_datetime(value) -> Optional[datetime]:
    """Timestamps come back as datetime (MySQL, memory) or ISO text (PostgREST)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    s = str(value).strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    s = _FRACTION.sub(lambda m: f"{m.group(1)}.{m.group(2)[:6].ljust(6, '0')}", s, count=1)
    return datetime.fromisoformat(s)


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mock it easier.
    """
    return datetime.now(timezone.utc)


def isoformat(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)
