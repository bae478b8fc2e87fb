from __future__ import annotations

from typing import Iterable, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_one_of(value: Optional[str], field_name: str, allowed: Iterable[str]) -> str:
    allowed = list(allowed)
    v = (value or "").strip()
    if v not in allowed:
        raise ValidationError(f"{field_name} must be one of: {', '.join(allowed)}")
    return v


def require_version(value) -> int:
    """Last-seen record version supplied by the caller of an update."""
    try:
        version = int(value)
    except (TypeError, ValueError):
        raise ValidationError("version is required to update a record")
    if version < 1:
        raise ValidationError("version is required to update a record")
    return version


def require_limit(value) -> Optional[int]:
    """Page size for list reads; None means the store default (no limit)."""
    if value is None:
        return None
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise ValidationError("limit must be a number")
    if limit < 1:
        raise ValidationError("limit must be at least 1")
    return limit
