from __future__ import annotations

import re
import uuid
from typing import Any, Optional, Protocol

from ..common.datetime_utils import now_utc
from ..core.enums import ErrorKind
from ..core.exceptions import StoreError

_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")

# Columns owned by the store; callers never write them through update().
SERVER_FIELDS = frozenset({"id", "version", "created_at", "updated_at"})


class EntityStore(Protocol):
    """Generic table-level CRUD contract shared by every backend.

    Records are plain dicts keyed by column name. Every record carries
    ``id``, ``version``, ``created_at`` and ``updated_at``.
    """

    backend: str

    def select(
        self,
        table: str,
        *,
        filters: Optional[dict] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        raise NotImplementedError

    def insert(self, table: str, record: dict) -> dict:
        raise NotImplementedError

    def update(self, table: str, record_id: str, changes: dict, *, expected_version: Optional[int] = None) -> dict:
        """Apply ``changes`` and bump ``version``.

        Raises NotFoundError for an unknown id and ConflictError when
        ``expected_version`` no longer matches the stored version.
        """

        raise NotImplementedError

    def delete(self, table: str, record_id: str) -> bool:
        raise NotImplementedError

    def ping(self) -> None:
        raise NotImplementedError


def check_identifier(name: str) -> str:
    if not name or not _IDENTIFIER.match(name):
        raise StoreError(f"Invalid table or column name: {name!r}", kind=ErrorKind.CLIENT)
    return name


def parse_order(order_by: Optional[str]) -> Optional[tuple[str, bool]]:
    """'-created_at' -> ('created_at', True); 'start_date' -> ('start_date', False)."""
    if not order_by:
        return None
    order_by = order_by.strip()
    descending = order_by.startswith("-")
    column = order_by.lstrip("-+")
    return check_identifier(column), descending


def prepare_insert(record: dict) -> dict:
    now = now_utc()
    out = {k: v for k, v in record.items() if k not in SERVER_FIELDS}
    out["id"] = str(record.get("id") or uuid.uuid4())
    out["version"] = 1
    out["created_at"] = now
    out["updated_at"] = now
    return out


def prepare_changes(changes: dict) -> dict:
    out = {k: v for k, v in changes.items() if k not in SERVER_FIELDS}
    for column in out:
        check_identifier(column)
    out["updated_at"] = now_utc()
    return out


def matches(record: dict, filters: Optional[dict]) -> bool:
    if not filters:
        return True
    return all(_same(record.get(k), v) for k, v in filters.items())


def _same(left: Any, right: Any) -> bool:
    if hasattr(left, "value"):
        left = left.value
    if hasattr(right, "value"):
        right = right.value
    return str(left) == str(right) if left is not None and right is not None else left is right
