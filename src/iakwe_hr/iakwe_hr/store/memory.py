from __future__ import annotations

import copy
import threading
from typing import Any, Iterable, Optional

from ..core.exceptions import ConflictError, NotFoundError
from .base import EntityStore, check_identifier, matches, parse_order, prepare_changes, prepare_insert


class InMemoryStore(EntityStore):
    """Process-local store used for development, sample data and tests."""

    backend = "memory"

    def __init__(self):
        self._tables: dict[str, dict[str, dict]] = {}
        self._lock = threading.Lock()

    def _table(self, table: str) -> dict[str, dict]:
        return self._tables.setdefault(check_identifier(table), {})

    def seed(self, table: str, records: Iterable[dict]) -> list[dict]:
        return [self.insert(table, r) for r in records]

    def select(
        self,
        table: str,
        *,
        filters: Optional[dict] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        with self._lock:
            rows = [copy.deepcopy(r) for r in self._table(table).values() if matches(r, filters)]

        order = parse_order(order_by)
        if order:
            column, descending = order
            present = [r for r in rows if r.get(column) is not None]
            missing = [r for r in rows if r.get(column) is None]
            present.sort(key=lambda r: _sort_key(r[column]), reverse=descending)
            rows = present + missing
        if limit:
            rows = rows[: int(limit)]
        return rows

    def insert(self, table: str, record: dict) -> dict:
        row = prepare_insert(record)
        with self._lock:
            self._table(table)[row["id"]] = row
            return copy.deepcopy(row)

    def update(self, table: str, record_id: str, changes: dict, *, expected_version: Optional[int] = None) -> dict:
        values = prepare_changes(changes)
        with self._lock:
            current = self._table(table).get(str(record_id))
            if current is None:
                raise NotFoundError(f"{table} record {record_id} not found")
            if expected_version is not None and int(current["version"]) != int(expected_version):
                raise ConflictError(current_version=int(current["version"]))
            current.update(values)
            current["version"] = int(current["version"]) + 1
            return copy.deepcopy(current)

    def delete(self, table: str, record_id: str) -> bool:
        with self._lock:
            return self._table(table).pop(str(record_id), None) is not None

    def ping(self) -> None:
        return None


def _sort_key(value: Any):
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if hasattr(value, "value"):
        return value.value
    return value
