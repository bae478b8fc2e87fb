from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.exceptions import StoreError
from .base import EntityStore, matches
from .datasource import DataResult, Degraded, Live

logger = logging.getLogger(__name__)


class EntityTable:
    """Per-entity helper over a store table (list/filter/get/create/update/delete).

    Reads degrade instead of raising: a failed ``list``/``filter`` returns
    ``Degraded`` with an empty list, or with ``sample_records`` when sample
    fallback is enabled. Writes always raise ``StoreError``.
    """

    def __init__(self, store: EntityStore, table: str, *, sample_records: Optional[Sequence[dict]] = None):
        self._store = store
        self.table = table
        self._samples = list(sample_records) if sample_records is not None else None

    def list(self, *, order_by: Optional[str] = None, limit: Optional[int] = None) -> DataResult:
        return self.filter({}, order_by=order_by, limit=limit)

    def filter(self, criteria: dict, *, order_by: Optional[str] = None, limit: Optional[int] = None) -> DataResult:
        try:
            rows = self._store.select(self.table, filters=criteria, order_by=order_by, limit=limit)
        except StoreError as e:
            return self._degraded(e, criteria, limit)
        return Live(items=rows)

    def _degraded(self, error: StoreError, criteria: dict, limit: Optional[int]) -> Degraded:
        if self._samples is not None:
            items = [dict(r) for r in self._samples if matches(r, criteria)]
            if limit:
                items = items[: int(limit)]
            logger.warning(
                "%s unavailable on %s backend (%s): serving %d sample record(s)",
                self.table, self._store.backend, error, len(items),
            )
        else:
            items = []
            logger.warning("%s unavailable on %s backend (%s)", self.table, self._store.backend, error)
        return Degraded(items=items, reason=str(error), error=error)

    def get(self, record_id: str) -> Optional[dict]:
        rows = self._store.select(self.table, filters={"id": str(record_id)}, limit=1)
        return rows[0] if rows else None

    def create(self, record: dict) -> dict:
        return self._store.insert(self.table, record)

    def update(self, record_id: str, partial: dict, *, expected_version: Optional[int] = None) -> dict:
        return self._store.update(self.table, str(record_id), partial, expected_version=expected_version)

    def delete(self, record_id: str) -> bool:
        return self._store.delete(self.table, str(record_id))
