from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .base import EntityStore, check_identifier, parse_order, prepare_changes, prepare_insert


class MySQLStore(EntityStore):
    backend = "mysql"

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def select(
        self,
        table: str,
        *,
        filters: Optional[dict] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        table = check_identifier(table)
        clauses = ["1=1"]
        params: list[object] = []
        for column, value in (filters or {}).items():
            check_identifier(column)
            if value is None:
                clauses.append(f"{column} IS NULL")
            else:
                clauses.append(f"{column}=%s")
                params.append(_to_db(value))

        sql = f"SELECT * FROM {table} WHERE {' AND '.join(clauses)}"
        order = parse_order(order_by)
        if order:
            column, descending = order
            sql += f" ORDER BY {column} {'DESC' if descending else 'ASC'}"
        if limit:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_from_db(r) for r in fetchall(cur)]

    def insert(self, table: str, record: dict) -> dict:
        table = check_identifier(table)
        row = prepare_insert(record)
        columns = [check_identifier(c) for c in row]
        placeholders = ",".join(["%s"] * len(columns))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO {table}({','.join(columns)}) VALUES({placeholders})",
                tuple(_to_db(row[c]) for c in columns),
            )
        return row

    def update(self, table: str, record_id: str, changes: dict, *, expected_version: Optional[int] = None) -> dict:
        table = check_identifier(table)
        values = prepare_changes(changes)
        assignments = ", ".join(f"{c}=%s" for c in values)
        params: list[object] = [_to_db(v) for v in values.values()]

        where = "id=%s"
        params.append(str(record_id))
        if expected_version is not None:
            where += " AND version=%s"
            params.append(int(expected_version))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {table} SET {assignments}, version=version+1 WHERE {where}",
                tuple(params),
            )
            updated = cur.rowcount
            cur.execute(f"SELECT * FROM {table} WHERE id=%s", (str(record_id),))
            current = fetchone(cur)

        if not current:
            raise NotFoundError(f"{table} record {record_id} not found")
        if not updated:
            raise ConflictError(current_version=int(current["version"]))
        return _from_db(current)

    def delete(self, table: str, record_id: str) -> bool:
        table = check_identifier(table)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {table} WHERE id=%s", (str(record_id),))
            return cur.rowcount > 0

    def ping(self) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1")
            fetchall(cur)


def _to_db(value: Any) -> Any:
    if hasattr(value, "value") and not isinstance(value, (date, datetime)):
        return value.value
    if isinstance(value, datetime) and value.tzinfo is not None:
        # DATETIME columns hold naive UTC.
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _from_db(row: dict) -> dict:
    out = dict(row)
    for key in ("created_at", "updated_at", "approved_date", "cancelled_date"):
        value = out.get(key)
        if isinstance(value, datetime) and value.tzinfo is None:
            out[key] = value.replace(tzinfo=timezone.utc)
    return out
