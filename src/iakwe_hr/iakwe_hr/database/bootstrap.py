"""Schema setup and sample data for the MySQL backend (scripts and AUTO_INIT_DB)."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from ..core.constants import EMPLOYEES_TABLE
from ..store.mysql_store import MySQLStore
from .connection import DatabaseConnection, DBConfig
from .sample_data import SAMPLE_EMPLOYEES

logger = logging.getLogger(__name__)

_CREATE_DATABASE = re.compile(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$")
_USE_DATABASE = re.compile(r"(?im)^\s*USE\b.*?;\s*$")


def _strip_create_db_and_use(sql: str) -> str:
    # The target database comes from DB_CONFIG, not from the file.
    return _USE_DATABASE.sub("", _CREATE_DATABASE.sub("", sql))


def _iter_sql_statements(sql: str) -> Iterator[str]:
    """Split on ``;`` outside quoted literals."""
    start = 0
    quote = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if ch == "\\":
            i += 2
            continue
        if quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def _run(factory: DatabaseConnection, statements, *, with_database: bool = True) -> None:
    conn = factory.connect(with_database=with_database)
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    _run(
        DatabaseConnection(target),
        [f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"],
        with_database=False,
    )


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))
    _run(DatabaseConnection(DBConfig.from_dict(db_config)), _iter_sql_statements(sql))
    logger.info("Applied %s", Path(schema_path).name)


def seed_sample_employees(db_config: dict) -> int:
    """Insert the sample directory rows that are missing; returns how many were added."""
    store = MySQLStore(DatabaseConnection(DBConfig.from_dict(db_config)))
    added = 0
    for record in SAMPLE_EMPLOYEES:
        if store.select(EMPLOYEES_TABLE, filters={"id": record["id"]}, limit=1):
            continue
        store.insert(EMPLOYEES_TABLE, record)
        added += 1
    logger.info("Seeded %d sample employee(s)", added)
    return added


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
