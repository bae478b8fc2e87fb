from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import ErrorKind
from ..core.exceptions import StoreError
from .connection import DatabaseConnection

_AUTH_ERRNOS = {
    errorcode.ER_ACCESS_DENIED_ERROR,
    errorcode.ER_DBACCESS_DENIED_ERROR,
    errorcode.ER_TABLEACCESS_DENIED_ERROR,
}


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise to_store_error(e) from e
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise to_store_error(e) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def to_store_error(e: mysql.connector.Error) -> StoreError:
    if getattr(e, "errno", None) in _AUTH_ERRNOS:
        kind = ErrorKind.AUTH
    elif isinstance(e, (mysql.connector.errors.InterfaceError, mysql.connector.errors.OperationalError)):
        kind = ErrorKind.NETWORK
    elif isinstance(e, (mysql.connector.errors.IntegrityError, mysql.connector.errors.DataError)):
        kind = ErrorKind.CLIENT
    else:
        kind = ErrorKind.SERVER
    return StoreError(f"MySQL error: {e}", kind=kind)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
