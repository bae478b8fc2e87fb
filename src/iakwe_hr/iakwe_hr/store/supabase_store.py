from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

import requests

from ..core.enums import ErrorKind
from ..core.exceptions import ConflictError, NotFoundError, StoreError
from .base import EntityStore, check_identifier, parse_order, prepare_changes, prepare_insert


def error_from_response(resp: requests.Response, action: str) -> StoreError:
    try:
        body = resp.json() or {}
        message = body.get("message") or body.get("msg") or body.get("error_description") or resp.reason
    except ValueError:
        message = resp.reason

    status = resp.status_code
    if status in (401, 403):
        kind = ErrorKind.AUTH
    elif status >= 500:
        kind = ErrorKind.SERVER
    else:
        kind = ErrorKind.CLIENT
    return StoreError(f"{action} failed ({status}): {message}", kind=kind, status_code=status)


def error_from_exception(e: requests.RequestException, action: str) -> StoreError:
    if isinstance(e, (requests.ConnectionError, requests.Timeout)):
        return StoreError(f"{action} failed: unable to reach the backend ({e})", kind=ErrorKind.NETWORK)
    return StoreError(f"{action} failed: {e}", kind=ErrorKind.CLIENT, retryable=False)


class SupabaseStore(EntityStore):
    """Entity store backed by a Supabase project's PostgREST endpoint."""

    backend = "supabase"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self._rest_url = base_url.rstrip("/") + "/rest/v1"
        self._timeout = float(timeout)
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            }
        )

    def _request(self, method: str, table: str, *, params=None, json=None, prefer: Optional[str] = None):
        url = f"{self._rest_url}/{check_identifier(table)}"
        headers = {"Prefer": prefer} if prefer else None
        action = f"{method} {table}"
        try:
            resp = self._session.request(method, url, params=params, json=json, headers=headers, timeout=self._timeout)
        except requests.RequestException as e:
            raise error_from_exception(e, action) from e
        if resp.status_code >= 400:
            raise error_from_response(resp, action)
        if not resp.content:
            return []
        return resp.json()

    def select(
        self,
        table: str,
        *,
        filters: Optional[dict] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        params: dict[str, Any] = {"select": "*"}
        for column, value in (filters or {}).items():
            params[check_identifier(column)] = "is.null" if value is None else f"eq.{_to_json(value)}"
        order = parse_order(order_by)
        if order:
            column, descending = order
            params["order"] = f"{column}.{'desc' if descending else 'asc'}"
        if limit:
            params["limit"] = int(limit)
        return list(self._request("GET", table, params=params))

    def insert(self, table: str, record: dict) -> dict:
        row = _jsonable(prepare_insert(record))
        created = self._request("POST", table, json=row, prefer="return=representation")
        return created[0] if created else row

    def update(self, table: str, record_id: str, changes: dict, *, expected_version: Optional[int] = None) -> dict:
        if expected_version is None:
            current = self._get(table, record_id)
            expected_version = int(current["version"])

        values = _jsonable(prepare_changes(changes))
        values["version"] = int(expected_version) + 1
        params = {"id": f"eq.{record_id}", "version": f"eq.{int(expected_version)}"}
        updated = self._request("PATCH", table, params=params, json=values, prefer="return=representation")
        if updated:
            return updated[0]

        current = self._get(table, record_id)
        raise ConflictError(current_version=int(current["version"]))

    def _get(self, table: str, record_id: str) -> dict:
        rows = self.select(table, filters={"id": str(record_id)}, limit=1)
        if not rows:
            raise NotFoundError(f"{table} record {record_id} not found")
        return rows[0]

    def delete(self, table: str, record_id: str) -> bool:
        deleted = self._request("DELETE", table, params={"id": f"eq.{record_id}"}, prefer="return=representation")
        return bool(deleted)

    def ping(self) -> None:
        try:
            resp = self._session.get(self._rest_url + "/", timeout=self._timeout)
        except requests.RequestException as e:
            raise error_from_exception(e, "ping") from e
        if resp.status_code >= 500:
            raise error_from_response(resp, "ping")


def _to_json(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if hasattr(value, "value"):
        return value.value
    return value


def _jsonable(record: dict) -> dict:
    return {k: _to_json(v) for k, v in record.items()}
