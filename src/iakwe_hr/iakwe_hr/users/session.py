from __future__ import annotations

from typing import Optional, Protocol

import requests

from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..store.supabase_store import error_from_exception, error_from_response
from .model import Actor


class SessionProvider(Protocol):
    """Resolves the current user; injected wherever an actor is needed."""

    def get_current_user(self, access_token: str) -> Actor:
        raise NotImplementedError


class SupabaseSessionProvider(SessionProvider):
    """Resolve the actor from a Supabase access token (``GET /auth/v1/user``).

    ``role``, ``company_id`` and ``employee_id`` are read from the
    server-managed app metadata, ``full_name`` from the profile metadata.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self._user_url = base_url.rstrip("/") + "/auth/v1/user"
        self._api_key = api_key
        self._timeout = float(timeout)
        self._session = session or requests.Session()

    def get_current_user(self, access_token: str) -> Actor:
        if not access_token:
            raise AuthenticationError("Authentication required. Please sign in to continue.")

        try:
            resp = self._session.get(
                self._user_url,
                headers={"apikey": self._api_key, "Authorization": f"Bearer {access_token}"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise error_from_exception(e, "get current user") from e

        if resp.status_code in (401, 403):
            raise AuthenticationError("Authentication required. Please sign in to continue.")
        if resp.status_code >= 400:
            raise error_from_response(resp, "get current user")

        return actor_from_user(resp.json() or {})


def actor_from_user(user: dict) -> Actor:
    # Authorization fields come from app_metadata only; users can edit user_metadata themselves.
    app_meta = user.get("app_metadata") or {}
    profile = user.get("user_metadata") or {}
    email = user.get("email") or ""
    return Actor(
        user_id=user.get("id"),
        role=str(app_meta.get("role") or Role.EMPLOYEE.value),
        full_name=str(profile.get("full_name") or email),
        email=email,
        company_id=_opt_str(app_meta.get("company_id")),
        employee_id=_opt_str(app_meta.get("employee_id")),
    )


def _opt_str(value) -> Optional[str]:
    return str(value) if value not in (None, "") else None
