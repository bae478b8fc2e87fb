from __future__ import annotations

import logging
from functools import wraps
from typing import Callable

from flask import Flask, g, jsonify, request

from ..core.enums import ErrorKind
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from ..store.datasource import DataResult

logger = logging.getLogger(__name__)


def bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    scheme, _, token = auth.partition(" ")
    return token.strip() if scheme.lower() == "bearer" else ""


def actor_required(container):
    """Resolve the current actor from the bearer token into ``g.actor``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.actor = container.session_provider.get_current_user(bearer_token())
            return view(*args, **kwargs)

        return wrapper

    return decorator


def json_body() -> dict:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def data_response(result: DataResult, serialize: Callable, *, notice: str) -> dict:
    """List payload that tells the client whether the data is live."""
    payload = {
        "items": [serialize(item) for item in result.items],
        "source": "degraded" if result.is_degraded else "live",
    }
    if result.is_degraded:
        payload["notice"] = notice
        if result.error is not None:
            payload["error"] = result.error.to_dict()
    return payload


def register_error_handlers(app: Flask) -> None:
    def _error(message: str, status: int, **extra):
        return jsonify({"error": message, **extra}), status

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return _error(str(e), 400)

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return _error(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _authorization(e: AuthorizationError):
        return _error(str(e), 403)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return _error(str(e), 404)

    @app.errorhandler(ConflictError)
    def _conflict(e: ConflictError):
        return _error(str(e), 409, current_version=e.current_version)

    @app.errorhandler(StoreError)
    def _store(e: StoreError):
        logger.exception("Store error on %s %s", request.method, request.path)
        status = 503 if e.kind in {ErrorKind.NETWORK, ErrorKind.SERVER} else 502
        return _error(str(e), status, kind=e.kind.value, retryable=e.retryable)
