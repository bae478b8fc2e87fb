from __future__ import annotations

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the current user cannot be resolved from the session."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a record does not exist."""


class ConflictError(DomainError):
    """Raised when an update was based on a stale version of a record."""

    def __init__(self, message: str = "Stale state, please refresh", *, current_version: int | None = None):
        super().__init__(message)
        self.current_version = current_version


class StoreError(Exception):
    """Raised when the backend data store cannot complete an operation."""

    def __init__(self, message: str, *, kind: ErrorKind, retryable: bool | None = None, status_code: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.retryable = retryable if retryable is not None else kind in {ErrorKind.NETWORK, ErrorKind.SERVER}
        self.status_code = status_code

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "retryable": self.retryable, "message": str(self)}
