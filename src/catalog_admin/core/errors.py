"""Error taxonomy shared by the data layer and the HTTP layer.

Every failure the catalog reports is a ``CatalogError``. Database failures
keep the PostgreSQL SQLSTATE (or PostgREST) code reported by the managed
backend, so the direct-database stress test and the HTTP API see the same
classes. The HTTP layer translates ``status_code`` and ``code`` into the
response; nothing is retried.
"""

from __future__ import annotations

from typing import Any

# SQLSTATE codes surfaced by PostgreSQL through PostgREST.
UNIQUE_VIOLATION = "23505"
NOT_NULL_VIOLATION = "23502"
INVALID_TEXT_REPRESENTATION = "22P02"

# PostgREST: the result contains 0 rows where exactly one was expected.
NO_ROWS = "PGRST116"


class CatalogError(Exception):
    """Base class for every error the catalog reports."""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        details: str | None = None,
        hint: str | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.code = code
        self.details = details
        self.hint = hint
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"detail": self.message}
        if self.code:
            body["code"] = self.code
        return body


class BadRequest(CatalogError):
    status_code = 400
    default_message = "Bad request"


class DatabaseError(CatalogError):
    """A failure reported by the managed database."""

    default_message = "Database request failed"


class ConstraintViolation(DatabaseError):
    """A database-enforced rule failed (uniqueness, non-null, type)."""

    status_code = 400


class UniqueViolation(ConstraintViolation):
    status_code = 409
    default_message = "A row with the same unique key already exists"


class NotNullViolation(ConstraintViolation):
    default_message = "A required column is missing"


class InvalidTextRepresentation(ConstraintViolation):
    default_message = "A value does not match its column type"


class ProductNotFound(CatalogError):
    status_code = 404
    default_message = "Product not found"

    def __init__(self, slug: str | None = None, **kwargs: Any) -> None:
        message = f"Product '{slug}' not found" if slug else None
        kwargs.setdefault("code", NO_ROWS)
        super().__init__(message, **kwargs)
        self.slug = slug


class AuthenticationError(CatalogError):
    """Credentials or a bearer token were rejected."""

    status_code = 401
    default_message = "Authentication failed"


class AccessDenied(CatalogError):
    """The caller is authenticated but not on the admin allow-list."""

    status_code = 403
    default_message = "Access denied. Admin access required."


class StorageError(CatalogError):
    default_message = "Failed to upload image"


_CONSTRAINT_ERRORS: dict[str, type[DatabaseError]] = {
    UNIQUE_VIOLATION: UniqueViolation,
    NOT_NULL_VIOLATION: NotNullViolation,
    INVALID_TEXT_REPRESENTATION: InvalidTextRepresentation,
}


def database_error_from_payload(payload: Any, status_code: int | None = None) -> DatabaseError:
    """Build the matching ``DatabaseError`` from a PostgREST error body.

    PostgREST reports ``{"code", "message", "details", "hint"}``; anything else
    becomes a generic ``DatabaseError`` carrying whatever text is available.
    """
    if not isinstance(payload, dict):
        message = str(payload) if payload else None
        if message is None and status_code is not None:
            message = f"Database request failed with status {status_code}"
        return DatabaseError(message)

    code = payload.get("code")
    code = str(code) if code is not None else None
    error_cls = _CONSTRAINT_ERRORS.get(code or "", DatabaseError)
    return error_cls(
        payload.get("message") or payload.get("error"),
        code=code,
        details=payload.get("details"),
        hint=payload.get("hint"),
    )
