"""Errors raised by the persistence layer.

Driver exceptions are translated here so nothing above the repositories sees a
raw SQLAlchemy or DB-API error.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import DBAPIError, SQLAlchemyError

CHECK_VIOLATION = "23514"


class StorageError(Exception):
    """Unexpected storage failure."""


class RecordNotFoundError(StorageError):
    """No row matched the requested key."""


class ConstraintViolationError(StorageError):
    """A table check constraint rejected the write."""


SQLSTATE_ERRORS: dict[str, type[StorageError]] = {
    CHECK_VIOLATION: ConstraintViolationError,
}


def sqlstate(exc: SQLAlchemyError) -> Optional[str]:
    """Best-effort SQLSTATE for a driver error."""
    if not isinstance(exc, DBAPIError) or exc.orig is None:
        return None
    code = getattr(exc.orig, "pgcode", None) or getattr(exc.orig, "sqlstate", None)
    if code:
        return str(code)
    # sqlite has no SQLSTATE
    if "CHECK constraint failed" in str(exc.orig):
        return CHECK_VIOLATION
    return None


def translate_error(exc: SQLAlchemyError, context: str) -> StorageError:
    error_cls = SQLSTATE_ERRORS.get(sqlstate(exc) or "", StorageError)
    return error_cls(f"{context}: {exc}")
