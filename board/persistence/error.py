"""PostgreSQL SQLSTATE classification."""

from typing import Optional

from sqlalchemy.exc import DBAPIError, IntegrityError

from board.domain.error import (
    AlreadyExistsError,
    DomainError,
    NotFoundError,
    ValidationError,
)

SERIALIZATION_FAILURE = "40001"
DEADLOCK_DETECTED = "40P01"
RETRYABLE_SQLSTATES = frozenset({SERIALIZATION_FAILURE, DEADLOCK_DETECTED})

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def sqlstate(error: DBAPIError) -> Optional[str]:
    """SQLSTATE reported by the driver, if any."""
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def translate_integrity_error(
    error: IntegrityError, resource: str, identifier: str
) -> DomainError:
    """Map a constraint violation on ``resource`` to its domain error.

    Only a unique violation is a duplicate. A foreign key violation means a
    referenced row went away under the transaction. Anything else (check,
    not-null) is rejected input.
    """
    code = sqlstate(error)
    if code == UNIQUE_VIOLATION:
        return AlreadyExistsError(resource, identifier)
    if code == FOREIGN_KEY_VIOLATION:
        return NotFoundError("Referenced row", f"{resource} {identifier}")
    return ValidationError(f"{resource} {identifier} violates constraint ({code})")
