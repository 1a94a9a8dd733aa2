"""
Read/write failure policy for the data access layer.

Reads are fail-soft: a failed query is logged and the caller gets a safe
default so the dashboard keeps rendering. Writes are fail-hard: the error
is translated into a DataServiceError that the submitting form shows.

Every repository call goes through read_soft() or write_hard(), which
classify the result as one of:

    Outcome.ok(value)               the call succeeded
    Outcome.degraded(default, err)  a read failed, default returned
    Outcome.failed(err)             a write failed, unwrap() raises
"""
import enum
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DataServiceError(Exception):
    """A create/update/delete could not be completed."""

    status_code = 400

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class RecordNotFoundError(DataServiceError):
    """The row addressed by id does not exist."""

    status_code = 404


class OutcomeKind(str, enum.Enum):
    OK = "ok"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    kind: OutcomeKind
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @classmethod
    def ok(cls, value: T) -> "Outcome[T]":
        return cls(OutcomeKind.OK, value)

    @classmethod
    def degraded(cls, default: T, error: BaseException) -> "Outcome[T]":
        return cls(OutcomeKind.DEGRADED, default, error)

    @classmethod
    def failed(cls, error: BaseException) -> "Outcome[T]":
        return cls(OutcomeKind.FAILED, None, error)

    @property
    def is_ok(self) -> bool:
        return self.kind == OutcomeKind.OK

    @property
    def is_degraded(self) -> bool:
        return self.kind == OutcomeKind.DEGRADED

    @property
    def is_failed(self) -> bool:
        return self.kind == OutcomeKind.FAILED

    def unwrap(self) -> T:
        """Return the value (real or default). Raises the error of a failed outcome."""
        if self.kind == OutcomeKind.FAILED:
            raise self.error
        return self.value


# Postgres SQLSTATE codes surfaced to the form
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"


def _sqlstate(exc: IntegrityError) -> Optional[str]:
    """SQLSTATE of an integrity error, for asyncpg (sqlstate/pgcode) and SQLite (message)."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code:
        return code

    message = str(orig).upper()
    if "UNIQUE" in message:
        return UNIQUE_VIOLATION
    if "FOREIGN KEY" in message:
        return FOREIGN_KEY_VIOLATION
    if "NOT NULL" in message:
        return NOT_NULL_VIOLATION
    return None


def translate_integrity_error(exc: IntegrityError, entity: str, email_duplicate_message: str) -> DataServiceError:
    """Map a constraint violation to the message the edit form displays."""
    code = _sqlstate(exc)
    detail = str(exc.orig).lower()

    if code == UNIQUE_VIOLATION and "email" in detail:
        return DataServiceError(email_duplicate_message, status_code=409)
    if code == UNIQUE_VIOLATION:
        return DataServiceError(
            "This information conflicts with existing data. Please check your input and try again.",
            status_code=409
        )
    if code == FOREIGN_KEY_VIOLATION:
        return DataServiceError("Invalid reference data. Please check your input and try again.")
    if code == NOT_NULL_VIOLATION:
        return DataServiceError("Required fields are missing. Please fill in all required information.")
    return DataServiceError(f"Failed to save {entity}. Please try again.")


async def read_soft(
    session: AsyncSession,
    label: str,
    query: Callable[[], Awaitable[T]],
    default: T,
) -> Outcome[T]:
    """
    Run a read; on any failure log it and degrade to `default`.

    The session is rolled back so later reads in the same request start
    from a clean transaction.
    """
    try:
        return Outcome.ok(await query())
    except Exception as e:
        logger.error(f"Error {label}: {str(e)}", exc_info=True)
        try:
            await session.rollback()
        except SQLAlchemyError as rollback_error:
            logger.error(f"Error rolling back after {label}: {str(rollback_error)}")
        return Outcome.degraded(default, e)


async def write_hard(
    session: AsyncSession,
    label: str,
    operation: Callable[[], Awaitable[T]],
    entity: str = "record",
    email_duplicate_message: str = "A record with this email address already exists.",
) -> Outcome[T]:
    """
    Run a write; on failure roll back and return a failed outcome.

    Callers unwrap() the outcome, so the DataServiceError reaches the form.
    """
    try:
        return Outcome.ok(await operation())
    except DataServiceError as e:
        await session.rollback()
        logger.warning(f"Error {label}: {e.message}")
        return Outcome.failed(e)
    except IntegrityError as e:
        await session.rollback()
        logger.error(f"Error {label}: {str(e.orig)}")
        return Outcome.failed(translate_integrity_error(e, entity, email_duplicate_message))
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Error {label}: {str(e)}", exc_info=True)
        failure = DataServiceError(f"Failed to {label}. Please try again.", status_code=500)
        failure.__cause__ = e
        return Outcome.failed(failure)
