# payroll/errors.py
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)

UNIQUE_VIOLATION_SQLSTATE = "23505"
MYSQL_DUPLICATE_ENTRY = 1062


class PayslipValidationError(Exception):
    """Payload rejected before any storage access (HTTP 400)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StorageError(Exception):
    """Failure raised by the persistence layer."""

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConflictError(StorageError):
    pass


class ConstraintError(StorageError):
    pass


class ConnectivityError(StorageError):
    pass


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = getattr(exc, "orig", None)
    if orig is None:
        return False
    # psycopg2 -> pgcode, psycopg 3 -> sqlstate
    for attr in ("pgcode", "sqlstate"):
        if getattr(orig, attr, None) == UNIQUE_VIOLATION_SQLSTATE:
            return True
    # mysql-connector
    if getattr(orig, "errno", None) == MYSQL_DUPLICATE_ENTRY:
        return True
    text = str(orig).lower()
    return "unique constraint" in text or "duplicate" in text


def classify_db_error(exc: SQLAlchemyError) -> StorageError:
    if isinstance(exc, IntegrityError):
        if _is_unique_violation(exc):
            return ConflictError("Payslip already exists for this employee and timestamp", exc)
        return ConstraintError("Constraint violation", exc)
    if isinstance(exc, (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError)):
        return ConnectivityError("Database unavailable", exc)
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return ConnectivityError("Database connection lost", exc)
    return StorageError("Database error", exc)
