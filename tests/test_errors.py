from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError

from payroll.errors import (
    classify_db_error, ConflictError, ConstraintError, ConnectivityError, StorageError,
)


class PgUniqueViolation(Exception):
    pgcode = "23505"


class PgCheckViolation(Exception):
    pgcode = "23514"


class MySQLDuplicate(Exception):
    errno = 1062


def _integrity(orig):
    return IntegrityError("INSERT INTO payslips ...", {}, orig)


def test_postgres_unique_violation_is_conflict():
    err = classify_db_error(_integrity(PgUniqueViolation("duplicate key value")))
    assert isinstance(err, ConflictError)
    assert isinstance(err.cause, IntegrityError)


def test_mysql_duplicate_entry_is_conflict():
    assert isinstance(classify_db_error(_integrity(MySQLDuplicate("1062"))), ConflictError)


def test_sqlite_unique_is_conflict():
    orig = Exception("UNIQUE constraint failed: payslips.employee_id, payslips.timestamp")
    assert isinstance(classify_db_error(_integrity(orig)), ConflictError)


def test_check_violation_is_constraint():
    assert isinstance(classify_db_error(_integrity(PgCheckViolation("violates check constraint"))), ConstraintError)
    orig = Exception("CHECK constraint failed: working_days_range")
    assert isinstance(classify_db_error(_integrity(orig)), ConstraintError)


def test_operational_error_is_connectivity():
    exc = OperationalError("SELECT 1", {}, Exception("connection refused"))
    assert isinstance(classify_db_error(exc), ConnectivityError)


def test_other_errors_are_generic_storage_errors():
    exc = ProgrammingError("SELECT nope", {}, Exception("relation does not exist"))
    err = classify_db_error(exc)
    assert type(err) is StorageError
