# payroll/payslips/validation.py
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence

from payroll.errors import PayslipValidationError
from payroll.payslips.models import ALLOWED_DEPARTMENTS, EMPLOYMENT_TYPES
from payroll.schemas.payslip_schema import PayslipCreate
from payroll.utils.dates import as_utc


def _check_department(value: Any) -> None:
    if value not in ALLOWED_DEPARTMENTS:
        raise PayslipValidationError(
            f"Invalid department. Must be one of: {', '.join(ALLOWED_DEPARTMENTS)}"
        )


def _check_employment_type(value: Any) -> None:
    if value not in EMPLOYMENT_TYPES:
        raise PayslipValidationError(
            f"Invalid employment type. Must be one of: {', '.join(EMPLOYMENT_TYPES)}"
        )


def check_enumerations(body: Mapping[str, Any]) -> None:
    """Department then employment type, on the raw camelCase body, before it is parsed."""
    _check_department(body.get("department"))
    _check_employment_type(body.get("employmentType"))


def validate_payslip(payload: PayslipCreate, now: Optional[datetime] = None) -> None:
    """
    Business checks for a new payslip, in this order:
    department, employment type, working days, timestamp not in the future.
    The first failure raises PayslipValidationError.
    """
    _check_department(payload.department)
    _check_employment_type(payload.employment_type)

    if payload.working_days < 1 or payload.working_days > 31:
        raise PayslipValidationError("Working days must be between 1 and 31")

    now = as_utc(now) if now is not None else datetime.now(timezone.utc)
    if as_utc(payload.timestamp) > now:
        raise PayslipValidationError("Payslip date cannot be in the future")


def allowed_filter(value: Optional[str], allowed: Sequence[str]) -> Optional[str]:
    # unknown filter values are ignored, not rejected
    if value and value in allowed:
        return value
    return None
