# payroll/payslips/router.py
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from payroll.database import get_db
from payroll.errors import classify_db_error
from payroll.payslips.models import Payslip, ALLOWED_DEPARTMENTS, EMPLOYMENT_TYPES
from payroll.payslips.validation import check_enumerations, validate_payslip, allowed_filter
from payroll.schemas.payslip_schema import PayslipCreate, PayslipOut
from payroll.utils.dates import month_range

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payslips", tags=["payslips"])


# -----------------------------
# List (optional filters)
# -----------------------------
@router.get("", response_model=List[PayslipOut])
def list_payslips(
    department: Optional[str] = None,
    employment_type: Optional[str] = None,
    db: Session = Depends(get_db),
):
    dept = allowed_filter(department, ALLOWED_DEPARTMENTS)
    etype = allowed_filter(employment_type, EMPLOYMENT_TYPES)

    q = db.query(Payslip)
    if dept:
        q = q.filter(Payslip.department == dept)
    if etype:
        q = q.filter(Payslip.employment_type == etype)

    try:
        rows = q.order_by(Payslip.timestamp.desc()).all()
    except SQLAlchemyError as exc:
        logger.exception("Failed to list payslips (department=%r employment_type=%r)", department, employment_type)
        raise classify_db_error(exc) from exc

    logger.info("Listed %d payslips (department=%s employment_type=%s)", len(rows), dept, etype)
    return rows


# -----------------------------
# Single lookup: employee + YYYY-MM
# -----------------------------
@router.get("/{employee_id}/{month}", response_model=PayslipOut)
def get_payslip(employee_id: str, month: str, db: Session = Depends(get_db)):
    start, end = month_range(month)
    if start is None:
        # an unparseable month matches nothing
        logger.info("Unparseable month %r for employee %s", month, employee_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payslip not found")

    try:
        row = (
            db.query(Payslip)
            .filter(
                Payslip.employee_id == employee_id,
                Payslip.timestamp >= start,
                Payslip.timestamp < end,
            )
            .first()
        )
    except SQLAlchemyError as exc:
        logger.exception("Failed to fetch payslip for %s / %s", employee_id, month)
        raise classify_db_error(exc) from exc

    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payslip not found")
    return row


# -----------------------------
# Create
# -----------------------------
@router.post("", response_model=PayslipOut, status_code=status.HTTP_201_CREATED)
def create_payslip(body: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    # enumeration checks come before any field typing errors
    check_enumerations(body)
    try:
        payload = PayslipCreate.model_validate(body)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc
    validate_payslip(payload)

    slip = Payslip(
        employee_name=payload.employee_name,
        employee_id=payload.employee_id,
        department=payload.department,
        employment_type=payload.employment_type,
        working_days=payload.working_days,
        date_of_joining=payload.date_of_joining,
        bank_details=payload.bank_details,
        government_ids=payload.government_ids,
        earnings=payload.earnings,
        deductions=payload.deductions,
        totals=payload.totals,
        timestamp=payload.timestamp,
    )
    try:
        db.add(slip)
        db.commit()
        db.refresh(slip)
    except SQLAlchemyError as exc:
        db.rollback()
        error = classify_db_error(exc)
        logger.exception("Failed to create payslip for %s at %s (%s)",
                         payload.employee_id, payload.timestamp.isoformat(), type(error).__name__)
        raise error from exc

    logger.info("Created payslip id=%s for employee %s at %s", slip.id, slip.employee_id, payload.timestamp.isoformat())
    return slip
