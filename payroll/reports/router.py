# payroll/reports/router.py
"""
Monthly compliance views: provident fund, ESIC (health insurance) and
income tax. Each projects a few keys out of the JSON documents of the
payslips whose timestamp falls in the requested month.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from payroll.database import get_db
from payroll.errors import classify_db_error
from payroll.payslips.models import Payslip, ALLOWED_DEPARTMENTS
from payroll.payslips.validation import allowed_filter
from payroll.schemas.payslip_schema import PFRecord, ESICRecord, TaxRecord
from payroll.utils.dates import month_range

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["reports"])


def _monthly_rows(db: Session, report: str, columns, month: str, department: Optional[str]):
    start, end = month_range(month)
    if start is None:
        logger.info("%s report: unparseable month %r, no rows", report, month)
        return []

    q = db.query(Payslip.employee_name, Payslip.employee_id, *columns).filter(
        Payslip.timestamp >= start,
        Payslip.timestamp < end,
    )
    dept = allowed_filter(department, ALLOWED_DEPARTMENTS)
    if dept:
        q = q.filter(Payslip.department == dept)

    try:
        rows = q.all()
    except SQLAlchemyError as exc:
        logger.exception("%s report failed for %s (department=%r)", report, month, department)
        raise classify_db_error(exc) from exc

    logger.info("%s report for %s (department=%s): %d rows", report, month, dept, len(rows))
    return [dict(r._mapping) for r in rows]


@router.get("/pf-records/{month}", response_model=List[PFRecord])
def pf_records(month: str, department: Optional[str] = None, db: Session = Depends(get_db)):
    return _monthly_rows(db, "PF", [
        Payslip.government_ids["pfNumber"].as_string().label("pf_number"),
        Payslip.deductions["pf"].as_string().label("pf_amount"),
    ], month, department)


@router.get("/esic-records/{month}", response_model=List[ESICRecord])
def esic_records(month: str, department: Optional[str] = None, db: Session = Depends(get_db)):
    return _monthly_rows(db, "ESIC", [
        Payslip.government_ids["esicNumber"].as_string().label("esic_number"),
        Payslip.deductions["healthInsurance"].as_string().label("esic_amount"),
    ], month, department)


@router.get("/tax-records/{month}", response_model=List[TaxRecord])
def tax_records(month: str, department: Optional[str] = None, db: Session = Depends(get_db)):
    return _monthly_rows(db, "Tax", [
        Payslip.government_ids["panNumber"].as_string().label("pan_number"),
        Payslip.totals["totalEarnings"].as_string().label("gross_income"),
        Payslip.deductions["incomeTaxDeduction"].as_string().label("tax_deduction"),
    ], month, department)
