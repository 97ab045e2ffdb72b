# payroll/schemas/payslip_schema.py
from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from payroll.utils.dates import as_utc


class PayslipCreate(BaseModel):
    """Request body for POST /api/payslips (camelCase on the wire)."""

    employee_name: str = Field(alias="employeeName")
    employee_id: str = Field(alias="employeeId")
    department: str
    employment_type: str = Field(alias="employmentType")
    working_days: int = Field(alias="workingDays")
    date_of_joining: date = Field(alias="dateOfJoining")
    # any well-formed JSON document; only null is refused (NOT NULL columns)
    bank_details: Any = Field(alias="bankDetails")
    government_ids: Any = Field(alias="governmentIds")
    earnings: Any
    deductions: Any
    totals: Any
    timestamp: datetime

    model_config = {"populate_by_name": True}

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @field_validator("bank_details", "government_ids", "earnings", "deductions", "totals")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


class PayslipOut(BaseModel):
    id: int
    employee_name: str
    employee_id: str
    department: str
    employment_type: str
    working_days: int
    date_of_joining: date
    bank_details: Any
    government_ids: Any
    earnings: Any
    deductions: Any
    totals: Any
    timestamp: datetime

    model_config = {"from_attributes": True}

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


def _as_text(v: Any) -> Optional[str]:
    # JSON ->> always yields text; sqlite's JSON_EXTRACT hands back native numbers
    if v is None:
        return None
    return str(v)


class _ReportRow(BaseModel):
    employee_name: str
    employee_id: str

    model_config = {"from_attributes": True}


class PFRecord(_ReportRow):
    pf_number: Optional[str] = None
    pf_amount: Optional[str] = None

    @field_validator("pf_number", "pf_amount", mode="before")
    @classmethod
    def _text(cls, v):
        return _as_text(v)


class ESICRecord(_ReportRow):
    esic_number: Optional[str] = None
    esic_amount: Optional[str] = None

    @field_validator("esic_number", "esic_amount", mode="before")
    @classmethod
    def _text(cls, v):
        return _as_text(v)


class TaxRecord(_ReportRow):
    pan_number: Optional[str] = None
    gross_income: Optional[str] = None
    tax_deduction: Optional[str] = None

    @field_validator("pan_number", "gross_income", "tax_deduction", mode="before")
    @classmethod
    def _text(cls, v):
        return _as_text(v)
