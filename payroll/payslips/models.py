# payroll/payslips/models.py

from sqlalchemy import (
    Column, Integer, String, Date, DateTime, JSON, CheckConstraint, UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from payroll.database import Base

ALLOWED_DEPARTMENTS = ["IT", "HR", "Finance", "Marketing", "Sales", "Operations", "Engineering"]
EMPLOYMENT_TYPES = ["Full-time", "Part-time", "Contract", "Temporary", "Intern"]

# schema-less documents; JSONB on postgres, JSON elsewhere
Document = JSON().with_variant(JSONB(), "postgresql")


class Payslip(Base):
    __tablename__ = "payslips"
    __table_args__ = (
        CheckConstraint("working_days BETWEEN 1 AND 31", name="working_days_range"),
        UniqueConstraint("employee_id", "timestamp", name="unique_employee_month"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_name = Column(String(50), nullable=False)
    employee_id = Column(String(7), nullable=False)
    department = Column(String(30), nullable=False)
    employment_type = Column(String(20), nullable=False)
    working_days = Column(Integer, nullable=False)
    date_of_joining = Column(Date, nullable=False)

    bank_details = Column(Document, nullable=False)
    government_ids = Column(Document, nullable=False)   # pfNumber / esicNumber / panNumber
    earnings = Column(Document, nullable=False)
    deductions = Column(Document, nullable=False)       # pf / healthInsurance / incomeTaxDeduction
    totals = Column(Document, nullable=False)           # totalEarnings

    # pay period the slip covers
    timestamp = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<Payslip id={self.id} employee_id={self.employee_id} timestamp={self.timestamp}>"
