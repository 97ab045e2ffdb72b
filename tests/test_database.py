from datetime import date, datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from payroll.config import Settings
from payroll.database import create_db_engine, init_db
from payroll.main import create_app
from payroll.payslips.models import Payslip

UNREACHABLE = "sqlite:////nonexistent-dir/for-sure/payroll.db"


def test_init_db_is_idempotent():
    engine = create_db_engine("sqlite://")
    assert init_db(engine) is True
    assert init_db(engine) is True
    insp = inspect(engine)
    assert "payslips" in insp.get_table_names()
    uniques = insp.get_unique_constraints("payslips")
    assert any(set(u["column_names"]) == {"employee_id", "timestamp"} for u in uniques)


def test_init_db_failure_is_reported_not_raised():
    engine = create_db_engine(UNREACHABLE)
    assert init_db(engine) is False


def test_service_starts_without_schema_and_answers_500():
    app = create_app(Settings(database_url=UNREACHABLE, log_level="CRITICAL"))
    with TestClient(app) as client:
        resp = client.get("/api/payslips")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Internal server error"}
        assert client.get("/").status_code == 200


def _slip(**overrides):
    values = dict(
        employee_name="Ravi Kumar", employee_id="EMP0100", department="HR",
        employment_type="Contract", working_days=20, date_of_joining=date(2022, 1, 3),
        bank_details={}, government_ids={}, earnings={}, deductions={}, totals={},
        timestamp=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )
    values.update(overrides)
    return Payslip(**values)


@pytest.mark.parametrize("days", [0, 32])
def test_working_days_check_enforced_by_store(client, app, days):
    db = app.state.session_factory()
    try:
        db.add(_slip(working_days=days))
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()
    finally:
        db.close()


def test_direct_insert_visible_through_api(client, app):
    db = app.state.session_factory()
    try:
        db.add(_slip())
        db.commit()
    finally:
        db.close()
    resp = client.get("/api/payslips/EMP0100/2024-05")
    assert resp.status_code == 200
    assert resp.json()["employment_type"] == "Contract"
