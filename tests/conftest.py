import pytest
from fastapi.testclient import TestClient

from payroll.config import Settings
from payroll.main import create_app


def make_payload(**overrides):
    payload = {
        "employeeName": "Asha Verma",
        "employeeId": "EMP0001",
        "department": "IT",
        "employmentType": "Full-time",
        "workingDays": 22,
        "dateOfJoining": "2021-06-01",
        "bankDetails": {"accountNumber": "001234567890", "ifscCode": "HDFC0000123", "bankName": "HDFC"},
        "governmentIds": {"pfNumber": "MH/BAN/0012345", "esicNumber": "3100123456", "panNumber": "ABCDE1234F"},
        "earnings": {"basic": 30000, "hra": 12000, "specialAllowance": 8000},
        "deductions": {"pf": 1800, "healthInsurance": 375, "incomeTaxDeduction": 2500, "professionalTax": 200},
        "totals": {"totalEarnings": 50000, "totalDeductions": 4875, "netPay": 45125},
        "timestamp": "2024-03-15T00:00:00Z",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def payload():
    return make_payload


@pytest.fixture
def app():
    return create_app(Settings(database_url="sqlite://", log_level="WARNING"))


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def create(client):
    def _create(**overrides):
        resp = client.post("/api/payslips", json=make_payload(**overrides))
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _create
