from __future__ import annotations

from datetime import date, timedelta

import mysql.connector
import pytest

from src.payroll_system.payroll_system.main import create_app


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, user_id, role):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


def _full_week(attendance_repo):
    for i in range(6):
        attendance_repo.add("E001", date(2025, 3, 10) + timedelta(days=i))


def test_requires_login(client):
    resp = client.post("/api/payroll/calculate", json={})
    assert resp.status_code == 401


def test_employees_cannot_run_payroll(client):
    _login(client, "E001", "employee")
    resp = client.post("/api/payroll/calculate", json={"employee_id": "E001"})
    assert resp.status_code == 403


def test_calculate_returns_preview(client, attendance_repo, payslips_repo):
    _full_week(attendance_repo)
    _login(client, "admin", "admin")

    resp = client.post(
        "/api/payroll/calculate",
        json={"employee_id": "E001", "period_type": "weekly", "period_start": "2025-03-10"},
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["period"]["end"] == "2025-03-16"
    assert body["summary"]["payable_days"] == 6
    assert body["breakdown"]["gross_pay"] == "3060.00"
    assert body["breakdown"]["net_pay"] == "2310.00"
    assert body["locked"] is False
    assert len(payslips_repo) == 0


def test_misaligned_period_start_is_rejected(client):
    _login(client, "admin", "admin")
    resp = client.post(
        "/api/payroll/calculate",
        json={"employee_id": "E001", "period_type": "weekly", "period_start": "2025-03-11"},
    )
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "period_start"


def test_zero_attendance_confirm_round_trip(client, container, payslips_repo):
    events = []
    container.change_feed.subscribe("payslips", events.append)
    _login(client, "admin", "admin")
    payload = {"employee_id": "E001", "period_type": "weekly", "period_start": "2025-03-10"}

    resp = client.post("/api/payroll/confirm", json=payload)
    assert resp.status_code == 409
    assert resp.get_json()["confirmation_required"] is True
    assert events == []

    resp = client.post("/api/payroll/confirm", json={**payload, "acknowledge_zero": True})
    assert resp.status_code == 201
    assert resp.get_json()["net_pay"] == "0.00"
    assert [e.action for e in events] == ["upsert"]


def test_approved_payslip_blocks_recompute(client, attendance_repo):
    _full_week(attendance_repo)
    _login(client, "admin", "admin")
    payload = {"employee_id": "E001", "period_type": "weekly", "period_start": "2025-03-10"}

    payslip_id = client.post("/api/payroll/confirm", json=payload).get_json()["payslip_id"]
    assert client.post(f"/api/payslips/{payslip_id}/approve").get_json()["status"] == "Approved"

    resp = client.post("/api/payroll/confirm", json=payload)
    assert resp.status_code == 409

    assert client.post(f"/api/payslips/{payslip_id}/reject").status_code == 200
    assert client.post("/api/payroll/confirm", json=payload).status_code == 201


def test_employee_sees_own_payslips(client, attendance_repo):
    _full_week(attendance_repo)
    _login(client, "admin", "admin")
    client.post(
        "/api/payroll/confirm",
        json={"employee_id": "E001", "period_type": "weekly", "period_start": "2025-03-10"},
    )

    _login(client, "E001", "employee")
    resp = client.get("/api/me/payslips?year=2025&month=3")

    assert resp.status_code == 200
    assert [s["period_start"] for s in resp.get_json()] == ["2025-03-10"]


def test_periods_endpoint(client):
    _login(client, "admin", "admin")
    resp = client.get("/api/payroll/periods?type=monthly")
    assert resp.status_code == 200
    assert len(resp.get_json()) == 8
    assert resp.get_json()[0]["start"].endswith("-01")


def test_punch_and_leave_flow(client):
    _login(client, "E001", "employee")
    assert client.post("/api/attendance/time-in").status_code == 200
    assert client.get("/api/attendance/me").get_json()["today"] is not None

    resp = client.post(
        "/api/leaves",
        json={"leave_type": "Vacation", "start_date": "2025-04-01", "end_date": "2025-04-02", "reason": "Trip"},
    )
    assert resp.status_code == 201
    leave_id = resp.get_json()["leave_id"]

    assert client.post(f"/api/leaves/{leave_id}/approve").status_code == 403

    _login(client, "admin", "admin")
    assert client.post(f"/api/leaves/{leave_id}/approve").status_code == 200
    assert client.post(f"/api/leaves/{leave_id}/approve").status_code == 409


def test_storage_failure_maps_to_503(client, container, monkeypatch):
    def boom(**kwargs):
        raise mysql.connector.Error("connection lost")

    monkeypatch.setattr(container.payroll_service, "list_payslips", boom)
    _login(client, "admin", "admin")

    resp = client.get("/api/payslips")
    assert resp.status_code == 503


def test_archive_endpoint(client, employees_repo):
    _login(client, "admin", "admin")
    assert client.post("/api/employees/E001/archive").status_code == 200
    assert client.post("/api/employees/E001/archive").status_code == 409
    assert client.get("/api/employees").get_json() == []
    assert client.get("/api/employees/archived").get_json()[0]["employee_id"] == "E001"
