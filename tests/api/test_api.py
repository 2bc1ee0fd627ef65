from __future__ import annotations

import io
import json

import pandas as pd
import pytest

from src.timesheet_system.timesheet_system.main import create_app


@pytest.fixture
def data_dir(tmp_path):
    entries = [
        {"id": "entry_a", "userId": "emp001", "date": "2024-01-03", "startTime": "09:00",
         "endTime": "10:00", "durationMinutes": 60, "activity": "Inventory"},
        {"id": "entry_b", "userId": "emp001", "date": "2024-01-03", "startTime": "14:00",
         "endTime": "14:30", "durationMinutes": 30, "activity": "Shelving"},
        {"id": "entry_c", "userId": "emp002", "date": "2024-02-05", "startTime": "08:00",
         "endTime": "12:00", "durationMinutes": 240, "activity": "Deliveries"},
    ]
    (tmp_path / "work-entries.data.json").write_text(json.dumps(entries), encoding="utf-8")
    return tmp_path


@pytest.fixture
def app(monkeypatch, data_dir):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app({"DATA_DIR": str(data_dir)})


def _login(app, email, password):
    client = app.test_client()
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return client


@pytest.fixture
def employee(app):
    return _login(app, "employee1@example.com", "password1")


@pytest.fixture
def admin(app):
    return _login(app, "admin", "admin")


def test_login_failure_is_401(app):
    resp = app.test_client().post("/api/auth/login", json={"email": "admin", "password": "nope"})
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_guards(app, employee):
    assert app.test_client().get("/api/auth/me").status_code == 401
    assert employee.get("/api/admin/entries").status_code == 403
    assert employee.get("/api/auth/me").get_json()["user"]["id"] == "emp001"


def test_clock_in_and_out(employee):
    started = employee.post("/api/work/start", json={"activity": "Stocktake"})
    assert started.status_code == 201
    entry = started.get_json()["entry"]
    assert "endTime" not in entry

    assert employee.get("/api/work/open").get_json()["entry"]["id"] == entry["id"]

    ended = employee.post(f"/api/work/{entry['id']}/end", json={"activity": "Stocktake done"})
    assert ended.status_code == 200
    assert ended.get_json()["entry"]["durationMinutes"] >= 0

    again = employee.post(f"/api/work/{entry['id']}/end", json={"activity": "x"})
    assert again.status_code == 404
    assert employee.get("/api/work/open").get_json()["entry"] is None


def test_start_requires_activity_and_valid_photo(employee):
    assert employee.post("/api/work/start", json={"activity": "  "}).status_code == 400
    bad_photo = employee.post("/api/work/start", json={"activity": "A", "photo": "data:image/png;base64,xx"})
    assert bad_photo.status_code == 400


def test_history_by_month(employee):
    resp = employee.get("/api/work/history?period=month&value=2024-01&locale=it")

    history = resp.get_json()["history"]
    assert history["totalMinutes"] == 90
    assert history["periodLabel"] == "gennaio 2024"
    assert [d["date"] for d in history["days"]] == ["2024-01-03"]
    assert employee.get("/api/work/history?period=week").status_code == 400


def test_wage_report(admin):
    resp = admin.post(
        "/api/admin/wage-report",
        json={"employee": "emp001", "month": "2024-01", "rates": {"emp001": {"euros": "10", "cents": "50"}}},
    )

    report = resp.get_json()["report"]
    assert resp.status_code == 200
    assert len(report["rows"]) == 1
    row = report["rows"][0]
    assert row["employeeName"] == "John Doe"
    assert row["overall"]["totalMinutes"] == 90
    assert row["overall"]["wage"] == 15.75
    assert row["monthly"]["formattedWage"] == "€15.75"
    assert [m["value"] for m in report["availableMonths"]] == ["2024-02", "2024-01"]


def test_wage_report_defaults_and_export(admin):
    report = admin.post("/api/admin/wage-report", json={"employee": "all", "month": "all"}).get_json()["report"]
    assert [r["employeeName"] for r in report["rows"]] == ["Jane Smith", "John Doe"]
    assert report["rows"][0]["overall"]["wage"] == 40.0
    assert report["rows"][0]["monthly"] is None

    resp = admin.post("/api/admin/wage-report/export", json={})
    assert resp.status_code == 200
    assert resp.headers["Content-Disposition"].startswith("attachment")
    sheets = pd.read_excel(io.BytesIO(resp.data), sheet_name=None, engine="openpyxl")
    assert list(sheets["Wages"]["Employee"]) == ["Jane Smith", "John Doe"]


def test_employee_crud(admin):
    created = admin.post("/api/admin/employees", json={"name": "Anna", "email": "anna@example.com"})
    assert created.status_code == 201
    body = created.get_json()
    emp_id = body["employee"]["id"]
    assert body["initialPassword"].startswith("defaultPass")
    assert "passwordHash" not in body["employee"]

    updated = admin.put(f"/api/admin/employees/{emp_id}", json={"phoneNumber": "555-0100"})
    assert updated.get_json()["employee"]["phoneNumber"] == "555-0100"

    names = [e["name"] for e in admin.get("/api/admin/employees/filter").get_json()["employees"]]
    assert names == ["Anna", "Jane Smith", "John Doe"]

    assert admin.put(f"/api/admin/employees/{emp_id}", json={"role": "admin"}).status_code == 400
    assert admin.get("/api/admin/employees/admin001").status_code == 404
    assert admin.delete(f"/api/admin/employees/{emp_id}").status_code == 200
    assert admin.get(f"/api/admin/employees/{emp_id}").status_code == 404


def test_admin_credentials_flow(app, admin):
    started = admin.post("/api/admin/profile/initiate", json={"newUsername": "boss"})
    token = started.get_json()["token"]

    assert admin.post("/api/admin/profile/confirm", json={"token": "wrong"}).status_code == 400
    done = admin.post("/api/admin/profile/confirm", json={"token": token})
    assert done.status_code == 200
    assert done.get_json()["user"]["email"] == "boss"

    assert admin.post("/api/admin/profile/confirm", json={"token": token}).status_code == 404
    _login(app, "boss", "admin")


def test_logout_discards_pending_change(app, admin):
    token = admin.post("/api/admin/profile/initiate", json={"newPassword": "changed"}).get_json()["token"]
    admin.post("/api/auth/logout")

    again = _login(app, "admin", "admin")
    assert again.post("/api/admin/profile/confirm", json={"token": token}).status_code == 404


def test_history_rejects_bad_period_values(employee):
    assert employee.get("/api/work/history?period=month&value=2024-13").status_code == 400
    assert employee.get("/api/work/history?period=year&value=24").status_code == 400
    assert employee.get("/api/work/history?period=all").status_code == 200


def test_missing_records_share_the_error_body(admin):
    missing = admin.get("/api/admin/entries/does-not-exist")
    assert missing.status_code == 404
    assert missing.get_json() == {"success": False, "message": "Work entry not found."}

    gone = admin.delete("/api/admin/employees/nobody")
    assert gone.status_code == 404
    assert gone.get_json() == {"success": False, "message": "Employee not found."}

    own = admin.delete("/api/admin/employees/admin001")
    assert own.status_code == 400
    assert own.get_json()["message"] == "You cannot delete your own account."
