from __future__ import annotations

from datetime import date, datetime

import pytest
from flask import Flask

from src.toil_system.toil_system.container import build_container
from src.toil_system.toil_system.core.exceptions import LockUnavailable
from src.toil_system.toil_system.toil.controller import register

SATURDAY = date(2026, 2, 7)


@pytest.fixture
def container():
    return build_container(backend="memory")


@pytest.fixture
def client(container):
    app = Flask(__name__)
    app.config["TESTING"] = True
    register(app, container)
    return app.test_client()


def _weekend_shift(container, employee_id: int = 5) -> int:
    return container.attendance_repo.add_interval(
        employee_id=employee_id,
        work_date=SATURDAY,
        check_in_time=datetime(2026, 2, 7, 9, 0),
        check_out_time=datetime(2026, 2, 7, 14, 0),
    )


def test_process_then_list_entries(client, container):
    interval_id = _weekend_shift(container)

    resp = client.post(f"/api/toil/attendance/{interval_id}/process")
    assert resp.status_code == 200
    assert resp.get_json()["entry"]["hours_earned"] == "5.00"

    resp = client.get("/api/toil/5/entries")
    entries = resp.get_json()["entries"]
    assert len(entries) == 1
    assert entries[0]["source_interval_id"] == interval_id
    assert entries[0]["hours_remaining"] == "5.00"


def test_process_unknown_interval_returns_null_entry(client):
    resp = client.post("/api/toil/attendance/404/process")
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True, "entry": None}


def test_use_hours_distinguishes_invalid_and_insufficient(client, container):
    client.post(f"/api/toil/attendance/{_weekend_shift(container)}/process")

    bad = client.post("/api/toil/5/use", json={"hours": -1})
    assert bad.status_code == 400
    assert bad.get_json()["success"] is False

    missing = client.post("/api/toil/5/use", json={})
    assert missing.status_code == 400

    short = client.post("/api/toil/5/use", json={"hours": 6})
    assert short.status_code == 409
    assert short.get_json()["status"] == "insufficient_balance"

    ok = client.post("/api/toil/5/use", json={"hours": "1.5"})
    assert ok.status_code == 200
    body = ok.get_json()
    assert body["success"] is True
    assert body["hours_deducted"] == "1.5"
    assert body["hours_available"] == "3.50"


def test_balance_endpoint(client, container):
    client.post(f"/api/toil/attendance/{_weekend_shift(container)}/process")

    resp = client.get("/api/toil/5/balance")

    assert resp.status_code == 200
    balance = resp.get_json()["balance"]
    assert balance["employee_id"] == 5
    assert set(balance) == {"employee_id", "total_hours", "expiring_hours", "expiring_date"}


def test_expire_endpoint_accepts_explicit_now(client, container):
    client.post(f"/api/toil/attendance/{_weekend_shift(container)}/process")

    resp = client.post("/api/toil/expire", json={"now": "2026-03-01T00:00:00"})
    assert resp.get_json() == {"success": True, "expired": 1}

    again = client.post("/api/toil/expire", json={"now": "2026-03-01T00:00:00"})
    assert again.get_json()["expired"] == 0

    bad = client.post("/api/toil/expire", json={"now": "yesterday"})
    assert bad.status_code == 400


def test_eligibility_endpoint(client):
    resp = client.get("/api/toil/5/eligibility?date=2026-02-07")
    body = resp.get_json()["eligibility"]
    assert body["is_weekend"] is True
    assert body["can_attend"] is True

    assert client.get("/api/toil/5/eligibility?date=07/02/2026").status_code == 400


def test_expire_endpoint_accepts_offset_timestamps(client, container):
    client.post(f"/api/toil/attendance/{_weekend_shift(container)}/process")

    resp = client.post("/api/toil/expire", json={"now": "2026-03-10T00:00:00+00:00"})
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True, "expired": 1}

    again = client.post("/api/toil/expire", json={"now": "2026-03-10T00:00:00Z"})
    assert again.status_code == 200
    assert again.get_json()["expired"] == 0


def test_expire_endpoint_rejects_future_now(client, container):
    client.post(f"/api/toil/attendance/{_weekend_shift(container)}/process")

    resp = client.post("/api/toil/expire", json={"now": "2099-01-01T00:00:00"})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    assert [e.is_expired for e in container.toil_ledger.list_entries(5)] == [False]


def test_busy_lock_returns_503(client, container, monkeypatch):
    def busy(employee_id, hours):
        raise LockUnavailable("held elsewhere")

    monkeypatch.setattr(container.toil_service, "use_toil_hours", busy)

    resp = client.post("/api/toil/5/use", json={"hours": 1})

    assert resp.status_code == 503
    assert resp.get_json() == {"success": False, "message": "Service busy, please retry"}
