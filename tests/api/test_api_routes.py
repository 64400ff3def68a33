from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.teacher_timesheet.teacher_timesheet.main import create_app


def _create_teacher(client, **overrides):
    payload = {"name": "Ada", "hourlyRate": "20.00", "maxBillableHours": "8"}
    payload.update(overrides)
    resp = client.post("/api/teachers", json=payload)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "storage": "memory"}


def test_pin_setup_flow(client):
    assert client.get("/api/settings/pin-setup").get_json() == {"hasPin": False}

    assert client.post("/api/settings/setup-pin", json={"pin": "12"}).status_code == 400
    assert client.post("/api/settings/setup-pin", json={"pin": "1234"}).status_code == 200
    assert client.get("/api/settings/pin-setup").get_json() == {"hasPin": True}

    again = client.post("/api/settings/setup-pin", json={"pin": "5678"})
    assert again.status_code == 400
    assert again.get_json()["message"] == "PIN already set up"


def test_validate_pin_and_session(client):
    client.post("/api/settings/setup-pin", json={"pin": "1234"})
    assert client.get("/api/auth/check-admin").get_json() == {"isAdmin": False}

    assert client.post("/api/auth/validate-pin", json={"pin": "0000"}).status_code == 401
    assert client.post("/api/auth/validate-pin", json={"pin": "1"}).status_code == 400
    assert client.post("/api/auth/validate-pin", data="not json").status_code == 400
    assert client.get("/api/auth/check-admin").get_json() == {"isAdmin": False}

    assert client.post("/api/auth/validate-pin", json={"pin": "1234"}).status_code == 200
    assert client.get("/api/auth/check-admin").get_json() == {"isAdmin": True}

    assert client.post("/api/auth/logout").status_code == 200
    assert client.get("/api/auth/check-admin").get_json() == {"isAdmin": False}


def test_admin_routes_require_session(client):
    assert client.post("/api/teachers", json={"name": "A", "hourlyRate": "1", "maxBillableHours": "1"}).status_code == 403
    assert client.patch("/api/teachers/x", json={"name": "B"}).status_code == 403
    assert client.delete("/api/teachers/x").status_code == 403
    assert client.get("/api/export/timesheet").status_code == 403
    assert client.get("/api/dashboard/stats").status_code == 403
    assert client.get("/api/teachers").status_code == 200


def test_teacher_crud(admin_client):
    teacher = _create_teacher(admin_client)
    assert teacher["hourlyRate"] == "20.00"
    assert teacher["maxBillableHours"] == "8.00"
    assert teacher["isCheckedIn"] is False
    assert teacher["currentCheckInTime"] is None

    bad = admin_client.post("/api/teachers", json={"name": "", "hourlyRate": "20", "maxBillableHours": "8"})
    assert bad.status_code == 400

    patched = admin_client.patch(
        f"/api/teachers/{teacher['id']}", json={"hourlyRate": 22.5, "isCheckedIn": True, "id": "hijack"}
    )
    assert patched.status_code == 200
    body = patched.get_json()
    assert body["hourlyRate"] == "22.50"
    assert body["id"] == teacher["id"]
    assert body["isCheckedIn"] is False

    assert admin_client.patch("/api/teachers/missing", json={"name": "X"}).status_code == 404
    assert admin_client.delete(f"/api/teachers/{teacher['id']}").status_code == 200
    assert admin_client.delete(f"/api/teachers/{teacher['id']}").status_code == 404
    assert admin_client.get("/api/teachers").get_json() == []


class SteppingClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now


def test_check_in_and_out_over_http(storage):
    clock = SteppingClock(datetime(2025, 9, 1, 7, 30, tzinfo=timezone.utc))
    app = create_app("config.testing", storage=storage, clock=clock)
    admin = app.test_client()
    admin.post("/api/settings/setup-pin", json={"pin": "1234"})
    admin.post("/api/auth/validate-pin", json={"pin": "1234"})
    teacher = _create_teacher(admin, hourlyRate="15.50", maxBillableHours="6")
    tid = teacher["id"]
    kiosk = app.test_client()

    resp = kiosk.post(f"/api/teachers/{tid}/checkin")
    assert resp.status_code == 200
    assert resp.get_json()["isCheckedIn"] is True
    assert resp.get_json()["currentCheckInTime"] == "2025-09-01T07:30:00+00:00"

    again = kiosk.post(f"/api/teachers/{tid}/checkin")
    assert again.status_code == 400
    assert again.get_json()["message"] == "Teacher already checked in"

    clock.now += timedelta(hours=4, minutes=30)
    resp = kiosk.post(f"/api/teachers/{tid}/checkout")
    assert resp.status_code == 200
    assert resp.get_json()["isCheckedIn"] is False

    assert kiosk.post(f"/api/teachers/{tid}/checkout").status_code == 400
    assert kiosk.post("/api/teachers/missing/checkin").status_code == 404
    assert kiosk.post("/api/teachers/missing/checkout").status_code == 404

    (entry,) = kiosk.get(f"/api/time-entries?teacherId={tid}").get_json()
    assert entry["teacherId"] == tid
    assert entry["date"] == "2025-09-01"
    assert entry["checkOutTime"] == "2025-09-01T12:00:00+00:00"
    assert Decimal(entry["hoursWorked"]) == Decimal("4.5")
    assert Decimal(entry["billableHours"]) == Decimal("4.5")
    assert entry["pay"] == "69.75"


def test_time_entry_filters(admin_client, storage):
    a = _create_teacher(admin_client, name="A")
    b = _create_teacher(admin_client, name="B")
    t0 = datetime(2025, 4, 1, 9, tzinfo=timezone.utc)
    storage.create_time_entry(teacher_id=a["id"], date="2025-04-01", check_in_time=t0)
    storage.create_time_entry(teacher_id=b["id"], date="2025-04-01", check_in_time=t0)
    storage.create_time_entry(teacher_id=a["id"], date="2025-04-02", check_in_time=t0 + timedelta(days=1))

    assert len(admin_client.get("/api/time-entries").get_json()) == 3
    assert len(admin_client.get("/api/time-entries?date=2025-04-01").get_json()) == 2
    assert len(admin_client.get(f"/api/time-entries?teacherId={a['id']}").get_json()) == 2
    # teacherId wins over date
    both = admin_client.get(f"/api/time-entries?teacherId={a['id']}&date=2025-04-01").get_json()
    assert len(both) == 2


def test_export_timesheet(admin_client, storage):
    teacher = _create_teacher(admin_client)
    start = datetime(2025, 6, 2, 8, tzinfo=timezone.utc)
    entry = storage.create_time_entry(teacher_id=teacher["id"], date="2025-06-02", check_in_time=start)
    storage.update_time_entry(
        entry.id,
        check_out_time=start + timedelta(hours=10),
        hours_worked=Decimal("10.000000"),
        billable_hours=Decimal("8.00"),
        pay=Decimal("160.00"),
    )

    rows = admin_client.get("/api/export/timesheet?month=6&year=2025").get_json()
    assert rows == [
        {
            "teacherName": "Ada",
            "date": "2025-06-02",
            "checkInTime": "2025-06-02T08:00:00+00:00",
            "checkOutTime": "2025-06-02T18:00:00+00:00",
            "hoursWorked": "10.000000",
            "billableHours": "8.00",
            "hourlyRate": "20.00",
            "pay": "160.00",
        }
    ]
    assert admin_client.get("/api/export/timesheet?month=7").get_json() == []
    assert admin_client.get("/api/export/timesheet?month=13").status_code == 400
    assert admin_client.get("/api/export/timesheet?year=abc").status_code == 400


def test_dashboard_stats_shape(admin_client):
    _create_teacher(admin_client)
    body = admin_client.get("/api/dashboard/stats").get_json()

    assert body["teacherCount"] == 1
    assert body["checkedInCount"] == 0
    assert body["teachers"][0]["name"] == "Ada"
    assert body["teachers"][0]["atLimit"] is False


def test_reset_clears_data_and_session(admin_client):
    _create_teacher(admin_client)

    assert admin_client.post("/api/settings/reset").status_code == 200

    assert admin_client.get("/api/teachers").get_json() == []
    assert admin_client.get("/api/time-entries").get_json() == []
    assert admin_client.get("/api/settings/pin-setup").get_json() == {"hasPin": False}
    assert admin_client.get("/api/auth/check-admin").get_json() == {"isAdmin": False}


def test_reset_can_require_admin(storage):
    app = create_app("config.testing", storage=storage, RESET_REQUIRES_ADMIN=True)
    client = app.test_client()
    client.post("/api/settings/setup-pin", json={"pin": "1234"})

    assert client.post("/api/settings/reset").status_code == 403
    assert client.get("/api/settings/pin-setup").get_json() == {"hasPin": True}

    client.post("/api/auth/validate-pin", json={"pin": "1234"})
    assert client.post("/api/settings/reset").status_code == 200
    assert client.get("/api/settings/pin-setup").get_json() == {"hasPin": False}


def test_pin_lockout_over_http(storage):
    app = create_app("config.testing", storage=storage, PIN_MAX_FAILED_ATTEMPTS=2)
    client = app.test_client()
    client.post("/api/settings/setup-pin", json={"pin": "1234"})

    assert client.post("/api/auth/validate-pin", json={"pin": "0000"}).status_code == 401
    assert client.post("/api/auth/validate-pin", json={"pin": "0000"}).status_code == 401
    assert client.post("/api/auth/validate-pin", json={"pin": "1234"}).status_code == 429


def test_unexpected_errors_become_500(app, client, monkeypatch):
    container = app.extensions["teacher_timesheet"]

    def boom():
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(container.teacher_service, "list_teachers", boom)

    resp = client.get("/api/teachers")
    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Internal server error"}


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert "message" in resp.get_json()


@pytest.mark.parametrize("body", [[1, 2], "pin"])
def test_non_object_body_is_rejected(client, body):
    assert client.post("/api/settings/setup-pin", json=body).status_code == 400


@pytest.mark.parametrize("rate", ["1e400", "1e25", 1e300])
def test_oversized_rate_is_a_validation_error(admin_client, rate):
    resp = admin_client.post("/api/teachers", json={"name": "Ada", "hourlyRate": rate, "maxBillableHours": "8"})

    assert resp.status_code == 400
    assert "Hourly rate" in resp.get_json()["message"]
    assert admin_client.get("/api/teachers").get_json() == []
