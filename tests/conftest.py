from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.teacher_timesheet.teacher_timesheet.main import create_app
from src.teacher_timesheet.teacher_timesheet.storage.memory_storage import InMemoryStorage


@pytest.fixture
def fixed_now():
    return datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def app(storage):
    app = create_app("config.testing", storage=storage)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    client = app.test_client()
    resp = client.post("/api/settings/setup-pin", json={"pin": "1234"})
    assert resp.status_code == 200
    resp = client.post("/api/auth/validate-pin", json={"pin": "1234"})
    assert resp.status_code == 200
    return client
