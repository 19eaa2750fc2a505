"""Shared fixtures for content inventory tests."""

import json
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from config.settings import Settings
from inventory.persistence import JsonFileBackend, RecordStore


class FixedClock:
    """Clock returning a settable time."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 6, 10, 9, 30, 0))


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def public_dir(tmp_path):
    path = tmp_path / "public"
    path.mkdir()
    (path / "index.html").write_text("<h1>Content Inventory</h1>", encoding="utf-8")
    return path


@pytest.fixture
def store(data_dir, clock):
    return RecordStore(JsonFileBackend(data_dir), clock=clock)


@pytest.fixture
def write_entity(data_dir):
    def _write(name: str, records) -> None:
        (data_dir / f"{name}.json").write_text(json.dumps(records), encoding="utf-8")
    return _write


@pytest.fixture
def read_entity(data_dir):
    def _read(name: str):
        return json.loads((data_dir / f"{name}.json").read_text(encoding="utf-8"))
    return _read


@pytest.fixture
def client(store, data_dir, public_dir):
    app_settings = Settings(data_dir=data_dir, public_dir=public_dir, tracing_enabled=True)
    app = create_app(store=store, app_settings=app_settings)
    with TestClient(app) as test_client:
        yield test_client
