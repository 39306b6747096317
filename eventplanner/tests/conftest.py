import os
import sys
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

import pytest
from fastapi.testclient import TestClient

import eventplanner.main as main
from eventplanner.config import clear_settings_cache


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("STORE_BACKEND", "memory")
    clear_settings_cache()

    with TestClient(main.app) as c:
        yield c
    clear_settings_cache()


@pytest.fixture
def file_client(monkeypatch, tmp_path):
    monkeypatch.setenv("STORE_BACKEND", "file")
    monkeypatch.setenv("STORE_PATH", str(tmp_path / "events.json"))
    clear_settings_cache()

    with TestClient(main.app) as c:
        yield c
    clear_settings_cache()


@pytest.fixture
def standup(client):
    res = client.post(
        "/api/events",
        json={"name": "Standup", "author": "alice", "dates": ["2024-01-01", "2024-01-02"]},
    )
    assert res.status_code == 201
    return res.json()
