import json
from unittest.mock import AsyncMock

from eventplanner import state
from eventplanner.errors import StorageError


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok", "store": "memory"}


def test_list_empty(client):
    res = client.get("/api/events")
    assert res.status_code == 200
    assert res.json() == []


def test_create_event_normalizes_dates(client):
    res = client.post(
        "/api/events",
        json={
            "name": "Retro",
            "author": "carol",
            "description": "end of sprint",
            "dates": ["2024-03-01T10:00:00Z", "2024-03-02", "2024-03-01"],
        },
    )
    assert res.status_code == 201
    body = res.json()
    assert len(body["id"]) == 10
    assert body["name"] == "Retro"
    assert body["description"] == "end of sprint"
    assert [d["date"] for d in body["dates"]] == ["2024-03-01", "2024-03-02"]
    assert body["attendees"] == []


def test_created_event_is_listed_first(client, standup):
    res = client.post(
        "/api/events",
        json={"name": "Lunch", "author": "dave", "dates": ["2024-02-01"]},
    )
    newest = res.json()

    listed = client.get("/api/events").json()
    assert [e["id"] for e in listed] == [newest["id"], standup["id"]]


def test_create_event_invalid_body_is_bad_request(client):
    res = client.post("/api/events", json={"name": "", "dates": ["not-a-date"]})
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "bad_request"
    fields = {e["field"] for e in body["context"]["errors"]}
    assert {"name", "author", "dates"} <= fields


def test_create_event_requires_dates(client):
    res = client.post("/api/events", json={"name": "x", "author": "y", "dates": []})
    assert res.status_code == 400


def test_get_event(client, standup):
    res = client.get(f"/api/events/{standup['id']}")
    assert res.status_code == 200
    assert res.json() == standup


def test_get_unknown_event_is_not_found(client):
    res = client.get("/api/events/missing")
    assert res.status_code == 404
    assert res.json()["error"] == "not_found"


def test_patch_event_merges_fields(client, standup):
    res = client.patch(
        f"/api/events/{standup['id']}",
        json={"name": "Daily standup", "id": "hijack", "attendees": [{"name": "x"}]},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["id"] == standup["id"]
    assert body["name"] == "Daily standup"
    assert body["author"] == "alice"
    assert body["attendees"] == []


def test_patch_dates_prunes_attendee_selections(client, standup):
    event_id = standup["id"]
    client.post(
        f"/api/events/{event_id}/attend",
        json={"name": "bob", "dates": [{"date": "2024-01-01"}, {"date": "2024-01-02"}]},
    )
    res = client.patch(f"/api/events/{event_id}", json={"dates": ["2024-01-02", "2024-01-05"]})
    assert res.status_code == 200
    body = res.json()
    assert [d["date"] for d in body["dates"]] == ["2024-01-02", "2024-01-05"]
    assert body["attendees"][0]["dates"] == [{"date": "2024-01-02", "available": None}]


def test_patch_empty_body_is_bad_request(client, standup):
    res = client.patch(f"/api/events/{standup['id']}", json={})
    assert res.status_code == 400
    assert res.json()["detail"] == "Request body is required"


def test_patch_unknown_event_is_not_found(client):
    res = client.patch("/api/events/missing", json={"name": "x"})
    assert res.status_code == 404


def test_delete_event(client, standup):
    res = client.delete(f"/api/events/{standup['id']}")
    assert res.status_code == 200
    assert res.json() == {"message": "Delete successful"}
    assert client.get("/api/events").json() == []
    assert client.delete(f"/api/events/{standup['id']}").status_code == 404


def test_add_dates(client, standup):
    res = client.post(
        f"/api/events/{standup['id']}/add_dates",
        json={"dates": ["2024-01-03T08:00:00", "2024-01-04"]},
    )
    assert res.status_code == 200
    assert [d["date"] for d in res.json()["dates"]] == [
        "2024-01-01",
        "2024-01-02",
        "2024-01-03",
        "2024-01-04",
    ]


def test_add_existing_date_is_rejected(client, standup):
    event_id = standup["id"]
    res = client.post(
        f"/api/events/{event_id}/add_dates",
        json={"dates": ["2024-01-05", "2024-01-02T12:00:00Z"]},
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "One or more dates already exist."

    stored = client.get(f"/api/events/{event_id}").json()
    assert [d["date"] for d in stored["dates"]] == ["2024-01-01", "2024-01-02"]


def test_delete_date_removes_it_everywhere(client, standup):
    event_id = standup["id"]
    client.post(
        f"/api/events/{event_id}/attend",
        json={"name": "bob", "dates": [{"date": "2024-01-01", "available": True}, {"date": "2024-01-02"}]},
    )
    client.post(
        f"/api/events/{event_id}/attend",
        json={"name": "eve", "dates": [{"date": "2024-01-01", "available": False}]},
    )

    res = client.delete(f"/api/events/delete/{event_id}/2024-01-01")
    assert res.status_code == 200
    assert res.json() == {"message": "Date deleted"}

    event = client.get(f"/api/events/{event_id}").json()
    assert [d["date"] for d in event["dates"]] == ["2024-01-02"]
    for attendee in event["attendees"]:
        assert all(sel["date"] != "2024-01-01" for sel in attendee["dates"])


def test_delete_date_unknown_event(client):
    res = client.delete("/api/events/delete/missing/2024-01-01")
    assert res.status_code == 404


def test_delete_date_storage_failure(client, standup, monkeypatch):
    monkeypatch.setattr(state.store, "write", AsyncMock(side_effect=StorageError()))
    res = client.delete(f"/api/events/delete/{standup['id']}/2024-01-01")
    assert res.status_code == 500
    assert res.json()["error"] == "storage_error"


def test_unknown_route_uses_error_format(client):
    res = client.get("/api/nope")
    assert res.status_code == 404
    assert res.json()["error"] == "not_found"


def test_file_backend_persists_document(file_client, tmp_path):
    res = file_client.post(
        "/api/events",
        json={"name": "Standup", "author": "alice", "dates": ["2024-01-01"]},
    )
    assert res.status_code == 201

    stored = json.loads((tmp_path / "events.json").read_text())
    assert stored == [
        {
            "id": res.json()["id"],
            "name": "Standup",
            "author": "alice",
            "description": None,
            "dates": ["2024-01-01"],
            "attendees": [],
        }
    ]
