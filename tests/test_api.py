from __future__ import annotations

import io
from pathlib import Path

import pytest

from innhopp_console import create_app
from innhopp_console.api import routes
from innhopp_console.config import StoragePaths


class FakeJob:
    def __init__(self, job_id: str):
        self.id = job_id

    def get_status(self, refresh: bool = True) -> str:
        return "queued"


class FakeQueue:
    name = "test-exports"
    connection = None

    def __init__(self) -> None:
        self.enqueued: list[dict] = []

    def enqueue(self, func, *, kwargs, job_id, meta):
        self.enqueued.append({"func": func, "kwargs": kwargs, "job_id": job_id, "meta": meta})
        return FakeJob(job_id)


@pytest.fixture()
def queue() -> FakeQueue:
    return FakeQueue()


@pytest.fixture()
def client(queue: FakeQueue, tmp_path: Path, monkeypatch):
    storage = StoragePaths(uploads=tmp_path / "uploads", outputs=tmp_path / "outputs")
    monkeypatch.setattr(routes, "STORAGE_PATHS", storage)
    app = create_app(queue=queue)
    app.config["TESTING"] = True
    return app.test_client()


def test_health(client):
    response = client.get("/health")
    assert response.get_json() == {"status": "healthy", "queue": "test-exports"}


def test_parse_event_time(client):
    response = client.post(
        "/api/event-time/parse",
        json={"value": "2024-06-05T09:00+02:00", "options": {"hour": "2-digit", "minute": "2-digit"}},
    )

    body = response.get_json()
    assert response.status_code == 200
    assert body["valid"] is True
    assert body["parts"] == {"year": 2024, "month": 6, "day": 5, "hour": 9, "minute": 0, "second": 0}
    assert body["iso"] == "2024-06-05T09:00:00.000Z"
    assert body["datetime_input"] == "2024-06-05T09:00"
    assert body["time"] == {"hour": 9, "minute": 0}
    assert body["formatted"] == "09:00"


def test_parse_event_time_invalid_value(client):
    response = client.post("/api/event-time/parse", json={"value": "next tuesday"})
    assert response.status_code == 200
    assert response.get_json() == {"value": "next tuesday", "valid": False}


def test_parse_event_time_requires_json_object(client):
    response = client.post("/api/event-time/parse", data="nope", content_type="text/plain")
    assert response.status_code == 400
    assert response.get_json()["details"] == {"field": "body"}


def test_parse_coordinates(client):
    response = client.post("/api/coordinates/parse", json={"value": "73°42'59.7\"W 11°14'30.0\"N"})

    body = response.get_json()
    assert body["valid"] is True
    assert body["lat"] == pytest.approx(11.241666, abs=1e-4)
    assert body["lon"] == pytest.approx(-73.71658, abs=1e-4)
    assert body["dms"] == "11°14'30.0\"N 73°42'59.7\"W"


def test_parse_coordinates_ambiguous(client):
    value = "11°14'30.0\"N 12°00'00\"N"
    assert client.post("/api/coordinates/parse", json={"value": value}).get_json()["valid"] is False
    permissive = client.post("/api/coordinates/parse", json={"value": value, "allow_ambiguous": True})
    assert permissive.get_json()["valid"] is True


def test_coordinates_distance(client):
    response = client.post(
        "/api/coordinates/distance",
        json={"from": "0°00'00\"N 0°00'00\"E", "to": "1°00'00\"N 0°00'00\"E"},
    )
    assert response.get_json() == {"kilometres": 111.2}


def test_coordinates_distance_validation(client):
    missing = client.post("/api/coordinates/distance", json={"from": "0°00'00\"N 0°00'00\"E"})
    assert missing.status_code == 400
    assert missing.get_json()["details"] == {"field": "to"}

    unparsable = client.post("/api/coordinates/distance", json={"from": "here", "to": "there"})
    assert unparsable.status_code == 400


def test_innhopp_readiness(client):
    response = client.post("/api/innhopps/readiness", json={"sequence": 1, "name": "Palomino"})

    body = response.get_json()
    assert body["ready"] is False
    assert "sequence" not in body["missing"]
    assert "name" not in body["missing"]
    assert body["missing"][-1] == "rescue_boat"


def _eligibility_payload(**overrides):
    payload = {
        "manifest": {"id": 10, "event_id": 1, "capacity": 3, "staff_slots": 1, "participant_ids": [1]},
        "manifests": [{"id": 11, "event_id": 1, "participant_ids": [2]}],
        "event": {"id": 1, "participant_ids": [1, 2, 3, 4]},
        "participants": [
            {"id": 1, "roles": ["Skydiver"]},
            {"id": 2, "roles": ["Skydiver"]},
            {"id": 3, "roles": ["Skydiver", "Staff"]},
            {"id": 4, "roles": ["Skydiver"]},
        ],
    }
    payload.update(overrides)
    return payload


def test_manifest_eligibility(client):
    response = client.post("/api/manifests/eligibility", json=_eligibility_payload())

    assert response.get_json() == {
        "manifest_id": 10,
        "category": "participant",
        "capacity": 2,
        "full": False,
        "available_ids": [4],
    }


def test_manifest_eligibility_staff(client):
    response = client.post("/api/manifests/eligibility", json=_eligibility_payload(category="staff"))

    body = response.get_json()
    assert body["capacity"] == 1
    assert body["available_ids"] == [3]


def test_manifest_eligibility_validation(client):
    bad_category = client.post("/api/manifests/eligibility", json=_eligibility_payload(category="pilot"))
    assert bad_category.status_code == 400

    wrong_event = client.post(
        "/api/manifests/eligibility",
        json=_eligibility_payload(event={"id": 2, "participant_ids": []}),
    )
    assert wrong_event.status_code == 400

    no_manifest = client.post("/api/manifests/eligibility", json={"event": {"id": 1}})
    assert no_manifest.get_json()["details"] == {"field": "manifest"}


def test_create_export_enqueues_job(client, queue: FakeQueue, tmp_path: Path):
    response = client.post(
        "/api/exports",
        data={"events_file": (io.BytesIO(b"[]"), "events dump.json"), "event_id": "3"},
        content_type="multipart/form-data",
    )

    assert response.status_code == 202
    body = response.get_json()
    assert body["status"] == "queued"

    (job,) = queue.enqueued
    assert job["func"] == "innhopp_console.tasks.process_export"
    assert job["job_id"] == body["job_id"]
    assert job["kwargs"]["event_id"] == 3
    saved = Path(job["kwargs"]["events_path"])
    assert saved.parent == tmp_path / "uploads" / body["job_id"]
    assert saved.name == "eventsdump.json"
    assert saved.read_bytes() == b"[]"


def test_create_export_validation(client, queue: FakeQueue):
    missing = client.post("/api/exports", data={}, content_type="multipart/form-data")
    assert missing.status_code == 400

    wrong_type = client.post(
        "/api/exports",
        data={"events_file": (io.BytesIO(b"a,b"), "events.csv")},
        content_type="multipart/form-data",
    )
    assert wrong_type.status_code == 400

    bad_event = client.post(
        "/api/exports",
        data={"events_file": (io.BytesIO(b"[]"), "events.json"), "event_id": "three"},
        content_type="multipart/form-data",
    )
    assert bad_event.status_code == 400
    assert queue.enqueued == []


@pytest.mark.parametrize("options", [{"raw": "x"}, {"hour": "2-digit", "timeZone": "UTC"}])
def test_parse_event_time_rejects_unknown_options(client, options):
    response = client.post("/api/event-time/parse", json={"value": "2024-06-05T09:00", "options": options})

    assert response.status_code == 400
    assert response.get_json()["details"] == {"field": "options"}


class FinishedJob:
    id = "job-9"
    meta = {"created_at": "2024-06-01T00:00:00+00:00", "event_id": 1, "stage": "done", "progress": 100}
    is_failed = False
    is_finished = True

    def get_status(self, refresh: bool = True) -> str:
        return "finished"

    def return_value(self):
        return {"job_id": "job-9", "row_count": 3}


def test_export_status_links_csv(client, monkeypatch):
    class _Jobs:
        @staticmethod
        def fetch(job_id, connection=None):
            return FinishedJob()

    monkeypatch.setattr(routes, "Job", _Jobs)

    body = client.get("/api/exports/job-9").get_json()

    assert body["stage"] == "done"
    assert body["event_id"] == 1
    assert body["result"]["row_count"] == 3
    assert body["download_url"] == "/api/exports/job-9/csv"


def test_download_export(client, tmp_path: Path):
    missing = client.get("/api/exports/job-9/csv")
    assert missing.status_code == 404

    output = tmp_path / "outputs" / "job-9" / "job-9_innhopps.csv"
    output.parent.mkdir(parents=True)
    output.write_text("date,time,name,coordinates", encoding="utf-8")

    response = client.get("/api/exports/job-9/csv")
    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert response.data == b"date,time,name,coordinates"
