"""REST API blueprint."""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path

from flask import Blueprint, current_app, jsonify, request, send_file, url_for
from rq.exceptions import NoSuchJobError
from rq.job import Job

from ..config import APP_CONFIG, STORAGE_PATHS
from ..core import Event, Innhopp, InvalidPayloadError, Manifest, Participant
from ..pipelines import export_csv_path
from ..services import (
    EventCache,
    ManifestPlanner,
    SlotCategory,
    category_capacity,
    is_innhopp_ready,
    missing_requirements,
)
from ..utils import event_time, geo
from ..utils.formatting import round_to_tenth
from ..utils.io import ensure_directory, safe_filename

api_bp = Blueprint("api", __name__)


@api_bp.post("/event-time/parse")
def parse_event_time():
    """Return every representation the UI needs for an event-local timestamp."""

    payload = _json_body()
    value = payload.get("value")
    options = payload.get("options") or {}
    if not isinstance(options, Mapping):
        raise InvalidPayloadError("options", "'options' must be an object")
    unsupported = sorted(set(options) - event_time.FORMAT_OPTIONS)
    if unsupported:
        raise InvalidPayloadError("options", f"Unsupported format option(s): {', '.join(unsupported)}")

    parts = event_time.parse_local(value if isinstance(value, str) else None)
    if parts is None:
        return jsonify({"value": value, "valid": False}), 200

    time_of_day = event_time.time_parts(value)
    return jsonify(
        {
            "value": value,
            "valid": True,
            "parts": {
                "year": parts.year,
                "month": parts.month,
                "day": parts.day,
                "hour": parts.hour,
                "minute": parts.minute,
                "second": parts.second,
            },
            "iso": event_time.from_datetime_input(value),
            "date_input": event_time.to_date_input(value),
            "datetime_input": event_time.to_datetime_input(value),
            "date_key": event_time.date_key(value),
            "time": {"hour": time_of_day.hour, "minute": time_of_day.minute} if time_of_day else None,
            "formatted": event_time.format_local(value, **options),
        }
    ), 200


@api_bp.post("/coordinates/parse")
def parse_coordinates():
    payload = _json_body()
    value = payload.get("value")
    coordinates = geo.parse_coordinate_pair(
        value if isinstance(value, str) else None,
        allow_ambiguous=bool(payload.get("allow_ambiguous", False)),
    )
    if coordinates is None:
        return jsonify({"value": value, "valid": False}), 200
    return jsonify(
        {
            "value": value,
            "valid": True,
            "lat": coordinates.lat,
            "lon": coordinates.lon,
            "dms": geo.format_coordinate_pair(coordinates),
        }
    ), 200


@api_bp.post("/coordinates/distance")
def coordinates_distance():
    payload = _json_body()
    origin = geo.parse_coordinate_pair(_require_text(payload, "from"))
    target = geo.parse_coordinate_pair(_require_text(payload, "to"))
    if origin is None or target is None:
        return jsonify({"error": "Coordinates must be a DMS latitude/longitude pair"}), 400
    kilometres = geo.haversine_km(origin, target)
    return jsonify({"kilometres": round_to_tenth(kilometres)}), 200


@api_bp.post("/innhopps/readiness")
def innhopp_readiness():
    innhopp = Innhopp.from_mapping(_json_body())
    missing = missing_requirements(innhopp)
    return jsonify({"ready": is_innhopp_ready(innhopp), "missing": missing}), 200


@api_bp.post("/manifests/eligibility")
def manifest_eligibility():
    """Report who can still be put on a load and whether it has room."""

    payload = _json_body()
    manifest = Manifest.from_mapping(_require_object(payload, "manifest"))
    event = Event.from_mapping(_require_object(payload, "event"))
    if event.id != manifest.event_id:
        raise InvalidPayloadError("event", "'event' does not match the manifest's event_id")

    try:
        category = SlotCategory(payload.get("category", SlotCategory.PARTICIPANT.value))
    except ValueError as exc:
        raise InvalidPayloadError("category", "'category' must be 'participant' or 'staff'") from exc

    manifests = [Manifest.from_mapping(item) for item in _object_list(payload, "manifests")]
    if all(other.id != manifest.id for other in manifests):
        manifests.append(manifest)
    participants = [Participant.from_mapping(item) for item in _object_list(payload, "participants")]

    planner = ManifestPlanner(
        participants=participants,
        manifests=manifests,
        events=EventCache(events=[event]),
    )
    return jsonify(
        {
            "manifest_id": manifest.id,
            "category": category.value,
            "capacity": category_capacity(manifest, category),
            "full": planner.is_full(manifest, category),
            "available_ids": [participant.id for participant in planner.available(manifest, category)],
        }
    ), 200


@api_bp.post("/exports")
def create_export():
    """Queue an innhopp CSV export from an uploaded events dump."""

    events_file = request.files.get("events_file")
    if events_file is None or not events_file.filename:
        return jsonify({"error": "events_file field is required"}), 400
    if not _allowed(events_file.filename, APP_CONFIG.allowed_upload_extensions):
        return jsonify({"error": f"Invalid events file: {events_file.filename}"}), 400

    event_id: int | None = None
    raw_event_id = request.form.get("event_id")
    if raw_event_id:
        try:
            event_id = int(raw_event_id)
        except ValueError:
            return jsonify({"error": "event_id must be an integer"}), 400

    job_id = str(uuid.uuid4())
    job_dir = ensure_directory(STORAGE_PATHS.uploads / job_id)
    events_path: Path = job_dir / safe_filename(events_file.filename)
    events_file.save(events_path)

    created_at = datetime.now(timezone.utc).isoformat()
    job = _queue().enqueue(
        "innhopp_console.tasks.process_export",
        kwargs={
            "job_id": job_id,
            "events_path": str(events_path),
            "event_id": event_id,
        },
        job_id=job_id,
        meta={"created_at": created_at, "event_id": event_id, "stage": "queued"},
    )

    return jsonify(
        {
            "job_id": job.id,
            "status": job.get_status(refresh=False),
            "created_at": created_at,
        }
    ), 202


@api_bp.get("/exports/<job_id>")
def export_status(job_id: str):
    """Report the stage of an export; finished exports link their CSV."""

    try:
        job = Job.fetch(job_id, connection=_connection())
    except NoSuchJobError:
        return jsonify({"error": "Job not found"}), 404

    payload: dict[str, object] = {
        "job_id": job.id,
        "status": job.get_status(refresh=True),
        "stage": job.meta.get("stage", "queued"),
        "event_id": job.meta.get("event_id"),
        "created_at": job.meta.get("created_at"),
    }

    if job.is_failed:
        payload["error"] = job.meta.get("error", {"message": "Export failed"})
        return jsonify(payload), 500
    if job.is_finished:
        payload["result"] = job.return_value() or {}
        payload["download_url"] = url_for("api.download_export", job_id=job.id)
        return jsonify(payload), 200

    payload["progress"] = job.meta.get("progress", 0)
    return jsonify(payload), 200


@api_bp.get("/exports/<job_id>/csv")
def download_export(job_id: str):
    path = export_csv_path(STORAGE_PATHS.outputs, job_id).resolve()
    if not path.is_file():
        return jsonify({"error": "Export not found"}), 404
    return send_file(path, mimetype="text/csv", as_attachment=True, download_name="innhopps.csv")


@api_bp.errorhandler(InvalidPayloadError)
def invalid_payload(exc: InvalidPayloadError):
    return jsonify({"error": str(exc), "details": exc.details}), 400


def _json_body() -> Mapping[str, object]:
    payload = request.get_json(silent=True)
    if not isinstance(payload, Mapping):
        raise InvalidPayloadError("body", "Request body must be a JSON object")
    return payload


def _require_text(payload: Mapping[str, object], field: str) -> str:
    value = payload.get(field)
    if not isinstance(value, str) or not value.strip():
        raise InvalidPayloadError(field)
    return value


def _require_object(payload: Mapping[str, object], field: str) -> Mapping[str, object]:
    value = payload.get(field)
    if not isinstance(value, Mapping):
        raise InvalidPayloadError(field, f"'{field}' must be an object")
    return value


def _object_list(payload: Mapping[str, object], field: str) -> list[Mapping[str, object]]:
    value = payload.get(field) or []
    if not isinstance(value, list):
        raise InvalidPayloadError(field, f"'{field}' must be a list")
    return [item for item in value if isinstance(item, Mapping)]


def _allowed(filename: str, extensions: tuple[str, ...]) -> bool:
    return "." in filename and filename.rsplit(".", 1)[1].lower() in extensions


def _queue():
    return current_app.extensions["rq"]["queue"]


def _connection():
    return current_app.extensions["rq"]["connection"]
