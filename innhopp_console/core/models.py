"""Domain records handled by the innhopp console."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Iterator, Mapping, Sequence


def _parse_float(value: object) -> float | None:
    if value in (None, "", "null") or isinstance(value, bool):
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _parse_int(value: object) -> int | None:
    number = _parse_float(value)
    return int(number) if number is not None else None


def _parse_number(value: object) -> int | float | None:
    """Accept JSON numbers only; numeric strings and booleans are not numbers."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value if math.isfinite(value) else None


def _parse_text(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


def _parse_ids(value: object) -> list[int]:
    if not isinstance(value, (list, tuple)):
        return []
    ids = (_parse_int(item) for item in value)
    return [item for item in ids if item is not None]


class RescueBoat(str, Enum):
    """Whether a rescue boat is arranged for a water-adjacent landing."""

    UNKNOWN = "unknown"
    YES = "yes"
    NO = "no"

    @classmethod
    def from_value(cls, value: object) -> "RescueBoat":
        if isinstance(value, RescueBoat):
            return value
        if value is True:
            return cls.YES
        if value is False:
            return cls.NO
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in ("yes", "true"):
                return cls.YES
            if normalized in ("no", "false"):
                return cls.NO
        return cls.UNKNOWN

    @property
    def is_known(self) -> bool:
        return self is not RescueBoat.UNKNOWN


@dataclass(slots=True)
class LandingArea:
    name: str | None = None
    description: str | None = None
    size: str | None = None
    obstacles: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object] | None) -> "LandingArea":
        data = data or {}
        return cls(
            name=_parse_text(data.get("name")),
            description=_parse_text(data.get("description")),
            size=_parse_text(data.get("size")),
            obstacles=_parse_text(data.get("obstacles")),
        )


@dataclass(slots=True)
class Innhopp:
    """A planned jump into a location outside the home drop zone."""

    id: int | None = None
    event_id: int | None = None
    sequence: int | float | None = None
    name: str | None = None
    coordinates: str | None = None
    elevation: float | None = None
    scheduled_at: str | None = None
    takeoff_airfield_id: int | None = None
    distance_by_air: float | None = None
    distance_by_road: float | None = None
    jumprun: str | None = None
    primary_landing_area: LandingArea = field(default_factory=LandingArea)
    risk_assessment: str | None = None
    safety_precautions: str | None = None
    minimum_requirements: str | None = None
    hospital: str | None = None
    rescue_boat: RescueBoat = RescueBoat.UNKNOWN
    notes: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "Innhopp":
        landing_area = data.get("primary_landing_area")
        return cls(
            id=_parse_int(data.get("id")),
            event_id=_parse_int(data.get("event_id")),
            sequence=_parse_number(data.get("sequence")),
            name=_parse_text(data.get("name")),
            coordinates=_parse_text(data.get("coordinates")),
            elevation=_parse_number(data.get("elevation")),
            scheduled_at=_parse_text(data.get("scheduled_at")),
            takeoff_airfield_id=_parse_number(data.get("takeoff_airfield_id")),
            distance_by_air=_parse_number(data.get("distance_by_air")),
            distance_by_road=_parse_number(data.get("distance_by_road")),
            jumprun=_parse_text(data.get("jumprun")),
            primary_landing_area=LandingArea.from_mapping(
                landing_area if isinstance(landing_area, Mapping) else None
            ),
            risk_assessment=_parse_text(data.get("risk_assessment")),
            safety_precautions=_parse_text(data.get("safety_precautions")),
            minimum_requirements=_parse_text(data.get("minimum_requirements")),
            hospital=_parse_text(data.get("hospital")),
            rescue_boat=RescueBoat.from_value(data.get("rescue_boat")),
            notes=_parse_text(data.get("notes")),
        )


@dataclass(slots=True)
class Airfield:
    id: int
    name: str
    coordinates: str | None = None
    elevation: float | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "Airfield":
        return cls(
            id=_parse_int(data.get("id")) or 0,
            name=str(data.get("name") or "").strip(),
            coordinates=_parse_text(data.get("coordinates")),
            elevation=_parse_float(data.get("elevation")),
        )


@dataclass(slots=True)
class Participant:
    id: int
    full_name: str = ""
    roles: frozenset[str] = frozenset()

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "Participant":
        roles = data.get("roles")
        return cls(
            id=_parse_int(data.get("id")) or 0,
            full_name=str(data.get("full_name") or "").strip(),
            roles=frozenset(str(role) for role in roles) if isinstance(roles, (list, tuple)) else frozenset(),
        )

    def has_role(self, role: str) -> bool:
        return role in self.roles


@dataclass(slots=True)
class Manifest:
    """One aircraft load within an event."""

    id: int
    event_id: int
    load_number: int = 0
    capacity: int | None = None
    staff_slots: int | None = None
    participant_ids: list[int] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "Manifest":
        return cls(
            id=_parse_int(data.get("id")) or 0,
            event_id=_parse_int(data.get("event_id")) or 0,
            load_number=_parse_int(data.get("load_number")) or 0,
            capacity=_parse_int(data.get("capacity")),
            staff_slots=_parse_int(data.get("staff_slots")),
            participant_ids=_parse_ids(data.get("participant_ids")),
        )


@dataclass(slots=True)
class Event:
    id: int
    name: str = ""
    location: str | None = None
    status: str | None = None
    starts_at: str | None = None
    ends_at: str | None = None
    participant_ids: list[int] = field(default_factory=list)
    innhopps: list[Innhopp] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "Event":
        event_id = _parse_int(data.get("id")) or 0
        raw_innhopps = data.get("innhopps")
        innhopps = []
        if isinstance(raw_innhopps, (list, tuple)):
            for item in raw_innhopps:
                if isinstance(item, Mapping):
                    innhopp = Innhopp.from_mapping(item)
                    if innhopp.event_id is None:
                        innhopp.event_id = event_id
                    innhopps.append(innhopp)
        return cls(
            id=event_id,
            name=str(data.get("name") or "").strip(),
            location=_parse_text(data.get("location")),
            status=_parse_text(data.get("status")),
            starts_at=_parse_text(data.get("starts_at")),
            ends_at=_parse_text(data.get("ends_at")),
            participant_ids=_parse_ids(data.get("participant_ids")),
            innhopps=innhopps,
        )


@dataclass(slots=True)
class ExportSummary:
    """Information returned to API callers after an export job completes."""

    job_id: str
    created_at: datetime
    completed_at: datetime
    generated_files: Sequence[str]
    event_count: int
    row_count: int
    ready_count: int

    def as_dict(self) -> dict:
        return {
            "job_id": self.job_id,
            "created_at": self.created_at.isoformat(),
            "completed_at": self.completed_at.isoformat(),
            "generated_files": list(self.generated_files),
            "event_count": self.event_count,
            "row_count": self.row_count,
            "ready_count": self.ready_count,
        }


def iter_innhopps(events: Iterable[Event]) -> Iterator[Innhopp]:
    """Yield all innhopps from a sequence of events."""

    for event in events:
        yield from event.innhopps
