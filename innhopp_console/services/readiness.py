"""Operational readiness checklist for innhopps."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

from ..core import Innhopp, RescueBoat


def _has_text(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _has_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _has_positive_sequence(value: object) -> bool:
    return _has_number(value) and value > 0  # type: ignore[operator]


def _is_defined(value: object) -> bool:
    return isinstance(value, RescueBoat) and value.is_known


@dataclass(frozen=True, slots=True)
class ReadinessCheck:
    label: str
    read: Callable[[Innhopp], object]
    satisfied: Callable[[object], bool]

    def passes(self, innhopp: Innhopp) -> bool:
        return self.satisfied(self.read(innhopp))


INNHOPP_CHECKLIST: Sequence[ReadinessCheck] = (
    ReadinessCheck("sequence", lambda i: i.sequence, _has_positive_sequence),
    ReadinessCheck("name", lambda i: i.name, _has_text),
    ReadinessCheck("coordinates", lambda i: i.coordinates, _has_text),
    ReadinessCheck("elevation", lambda i: i.elevation, _has_number),
    ReadinessCheck("scheduled_at", lambda i: i.scheduled_at, _has_text),
    ReadinessCheck("takeoff_airfield_id", lambda i: i.takeoff_airfield_id, _has_number),
    ReadinessCheck("distance_by_air", lambda i: i.distance_by_air, _has_number),
    ReadinessCheck("distance_by_road", lambda i: i.distance_by_road, _has_number),
    ReadinessCheck("jumprun", lambda i: i.jumprun, _has_text),
    ReadinessCheck("primary_landing_area.name", lambda i: i.primary_landing_area.name, _has_text),
    ReadinessCheck(
        "primary_landing_area.description",
        lambda i: i.primary_landing_area.description,
        _has_text,
    ),
    ReadinessCheck("primary_landing_area.size", lambda i: i.primary_landing_area.size, _has_text),
    ReadinessCheck(
        "primary_landing_area.obstacles",
        lambda i: i.primary_landing_area.obstacles,
        _has_text,
    ),
    ReadinessCheck("risk_assessment", lambda i: i.risk_assessment, _has_text),
    ReadinessCheck("safety_precautions", lambda i: i.safety_precautions, _has_text),
    ReadinessCheck("minimum_requirements", lambda i: i.minimum_requirements, _has_text),
    ReadinessCheck("hospital", lambda i: i.hospital, _has_text),
    ReadinessCheck("rescue_boat", lambda i: i.rescue_boat, _is_defined),
)


def _coerce(record: Innhopp | Mapping[str, object]) -> Innhopp:
    if isinstance(record, Innhopp):
        return record
    return Innhopp.from_mapping(record)


def missing_requirements(record: Innhopp | Mapping[str, object]) -> list[str]:
    """Return the checklist labels ``record`` does not satisfy, in checklist order."""

    innhopp = _coerce(record)
    return [check.label for check in INNHOPP_CHECKLIST if not check.passes(innhopp)]


def is_innhopp_ready(record: Innhopp | Mapping[str, object]) -> bool:
    """Return ``True`` when every checklist item is filled in.

    The rescue boat only has to be decided, not necessarily arranged.
    """

    innhopp = _coerce(record)
    return all(check.passes(innhopp) for check in INNHOPP_CHECKLIST)
