"""Service layer exports."""

from .distance import air_distance_km, fill_distance_by_air
from .eligibility import (
    Ineligibility,
    ManifestPlanner,
    SlotCategory,
    available_participants,
    can_assign,
    category_capacity,
    check_assignment,
    is_category_full,
)
from .event_cache import EventCache
from .events_reader import EventsReader
from .innhopp_csv import InnhoppCsvExporter, build_rows, render_csv
from .readiness import is_innhopp_ready, missing_requirements

__all__ = [
    "air_distance_km",
    "fill_distance_by_air",
    "Ineligibility",
    "ManifestPlanner",
    "SlotCategory",
    "available_participants",
    "can_assign",
    "category_capacity",
    "check_assignment",
    "is_category_full",
    "EventCache",
    "EventsReader",
    "InnhoppCsvExporter",
    "build_rows",
    "render_csv",
    "is_innhopp_ready",
    "missing_requirements",
]
