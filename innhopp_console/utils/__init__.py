"""Utility helpers shared by the innhopp console services."""

from .event_time import (
    DateParts,
    TimeOfDay,
    format_local,
    parse_local,
    serialize_from_naive_date,
    to_naive_date,
    to_utc_anchored_date,
)
from .formatting import format_meters_with_feet, meters_to_feet, round_half_up, round_to_tenth
from .geo import Coordinates, haversine_km, parse_coordinate_pair, parse_single_dms
from .io import detect_encoding, ensure_directory, read_text, safe_filename

__all__ = [
    "DateParts",
    "TimeOfDay",
    "format_local",
    "parse_local",
    "serialize_from_naive_date",
    "to_naive_date",
    "to_utc_anchored_date",
    "format_meters_with_feet",
    "meters_to_feet",
    "round_half_up",
    "round_to_tenth",
    "Coordinates",
    "haversine_km",
    "parse_coordinate_pair",
    "parse_single_dms",
    "detect_encoding",
    "ensure_directory",
    "read_text",
    "safe_filename",
]
