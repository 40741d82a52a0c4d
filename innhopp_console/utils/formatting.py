"""Formatting helpers."""

from __future__ import annotations

import math

FEET_PER_METER = 3.28084


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ``.5`` going towards positive infinity."""

    return math.floor(value + 0.5)


def round_to_tenth(value: float) -> float:
    return round_half_up(value * 10) / 10


def meters_to_feet(meters: float) -> int:
    """Convert metres to whole feet."""

    return round_half_up(meters * FEET_PER_METER)


def format_meters_with_feet(meters: float | int | None) -> str:
    """Return ``"<m> m / <ft> ft"`` for elevations, or an empty string."""

    if meters is None or isinstance(meters, bool):
        return ""
    if isinstance(meters, float) and math.isnan(meters):
        return ""
    if isinstance(meters, float) and meters.is_integer():
        meters = int(meters)
    return f"{meters} m / {meters_to_feet(meters)} ft"
