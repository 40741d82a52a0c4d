"""Air distance from an innhopp to its takeoff airfield."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from ..core import Airfield, Innhopp
from ..utils import haversine_km, parse_coordinate_pair, round_to_tenth


def air_distance_km(innhopp_coordinates: str | None, airfield_coordinates: str | None) -> float | None:
    """Return the great-circle distance rounded to 0.1 km, or ``None``."""

    origin = parse_coordinate_pair(airfield_coordinates)
    target = parse_coordinate_pair(innhopp_coordinates)
    if origin is None or target is None:
        return None
    return round_to_tenth(haversine_km(target, origin))


def fill_distance_by_air(innhopp: Innhopp, airfields: Iterable[Airfield]) -> Innhopp:
    """Return a copy of ``innhopp`` with ``distance_by_air`` computed from its takeoff airfield.

    The innhopp is returned unchanged when the airfield is unknown or either
    set of coordinates does not parse.
    """

    takeoff = next(
        (airfield for airfield in airfields if airfield.id == innhopp.takeoff_airfield_id),
        None,
    )
    if takeoff is None:
        return innhopp
    distance = air_distance_km(innhopp.coordinates, takeoff.coordinates)
    if distance is None or distance == innhopp.distance_by_air:
        return innhopp
    return replace(innhopp, distance_by_air=distance)
