"""Geospatial helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from math import atan2, cos, radians, sin, sqrt


EARTH_RADIUS_KM = 6371

DMS_PATTERN = re.compile(r"(\d{1,3})°(\d{1,2})'(\d{1,2}(?:\.\d+)?)\"?([NSEW])", re.IGNORECASE | re.ASCII)

_LATITUDE_HEMISPHERES = frozenset("NS")
_LONGITUDE_HEMISPHERES = frozenset("EW")


@dataclass(frozen=True, slots=True)
class Coordinates:
    """A point in signed decimal degrees."""

    lat: float
    lon: float


def _to_decimal(match: re.Match[str]) -> float:
    degrees, minutes, seconds, hemisphere = match.groups()
    decimal = int(degrees) + int(minutes) / 60 + float(seconds) / 3600
    if hemisphere.upper() in ("S", "W"):
        return -decimal
    return decimal


def parse_single_dms(text: str | None) -> float | None:
    """Convert one ``D°M'S"H`` token to decimal degrees."""

    if not text:
        return None
    match = DMS_PATTERN.search(text.strip())
    if not match:
        return None
    return _to_decimal(match)


def parse_coordinate_pair(text: str | None, *, allow_ambiguous: bool = False) -> Coordinates | None:
    """Decode the first two DMS tokens in ``text`` into a latitude/longitude pair.

    Hemisphere letters decide which token is the latitude. Two latitude or
    two longitude tokens are rejected unless ``allow_ambiguous`` is set, in
    which case the first token is taken as the latitude.
    """

    if not text:
        return None
    matches = list(DMS_PATTERN.finditer(text))
    if len(matches) < 2:
        return None
    first, second = matches[0], matches[1]
    first_hemisphere = first.group(4).upper()
    second_hemisphere = second.group(4).upper()

    if first_hemisphere in _LATITUDE_HEMISPHERES and second_hemisphere in _LONGITUDE_HEMISPHERES:
        return Coordinates(lat=_to_decimal(first), lon=_to_decimal(second))
    if first_hemisphere in _LONGITUDE_HEMISPHERES and second_hemisphere in _LATITUDE_HEMISPHERES:
        return Coordinates(lat=_to_decimal(second), lon=_to_decimal(first))
    if allow_ambiguous:
        return Coordinates(lat=_to_decimal(first), lon=_to_decimal(second))
    return None


def haversine_km(a: Coordinates, b: Coordinates) -> float:
    """Return the great-circle distance between two points in kilometres."""

    phi1 = radians(a.lat)
    phi2 = radians(b.lat)
    delta_phi = radians(b.lat - a.lat)
    delta_lambda = radians(b.lon - a.lon)

    h = sin(delta_phi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(delta_lambda / 2) ** 2
    h = min(1.0, h)
    c = 2 * atan2(sqrt(h), sqrt(1 - h))

    return EARTH_RADIUS_KM * c


def format_dms(value: float, *, latitude: bool) -> str:
    """Render signed decimal degrees as ``D°M'S.s"H``."""

    if latitude:
        hemisphere = "N" if value >= 0 else "S"
    else:
        hemisphere = "E" if value >= 0 else "W"
    tenths = round(abs(value) * 36000)
    degrees, remainder = divmod(tenths, 36000)
    minutes, seconds_tenths = divmod(remainder, 600)
    return f"{degrees}°{minutes:02d}'{seconds_tenths / 10:04.1f}\"{hemisphere}"


def format_coordinate_pair(coordinates: Coordinates) -> str:
    return f"{format_dms(coordinates.lat, latitude=True)} {format_dms(coordinates.lon, latitude=False)}"
