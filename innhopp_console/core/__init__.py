"""Core domain records for the innhopp console."""

from .models import (
    Airfield,
    Event,
    ExportSummary,
    Innhopp,
    LandingArea,
    Manifest,
    Participant,
    RescueBoat,
    iter_innhopps,
)
from .exceptions import InvalidPayloadError, ProcessingError

__all__ = [
    "Airfield",
    "Event",
    "ExportSummary",
    "Innhopp",
    "LandingArea",
    "Manifest",
    "Participant",
    "RescueBoat",
    "iter_innhopps",
    "InvalidPayloadError",
    "ProcessingError",
]
