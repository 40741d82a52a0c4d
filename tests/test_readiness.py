from __future__ import annotations

import copy

import pytest

from innhopp_console.core import Innhopp, LandingArea, RescueBoat
from innhopp_console.services.readiness import INNHOPP_CHECKLIST, is_innhopp_ready, missing_requirements


@pytest.fixture()
def complete_innhopp() -> Innhopp:
    return Innhopp(
        id=7,
        event_id=1,
        sequence=2,
        name="Beach of Palomino",
        coordinates="11°14'30.0\"N 73°42'59.7\"W",
        elevation=12,
        scheduled_at="2024-06-05T09:00",
        takeoff_airfield_id=3,
        distance_by_air=42.5,
        distance_by_road=61,
        jumprun="Along the shoreline, heading 270",
        primary_landing_area=LandingArea(
            name="Main beach",
            description="Wide sand beach",
            size="300 x 80 m",
            obstacles="Palm trees to the south",
        ),
        risk_assessment="Moderate, onshore wind",
        safety_precautions="Ground crew with radios",
        minimum_requirements="200 jumps",
        hospital="Hospital de Riohacha",
        rescue_boat=RescueBoat.YES,
    )


def _clear(innhopp: Innhopp, label: str) -> Innhopp:
    cleared = copy.deepcopy(innhopp)
    if label == "rescue_boat":
        cleared.rescue_boat = RescueBoat.UNKNOWN
    elif label.startswith("primary_landing_area."):
        setattr(cleared.primary_landing_area, label.split(".", 1)[1], None)
    else:
        setattr(cleared, label, None)
    return cleared


def test_complete_innhopp_is_ready(complete_innhopp):
    assert is_innhopp_ready(complete_innhopp)
    assert missing_requirements(complete_innhopp) == []


@pytest.mark.parametrize("label", [check.label for check in INNHOPP_CHECKLIST])
def test_any_missing_field_blocks_readiness(complete_innhopp, label):
    cleared = _clear(complete_innhopp, label)

    assert not is_innhopp_ready(cleared)
    assert missing_requirements(cleared) == [label]


def test_checklist_covers_every_operational_field():
    assert len(INNHOPP_CHECKLIST) == 18


def test_rescue_boat_only_has_to_be_decided(complete_innhopp):
    complete_innhopp.rescue_boat = RescueBoat.NO
    assert is_innhopp_ready(complete_innhopp)


def test_blank_text_counts_as_missing(complete_innhopp):
    complete_innhopp.hospital = "   "
    assert missing_requirements(complete_innhopp) == ["hospital"]


def test_sequence_must_be_positive(complete_innhopp):
    complete_innhopp.sequence = 0
    assert missing_requirements(complete_innhopp) == ["sequence"]


@pytest.mark.parametrize("value", [float("nan"), float("inf"), True, "12"])
def test_elevation_must_be_a_finite_number(complete_innhopp, value):
    complete_innhopp.elevation = value
    assert not is_innhopp_ready(complete_innhopp)


def test_zero_distances_are_still_numbers(complete_innhopp):
    complete_innhopp.distance_by_road = 0
    assert is_innhopp_ready(complete_innhopp)


def test_mapping_input_is_accepted():
    record = {
        "sequence": 1,
        "name": "Lake drop",
        "coordinates": "60°00'00\"N 10°00'00\"E",
        "elevation": 150,
        "scheduled_at": "2024-06-05 10:00",
        "takeoff_airfield_id": 4,
        "distance_by_air": 12.3,
        "distance_by_road": 20,
        "jumprun": "North to south",
        "primary_landing_area": {
            "name": "Field",
            "description": "Grass",
            "size": "100 x 100 m",
            "obstacles": "None",
        },
        "risk_assessment": "Low",
        "safety_precautions": "Boat on standby",
        "minimum_requirements": "50 jumps",
        "hospital": "Ullevål",
        "rescue_boat": False,
    }

    assert is_innhopp_ready(record)

    del record["rescue_boat"]
    assert missing_requirements(record) == ["rescue_boat"]


def test_empty_mapping_misses_everything():
    assert missing_requirements({}) == [check.label for check in INNHOPP_CHECKLIST]


def _complete_record(**overrides):
    record = {
        "sequence": 1,
        "name": "Lake drop",
        "coordinates": "60°00'00\"N 10°00'00\"E",
        "elevation": 150,
        "scheduled_at": "2024-06-05 10:00",
        "takeoff_airfield_id": 4,
        "distance_by_air": 12.3,
        "distance_by_road": 20,
        "jumprun": "North to south",
        "primary_landing_area": {"name": "Field", "description": "Grass", "size": "100 x 100 m", "obstacles": "None"},
        "risk_assessment": "Low",
        "safety_precautions": "Boat on standby",
        "minimum_requirements": "50 jumps",
        "hospital": "Ullevål",
        "rescue_boat": True,
    }
    record.update(overrides)
    return record


def test_fractional_sequence_is_positive():
    assert is_innhopp_ready(_complete_record(sequence=0.5))


@pytest.mark.parametrize("field", ["elevation", "distance_by_air", "distance_by_road", "takeoff_airfield_id"])
def test_numeric_strings_in_mappings_are_missing(field):
    assert missing_requirements(_complete_record(**{field: "150"})) == [field]
