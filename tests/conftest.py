from __future__ import annotations

import json
from pathlib import Path

import pytest


EVENTS_PAYLOAD = [
    {
        "id": 1,
        "name": "Colombia Boogie",
        "participant_ids": [1, 2],
        "innhopps": [
            {
                "id": 11,
                "sequence": 1,
                "name": "Palomino",
                "coordinates": "11°14'30.0\"N 73°42'59.7\"W",
                "elevation": 5,
                "scheduled_at": "2024-06-05T09:00",
                "takeoff_airfield_id": 3,
                "distance_by_air": 42.5,
                "distance_by_road": 61,
                "jumprun": "Shoreline",
                "primary_landing_area": {
                    "name": "Beach",
                    "description": "Sand",
                    "size": "300 x 80 m",
                    "obstacles": "Palms",
                },
                "risk_assessment": "Moderate",
                "safety_precautions": "Radios",
                "minimum_requirements": "200 jumps",
                "hospital": "Riohacha",
                "rescue_boat": True,
            },
            {"id": 12, "sequence": 2, "name": "Tayrona", "scheduled_at": "2024-06-05T14:00"},
        ],
    },
    {
        "id": 2,
        "name": "Fjord Tour",
        "innhopps": [{"id": 21, "sequence": 1, "name": "Preikestolen", "scheduled_at": "2024-07-01"}],
    },
]


@pytest.fixture()
def events_file(tmp_path: Path) -> Path:
    path = tmp_path / "events.json"
    path.write_text(json.dumps(EVENTS_PAYLOAD), encoding="utf-8")
    return path
