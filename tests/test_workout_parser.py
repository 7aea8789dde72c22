from __future__ import annotations

from datetime import datetime

import pytest

from backend.workout.model import Cycling, Running, create_workout
from backend.workout.parser import (
    WorkoutRecordError,
    WorkoutValidationError,
    parse_workout_form,
    workout_from_record,
    workout_to_record,
)


def test_parse_running_form() -> None:
    form = parse_workout_form(kind="running", distance="5", duration=25, cadence=178.0)

    assert form.kind == "running"
    assert form.distance_km == 5.0
    assert form.duration_min == 25.0
    assert form.cadence_or_elevation == 178.0


def test_parse_cycling_form_allows_zero_elevation() -> None:
    form = parse_workout_form(kind="cycling", distance=20, duration=60, elevation=0)

    assert form.kind == "cycling"
    assert form.cadence_or_elevation == 0.0


@pytest.mark.parametrize(
    "fields",
    [
        {"kind": "running", "distance": -1, "duration": 25, "cadence": 178},
        {"kind": "running", "distance": 0, "duration": 25, "cadence": 178},
        {"kind": "running", "distance": 5, "duration": 0, "cadence": 178},
        {"kind": "running", "distance": 5, "duration": 25, "cadence": 0},
        {"kind": "running", "distance": "abc", "duration": 25, "cadence": 178},
        {"kind": "running", "distance": "", "duration": 25, "cadence": 178},
        {"kind": "running", "distance": None, "duration": 25, "cadence": 178},
        {"kind": "running", "distance": float("nan"), "duration": 25, "cadence": 178},
        {"kind": "running", "distance": True, "duration": 25, "cadence": 178},
        {"kind": "cycling", "distance": 20, "duration": 60, "elevation": -5},
        {"kind": "cycling", "distance": 20, "duration": 60, "elevation": None},
        {"kind": "swimming", "distance": 1, "duration": 30, "cadence": 10},
    ],
)
def test_parse_form_rejects_invalid_fields(fields: dict[str, object]) -> None:
    with pytest.raises(WorkoutValidationError):
        parse_workout_form(**fields)  # type: ignore[arg-type]


def test_record_round_trip_recomputes_derived_fields() -> None:
    workout = create_workout(
        "cycling",
        (45.76, 4.84),
        27,
        95,
        410,
        created_at=datetime(2026, 6, 2, 7, 15),
    )
    record = workout_to_record(workout)
    record["speed_kmh"] = 999.0
    record["description"] = "tampered"

    rebuilt = workout_from_record(record)

    assert isinstance(rebuilt, Cycling)
    assert rebuilt.speed_kmh == 17.05
    assert rebuilt.description == "Cycling on June 2"
    assert rebuilt.id == workout.id
    assert rebuilt.created_at == workout.created_at


def test_record_uses_plain_json_fields() -> None:
    workout = create_workout("running", (51.5, -0.1), 5, 25, 178, workout_id="abc123")

    record = workout_to_record(workout)

    assert record["id"] == "abc123"
    assert record["type"] == "running"
    assert record["coords"] == [51.5, -0.1]
    assert record["pace_min_per_km"] == 5.0
    assert "speed_kmh" not in record


@pytest.mark.parametrize(
    "raw",
    [
        "not a dict",
        {"type": "running"},
        {"id": "a", "type": "walking", "created_at": "2026-01-01T00:00:00"},
        {
            "id": "a",
            "type": "running",
            "created_at": "yesterday",
            "coords": [1, 2],
            "distance_km": 5,
            "duration_min": 25,
            "cadence_spm": 170,
        },
        {
            "id": "a",
            "type": "running",
            "created_at": "2026-01-01T00:00:00",
            "coords": [1],
            "distance_km": 5,
            "duration_min": 25,
            "cadence_spm": 170,
        },
        {
            "id": "a",
            "type": "running",
            "created_at": "2026-01-01T00:00:00",
            "coords": [1, 2],
            "distance_km": 0,
            "duration_min": 25,
            "cadence_spm": 170,
        },
    ],
)
def test_record_rejects_malformed_input(raw: object) -> None:
    with pytest.raises(WorkoutRecordError):
        workout_from_record(raw)


def test_record_rebuilds_running_variant() -> None:
    rebuilt = workout_from_record(
        {
            "id": "run-1",
            "type": "running",
            "created_at": "2026-10-17T08:00:00+02:00",
            "coords": [51.5, -0.1],
            "distance_km": 10,
            "duration_min": 52,
            "cadence_spm": 172,
        }
    )

    assert isinstance(rebuilt, Running)
    assert rebuilt.pace_min_per_km == 5.2
    assert rebuilt.description == "Running on October 17"
