"""Workout form and record parsing."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, cast

from backend.workout.model import (
    WORKOUT_KINDS,
    Coordinates,
    Workout,
    WorkoutKind,
    create_workout,
)


class WorkoutValidationError(ValueError):
    """Raised when submitted form fields are invalid."""


class WorkoutRecordError(ValueError):
    """Raised when a persisted workout record cannot be rebuilt."""


@dataclass(frozen=True)
class WorkoutForm:
    kind: WorkoutKind
    distance_km: float
    duration_min: float
    cadence_or_elevation: float


def parse_workout_form(
    *,
    kind: object,
    distance: object,
    duration: object,
    cadence: object = None,
    elevation: object = None,
) -> WorkoutForm:
    if kind not in WORKOUT_KINDS:
        raise WorkoutValidationError(f"Unknown workout type '{kind}'")
    workout_kind = cast(WorkoutKind, kind)

    distance_km = _parse_number(distance, "distance")
    duration_min = _parse_number(duration, "duration")
    if distance_km <= 0:
        raise WorkoutValidationError("distance must be > 0")
    if duration_min <= 0:
        raise WorkoutValidationError("duration must be > 0")

    if workout_kind == "running":
        secondary = _parse_number(cadence, "cadence")
        if secondary <= 0:
            raise WorkoutValidationError("cadence must be > 0")
    else:
        secondary = _parse_number(elevation, "elevation")
        if secondary < 0:
            raise WorkoutValidationError("elevation must be >= 0")

    return WorkoutForm(
        kind=workout_kind,
        distance_km=distance_km,
        duration_min=duration_min,
        cadence_or_elevation=secondary,
    )


def workout_to_record(workout: Workout) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": workout.id,
        "type": workout.kind,
        "created_at": workout.created_at.isoformat(),
        "coords": [workout.coords[0], workout.coords[1]],
        "distance_km": workout.distance_km,
        "duration_min": workout.duration_min,
        "description": workout.description,
    }
    if workout.kind == "running":
        record["cadence_spm"] = workout.cadence_spm
        record["pace_min_per_km"] = workout.pace_min_per_km
    else:
        record["elevation_gain_m"] = workout.elevation_gain_m
        record["speed_kmh"] = workout.speed_kmh
    return record


def workout_from_record(raw: object) -> Workout:
    """Rebuild a typed workout, recomputing every derived field.

    Stored description, pace and speed are ignored.
    """
    if not isinstance(raw, dict):
        raise WorkoutRecordError("Workout record must be an object")

    kind = raw.get("type")
    if kind not in WORKOUT_KINDS:
        raise WorkoutRecordError(f"Unknown workout type '{kind}'")

    workout_id = raw.get("id")
    if not isinstance(workout_id, str) or not workout_id.strip():
        raise WorkoutRecordError("Workout field 'id' must be a non-empty string")

    created_obj = raw.get("created_at")
    if not isinstance(created_obj, str):
        raise WorkoutRecordError("Workout field 'created_at' must be a string")
    try:
        created_at = datetime.fromisoformat(created_obj)
    except ValueError as exc:
        raise WorkoutRecordError(f"Invalid created_at: {created_obj}") from exc

    secondary_field = "cadence_spm" if kind == "running" else "elevation_gain_m"
    try:
        form = parse_workout_form(
            kind=kind,
            distance=raw.get("distance_km"),
            duration=raw.get("duration_min"),
            cadence=raw.get(secondary_field),
            elevation=raw.get(secondary_field),
        )
    except WorkoutValidationError as exc:
        raise WorkoutRecordError(str(exc)) from exc

    return create_workout(
        form.kind,
        _parse_coords(raw.get("coords")),
        form.distance_km,
        form.duration_min,
        form.cadence_or_elevation,
        created_at=created_at,
        workout_id=workout_id,
    )


def _parse_coords(raw: object) -> Coordinates:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise WorkoutRecordError("Workout field 'coords' must be [lat, lng]")
    try:
        lat = _parse_number(raw[0], "latitude")
        lng = _parse_number(raw[1], "longitude")
    except WorkoutValidationError as exc:
        raise WorkoutRecordError(str(exc)) from exc
    return (lat, lng)


def _parse_number(raw: object, field_name: str) -> float:
    if raw is None or isinstance(raw, bool):
        raise WorkoutValidationError(f"invalid {field_name}")
    if isinstance(raw, str) and raw.strip() == "":
        raise WorkoutValidationError(f"{field_name} is required")
    try:
        value = float(cast(Any, raw))
    except (TypeError, ValueError) as exc:
        raise WorkoutValidationError(f"invalid {field_name}") from exc
    if not math.isfinite(value):
        raise WorkoutValidationError(f"invalid {field_name}")
    return value
