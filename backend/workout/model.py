"""Workout domain models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal, Union
from uuid import uuid4

WorkoutKind = Literal["running", "cycling"]
Coordinates = tuple[float, float]

WORKOUT_KINDS: tuple[WorkoutKind, ...] = ("running", "cycling")

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class KindStyle:
    label: str
    icon: str
    secondary_icon: str
    metric_unit: str
    secondary_unit: str


KIND_STYLES: dict[WorkoutKind, KindStyle] = {
    "running": KindStyle(
        label="Running",
        icon="🏃‍♂️",
        secondary_icon="🦶🏼",
        metric_unit="min/km",
        secondary_unit="spm",
    ),
    "cycling": KindStyle(
        label="Cycling",
        icon="🚴‍♀️",
        secondary_icon="⛰",
        metric_unit="km/h",
        secondary_unit="m",
    ),
}


@dataclass(frozen=True)
class Running:
    id: str
    created_at: datetime
    coords: Coordinates
    distance_km: float
    duration_min: float
    description: str
    cadence_spm: float
    pace_min_per_km: float
    kind: Literal["running"] = "running"

    @property
    def metric(self) -> float:
        return self.pace_min_per_km

    @property
    def secondary(self) -> float:
        return self.cadence_spm


@dataclass(frozen=True)
class Cycling:
    id: str
    created_at: datetime
    coords: Coordinates
    distance_km: float
    duration_min: float
    description: str
    elevation_gain_m: float
    speed_kmh: float
    kind: Literal["cycling"] = "cycling"

    @property
    def metric(self) -> float:
        return self.speed_kmh

    @property
    def secondary(self) -> float:
        return self.elevation_gain_m


Workout = Union[Running, Cycling]


def round_half_up(value: float, digits: int = 2) -> float:
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def compute_pace(distance_km: float, duration_min: float) -> float:
    """Minutes per kilometre."""
    return round_half_up(duration_min / distance_km)


def compute_speed(distance_km: float, duration_min: float) -> float:
    """Kilometres per hour."""
    return round_half_up(distance_km / (duration_min / 60))


def derive_metric(kind: WorkoutKind, distance_km: float, duration_min: float) -> float:
    if kind == "running":
        return compute_pace(distance_km, duration_min)
    if kind == "cycling":
        return compute_speed(distance_km, duration_min)
    raise ValueError(f"Unknown workout kind '{kind}'")


def describe(kind: WorkoutKind, created_at: datetime) -> str:
    return f"{KIND_STYLES[kind].label} on {MONTHS[created_at.month - 1]} {created_at.day}"


def new_workout_id() -> str:
    return uuid4().hex[:10]


def create_workout(
    kind: WorkoutKind,
    coords: Coordinates,
    distance_km: float,
    duration_min: float,
    cadence_or_elevation: float,
    *,
    created_at: datetime | None = None,
    workout_id: str | None = None,
) -> Workout:
    """Build a workout variant and compute its derived fields once.

    Inputs are expected to be validated already: distance and duration must
    be positive, so the derived metric never divides by zero.
    """
    stamp = created_at or datetime.now().astimezone()
    lat, lng = coords
    base = {
        "id": workout_id or new_workout_id(),
        "created_at": stamp,
        "coords": (float(lat), float(lng)),
        "distance_km": float(distance_km),
        "duration_min": float(duration_min),
        "description": describe(kind, stamp),
    }
    metric = derive_metric(kind, distance_km, duration_min)
    if kind == "running":
        return Running(
            **base,
            cadence_spm=float(cadence_or_elevation),
            pace_min_per_km=metric,
        )
    return Cycling(
        **base,
        elevation_gain_m=float(cadence_or_elevation),
        speed_kmh=metric,
    )
