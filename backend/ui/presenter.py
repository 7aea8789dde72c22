"""Map popup and list-entry content derived from a workout."""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any

from backend.workout.model import KIND_STYLES, Workout

DURATION_ICON = "⏱"
METRIC_ICON = "⚡️"


@dataclass(frozen=True)
class WorkoutDetail:
    icon: str
    value: str
    unit: str


@dataclass(frozen=True)
class WorkoutListEntry:
    workout_id: str
    kind: str
    title: str
    css_class: str
    details: tuple[WorkoutDetail, ...]


def _fmt_value(value: float, digits: int | None = None) -> str:
    if digits is not None:
        return f"{value:.{digits}f}"
    if float(value).is_integer():
        return f"{int(value):d}"
    return f"{value}"


def popup_html(workout: Workout) -> str:
    style = KIND_STYLES[workout.kind]
    return f"<p>{style.icon} {html.escape(workout.description)}</p>"


def popup_options(workout: Workout) -> dict[str, Any]:
    return {
        "maxWidth": 1000,
        "minWidth": 100,
        "autoClose": False,
        "closeOnClick": False,
        "className": f"{workout.kind}-popup",
    }


def list_entry(workout: Workout) -> WorkoutListEntry:
    style = KIND_STYLES[workout.kind]
    return WorkoutListEntry(
        workout_id=workout.id,
        kind=workout.kind,
        title=workout.description,
        css_class=f"workout workout--{workout.kind}",
        details=(
            WorkoutDetail(style.icon, _fmt_value(workout.distance_km), "km"),
            WorkoutDetail(DURATION_ICON, _fmt_value(workout.duration_min), "min"),
            WorkoutDetail(METRIC_ICON, _fmt_value(workout.metric, 2), style.metric_unit),
            WorkoutDetail(style.secondary_icon, _fmt_value(workout.secondary), style.secondary_unit),
        ),
    )


def summary_line(workout: Workout) -> str:
    entry = list_entry(workout)
    bits = " | ".join(f"{d.value} {d.unit}" for d in entry.details)
    lat, lng = workout.coords
    return f"{workout.id}  {entry.title:<22} {bits}  @ {lat:.4f},{lng:.4f}"
