"""Mutable state owned by one browser session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from backend.workout.model import Coordinates, WorkoutKind

SessionPhase = Literal["idle", "awaiting_form_input"]


@dataclass
class SessionState:
    pending_coords: Coordinates | None = None
    map_center: Coordinates | None = None
    form_visible: bool = False
    selected_kind: WorkoutKind = "running"

    @property
    def map_ready(self) -> bool:
        return self.map_center is not None

    @property
    def phase(self) -> SessionPhase:
        return "awaiting_form_input" if self.pending_coords is not None else "idle"
