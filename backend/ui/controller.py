"""Session controller coordinating map, form, list and persistence."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from backend.core.settings import Settings
from backend.core.state import SessionState
from backend.ui.geolocation import GeolocationUnavailable, Geolocator
from backend.workout.model import Coordinates, Workout, WorkoutKind, create_workout
from backend.workout.parser import WorkoutValidationError, parse_workout_form
from backend.workout.storage import KeyValueStorage
from backend.workout.store import STORAGE_KEY, WorkoutStore

logger = logging.getLogger(__name__)


class MapView(Protocol):
    async def create_map(self, center: Coordinates, zoom: int) -> None: ...

    def add_workout_marker(self, workout: Workout) -> None: ...

    def pan_to(self, coords: Coordinates, zoom: int, duration_sec: float) -> None: ...

    def show_unavailable(self, message: str) -> None: ...


class PageView(Protocol):
    def render_workout(self, workout: Workout) -> None: ...

    def show_form(self) -> None: ...

    def hide_form(self) -> None: ...

    def clear_fields(self) -> None: ...

    def shake_form(self, duration_sec: float) -> None: ...

    def show_metric_field(self, kind: WorkoutKind) -> None: ...

    def notify_error(self, message: str) -> None: ...

    def reload(self) -> None: ...


class SessionController:
    def __init__(
        self,
        *,
        store: WorkoutStore,
        storage: KeyValueStorage,
        map_view: MapView,
        page_view: PageView,
        geolocator: Geolocator,
        settings: Settings | None = None,
    ) -> None:
        self._store = store
        self._storage = storage
        self._map = map_view
        self._page = page_view
        self._geolocator = geolocator
        self._settings = settings or Settings()
        self.state = SessionState()

    @property
    def store(self) -> WorkoutStore:
        return self._store

    async def start(self) -> None:
        self._store.restore(self._storage.get(STORAGE_KEY))
        try:
            center = await self._geolocator.current_position()
        except GeolocationUnavailable as exc:
            logger.warning("Geolocation unavailable: %s", exc)
            self._page.notify_error("Could not get your position")
            self._map.show_unavailable("Could not get your position")
            return

        await self._map.create_map(center, self._settings.map_zoom)
        self.state.map_center = center
        for workout in self._store.all():
            self._show_workout(workout)

    def on_map_click(self, coords: Coordinates) -> None:
        if not self.state.map_ready:
            return
        self.state.pending_coords = coords
        self.state.form_visible = True
        self._page.clear_fields()
        self._page.show_form()

    def on_form_submit(self, fields: dict[str, Any]) -> Workout | None:
        coords = self.state.pending_coords
        if coords is None:
            return None

        try:
            form = parse_workout_form(
                kind=fields.get("type"),
                distance=fields.get("distance"),
                duration=fields.get("duration"),
                cadence=fields.get("cadence"),
                elevation=fields.get("elevation"),
            )
        except WorkoutValidationError as exc:
            logger.debug("Rejected workout form: %s", exc)
            self._page.shake_form(self._settings.shake_sec)
            return None

        workout = create_workout(
            form.kind,
            coords,
            form.distance_km,
            form.duration_min,
            form.cadence_or_elevation,
        )
        try:
            self._storage.set(STORAGE_KEY, self._store.serialize(workout))
        except OSError as exc:
            logger.warning("Could not save workout: %s", exc)
            self._page.notify_error("Could not save workout")
            return None
        self._store.append(workout)
        self._show_workout(workout)

        self._page.hide_form()
        self._page.clear_fields()
        self.state.pending_coords = None
        self.state.form_visible = False
        return workout

    def on_workout_type_change(self, kind: WorkoutKind) -> None:
        self.state.selected_kind = kind
        self._page.show_metric_field(kind)

    def on_workout_list_click(self, workout_id: str) -> None:
        if not self.state.map_ready:
            return
        workout = self._store.find_by_id(workout_id)
        if workout is None:
            return
        self._map.pan_to(
            workout.coords,
            self._settings.map_zoom,
            self._settings.pan_duration_sec,
        )

    def reset(self) -> None:
        self._storage.remove(STORAGE_KEY)
        self._store.clear()
        self.state = SessionState()
        logger.info("Cleared stored workouts")
        self._page.reload()

    def _show_workout(self, workout: Workout) -> None:
        self._map.add_workout_marker(workout)
        self._page.render_workout(workout)
