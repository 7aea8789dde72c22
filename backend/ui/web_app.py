"""NiceGUI web UI for Mapty."""

from __future__ import annotations

import logging
from typing import Any, Callable, cast

from nicegui import app, events, ui

from backend.core.settings import Settings
from backend.ui.controller import SessionController
from backend.ui.geolocation import BrowserGeolocator
from backend.ui.presenter import list_entry, popup_html, popup_options
from backend.workout.model import Coordinates, Workout, WorkoutKind
from backend.workout.storage import JsonFileStorage, KeyValueStorage, MappingStorage
from backend.workout.store import WorkoutStore

logger = logging.getLogger(__name__)

PAGE_STYLE = """
<style>
  :root {
    --mp-bg: #2d3439;
    --mp-surface: #42484d;
    --mp-text: #ececec;
    --mp-running: #00c46a;
    --mp-cycling: #ffb545;
  }
  body {
    background: var(--mp-bg);
    color: var(--mp-text);
    font-family: "Manrope", Arial, sans-serif;
  }
  .mp-sidebar {
    background: var(--mp-bg);
    height: 100vh;
    overflow-y: auto;
  }
  .mp-form, .workout {
    background: var(--mp-surface);
    border-radius: 5px;
  }
  .workout { cursor: pointer; }
  .workout--running { border-left: 5px solid var(--mp-running); }
  .workout--cycling { border-left: 5px solid var(--mp-cycling); }
  .running-popup .leaflet-popup-content-wrapper { border-left: 5px solid var(--mp-running); }
  .cycling-popup .leaflet-popup-content-wrapper { border-left: 5px solid var(--mp-cycling); }
  .form-shake { animation: mp-shake 0.5s; }
  @keyframes mp-shake {
    0%, 100% { transform: translateX(0); }
    20%, 60% { transform: translateX(-8px); }
    40%, 80% { transform: translateX(8px); }
  }
</style>
"""


class LeafletMapView:
    def __init__(
        self,
        container: ui.element,
        settings: Settings,
        on_click: Callable[[Coordinates], None],
    ) -> None:
        self._container = container
        self._settings = settings
        self._on_click = on_click
        self._map: ui.leaflet | None = None

    async def create_map(self, center: Coordinates, zoom: int) -> None:
        self._container.clear()
        with self._container:
            leaflet = ui.leaflet(center=center, zoom=zoom).classes("w-full h-full")
        leaflet.clear_layers()
        leaflet.tile_layer(
            url_template=self._settings.tile_url,
            options={"attribution": self._settings.tile_attribution},
        )
        leaflet.on("map-click", self._handle_click)
        await leaflet.initialized()
        self._map = leaflet

    def _handle_click(self, e: events.GenericEventArguments) -> None:
        latlng = cast(dict[str, Any], e.args.get("latlng") or {})
        if "lat" not in latlng or "lng" not in latlng:
            return
        self._on_click((float(latlng["lat"]), float(latlng["lng"])))

    def add_workout_marker(self, workout: Workout) -> None:
        if self._map is None:
            return
        marker = self._map.marker(latlng=workout.coords, options={"riseOnHover": True})
        marker.run_method("bindPopup", popup_html(workout), popup_options(workout))
        marker.run_method("openPopup")

    def pan_to(self, coords: Coordinates, zoom: int, duration_sec: float) -> None:
        if self._map is None:
            return
        self._map.run_map_method(
            "setView",
            [coords[0], coords[1]],
            zoom,
            {"animate": True, "pan": {"duration": duration_sec}},
        )

    def show_unavailable(self, message: str) -> None:
        self._container.clear()
        with self._container:
            ui.label(message).classes("text-lg m-auto")


class NiceGuiPageView:
    def __init__(self, on_select: Callable[[str], None]) -> None:
        self._on_select = on_select

        with ui.card().classes("w-full mp-form") as form:
            with ui.grid(columns=2).classes("w-full gap-2"):
                self.type_select = ui.select(
                    {"running": "Running", "cycling": "Cycling"},
                    value="running",
                    label="Type",
                )
                self.distance_input = ui.number("Distance", placeholder="km", min=0)
                self.duration_input = ui.number("Duration", placeholder="min", min=0)
                self.cadence_input = ui.number("Cadence", placeholder="step/min", min=0)
                self.elevation_input = ui.number("Elev Gain", placeholder="meters")
            self.submit_btn = ui.button("OK")
        self.form = form
        self.elevation_input.set_visibility(False)
        self.form.set_visibility(False)

        self.list_container = ui.column().classes("w-full gap-2")

    def fields(self) -> dict[str, Any]:
        return {
            "type": self.type_select.value,
            "distance": self.distance_input.value,
            "duration": self.duration_input.value,
            "cadence": self.cadence_input.value,
            "elevation": self.elevation_input.value,
        }

    def render_workout(self, workout: Workout) -> None:
        entry = list_entry(workout)
        with self.list_container:
            with ui.card().classes(f"w-full {entry.css_class}") as card:
                ui.label(entry.title).classes("text-base font-semibold")
                with ui.row().classes("w-full gap-4"):
                    for detail in entry.details:
                        with ui.row().classes("items-baseline gap-1"):
                            ui.label(detail.icon)
                            ui.label(detail.value).classes("text-lg")
                            ui.label(detail.unit).classes("text-xs uppercase")

                def on_pick(picked_id: str = entry.workout_id) -> None:
                    self._on_select(picked_id)

                card.on("click", on_pick)
        card.move(self.list_container, target_index=0)

    def show_form(self) -> None:
        self.form.set_visibility(True)
        self.distance_input.run_method("focus")

    def hide_form(self) -> None:
        self.form.set_visibility(False)

    def clear_fields(self) -> None:
        for field in (
            self.distance_input,
            self.duration_input,
            self.cadence_input,
            self.elevation_input,
        ):
            field.value = None

    def shake_form(self, duration_sec: float) -> None:
        self.form.classes(add="form-shake")
        ui.timer(duration_sec, lambda: self.form.classes(remove="form-shake"), once=True)

    def show_metric_field(self, kind: WorkoutKind) -> None:
        self.cadence_input.set_visibility(kind == "running")
        self.elevation_input.set_visibility(kind == "cycling")

    def notify_error(self, message: str) -> None:
        ui.notify(message, color="negative", position="center")

    def reload(self) -> None:
        ui.navigate.reload()


def _open_storage(settings: Settings) -> KeyValueStorage:
    if settings.storage == "file":
        return JsonFileStorage(settings.storage_path)
    return MappingStorage(app.storage.user)


def run_web_ui(settings: Settings) -> int:
    @ui.page("/")
    async def index_page() -> None:
        ui.add_head_html(PAGE_STYLE)
        controller: SessionController | None = None

        def on_select(workout_id: str) -> None:
            if controller is not None:
                controller.on_workout_list_click(workout_id)

        def on_map_click(coords: Coordinates) -> None:
            if controller is not None:
                controller.on_map_click(coords)

        with ui.row().classes("w-full no-wrap gap-0"):
            with ui.column().classes("w-[420px] p-4 gap-3 mp-sidebar"):
                ui.label("MAPTY").classes("text-2xl font-bold tracking-wide")
                page_view = NiceGuiPageView(on_select=on_select)
                reset_btn = ui.button("Reset").props("outline color=white")
            map_container = ui.column().classes("grow h-screen p-0")
            with map_container:
                ui.label("Locating...").classes("text-lg m-auto")

        map_view = LeafletMapView(map_container, settings, on_click=on_map_click)
        controller = SessionController(
            store=WorkoutStore(),
            storage=_open_storage(settings),
            map_view=map_view,
            page_view=page_view,
            geolocator=BrowserGeolocator(timeout_sec=settings.geolocation_timeout_sec),
            settings=settings,
        )

        def on_submit() -> None:
            if controller is not None:
                controller.on_form_submit(page_view.fields())

        def on_type_change() -> None:
            if controller is not None:
                controller.on_workout_type_change(
                    cast(WorkoutKind, page_view.type_select.value or "running")
                )

        def on_reset() -> None:
            if controller is not None:
                controller.reset()

        page_view.submit_btn.on_click(on_submit)
        page_view.form.on("keydown.enter", on_submit)
        page_view.type_select.on_value_change(lambda _: on_type_change())
        reset_btn.on_click(on_reset)

        await ui.context.client.connected()
        await controller.start()

    logger.info("Starting Mapty web UI on http://%s:%d", settings.host, settings.port)
    ui.run(
        host=settings.host,
        port=settings.port,
        reload=False,
        title="Mapty",
        storage_secret=settings.storage_secret,
    )
    return 0
