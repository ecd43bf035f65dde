"""NiceGUI web UI for Mapty."""

from __future__ import annotations

from typing import Any

from nicegui import ui

from mapty.core.config import AppConfig
from mapty.core.coordinator import SyncCoordinator
from mapty.ui.presenter import workout_list_item
from mapty.workout.model import Coordinates, Workout, WorkoutValidationError
from mapty.workout.persistence import FileStorage, PersistenceAdapter

GEOLOCATION_TIMEOUT_SEC = 15.0
KIND_ACCENTS = {
    "running": "border-l-4 border-green-500",
    "cycling": "border-l-4 border-orange-500",
}
GEOLOCATION_JS = """
return await new Promise((resolve) => {
  if (!navigator.geolocation) { resolve(null); return; }
  navigator.geolocation.getCurrentPosition(
    (pos) => resolve([pos.coords.latitude, pos.coords.longitude]),
    () => resolve(null),
  );
});
"""


class LeafletMapWidget:
    def __init__(self, leaflet: Any) -> None:
        self._leaflet = leaflet

    def pan_to(self, coordinates: Coordinates, zoom_level: int) -> None:
        self._leaflet.set_center(coordinates)
        self._leaflet.set_zoom(zoom_level)

    def add_marker(self, coordinates: Coordinates) -> Any:
        return self._leaflet.marker(latlng=coordinates)

    def bind_popup(self, marker: Any, text: str) -> None:
        marker.run_method("bindPopup", text, {"autoClose": False, "closeOnClick": False})
        marker.run_method("openPopup")


class WebWorkoutView:
    def __init__(self, form_card: Any, list_column: Any, on_select: Any) -> None:
        self._form_card = form_card
        self._list_column = list_column
        self._on_select = on_select

    def show_form(self) -> None:
        self._form_card.set_visibility(True)

    def hide_form(self) -> None:
        self._form_card.set_visibility(False)

    def render_list_item(self, workout: Workout) -> None:
        item = workout_list_item(workout)
        accent = KIND_ACCENTS.get(item.kind, "")
        with self._list_column:
            with ui.card().classes(f"w-full cursor-pointer {accent}") as card:
                ui.label(item.title).classes("text-base font-semibold")
                with ui.row().classes("gap-4"):
                    for detail in item.details:
                        ui.label(f"{detail.icon} {detail.value} {detail.unit}").classes("text-sm")
        card.on("click", lambda _, workout_id=item.workout_id: self._on_select(workout_id))
        # Newest workouts sit at the top of the list.
        card.move(target_index=0)


def run_web_ui(config: AppConfig | None = None) -> int:
    cfg = config or AppConfig()

    @ui.page("/")
    async def index() -> None:
        persistence = PersistenceAdapter(FileStorage(cfg.data_dir), key=cfg.storage_key)

        with ui.row().classes("w-full h-screen no-wrap gap-0"):
            with ui.column().classes("w-[420px] h-full p-4 gap-3 overflow-y-auto"):
                ui.label("Mapty").classes("text-2xl font-bold")
                with ui.card().classes("w-full") as form_card:
                    with ui.row().classes("w-full gap-2"):
                        kind_select = ui.select(
                            {"running": "Running", "cycling": "Cycling"},
                            value="running",
                            label="Type",
                        ).classes("w-1/3")
                        distance_input = ui.number("Distance (km)", min=0).classes("w-1/4")
                        duration_input = ui.number("Duration (min)", min=0).classes("w-1/4")
                    with ui.row().classes("w-full gap-2"):
                        cadence_input = ui.number("Cadence (step/min)", min=0, precision=0)
                        elevation_input = ui.number("Elevation gain (m)")
                    with ui.row().classes("w-full justify-end gap-2"):
                        cancel_btn = ui.button("Cancel").props("outline")
                        submit_btn = ui.button("OK").props("color=primary")
                list_column = ui.column().classes("w-full gap-2")
            leaflet = ui.leaflet(center=cfg.fallback_center, zoom=cfg.zoom_level).classes(
                "grow h-full"
            )

        form_card.set_visibility(False)
        elevation_input.set_visibility(False)

        coordinator: SyncCoordinator

        def on_select(workout_id: str) -> None:
            coordinator.on_workout_selected(workout_id)

        view = WebWorkoutView(form_card, list_column, on_select)
        coordinator = SyncCoordinator(view, persistence, zoom_level=cfg.zoom_level)

        def reset_form() -> None:
            distance_input.value = None
            duration_input.value = None
            cadence_input.value = None
            elevation_input.value = None

        def on_kind_change() -> None:
            running = kind_select.value == "running"
            cadence_input.set_visibility(running)
            elevation_input.set_visibility(not running)

        def on_submit() -> None:
            payload = {
                "kind": kind_select.value,
                "distance_km": distance_input.value,
                "duration_min": duration_input.value,
                "cadence_spm": cadence_input.value,
                "elevation_gain_m": elevation_input.value,
            }
            try:
                workout = coordinator.on_submitted(payload)
            except WorkoutValidationError as exc:
                ui.notify(f"Inputs have to be positive numbers ({exc})", color="negative")
                return
            if workout is not None:
                reset_form()

        def on_cancel() -> None:
            coordinator.on_form_cancelled()
            reset_form()

        def on_map_click(e: Any) -> None:
            latlng = e.args.get("latlng") or {}
            if "lat" not in latlng or "lng" not in latlng:
                return
            coordinator.on_map_clicked((float(latlng["lat"]), float(latlng["lng"])))

        kind_select.on_value_change(lambda _: on_kind_change())
        submit_btn.on_click(on_submit)
        cancel_btn.on_click(on_cancel)

        coordinator.start()

        await ui.context.client.connected()
        try:
            position = await ui.run_javascript(GEOLOCATION_JS, timeout=GEOLOCATION_TIMEOUT_SEC)
        except TimeoutError:
            position = None

        if not isinstance(position, list) or len(position) != 2:
            coordinator.on_position_failed()
            ui.notify("Could not get your position", color="warning")
            return

        coordinator.on_position_acquired(
            (float(position[0]), float(position[1])),
            map_widget=LeafletMapWidget(leaflet),
        )
        leaflet.on("map-click", on_map_click)

    ui.run(host=cfg.host, port=cfg.port, reload=False, title="Mapty")
    return 0
