"""Keeps the workout store, its snapshot, the list view and the map in step."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from mapty.core.config import DEFAULT_ZOOM_LEVEL
from mapty.core.ports import MapWidget, WorkoutView
from mapty.core.state import CoordinatorState
from mapty.workout.model import Coordinates, Workout
from mapty.workout.parser import build_from_submission, parse_submission
from mapty.workout.persistence import PersistenceAdapter
from mapty.workout.store import WorkoutStore

logger = logging.getLogger(__name__)


class SyncCoordinator:
    def __init__(
        self,
        view: WorkoutView,
        persistence: PersistenceAdapter,
        map_widget: MapWidget | None = None,
        store: WorkoutStore | None = None,
        zoom_level: int = DEFAULT_ZOOM_LEVEL,
    ) -> None:
        self._view = view
        self._persistence = persistence
        self._map = map_widget
        self.store = store if store is not None else WorkoutStore()
        self.zoom_level = zoom_level
        self.state = CoordinatorState(map_ready=map_widget is not None)

    def start(self) -> None:
        self.state.pending_location = None
        for workout in self._persistence.load():
            self.store.append(workout)
        logger.info("Loaded %d stored workouts", len(self.store))
        for workout in self.store.all():
            self._view.render_list_item(workout)
        self._render_pending_markers()

    def on_position_acquired(
        self,
        coordinates: Coordinates,
        map_widget: MapWidget | None = None,
    ) -> None:
        if map_widget is not None:
            self._map = map_widget
        if self._map is None:
            logger.warning("Position acquired but no map widget is attached")
            return
        self.state.map_ready = True
        self.state.user_position = coordinates
        self._map.pan_to(coordinates, self.zoom_level)
        self._render_pending_markers()

    def on_position_failed(self) -> None:
        # New workouts stay unreachable until a map click source exists.
        logger.warning("Could not get the current position")

    def on_map_clicked(self, coordinates: Coordinates) -> None:
        self.state.pending_location = coordinates
        self._view.show_form()

    def on_form_cancelled(self) -> None:
        self.state.pending_location = None
        self._view.hide_form()

    def on_submitted(self, payload: Mapping[str, Any]) -> Workout | None:
        """Create a workout at the pending map location.

        Returns ``None`` without side effects when no location is pending.
        Invalid input raises ``WorkoutValidationError`` and leaves the store,
        the snapshot and the pending location untouched.
        """
        location = self.state.pending_location
        if location is None:
            logger.debug("Ignoring submission without a pending map location")
            return None

        submission = parse_submission(payload)
        workout = build_from_submission(submission, location)

        self.store.append(workout)
        self._persistence.save(self.store)
        self._view.render_list_item(workout)
        self.render_marker(workout)

        self.state.pending_location = None
        self._view.hide_form()
        logger.info("Added %s workout %s", workout.kind, workout.id)
        return workout

    def on_workout_selected(self, workout_id: str) -> Workout | None:
        workout = self.store.find_by_id(workout_id)
        if workout is None:
            logger.debug("No workout with id %s", workout_id)
            return None

        workout.select()
        self._persistence.save(self.store)
        if self._map is not None and self.state.map_ready:
            self._map.pan_to(workout.coordinates, self.zoom_level)
        return workout

    def render_marker(self, workout: Workout) -> None:
        if self._map is None or not self.state.map_ready:
            return
        if workout.id in self.state.drawn_marker_ids:
            return
        marker = self._map.add_marker(workout.coordinates)
        self._map.bind_popup(marker, workout.description)
        self.state.drawn_marker_ids.add(workout.id)

    def _render_pending_markers(self) -> None:
        for workout in self.store.all():
            self.render_marker(workout)
