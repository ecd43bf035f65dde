"""Interfaces the coordinator calls into."""

from __future__ import annotations

from typing import Any, Protocol

from mapty.workout.model import Coordinates, Workout


class MapWidget(Protocol):
    def pan_to(self, coordinates: Coordinates, zoom_level: int) -> None: ...

    def add_marker(self, coordinates: Coordinates) -> Any: ...

    def bind_popup(self, marker: Any, text: str) -> None: ...


class WorkoutView(Protocol):
    def show_form(self) -> None: ...

    def hide_form(self) -> None: ...

    def render_list_item(self, workout: Workout) -> None: ...
