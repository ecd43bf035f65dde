"""Shared runtime state for the workout coordinator."""

from __future__ import annotations

from dataclasses import dataclass, field

from mapty.workout.model import Coordinates


@dataclass
class CoordinatorState:
    pending_location: Coordinates | None = None
    map_ready: bool = False
    user_position: Coordinates | None = None
    drawn_marker_ids: set[str] = field(default_factory=set)
