"""Workout domain models."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Literal
from uuid import uuid4


WorkoutKind = Literal["running", "cycling"]
Coordinates = tuple[float, float]

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

KIND_ICONS: dict[str, str] = {
    "running": "\U0001F3C3\u200d\u2642\ufe0f",
    "cycling": "\U0001F6B4\u200d\u2640\ufe0f",
}


class WorkoutValidationError(ValueError):
    """Raised when workout values cannot form a valid workout."""


@dataclass
class Workout:
    id: str
    created_at: datetime
    coordinates: Coordinates
    distance_km: float
    duration_min: float
    kind: WorkoutKind
    cadence_spm: int | None = None
    elevation_gain_m: float | None = None
    interaction_count: int = 0
    description: str = ""

    def select(self) -> None:
        self.interaction_count += 1


def describe(kind: str, created_at: datetime) -> str:
    icon = KIND_ICONS[kind]
    return f"{icon} {kind.capitalize()} on {MONTHS[created_at.month - 1]} {created_at.day:02d}"


def pace_min_per_km(workout: Workout) -> float:
    if workout.kind != "running":
        raise ValueError(f"Pace is only defined for running workouts, got {workout.kind}")
    return workout.duration_min / workout.distance_km


def speed_km_per_h(workout: Workout) -> float:
    if workout.kind != "cycling":
        raise ValueError(f"Speed is only defined for cycling workouts, got {workout.kind}")
    return workout.distance_km / (workout.duration_min / 60)


def compute_derived_metric(workout: Workout) -> tuple[float, str]:
    if workout.kind == "running":
        return pace_min_per_km(workout), "min/km"
    return speed_km_per_h(workout), "km/h"


def new_running(
    coordinates: Coordinates,
    distance_km: float,
    duration_min: float,
    cadence_spm: int,
    *,
    created_at: datetime | None = None,
    workout_id: str | None = None,
    interaction_count: int = 0,
) -> Workout:
    if isinstance(cadence_spm, bool) or not isinstance(cadence_spm, int):
        raise WorkoutValidationError("cadence_spm must be an integer")
    if cadence_spm <= 0:
        raise WorkoutValidationError("cadence_spm must be > 0")
    return _build(
        kind="running",
        coordinates=coordinates,
        distance_km=distance_km,
        duration_min=duration_min,
        created_at=created_at,
        workout_id=workout_id,
        interaction_count=interaction_count,
        cadence_spm=cadence_spm,
    )


def new_cycling(
    coordinates: Coordinates,
    distance_km: float,
    duration_min: float,
    elevation_gain_m: float,
    *,
    created_at: datetime | None = None,
    workout_id: str | None = None,
    interaction_count: int = 0,
) -> Workout:
    elevation = _require_finite(elevation_gain_m, "elevation_gain_m")
    return _build(
        kind="cycling",
        coordinates=coordinates,
        distance_km=distance_km,
        duration_min=duration_min,
        created_at=created_at,
        workout_id=workout_id,
        interaction_count=interaction_count,
        elevation_gain_m=elevation,
    )


def build_workout(
    kind: str,
    coordinates: Coordinates,
    distance_km: float,
    duration_min: float,
    *,
    cadence_spm: int | None = None,
    elevation_gain_m: float | None = None,
    created_at: datetime | None = None,
    workout_id: str | None = None,
    interaction_count: int = 0,
) -> Workout:
    if kind == "running":
        if cadence_spm is None:
            raise WorkoutValidationError("Running workouts need cadence_spm")
        return new_running(
            coordinates,
            distance_km,
            duration_min,
            cadence_spm,
            created_at=created_at,
            workout_id=workout_id,
            interaction_count=interaction_count,
        )
    if kind == "cycling":
        if elevation_gain_m is None:
            raise WorkoutValidationError("Cycling workouts need elevation_gain_m")
        return new_cycling(
            coordinates,
            distance_km,
            duration_min,
            elevation_gain_m,
            created_at=created_at,
            workout_id=workout_id,
            interaction_count=interaction_count,
        )
    raise WorkoutValidationError(f"Unknown workout kind '{kind}'. Use running or cycling")


def _build(
    *,
    kind: WorkoutKind,
    coordinates: Coordinates,
    distance_km: float,
    duration_min: float,
    created_at: datetime | None,
    workout_id: str | None,
    interaction_count: int,
    cadence_spm: int | None = None,
    elevation_gain_m: float | None = None,
) -> Workout:
    distance = _require_positive(distance_km, "distance_km")
    duration = _require_positive(duration_min, "duration_min")
    coords = _require_coordinates(coordinates)
    if isinstance(interaction_count, bool) or not isinstance(interaction_count, int):
        raise WorkoutValidationError("interaction_count must be an integer")
    if interaction_count < 0:
        raise WorkoutValidationError("interaction_count must be >= 0")

    # Local wall-clock time; the description shows the user's calendar day.
    stamp = created_at or datetime.now().astimezone()
    return Workout(
        id=workout_id or uuid4().hex,
        created_at=stamp,
        coordinates=coords,
        distance_km=distance,
        duration_min=duration,
        kind=kind,
        cadence_spm=cadence_spm,
        elevation_gain_m=elevation_gain_m,
        interaction_count=interaction_count,
        description=describe(kind, stamp),
    )


def _require_finite(value: object, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise WorkoutValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except OverflowError as exc:
        raise WorkoutValidationError(f"{field_name} must be a finite number") from exc
    if not math.isfinite(number):
        raise WorkoutValidationError(f"{field_name} must be a finite number")
    return number


def _require_positive(value: object, field_name: str) -> float:
    number = _require_finite(value, field_name)
    if number <= 0:
        raise WorkoutValidationError(f"{field_name} must be > 0")
    return number


def _require_coordinates(value: object) -> Coordinates:
    if not isinstance(value, (tuple, list)) or len(value) != 2:
        raise WorkoutValidationError("coordinates must be a (lat, lng) pair")
    lat = _require_finite(value[0], "latitude")
    lng = _require_finite(value[1], "longitude")
    return (lat, lng)
