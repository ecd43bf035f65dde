"""List-row view models for rendered workouts."""

from __future__ import annotations

from dataclasses import dataclass

from mapty.workout.model import KIND_ICONS, Workout, compute_derived_metric

DURATION_ICON = "⏱"
DERIVED_ICON = "⚡️"
CADENCE_ICON = "\U0001F9B6\U0001F3FC"
ELEVATION_ICON = "⛰"


@dataclass(frozen=True)
class WorkoutDetail:
    icon: str
    value: str
    unit: str


@dataclass(frozen=True)
class WorkoutListItem:
    workout_id: str
    kind: str
    title: str
    details: tuple[WorkoutDetail, ...]


def _fmt_number(value: float, digits: int = 1) -> str:
    if float(value).is_integer():
        return f"{int(value):d}"
    return f"{value:.{digits}f}"


def workout_list_item(workout: Workout) -> WorkoutListItem:
    derived_value, derived_unit = compute_derived_metric(workout)
    if workout.kind == "running":
        extra = WorkoutDetail(CADENCE_ICON, f"{workout.cadence_spm or 0:d}", "spm")
    else:
        extra = WorkoutDetail(
            ELEVATION_ICON, _fmt_number(workout.elevation_gain_m or 0.0), "m"
        )
    # Title drops the leading kind icon of the description.
    title = workout.description.split(" ", 1)[-1]
    return WorkoutListItem(
        workout_id=workout.id,
        kind=workout.kind,
        title=title,
        details=(
            WorkoutDetail(KIND_ICONS[workout.kind], _fmt_number(workout.distance_km), "km"),
            WorkoutDetail(DURATION_ICON, _fmt_number(workout.duration_min), "min"),
            WorkoutDetail(DERIVED_ICON, f"{derived_value:.1f}", derived_unit),
            extra,
        ),
    )
