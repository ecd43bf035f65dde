"""Workout parsing from form submissions and stored records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from mapty.workout.model import (
    Coordinates,
    Workout,
    WorkoutValidationError,
    build_workout,
)


class WorkoutParseError(WorkoutValidationError):
    """Raised when a submission or stored record is invalid."""


@dataclass(frozen=True)
class WorkoutSubmission:
    kind: str
    distance_km: float
    duration_min: float
    cadence_spm: int | None = None
    elevation_gain_m: float | None = None


_SUBMISSION_ALIASES: dict[str, tuple[str, ...]] = {
    "kind": ("kind", "type"),
    "distance_km": ("distance_km", "distanceKm", "distance"),
    "duration_min": ("duration_min", "durationMin", "duration"),
    "cadence_spm": ("cadence_spm", "cadenceSpm", "cadence"),
    "elevation_gain_m": ("elevation_gain_m", "elevationGainM", "elevation"),
}


def parse_submission(payload: Mapping[str, Any]) -> WorkoutSubmission:
    kind_obj = _lookup(payload, "kind")
    if kind_obj is None:
        raise WorkoutParseError("Missing workout kind")
    kind = str(kind_obj).strip().lower()

    distance_km = _parse_float_field(_lookup(payload, "distance_km"), "distance_km")
    duration_min = _parse_float_field(_lookup(payload, "duration_min"), "duration_min")

    if kind == "running":
        return WorkoutSubmission(
            kind=kind,
            distance_km=distance_km,
            duration_min=duration_min,
            cadence_spm=_parse_int_field(_lookup(payload, "cadence_spm"), "cadence_spm"),
        )
    if kind == "cycling":
        return WorkoutSubmission(
            kind=kind,
            distance_km=distance_km,
            duration_min=duration_min,
            elevation_gain_m=_parse_float_field(
                _lookup(payload, "elevation_gain_m"), "elevation_gain_m"
            ),
        )
    raise WorkoutParseError(f"Unknown workout kind '{kind_obj}'. Use running or cycling")


def build_from_submission(
    submission: WorkoutSubmission,
    coordinates: Coordinates,
) -> Workout:
    return build_workout(
        submission.kind,
        coordinates,
        submission.distance_km,
        submission.duration_min,
        cadence_spm=submission.cadence_spm,
        elevation_gain_m=submission.elevation_gain_m,
    )


def parse_record(raw: object, index: int = 0) -> Workout:
    """Rebuild a typed workout from one stored snapshot record.

    The stored ``kind`` picks the variant and the workout goes through the same
    construction path as a fresh submission, so derived metrics and the
    description are recomputed rather than read back. Derived fields present
    in the record are ignored.
    """
    if not isinstance(raw, dict):
        raise WorkoutParseError(f"Record {index + 1}: must be an object")

    workout_id = raw.get("id")
    if not isinstance(workout_id, str) or not workout_id.strip():
        raise WorkoutParseError(f"Record {index + 1}: invalid id")

    created_at = _parse_timestamp(raw.get("createdAt"), index=index)

    coords_obj = raw.get("coordinates")
    if not isinstance(coords_obj, list) or len(coords_obj) != 2:
        raise WorkoutParseError(f"Record {index + 1}: coordinates must be [lat, lng]")

    kind = raw.get("kind")
    cadence_obj = raw.get("cadenceSpm")
    cadence_spm: int | None = None
    if cadence_obj is not None:
        cadence_spm = _parse_int_field(cadence_obj, "cadenceSpm", index=index)

    try:
        return build_workout(
            str(kind),
            (coords_obj[0], coords_obj[1]),
            raw.get("distanceKm"),  # type: ignore[arg-type]
            raw.get("durationMin"),  # type: ignore[arg-type]
            cadence_spm=cadence_spm,
            elevation_gain_m=raw.get("elevationGainM"),
            created_at=created_at,
            workout_id=workout_id,
            interaction_count=raw.get("interactionCount", 0),
        )
    except WorkoutValidationError as exc:
        raise WorkoutParseError(f"Record {index + 1}: {exc}") from exc


def _lookup(payload: Mapping[str, Any], field_name: str) -> object:
    for alias in _SUBMISSION_ALIASES[field_name]:
        if alias in payload:
            return payload[alias]
    return None


def _parse_timestamp(raw: object, *, index: int) -> datetime:
    if not isinstance(raw, str):
        raise WorkoutParseError(f"Record {index + 1}: invalid createdAt")
    try:
        stamp = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except ValueError as exc:
        raise WorkoutParseError(f"Record {index + 1}: invalid createdAt") from exc
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


def _parse_float_field(raw: object, field_name: str) -> float:
    if raw is None or isinstance(raw, bool):
        raise WorkoutParseError(f"invalid {field_name}")
    if isinstance(raw, str) and raw.strip() == "":
        raise WorkoutParseError(f"{field_name} is required")
    try:
        return float(str(raw).strip())
    except ValueError as exc:
        raise WorkoutParseError(f"invalid {field_name}") from exc


def _parse_int_field(raw: object, field_name: str, index: int | None = None) -> int:
    prefix = f"Record {index + 1}: " if index is not None else ""
    if raw is None or isinstance(raw, bool):
        raise WorkoutParseError(f"{prefix}invalid {field_name}")
    if isinstance(raw, int):
        return raw
    try:
        number = raw if isinstance(raw, float) else float(str(raw).strip())
    except ValueError as exc:
        raise WorkoutParseError(f"{prefix}invalid {field_name}") from exc
    if not number.is_integer():
        raise WorkoutParseError(f"{prefix}{field_name} must be a whole number")
    return int(number)
