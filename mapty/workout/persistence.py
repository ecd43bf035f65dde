"""Local persistence for the workout list."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Protocol

from mapty.workout.model import Workout
from mapty.workout.parser import WorkoutParseError, parse_record
from mapty.workout.store import WorkoutStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "workouts"


def default_data_dir() -> Path:
    return Path.home() / ".mapty"


class StorageMedium(Protocol):
    def read(self, key: str) -> str | None: ...

    def write(self, key: str, text: str) -> None: ...


class FileStorage:
    """Keeps each key in its own ``<key>.json`` file under ``base_dir``."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir = base_dir or default_data_dir()

    def path_for(self, key: str) -> Path:
        safe = re.sub(r"[^a-zA-Z0-9_-]+", "-", key.strip()).strip("-")
        return self.base_dir / f"{safe or 'default'}.json"

    def read(self, key: str) -> str | None:
        target = self.path_for(key)
        if not target.exists():
            return None
        return target.read_text(encoding="utf-8")

    def write(self, key: str, text: str) -> None:
        target = self.path_for(key)
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp = target.with_suffix(".json.tmp")
        tmp.write_text(text, encoding="utf-8")
        tmp.replace(target)


class MemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.slots: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self.slots.get(key)

    def write(self, key: str, text: str) -> None:
        self.slots[key] = text


def workout_to_record(workout: Workout) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": workout.id,
        "createdAt": workout.created_at.isoformat(),
        "coordinates": [workout.coordinates[0], workout.coordinates[1]],
        "distanceKm": workout.distance_km,
        "durationMin": workout.duration_min,
        "kind": workout.kind,
        "interactionCount": workout.interaction_count,
    }
    if workout.kind == "running":
        record["cadenceSpm"] = workout.cadence_spm
    else:
        record["elevationGainM"] = workout.elevation_gain_m
    return record


class PersistenceAdapter:
    """Writes full store snapshots and rebuilds typed workouts from them."""

    def __init__(self, storage: StorageMedium, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def save(self, store: WorkoutStore) -> bool:
        payload = [workout_to_record(workout) for workout in store.all()]
        text = json.dumps(payload, ensure_ascii=True, indent=2)
        try:
            self._storage.write(self._key, text)
        except OSError as exc:
            logger.warning("Could not persist %d workouts: %s", len(payload), exc)
            return False
        logger.debug("Persisted %d workouts under '%s'", len(payload), self._key)
        return True

    def load(self) -> list[Workout]:
        try:
            text = self._storage.read(self._key)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read stored workouts: %s", exc)
            return []
        if text is None or not text.strip():
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring unparsable workout snapshot: %s", exc)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring workout snapshot that is not a list")
            return []

        out: list[Workout] = []
        for index, raw in enumerate(data):
            try:
                out.append(parse_record(raw, index=index))
            except WorkoutParseError as exc:
                logger.warning("Skipping stored workout: %s", exc)
                continue
        return out
