"""In-memory ordered workout collection for one session."""

from __future__ import annotations

from typing import Iterable, Iterator

from mapty.workout.model import Workout


class WorkoutStore:
    def __init__(self, workouts: Iterable[Workout] = ()) -> None:
        self._workouts: list[Workout] = list(workouts)

    def append(self, workout: Workout) -> None:
        # Duplicate ids are a caller error and are not checked here.
        self._workouts.append(workout)

    def all(self) -> tuple[Workout, ...]:
        return tuple(self._workouts)

    def find_by_id(self, workout_id: str) -> Workout | None:
        for workout in self._workouts:
            if workout.id == workout_id:
                return workout
        return None

    def __len__(self) -> int:
        return len(self._workouts)

    def __iter__(self) -> Iterator[Workout]:
        return iter(self.all())
