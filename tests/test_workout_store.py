from __future__ import annotations

from mapty.workout.model import new_cycling, new_running
from mapty.workout.store import WorkoutStore


def test_append_keeps_insertion_order() -> None:
    store = WorkoutStore()
    run = new_running((1.0, 2.0), 5, 25, 180)
    ride = new_cycling((3.0, 4.0), 20, 60, 150)

    store.append(run)
    store.append(ride)

    assert [w.id for w in store.all()] == [run.id, ride.id]
    assert len(store) == 2
    assert list(store) == [run, ride]


def test_all_is_stable_until_next_append() -> None:
    store = WorkoutStore()
    store.append(new_running((1.0, 2.0), 5, 25, 180))

    first = store.all()
    assert store.all() == first

    store.append(new_running((1.0, 2.0), 3, 18, 170))
    assert len(first) == 1
    assert len(store.all()) == 2


def test_find_by_id() -> None:
    store = WorkoutStore()
    ride = new_cycling((3.0, 4.0), 20, 60, 150)
    store.append(ride)

    assert store.find_by_id(ride.id) is ride
    assert store.find_by_id("missing") is None


def test_find_by_id_on_empty_store() -> None:
    assert WorkoutStore().find_by_id("anything") is None
