from __future__ import annotations

import json
from pathlib import Path

from mapty.workout.model import (
    compute_derived_metric,
    new_cycling,
    new_running,
)
from mapty.workout.persistence import (
    FileStorage,
    MemoryStorage,
    PersistenceAdapter,
    workout_to_record,
)
from mapty.workout.store import WorkoutStore


class FailingStorage:
    def read(self, key: str) -> str | None:
        raise OSError("disk unavailable")

    def write(self, key: str, text: str) -> None:
        raise OSError("disk full")


def _sample_store() -> WorkoutStore:
    store = WorkoutStore()
    run = new_running((40.0, -73.0), 5, 25, 180)
    run.select()
    store.append(run)
    store.append(new_cycling((40.1, -73.2), 20, 60, -12.5))
    return store


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    store = _sample_store()
    adapter = PersistenceAdapter(FileStorage(tmp_path))

    assert adapter.save(store)
    loaded = PersistenceAdapter(FileStorage(tmp_path)).load()

    assert loaded == list(store.all())
    for original, rebuilt in zip(store.all(), loaded):
        assert rebuilt is not original
        assert rebuilt.description == original.description
        assert compute_derived_metric(rebuilt) == compute_derived_metric(original)
    loaded[1].select()
    assert loaded[1].interaction_count == 1


def test_snapshot_layout(tmp_path: Path) -> None:
    store = _sample_store()
    storage = FileStorage(tmp_path)
    PersistenceAdapter(storage).save(store)

    payload = json.loads((tmp_path / "workouts.json").read_text(encoding="utf-8"))

    assert [item["kind"] for item in payload] == ["running", "cycling"]
    assert payload[0]["cadenceSpm"] == 180
    assert payload[0]["interactionCount"] == 1
    assert "elevationGainM" not in payload[0]
    assert payload[1]["elevationGainM"] == -12.5
    assert "cadenceSpm" not in payload[1]
    assert payload[1]["coordinates"] == [40.1, -73.2]
    assert "description" not in payload[0]
    assert "paceMinPerKm" not in payload[0]


def test_save_overwrites_previous_snapshot() -> None:
    storage = MemoryStorage()
    adapter = PersistenceAdapter(storage)
    store = WorkoutStore()
    store.append(new_running((1.0, 2.0), 5, 25, 180))
    adapter.save(store)
    store.append(new_running((1.0, 2.0), 3, 18, 170))
    adapter.save(store)

    assert len(json.loads(storage.slots["workouts"])) == 2


def test_load_without_snapshot_is_empty(tmp_path: Path) -> None:
    assert PersistenceAdapter(FileStorage(tmp_path / "missing")).load() == []
    assert PersistenceAdapter(MemoryStorage()).load() == []


def test_load_corrupt_snapshot_is_empty() -> None:
    assert PersistenceAdapter(MemoryStorage({"workouts": "{not json"})).load() == []
    assert PersistenceAdapter(MemoryStorage({"workouts": '{"id": "a"}'})).load() == []


def test_load_skips_invalid_records_and_keeps_order() -> None:
    good_a = workout_to_record(new_running((1.0, 2.0), 5, 25, 180))
    good_b = workout_to_record(new_cycling((1.0, 2.0), 20, 60, 150))
    bad = dict(good_a, id="bad", distanceKm=-3)
    storage = MemoryStorage({"workouts": json.dumps([good_a, bad, "junk", good_b])})

    loaded = PersistenceAdapter(storage).load()

    assert [w.id for w in loaded] == [good_a["id"], good_b["id"]]


def test_storage_failures_degrade_quietly() -> None:
    adapter = PersistenceAdapter(FailingStorage())

    assert adapter.load() == []
    assert adapter.save(_sample_store()) is False


def test_custom_key_uses_its_own_slot() -> None:
    storage = MemoryStorage()
    PersistenceAdapter(storage, key="other").save(_sample_store())

    assert "other" in storage.slots
    assert PersistenceAdapter(storage).load() == []


def test_load_snapshot_with_invalid_utf8_is_empty(tmp_path: Path) -> None:
    (tmp_path / "workouts.json").write_bytes(b"\xff\xfe[garbage")

    assert PersistenceAdapter(FileStorage(tmp_path)).load() == []


def test_load_skips_record_with_oversized_number() -> None:
    good = workout_to_record(new_running((1.0, 2.0), 5, 25, 180))
    huge = dict(good, id="huge")
    text = json.dumps([huge, good]).replace(
        '"distanceKm": 5.0', '"distanceKm": 1' + "0" * 400, 1
    )
    storage = MemoryStorage({"workouts": text})

    loaded = PersistenceAdapter(storage).load()

    assert [w.id for w in loaded] == [good["id"]]
