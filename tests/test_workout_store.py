from __future__ import annotations

import json
from datetime import datetime

from backend.workout.model import Running, create_workout
from backend.workout.store import WorkoutStore


def _sample_store() -> WorkoutStore:
    store = WorkoutStore()
    store.append(
        create_workout(
            "running",
            (51.5, -0.1),
            5,
            25,
            178,
            created_at=datetime(2026, 10, 1, 7, 0),
        )
    )
    store.append(
        create_workout(
            "cycling",
            (51.51, -0.12),
            20,
            60,
            300,
            created_at=datetime(2026, 10, 2, 18, 30),
        )
    )
    store.append(
        create_workout(
            "running",
            (51.49, -0.08),
            7,
            40,
            165,
            created_at=datetime(2026, 10, 3, 6, 45),
        )
    )
    return store


def test_append_keeps_insertion_order_and_all_is_restartable() -> None:
    store = _sample_store()

    first = [w.description for w in store.all()]
    second = [w.description for w in store]

    assert len(store) == 3
    assert first == ["Running on October 1", "Cycling on October 2", "Running on October 3"]
    assert first == second


def test_find_by_id() -> None:
    store = _sample_store()
    target = store.all()[1]

    assert store.find_by_id(target.id) == target
    assert store.find_by_id("missing-id") is None


def test_serialize_restore_round_trip() -> None:
    store = _sample_store()

    restored = WorkoutStore()
    restored.restore(store.serialize())

    assert restored.all() == store.all()
    assert isinstance(restored.all()[0], Running)


def test_restore_with_absent_or_empty_input_keeps_existing() -> None:
    store = _sample_store()
    before = store.all()

    for raw in (None, "", "   ", "[]"):
        store.restore(raw)

    assert store.all() == before


def test_restore_treats_corrupt_payload_as_no_data() -> None:
    store = _sample_store()
    before = store.all()

    store.restore("{not json")
    store.restore('{"workouts": []}')
    store.restore('[{"type": "running"}]')

    assert store.all() == before


def test_restore_skips_malformed_records_and_recomputes_metrics() -> None:
    source = _sample_store()
    records = json.loads(source.serialize())
    records[0]["pace_min_per_km"] = 1.23
    records.insert(1, {"id": "broken", "type": "cycling"})

    store = WorkoutStore()
    store.restore(json.dumps(records))

    assert len(store) == 3
    assert store.find_by_id("broken") is None
    first = store.all()[0]
    assert isinstance(first, Running)
    assert first.pace_min_per_km == 5.0


def test_clear_drops_everything() -> None:
    store = _sample_store()
    store.clear()

    assert len(store) == 0
    assert store.serialize() == "[]"


def test_restore_skips_repeated_ids() -> None:
    source = _sample_store()
    records = json.loads(source.serialize())
    duplicate = dict(records[2], id=records[0]["id"])
    records.append(duplicate)

    store = WorkoutStore()
    store.restore(json.dumps(records))

    assert [w.id for w in store.all()] == [w.id for w in source.all()]
    assert store.find_by_id(records[0]["id"]) == source.all()[0]


def test_serialize_appends_pending_without_storing_them() -> None:
    store = _sample_store()
    extra = create_workout("cycling", (0.0, 0.0), 10, 30, 50, workout_id="extra")

    records = json.loads(store.serialize(extra))

    assert [r["id"] for r in records][-1] == "extra"
    assert len(records) == 4
    assert len(store) == 3
