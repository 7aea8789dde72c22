"""In-memory ordered workout collection and its JSON round trip."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

from backend.workout.model import Workout
from backend.workout.parser import WorkoutRecordError, workout_from_record, workout_to_record

logger = logging.getLogger(__name__)

STORAGE_KEY = "workouts"


class WorkoutStore:
    def __init__(self) -> None:
        self._workouts: list[Workout] = []

    def __len__(self) -> int:
        return len(self._workouts)

    def __iter__(self) -> Iterator[Workout]:
        return iter(self.all())

    def append(self, workout: Workout) -> None:
        self._workouts.append(workout)
        logger.debug("Appended workout %s (%s)", workout.id, workout.kind)

    def all(self) -> tuple[Workout, ...]:
        return tuple(self._workouts)

    def find_by_id(self, workout_id: str) -> Workout | None:
        for workout in self._workouts:
            if workout.id == workout_id:
                return workout
        return None

    def clear(self) -> None:
        self._workouts = []

    def serialize(self, *pending: Workout) -> str:
        """JSON for the stored workouts followed by any ``pending`` ones."""
        return json.dumps(
            [workout_to_record(workout) for workout in (*self._workouts, *pending)],
            ensure_ascii=True,
        )

    def restore(self, raw: str | None) -> None:
        """Replace the collection with persisted records.

        Absent, blank, unparsable or empty payloads leave the store as is.
        Records that cannot be rebuilt, or that repeat an earlier id, are
        skipped; if none survive, the payload counts as empty.
        """
        if raw is None or not raw.strip():
            return
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring unparsable stored workouts: %s", exc)
            return
        if not isinstance(payload, list):
            logger.warning("Ignoring stored workouts: expected a list")
            return
        if not payload:
            return

        restored: list[Workout] = []
        seen_ids: set[str] = set()
        for index, item in enumerate(payload):
            try:
                workout = workout_from_record(item)
            except WorkoutRecordError as exc:
                logger.warning("Skipping stored workout %d: %s", index + 1, exc)
                continue
            if workout.id in seen_ids:
                logger.warning(
                    "Skipping stored workout %d: duplicate id %s", index + 1, workout.id
                )
                continue
            seen_ids.add(workout.id)
            restored.append(workout)
        if not restored:
            return
        self._workouts = restored
        logger.debug("Restored %d workouts", len(restored))
