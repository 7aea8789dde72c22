from __future__ import annotations

from pathlib import Path

import pytest

from backend.cli.main import main
from backend.workout.model import create_workout
from backend.workout.storage import JsonFileStorage
from backend.workout.store import STORAGE_KEY, WorkoutStore


def _seed(data_dir: Path) -> None:
    store = WorkoutStore()
    store.append(create_workout("running", (51.5, -0.1), 5, 25, 178, workout_id="run-1"))
    JsonFileStorage(data_dir / "storage.json").set(STORAGE_KEY, store.serialize())


def test_list_prints_saved_workouts(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _seed(tmp_path)

    assert main(["--list", "--data-dir", str(tmp_path)]) == 0

    out = capsys.readouterr().out
    assert "run-1" in out
    assert "5.00 min/km" in out


def test_list_without_workouts(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--list", "--data-dir", str(tmp_path)]) == 0
    assert "No workouts saved" in capsys.readouterr().out


def test_reset_clears_file_storage(tmp_path: Path) -> None:
    _seed(tmp_path)

    assert main(["--reset", "--data-dir", str(tmp_path)]) == 0
    assert JsonFileStorage(tmp_path / "storage.json").get(STORAGE_KEY) is None


def test_no_action_prints_help() -> None:
    assert main([]) == 1
