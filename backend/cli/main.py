"""Terminal CLI entrypoint for Mapty."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from backend.core.settings import Settings, load_settings
from backend.ui.presenter import summary_line
from backend.workout.storage import JsonFileStorage
from backend.workout.store import STORAGE_KEY, WorkoutStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mapty workout tracker")
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI) with map and workout list",
    )
    parser.add_argument("--web-host", default=None, help="Host bind for --ui-web")
    parser.add_argument("--web-port", type=int, default=None, help="Port for --ui-web")
    parser.add_argument(
        "--storage",
        choices=["browser", "file"],
        default=None,
        help="Persist workouts per browser or in a local JSON file",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding storage.json for file storage",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print workouts saved in file storage",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete workouts saved in file storage",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_list(settings: Settings) -> int:
    store = WorkoutStore()
    store.restore(JsonFileStorage(settings.storage_path).get(STORAGE_KEY))
    if not store.all():
        print("No workouts saved")
        return 0
    for workout in store:
        print(summary_line(workout))
    return 0


def run_reset(settings: Settings) -> int:
    JsonFileStorage(settings.storage_path).remove(STORAGE_KEY)
    logger.info("Cleared stored workouts in %s", settings.storage_path)
    print(f"Cleared workouts in {settings.storage_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings().with_overrides(
        host=args.web_host,
        port=args.web_port,
        storage=args.storage,
        data_dir=args.data_dir.expanduser() if args.data_dir else None,
        log_level=args.log_level,
    )
    configure_logging(settings.log_level)

    if args.reset:
        return run_reset(settings)
    if args.list:
        return run_list(settings)
    if args.ui_web:
        from backend.ui.web_app import run_web_ui

        return run_web_ui(settings)

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
