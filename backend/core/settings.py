"""Runtime configuration, read from the environment and CLI flags."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Literal, cast

StorageMode = Literal["browser", "file"]

DEFAULT_TILE_URL = "https://{s}.tile.openstreetmap.fr/hot/{z}/{x}/{y}.png"
DEFAULT_TILE_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
)


@dataclass(frozen=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 8080
    storage: StorageMode = "browser"
    data_dir: Path = Path.home() / ".mapty"
    storage_secret: str = "mapty-local"
    log_level: str = "INFO"
    map_zoom: int = 13
    pan_duration_sec: float = 1.0
    shake_sec: float = 0.5
    geolocation_timeout_sec: float = 30.0
    tile_url: str = DEFAULT_TILE_URL
    tile_attribution: str = DEFAULT_TILE_ATTRIBUTION

    @property
    def storage_path(self) -> Path:
        return self.data_dir / "storage.json"

    def with_overrides(self, **changes: Any) -> Settings:
        clean = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **clean)


def load_settings() -> Settings:
    base = Settings()
    storage = os.environ.get("MAPTY_STORAGE", base.storage)
    if storage not in ("browser", "file"):
        raise ValueError(f"MAPTY_STORAGE must be 'browser' or 'file', got '{storage}'")
    return Settings(
        host=os.environ.get("MAPTY_HOST", base.host),
        port=int(os.environ.get("MAPTY_PORT", base.port)),
        storage=cast(StorageMode, storage),
        data_dir=Path(os.environ.get("MAPTY_DATA_DIR", base.data_dir)).expanduser(),
        storage_secret=os.environ.get("MAPTY_STORAGE_SECRET", base.storage_secret),
        log_level=os.environ.get("MAPTY_LOG_LEVEL", base.log_level).upper(),
    )
