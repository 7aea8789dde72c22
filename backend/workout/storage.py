"""Local key-value persistence used by the workout store."""

from __future__ import annotations

import json
import logging
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


def _default_storage_path() -> Path:
    return Path.home() / ".mapty" / "storage.json"


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MappingStorage:
    """Adapter over any mutable mapping, e.g. NiceGUI's per-browser storage."""

    def __init__(self, mapping: MutableMapping[str, Any] | None = None) -> None:
        self._mapping: MutableMapping[str, Any] = {} if mapping is None else mapping

    def get(self, key: str) -> str | None:
        value = self._mapping.get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        self._mapping[key] = value

    def remove(self, key: str) -> None:
        self._mapping.pop(key, None)


class JsonFileStorage:
    """Single JSON object on disk mapping keys to string values."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or _default_storage_path()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring storage file %s: not a JSON object", self.path)
            return {}
        return {str(k): v for k, v in payload.items() if isinstance(v, str)}

    def _write(self, payload: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(payload, ensure_ascii=True, indent=2), encoding="utf-8")
        tmp.replace(self.path)

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        payload = self._read()
        payload[key] = value
        self._write(payload)

    def remove(self, key: str) -> None:
        payload = self._read()
        if payload.pop(key, None) is not None:
            self._write(payload)
