"""Persisted key-value slots backing the local stores.

A slot container maps string keys to string values, like a browser's
local storage.  ``MemorySlots`` lives in the process; ``FileSlots`` keeps
every slot in one JSON file, re-read on every access and written after
every change (last writer wins when processes share the file).
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class SlotStorage(ABC):
    """String-keyed slot read/write API."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the slot value, or None if the slot is empty."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Replace the slot value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Empty the slot. No-op if already empty."""

    @abstractmethod
    def clear(self) -> None:
        """Empty every slot."""


class MemorySlots(SlotStorage):
    """Process-local slots."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()


class FileSlots(SlotStorage):
    """All slots in a single JSON object file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError):
            logger.warning("Corrupt slot file at %s, reading as empty", self._path)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Corrupt slot file at %s, reading as empty", self._path)
            return {}
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def _save(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)

    def clear(self) -> None:
        self._save({})
