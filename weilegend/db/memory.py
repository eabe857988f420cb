"""
Save repository implementations.

InMemorySaveRepository keeps saves in a dictionary, making tests fast
and isolated. JsonFileSaveRepository keeps one JSON document per key in
a directory for the command-line client.
"""

from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path

from weilegend.db.interfaces import SaveData

logger = logging.getLogger(__name__)


class InMemorySaveRepository:
    """In-memory implementation of SaveRepository for testing."""

    def __init__(self) -> None:
        self._saves: dict[str, SaveData] = {}

    def load(self, key: str) -> SaveData | None:
        data = self._saves.get(key)
        return deepcopy(data) if data is not None else None

    def save(self, key: str, data: SaveData) -> None:
        self._saves[key] = deepcopy(data)

    def delete(self, key: str) -> None:
        self._saves.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._saves)


class JsonFileSaveRepository:
    """
    File-backed implementation of SaveRepository.

    Each key maps to ``<directory>/<key>.json``. Writes go through a
    temporary file and a rename so a crash never leaves half a save.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def load(self, key: str) -> SaveData | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Unreadable save %s: %s", path, e)
            return None
        if not isinstance(data, dict):
            logger.warning("Save %s is not a JSON object", path)
            return None
        return data

    def save(self, key: str, data: SaveData) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(path)

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
