"""JSON file key-value backend.

Stores every key in a single JSON object on disk, so values survive
across sessions the way browser local storage does.
"""

import json
import os
from pathlib import Path

from ..errors import PersistenceError
from .base import KeyValueStore


class JsonFileKeyValueStore(KeyValueStore):
    """File-backed key-value store.

    Every write rewrites the whole file (last write wins). Reads of a
    missing file behave like an empty store.
    """

    def __init__(self, path: str | Path = "~/.creatorai/store.json"):
        self._path = Path(path).expanduser()

    def _read_all(self, key: str) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise PersistenceError("read", key, e) from e
        if not isinstance(data, dict):
            raise PersistenceError("read", key, ValueError("store file is not a JSON object"))
        return data

    def _write_all(self, key: str, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise PersistenceError("write", key, e) from e

    def get(self, key: str) -> str | None:
        value = self._read_all(key).get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all(key)
        data[key] = value
        self._write_all(key, data)

    def remove(self, key: str) -> None:
        data = self._read_all(key)
        if key in data:
            del data[key]
            self._write_all(key, data)

    @property
    def backend_type(self) -> str:
        return "file"

    @property
    def path(self) -> Path:
        return self._path
