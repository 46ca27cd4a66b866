import json
from pathlib import Path
import shutil
from typing import Any

import joblib

from .errors import FileDoesNotExistError, StorageError


class LocalStorage:
    """Local storage implementation.

    It receives a base path where files are stored, and uses that as root for all operations.

    Keys are treated as relative paths from that base path.
    For example, if the base path is `/models/tvs` and the key is `metadata.json`,
    the full path would be `/models/tvs/metadata.json`.
    """

    def __init__(self, base_path: Path):
        self._base_path = Path(base_path)

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _full_path(self, key: str) -> Path:
        return self._base_path / key

    def is_empty(self) -> bool:
        """Check whether the base path is missing or holds no entries."""
        if not self._base_path.exists():
            return True
        if not self._base_path.is_dir():
            return False
        try:
            return not any(self._base_path.iterdir())
        except OSError as e:
            raise StorageError(str(self._base_path), str(e))

    def purge(self) -> None:
        """Delete the base path recursively."""
        if not self._base_path.exists():
            return
        try:
            if self._base_path.is_dir():
                shutil.rmtree(self._base_path)
            else:
                self._base_path.unlink()
        except Exception as e:
            raise StorageError(str(self._base_path), str(e))

    def read_json(self, key: str) -> dict[str, Any]:
        """Read a JSON file from the given key."""
        path = self._full_path(key)
        if not path.exists():
            raise FileDoesNotExistError(key)
        try:
            with path.open(encoding="utf-8") as f:
                return json.load(f)
        except Exception as e:
            raise StorageError(key, str(e))

    def write_json(self, data: dict[str, Any], key: str) -> None:
        """Write a dictionary to a JSON file at the given key."""
        path = self._full_path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except Exception as e:
            raise StorageError(key, str(e))

    def read_joblib(self, key: str) -> Any:
        """Read a joblib-serialized object from the given key."""
        path = self._full_path(key)
        if not path.exists():
            raise FileDoesNotExistError(key)
        try:
            return joblib.load(path)
        except Exception as e:
            raise StorageError(key, str(e))

    def write_joblib(self, obj: Any, key: str) -> None:
        """Write an object to a joblib file at the given key."""
        path = self._full_path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            joblib.dump(obj, path)
        except Exception as e:
            raise StorageError(key, str(e))
