"""
Key-value slots for the persisted cart.

Every backend exposes the same three calls and wraps its own failures in
``PersistenceError`` so the persistence adapter has one thing to catch.
"""
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from upstash_redis import Redis

from core.db import StorageKeys
from core.errors import PersistenceError


class KeyValueStorage(Protocol):
    """Device-scoped string slots."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStorage:
    """Process-local slots; lost on exit."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage:
    """One file per slot under ``directory``."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Cannot read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # Write to a sibling temp file first so readers never see half a cart
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceError(f"Cannot write {path}: {e}") from e

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"Cannot delete {path}: {e}") from e


class RedisStorage:
    """Slots in Upstash Redis, namespaced by device id."""

    def __init__(self, client: Redis, device_id: str):
        self._client = client
        self.device_id = device_id

    def _key(self, key: str) -> str:
        return StorageKeys.device_key(self.device_id, key)

    def get(self, key: str) -> Optional[str]:
        try:
            value = self._client.get(self._key(key))
        except Exception as e:
            raise PersistenceError(f"Redis GET failed: {e}") from e
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(self._key(key), value)
        except Exception as e:
            raise PersistenceError(f"Redis SET failed: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except Exception as e:
            raise PersistenceError(f"Redis DEL failed: {e}") from e
