"""String-keyed storage backends for the local route history."""

from __future__ import annotations

import os
import re
import tempfile
import threading
from pathlib import Path
from typing import Optional, Protocol

from filelock import FileLock

from ..config import settings

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")
LOCK_TIMEOUT_SECONDS = 10.0


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def compare_and_set(self, key: str, expected: Optional[str], value: str) -> bool:
        """Write ``value`` only if the stored value still equals ``expected``."""
        ...

    def delete(self, key: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Process-local store, mainly for tests and ephemeral sessions."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._values.get(key)

    def compare_and_set(self, key: str, expected: Optional[str], value: str) -> bool:
        with self._lock:
            if self._values.get(key) != expected:
                return False
            self._values[key] = value
            return True

    def delete(self, key: str) -> None:
        with self._lock:
            self._values.pop(key, None)


class FileKeyValueStore:
    """One UTF-8 file per key under the data root.

    Compare-and-set holds an OS-level lock on ``<key>.json.lock`` so stores in
    other threads or processes sharing the same root are serialized. Writes go to
    a temporary file in the same directory and are moved into place with
    ``os.replace`` so readers never observe a partial document.
    """

    def __init__(self, root: Path | None = None, lock_timeout: float = LOCK_TIMEOUT_SECONDS) -> None:
        self.root = (root or settings.data_root).resolve()
        self.store_root = self.root / "store"
        self.store_root.mkdir(parents=True, exist_ok=True)
        self.lock_timeout = lock_timeout

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key '{key}'.")
        return self.store_root / f"{key}.json"

    def _file_lock(self, path: Path) -> FileLock:
        return FileLock(str(path.with_name(f"{path.name}.lock")), timeout=self.lock_timeout)

    def _read(self, path: Path) -> Optional[str]:
        try:
            with path.open("r", encoding="utf-8") as handle:
                return handle.read()
        except FileNotFoundError:
            return None

    def get(self, key: str) -> Optional[str]:
        return self._read(self._path(key))

    def compare_and_set(self, key: str, expected: Optional[str], value: str) -> bool:
        path = self._path(key)
        with self._file_lock(path):
            if self._read(path) != expected:
                return False
            fd, tmp_name = tempfile.mkstemp(dir=self.store_root, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
            return True

    def delete(self, key: str) -> None:
        path = self._path(key)
        with self._file_lock(path):
            path.unlink(missing_ok=True)
