# weekplan/storage.py
"""Flat key/value storage backends (the localStorage contract).

Values are strings. `set_item` may raise OSError (quota, disk); callers in
this package go through PersistenceAdapter, which absorbs those failures.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Dict, Iterator, Optional, Protocol

import orjson


class StorageQuotaError(OSError):
    """Raised when a write would exceed the storage quota."""


class Storage(Protocol):
    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...

    def keys(self) -> Iterator[str]:
        ...


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None, *, quota_bytes: Optional[int] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})
        self._quota = quota_bytes

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        value = str(value)
        if self._quota is not None:
            used = sum(len(k) + len(v) for k, v in self._items.items() if k != key)
            if used + len(key) + len(value) > self._quota:
                raise StorageQuotaError(f"storage quota exceeded writing {key!r}")
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)


class FileStorage:
    """All keys in one JSON object on disk.

    The file is re-read on every access so a second process sees the last
    committed state; writes replace the file atomically.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        try:
            obj = orjson.loads(raw)
        except orjson.JSONDecodeError:
            # Unreadable file behaves like empty storage; slots fall back to defaults.
            return {}
        if not isinstance(obj, dict):
            return {}
        return {str(k): v for k, v in obj.items() if isinstance(v, str)}

    def _write(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = orjson.dumps(items, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS)
        fd, tmp = tempfile.mkstemp(prefix=".storage-", suffix=".tmp", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp, self.path)
        except BaseException:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = str(value)
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if key in items:
            del items[key]
            self._write(items)

    def keys(self) -> Iterator[str]:
        return iter(list(self._read()))
