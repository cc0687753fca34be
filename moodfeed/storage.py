"""Best-effort key/value storage backends and JSON read/write helpers."""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any
from urllib.parse import quote

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """Minimal string key/value store, in the shape of browser localStorage.

    Implementations may raise on any call; callers in this package go through
    :func:`read_json` / :func:`write_json`, which absorb those failures.
    """

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the raw string stored under *key*, or ``None`` if absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete *key*.  Missing keys are ignored."""


class InMemoryStorage(KeyValueStorage):
    """Dict-backed storage.  Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage(KeyValueStorage):
    """One file per key under *directory*.

    Keys are percent-encoded into file names.  Writes go to a temporary file
    and are moved into place with :func:`os.replace`, so a reader never sees
    a half-written value.

    Args:
        directory: Where the files live.  Created lazily on first write.
    """

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory).expanduser()

    @property
    def directory(self) -> Path:
        return self._directory

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self._path_for(key)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(value, encoding="utf-8")
        os.replace(tmp_path, path)

    def remove_item(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    def _path_for(self, key: str) -> Path:
        return self._directory / f"{quote(key, safe='')}.json"


# ---------------------------------------------------------------------------
# JSON helpers
# ---------------------------------------------------------------------------


class ReadStatus(str, Enum):
    """Outcome of reading a persisted JSON value."""

    OK = "ok"
    MISSING = "missing"
    CORRUPT = "corrupt"


@dataclass(frozen=True)
class ReadResult:
    """A decoded storage read.

    Attributes:
        status: Whether the value was found, absent, or unusable.
        value: The decoded value when :attr:`status` is ``OK``, else ``None``.
    """

    status: ReadStatus
    value: Any = None

    @property
    def ok(self) -> bool:
        return self.status is ReadStatus.OK


def read_json(storage: KeyValueStorage, key: str) -> ReadResult:
    """Read and decode the JSON value under *key*.

    Never raises.  An absent key yields ``MISSING``; a storage error or a
    value that is not valid JSON (including one nested too deeply to
    decode) yields ``CORRUPT``.

    Args:
        storage: The backend to read from.
        key: Storage key.

    Returns:
        A :class:`ReadResult`.
    """
    try:
        raw = storage.get_item(key)
    except Exception:
        logger.warning("Failed to read %r from storage.", key, exc_info=True)
        return ReadResult(ReadStatus.CORRUPT)
    if raw is None:
        return ReadResult(ReadStatus.MISSING)
    try:
        return ReadResult(ReadStatus.OK, json.loads(raw))
    except (ValueError, RecursionError):
        logger.warning("Discarding unparseable value stored under %r.", key)
        return ReadResult(ReadStatus.CORRUPT)


def write_json(storage: KeyValueStorage, key: str, value: Any) -> bool:
    """Encode *value* as JSON and store it under *key*.

    Best-effort: failures are logged and reported through the return value
    only.

    Returns:
        ``True`` if the write went through.
    """
    try:
        storage.set_item(key, json.dumps(value, allow_nan=False))
    except Exception:
        logger.exception("Failed to write %r to storage.", key)
        return False
    return True
