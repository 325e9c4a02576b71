"""
Durable key-value storage for the client.

Values are opaque strings (the local store writes JSON text into them).
``JsonFileStorage`` keeps every key in one JSON document and replaces the
file atomically on each write, so a crash mid-write leaves the previous
document intact.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod

from director_os.client.exceptions import LocalStoreError

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """Minimal string key-value interface."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key was never written."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileStorage(KeyValueStorage):
    """All keys in a single JSON object on disk.

    The document is re-read on every access so two clients sharing a file
    see each other's writes (last write wins).
    """

    def __init__(self, path: str) -> None:
        self.path = os.path.expanduser(path)

    def _load(self) -> dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, encoding="utf-8") as fh:
                document = json.load(fh)
        except (OSError, ValueError) as exc:
            raise LocalStoreError(self.path, str(exc)) from exc
        if not isinstance(document, dict):
            raise LocalStoreError(self.path, "top-level value is not an object")
        return document

    def _dump(self, document: dict[str, str]) -> None:
        directory = os.path.dirname(self.path) or "."
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".director_os-", suffix=".json", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(document, fh, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        document = self._load()
        document[key] = value
        self._dump(document)

    def remove(self, key: str) -> None:
        document = self._load()
        if key in document:
            del document[key]
            self._dump(document)
