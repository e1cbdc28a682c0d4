"""Key-value persistence for settings and history.

Values are stored as serialized text and rewritten wholesale on every write.
Reads of a missing or unreadable slot return None; failed writes are logged
and dropped so in-memory state stays authoritative for the session.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Protocol

import structlog

logger = structlog.get_logger()


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryKeyValueStore:
    """Dict-backed store, used for tests and ephemeral sessions."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._store: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        self._store[key] = value


def _safe_key(key: str) -> str:
    return re.sub(r"[^a-zA-Z0-9._-]+", "_", key)


class FileKeyValueStore:
    """One text file per key under a data directory."""

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{_safe_key(key)}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError:
            logger.warning("kv_store.read_failed", key=key, path=str(path), exc_info=True)
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(".tmp")
            tmp.write_text(value, encoding="utf-8")
            tmp.replace(path)
        except OSError:
            logger.warning("kv_store.write_failed", key=key, path=str(path), exc_info=True)


def safe_set(store: KeyValueStore, key: str, value: str) -> None:
    """Write through any store, never letting a failure escape."""
    try:
        store.set(key, value)
    except Exception:
        logger.warning("kv_store.write_failed", key=key, exc_info=True)
