"""Generation history store, newest first under a single key."""

from __future__ import annotations

import json
import random
import string
import time
from typing import Optional

import structlog

from viral_shorts.memory.kv_store import KeyValueStore, safe_set
from viral_shorts.models.history import HistoryEntry

logger = structlog.get_logger()

HISTORY_KEY = "vvc_history"

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_history_id() -> str:
    """Random base-36 fragment + millisecond timestamp, e.g. ``hist_k3j9x0a2lz7q1c8``."""
    fragment = "".join(random.choices(_BASE36, k=8))
    return f"hist_{fragment}{_to_base36(int(time.time() * 1000))}"


class HistoryStore:
    """In-memory mirror of the persisted history sequence.

    Every mutation rewrites the whole sequence so the persisted value always
    matches the mirror.
    """

    def __init__(self, kv: KeyValueStore):
        self._kv = kv
        self._entries: list[HistoryEntry] = []

    def load(self) -> list[HistoryEntry]:
        try:
            raw = self._kv.get(HISTORY_KEY)
        except Exception:
            logger.warning("history_store.read_failed", exc_info=True)
            raw = None
        if raw is None:
            return self.list()

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("history_store.corrupt", reason="invalid JSON")
            return self.list()

        if isinstance(parsed, list):
            self._entries = [HistoryEntry.model_validate(item) for item in parsed]
        logger.info("history_store.loaded", entry_count=len(self._entries))
        return self.list()

    def list(self) -> list[HistoryEntry]:
        return list(self._entries)

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        return next((e for e in self._entries if e.id == entry_id), None)

    def prepend(self, entry: HistoryEntry) -> None:
        self._entries = [entry, *self._entries]
        self._persist()
        logger.info("history_store.prepended", entry_id=entry.id, entry_count=len(self._entries))

    def delete(self, entry_id: str) -> bool:
        """Remove at most one entry. Unknown ids are a no-op."""
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                self._entries = self._entries[:index] + self._entries[index + 1:]
                self._persist()
                logger.info("history_store.deleted", entry_id=entry_id)
                return True
        return False

    def _persist(self) -> None:
        payload = json.dumps([e.model_dump(mode="json", by_alias=True) for e in self._entries])
        safe_set(self._kv, HISTORY_KEY, payload)
