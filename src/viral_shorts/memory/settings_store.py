"""Product settings store: single current value, seeded with a default."""

from __future__ import annotations

import json

import structlog

from viral_shorts.memory.kv_store import KeyValueStore, safe_set
from viral_shorts.models.product import DEFAULT_PRODUCT_SETTINGS, ProductSettings

logger = structlog.get_logger()

SETTINGS_KEY = "vvc_settings"


class SettingsStore:
    def __init__(self, kv: KeyValueStore):
        self._kv = kv
        self._current: ProductSettings = DEFAULT_PRODUCT_SETTINGS

    @property
    def current(self) -> ProductSettings:
        return self._current

    def load(self) -> ProductSettings:
        """Read the persisted settings, seeding the default when absent.

        An unreadable value falls back to the default in memory only.
        """
        try:
            raw = self._kv.get(SETTINGS_KEY)
        except Exception:
            logger.warning("settings_store.read_failed", exc_info=True)
            self._current = DEFAULT_PRODUCT_SETTINGS
            return self._current

        if raw is None:
            self._current = DEFAULT_PRODUCT_SETTINGS
            self._persist()
            logger.info("settings_store.seeded", product_name=self._current.product_name)
            return self._current

        try:
            self._current = ProductSettings.model_validate(json.loads(raw))
        except json.JSONDecodeError:
            logger.warning("settings_store.corrupt", reason="invalid JSON")
            self._current = DEFAULT_PRODUCT_SETTINGS
        return self._current

    def save(self, product_settings: ProductSettings) -> ProductSettings:
        self._current = product_settings
        self._persist()
        logger.info("settings_store.saved", product_name=product_settings.product_name)
        return self._current

    def _persist(self) -> None:
        safe_set(self._kv, SETTINGS_KEY, self._current.model_dump_json(by_alias=True))
