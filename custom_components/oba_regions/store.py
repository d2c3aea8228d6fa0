"""Durable storage of the region list, current region and refresh bookkeeping."""
from __future__ import annotations

from datetime import datetime
import logging
from typing import Any, Protocol

from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.storage import Store
from homeassistant.util import dt as dt_util

from .const import SAVE_DELAY, STORAGE_KEY, STORAGE_VERSION
from .pyoba.exceptions import MalformedRegion, PersistenceCorrupted
from .pyoba.models import RegionRecord

_LOGGER = logging.getLogger(__name__)

KEY_REGIONS = "stored_regions"
KEY_CURRENT_REGION = "current_region"
KEY_LAST_UPDATED_AT = "regions_updated_at"
KEY_AUTO_SELECT = "automatically_select_region"


class SettingsBackend(Protocol):
    """Key/value settings with JSON-compatible values."""

    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def remove(self, key: str) -> None: ...


class MemorySettings:
    """Process-local settings, used by tests and scripts."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self.data: dict[str, Any] = dict(data or {})

    def get(self, key: str) -> Any:
        return self.data.get(key)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class HomeAssistantSettings:
    """Settings mirrored in memory and written atomically to ``.storage``.

    Reads never touch the disk after ``async_load``. Every write replaces the
    whole file through ``Store``, which writes to a temporary file and renames
    it, so a crash mid-write leaves the previous file intact.
    """

    def __init__(self, hass: HomeAssistant) -> None:
        self._store: Store[dict[str, Any]] = Store(hass, STORAGE_VERSION, STORAGE_KEY)
        self._data: dict[str, Any] = {}

    async def async_load(self) -> None:
        try:
            data = await self._store.async_load()
        except HomeAssistantError as err:
            _LOGGER.warning("Stored region settings unreadable, starting empty: %s", err)
            data = None
        if not isinstance(data, dict):
            if data is not None:
                _LOGGER.warning("Stored region settings have unexpected type %s", type(data).__name__)
            data = {}
        self._data = data

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._store.async_delay_save(self._data_to_save, SAVE_DELAY)

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._store.async_delay_save(self._data_to_save, SAVE_DELAY)

    async def async_flush(self) -> None:
        await self._store.async_save(self._data_to_save())

    def _data_to_save(self) -> dict[str, Any]:
        return dict(self._data)


class RegionStore:
    """Typed access to the four persisted region keys.

    Every ``load_*`` returns None (or the default) instead of raising when the
    stored value is missing or cannot be decoded.
    """

    def __init__(self, settings: SettingsBackend) -> None:
        self._settings = settings

    # ---- Region list ----
    def load_regions(self) -> list[RegionRecord] | None:
        try:
            return self._decode_regions(self._settings.get(KEY_REGIONS))
        except PersistenceCorrupted as err:
            _LOGGER.warning("Ignoring corrupted stored regions: %s", err)
            return None

    def save_regions(self, regions: list[RegionRecord]) -> None:
        self._settings.set(KEY_REGIONS, [region.as_dict() for region in regions])

    # ---- Current region ----
    def load_current_region(self) -> RegionRecord | None:
        raw = self._settings.get(KEY_CURRENT_REGION)
        if raw is None:
            return None
        try:
            return self._decode_region(raw)
        except PersistenceCorrupted as err:
            _LOGGER.warning("Ignoring corrupted stored current region: %s", err)
            return None

    def save_current_region(self, region: RegionRecord | None) -> None:
        if region is None:
            self._settings.remove(KEY_CURRENT_REGION)
        else:
            self._settings.set(KEY_CURRENT_REGION, region.as_dict())

    # ---- Bookkeeping ----
    def load_last_updated_at(self) -> datetime | None:
        raw = self._settings.get(KEY_LAST_UPDATED_AT)
        if raw is None:
            return None
        try:
            parsed = dt_util.parse_datetime(raw) if isinstance(raw, str) else None
        except ValueError:
            parsed = None
        if parsed is None:
            _LOGGER.warning("Ignoring corrupted stored update timestamp: %r", raw)
            return None
        return dt_util.as_utc(parsed)

    def save_last_updated_at(self, when: datetime) -> None:
        self._settings.set(KEY_LAST_UPDATED_AT, dt_util.as_utc(when).isoformat())

    def load_auto_select_enabled(self) -> bool:
        raw = self._settings.get(KEY_AUTO_SELECT)
        if isinstance(raw, bool):
            return raw
        if raw is not None:
            _LOGGER.warning("Ignoring corrupted auto-select flag: %r", raw)
        return True

    def save_auto_select_enabled(self, enabled: bool) -> None:
        self._settings.set(KEY_AUTO_SELECT, bool(enabled))

    # ---- Decoding ----
    @staticmethod
    def _decode_region(raw: Any) -> RegionRecord:
        try:
            return RegionRecord.from_dict(raw)
        except MalformedRegion as err:
            raise PersistenceCorrupted(str(err)) from err

    def _decode_regions(self, raw: Any) -> list[RegionRecord] | None:
        if raw is None:
            return None
        if not isinstance(raw, list):
            raise PersistenceCorrupted(f"stored regions is a {type(raw).__name__}, not a list")
        regions = [self._decode_region(item) for item in raw]
        if len({region.id for region in regions}) != len(regions):
            raise PersistenceCorrupted("stored regions contain duplicate ids")
        if not regions:
            raise PersistenceCorrupted("stored region list is empty")
        return regions
