"""Region list ownership, refresh policy and location-driven selection."""
from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from contextlib import suppress
from datetime import datetime, timedelta
import logging
from typing import Any

from homeassistant.util import dt as dt_util

from .const import STALENESS_THRESHOLD
from .location import LocationSource
from .pyoba.bundled import load_bundled_regions
from .pyoba.directory import RegionDirectoryClient
from .pyoba.exceptions import RefreshAlreadyInProgress, RegionsError
from .pyoba.models import Coordinate, RegionRecord
from .pyoba.selector import select_region
from .store import RegionStore

_LOGGER = logging.getLogger(__name__)


class RegionsServiceObserver:
    """Receives region notifications. Override the ones you care about."""

    def regions_list_updated(self, regions: list[RegionRecord]) -> None:
        """Called after a refresh replaced the region list."""

    def current_region_updated(self, region: RegionRecord) -> None:
        """Called when the current region changes to a different id."""

    def unable_to_select_region(self) -> None:
        """Called when auto-selection found no region for a known location."""

    def region_update_cancelled(self) -> None:
        """Called when an update request ended without a network fetch."""

    def regions_update_failed(self, error: RegionsError) -> None:
        """Called once when a directory fetch fails."""


class RegionsService:
    """Owns the in-memory region state for one event loop.

    Not thread-safe: construct it and call every method on the loop that runs
    the refresh task. Construction is synchronous; when the stored list is
    stale a refresh task is started on the running loop.
    """

    def __init__(
        self,
        store: RegionStore,
        client: RegionDirectoryClient,
        location: LocationSource,
        *,
        observers: Iterable[RegionsServiceObserver] = (),
        bundled_regions: Iterable[RegionRecord] | None = None,
        now: Callable[[], datetime] = dt_util.utcnow,
        include_experimental: bool = True,
    ) -> None:
        self._store = store
        self._client = client
        self._location = location
        self._now = now
        self._include_experimental = include_experimental
        self._observers: list[RegionsServiceObserver] = list(observers)
        self._refresh_task: asyncio.Task[None] | None = None

        regions = store.load_regions()
        if regions is None:
            regions = list(bundled_regions) if bundled_regions is not None else load_bundled_regions()
            _LOGGER.debug("No stored regions; seeding %d bundled regions", len(regions))
            store.save_regions(regions)
        self._regions: list[RegionRecord] = regions
        self._auto_select_enabled = store.load_auto_select_enabled()
        self._last_updated_at = store.load_last_updated_at()
        stored = store.load_current_region()
        listed = self.find_region(stored.id) if stored is not None else None
        # The list's record wins over the stored copy of the same id
        self._current_region = listed or stored

        # A stored region missing from the list is as good as none
        if self._auto_select_enabled and listed is None:
            self._auto_select(location.current_location)

        self._unsubscribe_location: Callable[[], None] | None = location.subscribe(
            self.handle_location_update
        )

        if self._is_stale():
            _LOGGER.debug("Stored regions are stale (updated %s); refreshing", self._last_updated_at)
            self._start_refresh()

    # ---- State ----
    @property
    def regions(self) -> list[RegionRecord]:
        return list(self._regions)

    @property
    def current_region(self) -> RegionRecord | None:
        return self._current_region

    @property
    def last_updated_at(self) -> datetime | None:
        return self._last_updated_at

    @property
    def auto_select_enabled(self) -> bool:
        return self._auto_select_enabled

    @property
    def is_refreshing(self) -> bool:
        return self._refresh_task is not None and not self._refresh_task.done()

    def find_region(self, region_id: int) -> RegionRecord | None:
        for region in self._regions:
            if region.id == region_id:
                return region
        return None

    # ---- Observers ----
    def add_observer(self, observer: RegionsServiceObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: RegionsServiceObserver) -> None:
        with suppress(ValueError):
            self._observers.remove(observer)

    def _notify(self, name: str, *args: Any) -> None:
        for observer in list(self._observers):
            method = getattr(observer, name, None)
            if method is None:
                continue
            try:
                method(*args)
            except Exception:  # noqa: BLE001
                _LOGGER.exception("Observer %r failed handling %s", observer, name)

    # ---- Selection ----
    def set_current_region(self, region: RegionRecord) -> None:
        """Select ``region`` explicitly; it must be part of the current list."""
        known = self.find_region(region.id)
        if known is None:
            raise ValueError(f"Unknown region id {region.id}")
        self._set_current_region(known)

    def reset_current_region(self) -> None:
        self._current_region = None
        self._store.save_current_region(None)
        if self._auto_select_enabled:
            self._auto_select(self._location.current_location)

    def set_auto_select_enabled(self, enabled: bool) -> None:
        changed = enabled != self._auto_select_enabled
        self._auto_select_enabled = enabled
        self._store.save_auto_select_enabled(enabled)
        if enabled and changed:
            self._auto_select(self._location.current_location)

    def handle_location_update(self, location: Coordinate | None) -> None:
        if location is None or not self._auto_select_enabled:
            return
        self._auto_select(location)

    def _auto_select(self, location: Coordinate | None) -> None:
        if location is None:
            return
        region = select_region(location, self._regions, include_experimental=self._include_experimental)
        if region is None:
            # The stored region stays as the last known good choice
            _LOGGER.debug("No region covers %s", location)
            self._notify("unable_to_select_region")
            return
        self._set_current_region(region)

    def _set_current_region(self, region: RegionRecord) -> None:
        previous = self._current_region
        self._current_region = region
        self._store.save_current_region(region)
        if previous is None or previous.id != region.id:
            _LOGGER.debug("Current region is now %s (%s)", region.name, region.id)
            self._notify("current_region_updated", region)

    # ---- Refresh ----
    def _is_stale(self) -> bool:
        if self._last_updated_at is None:
            return True
        age = self._now() - self._last_updated_at
        # A timestamp from the future means a skewed clock or a restored backup
        return age < timedelta(0) or age >= STALENESS_THRESHOLD

    async def async_refresh_if_stale(self) -> None:
        """Periodic check: refresh only when the list has gone stale."""
        if self.is_refreshing or not self._is_stale():
            return
        _LOGGER.debug("Region list went stale (updated %s); refreshing", self._last_updated_at)
        await self.async_update_regions_list()

    def _start_refresh(self) -> asyncio.Task[None]:
        self._refresh_task = asyncio.get_running_loop().create_task(
            self._async_refresh(), name=f"{__name__}.refresh"
        )
        return self._refresh_task

    def _refresh_task_for(self, force_update: bool) -> asyncio.Task[None] | None:
        if self.is_refreshing:
            if not force_update:
                raise RefreshAlreadyInProgress("a region refresh is already running")
            return self._refresh_task
        if not force_update and not self._is_stale():
            return None
        return self._start_refresh()

    async def async_update_regions_list(self, force_update: bool = False) -> None:
        """Refresh the region list from the directory when stale or forced.

        Concurrent forced calls share one fetch. Results reach observers, never
        the caller: this coroutine does not raise on fetch failure.
        """
        try:
            task = self._refresh_task_for(force_update)
        except RefreshAlreadyInProgress as err:
            _LOGGER.debug("Region update request dropped: %s", err)
            self._notify("region_update_cancelled")
            return
        if task is None:
            _LOGGER.debug("Region list is fresh (updated %s); skipping refresh", self._last_updated_at)
            self._notify("region_update_cancelled")
            return

        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            if task.cancelled():
                # Abandoned by async_shutdown, not a failure
                return
            raise

    async def _async_refresh(self) -> None:
        _LOGGER.debug("Fetching region list from %s", self._client.directory_url)
        try:
            regions = await self._client.fetch_regions()
        except asyncio.CancelledError:
            _LOGGER.debug("Region refresh cancelled")
            raise
        except RegionsError as err:
            _LOGGER.warning(
                "Region refresh failed, keeping %d known regions: %s", len(self._regions), err
            )
            self._notify("regions_update_failed", err)
            return
        self._apply_regions(regions)

    def _apply_regions(self, regions: list[RegionRecord]) -> None:
        self._regions = list(regions)
        self._store.save_regions(self._regions)
        self._last_updated_at = self._now()
        self._store.save_last_updated_at(self._last_updated_at)
        _LOGGER.info("Region list refreshed: %d regions", len(self._regions))

        self._notify("regions_list_updated", list(self._regions))

        previous = self._current_region
        refreshed = self.find_region(previous.id) if previous is not None else None
        if refreshed is not None:
            # Same id, possibly new url or coverage
            self._current_region = refreshed
            self._store.save_current_region(refreshed)
        elif previous is not None or self._auto_select_enabled:
            self._auto_select(self._location.current_location)

    async def async_shutdown(self) -> None:
        """Stop following the location and abandon any in-flight refresh."""
        if self._unsubscribe_location is not None:
            self._unsubscribe_location()
            self._unsubscribe_location = None
        task = self._refresh_task
        if task is not None and not task.done():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
        self._refresh_task = None
