"""OneBusAway regions: pick the transit region for the Home Assistant location."""
from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from homeassistant.helpers.event import async_track_time_interval
from homeassistant.helpers.typing import ConfigType

from .const import (
    CONF_DIRECTORY_URL,
    CONF_LOCATION_ENTITY,
    CONF_SHOW_EXPERIMENTAL,
    DATA_CLIENT,
    DATA_SERVICE,
    DATA_SETTINGS,
    DEFAULT_DIRECTORY_URL,
    DOMAIN,
    PLATFORMS,
    REFRESH_CHECK_INTERVAL,
    REQUEST_TIMEOUT,
)
from .location import HomeAssistantLocation
from .pyoba.directory import RegionDirectoryClient
from .regions_service import RegionsService
from .store import HomeAssistantSettings, RegionStore

_LOGGER = logging.getLogger(__name__)


async def async_setup(hass: HomeAssistant, config: ConfigType) -> bool:
    return True


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    hass.data.setdefault(DOMAIN, {})

    settings = HomeAssistantSettings(hass)
    await settings.async_load()

    client = RegionDirectoryClient(
        entry.data.get(CONF_DIRECTORY_URL, DEFAULT_DIRECTORY_URL),
        session=async_get_clientsession(hass),
        timeout=REQUEST_TIMEOUT,
    )
    service = RegionsService(
        RegionStore(settings),
        client,
        HomeAssistantLocation(hass, entry.data.get(CONF_LOCATION_ENTITY)),
        include_experimental=entry.options.get(CONF_SHOW_EXPERIMENTAL, True),
    )
    _LOGGER.debug(
        "Regions service ready: %d regions, current=%s",
        len(service.regions),
        service.current_region.name if service.current_region else None,
    )

    hass.data[DOMAIN][entry.entry_id] = {
        DATA_SERVICE: service,
        DATA_CLIENT: client,
        DATA_SETTINGS: settings,
    }

    @callback
    def _async_check_staleness(_now) -> None:
        entry.async_create_background_task(
            hass, service.async_refresh_if_stale(), f"{DOMAIN}_refresh_check"
        )

    entry.async_on_unload(
        async_track_time_interval(hass, _async_check_staleness, REFRESH_CHECK_INTERVAL)
    )
    entry.async_on_unload(entry.add_update_listener(_async_update_listener))
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    return True


async def _async_update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        data = hass.data[DOMAIN].pop(entry.entry_id, None)
        if data:
            await data[DATA_SERVICE].async_shutdown()
            await data[DATA_SETTINGS].async_flush()
    return unload_ok
