"""Platform for the region list refresh button."""
from __future__ import annotations

import logging

from homeassistant.components.button import ButtonEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DATA_SERVICE, DOMAIN
from .entity import OBARegionsEntity
from .regions_service import RegionsService

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the button platform."""
    service = hass.data[DOMAIN][config_entry.entry_id][DATA_SERVICE]
    async_add_entities([OBARefreshRegionsButton(service, config_entry.entry_id)])


class OBARefreshRegionsButton(OBARegionsEntity, ButtonEntity):
    """Download the region directory now, ignoring the staleness window."""

    _attr_name = "Refresh regions"
    _attr_icon = "mdi:refresh"
    _attr_entity_category = EntityCategory.CONFIG

    def __init__(self, service: RegionsService, entry_id: str) -> None:
        super().__init__(service, entry_id, "refresh_regions")

    async def async_press(self) -> None:
        """Handle the button press."""
        _LOGGER.debug("Forced region refresh requested")
        await self.service.async_update_regions_list(force_update=True)
