"""Platform for choosing the region by hand."""
from __future__ import annotations

import logging

from homeassistant.components.select import SelectEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DATA_SERVICE, DOMAIN
from .entity import OBARegionsEntity
from .pyoba.models import RegionRecord
from .regions_service import RegionsService

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the select platform."""
    service = hass.data[DOMAIN][config_entry.entry_id][DATA_SERVICE]
    async_add_entities([OBARegionSelect(service, config_entry.entry_id)])


class OBARegionSelect(OBARegionsEntity, SelectEntity):
    """Region picker. Picking a region turns auto-select off."""

    _attr_name = "Region"
    _attr_icon = "mdi:map-marker-radius"

    def __init__(self, service: RegionsService, entry_id: str) -> None:
        super().__init__(service, entry_id, "region")

    def _selectable(self) -> list[RegionRecord]:
        return [region for region in self.service.regions if region.is_active]

    @property
    def options(self) -> list[str]:
        return [region.name for region in self._selectable()]

    @property
    def current_option(self) -> str | None:
        region = self.service.current_region
        return region.name if region else None

    async def async_select_option(self, option: str) -> None:
        region = next((r for r in self._selectable() if r.name == option), None)
        if region is None:
            raise HomeAssistantError(f"Unknown region: {option}")
        _LOGGER.debug("Region %s chosen by hand", region.name)
        self.service.set_auto_select_enabled(False)
        self.service.set_current_region(region)
        self._write_state()
