"""Platform for the auto-select switch."""
from typing import Any

from homeassistant.components.switch import SwitchEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DATA_SERVICE, DOMAIN
from .entity import OBARegionsEntity
from .regions_service import RegionsService


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the switch platform."""
    service = hass.data[DOMAIN][config_entry.entry_id][DATA_SERVICE]
    async_add_entities([OBAAutoSelectSwitch(service, config_entry.entry_id)])


class OBAAutoSelectSwitch(OBARegionsEntity, SwitchEntity):
    """Follow the location when on; keep the chosen region when off."""

    _attr_name = "Automatically select region"
    _attr_icon = "mdi:crosshairs-gps"
    _attr_entity_category = EntityCategory.CONFIG

    def __init__(self, service: RegionsService, entry_id: str) -> None:
        """Initialize the auto-select switch."""
        super().__init__(service, entry_id, "auto_select")

    @property
    def is_on(self) -> bool:
        return self.service.auto_select_enabled

    async def async_turn_on(self, **kwargs: Any) -> None:
        self.service.set_auto_select_enabled(True)
        self._write_state()

    async def async_turn_off(self, **kwargs: Any) -> None:
        self.service.set_auto_select_enabled(False)
        self._write_state()
