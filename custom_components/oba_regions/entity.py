"""Base entity for the OneBusAway regions integration."""
from homeassistant.helpers.device_registry import DeviceEntryType, DeviceInfo
from homeassistant.helpers.entity import Entity

from .const import DOMAIN
from .pyoba.exceptions import RegionsError
from .pyoba.models import RegionRecord
from .regions_service import RegionsService, RegionsServiceObserver


class OBARegionsEntity(Entity, RegionsServiceObserver):
    """Entity that follows the regions service while it is added to Home Assistant."""

    _attr_has_entity_name = True
    _attr_should_poll = False

    def __init__(self, service: RegionsService, entry_id: str, key: str) -> None:
        """Initialize the entity."""
        self.service = service
        self._attr_unique_id = f"{entry_id}_{key}"
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, entry_id)},
            manufacturer="OneBusAway",
            name="OneBusAway Regions",
            entry_type=DeviceEntryType.SERVICE,
        )

    async def async_added_to_hass(self) -> None:
        await super().async_added_to_hass()
        self.service.add_observer(self)
        self.async_on_remove(lambda: self.service.remove_observer(self))

    def _write_state(self) -> None:
        if self.hass is not None:
            self.async_write_ha_state()

    def regions_list_updated(self, regions: list[RegionRecord]) -> None:
        self._write_state()

    def current_region_updated(self, region: RegionRecord) -> None:
        self._write_state()

    def regions_update_failed(self, error: RegionsError) -> None:
        self._write_state()
