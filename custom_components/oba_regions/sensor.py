"""Current region sensor."""
from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import SensorEntity
from homeassistant.config_entries import ConfigEntry
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
    """Set up the sensor platform."""
    service = hass.data[DOMAIN][config_entry.entry_id][DATA_SERVICE]
    async_add_entities([OBACurrentRegionSensor(service, config_entry.entry_id)])


class OBACurrentRegionSensor(OBARegionsEntity, SensorEntity):
    """Name of the region that applies to the tracked location."""

    _attr_name = "Current region"
    _attr_icon = "mdi:bus-marker"

    def __init__(self, service: RegionsService, entry_id: str) -> None:
        super().__init__(service, entry_id, "current_region")

    @property
    def native_value(self) -> str | None:
        region = self.service.current_region
        return region.name if region else None

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        region = self.service.current_region
        last_updated = self.service.last_updated_at
        attrs: dict[str, Any] = {
            "regions_count": len(self.service.regions),
            "regions_updated_at": last_updated.isoformat() if last_updated else None,
            "auto_select": self.service.auto_select_enabled,
        }
        if region is not None:
            attrs.update(
                {
                    "region_id": region.id,
                    "api_base_url": region.api_base_url,
                    "supports_realtime": region.supports_realtime,
                    "experimental": region.is_experimental,
                    "language": region.language,
                }
            )
        return attrs
