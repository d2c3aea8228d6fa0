from __future__ import annotations
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import CONF_LOCATION_ENTITY, DATA_SERVICE, DOMAIN


async def async_get_config_entry_diagnostics(hass: HomeAssistant, entry: ConfigEntry) -> dict[str, Any]:
    data = hass.data.get(DOMAIN, {}).get(entry.entry_id, {})
    service = data.get(DATA_SERVICE)
    redacted = {**entry.as_dict()} if hasattr(entry, "as_dict") else {"data": getattr(entry, "data", {})}
    if "data" in redacted and isinstance(redacted["data"], dict):
        red = redacted["data"].copy()
        if CONF_LOCATION_ENTITY in red:
            red[CONF_LOCATION_ENTITY] = "***"
        redacted["data"] = red
    if service is None:
        return {"config_entry": redacted}

    region = service.current_region
    last_updated = service.last_updated_at
    return {
        "config_entry": redacted,
        "regions_count": len(service.regions),
        "region_ids": [r.id for r in service.regions],
        "current_region": {"id": region.id, "name": region.name} if region else None,
        "regions_updated_at": last_updated.isoformat() if last_updated else None,
        "auto_select": service.auto_select_enabled,
        "refreshing": service.is_refreshing,
    }
