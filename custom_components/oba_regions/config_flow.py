from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.core import callback
from homeassistant.config_entries import ConfigFlow, ConfigFlowResult

from .const import (
    CONF_DIRECTORY_URL,
    CONF_LOCATION_ENTITY,
    CONF_SHOW_EXPERIMENTAL,
    DEFAULT_DIRECTORY_URL,
    DOMAIN,
)

USER_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_DIRECTORY_URL, default=DEFAULT_DIRECTORY_URL): str,
        vol.Optional(CONF_LOCATION_ENTITY): str,
    }
)


class OBARegionsConfigFlow(ConfigFlow, domain=DOMAIN):
    """Config flow for OneBusAway regions."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None) -> ConfigFlowResult:
        if user_input is None:
            return self.async_show_form(step_id="user", data_schema=USER_SCHEMA)

        # One region service per installation
        await self.async_set_unique_id(DOMAIN)
        self._abort_if_unique_id_configured()

        data = {CONF_DIRECTORY_URL: user_input[CONF_DIRECTORY_URL].strip()}
        if entity_id := (user_input.get(CONF_LOCATION_ENTITY) or "").strip():
            data[CONF_LOCATION_ENTITY] = entity_id

        return self.async_create_entry(title="OneBusAway Regions", data=data)

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: config_entries.ConfigEntry) -> config_entries.OptionsFlow:
        return OBARegionsOptionsFlow()


class OBARegionsOptionsFlow(config_entries.OptionsFlow):
    """Options: whether experimental regions take part in auto-selection."""

    async def async_step_init(self, user_input: dict[str, Any] | None = None) -> ConfigFlowResult:
        if user_input is not None:
            return self.async_create_entry(title="", data=user_input)

        schema = vol.Schema(
            {
                vol.Required(
                    CONF_SHOW_EXPERIMENTAL,
                    default=self.config_entry.options.get(CONF_SHOW_EXPERIMENTAL, True),
                ): bool,
            }
        )
        return self.async_show_form(step_id="init", data_schema=schema)
