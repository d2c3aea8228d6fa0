"""Location source backed by Home Assistant state."""
from __future__ import annotations

from collections.abc import Callable
import logging
from typing import Protocol

from homeassistant.const import ATTR_LATITUDE, ATTR_LONGITUDE, EVENT_CORE_CONFIG_UPDATE
from homeassistant.core import Event, EventStateChangedData, HomeAssistant, State, callback
from homeassistant.helpers.event import async_track_state_change_event

from .pyoba.models import Coordinate

_LOGGER = logging.getLogger(__name__)

LocationCallback = Callable[[Coordinate | None], None]


class LocationSource(Protocol):
    """Last known location plus a stream of updates."""

    @property
    def current_location(self) -> Coordinate | None: ...

    def subscribe(self, listener: LocationCallback) -> Callable[[], None]: ...


def _coordinate_from_state(state: State | None) -> Coordinate | None:
    if state is None:
        return None
    lat = state.attributes.get(ATTR_LATITUDE)
    lon = state.attributes.get(ATTR_LONGITUDE)
    try:
        return Coordinate(float(lat), float(lon))
    except (TypeError, ValueError):
        return None


class HomeAssistantLocation:
    """Follow a tracked entity, or the configured home location when none is set."""

    def __init__(self, hass: HomeAssistant, entity_id: str | None = None) -> None:
        self._hass = hass
        self._entity_id = entity_id

    @property
    def current_location(self) -> Coordinate | None:
        if self._entity_id:
            return _coordinate_from_state(self._hass.states.get(self._entity_id))
        if self._hass.config.latitude is None or self._hass.config.longitude is None:
            return None
        return Coordinate(self._hass.config.latitude, self._hass.config.longitude)

    def subscribe(self, listener: LocationCallback) -> Callable[[], None]:
        if self._entity_id:

            @callback
            def _state_changed(event: Event[EventStateChangedData]) -> None:
                coordinate = _coordinate_from_state(event.data["new_state"])
                _LOGGER.debug("Location from %s: %s", self._entity_id, coordinate)
                listener(coordinate)

            return async_track_state_change_event(self._hass, [self._entity_id], _state_changed)

        @callback
        def _core_config_updated(event: Event) -> None:
            listener(self.current_location)

        return self._hass.bus.async_listen(EVENT_CORE_CONFIG_UPDATE, _core_config_updated)
