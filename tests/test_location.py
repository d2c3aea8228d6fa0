from types import SimpleNamespace

from homeassistant.core import State

from custom_components.oba_regions.location import HomeAssistantLocation
from custom_components.oba_regions.pyoba.models import Coordinate


def _hass(latitude=47.6, longitude=-122.3, states=None):
    states = states or {}
    return SimpleNamespace(
        config=SimpleNamespace(latitude=latitude, longitude=longitude),
        states=SimpleNamespace(get=states.get),
    )


def test_home_location_without_entity():
    assert HomeAssistantLocation(_hass()).current_location == Coordinate(47.6, -122.3)


def test_missing_home_location():
    assert HomeAssistantLocation(_hass(latitude=None)).current_location is None


def test_tracked_entity_location():
    state = State("person.rider", "not_home", {"latitude": 40.7, "longitude": -74.0})
    hass = _hass(states={"person.rider": state})
    assert HomeAssistantLocation(hass, "person.rider").current_location == Coordinate(40.7, -74.0)


def test_tracked_entity_without_coordinates():
    hass = _hass(states={"person.rider": State("person.rider", "unknown")})
    assert HomeAssistantLocation(hass, "person.rider").current_location is None
    assert HomeAssistantLocation(_hass(), "person.nobody").current_location is None
