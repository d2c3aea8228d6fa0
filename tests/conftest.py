# tests/conftest.py
"""
Pytest configuration for local + CI:
- Block sockets by default via pytest-socket.
- Allow localhost (127.0.0.1) + UNIX sockets automatically for tests using `aiohttp_server`.
- Register marks to avoid warnings.
- Shared fakes for the regions service: directory client, location source, observer.
"""

from __future__ import annotations

import asyncio
from datetime import datetime

import pytest
import pytest_asyncio
from homeassistant.util import dt as dt_util

from custom_components.oba_regions.pyoba.models import Coordinate, RegionRecord
from custom_components.oba_regions.regions_service import RegionsService, RegionsServiceObserver
from custom_components.oba_regions.store import MemorySettings, RegionStore

# ---- pytest-socket integration (optional) ----
try:
    from pytest_socket import (
        enable_socket as _enable_socket,
        disable_socket as _disable_socket,
        socket_allow_hosts,
    )

    HAVE_PYTEST_SOCKET = True
except Exception:  # plugin not installed
    HAVE_PYTEST_SOCKET = False


def pytest_configure(config: pytest.Config) -> None:
    # Register custom markers to prevent unknown mark warnings
    config.addinivalue_line("markers", "enable_socket: allow network sockets for this test")
    config.addinivalue_line("markers", "disable_socket: block network sockets for this test")

    if HAVE_PYTEST_SOCKET:
        # our test servers bind on localhost
        socket_allow_hosts(["127.0.0.1", "localhost"])


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests that use aiohttp_server to allow localhost sockets."""
    for item in items:
        fixturenames = getattr(item, "fixturenames", ()) or ()
        if "aiohttp_server" in fixturenames:
            item.add_marker(pytest.mark.enable_socket)


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_setup(item: pytest.Item):
    """
    Default: sockets OFF (blocked), UNIX sockets still allowed for the asyncio loop.
    If test is marked with @pytest.mark.enable_socket (set above automatically for aiohttp_server),
    enable sockets for this test.
    """
    if HAVE_PYTEST_SOCKET:
        if item.get_closest_marker("enable_socket"):
            _enable_socket()
        else:
            _disable_socket(allow_unix_socket=True)
    yield


# ---- Region fixtures ----
NOW = datetime(2026, 10, 18, 12, 0, tzinfo=dt_util.UTC)

SEATTLE = Coordinate(47.632445, -122.312607)
GULF_OF_GUINEA = Coordinate(0.0, 0.0)

PUGET_SOUND = {
    "id": 1,
    "name": "Puget Sound",
    "url": "https://api.pugetsound.onebusaway.org/",
    "active": True,
    "experimental": False,
    "supportsRealtime": True,
    "lang": "en_US",
    "region": [[[46.9, -123.0], [46.9, -121.7], [48.3, -121.7], [48.3, -123.0]]],
}

CUSTOM_MINNEAPOLIS = {
    "id": 99,
    "name": "Custom Region",
    "url": "https://oba.minneapolis.example.com/",
    "active": True,
    "experimental": False,
    "supportsRealtime": False,
    "lang": "en_US",
    "region": [[[44.8, -93.5], [44.8, -93.0], [45.2, -93.0], [45.2, -93.5]]],
}


class FakeDirectoryClient:
    directory_url = "https://directory.test/regions.json"

    def __init__(self, regions: list[RegionRecord] | None = None) -> None:
        self.regions = regions if regions is not None else [RegionRecord.from_dict(PUGET_SOUND)]
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.calls = 0

    async def fetch_regions(self) -> list[RegionRecord]:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.regions)


class FakeLocation:
    def __init__(self, location: Coordinate | None = None) -> None:
        self.current_location = location
        self.listeners: list = []

    def subscribe(self, listener):
        self.listeners.append(listener)
        return lambda: self.listeners.remove(listener)

    def move(self, location: Coordinate | None) -> None:
        self.current_location = location
        for listener in list(self.listeners):
            listener(location)


class RecordingObserver(RegionsServiceObserver):
    def __init__(self) -> None:
        self.events: list[tuple] = []
        self.list_updated = asyncio.Event()
        self.failed = asyncio.Event()

    def names(self) -> list[str]:
        return [event[0] for event in self.events]

    def regions_list_updated(self, regions):
        self.events.append(("regions_list_updated", regions))
        self.list_updated.set()

    def current_region_updated(self, region):
        self.events.append(("current_region_updated", region))

    def unable_to_select_region(self):
        self.events.append(("unable_to_select_region",))

    def region_update_cancelled(self):
        self.events.append(("region_update_cancelled",))

    def regions_update_failed(self, error):
        self.events.append(("regions_update_failed", error))
        self.failed.set()


@pytest.fixture
def settings() -> MemorySettings:
    return MemorySettings()


@pytest.fixture
def store(settings) -> RegionStore:
    return RegionStore(settings)


@pytest.fixture
def client() -> FakeDirectoryClient:
    return FakeDirectoryClient()


@pytest.fixture
def location() -> FakeLocation:
    return FakeLocation()


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest_asyncio.fixture
async def make_service(store, client, location, observer):
    services: list[RegionsService] = []

    def _make(**kwargs) -> RegionsService:
        kwargs.setdefault("observers", [observer])
        kwargs.setdefault("now", lambda: NOW)
        service = RegionsService(store, client, location, **kwargs)
        services.append(service)
        return service

    yield _make

    for service in services:
        await service.async_shutdown()
