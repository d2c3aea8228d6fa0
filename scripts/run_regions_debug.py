#!/usr/bin/env python3
"""
Run the regions service once against the live directory and log every notification.
Usage:
  export OBA_LAT="47.6062"
  export OBA_LON="-122.3321"
  python scripts/run_regions_debug.py
"""

import asyncio
import logging
import os

import aiohttp

from custom_components.oba_regions.pyoba import Coordinate, RegionDirectoryClient
from custom_components.oba_regions.regions_service import RegionsService, RegionsServiceObserver
from custom_components.oba_regions.store import MemorySettings, RegionStore

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("regions_debug")

DIRECTORY_URL = os.getenv("OBA_DIRECTORY_URL") or "https://regions.onebusaway.org/regions-v3.json"
LOCATION = Coordinate(float(os.getenv("OBA_LAT") or "47.6062"), float(os.getenv("OBA_LON") or "-122.3321"))


class FixedLocation:
    current_location = LOCATION

    def subscribe(self, listener):
        return lambda: None


class LoggingObserver(RegionsServiceObserver):
    def regions_list_updated(self, regions):
        log.info("Regions: %s", [r.name for r in regions])

    def current_region_updated(self, region):
        log.info("Current region: %s -> %s", region.name, region.api_base_url)

    def unable_to_select_region(self):
        log.info("No region covers %s", LOCATION)

    def region_update_cancelled(self):
        log.info("Update cancelled")

    def regions_update_failed(self, error):
        log.error("Failure: %s", error)


async def main() -> None:
    async with aiohttp.ClientSession() as session:
        service = RegionsService(
            RegionStore(MemorySettings()),
            RegionDirectoryClient(DIRECTORY_URL, session=session),
            FixedLocation(),
            observers=[LoggingObserver()],
        )
        await service.async_update_regions_list(force_update=True)
        await service.async_shutdown()


if __name__ == "__main__":
    asyncio.run(main())
