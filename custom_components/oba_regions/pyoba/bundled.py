# SPDX-License-Identifier: MIT
# Offline region list used until the directory has been fetched once.
from __future__ import annotations

from typing import Any, Dict, List

from .models import RegionRecord, parse_region_list


def _box(south: float, west: float, north: float, east: float) -> List[List[float]]:
    return [[south, west], [south, east], [north, east], [north, west]]


BUNDLED_REGIONS: List[Dict[str, Any]] = [
    {
        "id": 0,
        "name": "Tampa Bay",
        "url": "https://api.tampa.onebusaway.org/api/",
        "active": True,
        "experimental": False,
        "supportsRealtime": True,
        "lang": "en_US",
        "region": [_box(27.55, -82.90, 28.30, -82.05)],
    },
    {
        "id": 1,
        "name": "Puget Sound",
        "url": "https://api.pugetsound.onebusaway.org/",
        "active": True,
        "experimental": False,
        "supportsRealtime": True,
        "lang": "en_US",
        "region": [
            [[46.90, -123.00], [46.90, -121.70], [48.30, -121.70], [48.30, -122.60], [47.90, -123.00]],
        ],
    },
    {
        "id": 2,
        "name": "MTA New York",
        "url": "https://bustime.mta.info/",
        "active": True,
        "experimental": False,
        "supportsRealtime": True,
        "lang": "en_US",
        # Mainland boroughs and Staten Island
        "region": [_box(40.54, -74.05, 40.92, -73.70), _box(40.49, -74.26, 40.65, -74.05)],
    },
    {
        "id": 3,
        "name": "Atlanta",
        "url": "https://atlanta.onebusaway.org/api/",
        "active": False,
        "experimental": False,
        "supportsRealtime": True,
        "lang": "en_US",
        "region": [_box(33.40, -84.80, 34.20, -83.90)],
    },
    {
        "id": 4,
        "name": "Rogue Valley",
        "url": "https://oba.rvtd.org/onebusaway-api-webapp/",
        "active": True,
        "experimental": True,
        "supportsRealtime": True,
        "lang": "en_US",
        "region": [_box(42.20, -123.00, 42.50, -122.60)],
    },
    {
        "id": 5,
        "name": "San Diego",
        "url": "https://realtime.sdmts.com/api/",
        "active": True,
        "experimental": False,
        "supportsRealtime": True,
        "lang": "en_US",
        "region": [_box(32.50, -117.40, 33.30, -116.80)],
    },
    {
        "id": 6,
        "name": "Washington, D.C.",
        "url": "https://buseta.wmata.com/onebusaway-api-webapp/",
        "active": True,
        "experimental": False,
        "supportsRealtime": True,
        "lang": "en_US",
        "region": [_box(38.70, -77.30, 39.10, -76.85)],
    },
    {
        "id": 7,
        "name": "York",
        "url": "https://oba.yrt.ca/",
        "active": True,
        "experimental": True,
        "supportsRealtime": True,
        "lang": "en_CA",
        "region": [_box(43.75, -79.70, 44.10, -79.20)],
    },
    {
        "id": 8,
        "name": "Adelaide Metro",
        "url": "https://api.adelaidemetro.com.au/api/",
        "active": True,
        "experimental": False,
        "supportsRealtime": True,
        "lang": "en_AU",
        "region": [_box(-35.40, 138.40, -34.50, 139.00)],
    },
    {
        # Inactive until the directory publishes an API endpoint
        "id": 9,
        "name": "Lima",
        "active": False,
        "experimental": True,
        "supportsRealtime": False,
        "lang": "es_PE",
        "region": [_box(-12.30, -77.20, -11.80, -76.80)],
    },
    {
        "id": 10,
        "name": "Boston",
        "url": "http://app.onebusaway.us/api/",
        "active": True,
        "experimental": True,
        "supportsRealtime": True,
        "lang": "en_US",
        "region": [_box(42.20, -71.30, 42.50, -70.90)],
    },
    {
        # Inactive until the directory publishes an API endpoint
        "id": 11,
        "name": "Hamilton",
        "active": False,
        "experimental": True,
        "supportsRealtime": False,
        "lang": "en_CA",
        "region": [_box(43.10, -80.20, 43.40, -79.60)],
    },
]


def load_bundled_regions() -> List[RegionRecord]:
    return parse_region_list(BUNDLED_REGIONS)
