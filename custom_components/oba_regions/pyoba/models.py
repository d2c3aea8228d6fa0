# SPDX-License-Identifier: MIT
# Region model shared by the directory client, the selector and the store.
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import urlparse

from shapely import geometry

from .exceptions import MalformedRegion

LOGGER = logging.getLogger("custom_components.oba_regions.pyoba.models")

Vertex = Tuple[float, float]
Polygon = Tuple[Vertex, ...]


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True, eq=False)
class RegionRecord:
    """One OneBusAway deployment. Compared and hashed by ``id`` only."""

    id: int
    name: str
    api_base_url: Optional[str] = None
    is_active: bool = True
    is_experimental: bool = False
    supports_realtime: bool = False
    coverage: Tuple[Polygon, ...] = field(default_factory=tuple)
    language: Optional[str] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RegionRecord):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    # ---- Wire format ----
    @classmethod
    def from_dict(cls, data: Any) -> "RegionRecord":
        """Decode a directory or persisted record; raise MalformedRegion on bad input."""
        if not isinstance(data, Mapping):
            raise MalformedRegion(f"region payload is not an object: {type(data).__name__}")

        region_id = _first(data, "id", "regionId")
        if region_id is None or isinstance(region_id, bool):
            raise MalformedRegion("region has no id")
        try:
            region_id = int(region_id)
        except (TypeError, ValueError):
            raise MalformedRegion(f"region id is not an integer: {region_id!r}") from None

        name = _text(_first(data, "name", "regionName"))
        if name is None:
            raise MalformedRegion(f"region {region_id} has no name")

        is_active = bool(_first(data, "active", "isActive", default=True))
        url = _text(_first(data, "url", "obaBaseUrl", "apiBaseURL"))
        if url is not None and not _is_absolute_url(url):
            raise MalformedRegion(f"region {region_id} has an unparsable url: {url!r}")
        if is_active and url is None:
            raise MalformedRegion(f"active region {region_id} has no url")

        return cls(
            id=region_id,
            name=name,
            api_base_url=url,
            is_active=is_active,
            is_experimental=bool(_first(data, "experimental", "isExperimental", default=False)),
            supports_realtime=bool(
                _first(data, "supportsRealtime", "supportsObaRealtimeApis", default=False)
            ),
            coverage=_parse_coverage(region_id, data),
            language=_text(_first(data, "lang", "language")),
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "url": self.api_base_url,
            "active": self.is_active,
            "experimental": self.is_experimental,
            "supportsRealtime": self.supports_realtime,
            "lang": self.language,
            "region": [[[lat, lon] for lat, lon in polygon] for polygon in self.coverage],
        }


def parse_region_list(items: Iterable[Any]) -> List[RegionRecord]:
    """Decode records one by one, dropping malformed entries and duplicate ids."""
    regions: List[RegionRecord] = []
    seen: set[int] = set()
    for item in items:
        try:
            region = RegionRecord.from_dict(item)
        except MalformedRegion as err:
            LOGGER.warning("Dropping malformed region: %s", err)
            continue
        if region.id in seen:
            LOGGER.warning("Dropping duplicate region id %s (%s)", region.id, region.name)
            continue
        seen.add(region.id)
        regions.append(region)
    return regions


# ---------- helpers ----------
def _first(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _is_absolute_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _parse_coverage(region_id: int, data: Mapping[str, Any]) -> Tuple[Polygon, ...]:
    raw = _first(data, "region", "coverage")
    if raw is not None:
        if not isinstance(raw, list):
            raise MalformedRegion(f"region {region_id} coverage is not a list")
        # A single polygon may be given as a flat list of vertices
        if raw and _looks_like_vertex(raw[0]):
            raw = [raw]
        return tuple(_parse_polygon(region_id, polygon) for polygon in raw)

    bounds = data.get("bounds")
    if bounds is None:
        return ()
    if not isinstance(bounds, list):
        raise MalformedRegion(f"region {region_id} bounds is not a list")
    return tuple(_bounds_to_polygon(region_id, item) for item in bounds)


def _looks_like_vertex(value: Any) -> bool:
    if isinstance(value, Mapping):
        return "lat" in value
    return (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in value)
    )


def _parse_polygon(region_id: int, raw: Any) -> Polygon:
    if not isinstance(raw, list) or len(raw) < 3:
        raise MalformedRegion(f"region {region_id} has a polygon with fewer than 3 vertices")
    vertices = tuple(_parse_vertex(region_id, vertex) for vertex in raw)
    # Self-crossing rings have no usable area
    if not geometry.Polygon([(lon, lat) for lat, lon in vertices]).is_valid:
        raise MalformedRegion(f"region {region_id} has a self-intersecting polygon")
    return vertices


def _parse_vertex(region_id: int, raw: Any) -> Vertex:
    if isinstance(raw, Mapping):
        lat, lon = raw.get("lat"), raw.get("lon")
    elif isinstance(raw, (list, tuple)) and len(raw) == 2:
        lat, lon = raw
    else:
        raise MalformedRegion(f"region {region_id} has an invalid vertex: {raw!r}")
    return _checked_vertex(region_id, lat, lon)


def _checked_vertex(region_id: int, lat: Any, lon: Any) -> Vertex:
    try:
        if isinstance(lat, bool) or isinstance(lon, bool):
            raise TypeError
        lat, lon = float(lat), float(lon)
    except (TypeError, ValueError):
        raise MalformedRegion(f"region {region_id} has a non-numeric vertex") from None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        raise MalformedRegion(f"region {region_id} has an out-of-range vertex ({lat}, {lon})")
    return (lat, lon)


def _bounds_to_polygon(region_id: int, raw: Any) -> Polygon:
    """Convert a directory ``bounds`` rectangle (centre plus full span) to a polygon."""
    if not isinstance(raw, Mapping):
        raise MalformedRegion(f"region {region_id} has an invalid bounds entry")
    try:
        lat, lon = float(raw["lat"]), float(raw["lon"])
        half_lat, half_lon = float(raw["latSpan"]) / 2, float(raw["lonSpan"]) / 2
    except (KeyError, TypeError, ValueError):
        raise MalformedRegion(f"region {region_id} has an incomplete bounds entry") from None
    return (
        _checked_vertex(region_id, lat - half_lat, lon - half_lon),
        _checked_vertex(region_id, lat - half_lat, lon + half_lon),
        _checked_vertex(region_id, lat + half_lat, lon + half_lon),
        _checked_vertex(region_id, lat + half_lat, lon - half_lon),
    )
