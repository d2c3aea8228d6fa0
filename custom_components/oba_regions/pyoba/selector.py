# SPDX-License-Identifier: MIT
"""Pick the region whose coverage applies to a location.

Geometry is planar over (longitude, latitude) degrees. Regions are small
enough that the smallest-area tie-break gives the same ordering as a
geodesic area would, and planar shapes keep the selection a pure function
of the vertex lists.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Iterable, Optional

from shapely.geometry import MultiPolygon, Point, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union
from shapely.validation import make_valid

from .models import Coordinate, RegionRecord


@lru_cache(maxsize=128)
def _coverage_shape(coverage) -> Optional[BaseGeometry]:
    if not coverage:
        return None
    # shapely expects x, y; vertices are stored lat, lon
    shape = MultiPolygon([Polygon([(lon, lat) for lat, lon in polygon]) for polygon in coverage])
    # Records built in code skip decoding, so repair crossing or overlapping rings here
    if shape.is_valid:
        return shape
    repaired = make_valid(shape)
    if repaired.geom_type == "GeometryCollection":
        # Collapsed rings come back as lines or points; keep the areas
        repaired = unary_union([part for part in repaired.geoms if part.geom_type in ("Polygon", "MultiPolygon")])
    return repaired


def coverage_contains(region: RegionRecord, location: Coordinate) -> bool:
    """Return True when ``location`` lies inside or on the edge of the region's coverage."""
    shape = _coverage_shape(region.coverage)
    if shape is None:
        return False
    point = Point(location.longitude, location.latitude)
    return shape.covers(point)


def coverage_area(region: RegionRecord) -> float:
    shape = _coverage_shape(region.coverage)
    if shape is None:
        return 0.0
    return shape.area


def select_region(
    location: Optional[Coordinate],
    regions: Iterable[RegionRecord],
    *,
    include_experimental: bool = True,
) -> Optional[RegionRecord]:
    """Return the most specific active region covering ``location``, or None.

    Among several matches the smallest coverage area wins, then the lowest id,
    so the result does not depend on the order of ``regions``.
    """
    if location is None:
        return None

    candidates = [
        region
        for region in regions
        if region.is_active
        and (include_experimental or not region.is_experimental)
        and coverage_contains(region, location)
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda region: (coverage_area(region), region.id))
