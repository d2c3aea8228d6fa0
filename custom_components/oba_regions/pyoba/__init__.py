"""OneBusAway regions client: model, directory access and region selection."""
from .bundled import BUNDLED_REGIONS, load_bundled_regions
from .directory import DEFAULT_DIRECTORY_URL, RegionDirectoryClient
from .exceptions import (
    DirectoryUnreachable,
    EmptyDirectory,
    MalformedRegion,
    NetworkUnavailable,
    PersistenceCorrupted,
    RefreshAlreadyInProgress,
    RegionsError,
)
from .models import Coordinate, RegionRecord, parse_region_list
from .selector import coverage_area, coverage_contains, select_region

__all__ = [
    "BUNDLED_REGIONS",
    "DEFAULT_DIRECTORY_URL",
    "Coordinate",
    "DirectoryUnreachable",
    "EmptyDirectory",
    "MalformedRegion",
    "NetworkUnavailable",
    "PersistenceCorrupted",
    "RefreshAlreadyInProgress",
    "RegionDirectoryClient",
    "RegionRecord",
    "RegionsError",
    "coverage_area",
    "coverage_contains",
    "load_bundled_regions",
    "parse_region_list",
    "select_region",
]
