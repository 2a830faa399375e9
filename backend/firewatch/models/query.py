from dataclasses import dataclass
from datetime import datetime
from typing import Any, List

from pydantic import BaseModel

from .detection import FireDetection

VIIRS_SNPP_NRT = "VIIRS_SNPP_NRT"
VIIRS_NOAA21_NRT = "VIIRS_NOAA21_NRT"
SUPPORTED_DATASETS = (VIIRS_SNPP_NRT, VIIRS_NOAA21_NRT)


class FilterOptions(BaseModel):
    exclude_flares: bool = True
    predictable_only: bool = False


class BoundingBox(BaseModel):
    west: float
    south: float
    east: float
    north: float

    def to_firms(self) -> str:
        """FIRMS area path segment: west,south,east,north."""
        return f"{self.west:g},{self.south:g},{self.east:g},{self.north:g}"


# Roughly the contiguous US
CONUS_BBOX = BoundingBox(west=-125.0, south=24.0, east=-66.0, north=50.0)


class MapCenter(BaseModel):
    latitude: float
    longitude: float


class ReferencePoint(BaseModel):
    latitude: float
    longitude: float
    radius_miles: float


class NearbyResult(BaseModel):
    detections: List[FireDetection]


class RegionResult(BaseModel):
    bbox: BoundingBox
    dataset: str
    day_window: int
    options: FilterOptions
    detections: List[FireDetection]
    count: int
    default_map_center: MapCenter = MapCenter(latitude=38.0, longitude=-98.0)
    default_zoom: int = 4
    cached_at: datetime


@dataclass(frozen=True)
class CacheEntry:
    key: str
    stored_at: int  # epoch millis
    payload: Any
