from .detection import BrightnessCategory, FireDetection
from .query import (
    CONUS_BBOX,
    SUPPORTED_DATASETS,
    VIIRS_NOAA21_NRT,
    VIIRS_SNPP_NRT,
    BoundingBox,
    CacheEntry,
    FilterOptions,
    MapCenter,
    NearbyResult,
    ReferencePoint,
    RegionResult,
)

__all__ = [
    "BrightnessCategory",
    "FireDetection",
    "CONUS_BBOX",
    "SUPPORTED_DATASETS",
    "VIIRS_NOAA21_NRT",
    "VIIRS_SNPP_NRT",
    "BoundingBox",
    "CacheEntry",
    "FilterOptions",
    "MapCenter",
    "NearbyResult",
    "ReferencePoint",
    "RegionResult",
]
