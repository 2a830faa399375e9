import math
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_serializer


class BrightnessCategory(str, Enum):
    UNKNOWN = "unknown"
    CALM = "calm"
    MODERATE = "moderate"
    HIGH = "high"
    SEVERE = "severe"


class FireDetection(BaseModel):
    """
    One VIIRS hotspot from the FIRMS area feed, normalized.

    brightness and frp may be NaN when the feed cell is empty or garbled;
    they serialize as null.
    """

    latitude: float
    longitude: float

    # bright_ti4, Kelvin
    brightness: float
    # 0-100, see geo_utils.confidence_to_percent
    confidence: float

    satellite: str
    instrument: str
    frp: float
    # "D" / "N"
    day_night: str

    brightness_category: BrightnessCategory
    predictable: bool

    timestamp: Optional[datetime] = None

    # nearby mode only
    distance_from_center_miles: Optional[float] = None

    @field_serializer("brightness", "frp")
    def _nan_as_null(self, value: float) -> Optional[float]:
        return value if math.isfinite(value) else None
