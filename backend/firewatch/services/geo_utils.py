# firewatch/services/geo_utils.py
"""
Pure helpers for FIRMS detections: distance, confidence, brightness
classification and the gas-flare heuristic.
"""
import math
from dataclasses import dataclass
from typing import Optional, Union

from ..models import BoundingBox, BrightnessCategory

EARTH_RADIUS_MILES = 3958.8
MILES_PER_DEGREE = 69.0

PREDICTABLE_MIN_BRIGHTNESS = 325.0
PREDICTABLE_MIN_CONFIDENCE = 50.0

# VIIRS reports confidence as l / n / h
CONFIDENCE_TOKENS = {
    "l": 30.0,
    "low": 30.0,
    "n": 60.0,
    "nominal": 60.0,
    "h": 90.0,
    "high": 90.0,
}

# (upper bound, label), ascending. Matches the map colour ramp.
BRIGHTNESS_LADDER = [
    (320.0, BrightnessCategory.CALM),
    (340.0, BrightnessCategory.MODERATE),
    (360.0, BrightnessCategory.HIGH),
]


@dataclass(frozen=True)
class FlareThresholds:
    """
    A night detection is treated as a likely gas flare when FRP, brightness
    and confidence are all strictly below these limits.
    """

    max_frp: float = 5.0
    max_brightness: float = 330.0
    max_confidence: float = 60.0


DEFAULT_FLARE_THRESHOLDS = FlareThresholds()


def distance_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in miles (haversine). NaN for non-finite input."""
    if not all(math.isfinite(v) for v in (lat1, lon1, lat2, lon2)):
        return math.nan
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # float noise can push a a hair above 1 for antipodal points
    a = min(1.0, a)
    return 2 * EARTH_RADIUS_MILES * math.asin(math.sqrt(a))


def _to_float(value) -> float:
    if value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def confidence_to_percent(raw: Union[str, float, int, None]) -> float:
    """
    Normalize FIRMS confidence to 0-100.

    MODIS gives a number, VIIRS a category token. Unknown values map to 0.
    """
    if isinstance(raw, str):
        token = raw.strip().lower()
        if token in CONFIDENCE_TOKENS:
            return CONFIDENCE_TOKENS[token]
    value = _to_float(raw)
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(100.0, value))


def brightness_category(brightness: Optional[float]) -> BrightnessCategory:
    if brightness is None or not math.isfinite(brightness):
        return BrightnessCategory.UNKNOWN
    for upper, label in BRIGHTNESS_LADDER:
        if brightness < upper:
            return label
    return BrightnessCategory.SEVERE


def is_predictable(brightness: float, confidence: float) -> bool:
    # NaN compares False, so unparseable brightness is never predictable
    return brightness >= PREDICTABLE_MIN_BRIGHTNESS and confidence >= PREDICTABLE_MIN_CONFIDENCE


def is_likely_flare(
    day_night: str,
    frp: float,
    brightness: float,
    confidence: float,
    thresholds: FlareThresholds = DEFAULT_FLARE_THRESHOLDS,
) -> bool:
    """
    Industrial gas flares show up as small, steady, low-power night hotspots.
    Missing FRP or brightness never counts as a flare.
    """
    if (day_night or "").strip().upper() != "N":
        return False
    if not (math.isfinite(frp) and math.isfinite(brightness)):
        return False
    return (
        frp < thresholds.max_frp
        and brightness < thresholds.max_brightness
        and confidence < thresholds.max_confidence
    )


def bbox_around(lat: float, lon: float, radius_miles: float) -> BoundingBox:
    """Square box padded by radius_miles / 69 degrees on every side."""
    pad = radius_miles / MILES_PER_DEGREE
    return BoundingBox(
        west=round(max(-180.0, lon - pad), 2),
        south=round(max(-90.0, lat - pad), 2),
        east=round(min(180.0, lon + pad), 2),
        north=round(min(90.0, lat + pad), 2),
    )
