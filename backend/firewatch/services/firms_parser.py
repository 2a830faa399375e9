# firewatch/services/firms_parser.py
"""
FIRMS area CSV -> FireDetection list.

Column order (VIIRS area CSV):

    latitude, longitude, bright_ti4, scan, track, acq_date, acq_time,
    satellite, instrument, confidence, version, bright_ti5, frp, daynight

Nearby and region queries share this parser; nearby passes a
ReferencePoint so rows are distance-filtered.
"""
import csv
import logging
import math
from collections import Counter
from datetime import datetime, timezone
from io import StringIO
from typing import List, Optional

from ..errors import ParseDegraded
from ..models import FilterOptions, FireDetection, ReferencePoint
from .geo_utils import (
    DEFAULT_FLARE_THRESHOLDS,
    FlareThresholds,
    brightness_category,
    confidence_to_percent,
    distance_miles,
    is_likely_flare,
    is_predictable,
)

log = logging.getLogger(__name__)

MIN_COLUMNS = 14

(
    COL_LAT,
    COL_LON,
    COL_BRIGHT_TI4,
    COL_SCAN,
    COL_TRACK,
    COL_ACQ_DATE,
    COL_ACQ_TIME,
    COL_SATELLITE,
    COL_INSTRUMENT,
    COL_CONFIDENCE,
    COL_VERSION,
    COL_BRIGHT_TI5,
    COL_FRP,
    COL_DAYNIGHT,
) = range(MIN_COLUMNS)


def _parse_float(value: Optional[str]) -> float:
    if value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def parse_acq_ts(date_str: str, time_str: str) -> Optional[datetime]:
    """
    acq_date is YYYY-MM-DD, acq_time is HHMM in UTC, sometimes with the
    leading zeros dropped ("5" -> 00:05).
    """
    hhmm = (time_str or "").strip().zfill(4)
    try:
        dt = datetime.strptime((date_str or "").strip() + hhmm, "%Y-%m-%d%H%M")
    except ValueError:
        return None
    return dt.replace(tzinfo=timezone.utc)


def _valid_coords(lat: float, lon: float) -> bool:
    return math.isfinite(lat) and math.isfinite(lon) and -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def _parse_rows(
    csv_text: str,
    options: FilterOptions,
    center: Optional[ReferencePoint],
    thresholds: FlareThresholds,
    report: Counter,
) -> List[FireDetection]:
    rows = [r for r in csv.reader(StringIO(csv_text.strip())) if r]
    if not rows:
        return []

    header, data = rows[0], rows[1:]
    if len(header) < MIN_COLUMNS:
        # FIRMS answers some errors (bad key, bad bbox) with a 200 and a
        # one-line text body
        raise ParseDegraded(f"unexpected FIRMS header: {','.join(header)[:80]!r}")
    if not data:
        # header-only: just no fires
        return []

    out: List[FireDetection] = []
    for cols in data:
        report["rows"] += 1
        if len(cols) < MIN_COLUMNS:
            report["short_row"] += 1
            continue
        cols = [c.strip() for c in cols]

        latitude = _parse_float(cols[COL_LAT])
        longitude = _parse_float(cols[COL_LON])
        if not _valid_coords(latitude, longitude):
            report["bad_coords"] += 1
            continue

        brightness = _parse_float(cols[COL_BRIGHT_TI4])
        frp = _parse_float(cols[COL_FRP])
        confidence = confidence_to_percent(cols[COL_CONFIDENCE])
        day_night = cols[COL_DAYNIGHT]

        timestamp = parse_acq_ts(cols[COL_ACQ_DATE], cols[COL_ACQ_TIME])
        category = brightness_category(brightness)
        predictable = is_predictable(brightness, confidence)

        distance = None
        if center is not None:
            distance = distance_miles(center.latitude, center.longitude, latitude, longitude)
            if not math.isfinite(distance) or distance > center.radius_miles:
                report["out_of_radius"] += 1
                continue
            distance = round(distance, 2)

        if options.exclude_flares and is_likely_flare(day_night, frp, brightness, confidence, thresholds):
            report["flare"] += 1
            continue

        if options.predictable_only and not predictable:
            report["not_predictable"] += 1
            continue

        out.append(
            FireDetection(
                latitude=latitude,
                longitude=longitude,
                brightness=brightness,
                confidence=confidence,
                satellite=cols[COL_SATELLITE],
                instrument=cols[COL_INSTRUMENT],
                frp=frp,
                day_night=day_night,
                brightness_category=category,
                predictable=predictable,
                timestamp=timestamp,
                distance_from_center_miles=distance,
            )
        )
        report["emitted"] += 1

    return out


def parse_detections(
    csv_text: Optional[str],
    options: Optional[FilterOptions] = None,
    center: Optional[ReferencePoint] = None,
    thresholds: FlareThresholds = DEFAULT_FLARE_THRESHOLDS,
) -> List[FireDetection]:
    """
    Parse a FIRMS CSV body into filtered, classified detections.

    Fails open: anything that goes wrong while reading the batch is logged
    as a warning and yields an empty list, so a feed hiccup shows an empty
    map instead of an error page.
    """
    options = options or FilterOptions()
    mode = "nearby" if center is not None else "region"
    report: Counter = Counter()

    if not csv_text:
        return []

    try:
        detections = _parse_rows(csv_text, options, center, thresholds, report)
    except Exception as e:
        log.warning(
            "parse_degraded: could not parse FIRMS CSV (%s): %s",
            mode,
            e,
            extra={"event": "parse_degraded", "mode": mode},
        )
        return []

    log.debug("FIRMS parse report (%s): %s", mode, dict(report))
    return detections
