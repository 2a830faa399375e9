# firewatch/services/fire_queries.py
import json
import logging
import math
from datetime import datetime, timezone
from typing import Optional

from .. import config
from ..errors import InvalidArgument
from ..models import (
    CONUS_BBOX,
    SUPPORTED_DATASETS,
    VIIRS_NOAA21_NRT,
    VIIRS_SNPP_NRT,
    FilterOptions,
    NearbyResult,
    ReferencePoint,
    RegionResult,
)
from .firms_client import FirmsClient
from .firms_parser import parse_detections
from .geo_utils import DEFAULT_FLARE_THRESHOLDS, FlareThresholds, bbox_around
from .result_cache import ResultCache

log = logging.getLogger(__name__)

MAX_RADIUS_MILES = 500.0


def region_cache_key(options: FilterOptions, dataset: str, day_window: int) -> str:
    return json.dumps(
        {
            "exclude_flares": options.exclude_flares,
            "predictable_only": options.predictable_only,
            "days": day_window,
            "dataset": dataset,
        },
        sort_keys=True,
    )


def check_radius(radius_miles: float) -> None:
    if isinstance(radius_miles, bool) or not isinstance(radius_miles, (int, float)) \
            or not math.isfinite(radius_miles):
        raise InvalidArgument("radius_miles must be a finite number")
    if not 0 < radius_miles <= MAX_RADIUS_MILES:
        raise InvalidArgument(f"radius_miles must be in (0, {MAX_RADIUS_MILES:g}]")


def _check_dataset(dataset: str) -> None:
    if dataset not in SUPPORTED_DATASETS:
        raise InvalidArgument(
            f"dataset must be one of {', '.join(SUPPORTED_DATASETS)}, got {dataset!r}"
        )


def _check_day_window(day_window: int, max_day_window: int) -> None:
    if isinstance(day_window, bool) or not isinstance(day_window, int):
        raise InvalidArgument("day_window must be an integer")
    if not 1 <= day_window <= max_day_window:
        raise InvalidArgument(f"day_window must be between 1 and {max_day_window}")


class FireQueryService:
    """
    Nearby (point + radius) and region (CONUS) fire queries.

    Owns the region result cache; nearby queries always go to FIRMS.
    """

    def __init__(
        self,
        client: FirmsClient,
        cache: Optional[ResultCache] = None,
        flare_thresholds: FlareThresholds = DEFAULT_FLARE_THRESHOLDS,
        max_day_window: Optional[int] = None,
        nearby_timeout: Optional[float] = None,
        region_timeout: Optional[float] = None,
    ):
        self.client = client
        self.cache = cache if cache is not None else ResultCache()
        self.flare_thresholds = flare_thresholds
        self.max_day_window = max_day_window or config.MAX_DAY_WINDOW
        self.nearby_timeout = nearby_timeout or config.FIRMS_NEARBY_TIMEOUT
        self.region_timeout = region_timeout or config.FIRMS_REGION_TIMEOUT

    async def query_nearby(
        self,
        center_lat: float,
        center_lon: float,
        radius_miles: float,
        options: Optional[FilterOptions] = None,
        dataset: str = VIIRS_NOAA21_NRT,
        day_window: int = 2,
    ) -> NearbyResult:
        options = options or FilterOptions()

        check_radius(radius_miles)
        if not (math.isfinite(center_lat) and -90.0 <= center_lat <= 90.0):
            raise InvalidArgument("center latitude must be within -90..90")
        if not (math.isfinite(center_lon) and -180.0 <= center_lon <= 180.0):
            raise InvalidArgument("center longitude must be within -180..180")
        _check_dataset(dataset)
        _check_day_window(day_window, self.max_day_window)

        bbox = bbox_around(center_lat, center_lon, radius_miles)
        log.info(
            "Fetching FIRMS nearby (dataset=%s, days=%s) center=%s,%s radius=%smi",
            dataset, day_window, center_lat, center_lon, radius_miles,
        )
        csv_text = await self.client.fetch_area_csv(
            bbox, dataset, day_window, timeout=self.nearby_timeout
        )

        center = ReferencePoint(
            latitude=center_lat, longitude=center_lon, radius_miles=radius_miles
        )
        detections = parse_detections(csv_text, options, center, self.flare_thresholds)
        log.info("Nearby fires fetched: %d", len(detections))
        return NearbyResult(detections=detections)

    async def query_region(
        self,
        options: Optional[FilterOptions] = None,
        dataset: str = VIIRS_SNPP_NRT,
        day_window: int = 1,
    ) -> RegionResult:
        options = options or FilterOptions()
        _check_dataset(dataset)
        _check_day_window(day_window, self.max_day_window)

        key = region_cache_key(options, dataset, day_window)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        async with self.cache.lock_for(key):
            # another request may have filled it while we waited
            cached = self.cache.get(key)
            if cached is not None:
                return cached

            log.info("Fetching FIRMS US bbox (dataset=%s, days=%s)", dataset, day_window)
            # errors propagate; the cache is left as it was
            csv_text = await self.client.fetch_area_csv(
                CONUS_BBOX, dataset, day_window, timeout=self.region_timeout
            )
            detections = parse_detections(csv_text, options, None, self.flare_thresholds)

            payload = RegionResult(
                bbox=CONUS_BBOX,
                dataset=dataset,
                day_window=day_window,
                options=options,
                detections=detections,
                count=len(detections),
                cached_at=datetime.now(timezone.utc),
            )
            self.cache.set(key, payload)
            log.info("US fires fetched: %d", len(detections))
            return payload
