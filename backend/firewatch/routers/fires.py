# firewatch/routers/fires.py

import math
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel

from ..errors import (
    ConfigurationError,
    FireDataError,
    InvalidArgument,
    LocationNotFound,
    UpstreamUnavailable,
)
from ..models import (
    SUPPORTED_DATASETS,
    VIIRS_SNPP_NRT,
    FilterOptions,
    FireDetection,
    RegionResult,
)
from ..services.fire_queries import FireQueryService, check_radius
from ..services.geocoding import ZipGeocoder

router = APIRouter()


# Dependencies
def get_fire_service(request: Request) -> FireQueryService:
    return request.app.state.fire_service


def get_geocoder(request: Request) -> ZipGeocoder:
    return request.app.state.geocoder


def _http_error(err: FireDataError) -> HTTPException:
    if isinstance(err, InvalidArgument):
        return HTTPException(status_code=400, detail=str(err))
    if isinstance(err, LocationNotFound):
        return HTTPException(status_code=404, detail=str(err))
    if isinstance(err, UpstreamUnavailable):
        return HTTPException(status_code=502, detail=str(err))
    if isinstance(err, ConfigurationError):
        return HTTPException(status_code=500, detail=str(err))
    return HTTPException(status_code=500, detail="Unknown error")


class NearbyCenter(BaseModel):
    latitude: float
    longitude: float
    zip_code: str
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class NearbyResponse(BaseModel):
    center: NearbyCenter
    radius_miles: float
    options: FilterOptions
    detections: List[FireDetection]
    count: int


@router.get("/nearby", response_model=NearbyResponse)
async def fires_nearby(
    zip_code: Optional[str] = Query(None, alias="zipCode"),
    radius_miles: float = Query(100.0, alias="radiusMiles"),
    exclude_flares: bool = Query(True, alias="excludeFlares"),
    predictable_only: bool = Query(False, alias="predictableOnly"),
    service: FireQueryService = Depends(get_fire_service),
    geocoder: ZipGeocoder = Depends(get_geocoder),
):
    """
    Fires within `radiusMiles` of a US ZIP code, nearest first.
    """
    zip_code = (zip_code or "").strip()
    if not zip_code:
        raise HTTPException(status_code=400, detail="zipCode is required (e.g., 91730)")

    options = FilterOptions(exclude_flares=exclude_flares, predictable_only=predictable_only)
    try:
        check_radius(radius_miles)
        geo = await geocoder.zip_to_coordinates(zip_code)
        result = await service.query_nearby(geo.latitude, geo.longitude, radius_miles, options)
    except FireDataError as e:
        raise _http_error(e)

    detections = sorted(result.detections, key=lambda d: d.distance_from_center_miles)
    return NearbyResponse(
        center=NearbyCenter(
            latitude=geo.latitude,
            longitude=geo.longitude,
            zip_code=zip_code,
            city=geo.city,
            state=geo.state,
            country=geo.country,
        ),
        radius_miles=radius_miles,
        options=options,
        detections=detections,
        count=len(detections),
    )


@router.get("/us", response_model=RegionResult)
async def fires_us(
    exclude_flares: bool = Query(True, alias="excludeFlares"),
    predictable_only: bool = Query(False, alias="predictableOnly"),
    days: float = 1,
    dataset: str = VIIRS_SNPP_NRT,
    service: FireQueryService = Depends(get_fire_service),
):
    """
    Fires across the contiguous US. Cached per parameter set for a few
    minutes, so the map can poll this freely.
    """
    # keep the pull small; fractional or non-finite values fall back into 1..2
    days = int(max(1, min(2, days))) if math.isfinite(days) else 1
    dataset = dataset.upper()
    if dataset not in SUPPORTED_DATASETS:
        dataset = VIIRS_SNPP_NRT

    options = FilterOptions(exclude_flares=exclude_flares, predictable_only=predictable_only)
    try:
        return await service.query_region(options, dataset=dataset, day_window=days)
    except FireDataError as e:
        raise _http_error(e)
