# firewatch/services/geocoding.py
import logging
import re
from dataclasses import dataclass
from typing import Optional

import httpx

from .. import config
from ..errors import InvalidArgument, LocationNotFound, UpstreamUnavailable

log = logging.getLogger(__name__)

ZIP_RE = re.compile(r"^\d{5}$")


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class ZipGeocoder:
    """US ZIP -> coordinates via the Zippopotam.us API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or config.GEOCODER_BASE_URL).rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def zip_to_coordinates(self, zip_code: str) -> GeoPoint:
        zip_code = (zip_code or "").strip()
        # ZIP+4 is fine, only the first five digits matter
        zip5 = zip_code.split("-")[0]
        if not ZIP_RE.match(zip5):
            raise InvalidArgument(f"invalid ZIP code {zip_code!r}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(f"{self.base_url}/{zip5}")
        except httpx.HTTPError as e:
            log.warning("Geocoder request failed for %s: %s", zip5, type(e).__name__)
            raise UpstreamUnavailable("geocoder request failed") from e

        if resp.status_code == 404:
            raise LocationNotFound(f"no location for ZIP {zip5}")
        if resp.is_error:
            log.warning("Geocoder returned HTTP %s for %s", resp.status_code, zip5)
            raise UpstreamUnavailable(f"geocoder returned HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            log.warning("Geocoder returned a non-JSON body for %s", zip5)
            raise UpstreamUnavailable("geocoder returned an unreadable response") from e
        if not isinstance(data, dict):
            raise UpstreamUnavailable("geocoder returned an unreadable response")

        places = data.get("places") or []
        if not places:
            raise LocationNotFound(f"no location for ZIP {zip5}")
        place = places[0]
        try:
            latitude = float(place["latitude"])
            longitude = float(place["longitude"])
        except (KeyError, TypeError, ValueError) as e:
            log.warning("Geocoder place for %s has no usable coordinates", zip5)
            raise UpstreamUnavailable("geocoder returned a place without coordinates") from e

        return GeoPoint(
            latitude=latitude,
            longitude=longitude,
            city=place.get("place name"),
            state=place.get("state abbreviation"),
            country=data.get("country abbreviation"),
        )
