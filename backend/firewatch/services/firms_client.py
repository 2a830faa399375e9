# firewatch/services/firms_client.py
import logging
from typing import Optional

import httpx

from .. import config
from ..errors import ConfigurationError, UpstreamUnavailable
from ..models import BoundingBox

log = logging.getLogger(__name__)


class FirmsClient:
    """
    Thin wrapper over the FIRMS area CSV endpoint:

        {base_url}/{map_key}/{dataset}/{west},{south},{east},{north}/{days}

    One GET per call, no retries.
    """

    def __init__(
        self,
        map_key: Optional[str] = None,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.map_key = map_key if map_key is not None else config.NASA_FIRMS_MAP_KEY
        self.base_url = (base_url or config.FIRMS_BASE_URL).rstrip("/")
        self.user_agent = user_agent or config.FIRMS_USER_AGENT
        self.timeout = timeout if timeout is not None else config.FIRMS_REGION_TIMEOUT
        # tests swap in httpx.MockTransport
        self._transport = transport

    def build_url(self, bbox: BoundingBox, dataset: str, day_window: int, key: Optional[str] = None) -> str:
        return f"{self.base_url}/{key or self.map_key}/{dataset}/{bbox.to_firms()}/{day_window}"

    async def fetch_area_csv(
        self,
        bbox: BoundingBox,
        dataset: str,
        day_window: int,
        timeout: Optional[float] = None,
    ) -> str:
        """
        Return the raw CSV body for a bounding box.

        Raises ConfigurationError before any I/O if no map key is set, and
        UpstreamUnavailable on transport errors, timeouts and non-2xx.
        """
        if not self.map_key:
            raise ConfigurationError("NASA_FIRMS_MAP_KEY not configured")

        url = self.build_url(bbox, dataset, day_window)
        # never log the key
        safe_url = self.build_url(bbox, dataset, day_window, key="***")
        log.info("Fetching FIRMS %s", safe_url)

        try:
            async with httpx.AsyncClient(
                timeout=timeout if timeout is not None else self.timeout,
                transport=self._transport,
                headers={"User-Agent": self.user_agent},
            ) as client:
                resp = await client.get(url)
                resp.raise_for_status()
                return resp.text
        except httpx.TimeoutException as e:
            log.warning("FIRMS request timed out: %s", safe_url)
            raise UpstreamUnavailable(f"FIRMS request timed out ({dataset})") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            log.warning("FIRMS returned HTTP %s for %s", status, safe_url)
            raise UpstreamUnavailable(f"FIRMS returned HTTP {status}") from e
        except httpx.HTTPError as e:
            log.warning("FIRMS request failed: %s (%s)", safe_url, type(e).__name__)
            raise UpstreamUnavailable(f"FIRMS request failed: {type(e).__name__}") from e
