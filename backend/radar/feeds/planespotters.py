"""planespotters photo lookup and download. Best effort."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from radar.models.upstream import PlanespottersResponse

logger = logging.getLogger(__name__)


class PlanespottersClient:
    def __init__(self, client: httpx.AsyncClient, api_url: str) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")

    async def photo_url(self, icao24: str) -> str | None:
        url = f"{self._api_url}/photos/hex/{icao24}"
        logger.info("Fetching photo URL for hex %s: %s", icao24, url)
        try:
            r = await self._client.get(url)
            r.raise_for_status()
            payload = PlanespottersResponse.model_validate(r.json())
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.warning("planespotters lookup for %s failed: %s", icao24, e)
            return None
        if not payload.photos:
            return None
        return payload.photos[0].thumbnail_large.src

    async def download(self, url: str) -> bytes | None:
        logger.info("Fetching plane photo from: %s", url)
        try:
            r = await self._client.get(url)
            r.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Photo download from %s failed: %s", url, e)
            return None
        return r.content or None

    async def photo(self, icao24: str) -> tuple[str, bytes] | None:
        """(url, bytes) of the first photo of ``icao24``, or ``None``."""
        url = await self.photo_url(icao24)
        if url is None:
            return None
        data = await self.download(url)
        if data is None:
            return None
        return url, data
