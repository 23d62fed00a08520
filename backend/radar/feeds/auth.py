"""OpenSky OAuth2 client-credentials token, cached until shortly before expiry."""

from __future__ import annotations

import asyncio
import logging
import time

import httpx
from pydantic import ValidationError

from radar.models.upstream import TokenResponse

logger = logging.getLogger(__name__)

# Refresh this many seconds before the token actually expires
_EXPIRY_MARGIN_S = 60


class OpenSkyTokenProvider:
    """Hands out a bearer token, or ``None`` to fall back to anonymous access.

    Safe to share between concurrent requests: refreshes are serialised by an
    asyncio lock and re-checked once the lock is held.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token_url: str,
        credentials: tuple[str, str] | None,
        clock=time.monotonic,
    ) -> None:
        self._client = client
        self._token_url = token_url
        self._credentials = credentials
        self._clock = clock
        self._lock = asyncio.Lock()
        self._token: str | None = None
        self._expires_at: float = 0.0

    @property
    def configured(self) -> bool:
        return self._credentials is not None

    def _cached(self) -> str | None:
        if self._token and self._clock() < self._expires_at - _EXPIRY_MARGIN_S:
            return self._token
        return None

    async def get_token(self) -> str | None:
        if self._credentials is None:
            return None

        token = self._cached()
        if token:
            return token

        async with self._lock:
            # another request may have refreshed while we waited
            token = self._cached()
            if token:
                return token
            return await self._refresh()

    async def _refresh(self) -> str | None:
        client_id, client_secret = self._credentials
        form = {
            "grant_type": "client_credentials",
            "client_id": client_id,
            "client_secret": client_secret,
        }
        logger.info("Fetching new OpenSky OAuth2 token")
        now = self._clock()
        try:
            r = await self._client.post(self._token_url, data=form)
            r.raise_for_status()
            payload = TokenResponse.model_validate(r.json())
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.error("OpenSky token request failed: %s", e)
            return None

        self._token = payload.access_token
        self._expires_at = now + payload.expires_in
        return self._token
