# -*- coding: utf-8 -*-

"""
NewsService Module
- Retrieves the current top headlines from the NewsAPI REST endpoint.
- Decodes the JSON payload into immutable Article records.
- Reports every call as a single FetchOutcome; errors are returned, never raised.
"""

import asyncio
import json
import logging
import time
from typing import Dict, Optional
from urllib.parse import urlencode, urlparse

import aiohttp
from pydantic import ValidationError

from newsfeed.config import AppConfig
from newsfeed.models.news import (
    FetchErrorKind,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    HeadlinesResponse,
)

# Configure module-level logger
logger = logging.getLogger(__name__)

TOP_HEADLINES_PATH = "/v2/top-headlines"
USER_AGENT = "NewsFeed/1.0"


class NewsService:
    """
    Service class responsible for:
    - Building the top-headlines request from configuration.
    - Issuing exactly one GET per call with a bounded timeout (no retries).
    - Mapping transport, empty-body and decode problems to FetchFailure values.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://newsapi.org",
        country: str = "us",
    ):
        self._api_key = api_key
        self._base_url = base_url
        self._country = country

    @classmethod
    def from_config(cls, config: AppConfig) -> "NewsService":
        return cls(config.api_key, config.base_url, config.country)

    def _build_url(self, params: Dict[str, str]) -> Optional[str]:
        try:
            parsed = urlparse((self._base_url or "").strip())
        except ValueError:
            return None
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            return None
        return f"{parsed.scheme}://{parsed.netloc}{TOP_HEADLINES_PATH}?{urlencode(params)}"

    def build_endpoint(self) -> Optional[str]:
        """Return the request URL, or None if the base URL is not absolute http(s)."""
        return self._build_url({"country": self._country, "apiKey": self._api_key or ""})

    async def fetch(self, timeout: float) -> FetchOutcome:
        """
        Fetch the current top headlines.

        Args:
            timeout: Seconds allowed for both the connect phase and the whole request.

        Returns:
            FetchSuccess with articles in server order, or FetchFailure.
        """
        endpoint = self.build_endpoint()
        if endpoint is None:
            logger.error(f"Cannot build headlines endpoint from '{self._base_url}'")
            return FetchFailure(FetchErrorKind.INVALID_ENDPOINT, self._base_url)

        # The key is part of the query, keep it out of the logs
        log_url = self._build_url({"country": self._country})
        logger.info(f"Fetching headlines: {log_url}")
        start_time = time.time()

        client_timeout = aiohttp.ClientTimeout(total=timeout, connect=timeout)
        try:
            async with aiohttp.ClientSession(
                timeout=client_timeout, headers={"User-Agent": USER_AGENT}
            ) as session:
                async with session.get(endpoint) as response:
                    body = await response.read()
                    status_code = response.status
        except asyncio.TimeoutError:
            logger.error(f"Headlines request timed out (>{timeout} seconds)")
            return FetchFailure(
                FetchErrorKind.TRANSPORT, f"request timed out after {timeout:g} seconds"
            )
        except aiohttp.ClientError as e:
            logger.error(f"Headlines request failed: {e}")
            return FetchFailure(FetchErrorKind.TRANSPORT, str(e))

        logger.debug(
            f"Headlines response {status_code}, {len(body)} bytes in {time.time() - start_time:.2f} seconds"
        )
        outcome = self.decode(body)
        if isinstance(outcome, FetchSuccess):
            logger.info(f"Fetched {len(outcome.articles)} headlines")
        else:
            logger.warning(
                f"Headlines response rejected ({outcome.kind.value}): {outcome.detail}"
            )
        return outcome

    @staticmethod
    def decode(body: Optional[bytes]) -> FetchOutcome:
        """Decode a raw response body into a FetchOutcome."""
        if not body or not body.strip():
            return FetchFailure(FetchErrorKind.EMPTY_BODY)

        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return FetchFailure(FetchErrorKind.DECODE, f"invalid JSON ({e})")

        # NewsAPI reports problems as {"status": "error", "code": ..., "message": ...}
        if isinstance(payload, dict) and payload.get("status") not in (None, "ok"):
            code = payload.get("code") or payload.get("status")
            message = payload.get("message") or "no message"
            return FetchFailure(FetchErrorKind.DECODE, f"{code}: {message}")

        try:
            response = HeadlinesResponse.model_validate(payload)
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            return FetchFailure(
                FetchErrorKind.DECODE, f"{location}: {first['msg']}"
            )

        return FetchSuccess(tuple(response.articles))
