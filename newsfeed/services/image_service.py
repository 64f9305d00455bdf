# -*- coding: utf-8 -*-

"""
ImageService Module
Downloads article thumbnails. Every failure is downgraded to "no image" so the
caller can show its placeholder; nothing here is ever surfaced to the user.
"""

import asyncio
import logging
from typing import Optional
from urllib.parse import urlparse

import aiohttp

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_TIMEOUT = 5.0
MAX_IMAGE_BYTES = 5 * 1024 * 1024
CHUNK_SIZE = 8192


class ImageService:
    """Fetches raw thumbnail bytes for article rows."""

    def __init__(self, timeout: float = DEFAULT_IMAGE_TIMEOUT, user_agent: str = "NewsFeed/1.0"):
        self.timeout = timeout
        self.headers = {"User-Agent": user_agent}

    async def fetch_thumbnail(self, url: Optional[str]) -> Optional[bytes]:
        """Return the image bytes at url, or None on any error or absent URL."""
        if not url:
            return None
        try:
            parsed = urlparse(url)
        except ValueError:
            logger.debug(f"Skipping malformed thumbnail URL: {url!r}")
            return None
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            logger.debug(f"Skipping non-http thumbnail URL: {url!r}")
            return None

        try:
            async with aiohttp.ClientSession(
                headers=self.headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as session:
                async with session.get(url) as response:
                    if response.status != 200:
                        logger.debug(f"Thumbnail {url} returned HTTP {response.status}")
                        return None
                    if (response.content_length or 0) > MAX_IMAGE_BYTES:
                        logger.debug(
                            f"Skipping thumbnail {url}: {response.content_length} bytes announced"
                        )
                        return None

                    # Stream the body; stop as soon as it passes the cap
                    chunks = []
                    received = 0
                    async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                        chunks.append(chunk)
                        received += len(chunk)
                        if received > MAX_IMAGE_BYTES:
                            break
                    data = b"".join(chunks)
        except asyncio.TimeoutError:
            logger.debug(f"Thumbnail request timed out (>{self.timeout} seconds): {url}")
            return None
        except aiohttp.ClientError as e:
            logger.debug(f"Thumbnail request failed for {url}: {e}")
            return None

        if not data or len(data) > MAX_IMAGE_BYTES:
            logger.debug(f"Discarding thumbnail for {url} ({len(data)} bytes)")
            return None
        return data
