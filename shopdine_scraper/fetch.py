"""
Fetch layer for the scraper.
Sequential static HTML requests with a fixed politeness delay after each one.
"""
import asyncio
import logging
import time
from typing import Optional

import httpx

from .config import ScraperConfig

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a page cannot be fetched (transport error or non-2xx status)"""
    pass


class Fetcher:
    """Fetches static pages from the source site, one request at a time"""

    def __init__(
        self,
        config: ScraperConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.config = config
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None
        self.request_count = 0

    async def __aenter__(self):
        """Async context manager entry"""
        self.client = httpx.AsyncClient(
            timeout=self.config.request_timeout,
            follow_redirects=True,
            headers={
                'User-Agent': self.config.user_agent,
                'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
                'Accept-Language': 'en-US,en;q=0.9',
            },
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        if self.client:
            await self.client.aclose()
            self.client = None

    async def fetch(self, url: str) -> str:
        """
        Fetch a page and return its HTML.

        No retries: a failed request raises FetchError and the caller decides
        how to degrade. The politeness delay is applied either way.
        """
        if self.client is None:
            raise FetchError("Fetcher not initialized. Use async context manager.")

        logger.info(f"Fetching: {url}")
        started = time.monotonic()
        try:
            response = await self.client.get(url)
            response.raise_for_status()
            html = response.text
        except httpx.HTTPStatusError as e:
            raise FetchError(f"HTTP {e.response.status_code} for {url}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(f"Error fetching {url}: {e}") from e
        finally:
            self.request_count += 1
            await asyncio.sleep(self.config.delay_between_requests)

        logger.debug(f"Fetched {url} ({len(html)} bytes in {time.monotonic() - started:.2f}s)")
        return html
