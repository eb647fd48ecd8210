# hostcrawl/crawler/fetcher.py
"""
Fetcher module: performs the HTTP GET for a single page.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession
from hostcrawl.config import CrawlerConfig
from hostcrawl.crawler.models import FetchError


class Fetcher:
    """Retrieves page bodies over a shared aiohttp session. No retries."""

    def __init__(self, session: ClientSession, config: CrawlerConfig) -> None:
        self.session = session
        self.config = config

    async def fetch(self, url: str) -> bytes:
        """
        GET *url* and return the raw body.

        Raises FetchError on transport failure, timeout or a non-2xx status.
        """
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(
                        f"GET {url}: bad HTTP response code ({resp.status}): {resp.reason}"
                    )
                limit = self.config.max_body_bytes
                if limit is None:
                    return await resp.read()
                # truncate oversized pages instead of failing them
                body = bytearray()
                async for chunk in resp.content.iter_chunked(64 * 1024):
                    body.extend(chunk)
                    if len(body) >= limit:
                        break
                return bytes(body[:limit])
        except asyncio.TimeoutError as exc:
            raise FetchError(f"GET {url}: timed out after {self.config.timeout} s") from exc
        except ClientError as exc:
            raise FetchError(f"GET {url} failed: {exc}") from exc
