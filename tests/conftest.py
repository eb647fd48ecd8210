# File: tests/conftest.py
from __future__ import annotations

import asyncio
import html
import logging
import random
from collections.abc import AsyncIterator
from typing import Dict, Iterable, List, Optional

import pytest
from aiohttp import web

from hostcrawl.config import CrawlerConfig
from hostcrawl.crawler.models import FetchError
from hostcrawl.logger import LOGGER_NAME

#: link graph of the reference scenario, page URL -> raw hrefs on that page
SCENARIO_GRAPH: Dict[str, List[str]] = {
    "https://x.test": ["/", "/bar"],
    "https://x.test/": ["/foo", "https://x.test/bar"],
    "https://x.test/foo": ["/", "bar", "/baz"],
    "https://x.test/bar": ["https://other.test", "bar"],
    "https://x.test/baz": ["https://other.test"],
}


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


def render_page(links: Iterable[str]) -> bytes:
    """HTML document with one anchor per href."""
    anchors = "".join(f'<a href="{html.escape(href, quote=True)}">link</a>' for href in links)
    return f"<!DOCTYPE html><html><body>{anchors}</body></html>".encode("utf-8")


class StubSite:
    """
    In-memory page fetcher for a link graph.

    Records every fetched URL, optionally sleeps a random time per request and
    fails the URLs listed in *errors* (and anything missing from the graph).
    """

    def __init__(
        self,
        graph: Dict[str, List[str]],
        *,
        errors: Iterable[str] = (),
        max_delay: float = 0.0,
        seed: Optional[int] = None,
    ) -> None:
        self.graph = graph
        self.errors = set(errors)
        self.max_delay = max_delay
        self.calls: List[str] = []
        self.active = 0
        self.max_active = 0
        self._rng = random.Random(seed)

    async def fetch(self, url: str) -> bytes:
        self.calls.append(url)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.max_delay:
                await asyncio.sleep(self._rng.uniform(0, self.max_delay))
            else:
                await asyncio.sleep(0)
            if url in self.errors:
                raise FetchError(f"GET {url}: bad HTTP response code (500): Internal Server Error")
            if url not in self.graph:
                raise FetchError(f"url ({url}) not found")
            return render_page(self.graph[url])
        finally:
            self.active -= 1


async def _serve_app(app: web.Application) -> AsyncIterator[str]:
    """Start *app* on a free local port, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    port = runner.addresses[0][1]
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()


@pytest.fixture(autouse=True)
def reset_logging():
    """The CLI installs handlers on the project logger; drop them after each test."""
    yield
    lg = logging.getLogger(LOGGER_NAME)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()
    lg.propagate = True
    lg.setLevel(logging.NOTSET)


@pytest.fixture()
def scenario_site() -> StubSite:
    return StubSite(SCENARIO_GRAPH)


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """Return a basic valid CrawlerConfig for crawler tests."""
    return CrawlerConfig(
        concurrency=4,
        timeout=2.0,
        user_agent="TestAgent/1.0",
    )
