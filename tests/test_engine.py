# File: tests/test_engine.py
# End-to-end crawls over HTTP against a local aiohttp server
from __future__ import annotations

import asyncio

import pytest
from aiohttp import web

from conftest import _serve_app
from hostcrawl.config import CrawlerConfig
from hostcrawl.engine import start_crawl


def site_app(hits: dict) -> web.Application:
    app = web.Application()
    pages = {
        "/": '<a href="/page1">1</a><a href="/page2#frag">2</a><a href="https://other.test/">ext</a>',
        "/page1": '<a href="/">home</a><a href="page2?ref=1">2</a><a href="/missing">broken</a>',
        "/page2": '<a href="/page1">1</a>',
    }

    def handler(body: str):
        async def handle(request):
            hits[request.path] = hits.get(request.path, 0) + 1
            await asyncio.sleep(0.01)
            return web.Response(text=body, content_type="text/html")
        return handle

    for path, body in pages.items():
        app.router.add_get(path, handler(body))
    return app


@pytest.mark.asyncio()
async def test_crawl_over_http(basic_config: CrawlerConfig):
    hits: dict = {}
    async for base in _serve_app(site_app(hits)):
        pages = await asyncio.wait_for(start_crawl(basic_config, f"{base}/"), timeout=15)

    assert [p.url for p in pages] == [
        f"{base}/",
        f"{base}/missing",
        f"{base}/page1",
        f"{base}/page2",
    ]
    by_url = {p.url: p for p in pages}
    assert by_url[f"{base}/"].links == ("/page1", "/page2#frag", "https://other.test/")
    assert "(404)" in by_url[f"{base}/missing"].error
    assert by_url[f"{base}/missing"].links == ()
    assert all(count == 1 for count in hits.values())


@pytest.mark.asyncio()
async def test_crawl_uses_config_seed():
    hits: dict = {}
    async for base in _serve_app(site_app(hits)):
        config = CrawlerConfig(seed_url=f"{base}/page2", concurrency=1, timeout=2.0)
        pages = await asyncio.wait_for(start_crawl(config), timeout=15)

    assert {p.url for p in pages} == {f"{base}/page2", f"{base}/page1", f"{base}/", f"{base}/missing"}
