# File: hostcrawl/engine.py
"""hostcrawl.engine: glue between configuration and the async crawler, used by the CLI."""

from __future__ import annotations

from typing import List, Optional

from hostcrawl.config import CrawlerConfig
from hostcrawl.crawler.crawler import AsyncCrawler
from hostcrawl.crawler.models import PageResult

__all__ = ["start_crawl"]


async def start_crawl(cfg: CrawlerConfig, seed: Optional[str] = None) -> List[PageResult]:
    """
    Run the crawler over HTTP inside its session context and return the pages.

    Parameters
    ----------
    cfg : CrawlerConfig
        Crawl settings (concurrency, timeout, User-Agent...).
    seed : str, optional
        Starting URL; ``cfg.seed_url`` is used when omitted.
    """
    async with AsyncCrawler(cfg) as crawler:
        return await crawler.crawl(seed)
