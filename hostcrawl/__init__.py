# hostcrawl/__init__.py
"""
hostcrawl package initializer.
Defines package version and exposes the crawl API and CLI.
"""
__version__ = "0.1.0"

from hostcrawl.crawler.crawler import AsyncCrawler, crawl, finalize_results
from hostcrawl.crawler.models import CrawlError, FetchError, InvalidURLError, PageResult

# Expose CLI entry point; `hostcrawl.cli` stays the module
from hostcrawl.cli import cli as main_cli

__all__ = [
    "__version__",
    "AsyncCrawler",
    "CrawlError",
    "FetchError",
    "InvalidURLError",
    "PageResult",
    "crawl",
    "finalize_results",
    "main_cli",
]
