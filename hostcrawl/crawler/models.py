# hostcrawl/crawler/models.py
"""
Data models and error types for the hostcrawl crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


class CrawlError(Exception):
    """Base class for crawler errors."""


class InvalidURLError(CrawlError, ValueError):
    """Seed URL is not an absolute http(s) URL."""


class FetchError(CrawlError):
    """Page could not be retrieved (transport failure or non-2xx status)."""


@dataclass(frozen=True, slots=True)
class PageResult:
    """Outcome of visiting one URL: the raw hrefs found on it, or the error."""

    url: str
    links: Tuple[str, ...] = ()
    error: Optional[str] = None

    def __post_init__(self) -> None:
        # any iterable of hrefs is accepted, stored as a tuple
        if not isinstance(self.links, tuple):
            object.__setattr__(self, "links", tuple(self.links))

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class CrawlStats:
    """Counters collected by the orchestrator during one crawl."""

    pages: int = 0
    failed: int = 0
    skipped_links: int = 0
    max_in_flight: int = 0
    duration: float = 0.0

    @property
    def pages_per_second(self) -> float:
        return self.pages / self.duration if self.duration else 0.0
