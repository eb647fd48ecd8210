# File: hostcrawl/aggregator.py
"""hostcrawl.aggregator: turns crawl results into a serializable report."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Iterable, List, Optional, TypedDict

from hostcrawl.crawler.models import PageResult


class PageInfo(TypedDict):
    """One crawled page."""

    url: str
    links: List[str]
    error: Optional[str]


class CrawlSummary(TypedDict):
    pages: int
    failed: int
    links: int


@dataclass(slots=True)
class CrawlReport:
    """Pages of one crawl plus summary counters."""

    seed: Optional[str] = None
    pages: List[PageInfo] = field(default_factory=list)
    summary: CrawlSummary = field(
        default_factory=lambda: CrawlSummary(pages=0, failed=0, links=0)
    )

    def json(self, *, pretty: bool = False) -> str:
        """JSON representation of the report."""
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(results: Iterable[PageResult], seed: Optional[str] = None) -> CrawlReport:
    """Build a CrawlReport; page order and link order are kept as given."""
    report = CrawlReport(seed=seed)
    for page in results:
        report.pages.append({"url": page.url, "links": list(page.links), "error": page.error})
    report.summary = {
        "pages": len(report.pages),
        "failed": sum(1 for p in report.pages if p["error"] is not None),
        "links": sum(len(p["links"]) for p in report.pages),
    }
    return report
