# === FILE: hostcrawl/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from dataclasses import replace
from typing import Awaitable, Callable, Deque, Iterable, List, Optional, Sequence, Set, Tuple, Union

from aiohttp import ClientSession, ClientTimeout

from hostcrawl.config import DEFAULT_CONCURRENCY, CrawlerConfig
from hostcrawl.crawler.fetcher import Fetcher
from hostcrawl.crawler.link_extractor import extract_links
from hostcrawl.crawler.models import CrawlStats, InvalidURLError, PageResult
from hostcrawl.utils import extract_host, is_in_scope, parse_seed, resolve_link

__all__ = ("AsyncCrawler", "PageFetcher", "LinkExtractor", "crawl", "finalize_results")

PageFetcher = Callable[[str], Awaitable[bytes]]
LinkExtractor = Callable[[Union[bytes, str]], Sequence[str]]

# put in each idle worker's slot once the crawl is done
_CLOSED = None


def finalize_results(results: Iterable[PageResult]) -> List[PageResult]:
    """Sort every page's links and the pages themselves by URL."""
    pages = [replace(page, links=tuple(sorted(page.links))) for page in results]
    pages.sort(key=lambda page: page.url)
    return pages


class AsyncCrawler:
    """
    Crawls every page reachable from a seed URL without leaving its host.

    One orchestrating coroutine owns the frontier, the visited set and the
    in-flight counter. A fixed pool of workers only fetches pages and extracts
    links; they offer themselves on a ready queue and hand results back on a
    second queue, so the shared state needs no locks.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        fetch_page: Optional[PageFetcher] = None,
        link_extractor: LinkExtractor = extract_links,
    ) -> None:
        self.config = config
        self.concurrency: int = config.concurrency
        self.session: Optional[ClientSession] = None
        self.stats = CrawlStats()
        self.logger = logging.getLogger(__name__)
        self._fetch_page = fetch_page
        self._extract_links = link_extractor

    async def __aenter__(self) -> AsyncCrawler:
        if self._fetch_page is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self._fetch_page = Fetcher(self.session, self.config).fetch
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self, seed: Optional[str] = None) -> List[PageResult]:
        """
        Crawl from *seed* (or ``config.seed_url``) and return the sorted pages.

        Raises InvalidURLError if the seed is missing or not an absolute
        http(s) URL. Per-page failures end up in ``PageResult.error``.
        """
        seed = seed if seed is not None else self.config.seed_url
        if seed is None:
            raise InvalidURLError("no starting URL given")
        root = parse_seed(seed)
        if self._fetch_page is None:
            raise RuntimeError("Session not initialized")

        host = extract_host(root)
        self.stats = CrawlStats()
        self.logger.info("Crawl started: %s (%d fetchers)", root, self.concurrency)
        start = time.monotonic()

        ready: asyncio.Queue[asyncio.Future] = asyncio.Queue()
        fetched: asyncio.Queue[Tuple[PageResult, asyncio.Future]] = asyncio.Queue()
        workers = [asyncio.create_task(self._worker(ready, fetched)) for _ in range(self.concurrency)]
        try:
            results = await self._orchestrate(root, host, ready, fetched)
            # every worker is idle again and offers one more slot
            for _ in workers:
                slot = await ready.get()
                slot.set_result(_CLOSED)
            await asyncio.gather(*workers)
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

        self.stats.duration = time.monotonic() - start
        self.logger.info(
            "Crawl finished: %d pages (%d failed) in %.2f s (%.2f pages/s)",
            self.stats.pages, self.stats.failed, self.stats.duration, self.stats.pages_per_second,
        )
        if self.stats.skipped_links:
            self.logger.info("Unresolvable links skipped: %d", self.stats.skipped_links)
        self.logger.debug("Peak in flight: %d of %d fetchers", self.stats.max_in_flight, self.concurrency)
        return finalize_results(results)

    async def _orchestrate(
        self,
        root: str,
        host: str,
        ready: asyncio.Queue[asyncio.Future],
        fetched: asyncio.Queue[Tuple[PageResult, asyncio.Future]],
    ) -> List[PageResult]:
        frontier: Deque[str] = deque([root])
        visited: Set[str] = {root}
        in_flight = 0
        results: List[PageResult] = []

        # pending wait for an idle worker (only while there is work to hand
        # out) and pending receive of a result, awaited together
        offering: Optional[asyncio.Future] = None
        receiving: Optional[asyncio.Future] = None
        try:
            while frontier or in_flight:
                if frontier and offering is None:
                    offering = asyncio.ensure_future(ready.get())
                if receiving is None:
                    receiving = asyncio.ensure_future(fetched.get())
                waiting = {receiving} if offering is None else {offering, receiving}
                done, _ = await asyncio.wait(waiting, return_when=asyncio.FIRST_COMPLETED)

                # one event per iteration; the other one is picked up next time
                if offering is not None and offering in done:
                    slot: asyncio.Future = offering.result()
                    offering = None
                    url = frontier.popleft()
                    slot.set_result(url)
                    in_flight += 1
                    self.stats.max_in_flight = max(self.stats.max_in_flight, in_flight)
                    self.logger.debug("Dispatched %s (in flight: %d)", url, in_flight)
                    continue

                page, received = receiving.result()
                receiving = None
                received.set_result(None)
                in_flight -= 1
                results.append(page)
                self.stats.pages += 1
                if not page.ok:
                    self.stats.failed += 1
                self.logger.debug("Received %s (in flight: %d)", page.url, in_flight)

                for link in self._discover(page, host):
                    if link in visited:
                        continue
                    visited.add(link)
                    frontier.append(link)
        finally:
            for pending in (offering, receiving):
                if pending is not None:
                    pending.cancel()
        return results

    def _discover(self, page: PageResult, host: str) -> List[str]:
        """Resolve the page's raw links and keep the same-host ones."""
        if not page.links:
            return []
        try:
            extract_host(page.url)
        except ValueError as e:
            self.logger.warning("Cannot resolve links of %s: %s", page.url, e)
            return []
        found: List[str] = []
        for raw in page.links:
            try:
                link = resolve_link(page.url, raw)
            except ValueError as e:
                self.stats.skipped_links += 1
                self.logger.warning("Skipping link %r on %s: %s", raw, page.url, e)
                continue
            if is_in_scope(link, host):
                found.append(link)
        return found

    async def _worker(
        self,
        ready: asyncio.Queue[asyncio.Future],
        fetched: asyncio.Queue[Tuple[PageResult, asyncio.Future]],
    ) -> None:
        """
        Offer a slot on *ready*, fetch the URL the orchestrator puts in it and
        hand the result back. The next slot is offered only once the result
        has been received, so a worker holds at most one URL in flight.
        """
        loop = asyncio.get_running_loop()
        while True:
            slot = loop.create_future()
            ready.put_nowait(slot)
            url = await slot
            if url is _CLOSED:
                return
            received = loop.create_future()
            fetched.put_nowait((await self._visit(url), received))
            await received

    async def _visit(self, url: str) -> PageResult:
        # any collaborator failure is recorded on the page, the crawl goes on
        try:
            body = await self._fetch_page(url)  # type: ignore[misc]
        except Exception as e:
            self.logger.warning("Failed %s: %s", url, e)
            return PageResult(url, error=str(e) or type(e).__name__)
        try:
            links = tuple(self._extract_links(body))
        except Exception as e:
            self.logger.warning("Link extraction failed for %s: %s", url, e)
            return PageResult(url, error=f"extract links from {url}: {e}")
        return PageResult(url, links=links)


async def crawl(
    seed: str,
    concurrency: int = DEFAULT_CONCURRENCY,
    *,
    fetch_page: Optional[PageFetcher] = None,
    link_extractor: LinkExtractor = extract_links,
) -> List[PageResult]:
    """
    Crawl all same-host pages reachable from *seed* with *concurrency* workers.

    Without *fetch_page* pages are retrieved over HTTP with an aiohttp session.
    Raises InvalidURLError for a bad seed and ValueError for concurrency < 1.
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be >= 1, got {concurrency}")
    parse_seed(seed)
    config = CrawlerConfig(concurrency=concurrency)
    async with AsyncCrawler(config, fetch_page=fetch_page, link_extractor=link_extractor) as crawler:
        return await crawler.crawl(seed)
