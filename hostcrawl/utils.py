# File: hostcrawl/utils.py
"""hostcrawl.utils: URL helpers for seed validation, link resolution and host scoping."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import SplitResult, urljoin, urlsplit, urlunsplit

from hostcrawl.crawler.models import InvalidURLError
from hostcrawl.logger import logger

__all__: Sequence[str] = (
    "CRAWLABLE_SCHEMES",
    "parse_seed",
    "normalize_url",
    "resolve_link",
    "extract_host",
    "is_in_scope",
)

CRAWLABLE_SCHEMES = ("http", "https")


def _host_key(parts: SplitResult) -> str:
    """host[:port] in lower case; raises ValueError on a malformed port."""
    host = parts.hostname or ""
    port = parts.port
    return f"{host}:{port}" if port is not None else host


def normalize_url(url: str) -> str:
    """Drops query and fragment; the result is the URL's dedup key."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def parse_seed(url: str) -> str:
    """Validates the crawl starting point and returns its normalized form."""
    try:
        parts = urlsplit(url.strip())
        _host_key(parts)
    except ValueError as exc:
        raise InvalidURLError(f"invalid starting URL {url!r}: {exc}") from exc
    if parts.scheme.lower() not in CRAWLABLE_SCHEMES or not parts.hostname:
        raise InvalidURLError(f"invalid starting URL {url!r}: expected an absolute http(s) URL")
    return normalize_url(urlunsplit(parts))


def resolve_link(base: str, href: str) -> str:
    """Resolves *href* against *base* and normalizes it.

    Raises ValueError when either side cannot be parsed.
    """
    resolved = normalize_url(urljoin(base, href.strip()))
    _host_key(urlsplit(resolved))
    logger.debug("Resolved link: %s + %s -> %s", base, href, resolved)
    return resolved


def extract_host(url: str) -> str:
    """Host used for scoping, ``host`` or ``host:port``."""
    return _host_key(urlsplit(url))


def is_in_scope(url: str, host: str) -> bool:
    """True when *url* is http(s) and lives on *host*."""
    parts = urlsplit(url)
    return parts.scheme.lower() in CRAWLABLE_SCHEMES and _host_key(parts) == host
