# File: tests/test_utils.py
import pytest

from hostcrawl.crawler.models import InvalidURLError
from hostcrawl.utils import extract_host, is_in_scope, normalize_url, parse_seed, resolve_link


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://x.test", "https://x.test"),
        ("https://x.test/", "https://x.test/"),
        ("https://x.test/a?b=1#c", "https://x.test/a"),
        ("https://x.test/a#c", "https://x.test/a"),
        ("https://x.test/a/?", "https://x.test/a/"),
    ],
)
def test_normalize_url(url, expected):
    assert normalize_url(url) == expected


def test_parse_seed_normalizes():
    assert parse_seed("  https://x.test/start?utm=1#top ") == "https://x.test/start"


@pytest.mark.parametrize("seed", ["", "x.test", "/path", "mailto:a@x.test", "ftp://x.test", "http://[::1", "http://x.test:port/"])
def test_parse_seed_rejects(seed):
    with pytest.raises(InvalidURLError):
        parse_seed(seed)


def test_invalid_url_error_is_value_error():
    with pytest.raises(ValueError):
        parse_seed("nope")


@pytest.mark.parametrize(
    "base,href,expected",
    [
        ("https://x.test", "/", "https://x.test/"),
        ("https://x.test", "/bar", "https://x.test/bar"),
        ("https://x.test/foo", "bar", "https://x.test/bar"),
        ("https://x.test/dir/page", "../up", "https://x.test/up"),
        ("https://x.test/bar", "https://other.test", "https://other.test"),
        ("https://x.test/a", "//cdn.test/lib.js", "https://cdn.test/lib.js"),
        ("https://x.test/a", "?page=2", "https://x.test/a"),
        ("https://x.test/a", "#section", "https://x.test/a"),
        ("https://x.test/a", " /padded ", "https://x.test/padded"),
    ],
)
def test_resolve_link(base, href, expected):
    assert resolve_link(base, href) == expected


@pytest.mark.parametrize("href", ["http://[::1", "http://x.test:99999999/"])
def test_resolve_link_rejects_malformed(href):
    with pytest.raises(ValueError):
        resolve_link("https://x.test/", href)


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://x.test/a", "x.test"),
        ("https://X.Test/a", "x.test"),
        ("http://x.test:8080/", "x.test:8080"),
        ("https://user:pw@x.test/", "x.test"),
        ("mailto:a@x.test", ""),
    ],
)
def test_extract_host(url, expected):
    assert extract_host(url) == expected


@pytest.mark.parametrize(
    "url,in_scope",
    [
        ("https://x.test/a", True),
        ("http://x.test/a", True),
        ("https://sub.x.test/a", False),
        ("https://x.test:8443/a", False),
        ("https://other.test/", False),
        ("ftp://x.test/file", False),
        ("mailto:a@x.test", False),
    ],
)
def test_is_in_scope(url, in_scope):
    assert is_in_scope(url, "x.test") is in_scope
