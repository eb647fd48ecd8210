# hostcrawl/crawler/link_extractor.py
"""
Link extraction for hostcrawl.

Only collects raw ``href`` values; resolving them against the page URL is the
orchestrator's job.
"""
from __future__ import annotations

import logging
from typing import List, Union

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

logger = logging.getLogger(__name__)


def extract_links(body: Union[bytes, str]) -> List[str]:
    """
    Return the ``href`` of every ``<a>`` element in *body*.

    Order follows the opening tags in the document and duplicates are kept.
    Broken markup yields whatever the parser could recover, never an error.
    """
    try:
        soup = BeautifulSoup(body, "html.parser")
    except ParserRejectedMarkup as exc:
        logger.warning("Markup rejected by parser, no links extracted: %s", exc)
        return []
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if isinstance(href, str):
            links.append(href)
    return links
