# hostcrawl/report/text_report.py
"""Plain text listing, one line per page."""
from __future__ import annotations

from typing import Iterable

from hostcrawl.aggregator import PageInfo


def render_text(pages: Iterable[PageInfo]) -> str:
    """``<url>, [<link> <link> ...]`` per page, with `` (error: ...)`` on failures."""
    lines = []
    for page in pages:
        line = f"{page['url']}, [{' '.join(page['links'])}]"
        if page["error"] is not None:
            line += f" (error: {page['error']})"
        lines.append(line)
    return "\n".join(lines)
