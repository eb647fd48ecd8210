# File: hostcrawl/report/__init__.py
"""hostcrawl.report: JSON, HTML and plain text renderers used by the CLI."""

from __future__ import annotations

from hostcrawl.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from hostcrawl.report.json_report import render_json
from hostcrawl.report.text_report import render_text

__all__ = ["DEFAULT_TEMPLATE_DIR", "render_html", "render_json", "render_text"]
