# File: linkwalk/report/__init__.py
"""linkwalk.report: renderers for walk results (text lines, JSON and HTML)."""

from __future__ import annotations

from linkwalk.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from linkwalk.report.json_report import render_json
from linkwalk.report.text_report import render_lines

__all__ = ["render_json", "render_html", "render_lines", "DEFAULT_TEMPLATE_DIR"]
