# File: linkwalk/report/text_report.py
"""linkwalk.report.text_report: one console line per visited node."""

from __future__ import annotations

from typing import List

from linkwalk.aggregator import CrawlReport


def render_lines(report: CrawlReport) -> List[str]:
    """Render fetched and failed nodes, sorted by id."""
    lines = [(page["id"], f"{page['id']} was fetched. Body was: {page['content']}") for page in report.fetched]
    lines += [(node["id"], f"{node['id']} failed: {node['error']}") for node in report.failed]
    return [line for _, line in sorted(lines)]
