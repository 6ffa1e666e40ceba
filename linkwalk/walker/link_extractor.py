# linkwalk/walker/link_extractor.py
"""
Link extraction utilities for LinkWalk.
"""
from __future__ import annotations

from typing import List
from urllib.parse import urldefrag, urljoin, urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag


def extract_links(base_url: str, html: str, *, same_host: bool = True) -> List[str]:
    """
    Extract absolute HTTP(S) links from *html* in document order.

    Ignores mailto:, javascript: and bare fragments; strips fragments.
    With *same_host* only links on the host of *base_url* are kept.
    Duplicates are kept: the walker deduplicates.
    """
    soup = BeautifulSoup(html, "html.parser")
    base_netloc = urlparse(base_url).netloc
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.startswith(("mailto:", "javascript:", "#")):
            continue
        absolute, _ = urldefrag(urljoin(base_url, raw))
        parsed = urlparse(absolute)
        if parsed.scheme not in ("http", "https"):
            continue
        if same_host and parsed.netloc != base_netloc:
            continue
        links.append(absolute)
    return links
