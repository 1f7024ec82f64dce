# === FILE: mail_scout/parser/html_parser.py ===
"""HTML parsing utilities for MailScout.

The crawler needs exactly two things from a page:

* text  — visible text of ``<body>`` (or of the whole document when there is
  no body), used for e-mail extraction.  Text nodes are joined as-is, so an address
  split across inline tags (``<b>sales</b>@example.com``) stays whole;
* links — raw ``href`` values of ``<a>`` tags in document order.  They are
  *not* resolved here; :func:`mail_scout.crawler.link_discovery.discover_links`
  resolves and filters them against the page URL.

Malformed markup is handled best-effort by ``html.parser``; if parsing fails
completely an empty :class:`ParsedPage` is returned instead of raising.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = ("ParsedPage", "parse_html")

_NON_VISIBLE = ("script", "style", "noscript", "template")

_log = logging.getLogger("MailScout.parser")


@dataclass(slots=True)
class ParsedPage:
    """Lightweight representation of an HTML page."""

    text: str = ""
    links: list[str] = field(default_factory=list)


def _extract_links(soup: BeautifulSoup) -> list[str]:
    links: list[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if not isinstance(href, str):
            continue
        href = href.strip()
        if href:
            links.append(href)
    return links


def _extract_text(soup: BeautifulSoup) -> str:
    for element in soup(list(_NON_VISIBLE)):
        element.decompose()
    root = soup.body if soup.body is not None else soup
    return root.get_text().strip()


def parse_html(html: str) -> ParsedPage:
    """Parse raw HTML markup into text content and raw links."""
    if not html or not isinstance(html, str):
        return ParsedPage()
    try:
        soup = BeautifulSoup(html, "html.parser")
        links = _extract_links(soup)
        text = _extract_text(soup)
    except Exception as exc:  # bs4 может упасть на совсем битой разметке
        _log.debug("HTML parse failed: %s", exc)
        return ParsedPage()
    return ParsedPage(text=text, links=links)
