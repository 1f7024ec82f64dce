# mail_scout/crawler/link_discovery.py
"""
Link discovery: turns raw ``href`` values of a page into normalized URLs
that are admissible for the crawl queue.
"""
from __future__ import annotations

from typing import Iterable, List
from urllib.parse import urljoin

from mail_scout.utils import extract_domain, is_valid_url, normalize_url


def discover_links(
    raw_links: Iterable[str],
    base_domain: str,
    base_url: str,
    cross_domain: bool = False,
) -> List[str]:
    """
    Resolve *raw_links* against *base_url* and keep admissible ones.

    A link is admissible when it resolves to an absolute http(s) URL and
    either *cross_domain* is set or its host equals *base_domain* exactly
    (``www.example.com`` is not ``example.com``).  Unresolvable links,
    ``mailto:``, ``javascript:`` and other schemes are skipped silently.

    Returns normalized URLs, first occurrence wins, in input order.
    """
    discovered: List[str] = []
    seen: set[str] = set()
    for raw in raw_links:
        if not isinstance(raw, str):
            continue
        try:
            absolute = urljoin(base_url, raw.strip())
        except ValueError:
            continue
        if not is_valid_url(absolute):
            continue
        if not cross_domain and extract_domain(absolute) != base_domain:
            continue
        normalized = normalize_url(absolute)
        if normalized not in seen:
            seen.add(normalized)
            discovered.append(normalized)
    return discovered
