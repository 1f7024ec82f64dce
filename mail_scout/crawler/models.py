# mail_scout/crawler/models.py
"""
Data models and collaborator interfaces for the MailScout crawler.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Deque, List, Optional, Protocol, Set

if TYPE_CHECKING:
    from mail_scout.parser.html_parser import ParsedPage


@dataclass(frozen=True, slots=True)
class QueueItem:
    """Pending crawl target: normalized URL and its hop distance from the seed."""

    url: str
    depth: int


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """One e-mail address and the normalized URL of the page it was found on."""

    email: str
    source_url: str


@dataclass(frozen=True, slots=True)
class FetchResponse:
    """Outcome of a fetch: ``status == 0`` with *error* set means no HTTP response."""

    status: int
    body: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and 200 <= self.status < 300


@dataclass(slots=True)
class CrawlStats:
    pages_visited: int = 0
    pages_failed: int = 0
    links_dropped: int = 0


@dataclass(slots=True)
class CrawlState:
    """Mutable traversal state owned by a single ``crawl`` call."""

    queue: Deque[QueueItem] = field(default_factory=deque)
    visited: Set[str] = field(default_factory=set)
    results: List[ExtractionResult] = field(default_factory=list)
    stats: CrawlStats = field(default_factory=CrawlStats)


class Fetcher(Protocol):
    async def fetch(self, url: str) -> FetchResponse: ...


HtmlParser = Callable[[str], "ParsedPage"]
EmailExtractor = Callable[[str], List[str]]

__all__ = (
    "QueueItem",
    "ExtractionResult",
    "FetchResponse",
    "CrawlStats",
    "CrawlState",
    "Fetcher",
    "HtmlParser",
    "EmailExtractor",
)
