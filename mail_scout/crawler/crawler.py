# === FILE: mail_scout/crawler/crawler.py ===
from __future__ import annotations

import logging
import time
from typing import List, Optional

from mail_scout.crawler.link_discovery import discover_links
from mail_scout.crawler.models import (
    CrawlState,
    CrawlStats,
    EmailExtractor,
    ExtractionResult,
    Fetcher,
    HtmlParser,
    QueueItem,
)
from mail_scout.errors import DomainExtractionFailure, InvalidSeedURL
from mail_scout.events import CrawlEventLog, NullEventLog
from mail_scout.extractor import extract_emails
from mail_scout.parser.html_parser import ParsedPage, parse_html
from mail_scout.utils import extract_domain, is_valid_url, normalize_url

__all__ = ("CrawlerEngine", "DEFAULT_MAX_QUEUE_SIZE")

DEFAULT_MAX_QUEUE_SIZE = 10_000


class CrawlerEngine:
    """
    Последовательный обход в ширину с извлечением e-mail адресов.

    Одна страница за раз: fetch → parse → extract → discover → enqueue.
    Ошибки отдельной страницы (сеть, статус не 2xx, разбор HTML) не
    прерывают обход; фатальны только некорректный стартовый URL и
    невозможность получить из него домен.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        parser: HtmlParser = parse_html,
        extractor: EmailExtractor = extract_emails,
        events: Optional[CrawlEventLog] = None,
        max_queue_size: int = DEFAULT_MAX_QUEUE_SIZE,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if max_queue_size < 1:
            raise ValueError("max_queue_size must be >= 1")
        self.fetcher = fetcher
        self.parser = parser
        self.extractor = extractor
        self.events: CrawlEventLog = events if events is not None else NullEventLog()
        self.max_queue_size = max_queue_size
        self.logger = logger if logger is not None else logging.getLogger("MailScout.crawler")
        self.stats = CrawlStats()

    async def crawl(
        self,
        seed_url: str,
        max_depth: int = 3,
        cross_domain: bool = False,
        max_pages: int = 100,
    ) -> List[ExtractionResult]:
        """
        Обходит сайт от *seed_url* и возвращает найденные адреса (с повторами).

        Raises
        ------
        InvalidSeedURL
            *seed_url* не является абсолютным http(s) URL.
        DomainExtractionFailure
            из нормализованного *seed_url* не удалось получить хост.
        """
        if not is_valid_url(seed_url):
            raise InvalidSeedURL(seed_url)
        root = normalize_url(seed_url.strip())
        base_domain = extract_domain(root)
        if not base_domain:
            raise DomainExtractionFailure(seed_url)

        state = CrawlState()
        state.queue.append(QueueItem(root, 0))
        self.stats = state.stats

        self.logger.info("Старт обхода: %s (depth=%d, max_pages=%d)", root, max_depth, max_pages)
        start = time.monotonic()

        while state.queue and state.stats.pages_visited < max_pages:
            item = state.queue.popleft()

            if item.url in state.visited:
                self.events.url_skipped(item.url, "already-visited")
                continue
            if item.depth > max_depth:
                self.events.url_skipped(item.url, "depth-limit")
                continue

            state.visited.add(item.url)
            state.stats.pages_visited += 1
            self.events.url_visit(item.url, item.depth)

            page = await self._load(item)
            if page is None:
                state.stats.pages_failed += 1
                continue

            self._record(state, item, page)

            if item.depth < max_depth:
                self._expand(state, item, page, base_domain, cross_domain)

        duration = time.monotonic() - start
        self.logger.info(
            "Завершено: %d страниц (%d с ошибкой), %d адресов за %.2f с",
            state.stats.pages_visited,
            state.stats.pages_failed,
            len(state.results),
            duration,
        )
        if state.stats.links_dropped:
            self.logger.info("Очередь переполнена, отброшено ссылок: %d", state.stats.links_dropped)
        return state.results

    async def _load(self, item: QueueItem) -> Optional[ParsedPage]:
        """Fetch and parse one page; None means a page-local failure."""
        response = await self.fetcher.fetch(item.url)
        if response.error is not None:
            self.logger.warning("Failed %s: %s", item.url, response.error)
            return None
        if not response.ok:
            self.events.http_skip(item.url, response.status)
            self.logger.debug("Skip %s: HTTP %d", item.url, response.status)
            return None
        try:
            return self.parser(response.body)
        except Exception as exc:  # парсер-заглушка или сторонний парсер
            self.events.parse_error(item.url, str(exc))
            self.logger.warning("Parse failed %s: %s", item.url, exc)
            return None

    def _record(self, state: CrawlState, item: QueueItem, page: ParsedPage) -> None:
        emails = self.extractor(page.text)
        if not emails:
            self.events.no_emails_found(item.url)
            return
        self.events.emails_found(item.url, emails)
        state.results.extend(ExtractionResult(email, item.url) for email in emails)

    def _expand(
        self,
        state: CrawlState,
        item: QueueItem,
        page: ParsedPage,
        base_domain: str,
        cross_domain: bool,
    ) -> None:
        links = discover_links(page.links, base_domain, item.url, cross_domain)
        queued = 0
        for link in links:
            url = normalize_url(link)
            if url in state.visited:
                continue
            if len(state.queue) >= self.max_queue_size:
                state.stats.links_dropped += 1
                self.events.queue_full(url, self.max_queue_size)
                continue
            state.queue.append(QueueItem(url, item.depth + 1))
            queued += 1
        self.events.links_discovered(len(page.links), len(links), queued)
