# File: mail_scout/engine.py
"""mail_scout.engine: Оркестрация запуска — обход, дедупликация и запись CSV."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from mail_scout.config import CrawlerConfig
from mail_scout.crawler.crawler import CrawlerEngine
from mail_scout.crawler.fetcher import HttpFetcher
from mail_scout.crawler.models import ExtractionResult, Fetcher
from mail_scout.errors import ReportReadError
from mail_scout.events import CrawlEventLog, NullEventLog
from mail_scout.report import deduplicate, read_csv, write_csv

__all__ = ["ExtractionSummary", "crawl_site", "save_results", "run_extraction"]


@dataclass(slots=True)
class ExtractionSummary:
    """Итог запуска для CLI."""

    output: Path
    found: int
    written: int
    pages_visited: int
    pages_failed: int


async def crawl_site(
    config: CrawlerConfig,
    fetcher: Fetcher,
    events: Optional[CrawlEventLog] = None,
    logger: Optional[logging.Logger] = None,
) -> tuple[List[ExtractionResult], CrawlerEngine]:
    """Запускает CrawlerEngine с параметрами из конфига."""
    engine = CrawlerEngine(
        fetcher,
        events=events,
        max_queue_size=config.max_queue_size,
        logger=logger,
    )
    results = await engine.crawl(
        config.url,
        max_depth=config.max_depth,
        cross_domain=config.cross_domain,
        max_pages=config.max_pages,
    )
    return results, engine


def save_results(
    results: List[ExtractionResult],
    output: Path,
    events: Optional[CrawlEventLog] = None,
    logger: Optional[logging.Logger] = None,
) -> List[ExtractionResult]:
    """Дедуплицирует результаты относительно себя и уже сохранённого CSV и дописывает их."""
    log = logger if logger is not None else logging.getLogger("MailScout")
    try:
        existing = read_csv(output)
    except ReportReadError as exc:
        log.warning("Existing CSV ignored: %s", exc)
        existing = []

    unique = deduplicate(results, [r.email for r in existing], events)
    write_csv(unique, output, append=bool(existing))
    return unique


async def run_extraction(
    config: CrawlerConfig,
    events: Optional[CrawlEventLog] = None,
    logger: Optional[logging.Logger] = None,
    fetcher: Optional[Fetcher] = None,
) -> ExtractionSummary:
    """Полный запуск: обход сайта, дедупликация, запись CSV.

    Если *fetcher* не передан, создаётся HttpFetcher по конфигу.
    """
    sink = events if events is not None else NullEventLog()
    log = logger if logger is not None else logging.getLogger("MailScout")
    log.debug("Crawl settings: depth=%d, max_pages=%d, cross_domain=%s",
              config.max_depth, config.max_pages, config.cross_domain)

    if fetcher is None:
        async with HttpFetcher.from_config(config, events=sink) as http:
            results, engine = await crawl_site(config, http, sink, log)
    else:
        results, engine = await crawl_site(config, fetcher, sink, log)

    unique = save_results(results, config.output, sink, log)
    log.info("Saved %d new address(es) to %s", len(unique), config.output)
    return ExtractionSummary(
        output=config.output,
        found=len(results),
        written=len(unique),
        pages_visited=engine.stats.pages_visited,
        pages_failed=engine.stats.pages_failed,
    )
