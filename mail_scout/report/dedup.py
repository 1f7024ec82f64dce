# File: mail_scout/report/dedup.py
"""mail_scout.report.dedup: Удаление повторяющихся адресов без учёта регистра."""

from __future__ import annotations

from typing import Iterable, List, Optional

from mail_scout.crawler.models import ExtractionResult
from mail_scout.events import CrawlEventLog, NullEventLog


def deduplicate(
    results: Iterable[ExtractionResult],
    existing_emails: Optional[Iterable[str]] = None,
    events: Optional[CrawlEventLog] = None,
) -> List[ExtractionResult]:
    """Оставляет первое вхождение каждого адреса.

    Адреса из *existing_emails* (например, уже записанные в CSV) считаются
    встреченными заранее и в результат не попадают.
    """
    sink = events if events is not None else NullEventLog()
    seen = {email.lower() for email in existing_emails or ()}
    unique: List[ExtractionResult] = []
    total = 0
    for result in results:
        total += 1
        key = result.email.lower()
        if key in seen:
            sink.duplicate_email(result.email)
            continue
        seen.add(key)
        unique.append(result)
    sink.deduplication_summary(total, len(unique))
    return unique
