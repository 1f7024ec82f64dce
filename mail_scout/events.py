# File: mail_scout/events.py
"""Crawl event log for MailScout.

The crawler, the fetcher and the deduplicator report their decisions through a
:class:`CrawlEventLog` passed to them explicitly.  Two implementations exist:

* :class:`LoggingEventLog` - writes ``[DEBUG]`` lines to a :class:`logging.Logger`
  (used with ``--debug``);
* :class:`NullEventLog` - does nothing (default).

Use :func:`create_event_log` to pick one.
"""
from __future__ import annotations

import logging
from typing import Literal, Optional, Protocol, Sequence

__all__: Sequence[str] = (
    "SkipReason",
    "CrawlEventLog",
    "LoggingEventLog",
    "NullEventLog",
    "create_event_log",
)

SkipReason = Literal["already-visited", "depth-limit"]


class CrawlEventLog(Protocol):
    """Operations every event sink provides."""

    def url_visit(self, url: str, depth: int) -> None: ...

    def url_skipped(self, url: str, reason: SkipReason) -> None: ...

    def http_request(self, url: str, status: int) -> None: ...

    def http_error(self, url: str, error: str) -> None: ...

    def http_skip(self, url: str, status: int) -> None: ...

    def parse_error(self, url: str, error: str) -> None: ...

    def emails_found(self, url: str, emails: Sequence[str]) -> None: ...

    def no_emails_found(self, url: str) -> None: ...

    def links_discovered(self, total: int, admissible: int, queued: int) -> None: ...

    def queue_full(self, url: str, limit: int) -> None: ...

    def duplicate_email(self, email: str) -> None: ...

    def deduplication_summary(self, before: int, after: int) -> None: ...


class LoggingEventLog:
    """Event sink that formats every event as a debug line."""

    prefix = "[DEBUG]"

    def __init__(self, logger: logging.Logger, level: int = logging.DEBUG) -> None:
        self.logger = logger
        self.level = level

    def _emit(self, msg: str, *args: object) -> None:
        self.logger.log(self.level, f"{self.prefix} {msg}", *args)

    def url_visit(self, url: str, depth: int) -> None:
        self._emit("Visiting URL (depth %d): %s", depth, url)

    def url_skipped(self, url: str, reason: SkipReason) -> None:
        text = "already visited" if reason == "already-visited" else "depth limit reached"
        self._emit("Skipping URL (%s): %s", text, url)

    def http_request(self, url: str, status: int) -> None:
        self._emit("HTTP %d: %s", status, url)

    def http_error(self, url: str, error: str) -> None:
        self._emit("HTTP Error for %s: %s", url, error)

    def http_skip(self, url: str, status: int) -> None:
        self._emit("Skipping page (HTTP %d): %s", status, url)

    def parse_error(self, url: str, error: str) -> None:
        self._emit("Skipping page (parse error: %s): %s", error, url)

    def emails_found(self, url: str, emails: Sequence[str]) -> None:
        self._emit("Found %d email(s) on %s:", len(emails), url)
        for email in emails:
            self._emit("  - %s", email)

    def no_emails_found(self, url: str) -> None:
        self._emit("No emails found on %s", url)

    def links_discovered(self, total: int, admissible: int, queued: int) -> None:
        self._emit(
            "Link discovery: %d total, %d admissible, %d added to queue", total, admissible, queued
        )

    def queue_full(self, url: str, limit: int) -> None:
        self._emit("Queue full (%d), dropping: %s", limit, url)

    def duplicate_email(self, email: str) -> None:
        self._emit("Filtering duplicate email: %s", email)

    def deduplication_summary(self, before: int, after: int) -> None:
        self._emit(
            "Deduplication complete: %d -> %d (removed %d duplicate(s))",
            before,
            after,
            before - after,
        )


class NullEventLog:
    """Event sink that ignores everything."""

    def url_visit(self, url: str, depth: int) -> None:
        pass

    def url_skipped(self, url: str, reason: SkipReason) -> None:
        pass

    def http_request(self, url: str, status: int) -> None:
        pass

    def http_error(self, url: str, error: str) -> None:
        pass

    def http_skip(self, url: str, status: int) -> None:
        pass

    def parse_error(self, url: str, error: str) -> None:
        pass

    def emails_found(self, url: str, emails: Sequence[str]) -> None:
        pass

    def no_emails_found(self, url: str) -> None:
        pass

    def links_discovered(self, total: int, admissible: int, queued: int) -> None:
        pass

    def queue_full(self, url: str, limit: int) -> None:
        pass

    def duplicate_email(self, email: str) -> None:
        pass

    def deduplication_summary(self, before: int, after: int) -> None:
        pass


def create_event_log(debug: bool, logger: Optional[logging.Logger] = None) -> CrawlEventLog:
    """Return a :class:`LoggingEventLog` when *debug* is set, else a :class:`NullEventLog`."""
    if not debug:
        return NullEventLog()
    return LoggingEventLog(logger if logger is not None else logging.getLogger("MailScout"))
