# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Dict, List, Union

import pytest
import pytest_asyncio
from aiohttp import web

from mail_scout.crawler.models import FetchResponse
from mail_scout.events import NullEventLog

SEED = "https://example.com/"


class StubFetcher:
    """
    Deterministic fetcher: maps normalized URLs to bodies or FetchResponse.
    Unknown URLs answer 404 without error.  Every call is recorded.
    """

    def __init__(self, pages: Dict[str, Union[str, FetchResponse]]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def fetch(self, url: str) -> FetchResponse:
        self.calls.append(url)
        page = self.pages.get(url)
        if page is None:
            return FetchResponse(status=404)
        if isinstance(page, FetchResponse):
            return page
        return FetchResponse(status=200, body=page)


class RecordingEventLog(NullEventLog):
    """Keeps (name, *args) tuples for the events the tests look at."""

    def __init__(self) -> None:
        self.events: list[tuple] = []

    def url_visit(self, url, depth):
        self.events.append(("visit", url, depth))

    def url_skipped(self, url, reason):
        self.events.append(("skip", url, reason))

    def http_request(self, url, status):
        self.events.append(("http", url, status))

    def http_error(self, url, error):
        self.events.append(("http_error", url, error))

    def http_skip(self, url, status):
        self.events.append(("http_skip", url, status))

    def parse_error(self, url, error):
        self.events.append(("parse_error", url, error))

    def queue_full(self, url, limit):
        self.events.append(("queue_full", url, limit))

    def duplicate_email(self, email):
        self.events.append(("duplicate", email))

    def deduplication_summary(self, before, after):
        self.events.append(("dedup", before, after))

    def named(self, name: str) -> list[tuple]:
        return [e for e in self.events if e[0] == name]


def html(body: str) -> str:
    return f"<html><body>{body}</body></html>"


@pytest.fixture()
def events() -> RecordingEventLog:
    return RecordingEventLog()


@pytest_asyncio.fixture
async def serve_app(unused_tcp_port: int) -> AsyncIterator[Callable[[web.Application], Awaitable[str]]]:
    """Start an aiohttp app on a free port and return its base URL; cleaned up after the test."""
    runners: list[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", unused_tcp_port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{unused_tcp_port}"

    try:
        yield _serve
    finally:
        for runner in runners:
            await runner.cleanup()
