# mail_scout/crawler/fetcher.py
"""
Fetcher module: a single HTTP GET per call, mapped to a FetchResponse.

Network problems never raise: they come back as ``status=0`` with ``error``
filled in.  Any HTTP status, 4xx/5xx included, is returned as is.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientConnectorError, ClientError, ClientSession, ClientTimeout

from mail_scout.config import DEFAULT_USER_AGENT, CrawlerConfig
from mail_scout.crawler.models import FetchResponse
from mail_scout.events import CrawlEventLog, NullEventLog


def _decode(data: bytes, charset: Optional[str]) -> str:
    try:
        return data.decode(charset or "utf-8", errors="replace")
    except LookupError:
        return data.decode("utf-8", errors="replace")


class HttpFetcher:
    """aiohttp-based fetcher; use as ``async with HttpFetcher(...) as fetcher``."""

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        events: Optional[CrawlEventLog] = None,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self.events: CrawlEventLog = events if events is not None else NullEventLog()
        self.session = session
        self._owns_session = session is None

    @classmethod
    def from_config(cls, config: CrawlerConfig, events: Optional[CrawlEventLog] = None) -> HttpFetcher:
        return cls(timeout=config.timeout, user_agent=config.user_agent, events=events)

    async def __aenter__(self) -> HttpFetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.timeout),
                headers={"User-Agent": self.user_agent},
                raise_for_status=False,
            )
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()
        if self._owns_session:
            self.session = None

    async def fetch(self, url: str) -> FetchResponse:
        """GET *url*; see the module docstring for the error mapping."""
        if self.session is None:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url, allow_redirects=True) as resp:
                data = await resp.read()
                response = FetchResponse(status=resp.status, body=_decode(data, resp.charset))
        except asyncio.TimeoutError:
            response = FetchResponse(status=0, error=f"Connection timeout: {url}")
        except ClientConnectorError:
            response = FetchResponse(status=0, error=f"Connection failed: Unable to reach {url}")
        except (ClientError, ValueError) as exc:
            response = FetchResponse(status=0, error=f"Network error: {exc}")

        if response.error is not None:
            self.events.http_error(url, response.error)
        else:
            self.events.http_request(url, response.status)
        return response
