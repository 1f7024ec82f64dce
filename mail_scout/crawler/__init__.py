"""mail_scout.crawler: обход сайта, поиск ссылок и загрузка страниц."""

from mail_scout.crawler.crawler import CrawlerEngine
from mail_scout.crawler.fetcher import HttpFetcher
from mail_scout.crawler.link_discovery import discover_links
from mail_scout.crawler.models import ExtractionResult, FetchResponse, QueueItem

__all__ = [
    "CrawlerEngine",
    "HttpFetcher",
    "discover_links",
    "ExtractionResult",
    "FetchResponse",
    "QueueItem",
]
