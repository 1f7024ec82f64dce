# File: mail_scout/errors.py
"""mail_scout.errors: Иерархия исключений MailScout."""

from __future__ import annotations

__all__ = [
    "MailScoutError",
    "InvalidSeedURL",
    "DomainExtractionFailure",
    "ReportError",
    "ReportReadError",
    "ReportWriteError",
]


class MailScoutError(Exception):
    """Базовое исключение проекта."""


class InvalidSeedURL(MailScoutError, ValueError):
    """Стартовый URL не является абсолютным http(s) URL."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid URL: {url}")
        self.url = url


class DomainExtractionFailure(MailScoutError, ValueError):
    """Не удалось получить домен из нормализованного стартового URL."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Could not extract domain from URL: {url}")
        self.url = url


class ReportError(MailScoutError):
    """Ошибка чтения или записи CSV-отчёта."""


class ReportReadError(ReportError):
    pass


class ReportWriteError(ReportError):
    pass
