# File: mail_scout/utils.py
"""mail_scout.utils: Проверка и канонизация абсолютных URL."""

from __future__ import annotations

from typing import Optional, Sequence
from urllib.parse import SplitResult, parse_qsl, urlencode, urlsplit, urlunsplit

__all__: Sequence[str] = (
    "is_valid_url",
    "extract_domain",
    "is_same_domain",
    "normalize_url",
)

_HTTP_SCHEMES = ("http", "https")
_DEFAULT_PORTS = {"http": 80, "https": 443}


def _split(url: str) -> Optional[SplitResult]:
    """Разбирает URL; None, если адрес не разбирается или порт некорректен."""
    if not isinstance(url, str):
        return None
    try:
        parts = urlsplit(url.strip())
        parts.port  # noqa: B018 - urlsplit проверяет порт лениво
    except ValueError:
        return None
    return parts


def is_valid_url(url: str) -> bool:
    """Проверяет, что URL абсолютный, имеет хост и использует http(s)."""
    parts = _split(url)
    return parts is not None and parts.scheme in _HTTP_SCHEMES and bool(parts.hostname)


def extract_domain(url: str) -> str:
    """Возвращает хост URL в нижнем регистре без порта или ``""``."""
    parts = _split(url)
    if parts is None or not parts.hostname:
        return ""
    return parts.hostname


def is_same_domain(url1: str, url2: str) -> bool:
    """Точное совпадение хостов; поддомены считаются другими доменами."""
    domain1 = extract_domain(url1)
    domain2 = extract_domain(url2)
    return bool(domain1) and domain1 == domain2


def normalize_url(url: str) -> str:
    """Приводит URL к каноническому виду.

    * схема и хост в нижнем регистре, порт по умолчанию (80/443) убирается;
    * пустой путь становится ``/``, завершающие слеши убираются (кроме корня);
    * параметры запроса сортируются по имени (стабильно), фрагмент отбрасывается.

    Строка, которая не разбирается как абсолютный URL, возвращается как есть.
    """
    parts = _split(url)
    if parts is None or not parts.scheme or not parts.hostname:
        return url

    scheme = parts.scheme.lower()
    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and _DEFAULT_PORTS.get(scheme) != port:
        host = f"{host}:{port}"
    userinfo, sep, _ = parts.netloc.rpartition("@")
    netloc = f"{userinfo}@{host}" if sep else host

    path = parts.path.rstrip("/") or "/"

    query = parts.query
    if query:
        params = parse_qsl(query, keep_blank_values=True)
        params.sort(key=lambda item: item[0])
        query = urlencode(params)

    return urlunsplit((scheme, netloc, path, query, ""))
