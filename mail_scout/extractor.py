# File: mail_scout/extractor.py
"""mail_scout.extractor: Поиск и проверка e-mail адресов в тексте страницы."""

from __future__ import annotations

import re
from typing import List, Sequence

__all__: Sequence[str] = ("EMAIL_PATTERN", "is_valid_email", "extract_emails")

# Кандидаты; окончательную проверку делает is_valid_email.
EMAIL_PATTERN = re.compile(
    r"\b[A-Za-z0-9](?:[A-Za-z0-9._+-]*[A-Za-z0-9])?"
    r"@[A-Za-z0-9][A-Za-z0-9.-]*\.[A-Za-z]{2,}\b"
)

_LOCAL_RE = re.compile(r"^[A-Za-z0-9._+-]+$")
_DOMAIN_RE = re.compile(r"^[A-Za-z0-9.-]+$")
_TLD_RE = re.compile(r"^[A-Za-z]{2,}$")


def _valid_local(local: str) -> bool:
    if not 1 <= len(local) <= 64:
        return False
    if local.startswith(".") or local.endswith(".") or ".." in local:
        return False
    return bool(_LOCAL_RE.match(local))


def _valid_domain(domain: str) -> bool:
    if not 1 <= len(domain) <= 255 or "." not in domain:
        return False
    if domain[0] in ".-" or domain[-1] in ".-" or ".." in domain:
        return False
    if not _DOMAIN_RE.match(domain):
        return False
    return bool(_TLD_RE.match(domain.rsplit(".", 1)[-1]))


def is_valid_email(email: str) -> bool:
    """Проверяет адрес: локальная часть 1-64 символа, домен 1-255 с буквенным TLD."""
    if not email or not isinstance(email, str):
        return False
    parts = email.split("@")
    if len(parts) != 2:
        return False
    local, domain = parts
    return _valid_local(local) and _valid_domain(domain)


def extract_emails(text: str) -> List[str]:
    """Возвращает уникальные корректные адреса в порядке первого появления."""
    if not text or not isinstance(text, str):
        return []
    valid = (m for m in EMAIL_PATTERN.findall(text) if is_valid_email(m))
    return list(dict.fromkeys(valid))
