# === FILE: mail_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации MailScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["CrawlerConfig", "DEFAULT_USER_AGENT", "load_config", "build_config"]

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; EmailExtractor/1.0)"


class CrawlerConfig(BaseModel):
    """Конфигурация одного запуска извлечения адресов."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    # Seed URL не валидируется здесь: это делает краулер (InvalidSeedURL).
    url: str = Field(..., min_length=1, description="Стартовый URL обхода.")
    output: Path = Field(..., description="Путь к CSV-файлу с результатами.")
    max_depth: int = Field(3, ge=0, description="Максимальная глубина обхода ссылок.")
    max_pages: int = Field(100, ge=1, description="Жесткий лимит по числу страниц.")
    cross_domain: bool = Field(False, description="Переходить ли на другие хосты.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    max_queue_size: int = Field(10_000, ge=1, description="Лимит длины очереди ожидающих URL.")
    debug: bool = Field(False, description="Подробный журнал решений краулера.")

    @field_validator("url", mode="before")
    def _strip_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def _read_mapping(path: Union[str, Path]) -> dict[str, Any]:
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    При отсутствии файла бросает FileNotFoundError.
    """
    return CrawlerConfig(**_read_mapping(path))


def build_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlerConfig:
    """
    Собирает конфигурацию: значения из файла (если указан), поверх них —
    переопределения со значением, отличным от None (опции CLI).
    """
    data: dict[str, Any] = _read_mapping(path) if path is not None else {}
    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlerConfig(**data)
