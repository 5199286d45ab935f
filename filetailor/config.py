"""Константы приложения и настройка логирования.

Принципы:
- Единый источник правды для лимитов размеров и параметров поиска качества.
- Из окружения читается только уровень логирования.
"""
from __future__ import annotations

import copy
import logging
import logging.config
import os
from typing import Optional

# Размеры
MAX_FILE_SIZE_BYTES = 50 * 1024 * 1024  # 50 MB, общий жёсткий лимит
MIN_COMPRESS_SIZE_BYTES = 10 * 1024  # 10 KB

# Поиск качества
COMPRESS_SEARCH_ITERATIONS = 10
COMPRESS_FALLBACK_QUALITY = 0.01

COMPRESSIBLE_MEDIA_TYPES = ("image/jpeg", "image/png", "image/webp")

# Результат сжатия всегда JPEG
COMPRESSED_SUFFIX = "-compressed"
COMPRESSED_EXTENSION = ".jpg"
COMPRESSED_MEDIA_TYPE = "image/jpeg"

DEFAULT_MEDIA_TYPE = "application/octet-stream"

DEFAULT_LOG_LEVEL = "INFO"


def resolve_log_level(value: Optional[str]) -> str:
    """Имя уровня логирования; неизвестные значения заменяются на INFO."""
    name = (value or DEFAULT_LOG_LEVEL).strip().upper()
    # getLevelName возвращает int только для зарегистрированных имён
    if isinstance(logging.getLevelName(name), int):
        return name
    return DEFAULT_LOG_LEVEL


LOG_LEVEL = resolve_log_level(os.getenv("FILETAILOR_LOG_LEVEL"))

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "{levelname} {asctime} {name}: {message}",
            "style": "{",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "filetailor": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}


def configure_logging() -> None:
    """Применяет конфигурацию `LOGGING` (вызывается один раз из `main`).

    Уровень перечитывается из `FILETAILOR_LOG_LEVEL` на момент вызова.
    """
    config = copy.deepcopy(LOGGING)
    config["loggers"]["filetailor"]["level"] = resolve_log_level(os.getenv("FILETAILOR_LOG_LEVEL"))
    logging.config.dictConfig(config)
