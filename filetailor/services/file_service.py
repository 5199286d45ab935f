"""Чтение исходных файлов с диска и сохранение результатов.

Принципы:
- SRP: только файловый ввод-вывод и определение MIME-типа.
- Лимит 50 MB проверяется здесь, до передачи файла в движок.
"""
from __future__ import annotations

import logging
import mimetypes
from pathlib import Path

from filetailor.config import DEFAULT_MEDIA_TYPE, MAX_FILE_SIZE_BYTES
from filetailor.models.tailoring_model import SourceFile, TailoringResult
from filetailor.utils.formatting import format_bytes_simple

logger = logging.getLogger(__name__)


class FileTooLargeError(ValueError):
    """Файл превышает общий лимит размера."""


def guess_media_type(file_name: str) -> str:
    media_type, _encoding = mimetypes.guess_type(file_name, strict=False)
    return media_type or DEFAULT_MEDIA_TYPE


def load_source_file(file_path: str | Path) -> SourceFile:
    """Загружает файл с диска и возвращает `SourceFile`.

    Args:
        file_path: Путь до файла.

    Returns:
        `SourceFile` с именем, содержимым и MIME-типом, определённым по имени.

    Raises:
        FileNotFoundError: если путь не существует или не указывает на файл.
        FileTooLargeError: если размер превышает `MAX_FILE_SIZE_BYTES`.
    """
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"Файл не найден: {path}")

    size_bytes = path.stat().st_size
    if size_bytes > MAX_FILE_SIZE_BYTES:
        logger.warning(f"Rejected '{path.name}': {size_bytes} bytes exceeds the {MAX_FILE_SIZE_BYTES} byte cap.")
        raise FileTooLargeError(
            f"Файл слишком большой. Максимальный размер: {format_bytes_simple(MAX_FILE_SIZE_BYTES)}."
        )

    source = SourceFile(name=path.name, data=path.read_bytes(), media_type=guess_media_type(path.name))
    logger.info(f"Loaded '{source.name}' ({source.size} bytes, {source.media_type}).")
    return source


def save_result(result: TailoringResult, destination: str | Path) -> Path:
    """Записывает результат на диск.

    Если `destination` — каталог, файл сохраняется в нём под `suggested_name`.
    Родительские каталоги создаются при необходимости.
    """
    path = Path(destination)
    if path.is_dir():
        path = path / result.suggested_name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(result.output_bytes)
    logger.info(f"Saved {result.achieved_size} bytes to {path}")
    return path
