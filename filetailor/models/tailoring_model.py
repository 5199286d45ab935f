"""Модели данных подгонки размера файла.

Принципы:
- SRP: только структуры данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from filetailor.config import COMPRESSIBLE_MEDIA_TYPES, MIN_COMPRESS_SIZE_BYTES


class Mode(str, Enum):
    """Режим подгонки: сжатие изображения или добивка файла."""
    COMPRESS = "compress"
    INFLATE = "inflate"


class FailureKind(str, Enum):
    DECODE_ERROR = "decode_error"
    ENCODE_ERROR = "encode_error"


@dataclass(frozen=True)
class SourceFile:
    """Исходный файл пользователя.

    Fields:
        name: Имя файла (без каталога).
        data: Содержимое файла.
        media_type: Заявленный MIME-тип, например "image/jpeg".
    """
    name: str
    data: bytes
    media_type: str

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def is_compressible(self) -> bool:
        """Сжатие доступно только для растровых изображений больше 10 KB."""
        return self.media_type in COMPRESSIBLE_MEDIA_TYPES and self.size > MIN_COMPRESS_SIZE_BYTES


@dataclass(frozen=True)
class TargetSpec:
    mode: Mode
    target_bytes: int


@dataclass(frozen=True)
class SizeBounds:
    """Допустимый диапазон целевого размера [min_bytes, max_bytes]."""
    min_bytes: int
    max_bytes: int

    @property
    def is_degenerate(self) -> bool:
        return self.min_bytes > self.max_bytes

    def contains(self, size_bytes: int) -> bool:
        return self.min_bytes <= size_bytes <= self.max_bytes


@dataclass(frozen=True)
class TailoringResult:
    """Результат подгонки, передаётся вызывающему коду.

    Fields:
        output_bytes: Содержимое результата.
        suggested_name: Имя для сохранения.
        media_type: MIME-тип результата.
        quality: Качество кодирования (только для сжатия).
    """
    output_bytes: bytes
    suggested_name: str
    media_type: str
    quality: Optional[float] = None

    @property
    def achieved_size(self) -> int:
        return len(self.output_bytes)


@dataclass(frozen=True)
class TailoringFailure:
    kind: FailureKind
    message: str


TailoringOutcome = Union[TailoringResult, TailoringFailure]
