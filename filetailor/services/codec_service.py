"""Кодек изображений: декодирование и JPEG-кодирование с заданным качеством.

Принципы:
- ISP: узкий интерфейс `ImageCodec` из двух методов, достаточный для поиска качества.
- DIP: компрессор зависит от протокола, а не от Pillow; в тестах подставляется заглушка.
"""
from __future__ import annotations

import io
import logging
from typing import Any, Protocol

from PIL import Image, ImageOps, UnidentifiedImageError

logger = logging.getLogger(__name__)


class CodecError(ValueError):
    """Базовая ошибка кодека."""


class ImageDecodeError(CodecError):
    """Байты не распознаны как поддерживаемое изображение."""


class ImageEncodeError(CodecError):
    """Кодек не смог закодировать изображение с заданным качеством."""


class ImageCodec(Protocol):
    def decode(self, data: bytes) -> Any:
        """Декодирует байты в промежуточное изображение. Raises `ImageDecodeError`."""
        ...

    def encode(self, image: Any, quality: float) -> bytes:
        """Кодирует изображение с качеством из [0, 1]. Raises `ImageEncodeError`."""
        ...


def quality_to_jpeg(quality: float) -> int:
    """Переводит качество [0, 1] в шкалу libjpeg [1, 100]."""
    return max(1, min(100, int(round(quality * 100))))


class PillowJpegCodec:
    def decode(self, data: bytes) -> Image.Image:
        """Декодирует изображение и приводит его к RGB.

        Учитывает EXIF-ориентацию. Прозрачные пиксели накладываются на чёрный фон,
        так как JPEG не хранит альфа-канал.

        Raises:
            ImageDecodeError: если данные не являются изображением или повреждены.
        """
        try:
            with Image.open(io.BytesIO(data)) as opened:
                opened.load()
                oriented = ImageOps.exif_transpose(opened)
                try:
                    return _flatten_to_rgb(oriented)
                finally:
                    if oriented is not opened:
                        oriented.close()
        except (UnidentifiedImageError, Image.DecompressionBombError) as exc:
            raise ImageDecodeError(f"Файл не является поддерживаемым изображением: {exc}") from exc
        except (OSError, SyntaxError, ValueError) as exc:
            raise ImageDecodeError(f"Не удалось декодировать изображение: {exc}") from exc

    def encode(self, image: Image.Image, quality: float) -> bytes:
        """Кодирует изображение в JPEG и возвращает байты."""
        buffer = io.BytesIO()
        try:
            image.save(buffer, format="JPEG", quality=quality_to_jpeg(quality))
        except (OSError, ValueError) as exc:
            raise ImageEncodeError(f"Не удалось закодировать JPEG (качество {quality:.3f}): {exc}") from exc
        return buffer.getvalue()


def _flatten_to_rgb(image: Image.Image) -> Image.Image:
    if image.mode == "RGB":
        return image.copy()
    if image.mode in ("RGBA", "LA", "P", "PA") or "transparency" in image.info:
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (0, 0, 0))
        background.paste(rgba, mask=rgba.getchannel("A"))
        rgba.close()
        return background
    return image.convert("RGB")
