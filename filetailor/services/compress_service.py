"""Сжатие изображения до бюджета байт подбором качества JPEG.

Принципы:
- SRP: класс отвечает только за поиск качества; кодек передаётся извне.
- Поиск фиксирован по числу шагов (10), без порога сходимости: одинаковый вход
  всегда даёт одинаковый результат.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from filetailor.config import (
    COMPRESS_FALLBACK_QUALITY,
    COMPRESS_SEARCH_ITERATIONS,
    COMPRESSED_EXTENSION,
    COMPRESSED_MEDIA_TYPE,
    COMPRESSED_SUFFIX,
)
from filetailor.models.tailoring_model import (
    FailureKind,
    SourceFile,
    TailoringFailure,
    TailoringOutcome,
    TailoringResult,
)
from filetailor.services.codec_service import (
    ImageCodec,
    ImageDecodeError,
    ImageEncodeError,
    PillowJpegCodec,
)

logger = logging.getLogger(__name__)


def compressed_name(source_name: str) -> str:
    """Отбрасывает последнее расширение и добавляет суффикс `-compressed.jpg`."""
    stem = source_name.rsplit(".", 1)[0] if "." in source_name else source_name
    return f"{stem}{COMPRESSED_SUFFIX}{COMPRESSED_EXTENSION}"


class AdaptiveQualityCompressor:
    def __init__(
        self,
        codec: Optional[ImageCodec] = None,
        iterations: int = COMPRESS_SEARCH_ITERATIONS,
        fallback_quality: float = COMPRESS_FALLBACK_QUALITY,
    ) -> None:
        self._codec: ImageCodec = codec if codec is not None else PillowJpegCodec()
        self._iterations = iterations
        self._fallback_quality = fallback_quality

    def compress(self, image: SourceFile, target_bytes: int) -> TailoringOutcome:
        """Ищет максимальное качество, при котором результат не превышает `target_bytes`.

        Бинарный поиск по качеству на отрезке [0, 1]: ровно `iterations` шагов,
        предполагается, что размер не убывает с ростом качества. Если ни одна
        проба не уложилась в бюджет, результат кодируется с качеством 0.01
        без проверки размера.

        Returns:
            `TailoringResult` либо `TailoringFailure` (DECODE_ERROR / ENCODE_ERROR).
        """
        try:
            decoded = self._codec.decode(image.data)
        except ImageDecodeError as exc:
            logger.error(f"Cannot decode '{image.name}': {exc}")
            return TailoringFailure(kind=FailureKind.DECODE_ERROR, message=str(exc))

        try:
            best_bytes, best_quality = self._search(decoded, target_bytes)
            if best_bytes is None:
                logger.warning(
                    f"No sampled quality fits {target_bytes} bytes for '{image.name}'. "
                    f"Falling back to quality {self._fallback_quality}."
                )
                best_quality = self._fallback_quality
                best_bytes = self._codec.encode(decoded, best_quality)
        except ImageEncodeError as exc:
            logger.error(f"Cannot encode '{image.name}': {exc}")
            return TailoringFailure(kind=FailureKind.ENCODE_ERROR, message=str(exc))
        finally:
            _release(decoded)

        logger.info(
            f"Compressed '{image.name}' from {image.size} to {len(best_bytes)} bytes "
            f"(target {target_bytes}, quality {best_quality:.4f})."
        )
        return TailoringResult(
            output_bytes=best_bytes,
            suggested_name=compressed_name(image.name),
            media_type=COMPRESSED_MEDIA_TYPE,
            quality=best_quality,
        )

    def _search(self, decoded, target_bytes: int) -> Tuple[Optional[bytes], Optional[float]]:
        low, high = 0.0, 1.0
        best_bytes: Optional[bytes] = None
        best_quality: Optional[float] = None
        for step in range(self._iterations):
            mid = (low + high) / 2
            candidate = self._codec.encode(decoded, mid)
            size = len(candidate)
            if size > target_bytes:
                high = mid
            else:
                best_bytes, best_quality = candidate, mid
                low = mid
            logger.debug(f"Step {step + 1}: quality {mid:.4f} -> {size} bytes")
        return best_bytes, best_quality


def _release(decoded) -> None:
    close = getattr(decoded, "close", None)
    if callable(close):
        close()
