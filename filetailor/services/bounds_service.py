from __future__ import annotations

from filetailor.config import MAX_FILE_SIZE_BYTES, MIN_COMPRESS_SIZE_BYTES
from filetailor.models.tailoring_model import Mode, SizeBounds


def compute_bounds(original_bytes: int, mode: Mode) -> SizeBounds:
    """
    Допустимый диапазон целевого размера для режима.

    Сжатие: [10 KB, исходный размер]. Для файлов меньше 10 KB диапазон
    вырожден (min > max); такие файлы не должны получать режим сжатия.
    Добивка: [исходный размер, 50 MB].
    """
    if mode == Mode.COMPRESS:
        return SizeBounds(min_bytes=MIN_COMPRESS_SIZE_BYTES, max_bytes=original_bytes)
    return SizeBounds(min_bytes=original_bytes, max_bytes=MAX_FILE_SIZE_BYTES)
