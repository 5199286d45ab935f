"""Единая точка входа движка подгонки размера.

Принципы:
- SRP: только выбор стратегии по режиму; границы диапазона проверяет вызывающий код.
- Без состояния между вызовами: каждый вызов работает со своими буферами.
"""
from __future__ import annotations

from typing import Optional

from filetailor.models.tailoring_model import Mode, SourceFile, TailoringOutcome, TargetSpec
from filetailor.services.codec_service import ImageCodec
from filetailor.services.compress_service import AdaptiveQualityCompressor
from filetailor.services.inflate_service import ExactSizeInflator


class TailoringEngine:
    def __init__(self, codec: Optional[ImageCodec] = None) -> None:
        self._compressor = AdaptiveQualityCompressor(codec=codec)
        self._inflator = ExactSizeInflator()

    def process(self, file: SourceFile, mode: Mode, target_bytes: int) -> TailoringOutcome:
        """Сжимает или добивает файл до `target_bytes`.

        Ошибки кодека возвращаются как `TailoringFailure`, а не исключения.
        Значения вне `compute_bounds` не отклоняются: добивка пропускает файл
        как есть, сжатие уходит в запасной вариант с минимальным качеством.
        """
        if mode == Mode.COMPRESS:
            return self._compressor.compress(file, target_bytes)
        return self._inflator.inflate(file, target_bytes)

    def process_target(self, file: SourceFile, target: TargetSpec) -> TailoringOutcome:
        return self.process(file, target.mode, target.target_bytes)
