"""Логика выбора режима и целевого размера для панели настройки.

Принципы:
- SRP: чистые функции без виджетов; UI только отображает их результаты.
- Значения в KB, как на ползунке; в движок передаются байты (`kb_to_bytes`).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from filetailor.models.tailoring_model import Mode, SourceFile
from filetailor.services.bounds_service import compute_bounds


@dataclass(frozen=True)
class SizeChange:
    """Изменение размера: `delta_bytes` > 0 — уменьшение, < 0 — увеличение."""
    delta_bytes: int
    percent: int

    @property
    def is_reduction(self) -> bool:
        return self.delta_bytes > 0

    @property
    def is_increase(self) -> bool:
        return self.delta_bytes < 0


def available_modes(file: SourceFile) -> List[Mode]:
    """Сжатие предлагается только для поддерживаемых изображений больше 10 KB."""
    if file.is_compressible:
        return [Mode.COMPRESS, Mode.INFLATE]
    return [Mode.INFLATE]


def default_mode(file: SourceFile) -> Mode:
    return available_modes(file)[0]


def slider_range_kb(file_size: int, mode: Mode) -> Tuple[int, int]:
    bounds = compute_bounds(file_size, mode)
    if mode == Mode.COMPRESS:
        return bounds.min_bytes // 1024, math.floor(bounds.max_bytes / 1024)
    return math.ceil(bounds.min_bytes / 1024), bounds.max_bytes // 1024


def initial_target_kb(file_size: int, mode: Mode) -> int:
    size_kb = file_size / 1024
    if mode == Mode.COMPRESS:
        min_kb, _max_kb = slider_range_kb(file_size, mode)
        return max(min_kb, int(round(size_kb / 2)))
    return int(round(size_kb)) + 100


def clamp_target_kb(text: str, file_size: int, mode: Mode) -> float:
    """Разбирает ввод пользователя и прижимает его к диапазону ползунка.

    Нечисловой ввод даёт минимум диапазона.
    """
    min_kb, max_kb = slider_range_kb(file_size, mode)
    try:
        value = float(text)
    except (TypeError, ValueError):
        return float(min_kb)
    if math.isnan(value):
        return float(min_kb)
    return float(max(min_kb, min(max_kb, value)))


def kb_to_bytes(kb: float) -> int:
    return int(round(kb * 1024))


def describe_size_change(original_size: int, new_size: int) -> SizeChange:
    delta = original_size - new_size
    percent = int(round(abs(delta) * 100 / original_size)) if original_size else 0
    return SizeChange(delta_bytes=delta, percent=percent)


def slider_is_fixed(file_size: int, mode: Mode) -> bool:
    """Диапазон из одного значения: ползунок блокируется, цель остаётся минимумом."""
    min_kb, max_kb = slider_range_kb(file_size, mode)
    return max_kb <= min_kb
