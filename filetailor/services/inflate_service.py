from __future__ import annotations

import logging

from filetailor.models.tailoring_model import SourceFile, TailoringResult

logger = logging.getLogger(__name__)


class ExactSizeInflator:
    def inflate(self, file: SourceFile, target_bytes: int) -> TailoringResult:
        """
        Дополняет файл нулевыми байтами до `target_bytes`.
        Если цель не больше исходного размера, файл возвращается без изменений (без обрезки).
        """
        padding_length = max(0, target_bytes - file.size)
        if padding_length:
            output = file.data + bytes(padding_length)
            logger.info(f"Inflated '{file.name}' from {file.size} to {len(output)} bytes.")
        else:
            output = file.data
            logger.debug(f"'{file.name}' ({file.size} bytes) already reaches {target_bytes} bytes; passing through.")
        return TailoringResult(
            output_bytes=output,
            suggested_name=file.name,
            media_type=file.media_type,
        )
