"""Кодирование изображения в байты PNM.

Принципы:
- SRP: только сериализация; запись на диск делает `ImageService`.
- Входная модель не изменяется: max/min пересчитываются для заголовка заново.
"""
from __future__ import annotations

import logging
import warnings
from typing import List, Optional, Tuple

import numpy as np

from pnmcodec.config import DEFAULT_SETTINGS, CodecSettings
from pnmcodec.models.errors import IntegrityWarning, SampleRangeError
from pnmcodec.models.image_model import PnmImage, magic_for
from pnmcodec.services.decode_service import SAMPLE_DTYPES

logger = logging.getLogger(__name__)

DEGENERATE_MAX = 255
SIGNED_16_MAX = 0x7FFF
STANDARD_MAX = 0xFFFF


def _warn(message: str) -> None:
    warnings.warn(message, IntegrityWarning, stacklevel=4)


class EncodeService:
    def header_max(self, image: PnmImage) -> Tuple[int, int]:
        """Пересчитывает (min, max) по отсчётам и возвращает max для заголовка.

        Вырожденный максимум (0 или равный минимуму) поднимается до 255.
        """
        lo, hi = image.compute_min_max()
        if lo < 0:
            _warn(f"min ({lo}) меньше нуля: PNM не хранит отрицательные значения")
        header_max = hi
        if (hi == 0 or hi == lo) and hi < DEGENERATE_MAX:
            header_max = DEGENERATE_MAX
            _warn(f"max ({hi}) вырожден (max==min или 0), в заголовок записано {DEGENERATE_MAX}")
        return lo, header_max

    def build_header(self, magic: str, width: int, height: int, header_max: int, comment: str) -> bytes:
        lines = [magic, f"# {comment}", f"{width} {height}", str(header_max)]
        return ("\n".join(lines) + "\n").encode("ascii")

    def encode_ascii(self, image: PnmImage, settings: CodecSettings = DEFAULT_SETTINGS) -> bytes:
        """P2/P3: десятичные отсчёты через пробел.

        Перенос строки после каждых `settings.ascii_samples_per_line` отсчётов — косметика,
        декодеры его не различают.
        """
        _lo, header_max = self.header_max(image)
        kind = "color" if image.is_color else "gray"
        header = self.build_header(
            magic_for(image.samples_per_pixel, binary=False),
            image.width,
            image.height,
            header_max,
            f"{settings.comment} ({kind} ASCII)",
        )

        tokens = [str(v) for v in image.samples.tolist()]
        per_line = settings.ascii_samples_per_line or len(tokens)
        rows: List[str] = [" ".join(tokens[i:i + per_line]) for i in range(0, len(tokens), per_line)]
        body = "\n".join(rows) + "\n"
        return header + body.encode("ascii")

    def encode_binary(
        self,
        image: PnmImage,
        sample_width: Optional[int] = None,
        settings: CodecSettings = DEFAULT_SETTINGS,
    ) -> bytes:
        """P5/P6: отсчёты фиксированной ширины, старший байт первым.

        Args:
            image: Изображение для записи.
            sample_width: None — стандартное правило (1 байт при max < 256, иначе 2);
                1, 2 или 4 — ширина задаётся явно, отсчёты усекаются до младших байт,
                а max в заголовке ограничивается наибольшим значением этой ширины (255 для 1 байта).
            settings: Текст комментария заголовка.

        Raises:
            SampleRangeError: в стандартном режиме max не помещается в 2 байта.
            ValueError: недопустимая ширина отсчёта.
        """
        lo, header_max = self.header_max(image)
        if sample_width is None:
            if header_max > STANDARD_MAX:
                raise SampleRangeError(
                    f"max ({header_max}) не помещается в 2 байта; используйте sample_width=4"
                )
            width = 1 if header_max < 256 else 2
        elif sample_width in SAMPLE_DTYPES:
            width = sample_width
        else:
            raise ValueError(f"Ширина отсчёта должна быть 1, 2 или 4 байта, получено {sample_width}")

        if width == 2 and header_max > SIGNED_16_MAX:
            logger.warning("max (%d) > %d may cause problems with some readers", header_max, SIGNED_16_MAX)

        limit = (1 << (8 * width)) - 1
        hi = int(image.samples.max())
        if hi > limit:
            _warn(f"max ({hi}) не помещается в {width} байт(а), значения усечены")
        # заголовок должен описывать записанные данные, а не исходные
        header_max = min(header_max, limit)

        kind = "color" if image.is_color else "gray"
        encoding = "binary" if sample_width is None else f"raw-{8 * width}"
        header = self.build_header(
            magic_for(image.samples_per_pixel, binary=True),
            image.width,
            image.height,
            header_max,
            f"{settings.comment} ({kind} {encoding})",
        )
        payload = (image.samples & limit).astype(SAMPLE_DTYPES[width]).tobytes()
        logger.debug("encoded %s %dx%d, %d bytes/sample, min=%d", kind, image.width, image.height, width, lo)
        return header + payload
