"""Декодирование отсчётов PNM: ASCII (P2/P3) и двоичные (P5/P6, 8/16/32 бита).

Принципы:
- SRP: заголовок уже разобран `HeaderService`; здесь только отсчёты.
- Многобайтовые отсчёты всегда big-endian, независимо от платформы.
"""
from __future__ import annotations

import logging
import re
import warnings
from itertools import islice
from typing import BinaryIO, Optional

import numpy as np

from pnmcodec.config import DEFAULT_SETTINGS, CodecSettings
from pnmcodec.models.errors import IntegrityWarning, MalformedSampleError, TruncatedDataError
from pnmcodec.models.image_model import MAX_SAMPLE_VALUE, SAMPLE_DTYPE, PnmHeader, PnmImage

logger = logging.getLogger(__name__)

_DIGITS = re.compile(rb"[0-9]+")

# ширина отсчёта в байтах -> dtype numpy
SAMPLE_DTYPES = {
    1: np.dtype("u1"),
    2: np.dtype(">u2"),
    4: np.dtype(">u4"),
}


class DecodeService:
    def decode_ascii(self, stream: BinaryIO, header: PnmHeader) -> PnmImage:
        """Читает `header.sample_count` десятичных чисел с текущей позиции потока.

        Токен — максимальная последовательность цифр; всё остальное (пробелы,
        переводы строк, прочие символы) пропускается.

        Raises:
            TruncatedDataError: чисел меньше, чем нужно.
            MalformedSampleError: число не помещается в 32 бита.
        """
        count = header.sample_count
        rest = stream.read()
        values = [int(m.group()) for m in islice(_DIGITS.finditer(rest), count)]
        if len(values) < count:
            raise TruncatedDataError(f"Ожидалось {count} отсчётов, найдено {len(values)}")
        too_big = next((v for v in values if v > MAX_SAMPLE_VALUE), None)
        if too_big is not None:
            raise MalformedSampleError(f"Отсчёт {too_big} больше {MAX_SAMPLE_VALUE}")
        samples = np.array(values, dtype=SAMPLE_DTYPE)
        return self._to_image(header, samples)

    def decode_binary(
        self,
        data: bytes,
        header: PnmHeader,
        sample_width: Optional[int] = None,
        settings: CodecSettings = DEFAULT_SETTINGS,
    ) -> PnmImage:
        """Читает двоичные отсчёты из содержимого всего файла.

        Args:
            data: Полное содержимое файла (заголовок + данные).
            header: Разобранный заголовок.
            sample_width: None — стандартное правило (1 байт при maxval < 256, иначе 2);
                2 или 4 — нестандартное расширение с фиксированной шириной.
            settings: `binary_offset` выбирает, как найти начало данных.

        Raises:
            TruncatedDataError: данных не хватает или они перекрывают заголовок.
            ValueError: недопустимая ширина отсчёта.
        """
        width = header.standard_sample_width if sample_width is None else sample_width
        if width not in SAMPLE_DTYPES:
            raise ValueError(f"Ширина отсчёта должна быть 1, 2 или 4 байта, получено {sample_width}")

        count = header.sample_count
        need = count * width
        if settings.binary_offset == "length":
            offset = len(data) - need
        else:
            offset = header.data_offset
        logger.debug(
            "binary %s: %d samples x %d bytes, offset=%d (%s), header ends at %d",
            header.magic, count, width, offset, settings.binary_offset, header.data_offset,
        )

        if offset < header.data_offset:
            raise TruncatedDataError(
                f"Файл короче ожидаемого: нужно {need} байт данных после заголовка, "
                f"доступно {max(0, len(data) - header.data_offset)}"
            )
        payload = data[offset:offset + need]
        if len(payload) < need:
            raise TruncatedDataError(f"Ожидалось {need} байт данных, прочитано {len(payload)}")

        samples = np.frombuffer(payload, dtype=SAMPLE_DTYPES[width]).astype(SAMPLE_DTYPE)
        return self._to_image(header, samples)

    # ---------- Вспомогательные функции ----------
    def _to_image(self, header: PnmHeader, samples: np.ndarray) -> PnmImage:
        lo = int(samples.min())
        hi = int(samples.max())
        if hi != header.declared_max:
            warnings.warn(
                f"Максимум данных ({hi}) не совпадает с максимумом в заголовке ({header.declared_max})",
                IntegrityWarning,
                stacklevel=3,
            )
        return PnmImage(
            width=header.width,
            height=header.height,
            samples_per_pixel=header.samples_per_pixel,
            samples=samples,
            min=lo,
            max=hi,
        )
