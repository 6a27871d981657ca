"""Разбор текстового заголовка PNM.

Принципы:
- SRP: класс только читает магическое число, размеры и максимальное значение.
- Комментарии (`#...`) пропускаются перед каждой из трёх строк заголовка независимо.
"""
from __future__ import annotations

import logging
from typing import BinaryIO, List, Optional, Tuple

from pnmcodec.models.errors import (
    MalformedDimensionsError,
    MalformedMaxValueError,
    MissingMagicError,
    UnsupportedMagicError,
)
from pnmcodec.models.image_model import MAGIC_NUMBERS, MAX_SAMPLE_VALUE, PnmHeader

logger = logging.getLogger(__name__)


class HeaderService:
    def scan(self, stream: BinaryIO) -> PnmHeader:
        """Читает заголовок из двоичного потока, стоящего в начале файла.

        Args:
            stream: Поток с методами `readline()` и `tell()`.

        Returns:
            `PnmHeader`; поток остаётся сразу после строки максимального значения.

        Raises:
            MissingMagicError: поток закончился до первой строки без комментария.
            UnsupportedMagicError: магическое число не P2/P3/P5/P6.
            MalformedDimensionsError: нет двух положительных целых в строке размеров.
            MalformedMaxValueError: строка максимального значения не беззнаковое 32-битное целое.
        """
        line = self._next_line(stream)
        if line is None:
            raise MissingMagicError("Файл пуст или содержит только комментарии")
        magic = line.strip()
        if magic not in MAGIC_NUMBERS:
            raise UnsupportedMagicError(f"Неподдерживаемое магическое число: {magic!r}")

        line = self._next_line(stream)
        if line is None:
            raise MalformedDimensionsError("Файл закончился до строки размеров")
        width, height = self._parse_dimensions(line)

        line = self._next_line(stream)
        if line is None:
            raise MalformedMaxValueError("Файл закончился до строки максимального значения")
        declared_max = self._parse_max_value(line)

        header = PnmHeader(
            magic=magic,
            width=width,
            height=height,
            declared_max=declared_max,
            data_offset=stream.tell(),
        )
        logger.debug("header %s %dx%d max=%d offset=%d", magic, width, height, declared_max, header.data_offset)
        return header

    # ---------- Вспомогательные функции ----------
    def _next_line(self, stream: BinaryIO) -> Optional[str]:
        """Следующая строка, не являющаяся комментарием или пустой; None при конце потока."""
        while True:
            raw = stream.readline()
            if not raw:
                return None
            line = raw.decode("ascii", errors="replace")
            if line.startswith("#"):
                continue
            if not line.strip():
                continue
            return line

    def _parse_dimensions(self, line: str) -> Tuple[int, int]:
        parts: List[str] = line.split()
        if len(parts) < 2:
            raise MalformedDimensionsError(f"Ожидались ширина и высота: {line.strip()!r}")
        width = self._parse_unsigned(parts[0])
        height = self._parse_unsigned(parts[1])
        if width is None or height is None:
            raise MalformedDimensionsError(f"Размеры не являются целыми: {line.strip()!r}")
        if width == 0 or height == 0:
            raise MalformedDimensionsError(f"Нулевой размер: {width}x{height}")
        return width, height

    def _parse_max_value(self, line: str) -> int:
        text = line.strip()
        value = self._parse_unsigned(text)
        if value is None:
            raise MalformedMaxValueError(f"Максимальное значение не является целым: {text!r}")
        if value > MAX_SAMPLE_VALUE:
            raise MalformedMaxValueError(f"Максимальное значение {value} шире 32 бит")
        return value

    @staticmethod
    def _parse_unsigned(token: str) -> Optional[int]:
        # int() принимает "+5" и "1_000", поэтому проверяем цифры явно
        if not token.isascii() or not token.isdigit():
            return None
        return int(token)
