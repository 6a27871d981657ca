"""Настройки кодека.

Неизменяемый dataclass: варианты получаются через `dataclasses.replace`,
глобального изменяемого состояния нет.
"""
from __future__ import annotations

from dataclasses import dataclass

BINARY_OFFSET_POLICIES = ("length", "cursor")


@dataclass(frozen=True)
class CodecSettings:
    """Параметры записи и чтения.

    Fields:
        comment: Текст строки комментария в заголовке (без `#`).
        ascii_samples_per_line: Сколько отсчётов писать в строку ASCII-данных; 0 — всё в одну строку.
        binary_offset: Как искать начало двоичных данных:
            "length" — по длине файла (длина минус объём данных),
            "cursor" — сразу после строки максимального значения.
    """
    comment: str = "created by pnmcodec"
    ascii_samples_per_line: int = 12
    binary_offset: str = "length"

    def __post_init__(self) -> None:
        if self.binary_offset not in BINARY_OFFSET_POLICIES:
            raise ValueError(f"Неизвестная политика смещения: {self.binary_offset!r}")
        if self.ascii_samples_per_line < 0:
            raise ValueError("ascii_samples_per_line не может быть отрицательным")
        if "\n" in self.comment or "\r" in self.comment:
            raise ValueError("Комментарий заголовка должен быть одной строкой")


DEFAULT_SETTINGS = CodecSettings()
