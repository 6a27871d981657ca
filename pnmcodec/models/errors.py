"""Иерархия ошибок кодека PNM.

Принципы:
- Каждая ошибка формата — отдельный тип, чтобы вызывающий код мог ловить ровно то, что ему нужно.
- Ошибки формата наследуют `ValueError`, ошибки ввода-вывода — `OSError`:
  код, который уже ловит стандартные исключения, продолжает работать.
"""
from __future__ import annotations


class PnmError(Exception):
    """Базовая ошибка кодека."""


# ---------- Ошибки формата (обнаруживаются при чтении) ----------
class FormatError(PnmError, ValueError):
    """Файл не соответствует формату PNM."""


class MissingMagicError(FormatError):
    """Файл закончился раньше, чем встретилась строка с магическим числом."""


class UnsupportedMagicError(FormatError):
    """Магическое число не входит в P2, P3, P5, P6."""


class MalformedDimensionsError(FormatError):
    """Строка размеров не содержит двух положительных целых."""


class MalformedMaxValueError(FormatError):
    """Строка максимального значения не является целым числом."""


class TruncatedDataError(FormatError):
    """Данных меньше, чем требуют размеры изображения."""


class MalformedSampleError(FormatError):
    """Отсчёт в ASCII-данных выходит за поддерживаемый диапазон (32 бита)."""


# ---------- Ошибки модели ----------
class InvalidImageError(PnmError, ValueError):
    """Нарушены инварианты `PnmImage` (размеры, число каналов, длина буфера)."""


class SampleRangeError(PnmError, ValueError):
    """Значения не помещаются в стандартную ширину отсчёта."""


# ---------- Ошибки ввода-вывода ----------
class PnmIOError(PnmError, OSError):
    """Обёртка над ошибками файловой системы."""


class OpenFailedError(PnmIOError):
    pass


class ReadFailedError(PnmIOError):
    pass


class WriteFailedError(PnmIOError):
    pass


# ---------- Диагностика ----------
class IntegrityWarning(UserWarning):
    """Нефатальное расхождение данных: max в заголовке, отрицательный min, усечение.

    Чтобы превратить предупреждения в ошибки:
    `warnings.simplefilter("error", IntegrityWarning)`.
    """
