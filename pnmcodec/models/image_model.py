"""Модели данных для изображений PNM.

Принципы:
- SRP: только структура данных и проверка инвариантов, без чтения/записи файлов.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

import numpy as np

from pnmcodec.models.errors import InvalidImageError

SAMPLE_DTYPE = np.int64
# наибольшее поддерживаемое значение отсчёта и maxval (32 бита)
MAX_SAMPLE_VALUE = 0xFFFFFFFF

GRAY = 1
RGB = 3

# magic -> (samples per pixel, binary)
MAGIC_NUMBERS = {
    "P2": (GRAY, False),
    "P3": (RGB, False),
    "P5": (GRAY, True),
    "P6": (RGB, True),
}


def magic_for(samples_per_pixel: int, binary: bool) -> str:
    """Возвращает магическое число для числа каналов и вида кодирования."""
    for magic, (spp, is_binary) in MAGIC_NUMBERS.items():
        if spp == samples_per_pixel and is_binary == binary:
            return magic
    raise InvalidImageError(f"samples_per_pixel должен быть 1 или 3, получено {samples_per_pixel}")


@dataclass(frozen=True)
class PnmHeader:
    """Разобранный текстовый заголовок файла.

    Fields:
        magic: "P2" | "P3" | "P5" | "P6".
        width: Ширина, px.
        height: Высота, px.
        declared_max: Максимальное значение из заголовка.
        data_offset: Позиция байта сразу после строки максимального значения.
    """
    magic: str
    width: int
    height: int
    declared_max: int
    data_offset: int

    @property
    def samples_per_pixel(self) -> int:
        return MAGIC_NUMBERS[self.magic][0]

    @property
    def is_binary(self) -> bool:
        return MAGIC_NUMBERS[self.magic][1]

    @property
    def sample_count(self) -> int:
        return self.width * self.height * self.samples_per_pixel

    @property
    def standard_sample_width(self) -> int:
        """1 байт при maxval < 256, иначе 2."""
        return 1 if self.declared_max < 256 else 2


@dataclass(frozen=True, eq=False)
class PnmImage:
    """Неизменяемая модель изображения и его производные метаданные.

    Fields:
        width: Ширина, px.
        height: Высота, px.
        samples_per_pixel: 1 (оттенки серого) или 3 (RGB).
        samples: Плоский массив отсчётов int64, построчно; для RGB каналы чередуются R,G,B.
        min: Минимум отсчётов или None, если ещё не вычислен.
        max: Максимум отсчётов или None, если ещё не вычислен.
    """
    width: int
    height: int
    samples_per_pixel: int
    samples: np.ndarray = field(repr=False)
    min: Optional[int] = None
    max: Optional[int] = None

    def __post_init__(self) -> None:
        if self.samples_per_pixel not in (GRAY, RGB):
            raise InvalidImageError(
                f"samples_per_pixel должен быть 1 или 3, получено {self.samples_per_pixel}"
            )
        if self.width <= 0 or self.height <= 0:
            raise InvalidImageError(f"Недопустимые размеры: {self.width}x{self.height}")

        samples = np.asarray(self.samples)
        if samples.ndim != 1:
            raise InvalidImageError(f"Буфер отсчётов должен быть одномерным, ndim={samples.ndim}")
        if samples.size and not np.issubdtype(samples.dtype, np.integer):
            raise InvalidImageError(f"Отсчёты должны быть целыми, dtype={samples.dtype}")
        samples = samples.astype(SAMPLE_DTYPE, copy=False)
        # frozen: нормализованный буфер ставим в обход __setattr__
        object.__setattr__(self, "samples", samples)

        if samples.size != self.sample_count:
            raise InvalidImageError(
                f"Длина буфера {samples.size} не равна {self.width}*{self.height}*{self.samples_per_pixel}"
            )
        if self.min is not None and self.max is not None and self.min > self.max:
            raise InvalidImageError(f"min ({self.min}) больше max ({self.max})")

    # ---- Constructors ----
    @classmethod
    def blank(cls, width: int, height: int, samples_per_pixel: int = GRAY) -> "PnmImage":
        """Пустое изображение, заполненное нулями; min/max не вычислены."""
        count = max(0, width) * max(0, height) * samples_per_pixel
        return cls(width, height, samples_per_pixel, np.zeros(count, dtype=SAMPLE_DTYPE))

    @classmethod
    def from_samples(
        cls, width: int, height: int, samples_per_pixel: int, samples: Iterable[int]
    ) -> "PnmImage":
        """Изображение из произвольной последовательности целых с вычисленными min/max."""
        arr = np.asarray(list(samples) if not isinstance(samples, np.ndarray) else samples)
        if arr.size == 0:
            arr = arr.astype(SAMPLE_DTYPE)
        image = cls(width, height, samples_per_pixel, arr)
        return image.with_min_max()

    # ---- Derived ----
    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def sample_count(self) -> int:
        return self.width * self.height * self.samples_per_pixel

    @property
    def is_color(self) -> bool:
        return self.samples_per_pixel == RGB

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def compute_min_max(self) -> Tuple[int, int]:
        """Фактические (min, max) буфера."""
        return int(self.samples.min()), int(self.samples.max())

    def with_min_max(self) -> "PnmImage":
        """Копия модели с пересчитанными min/max (буфер общий)."""
        lo, hi = self.compute_min_max()
        return PnmImage(self.width, self.height, self.samples_per_pixel, self.samples, lo, hi)

    def same_as(self, other: "PnmImage") -> bool:
        """Сравнение по размерам, числу каналов и отсчётам (min/max не учитываются)."""
        return (
            self.width == other.width
            and self.height == other.height
            and self.samples_per_pixel == other.samples_per_pixel
            and bool(np.array_equal(self.samples, other.samples))
        )
