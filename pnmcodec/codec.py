"""Публичные функции кодека PNM.

Тонкие обёртки над `ImageService` для вызывающего кода, которому не нужны настройки:
передаётся путь или буфер, возвращается `PnmImage` (или наоборот).
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pnmcodec.models.image_model import PnmImage
from pnmcodec.services.image_service import ImageService

_image_service = ImageService()


def decode(path: str | Path) -> PnmImage:
    """Читает P2/P3/P5/P6 с диска."""
    return _image_service.load_image(path)


def decode_bytes(data: bytes) -> PnmImage:
    """Читает P2/P3/P5/P6 из буфера в памяти."""
    return _image_service.load_bytes(data)


def decode_extended(path: str | Path, sample_width: int) -> PnmImage:
    """Читает нестандартный P5/P6 с фиксированными 2- или 4-байтовыми отсчётами."""
    return _image_service.load_extended(path, sample_width)


def encode_ascii(image: PnmImage, path: str | Path) -> None:
    _image_service.save_ascii(image, path)


def encode_binary(image: PnmImage, path: str | Path, sample_width: Optional[int] = None) -> None:
    _image_service.save_binary(image, path, sample_width)


def save(image: PnmImage, path: str | Path) -> None:
    """Сохранение по умолчанию: ASCII."""
    encode_ascii(image, path)
