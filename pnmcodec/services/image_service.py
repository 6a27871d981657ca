"""Загрузка и сохранение изображений PNM на диске.

Принципы:
- SRP: класс отвечает за файловый ввод-вывод и выбор декодера по магическому числу.
- OCP: новые источники (поток, сеть) добавляются методами поверх `load_bytes`.
- Каждый файл открывается через `with` и закрывается на любом пути выхода, включая ошибки.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

from pnmcodec.config import DEFAULT_SETTINGS, CodecSettings
from pnmcodec.models.errors import OpenFailedError, ReadFailedError, WriteFailedError
from pnmcodec.models.image_model import PnmImage
from pnmcodec.services.decode_service import DecodeService
from pnmcodec.services.encode_service import EncodeService
from pnmcodec.services.header_service import HeaderService

logger = logging.getLogger(__name__)


class ImageService:
    def __init__(
        self,
        settings: CodecSettings = DEFAULT_SETTINGS,
        header_service: Optional[HeaderService] = None,
        decode_service: Optional[DecodeService] = None,
        encode_service: Optional[EncodeService] = None,
    ) -> None:
        self.settings = settings
        self._headers = header_service or HeaderService()
        self._decoder = decode_service or DecodeService()
        self._encoder = encode_service or EncodeService()

    # ---- Load ----
    def load_image(self, file_path: str | Path) -> PnmImage:
        """Загружает P2/P3/P5/P6 с диска.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `PnmImage` с размерами, числом каналов, отсчётами и min/max.

        Raises:
            OpenFailedError: файл не найден или не открывается.
            ReadFailedError: ошибка чтения.
            FormatError: файл не является корректным PNM (см. подклассы).
        """
        path = Path(file_path)
        logger.debug("loading %s", path)
        return self.load_bytes(self._read(path))

    def load_bytes(self, data: bytes) -> PnmImage:
        """Декодирует содержимое файла из памяти, выбирая декодер по магическому числу."""
        stream = io.BytesIO(data)
        header = self._headers.scan(stream)
        if header.is_binary:
            return self._decoder.decode_binary(data, header, settings=self.settings)
        return self._decoder.decode_ascii(stream, header)

    def load_extended(self, file_path: str | Path, sample_width: int) -> PnmImage:
        """Нестандартное расширение: все отсчёты по 2 или 4 байта независимо от maxval.

        Вызывающий код должен заранее знать, что файл записан в этом формате:
        по заголовку расширение не отличить от обычного P5/P6.
        """
        if sample_width not in (2, 4):
            raise ValueError(f"Расширение поддерживает 2 или 4 байта на отсчёт, получено {sample_width}")
        data = self._read(Path(file_path))
        header = self._headers.scan(io.BytesIO(data))
        if not header.is_binary:
            logger.debug("extended read of ASCII file %s, using the ASCII decoder", file_path)
            return self._decoder.decode_ascii(io.BytesIO(data[header.data_offset:]), header)
        return self._decoder.decode_binary(data, header, sample_width=sample_width, settings=self.settings)

    # ---- Save ----
    def save_ascii(self, image: PnmImage, file_path: str | Path) -> None:
        """Сохраняет P2 (серое) или P3 (цветное)."""
        self._write(Path(file_path), self._encoder.encode_ascii(image, self.settings))

    def save_binary(self, image: PnmImage, file_path: str | Path, sample_width: Optional[int] = None) -> None:
        """Сохраняет P5/P6; `sample_width` 2 или 4 включает нестандартное расширение."""
        self._write(Path(file_path), self._encoder.encode_binary(image, sample_width, self.settings))

    # ---------- Вспомогательные функции ----------
    def _read(self, path: Path) -> bytes:
        try:
            fh = path.open("rb")
        except OSError as exc:
            raise OpenFailedError(f"Не удалось открыть файл: {path}") from exc
        with fh:
            try:
                return fh.read()
            except OSError as exc:
                raise ReadFailedError(f"Ошибка чтения файла: {path}") from exc

    def _write(self, path: Path, payload: bytes) -> None:
        try:
            fh = path.open("wb")
        except OSError as exc:
            raise OpenFailedError(f"Не удалось создать файл: {path}") from exc
        with fh:
            try:
                fh.write(payload)
            except OSError as exc:
                raise WriteFailedError(f"Ошибка записи файла: {path}") from exc
        logger.debug("wrote %d bytes to %s", len(payload), path)
