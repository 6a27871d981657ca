from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from pnmcodec.services.image_service import ImageService


@pytest.fixture
def service() -> ImageService:
    return ImageService()


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Пишет байты во временный файл и возвращает путь."""
    def _write(name: str, data: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _write
