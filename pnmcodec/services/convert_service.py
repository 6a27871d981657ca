from __future__ import annotations

import numpy as np
from PIL import Image

from pnmcodec.models.errors import InvalidImageError
from pnmcodec.models.image_model import GRAY, RGB, PnmImage


class ConvertService:
    def to_array(self, image: PnmImage) -> np.ndarray:
        """
        Возвращает отсчёты как массив (H, W) для серого или (H, W, 3) для RGB.
        """
        if image.is_color:
            return image.samples.reshape(image.height, image.width, RGB)
        return image.samples.reshape(image.height, image.width)

    def from_array(self, array: np.ndarray) -> PnmImage:
        """
        Обратное преобразование: (H, W) -> серое, (H, W, 3) -> RGB.
        """
        arr = np.asarray(array)
        if arr.ndim == 2:
            height, width = arr.shape
            spp = GRAY
        elif arr.ndim == 3 and arr.shape[2] == RGB:
            height, width = arr.shape[:2]
            spp = RGB
        else:
            raise InvalidImageError(f"Ожидался массив (H, W) или (H, W, 3), получено {arr.shape}")
        return PnmImage.from_samples(width, height, spp, arr.reshape(-1))

    # ---------- Pillow ----------
    def to_pil(self, image: PnmImage) -> Image.Image:
        """
        Изображение PIL для показа во внешнем просмотрщике.
        Серое <= 255 -> "L", серое > 255 -> "I;16", RGB > 255 масштабируется в 8 бит.
        """
        arr = np.clip(self.to_array(image), 0, None)
        hi = int(arr.max())
        if not image.is_color:
            if hi <= 255:
                return Image.fromarray(arr.astype(np.uint8))
            return Image.fromarray(np.clip(arr, 0, 0xFFFF).astype(np.uint16))
        if hi > 255:
            # Приведём к [0..255] с округлением
            arr = (arr * 255 + hi // 2) // hi
        return Image.fromarray(arr.astype(np.uint8))

    def from_pil(self, pil_image: Image.Image) -> PnmImage:
        """
        PnmImage из изображения PIL: "L" и 16-битные режимы как серое, всё остальное через RGB.
        """
        if pil_image.mode in ("L", "I;16", "I;16B", "I;16L", "I"):
            arr = np.asarray(pil_image).astype(np.int64)
        else:
            arr = np.asarray(pil_image.convert("RGB")).astype(np.int64)
        return self.from_array(arr)
