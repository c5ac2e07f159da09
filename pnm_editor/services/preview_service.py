"""Преобразование изображений Netpbm в PIL для показа в окне.

Принципы:
- SRP: только представление для UI; исходное изображение не меняется.
"""
from __future__ import annotations

from typing import Optional

import numpy as np
from PIL import Image

from pnm_editor.models.image_model import ImageFormat, NetpbmImage


class PreviewService:
    def to_pil_image(self, image: NetpbmImage) -> Image.Image:
        """
        Возвращает 8-битное `PIL.Image`: "L" для PBM/PGM, "RGB" для PPM.
        В PBM единица - чёрный пиксель; отсчёты PGM/PPM масштабируются из [0, max] в [0, 255].
        """
        if image.format is ImageFormat.PBM:
            out = np.where(image.pixels, 0, 255).astype(np.uint8)
            return Image.fromarray(out)

        # uint8 (H, W) -> "L", uint8 (H, W, 3) -> "RGB"
        scaled = (image.pixels.astype(np.int64) * 255) // image.max_color_value
        return Image.fromarray(scaled.astype(np.uint8))

    def describe_sample(self, image: NetpbmImage, x: Optional[int], y: Optional[int]) -> str:
        """Текст для панели курсора: координаты и исходный отсчёт."""
        if x is None or y is None or not (0 <= x < image.width and 0 <= y < image.height):
            return "—"
        value = image.pixels[y, x]
        if image.format is ImageFormat.PBM:
            return f"X: {x}, Y: {y}  бит: {int(value)}"
        if image.format is ImageFormat.PGM:
            return f"X: {x}, Y: {y}  серый: {int(value)}/{image.max_color_value}"
        r, g, b = (int(v) for v in value)
        return f"X: {x}, Y: {y}  RGB: ({r}, {g}, {b})/{image.max_color_value}"
