"""Коллаж из двух изображений одного формата и одинакового размера.

Принципы:
- SRP: только проверка совместимости и склейка буферов.
- Исходные изображения не меняются; результат - новое изображение с новым именем.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import numpy as np

from pnm_editor.models.errors import IncompatibleImagesError
from pnm_editor.models.image_model import NetpbmImage

logger = logging.getLogger(__name__)

DIRECTIONS = ("horizontal", "vertical")


class CollageService:
    def compose(self, direction: str, image1: NetpbmImage, image2: NetpbmImage, output_name: str | Path) -> NetpbmImage:
        """Склеивает два изображения рядом (`horizontal`) или друг под другом (`vertical`).

        Args:
            direction: `horizontal` или `vertical`.
            image1: Левое (верхнее) изображение.
            image2: Правое (нижнее) изображение.
            output_name: Имя результата; расширение обязано совпадать с форматом.

        Returns:
            Новое изображение; для PGM/PPM max = max(max1, max2) без перенормировки.

        Raises:
            IncompatibleImagesError: при разных форматах, размерах, неверном направлении или расширении.
        """
        if direction not in DIRECTIONS:
            raise IncompatibleImagesError("Направление должно быть 'horizontal' или 'vertical'")
        if image1.format is not image2.format:
            raise IncompatibleImagesError(
                f"Нельзя сделать коллаж из изображений разных типов! "
                f"({image1.format.extension} и {image2.format.extension})"
            )
        if image1.width != image2.width or image1.height != image2.height:
            raise IncompatibleImagesError(
                f"Изображения должны иметь одинаковые размеры "
                f"({image1.width}x{image1.height} и {image2.width}x{image2.height})"
            )
        expected_ext = image1.format.extension
        if not str(output_name).lower().endswith(expected_ext):
            raise IncompatibleImagesError(f"Имя результата должно оканчиваться на {expected_ext}")

        axis = 1 if direction == "horizontal" else 0
        pixels = np.concatenate((image1.pixels, image2.pixels), axis=axis)

        max_color: Optional[int] = None
        if image1.format.has_max_color:
            max_color = max(image1.max_color_value, image2.max_color_value)
            if image1.max_color_value != image2.max_color_value:
                logger.warning(
                    "Коллаж %s: разные max (%d и %d), используется %d без перенормировки",
                    output_name, image1.max_color_value, image2.max_color_value, max_color,
                )

        return NetpbmImage(image1.format, pixels, max_color, Path(output_name))
