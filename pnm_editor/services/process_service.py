from __future__ import annotations

import logging
from typing import Iterable, Union

import numpy as np

from pnm_editor.models.errors import UnknownTransformationError
from pnm_editor.models.image_model import ImageFormat, NetpbmImage
from pnm_editor.models.transformation import Transformation

logger = logging.getLogger(__name__)

# Веса яркости для перевода RGB в серый; сумма отбрасывает дробную часть.
GRAY_WEIGHTS = (0.3, 0.59, 0.11)


class ProcessService:
    """Чистые преобразования: каждое возвращает новое изображение либо то же самое (no-op).

    Ни одно преобразование не бросает исключений для корректного изображения:
    неприменимый формат - это no-op с уведомлением в логе.
    """

    def grayscale(self, image: NetpbmImage) -> NetpbmImage:
        """
        Оттенки серого для PPM: gray = trunc(0.3R + 0.59G + 0.11B), пиксель -> (gray, gray, gray).
        """
        if image.format is ImageFormat.PBM:
            logger.info("%s: оттенки серого неприменимы к PBM", image.name)
            return image
        if image.format is ImageFormat.PGM:
            logger.info("%s: PGM уже в оттенках серого", image.name)
            return image

        px = image.pixels
        wr, wg, wb = GRAY_WEIGHTS
        gray = np.trunc(wr * px[..., 0] + wg * px[..., 1] + wb * px[..., 2]).astype(np.int32)
        return image.with_pixels(np.repeat(gray[..., np.newaxis], 3, axis=2))

    def monochrome(self, image: NetpbmImage) -> NetpbmImage:
        """
        Порог max // 2: PGM - по отсчёту, PPM - по среднему (R + G + B) // 3 для всего пикселя.
        Значения выше порога становятся max, остальные 0.
        """
        if image.format is ImageFormat.PBM:
            logger.info("%s: PBM уже монохромное", image.name)
            return image

        max_value = image.max_color_value
        threshold = max_value // 2
        if image.format is ImageFormat.PGM:
            mask = image.pixels > threshold
            return image.with_pixels(np.where(mask, max_value, 0))

        avg = image.pixels.sum(axis=2) // 3
        mask = avg > threshold
        out = np.where(mask, max_value, 0)
        return image.with_pixels(np.repeat(out[..., np.newaxis], 3, axis=2))

    def negative(self, image: NetpbmImage) -> NetpbmImage:
        """Негатив: инверсия бита для PBM, max - v для каждого отсчёта PGM/PPM."""
        if image.format is ImageFormat.PBM:
            return image.with_pixels(np.logical_not(image.pixels))
        return image.with_pixels(image.max_color_value - image.pixels)

    def rotate_left(self, image: NetpbmImage) -> NetpbmImage:
        """
        Поворот на 90° против часовой: new[w-1-j][i] = old[i][j], размеры меняются местами.
        """
        return image.with_pixels(np.rot90(image.pixels, k=1, axes=(0, 1)))

    def rotate_right(self, image: NetpbmImage) -> NetpbmImage:
        """
        Поворот на 90° по часовой: new[j][h-1-i] = old[i][j], размеры меняются местами.
        """
        return image.with_pixels(np.rot90(image.pixels, k=-1, axes=(0, 1)))

    # ---------- Диспетчеризация ----------
    def apply(self, image: NetpbmImage, transformation: Union[Transformation, str]) -> NetpbmImage:
        """Применяет одно преобразование по его токену.

        Raises:
            UnknownTransformationError: если строка не декодируется в известное преобразование.
        """
        if not isinstance(transformation, Transformation):
            transformation = Transformation.from_name(str(transformation))

        handlers = {
            Transformation.GRAYSCALE: self.grayscale,
            Transformation.MONOCHROME: self.monochrome,
            Transformation.NEGATIVE: self.negative,
            Transformation.ROTATE_LEFT: self.rotate_left,
            Transformation.ROTATE_RIGHT: self.rotate_right,
        }
        handler = handlers.get(transformation)
        if handler is None:
            raise UnknownTransformationError(f"Неизвестное преобразование: {transformation}")
        result = handler(image)
        logger.debug("%s: применено %s", image.name, transformation.value)
        return result

    def apply_all(self, image: NetpbmImage, transformations: Iterable[Union[Transformation, str]]) -> NetpbmImage:
        """Применяет преобразования по порядку постановки в очередь."""
        for transformation in transformations:
            image = self.apply(image, transformation)
        return image
