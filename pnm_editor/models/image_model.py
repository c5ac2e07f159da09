"""Модели данных для изображений Netpbm.

Принципы:
- SRP: только структура данных и её инварианты, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`, буфер только для чтения) для предсказуемости.
- Один тип с тегом формата вместо иерархии классов: сервисы ветвятся по `format`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

import numpy as np

from pnm_editor.models.errors import InvalidFormatError, UnsupportedFormatError

MAX_COLOR_LIMIT = 65535


class ImageFormat(Enum):
    """Формат Netpbm: тег, magic number и расширение файла."""

    PBM = ("pbm", "P1")
    PGM = ("pgm", "P2")
    PPM = ("ppm", "P3")

    def __init__(self, tag: str, magic: str) -> None:
        self.tag = tag
        self.magic = magic

    @property
    def extension(self) -> str:
        return f".{self.tag}"

    @property
    def has_max_color(self) -> bool:
        return self is not ImageFormat.PBM

    @property
    def channels(self) -> int:
        return 3 if self is ImageFormat.PPM else 1

    @classmethod
    def from_magic(cls, magic: str) -> "ImageFormat":
        for fmt in cls:
            if fmt.magic == magic:
                return fmt
        raise UnsupportedFormatError(
            f"Неподдерживаемый формат файла. Magic number: {magic}. Поддерживаются: P1 (PBM), P2 (PGM), P3 (PPM)"
        )

    @classmethod
    def from_tag(cls, tag: str) -> "ImageFormat":
        for fmt in cls:
            if fmt.tag == tag.lower():
                return fmt
        raise UnsupportedFormatError(f"Неизвестный формат: {tag}")


@dataclass(frozen=True, eq=False)
class NetpbmImage:
    """Неизменяемая модель изображения Netpbm.

    Fields:
        format: Формат (PBM, PGM, PPM), не меняется после создания.
        pixels: Буфер пикселей: bool (H, W) для PBM, int32 (H, W) для PGM, int32 (H, W, 3) для PPM.
        max_color_value: Максимальное значение отсчёта; `None` для PBM.
        path: Файл, с которым связано изображение (идентичность внутри сессии).
    """
    format: ImageFormat
    pixels: np.ndarray = field(repr=False)
    max_color_value: Optional[int] = None
    path: Path = Path()

    def __post_init__(self) -> None:
        pixels = np.array(self.pixels, dtype=bool if self.format is ImageFormat.PBM else np.int32)
        expected_ndim = 3 if self.format is ImageFormat.PPM else 2
        if pixels.ndim != expected_ndim or (expected_ndim == 3 and pixels.shape[2] != 3):
            raise InvalidFormatError(f"Неверная форма буфера пикселей для {self.format.tag}: {pixels.shape}")
        if pixels.shape[0] <= 0 or pixels.shape[1] <= 0:
            raise InvalidFormatError("Размеры изображения должны быть положительными")

        if self.format.has_max_color:
            if self.max_color_value is None or not 0 < self.max_color_value <= MAX_COLOR_LIMIT:
                raise InvalidFormatError(f"Недопустимое максимальное значение цвета: {self.max_color_value}")
            if pixels.min() < 0 or pixels.max() > self.max_color_value:
                raise InvalidFormatError("Значение пикселя вне диапазона")
        elif self.max_color_value is not None:
            raise InvalidFormatError("PBM изображение не имеет максимального значения цвета")

        pixels.setflags(write=False)
        object.__setattr__(self, "pixels", pixels)
        object.__setattr__(self, "path", Path(self.path))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def name(self) -> str:
        return self.path.name

    def with_pixels(self, pixels: np.ndarray) -> "NetpbmImage":
        """Новое изображение того же формата и идентичности с другим буфером."""
        return NetpbmImage(self.format, pixels, self.max_color_value, self.path)

    def renamed(self, path: Path | str) -> "NetpbmImage":
        return NetpbmImage(self.format, self.pixels, self.max_color_value, Path(path))

    def same_content(self, other: "NetpbmImage") -> bool:
        """Совпадают ли формат, размеры, max и все пиксели (идентичность не сравнивается)."""
        return (
            self.format is other.format
            and self.max_color_value == other.max_color_value
            and np.array_equal(self.pixels, other.pixels)
        )
