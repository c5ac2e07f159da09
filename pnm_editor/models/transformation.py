"""Закрытый набор отложенных преобразований.

Имя декодируется один раз при постановке в очередь, поэтому очередь сессии
не может содержать неизвестный токен.
"""
from __future__ import annotations

from enum import Enum

from pnm_editor.models.errors import UnknownTransformationError


class Transformation(str, Enum):
    GRAYSCALE = "grayscale"
    MONOCHROME = "monochrome"
    NEGATIVE = "negative"
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"

    @classmethod
    def from_name(cls, name: str) -> "Transformation":
        """Возвращает преобразование по имени токена (без учёта регистра).

        Raises:
            UnknownTransformationError: если токен не входит в набор.
        """
        try:
            return cls(name.strip().lower())
        except ValueError as exc:
            raise UnknownTransformationError(f"Неизвестное преобразование: {name}") from exc

    @classmethod
    def rotation(cls, direction: str) -> "Transformation":
        """`left` -> ROTATE_LEFT, `right` -> ROTATE_RIGHT."""
        if direction not in ("left", "right"):
            raise UnknownTransformationError("Неверное направление поворота. Используйте 'left' или 'right'.")
        return cls.from_name(f"rotate_{direction}")

    def __str__(self) -> str:
        return self.value
