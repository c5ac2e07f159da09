"""Сессия редактирования: набор изображений и очередь отложенных преобразований."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pnm_editor.models.errors import NothingToUndoError
from pnm_editor.models.image_model import NetpbmImage
from pnm_editor.models.transformation import Transformation


@dataclass
class Session:
    """Изображения сессии принадлежат только ей; очередь очищается только явным сохранением.

    Fields:
        id: Идентификатор, выдаётся монотонно и не переиспользуется.
        images: Изображения в порядке добавления.
        transformations: Очередь преобразований в порядке постановки.
    """
    id: int
    images: List[NetpbmImage] = field(default_factory=list)
    transformations: List[Transformation] = field(default_factory=list)

    def find_image(self, name: str) -> Optional[NetpbmImage]:
        for image in self.images:
            if image.name == name:
                return image
        return None

    def has_image(self, name: str) -> bool:
        return self.find_image(name) is not None

    def add_image(self, image: NetpbmImage) -> None:
        self.images.append(image)

    def replace_image(self, index: int, image: NetpbmImage) -> None:
        self.images[index] = image

    def queue(self, transformation: Transformation) -> None:
        self.transformations.append(transformation)

    def undo(self) -> Transformation:
        """Удаляет последнее добавленное преобразование и возвращает его."""
        if not self.transformations:
            raise NothingToUndoError("Нет преобразований для отмены")
        return self.transformations.pop()

    def clear_transformations(self) -> None:
        self.transformations.clear()

    @property
    def has_transformations(self) -> bool:
        return bool(self.transformations)
