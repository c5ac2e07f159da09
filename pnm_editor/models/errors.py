"""Иерархия ошибок редактора.

Принципы:
- Единый корень `EditorError`: внешний цикл (REPL, GUI) ловит только его.
- Ошибки данных дополнительно наследуют `ValueError`, как и в сервисе загрузки изображений.
"""
from __future__ import annotations

from typing import List, Optional, Sequence


class EditorError(Exception):
    """Базовая ошибка редактора: сообщение пригодно для показа пользователю."""


class InvalidFormatError(EditorError, ValueError):
    """Файл не соответствует грамматике Netpbm или содержит значения вне диапазона."""


class UnsupportedFormatError(EditorError, ValueError):
    """Magic number не является одним из P1, P2, P3."""


class IncompatibleImagesError(EditorError, ValueError):
    """Изображения нельзя объединить в коллаж."""


class UnknownTransformationError(EditorError, ValueError):
    """Имя преобразования не входит в закрытый набор."""


class NothingToUndoError(EditorError):
    pass


class NoActiveSessionError(EditorError):
    pass


class SessionNotFoundError(EditorError):
    pass


class ImageNotFoundError(EditorError):
    pass


class LoadError(EditorError):
    """Ни один файл из пакетной загрузки не удалось прочитать.

    Fields:
        diagnostics: Сообщения по каждому файлу в порядке загрузки.
    """

    def __init__(self, diagnostics: Sequence[str]) -> None:
        self.diagnostics: List[str] = list(diagnostics)
        super().__init__("Не удалось загрузить ни одного изображения. Ошибки: " + ", ".join(self.diagnostics))


class SaveError(EditorError):
    """Запись прервана на конкретном изображении; ранее записанные файлы остаются на диске."""

    def __init__(self, image_name: str, reason: Optional[str] = None) -> None:
        self.image_name = image_name
        message = f"Не удалось сохранить изображение: {image_name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
