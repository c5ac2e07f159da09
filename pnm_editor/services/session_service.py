"""Управление сессиями: загрузка, очередь преобразований, сохранение, коллажи.

Принципы:
- SRP: хранит сессии и активную сессию, а форматы, пиксели и пути делегирует сервисам.
- DIP: сервисы передаются в конструктор; по умолчанию создаются из `EditorConfig`.
- Ошибка одной операции не затрагивает остальные сессии и уже записанные файлы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from pnm_editor.config import EditorConfig
from pnm_editor.models.errors import (
    EditorError,
    ImageNotFoundError,
    LoadError,
    NoActiveSessionError,
    SaveError,
    SessionNotFoundError,
    UnsupportedFormatError,
)
from pnm_editor.models.image_model import NetpbmImage
from pnm_editor.models.session import Session
from pnm_editor.models.transformation import Transformation
from pnm_editor.services.codec_service import CodecService
from pnm_editor.services.collage_service import CollageService
from pnm_editor.services.file_service import FileService
from pnm_editor.services.process_service import ProcessService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadReport:
    session_id: int
    loaded: List[str]
    errors: List[str]


@dataclass(frozen=True)
class CloseReport:
    closed_id: int
    active_id: Optional[int]
    remaining: List[int]


@dataclass(frozen=True)
class SessionInfo:
    """Fields:
        session_id: Идентификатор сессии.
        images: (имя, ФОРМАТ, ширина, высота) в порядке добавления.
        transformations: Токены очереди в порядке постановки.
    """
    session_id: int
    images: List[Tuple[str, str, int, int]]
    transformations: List[str]


class SessionService:
    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        codec: Optional[CodecService] = None,
        processor: Optional[ProcessService] = None,
        collage: Optional[CollageService] = None,
        files: Optional[FileService] = None,
    ) -> None:
        config = config or EditorConfig()
        self.output_dir = Path(config.output_dir)
        self._codec = codec or CodecService(config.max_header_lines)
        self._processor = processor or ProcessService()
        self._collage = collage or CollageService()
        self._files = files or FileService(config.image_dir)

        # dict сохраняет порядок вставки, а id растут монотонно
        self._sessions: Dict[int, Session] = {}
        self._next_id = 1
        self._active_id: Optional[int] = None

    # ---- Состояние ----
    @property
    def active_session(self) -> Session:
        if self._active_id is None:
            raise NoActiveSessionError(
                "Нет активной сессии. Используйте 'load <файл...>', чтобы начать новую, или переключитесь на существующую."
            )
        return self._sessions[self._active_id]

    @property
    def active_session_id(self) -> Optional[int]:
        return self._active_id

    @property
    def session_ids(self) -> List[int]:
        return list(self._sessions)

    def get_session(self, session_id: int) -> Session:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(f"Сессия с ID {session_id} не существует") from None

    # ---- Загрузка ----
    def load(self, names: Iterable[str]) -> LoadReport:
        """Загружает файлы в новую активную сессию.

        Каждый файл читается независимо: ошибка одного попадает в `errors` и не
        прерывает остальные. Повтор уже загруженного имени файла тоже ошибка этого файла.
        Сессия создаётся, только если загружен хотя бы один файл.

        Raises:
            LoadError: если не загружен ни один файл (сессия не создаётся).
        """
        images: List[NetpbmImage] = []
        loaded: List[str] = []
        errors: List[str] = []
        for name in names:
            try:
                image = self._read_image(name)
                if any(other.name == image.name for other in images):
                    raise EditorError(f"изображение '{image.name}' уже загружено")
                images.append(image)
                loaded.append(name)
            except UnsupportedFormatError:
                logger.warning("Файл %s пропущен: неподдерживаемый формат", name)
                errors.append(f"{name} (неподдерживаемый формат)")
            except (EditorError, OSError) as exc:
                logger.warning("Файл %s пропущен: %s", name, exc)
                errors.append(f"{name} ({exc})")

        if not images:
            raise LoadError(errors)

        session = Session(self._next_id, images)
        self._sessions[session.id] = session
        self._active_id = session.id
        self._next_id += 1
        logger.info("Сессия %d начата: %d изображений", session.id, len(images))
        return LoadReport(session.id, loaded, errors)

    def add_image(self, name: str) -> NetpbmImage:
        """Добавляет изображение в активную сессию; имена файлов в сессии уникальны."""
        session = self.active_session
        if session.has_image(name):
            raise EditorError(f"Изображение '{name}' уже есть в текущей сессии")
        path = self._files.resolve(name)
        if session.has_image(path.name):
            raise EditorError(f"Изображение '{path.name}' уже есть в текущей сессии")
        image = self._read_image(name, path)
        session.add_image(image)
        logger.info("Изображение %s добавлено в сессию %d", image.name, session.id)
        return image

    def _read_image(self, name: str, path: Optional[Path] = None) -> NetpbmImage:
        path = path or self._files.resolve(name)
        if self._codec.probe(path) is None:
            raise UnsupportedFormatError(f"Неподдерживаемый формат файла: {name}")
        return self._codec.load(path)

    # ---- Очередь преобразований ----
    def queue(self, transformation: Union[Transformation, str]) -> Transformation:
        session = self.active_session
        if not isinstance(transformation, Transformation):
            transformation = Transformation.from_name(transformation)
        session.queue(transformation)
        return transformation

    def undo(self) -> Transformation:
        return self.active_session.undo()

    # ---- Сохранение ----
    def save(self) -> List[Path]:
        """Применяет очередь ко всем изображениям и записывает их в `output_dir`.

        Очередь очищается в любом случае, даже если запись прервалась.
        Файлы, записанные до ошибки, остаются на диске.

        Raises:
            SaveError: с именем изображения, на котором произошла ошибка.
        """
        session = self.active_session
        if not session.images:
            raise EditorError("В текущей сессии нет изображений для сохранения")

        written: List[Path] = []
        try:
            if session.has_transformations:
                logger.info("Применение отложенных преобразований ко всем изображениям сессии %d", session.id)
            for index, image in enumerate(list(session.images)):
                try:
                    session.replace_image(index, self._processor.apply_all(image, session.transformations))
                except EditorError as exc:
                    raise SaveError(image.name, str(exc)) from exc

            for image in session.images:
                try:
                    written.append(self._codec.save(image, self.output_dir / image.name))
                except OSError as exc:
                    raise SaveError(image.name, str(exc)) from exc
        finally:
            session.clear_transformations()
        return written

    def save_as(self, filename: str) -> Path:
        """Сохраняет копию первого изображения с применённой очередью.

        Очередь и изображения сессии не меняются.
        """
        session = self.active_session
        if not session.images:
            raise EditorError("В текущей сессии нет изображений для сохранения")

        original = session.images[0]
        expected_ext = original.format.extension
        if not filename.lower().endswith(expected_ext):
            raise EditorError(f"Имя файла должно оканчиваться на {expected_ext}, чтобы соответствовать формату")

        result = self._processor.apply_all(original, session.transformations).renamed(filename)
        try:
            return self._codec.save(result, self.output_dir / filename)
        except OSError as exc:
            raise SaveError(filename, str(exc)) from exc

    def preview(self) -> Optional[NetpbmImage]:
        """То, что запишет `save_as`: первое изображение с применённой очередью."""
        if self._active_id is None or not self.active_session.images:
            return None
        session = self.active_session
        return self._processor.apply_all(session.images[0], session.transformations)

    # ---- Коллаж ----
    def collage(self, direction: str, name1: str, name2: str, output_name: str) -> NetpbmImage:
        session = self.active_session
        image1 = self._find_in_session(session, name1)
        image2 = self._find_in_session(session, name2)
        if session.has_image(output_name):
            raise EditorError(f"Изображение '{output_name}' уже есть в текущей сессии")
        result = self._collage.compose(direction.lower(), image1, image2, output_name)
        session.add_image(result)
        logger.info("Коллаж %s (%s) добавлен в сессию %d", output_name, direction, session.id)
        return result

    @staticmethod
    def _find_in_session(session: Session, name: str) -> NetpbmImage:
        image = session.find_image(name)
        if image is None:
            raise ImageNotFoundError(f"Изображение не найдено в сессии: {name}")
        return image

    # ---- Переключение и закрытие ----
    def switch(self, session_id: int) -> Session:
        session = self.get_session(session_id)
        self._active_id = session.id
        logger.info("Переключено на сессию %d", session.id)
        return session

    def close(self) -> CloseReport:
        """Закрывает активную сессию; новой активной становится сессия с наименьшим id."""
        if self._active_id is None:
            raise NoActiveSessionError("Нет активной сессии для закрытия")
        closed_id = self._active_id
        del self._sessions[closed_id]
        self._active_id = next(iter(self._sessions), None)
        logger.info("Сессия %d закрыта, активная: %s", closed_id, self._active_id)
        return CloseReport(closed_id, self._active_id, self.session_ids)

    def session_info(self) -> SessionInfo:
        session = self.active_session
        return SessionInfo(
            session_id=session.id,
            images=[(img.name, img.format.tag.upper(), img.width, img.height) for img in session.images],
            transformations=[t.value for t in session.transformations],
        )
