"""Контроллер команд: разбор строки, проверка числа аргументов, вызов сервиса сессий.

SOLID:
- SRP: только форма аргументов и текст ответа; доменные проверки делает `SessionService`.
- OCP: новая команда - новый обработчик в таблице `_handlers`.
Clean Code:
- Обработчики возвращают строки для показа; ошибки - исключения `EditorError`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List

from pnm_editor.models.errors import EditorError
from pnm_editor.models.transformation import Transformation
from pnm_editor.services.session_service import SessionService

HELP_LINES = [
    "Доступные команды:",
    "  load <файл> [файл2 ...]    - начать сессию с изображениями",
    "  add <файл>                 - добавить изображение в текущую сессию",
    "  save                       - сохранить все изображения",
    "  saveas <файл>              - сохранить первое изображение под новым именем",
    "  grayscale                  - оттенки серого",
    "  monochrome                 - монохром",
    "  negative                   - негатив",
    "  rotate <left|right>        - поворот на 90°",
    "  undo                       - отменить последнее преобразование",
    "  sessioninfo                - информация о сессии",
    "  switch <id_сессии>         - переключиться на другую сессию",
    "  collage <направление> <изобр1> <изобр2> <результат> - коллаж",
    "  close                      - закрыть текущую сессию",
    "  help                       - эта справка",
    "  exit                       - выход",
]


@dataclass
class CommandController:
    """Выполняет текстовые команды редактора.

    Ответственности:
    - Разбор строки на имя команды и аргументы.
    - Проверка формы аргументов (количество, числа).
    - Форматирование результата для REPL и окна.
    """
    sessions: SessionService
    running: bool = True
    _handlers: Dict[str, Callable[[List[str]], List[str]]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._handlers = {
            "load": self._load,
            "add": self._add,
            "save": self._save,
            "saveas": self._save_as,
            "grayscale": self._queue_simple(Transformation.GRAYSCALE),
            "monochrome": self._queue_simple(Transformation.MONOCHROME),
            "negative": self._queue_simple(Transformation.NEGATIVE),
            "rotate": self._rotate,
            "undo": self._undo,
            "sessioninfo": self._session_info,
            "switch": self._switch,
            "collage": self._collage,
            "close": self._close,
            "help": self._help,
            "exit": self._exit,
        }

    @property
    def command_names(self) -> List[str]:
        return list(self._handlers)

    def execute(self, line: str) -> List[str]:
        """Выполняет одну строку ввода и возвращает строки ответа.

        Raises:
            EditorError: при неизвестной команде, неверных аргументах или ошибке операции.
        """
        parts = line.split()
        if not parts:
            return []
        return self.dispatch(parts[0], parts[1:])

    def dispatch(self, name: str, args: List[str]) -> List[str]:
        """Выполняет команду с уже разобранными аргументами (имена файлов могут содержать пробелы)."""
        handler = self._handlers.get(name.lower())
        if handler is None:
            raise EditorError(f"Неизвестная команда: {name}. Введите 'help' для списка команд.")
        return handler(list(args))

    # ---- Handlers ----
    def _load(self, args: List[str]) -> List[str]:
        if not args:
            raise EditorError("Команде load нужен хотя бы один файл. Использование: load <файл1> [файл2 ...]")
        report = self.sessions.load(args)
        out = [f'Изображение "{name}" добавлено' for name in report.loaded]
        out.append(f"Сессия с ID: {report.session_id} начата")
        if report.errors:
            out.append(f"Предупреждение: не удалось загрузить файлов: {len(report.errors)}: " + ", ".join(report.errors))
        return out

    def _add(self, args: List[str]) -> List[str]:
        _require_count("add", args, 1, "add <файл>")
        self.sessions.add_image(args[0])
        return [f'Изображение "{args[0]}" добавлено в текущую сессию']

    def _save(self, args: List[str]) -> List[str]:
        _require_count("save", args, 0, "save")
        written = self.sessions.save()
        return [f"Сохранено: {path}" for path in written] + ["Все изображения сохранены успешно!"]

    def _save_as(self, args: List[str]) -> List[str]:
        _require_count("saveas", args, 1, "saveas <файл>")
        path = self.sessions.save_as(args[0])
        return [f"Успешно сохранено как {path}"]

    def _queue_simple(self, transformation: Transformation) -> Callable[[List[str]], List[str]]:
        def handler(args: List[str]) -> List[str]:
            _require_count(transformation.value, args, 0, transformation.value)
            self.sessions.queue(transformation)
            return [f"Преобразование {transformation.value} поставлено в очередь для всех изображений"]
        return handler

    def _rotate(self, args: List[str]) -> List[str]:
        if len(args) != 1 or args[0] not in ("left", "right"):
            raise EditorError("Неверные аргументы. Используйте 'rotate left' или 'rotate right'.")
        self.sessions.queue(Transformation.rotation(args[0]))
        return [f"Поворот {args[0]} поставлен в очередь"]

    def _undo(self, args: List[str]) -> List[str]:
        _require_count("undo", args, 0, "undo")
        removed = self.sessions.undo()
        remaining = len(self.sessions.active_session.transformations)
        return [f"Отменено последнее преобразование: {removed.value}", f"Осталось преобразований: {remaining}"]

    def _session_info(self, args: List[str]) -> List[str]:
        _require_count("sessioninfo", args, 0, "sessioninfo")
        info = self.sessions.session_info()
        out = ["=== Информация о сессии ===", f"ID сессии: {info.session_id}", f"Изображения в сессии ({len(info.images)}):"]
        for index, (name, fmt, width, height) in enumerate(info.images, start=1):
            out.append(f"  {index}. {name} ({fmt}, {width}x{height})")
        if info.transformations:
            out.append(f"Отложенные преобразования ({len(info.transformations)}): " + ", ".join(info.transformations))
        else:
            out.append("Отложенные преобразования: нет")
        out.append("===========================")
        return out

    def _switch(self, args: List[str]) -> List[str]:
        _require_count("switch", args, 1, "switch <id_сессии>")
        try:
            session_id = int(args[0])
        except ValueError:
            raise EditorError("ID сессии должен быть числом") from None
        session = self.sessions.switch(session_id)
        out = [f"Переключено на сессию ID: {session.id}", f"Изображений в сессии: {len(session.images)}"]
        if session.transformations:
            out.append("Отложенные преобразования: " + ", ".join(t.value for t in session.transformations))
        return out

    def _collage(self, args: List[str]) -> List[str]:
        _require_count("collage", args, 4, "collage <horizontal|vertical> <изобр1> <изобр2> <результат>")
        direction, name1, name2, output_name = args
        self.sessions.collage(direction, name1, name2, output_name)
        return [f"Создан коллаж '{output_name}' ({direction.lower()})"]

    def _close(self, args: List[str]) -> List[str]:
        _require_count("close", args, 0, "close")
        report = self.sessions.close()
        out = [f"Сессия {report.closed_id} закрыта"]
        if report.remaining:
            out.append(f"Осталось сессий: {len(report.remaining)}")
            out.append("Доступные сессии (ID): " + " ".join(str(i) for i in report.remaining))
            out.append(f"Активная сессия: {report.active_id}")
        else:
            out.append("Активных сессий не осталось")
        return out

    def _help(self, args: List[str]) -> List[str]:
        return list(HELP_LINES)

    def _exit(self, args: List[str]) -> List[str]:
        self.running = False
        return ["До свидания!"]


def _require_count(command: str, args: List[str], count: int, usage: str) -> None:
    if len(args) != count:
        if count == 0:
            raise EditorError(f"Команда {command} не принимает аргументов")
        raise EditorError(f"Команде {command} нужно аргументов: {count}. Использование: {usage}")
