"""Текстовый интерфейс: цикл команд поверх `CommandController`."""
from __future__ import annotations

import argparse
from typing import Callable, List, Optional

from pnm_editor.config import EditorConfig, configure_logging
from pnm_editor.controllers.command_controller import CommandController
from pnm_editor.models.errors import EditorError
from pnm_editor.services.session_service import SessionService

PROMPT = "> "


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Редактор изображений Netpbm (PBM/PGM/PPM)")
    p.add_argument("files", nargs="*", help="Файлы для загрузки в первую сессию")
    p.add_argument("--log-level", default=None, help="Уровень логирования (по умолчанию из PNM_EDITOR_LOG_LEVEL)")
    return p


def run_command(controller: CommandController, line: str, write: Callable[[str], None]) -> None:
    """Выполняет строку и печатает ответ; ошибка операции не останавливает цикл."""
    _report(lambda: controller.execute(line), write)


def _report(action: Callable[[], List[str]], write: Callable[[str], None]) -> None:
    try:
        for out in action():
            write(out)
    except (EditorError, OSError) as exc:
        write(f"Ошибка: {exc}")


def run_repl(
    controller: CommandController,
    read: Optional[Callable[[str], str]] = None,
    write: Optional[Callable[[str], None]] = None,
) -> None:
    read = read or input
    write = write or print
    write("Добро пожаловать в редактор растровых изображений!")
    write("Введите 'help' для списка команд.")
    while controller.running:
        try:
            line = read(PROMPT).strip()
        except EOFError:
            break
        if line:
            run_command(controller, line, write)


def main(argv: Optional[List[str]] = None) -> None:
    args = build_argparser().parse_args(argv)
    config = EditorConfig.from_env()
    configure_logging(args.log_level or config.log_level)

    controller = CommandController(SessionService(config))
    if args.files:
        _report(lambda: controller.dispatch("load", args.files), print)
    run_repl(controller)


if __name__ == "__main__":
    main()
