"""Контроллер окна: связывает виджеты с командами редактора.

SOLID:
- SRP: класс управляет связями между UI и `CommandController` (без логики изображений).
- DIP: окно и кнопки выполняют те же команды, что и текстовый интерфейс.
Clean Code:
- После каждой команды состояние окна целиком перечитывается из сервиса сессий.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from tkinter import filedialog, TclError
from typing import List, Optional

import customtkinter as ctk

from pnm_editor.controllers.command_controller import CommandController
from pnm_editor.models.errors import EditorError
from pnm_editor.models.image_model import NetpbmImage
from pnm_editor.services.preview_service import PreviewService
from pnm_editor.ui.bottom_bar import BottomBar
from pnm_editor.ui.image_viewer import ImageViewer
from pnm_editor.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)

NETPBM_FILETYPES = (
    ("Netpbm", "*.pbm *.pgm *.ppm"),
    ("All files", "*.*"),
)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Бинд событий виджетов (UI -> контроллер).
    - Выполнение команд через `CommandController` и вывод ответа в журнал.
    - Показ первого изображения сессии и превью отложенной очереди.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk
    commands: CommandController

    _preview_service: PreviewService = field(default_factory=PreviewService)
    _before: Optional[NetpbmImage] = None
    _after: Optional[NetpbmImage] = None

    def bind_events(self) -> None:
        """Регистрирует обработчики; компоненты UI общаются только через контроллер."""
        self.sidebar.on_command = self._handle_command
        self.sidebar.on_open_files = self._handle_open_files
        self.sidebar.on_add_file = self._handle_add_file
        self.sidebar.on_save_as = self._handle_save_as

        self.viewer.on_cursor_move = self._handle_cursor_move
        self.viewer.on_zoom_change = self._handle_viewer_zoom_changed

        self.bottom.on_command = self._handle_command
        self.bottom.on_zoom_change = self.viewer.set_zoom_percent
        self.bottom.on_zoom_fit = self._handle_zoom_fit
        self.bottom.on_compare_mode_change = self.viewer.set_compare_mode
        self.bottom.on_wipe_change = self.viewer.set_wipe_percent

        self.bottom.append_log(*self.commands.dispatch("help", []))

    # ---- Handlers ----
    def _handle_command(self, line: str) -> None:
        parts = line.split()
        if parts:
            self._run(parts[0], parts[1:], echo=line)

    def _handle_open_files(self) -> None:
        try:
            paths = filedialog.askopenfilenames(title="Выберите изображения", filetypes=NETPBM_FILETYPES)
        except TclError:
            return
        if paths:
            self._run("load", list(paths), fit=True)

    def _handle_add_file(self) -> None:
        try:
            path = filedialog.askopenfilename(title="Выберите изображение", filetypes=NETPBM_FILETYPES)
        except TclError:
            return
        if path:
            self._run("add", [path])

    def _handle_save_as(self) -> None:
        name = ctk.CTkInputDialog(text="Имя файла (с расширением формата):", title="Сохранить как").get_input()
        if name:
            self._run("saveas", [name.strip()])

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int], is_after: bool) -> None:
        image = self._after if is_after else self._before
        if image is None:
            self.sidebar.set_cursor_text("—")
            return
        self.sidebar.set_cursor_text(self._preview_service.describe_sample(image, x, y))

    def _handle_viewer_zoom_changed(self, zoom_percent: int) -> None:
        self.bottom.set_zoom_percent(zoom_percent)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())

    # ---- Helpers ----
    def _run(self, name: str, args: List[str], echo: Optional[str] = None, fit: bool = False) -> None:
        active_before = self.commands.sessions.active_session_id
        self.bottom.append_log(f"> {echo or ' '.join([name, *args])}")
        try:
            self.bottom.append_log(*self.commands.dispatch(name, args))
        except (EditorError, OSError) as exc:
            logger.debug("Команда %s завершилась ошибкой", name, exc_info=True)
            self.bottom.append_log(f"Ошибка: {exc}")

        if not self.commands.running:
            self.window.destroy()
            return
        self.refresh(fit=fit or self.commands.sessions.active_session_id != active_before)

    def refresh(self, fit: bool = False) -> None:
        """Перечитывает сессии и перерисовывает окно."""
        sessions = self.commands.sessions
        self.sidebar.set_sessions(sessions.session_ids, sessions.active_session_id)

        if sessions.active_session_id is None or not sessions.active_session.images:
            self._before = self._after = None
            self.sidebar.set_session_info(None if sessions.active_session_id is None else sessions.session_info())
            self.viewer.clear()
            return

        self.sidebar.set_session_info(sessions.session_info())
        self._before = sessions.active_session.images[0]
        self._after = sessions.preview() if sessions.active_session.has_transformations else None
        self.viewer.set_images(
            self._preview_service.to_pil_image(self._before),
            self._preview_service.to_pil_image(self._after) if self._after is not None else None,
            fit=fit,
        )
        if fit:
            self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())
