"""Боковая панель: файлы, сессии, очередь преобразований, сохранение, курсор.

Принципы:
- SRP: управляет только виджетами; каждое действие превращается в команду редактора.
- ISP: наружу отдаёт одно событие `on_command` и компактные методы `set_*`.
"""
from __future__ import annotations

from typing import Callable, List, Optional

import customtkinter as ctk

from pnm_editor.services.session_service import SessionInfo

TRANSFORM_BUTTONS = (
    ("Оттенки серого", "grayscale"),
    ("Монохром", "monochrome"),
    ("Негатив", "negative"),
    ("Повернуть влево", "rotate left"),
    ("Повернуть вправо", "rotate right"),
    ("Отменить", "undo"),
)


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файлы, сессия, преобразования, сохранение, курсор."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)
        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_command: Optional[Callable[[str], None]] = None
        self.on_open_files: Optional[Callable[[], None]] = None
        self.on_add_file: Optional[Callable[[], None]] = None
        self.on_save_as: Optional[Callable[[], None]] = None

        row = 0
        row = self._section(row, "Файлы")
        ctk.CTkButton(self, text="Открыть изображения…", command=lambda: self._emit(self.on_open_files)).grid(
            row=row, column=0, padx=8, pady=(0, 4), sticky="ew"
        )
        ctk.CTkButton(self, text="Добавить в сессию…", command=lambda: self._emit(self.on_add_file)).grid(
            row=row + 1, column=0, padx=8, pady=(0, 8), sticky="ew"
        )
        row += 2

        row = self._section(row, "Сессия")
        self._session_menu = ctk.CTkOptionMenu(self, values=["—"], command=self._on_session_selected)
        self._session_menu.grid(row=row, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._info_val = ctk.StringVar(value="Нет активной сессии")
        ctk.CTkLabel(self, textvariable=self._info_val, wraplength=250, anchor="w", justify="left").grid(
            row=row + 1, column=0, padx=8, pady=(0, 8), sticky="ew"
        )
        row += 2

        row = self._section(row, "Преобразования")
        for label, command in TRANSFORM_BUTTONS:
            ctk.CTkButton(self, text=label, command=lambda c=command: self._emit_command(c)).grid(
                row=row, column=0, padx=8, pady=(0, 4), sticky="ew"
            )
            row += 1

        row = self._section(row, "Сохранение")
        ctk.CTkButton(self, text="Сохранить все", command=lambda: self._emit_command("save")).grid(
            row=row, column=0, padx=8, pady=(0, 4), sticky="ew"
        )
        ctk.CTkButton(self, text="Сохранить как…", command=lambda: self._emit(self.on_save_as)).grid(
            row=row + 1, column=0, padx=8, pady=(0, 4), sticky="ew"
        )
        ctk.CTkButton(self, text="Закрыть сессию", command=lambda: self._emit_command("close")).grid(
            row=row + 2, column=0, padx=8, pady=(0, 8), sticky="ew"
        )
        row += 3

        row = self._section(row, "Курсор")
        self._cursor_val = ctk.StringVar(value="—")
        ctk.CTkLabel(self, textvariable=self._cursor_val, anchor="w", justify="left").grid(
            row=row, column=0, padx=8, pady=(0, 8), sticky="ew"
        )

        # filler
        self.grid_rowconfigure(99, weight=1)

    # ---- Public API ----
    def set_sessions(self, session_ids: List[int], active_id: Optional[int]) -> None:
        values = [str(i) for i in session_ids] or ["—"]
        self._session_menu.configure(values=values)
        self._session_menu.set(str(active_id) if active_id is not None else "—")

    def set_session_info(self, info: Optional[SessionInfo]) -> None:
        if info is None:
            self._info_val.set("Нет активной сессии")
            return
        lines = [f"{name} ({fmt}, {w}x{h})" for name, fmt, w, h in info.images]
        queue = ", ".join(info.transformations) if info.transformations else "нет"
        lines.append(f"Очередь: {queue}")
        self._info_val.set("\n".join(lines))

    def set_cursor_text(self, text: str) -> None:
        self._cursor_val.set(text)

    # ---- Internals ----
    def _section(self, row: int, title: str) -> int:
        ctk.CTkLabel(self, text=title, font=ctk.CTkFont(size=16, weight="bold")).grid(
            row=row, column=0, padx=8, pady=(8, 4), sticky="w"
        )
        return row + 1

    def _on_session_selected(self, value: str) -> None:
        if value.isdigit():
            self._emit_command(f"switch {value}")

    def _emit_command(self, command: str) -> None:
        if self.on_command:
            self.on_command(command)

    @staticmethod
    def _emit(callback: Optional[Callable[[], None]]) -> None:
        if callback:
            callback()
