from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

ZOOM_PRESETS = ("Fit", "25%", "50%", "100%", "200%", "400%")


class BottomBar(ctk.CTkFrame):
    """Нижняя панель: масштаб и сравнение (строка 0), командная строка и журнал (строки 1-2)."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, **kwargs)

        # callbacks
        self.on_zoom_change: Optional[Callable[[int], None]] = None
        self.on_zoom_fit: Optional[Callable[[], None]] = None
        self.on_compare_mode_change: Optional[Callable[[str], None]] = None
        self.on_wipe_change: Optional[Callable[[int], None]] = None
        self.on_command: Optional[Callable[[str], None]] = None

        self.grid_columnconfigure(1, weight=1)

        # Zoom
        ctk.CTkLabel(self, text="Масштаб").grid(row=0, column=0, padx=(10, 6), pady=6, sticky="w")
        self._zoom_value = ctk.StringVar(value="100%")
        self._zoom_slider = ctk.CTkSlider(self, from_=10, to=400, number_of_steps=390, command=self._on_slider_change)
        self._zoom_slider.set(100)
        self._zoom_slider.grid(row=0, column=1, padx=6, pady=6, sticky="ew")
        ctk.CTkLabel(self, textvariable=self._zoom_value, width=48, anchor="w").grid(row=0, column=2, padx=6, pady=6)

        self._preset_buttons = ctk.CTkSegmentedButton(self, values=list(ZOOM_PRESETS), command=self._on_preset_click)
        self._preset_buttons.grid(row=0, column=3, padx=6, pady=6, sticky="w")

        # Compare
        self._compare_menu = ctk.CTkOptionMenu(self, values=["Нет", "Шторка", "2-up"], command=self._on_compare_mode)
        self._compare_menu.set("Нет")
        self._compare_menu.grid(row=0, column=4, padx=6, pady=6, sticky="w")

        self._wipe_slider = ctk.CTkSlider(self, from_=0, to=100, number_of_steps=100, command=self._on_wipe_slider)
        self._wipe_slider.set(50)
        self._toggle_wipe_slider(visible=False)

        # Command line
        self._command_entry = ctk.CTkEntry(self, placeholder_text="Команда, например: load photo.ppm")
        self._command_entry.grid(row=1, column=0, columnspan=5, padx=(10, 6), pady=(0, 6), sticky="ew")
        self._command_entry.bind("<Return>", self._on_command_submit)
        self._run_btn = ctk.CTkButton(self, text="Выполнить", width=100, command=self._on_command_submit)
        self._run_btn.grid(row=1, column=5, padx=(0, 10), pady=(0, 6), sticky="e")

        self._log = ctk.CTkTextbox(self, height=110, state="disabled")
        self._log.grid(row=2, column=0, columnspan=6, padx=10, pady=(0, 10), sticky="ew")

    # public API (sync from controller)
    def set_zoom_percent(self, percent: int) -> None:
        self._zoom_slider.set(percent)
        self._zoom_value.set(f"{percent}%")
        if f"{percent}%" in ZOOM_PRESETS:
            self._preset_buttons.set(f"{percent}%")

    def append_log(self, *lines: str) -> None:
        self._log.configure(state="normal")
        for line in lines:
            self._log.insert("end", line + "\n")
        self._log.see("end")
        self._log.configure(state="disabled")

    # events
    def _on_slider_change(self, value: float) -> None:
        percent = int(round(value))
        self._zoom_value.set(f"{percent}%")
        if self.on_zoom_change:
            self.on_zoom_change(percent)

    def _on_preset_click(self, value: str) -> None:
        if value == "Fit":
            if self.on_zoom_fit:
                self.on_zoom_fit()
        elif self.on_zoom_change:
            self.on_zoom_change(int(value.rstrip("%")))

    def _on_compare_mode(self, value: str) -> None:
        self._toggle_wipe_slider(visible=(value == "Шторка"))
        if self.on_compare_mode_change:
            self.on_compare_mode_change(value)

    def _on_wipe_slider(self, value: float) -> None:
        if self.on_wipe_change:
            self.on_wipe_change(int(round(value)))

    def _on_command_submit(self, _event: object = None) -> None:
        line = self._command_entry.get().strip()
        if not line:
            return
        self._command_entry.delete(0, "end")
        if self.on_command:
            self.on_command(line)

    # helpers
    def _toggle_wipe_slider(self, visible: bool) -> None:
        if visible:
            self._wipe_slider.grid(row=0, column=5, padx=(6, 10), pady=6, sticky="ew")
        else:
            self._wipe_slider.grid_remove()
