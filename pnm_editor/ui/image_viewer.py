"""Виджет просмотра: текущее изображение сессии и превью с отложенными преобразованиями.

Принципы:
- SRP: отвечает только за отображение, масштаб и панорамирование; пиксели Netpbm не читает.
- Чистый код: публичный API (`set_images`, `set_zoom_*`, `set_compare_mode`) отделён от обработчиков событий.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

ZOOM_MIN = 0.1
ZOOM_MAX = 4.0
SIDE_BY_SIDE_GAP = 16
COMPARE_MODES = {"Нет": "off", "Шторка": "wipe", "2-up": "side_by_side"}


class ImageViewer(ctk.CTkFrame):
    """Канва «до/после»: до - изображение сессии, после - то, что запишет saveas.

    После поворота размеры «после» отличаются от «до», поэтому каждое
    изображение масштабируется от своего размера.
    """
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._before: Optional[Image.Image] = None
        self._after: Optional[Image.Image] = None
        self._tk_images: List[ImageTk.PhotoImage] = []

        self._scale_factor: float = 1.0
        self._top_left: Optional[Tuple[int, int]] = None
        self._pan_anchor: Optional[Tuple[int, int, int, int]] = None

        # off | wipe | side_by_side
        self._compare_mode: str = "off"
        self._wipe_ratio: float = 0.5

        # (x, y, is_after) или (None, None, False) вне изображения
        self.on_cursor_move: Optional[Callable[[Optional[int], Optional[int], bool], None]] = None
        self.on_zoom_change: Optional[Callable[[int], None]] = None

        self._canvas.bind("<Configure>", lambda _e: self._render())
        self._canvas.bind("<Motion>", self._on_mouse_move)
        self._canvas.bind("<Leave>", lambda _e: self._emit_cursor(None, None, False))
        self._canvas.bind("<MouseWheel>", self._on_mouse_wheel)
        self._canvas.bind("<Button-4>", lambda e: self._zoom_at_point(e.x, e.y, 1.1))
        self._canvas.bind("<Button-5>", lambda e: self._zoom_at_point(e.x, e.y, 1.0 / 1.1))
        self._canvas.bind("<ButtonPress-1>", self._on_pan_start)
        self._canvas.bind("<B1-Motion>", self._on_pan_move)
        self._canvas.bind("<ButtonRelease-1>", lambda _e: setattr(self, "_pan_anchor", None))

    # ---- Public API ----
    def set_images(self, before: Optional[Image.Image], after: Optional[Image.Image], fit: bool = False) -> None:
        """Устанавливает пару изображений; `fit=True` сбрасывает масштаб под размер окна."""
        self._before = before
        self._after = after
        if fit:
            self._scale_factor = self._fit_scale()
            self._top_left = None
        self._render()

    def clear(self) -> None:
        self.set_images(None, None, fit=True)

    def set_zoom_to_fit(self) -> None:
        self._scale_factor = self._fit_scale()
        self._top_left = None
        self._render()

    def set_zoom_percent(self, zoom_percent: int) -> None:
        """Устанавливает масштаб в процентах (10–400%)."""
        self._scale_factor = max(ZOOM_MIN, min(ZOOM_MAX, zoom_percent / 100.0))
        self._render()

    def get_zoom_percent(self) -> int:
        return int(round(self._scale_factor * 100))

    def set_compare_mode(self, mode: str) -> None:
        """'Нет' | 'Шторка' | '2-up'."""
        self._compare_mode = COMPARE_MODES.get(mode, "off")
        self._top_left = None
        self._render()

    def set_wipe_percent(self, percent: int) -> None:
        self._wipe_ratio = max(0.0, min(1.0, percent / 100.0))
        if self._compare_mode == "wipe":
            self._render()

    # ---- Internals ----
    def _scaled(self, image: Image.Image) -> Image.Image:
        w, h = image.size
        size = (max(1, int(w * self._scale_factor)), max(1, int(h * self._scale_factor)))
        # Netpbm часто крошечные: без сглаживания пиксели остаются различимыми
        return image.resize(size, Image.Resampling.NEAREST)

    def _content_size(self) -> Tuple[int, int]:
        before = self._scaled_size(self._before)
        if self._compare_mode == "side_by_side" and self._after is not None:
            after = self._scaled_size(self._after)
            return before[0] + SIDE_BY_SIDE_GAP + after[0], max(before[1], after[1])
        return before

    def _scaled_size(self, image: Optional[Image.Image]) -> Tuple[int, int]:
        if image is None:
            return 0, 0
        w, h = image.size
        return max(1, int(w * self._scale_factor)), max(1, int(h * self._scale_factor))

    def _render(self) -> None:
        self._canvas.delete("all")
        self._tk_images.clear()
        if self._before is None:
            return

        canvas_w = int(self._canvas.winfo_width())
        canvas_h = int(self._canvas.winfo_height())
        content_w, content_h = self._content_size()
        ox, oy = self._clamp_top_left(canvas_w, canvas_h, content_w, content_h)

        before = self._scaled(self._before)
        after = self._scaled(self._after) if self._after is not None else None

        if self._compare_mode == "side_by_side" and after is not None:
            self._draw(before, ox, oy)
            self._draw(after, ox + before.width + SIDE_BY_SIDE_GAP, oy)
        elif self._compare_mode == "wipe" and after is not None and after.size == before.size:
            split = int(round(before.width * self._wipe_ratio))
            self._draw(before.crop((0, 0, split, before.height)), ox, oy)
            self._draw(after.crop((split, 0, after.width, after.height)), ox + split, oy)
        else:
            # wipe для повёрнутого превью не имеет смысла: показываем «после»
            self._draw(after if after is not None else before, ox, oy)

    def _draw(self, image: Image.Image, x: int, y: int) -> None:
        if image.width == 0 or image.height == 0:
            return
        tk_image = ImageTk.PhotoImage(image)
        self._tk_images.append(tk_image)
        self._canvas.create_image(x, y, image=tk_image, anchor="nw")

    def _clamp_top_left(self, canvas_w: int, canvas_h: int, content_w: int, content_h: int) -> Tuple[int, int]:
        def axis(canvas: int, content: int, current: Optional[int]) -> int:
            if content <= canvas:
                return (canvas - content) // 2
            if current is None:
                return 0
            return max(canvas - content, min(0, current))

        cur_x, cur_y = self._top_left if self._top_left is not None else (None, None)
        self._top_left = (axis(canvas_w, content_w, cur_x), axis(canvas_h, content_h, cur_y))
        return self._top_left

    def _fit_scale(self) -> float:
        if self._before is None:
            return 1.0
        canvas_w = max(1, int(self._canvas.winfo_width()))
        canvas_h = max(1, int(self._canvas.winfo_height()))
        img_w, img_h = self._before.size
        return max(ZOOM_MIN, min(ZOOM_MAX, min(canvas_w / img_w, canvas_h / img_h)))

    def _canvas_to_image(self, cx: int, cy: int) -> Tuple[Optional[int], Optional[int], bool]:
        if self._before is None or self._top_left is None:
            return None, None, False
        ox, oy = self._top_left
        dx, dy = cx - ox, cy - oy

        if self._compare_mode == "side_by_side" and self._after is not None:
            before_w, _ = self._scaled_size(self._before)
            regions = [(self._before, 0, False), (self._after, before_w + SIDE_BY_SIDE_GAP, True)]
        elif self._after is not None:
            is_after = True
            if self._compare_mode == "wipe" and self._after.size == self._before.size:
                is_after = dx >= int(round(self._scaled_size(self._before)[0] * self._wipe_ratio))
            regions = [(self._after if is_after else self._before, 0, is_after)]
        else:
            regions = [(self._before, 0, False)]

        for image, offset, is_after in regions:
            w, h = self._scaled_size(image)
            rx = dx - offset
            if 0 <= rx < w and 0 <= dy < h:
                x = min(image.width - 1, int(rx / self._scale_factor))
                y = min(image.height - 1, int(dy / self._scale_factor))
                return x, y, is_after
        return None, None, False

    def _emit_cursor(self, x: Optional[int], y: Optional[int], is_after: bool) -> None:
        if self.on_cursor_move:
            self.on_cursor_move(x, y, is_after)

    def _on_mouse_move(self, event: tk.Event) -> None:
        self._emit_cursor(*self._canvas_to_image(event.x, event.y))

    def _get_canvas_bg(self) -> str:
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"

    # ---- Mouse wheel zoom ----
    def _on_mouse_wheel(self, event: tk.Event) -> None:
        if event.delta:
            self._zoom_at_point(event.x, event.y, 1.1 if event.delta > 0 else 1.0 / 1.1)

    def _zoom_at_point(self, cx: int, cy: int, factor: float) -> None:
        # точка изображения под курсором остаётся под курсором
        if self._before is None or self._top_left is None:
            return
        old_scale = self._scale_factor
        new_scale = max(ZOOM_MIN, min(ZOOM_MAX, old_scale * factor))
        if abs(new_scale - old_scale) < 1e-6:
            return
        ox, oy = self._top_left
        ix, iy = (cx - ox) / old_scale, (cy - oy) / old_scale
        self._scale_factor = new_scale
        self._top_left = (int(round(cx - ix * new_scale)), int(round(cy - iy * new_scale)))
        self._render()
        if self.on_zoom_change:
            self.on_zoom_change(self.get_zoom_percent())

    # ---- Panning ----
    def _on_pan_start(self, event: tk.Event) -> None:
        if self._top_left is None:
            return
        self._canvas.focus_set()
        self._pan_anchor = (event.x, event.y, *self._top_left)

    def _on_pan_move(self, event: tk.Event) -> None:
        if self._pan_anchor is None:
            return
        sx, sy, ox, oy = self._pan_anchor
        self._top_left = (ox + event.x - sx, oy + event.y - sy)
        self._render()
