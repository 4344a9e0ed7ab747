"""Виджет холста: ввод указателя и показ кадров живого рендерера.

Принципы:
- SRP: отвечает только за представление и сырые события мыши/пера.
- Чистый код: чёткое разделение публичного API (`Surface`) и обработчиков событий.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

from lenart.services.input_service import PointerAction, PointerEvent


class DrawingCanvas(ctk.CTkFrame):
    """Холст на весь доступный размер; реализует протокол `Surface`."""
    def __init__(self, master: ctk.CTk | tk.Misc, base_color: str = "#FFFFFF", **kwargs) -> None:
        super().__init__(master, corner_radius=0, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=base_color, cursor="pencil")
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._tk_frame: Optional[ImageTk.PhotoImage] = None
        self._image_item: Optional[int] = None

        self.on_pointer: Optional[Callable[[PointerEvent], None]] = None
        self.on_resize: Optional[Callable[[int, int], None]] = None

        self._canvas.bind("<Configure>", self._on_canvas_resize)

        # Left button / pen drag draws
        self._canvas.bind("<ButtonPress-1>", self._on_press)
        self._canvas.bind("<B1-Motion>", self._on_move)
        self._canvas.bind("<ButtonRelease-1>", self._on_release)

    # ---- Surface ----
    def get_size(self) -> Tuple[int, int]:
        return int(self._canvas.winfo_width()), int(self._canvas.winfo_height())

    def request_frame(self, callback: Callable[[], None]) -> None:
        self.after_idle(callback)

    def present(self, image: Image.Image) -> None:
        self._tk_frame = ImageTk.PhotoImage(image)
        if self._image_item is None:
            self._image_item = self._canvas.create_image(0, 0, image=self._tk_frame, anchor="nw")
        else:
            self._canvas.itemconfigure(self._image_item, image=self._tk_frame)

    # ---- Internals ----
    def _on_canvas_resize(self, event: tk.Event) -> None:
        if self.on_resize:
            self.on_resize(event.width, event.height)

    def _on_press(self, event: tk.Event) -> None:
        self._canvas.focus_set()
        self._emit(PointerAction.PRESS, event, pressed=True)

    def _on_move(self, event: tk.Event) -> None:
        self._emit(PointerAction.MOVE, event, pressed=True)

    def _on_release(self, event: tk.Event) -> None:
        self._emit(PointerAction.RELEASE, event, pressed=False)

    def _emit(self, action: PointerAction, event: tk.Event, pressed: bool) -> None:
        if self.on_pointer is None:
            return
        self.on_pointer(PointerEvent(action=action, x=float(event.x), y=float(event.y), pressed=pressed))
