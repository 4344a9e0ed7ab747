"""Контроллер приложения: оркестрация UI и сессии рисования.

SOLID:
- SRP: класс управляет связями между виджетами и `DrawingSession`.
- DIP: рендерер видит холст только как `Surface`.
Clean Code:
- Обработчики компактны; сценарии вынесены в сессию и сервисы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from tkinter import filedialog, TclError
from typing import Optional

import customtkinter as ctk

from lenart.controllers.session import DrawingSession
from lenart.models.errors import LenartError
from lenart.models.image_model import Raster
from lenart.services.input_service import PointerEvent
from lenart.services.render_service import LiveRenderer
from lenart.ui.drawing_canvas import DrawingCanvas
from lenart.ui.toolbar import Toolbar

logger = logging.getLogger(__name__)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Бинд событий (UI -> контроллер).
    - Передача событий указателя в автомат захвата ввода.
    - Диалоги открытия/сохранения и показ ошибок в строке статуса.
    - Периодический сбор результатов фоновых задач в основном потоке.
    """
    canvas: DrawingCanvas
    toolbar: Toolbar
    window: ctk.CTk
    session: DrawingSession

    _renderer: Optional[LiveRenderer] = field(default=None, init=False)

    def bind_events(self) -> None:
        """Регистрирует обработчики и запускает рендерер и опрос задач."""
        self.canvas.on_pointer = self._handle_pointer
        self.canvas.on_resize = self._handle_resize

        self.toolbar.on_color_select = self._handle_color_select
        self.toolbar.on_thickness_select = self._handle_thickness_select
        self.toolbar.on_eraser_toggle = self._handle_eraser_toggle
        self.toolbar.on_save = self._handle_save
        self.toolbar.on_open = self._handle_open
        self.toolbar.on_clear = self._handle_clear

        # brush sizes follow the display scaling, like dp on a phone
        self.session.set_thickness_scale(ctk.ScalingTracker.get_window_scaling(self.window))

        self._renderer = LiveRenderer(self.session.document, self.canvas, self.session.painter)
        self._renderer.attach()
        self._sync_tools()
        self.window.protocol("WM_DELETE_WINDOW", self._handle_close)
        self.window.after(self.session.config.poll_interval_ms, self._poll_tasks)

    # ---- Handlers ----
    def _handle_pointer(self, event: PointerEvent) -> None:
        self.session.handle_pointer(event)

    def _handle_resize(self, _width: int, _height: int) -> None:
        if self._renderer is not None:
            self._renderer.invalidate()

    def _handle_color_select(self, index: int) -> None:
        self.session.select_color(index)
        self._sync_tools()

    def _handle_thickness_select(self, index: int) -> None:
        self.session.select_thickness(index)
        self._sync_tools()

    def _handle_eraser_toggle(self) -> None:
        self.session.toggle_eraser()
        self._sync_tools()

    def _handle_clear(self) -> None:
        self.session.clear()
        self.toolbar.set_status("")

    def _handle_open(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите изображение",
                filetypes=(
                    ("Images", "*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return

        self.toolbar.set_status(f"Загрузка {Path(file_path).name}…")
        self.session.open_background(file_path, self._on_background_loaded)

    def _handle_save(self) -> None:
        try:
            file_path = filedialog.asksaveasfilename(
                title="Сохранить рисунок",
                defaultextension=".png",
                initialfile=self.session.default_file_name(),
                filetypes=(("PNG", "*.png"),),
            )
        except TclError:
            return

        if not file_path:
            return

        try:
            self.session.save(lambda: open(file_path, "wb"), self._on_saved)
        except LenartError as exc:
            self.toolbar.set_status(str(exc))
            return
        self.toolbar.set_status(f"Сохранение {Path(file_path).name}…")

    def _handle_close(self) -> None:
        self.session.shutdown()
        self.window.destroy()

    # ---- Task results ----
    def _on_background_loaded(self, raster: Optional[Raster], error: Optional[LenartError]) -> None:
        if error is not None:
            self.toolbar.set_status(str(error))
        elif raster is not None:
            self.toolbar.set_status(f"Фон {raster.width}×{raster.height}")
        else:
            self.toolbar.set_status("")

    def _on_saved(self, raster: Optional[Raster], error: Optional[LenartError]) -> None:
        if error is not None:
            self.toolbar.set_status(str(error))
        elif raster is not None:
            self.toolbar.set_status(f"Сохранено {raster.width}×{raster.height}")

    # ---- Helpers ----
    def _poll_tasks(self) -> None:
        try:
            self.session.poll()
        finally:
            self.window.after(self.session.config.poll_interval_ms, self._poll_tasks)

    def _sync_tools(self) -> None:
        self.toolbar.set_selection(self.session.color_index, self.session.eraser)
        self.toolbar.set_thickness_index(self.session.thickness_index)
