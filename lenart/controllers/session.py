"""Сессия рисования: документ, инструменты, очистка, загрузка и сохранение.

SOLID:
- SRP: прикладные сценарии без зависимости от Tk; UI-контроллер только
  переадресует сюда события и показывает результат.
- DIP: приёмник и источник данных передаются как вызываемые объекты/потоки.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from lenart.config import LenartConfig
from lenart.models.document import Document
from lenart.models.errors import DecodeFailure, EncodeFailure, LenartError, UnsizedDocumentError
from lenart.models.image_model import Raster
from lenart.services.export_service import ExportService, SinkOpener
from lenart.services.image_service import ImageService, Source
from lenart.services.input_service import InputCapture, PointerEvent, ToolSettings
from lenart.services.paint_service import PaintService
from lenart.services.task_service import TaskService

logger = logging.getLogger(__name__)

LoadCallback = Callable[[Optional[Raster], Optional[LenartError]], None]
SaveCallback = Callable[[Optional[Raster], Optional[LenartError]], None]


class DrawingSession:
    """Владелец документа; все изменения выполняются в основном потоке."""

    def __init__(self, config: Optional[LenartConfig] = None, tasks: Optional[TaskService] = None) -> None:
        self.config = config or LenartConfig()
        self.document = Document()
        self.painter = PaintService(base_color=self.config.base)
        self.image_service = ImageService()
        self.export_service = ExportService(self.painter)
        self.tasks = tasks or TaskService(max_workers=self.config.worker_threads)

        self._palette = self.config.palette_colors
        self.color_index = 0
        self.thickness_index = self.config.default_thickness_index
        self.thickness_scale = 1.0
        self.tool = ToolSettings(color=self._palette[0], width_px=self._thickness_px())
        self.capture = InputCapture(self.document, self.tool, base_color=self.config.base)

    # ---- Tools ----
    @property
    def eraser(self) -> bool:
        return self.tool.eraser

    def select_color(self, index: int) -> None:
        """Выбор цвета палитры всегда выключает ластик."""
        if not 0 <= index < len(self._palette):
            raise ValueError(f"Нет цвета с индексом {index}")
        self.color_index = index
        self.tool.color = self._palette[index]
        self.tool.eraser = False

    def select_thickness(self, index: int) -> None:
        if not 0 <= index < len(self.config.thickness_options):
            raise ValueError(f"Нет толщины с индексом {index}")
        self.thickness_index = index
        self.tool.width_px = self._thickness_px()

    def set_thickness_scale(self, scale: float) -> None:
        if scale <= 0:
            raise ValueError(f"Масштаб должен быть > 0: {scale}")
        self.thickness_scale = scale
        self.tool.width_px = self._thickness_px()

    def toggle_eraser(self) -> bool:
        self.tool.eraser = not self.tool.eraser
        return self.tool.eraser

    # ---- Canvas ----
    def handle_pointer(self, event: PointerEvent) -> None:
        self.capture.handle(event)

    def clear(self) -> None:
        self.capture.reset()
        self.document.clear()
        logger.info("Canvas cleared")

    def open_background(self, source: Source, on_done: Optional[LoadCallback] = None) -> None:
        """Очищает холст и запускает загрузку фона в рабочем потоке.

        Очистка происходит до загрузки, поэтому неудачная загрузка всё равно
        оставляет пустой документ без фона. Если за время загрузки холст
        очистили снова, результат отбрасывается.
        """
        self.clear()
        generation = self.document.generation

        def finish(raster: Optional[Raster], error: Optional[BaseException]) -> None:
            if generation != self.document.generation:
                logger.info("Dropping stale background load (canvas cleared meanwhile)")
                self._report(on_done, None, None)
                return
            if error is not None:
                logger.error("Background load crashed", exc_info=error)
                self._report(on_done, None, DecodeFailure(f"Не удалось загрузить изображение: {error}"))
                return
            if raster is None:
                self._report(on_done, None, DecodeFailure("Файл не является изображением"))
                return
            self.document.set_background(raster)
            self._report(on_done, raster, None)

        self.tasks.submit(lambda: self.image_service.load_background(source), finish)

    def save(self, open_sink: SinkOpener, on_done: Optional[SaveCallback] = None) -> None:
        """Сохраняет снимок документа в PNG в рабочем потоке.

        Raises:
            UnsizedDocumentError: сразу, если холст ещё не получил размер.
        """
        snapshot = self.document.snapshot()
        if not snapshot.is_sized:
            logger.warning("Export refused: canvas size unknown")
            raise UnsizedDocumentError("Холст ещё не отображён, сохранять нечего")

        def finish(raster: Optional[Raster], error: Optional[BaseException]) -> None:
            if error is None:
                self._report(on_done, raster, None)
                return
            if not isinstance(error, LenartError):
                logger.error("Export crashed", exc_info=error)
                error = EncodeFailure(f"Не удалось сохранить изображение: {error}")
            else:
                logger.warning("Export failed: %s", error)
            self._report(on_done, None, error)

        self.tasks.submit(lambda: self.export_service.export(snapshot, open_sink), finish)

    def default_file_name(self, now: Optional[datetime] = None) -> str:
        return (now or datetime.now()).strftime(self.config.file_name_pattern)

    def poll(self) -> int:
        """Применяет результаты фоновых задач; вызывается из основного потока."""
        return self.tasks.drain()

    def shutdown(self) -> None:
        self.tasks.shutdown(wait=False)

    # ---- Helpers ----
    def _thickness_px(self) -> float:
        return self.config.thickness_options[self.thickness_index] * self.thickness_scale

    @staticmethod
    def _report(callback, raster: Optional[Raster], error: Optional[LenartError]) -> None:
        if callback is not None:
            callback(raster, error)
