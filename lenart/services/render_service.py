"""Живой рендерер: перерисовывает документ на поверхность отображения.

Принципы:
- SRP: планирование кадров и доставка изображения; рисование в `PaintService`.
- DIP: поверхность описана протоколом `Surface`, виджет Tk его реализует.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, Tuple

from PIL import Image

from lenart.models.document import Document
from lenart.models.image_model import Raster
from lenart.services.paint_service import PaintService

logger = logging.getLogger(__name__)


class Surface(Protocol):
    def get_size(self) -> Tuple[int, int]:
        """Текущий размер области отображения, px."""

    def request_frame(self, callback: Callable[[], None]) -> None:
        """Планирует `callback` на ближайший кадр основного потока."""

    def present(self, image: Image.Image) -> None:
        """Показывает готовый кадр."""


class LiveRenderer:
    """Подписывается на документ и перерисовывает его целиком на каждое изменение.

    Несколько изменений до ближайшего кадра сливаются в одну перерисовку.
    """

    def __init__(self, document: Document, surface: Surface, painter: Optional[PaintService] = None) -> None:
        self.document = document
        self.surface = surface
        self.painter = painter or PaintService()
        self.last_frame: Optional[Image.Image] = None
        self._frame_pending = False
        self._bg_source: Optional[Raster] = None
        self._bg_size: Optional[Tuple[int, int]] = None
        self._bg_cache: Optional[Image.Image] = None

    def attach(self) -> None:
        self.document.subscribe(self._on_document_changed)
        self.invalidate()

    def detach(self) -> None:
        self.document.unsubscribe(self._on_document_changed)

    def invalidate(self) -> None:
        """Запрашивает перерисовку (размер поверхности, новые точки, фон, очистка)."""
        if self._frame_pending:
            return
        self._frame_pending = True
        self.surface.request_frame(self.render)

    def render(self) -> Optional[Image.Image]:
        self._frame_pending = False
        width, height = self.surface.get_size()
        if width <= 0 or height <= 0:
            return None
        self.document.set_size(width, height)

        snapshot = self.document.snapshot()
        size = (width, height)
        frame = self.painter.paint(
            size,
            snapshot.strokes,
            background=snapshot.background,
            scaled_background=self._scaled_background(snapshot.background, size),
        )
        self.last_frame = frame
        self.surface.present(frame)
        return frame

    # ---- Internals ----
    def _on_document_changed(self, _document: Document) -> None:
        self.invalidate()

    def _scaled_background(self, background: Optional[Raster], size: Tuple[int, int]) -> Optional[Image.Image]:
        if background is None:
            self._bg_source = None
            self._bg_cache = None
            return None
        if background is not self._bg_source or size != self._bg_size:
            logger.debug("Rescaling background %dx%d -> %dx%d", background.width, background.height, *size)
            self._bg_cache = self.painter.scale_background(background, size)
            self._bg_source = background
            self._bg_size = size
        return self._bg_cache
