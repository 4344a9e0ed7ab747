"""Компоновка документа в растр и сохранение в PNG.

Принципы:
- SRP: офскрин-рендер и кодирование; документ только читается (через снимок).
- Ошибки не глотаются: вызывающий код получает `ExportError`.
"""
from __future__ import annotations

import logging
from typing import BinaryIO, Callable, Optional

from lenart.models.document import DocumentSnapshot
from lenart.models.errors import EncodeFailure, SinkUnavailable, UnsizedDocumentError
from lenart.models.image_model import Raster
from lenart.services.paint_service import PaintService

logger = logging.getLogger(__name__)

SinkOpener = Callable[[], Optional[BinaryIO]]


class ExportService:
    def __init__(self, painter: Optional[PaintService] = None) -> None:
        self.painter = painter or PaintService()

    def compose(self, snapshot: DocumentSnapshot) -> Raster:
        """Рисует документ вне экрана в точном размере холста.

        Raises:
            UnsizedDocumentError: если размер холста ещё неизвестен.
        """
        if not snapshot.is_sized:
            raise UnsizedDocumentError(
                f"Размер холста неизвестен ({snapshot.width}x{snapshot.height}), экспорт невозможен"
            )
        size = (snapshot.width, snapshot.height)
        image = self.painter.paint(size, snapshot.strokes, background=snapshot.background)
        return Raster.from_image(image)

    def write_png(self, raster: Raster, sink: BinaryIO) -> None:
        """Кодирует растр в PNG, пишет целиком и сбрасывает буфер."""
        try:
            raster.image.save(sink, format="PNG")
            sink.flush()
        except (OSError, ValueError) as exc:
            raise EncodeFailure(f"Не удалось записать PNG: {exc}") from exc

    def export(self, snapshot: DocumentSnapshot, open_sink: SinkOpener) -> Raster:
        """Полный цикл сохранения: композиция, открытие приёмника, запись.

        Args:
            snapshot: Снимок документа.
            open_sink: Возвращает поток для записи (или None, если его нет).

        Returns:
            Сохранённый растр.

        Raises:
            UnsizedDocumentError, SinkUnavailable, EncodeFailure.
        """
        raster = self.compose(snapshot)
        try:
            sink = open_sink()
        except OSError as exc:
            raise SinkUnavailable(f"Не удалось открыть файл для записи: {exc}") from exc
        if sink is None:
            raise SinkUnavailable("Нет потока для записи")

        with sink:
            self.write_png(raster, sink)
        logger.info("Exported %dx%d PNG with %d strokes", raster.width, raster.height, len(snapshot.strokes))
        return raster
