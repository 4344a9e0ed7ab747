"""Загрузка фоновых изображений из байтов или файлов.

Принципы:
- SRP: класс отвечает только за декодирование и упаковку в `Raster`.
- OCP: новые источники (стрим, путь, байты) сводятся к `decode`.
- Ошибка декодирования не фатальна: результат «нет растра».
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from PIL import Image, UnidentifiedImageError

from lenart.models.errors import DecodeFailure
from lenart.models.image_model import Raster

logger = logging.getLogger(__name__)

Source = Union[bytes, bytearray, BinaryIO, str, Path]


class ImageService:
    def decode(self, data: bytes) -> Raster:
        """Декодирует изображение любого формата, известного Pillow.

        Returns:
            `Raster` в режиме RGBA.

        Raises:
            DecodeFailure: если данные не распознаны как изображение.
        """
        try:
            with Image.open(io.BytesIO(data)) as opened:
                pil_image = opened.convert("RGBA")
        except (UnidentifiedImageError, OSError, ValueError, SyntaxError, Image.DecompressionBombError) as exc:
            raise DecodeFailure(f"Данные не являются изображением ({len(data)} байт)") from exc
        return Raster.from_image(pil_image, size_bytes=len(data))

    def read(self, source: Source) -> bytes:
        if isinstance(source, (bytes, bytearray)):
            return bytes(source)
        if isinstance(source, (str, Path)):
            return Path(source).read_bytes()
        return source.read()

    def load_background(self, source: Source) -> Optional[Raster]:
        """Читает и декодирует источник; при любой ошибке возвращает None."""
        try:
            data = self.read(source)
        except OSError as exc:
            logger.warning("Cannot read image source: %s", exc)
            return None
        try:
            raster = self.decode(data)
        except DecodeFailure as exc:
            logger.warning("%s", exc)
            return None
        logger.info("Decoded background %dx%d (%s)", raster.width, raster.height, raster.mode)
        return raster
