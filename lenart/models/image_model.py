"""Модель растра: изображение PIL и его метаданные.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PIL import Image


@dataclass(frozen=True)
class Raster:
    """Неизменяемый растр фиксированного размера.

    Fields:
        image: Изображение PIL (RGBA после декодирования, RGB после композиции).
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL, например "RGBA".
        size_bytes: Размер исходных данных, если известен.
    """
    image: Image.Image
    width: int
    height: int
    mode: str
    size_bytes: Optional[int] = None

    @classmethod
    def from_image(cls, image: Image.Image, size_bytes: Optional[int] = None) -> "Raster":
        width, height = image.size
        return cls(image=image, width=width, height=height, mode=image.mode, size_bytes=size_bytes)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height
