"""Общий алгоритм отрисовки документа на растр PIL.

Используется и живым рендерером, и экспортом, поэтому сохранённое
изображение совпадает с тем, что было на экране.

Принципы:
- SRP: только рисование; размер и источник холста задаёт вызывающий код.
- Чистый код: без сглаживания и прореживания, путь проходит ровно через точки.
"""
from __future__ import annotations

import math
from typing import Iterable, Optional, Tuple

from PIL import Image, ImageDraw

from lenart.models.geometry import WHITE, Color, Point
from lenart.models.image_model import Raster
from lenart.models.stroke import StrokeSnapshot


class PaintService:
    def __init__(self, base_color: Color = WHITE) -> None:
        self.base_color = base_color

    def new_canvas(self, size: Tuple[int, int]) -> Image.Image:
        """Пустой холст, залитый базовым цветом."""
        return Image.new("RGB", size, self.base_color.as_tuple()[:3])

    def scale_background(self, background: Raster, size: Tuple[int, int]) -> Image.Image:
        """Растягивает фон ровно до `size` без обрезки (пропорции не сохраняются)."""
        image = background.image if background.image.mode == "RGBA" else background.image.convert("RGBA")
        if image.size == size:
            return image
        return image.resize(size, Image.Resampling.LANCZOS)

    def paint(
        self,
        size: Tuple[int, int],
        strokes: Iterable[StrokeSnapshot],
        background: Optional[Raster] = None,
        scaled_background: Optional[Image.Image] = None,
    ) -> Image.Image:
        """Рисует фон и все штрихи по порядку на новом холсте размера `size`.

        Args:
            size: Размер холста, px.
            strokes: Штрихи в порядке добавления (ранние ниже).
            background: Фон или None (тогда холст белый).
            scaled_background: Уже растянутый фон, если вызывающий кэширует его.

        Returns:
            Изображение в режиме RGB.
        """
        canvas = self.new_canvas(size)
        if background is not None:
            scaled = scaled_background if scaled_background is not None else self.scale_background(background, size)
            canvas.paste(scaled, (0, 0), scaled)

        for stroke in strokes:
            self.paint_stroke(canvas, stroke)
        return canvas

    def paint_stroke(self, canvas: Image.Image, stroke: StrokeSnapshot) -> None:
        """Рисует штрих одним проходом: сегменты и скругления сначала собираются в маску.

        Перекрытия сегментов внутри штриха не смешиваются повторно, поэтому
        полупрозрачный штрих имеет равномерный цвет по всей длине.
        """
        count = stroke.point_count()
        if count == 0:
            return
        radius = stroke.width_px / 2.0
        box = self._stroke_box(stroke.points, radius, canvas.size)
        if box is None:
            return
        left, top, right, bottom = box

        # coverage mask in box-local coordinates
        mask = Image.new("L", (right - left, bottom - top), 0)
        draw = ImageDraw.Draw(mask)
        points = [Point(p.x - left, p.y - top) for p in stroke.points]
        if count == 1:
            self._dot(draw, points[0], radius)
        else:
            line_width = max(1, int(round(stroke.width_px)))
            for start, end in zip(points, points[1:]):
                draw.line([start.as_tuple(), end.as_tuple()], fill=255, width=line_width)
                # round caps, which also round the joins between segments
                self._dot(draw, start, radius)
                self._dot(draw, end, radius)

        r, g, b, a = stroke.color.as_tuple()
        if a < 255:
            mask = mask.point(lambda v: v * a // 255)
        canvas.paste((r, g, b), box, mask)

    @staticmethod
    def _stroke_box(
        points: Tuple[Point, ...], radius: float, size: Tuple[int, int]
    ) -> Optional[Tuple[int, int, int, int]]:
        """Габариты штриха с запасом на толщину, обрезанные по холсту."""
        pad = int(math.ceil(radius)) + 2
        left = max(0, int(math.floor(min(p.x for p in points))) - pad)
        top = max(0, int(math.floor(min(p.y for p in points))) - pad)
        right = min(size[0], int(math.ceil(max(p.x for p in points))) + pad + 1)
        bottom = min(size[1], int(math.ceil(max(p.y for p in points))) + pad + 1)
        if left >= right or top >= bottom:
            return None
        return left, top, right, bottom

    @staticmethod
    def _dot(draw: ImageDraw.ImageDraw, center: Point, radius: float) -> None:
        draw.ellipse(
            (center.x - radius, center.y - radius, center.x + radius, center.y + radius),
            fill=255,
        )
