"""Модель штриха: упорядоченная последовательность точек и стиль."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from lenart.models.geometry import Color, Point, StrokeStyle


class Stroke:
    """Один непрерывный жест от нажатия до отпускания.

    Пока штрих активен, точки только добавляются в конец. После `freeze()`
    штрих больше не меняется.
    """

    def __init__(self, style: StrokeStyle) -> None:
        self._style = style
        self._points: List[Point] = []
        self._frozen = False

    @property
    def style(self) -> StrokeStyle:
        return self._style

    @property
    def color(self) -> Color:
        return self._style.color

    @property
    def width_px(self) -> float:
        return self._style.width_px

    @property
    def points(self) -> Tuple[Point, ...]:
        return tuple(self._points)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def append(self, point: Point) -> None:
        if self._frozen:
            raise ValueError("Штрих завершён, добавление точек запрещено")
        self._points.append(point)

    def freeze(self) -> None:
        self._frozen = True

    def point_count(self) -> int:
        return len(self._points)

    def is_dot(self) -> bool:
        return len(self._points) == 1

    def snapshot(self) -> "StrokeSnapshot":
        return StrokeSnapshot(style=self._style, points=tuple(self._points))

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "active"
        return f"Stroke({self.color.to_hex()}, {self.width_px}px, {len(self._points)} pts, {state})"


@dataclass(frozen=True)
class StrokeSnapshot:
    """Неизменяемая копия штриха для чтения из других потоков."""
    style: StrokeStyle
    points: Tuple[Point, ...] = field(default_factory=tuple)

    @property
    def color(self) -> Color:
        return self.style.color

    @property
    def width_px(self) -> float:
        return self.style.width_px

    def point_count(self) -> int:
        return len(self.points)

    def is_dot(self) -> bool:
        return len(self.points) == 1
