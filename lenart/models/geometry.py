"""Геометрические примитивы холста: точка, цвет, стиль штриха.

Принципы:
- SRP: только значения, без логики отрисовки.
- Чистый код: неизменяемость (`frozen=True`), равенство по значению.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Point:
    """Координаты в пикселях холста."""
    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return self.x, self.y


@dataclass(frozen=True)
class Color:
    """RGBA-цвет, компоненты 0..255."""
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Компонента {name} вне диапазона 0..255: {value}")

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Разбирает `#RRGGBB` или `#RRGGBBAA`."""
        text = value.strip().lstrip("#")
        if len(text) not in (6, 8):
            raise ValueError(f"Некорректный цвет: {value!r}")
        try:
            parts = [int(text[i:i + 2], 16) for i in range(0, len(text), 2)]
        except ValueError as exc:
            raise ValueError(f"Некорректный цвет: {value!r}") from exc
        return cls(*parts)

    def to_hex(self) -> str:
        """HEX без альфы, для виджетов Tk."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.r, self.g, self.b, self.a


WHITE = Color(255, 255, 255)


@dataclass(frozen=True)
class StrokeStyle:
    """Стиль, фиксируемый в момент начала штриха."""
    color: Color
    width_px: float

    def __post_init__(self) -> None:
        if not self.width_px > 0:
            raise ValueError(f"Толщина штриха должна быть > 0: {self.width_px}")
