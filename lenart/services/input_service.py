"""Захват ввода: конечный автомат указателя.

Состояния: IDLE и ACTIVE(штрих). Поддерживается один логический указатель;
события других указателей игнорируются.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from lenart.models.document import Document
from lenart.models.geometry import WHITE, Color, Point
from lenart.models.stroke import Stroke

logger = logging.getLogger(__name__)


class PointerAction(enum.Enum):
    PRESS = "press"
    MOVE = "move"
    RELEASE = "release"
    CANCEL = "cancel"


@dataclass(frozen=True)
class PointerEvent:
    action: PointerAction
    x: float
    y: float
    pressed: bool = True
    pointer_id: int = 0

    @property
    def point(self) -> Point:
        return Point(float(self.x), float(self.y))


@dataclass
class ToolSettings:
    """Текущие настройки инструмента; читаются один раз при нажатии."""
    color: Color
    width_px: float
    eraser: bool = False


class CaptureState(enum.Enum):
    IDLE = "idle"
    ACTIVE = "active"


class InputCapture:
    def __init__(self, document: Document, tool: ToolSettings, base_color: Color = WHITE) -> None:
        self.document = document
        self.tool = tool
        self.base_color = base_color
        self._stroke: Optional[Stroke] = None
        self._pointer_id: Optional[int] = None

    @property
    def state(self) -> CaptureState:
        return CaptureState.IDLE if self._stroke is None else CaptureState.ACTIVE

    @property
    def active_stroke(self) -> Optional[Stroke]:
        return self._stroke

    def effective_color(self) -> Color:
        # eraser paints the opaque base colour, it never reveals the background
        return self.base_color if self.tool.eraser else self.tool.color

    def handle(self, event: PointerEvent) -> None:
        if self._stroke is None:
            if event.action is PointerAction.PRESS:
                self._begin(event)
            return

        if event.pointer_id != self._pointer_id:
            logger.debug("Ignoring %s from extra pointer %d", event.action.value, event.pointer_id)
            return

        if event.action is PointerAction.MOVE and event.pressed:
            self.document.append_point(self._stroke, event.point)
        elif event.action is PointerAction.PRESS:
            logger.debug("Ignoring press while a stroke is active")
        else:
            self._end()

    def reset(self) -> None:
        """Завершает активный штрих, если он есть (например, при очистке холста)."""
        if self._stroke is not None:
            self._end()

    # ---- Internals ----
    def _begin(self, event: PointerEvent) -> None:
        with self.document.transaction():
            stroke = self.document.begin_stroke(self.effective_color(), self.tool.width_px)
            self.document.append_point(stroke, event.point)
        self._stroke = stroke
        self._pointer_id = event.pointer_id
        logger.debug("Stroke started at (%.1f, %.1f) %s", event.x, event.y, stroke)

    def _end(self) -> None:
        stroke = self._stroke
        self._stroke = None
        self._pointer_id = None
        if stroke is not None:
            self.document.end_stroke(stroke)
            logger.debug("Stroke finished: %d points", stroke.point_count())
