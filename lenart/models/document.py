"""Состояние документа: размер холста, штрихи, фон.

Принципы:
- SRP: хранение и атомарные изменения; отрисовка вынесена в сервисы.
- Наблюдаемость: подписчики получают уведомление после каждого изменения.
- Один писатель: изменения выполняются под общим `RLock`, читатели из других
  потоков работают со снимком (`snapshot`).
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from lenart.models.geometry import Color, Point, StrokeStyle
from lenart.models.image_model import Raster
from lenart.models.stroke import Stroke, StrokeSnapshot

logger = logging.getLogger(__name__)

Listener = Callable[["Document"], None]


@dataclass(frozen=True)
class DocumentSnapshot:
    """Неизменяемая копия документа для композиции вне основного потока."""
    width: int
    height: int
    strokes: Tuple[StrokeSnapshot, ...]
    background: Optional[Raster]

    @property
    def is_sized(self) -> bool:
        return self.width > 0 and self.height > 0


class Document:
    """Векторная модель рисунка.

    Порядок штрихов неизменен после вставки; удалить можно только все штрихи
    сразу (`clear`). Одновременно активен не более одного штриха.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._width = 0
        self._height = 0
        self._strokes: List[Stroke] = []
        self._background: Optional[Raster] = None
        self._active: Optional[Stroke] = None
        self._generation = 0
        self._listeners: List[Listener] = []
        self._tx_depth = 0
        self._dirty = False

    # ---- Read API ----
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Tuple[int, int]:
        return self._width, self._height

    @property
    def is_sized(self) -> bool:
        return self._width > 0 and self._height > 0

    @property
    def strokes(self) -> Tuple[Stroke, ...]:
        return tuple(self._strokes)

    @property
    def background(self) -> Optional[Raster]:
        return self._background

    @property
    def active_stroke(self) -> Optional[Stroke]:
        return self._active

    @property
    def generation(self) -> int:
        """Счётчик очисток; по нему отбрасываются устаревшие загрузки фона."""
        return self._generation

    def snapshot(self) -> DocumentSnapshot:
        with self._lock:
            return DocumentSnapshot(
                width=self._width,
                height=self._height,
                strokes=tuple(s.snapshot() for s in self._strokes),
                background=self._background,
            )

    # ---- Observers ----
    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    @contextmanager
    def transaction(self) -> Iterator["Document"]:
        """Группирует несколько изменений в одно уведомление."""
        with self._lock:
            self._tx_depth += 1
            try:
                yield self
            finally:
                self._tx_depth -= 1
            if self._tx_depth == 0 and self._dirty:
                self._dirty = False
                self._emit()

    # ---- Mutations ----
    def set_size(self, width: int, height: int) -> None:
        # no notification: the renderer itself reports the size while painting
        with self._lock:
            if (width, height) != (self._width, self._height):
                logger.debug("Canvas size %dx%d -> %dx%d", self._width, self._height, width, height)
            self._width = int(width)
            self._height = int(height)

    def begin_stroke(self, color: Color, width_px: float) -> Stroke:
        style = StrokeStyle(color=color, width_px=width_px)
        with self._lock:
            if self._active is not None:
                self._active.freeze()
            stroke = Stroke(style)
            self._strokes.append(stroke)
            self._active = stroke
            self._changed()
        return stroke

    def append_point(self, stroke: Stroke, point: Point) -> bool:
        """Добавляет точку в активный штрих. Для любого другого штриха ничего не делает."""
        with self._lock:
            if stroke is not self._active:
                logger.debug("Ignoring point for inactive stroke %r", stroke)
                return False
            stroke.append(point)
            self._changed()
        return True

    def end_stroke(self, stroke: Stroke) -> None:
        with self._lock:
            if stroke is not self._active:
                return
            stroke.freeze()
            self._active = None

    def clear(self) -> None:
        with self._lock:
            if self._active is not None:
                self._active.freeze()
                self._active = None
            self._strokes = []
            self._background = None
            self._generation += 1
            self._changed()

    def set_background(self, raster: Optional[Raster]) -> None:
        with self._lock:
            self._background = raster
            self._changed()

    # ---- Internals ----
    def _changed(self) -> None:
        if self._tx_depth:
            self._dirty = True
            return
        self._emit()

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self)
