"""Tests for the pointer state machine."""

import pytest

from lenart.models.geometry import WHITE, Point
from lenart.services.input_service import (
    CaptureState,
    InputCapture,
    PointerAction,
    PointerEvent,
    ToolSettings,
)


def press(x, y, pointer_id=0):
    return PointerEvent(PointerAction.PRESS, x, y, pressed=True, pointer_id=pointer_id)


def move(x, y, pressed=True, pointer_id=0):
    return PointerEvent(PointerAction.MOVE, x, y, pressed=pressed, pointer_id=pointer_id)


def release(x, y, pointer_id=0):
    return PointerEvent(PointerAction.RELEASE, x, y, pressed=False, pointer_id=pointer_id)


@pytest.fixture
def tool(red):
    return ToolSettings(color=red, width_px=6.0)


@pytest.fixture
def capture(sized_document, tool):
    return InputCapture(sized_document, tool)


class TestTransitions:
    def test_starts_idle(self, capture):
        assert capture.state is CaptureState.IDLE

    def test_press_begins_stroke_with_point(self, capture, sized_document):
        capture.handle(press(10, 20))
        assert capture.state is CaptureState.ACTIVE
        stroke = sized_document.strokes[0]
        assert stroke.points == (Point(10, 20),)
        assert stroke.is_dot()

    def test_every_move_is_recorded(self, capture, sized_document):
        capture.handle(press(0, 0))
        for i in range(1, 50):
            capture.handle(move(i, i * 0.5))
        assert sized_document.strokes[0].point_count() == 50

    def test_release_freezes_and_returns_to_idle(self, capture, sized_document):
        capture.handle(press(0, 0))
        capture.handle(move(5, 5))
        capture.handle(release(5, 5))
        stroke = sized_document.strokes[0]
        assert capture.state is CaptureState.IDLE
        assert stroke.frozen
        assert stroke.point_count() == 2

    def test_cancel_ends_stroke(self, capture, sized_document):
        capture.handle(press(0, 0))
        capture.handle(PointerEvent(PointerAction.CANCEL, 1, 1, pressed=False))
        assert capture.state is CaptureState.IDLE
        assert sized_document.strokes[0].frozen

    def test_move_with_pointer_up_ends_stroke(self, capture, sized_document):
        capture.handle(press(0, 0))
        capture.handle(move(3, 3, pressed=False))
        assert capture.state is CaptureState.IDLE
        assert sized_document.strokes[0].point_count() == 1

    def test_idle_ignores_move_and_release(self, capture, sized_document):
        capture.handle(move(1, 1))
        capture.handle(release(1, 1))
        assert sized_document.strokes == ()

    def test_consecutive_gestures_make_separate_strokes(self, capture, sized_document):
        for x in (10, 20, 30):
            capture.handle(press(x, x))
            capture.handle(release(x, x))
        assert len(sized_document.strokes) == 3
        assert all(s.is_dot() for s in sized_document.strokes)


class TestSinglePointer:
    def test_second_press_is_ignored(self, capture, sized_document):
        capture.handle(press(0, 0))
        capture.handle(press(50, 50))
        capture.handle(move(1, 1))
        assert len(sized_document.strokes) == 1
        assert sized_document.strokes[0].points == (Point(0, 0), Point(1, 1))

    def test_extra_pointer_events_ignored(self, capture, sized_document):
        capture.handle(press(0, 0, pointer_id=1))
        capture.handle(press(9, 9, pointer_id=2))
        capture.handle(move(9, 9, pointer_id=2))
        capture.handle(release(9, 9, pointer_id=2))
        assert capture.state is CaptureState.ACTIVE
        capture.handle(release(0, 0, pointer_id=1))
        assert capture.state is CaptureState.IDLE
        assert sized_document.strokes[0].point_count() == 1


class TestStyle:
    def test_style_sampled_at_press(self, capture, tool, sized_document, blue):
        capture.handle(press(0, 0))
        tool.color = blue
        tool.width_px = 20.0
        capture.handle(move(1, 1))
        capture.handle(release(1, 1))
        first = sized_document.strokes[0]
        assert first.color != blue
        assert first.width_px == 6.0

        capture.handle(press(5, 5))
        assert sized_document.strokes[1].color == blue
        assert sized_document.strokes[1].width_px == 20.0

    def test_eraser_paints_base_colour(self, capture, tool, sized_document):
        tool.eraser = True
        capture.handle(press(0, 0))
        assert sized_document.strokes[0].color == WHITE

    def test_reset_ends_active_stroke(self, capture, sized_document):
        capture.handle(press(0, 0))
        capture.reset()
        assert capture.state is CaptureState.IDLE
        assert sized_document.strokes[0].frozen
