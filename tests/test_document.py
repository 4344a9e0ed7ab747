"""Tests for Document state: ordering, active stroke, clear, notifications."""

from lenart.models.geometry import Point


class TestStrokes:
    def test_begin_stroke_appends_in_order(self, document, red, blue):
        a = document.begin_stroke(red, 4.0)
        b = document.begin_stroke(blue, 8.0)
        assert document.strokes == (a, b)
        assert b.color == blue
        assert b.width_px == 8.0

    def test_new_stroke_freezes_previous(self, document, red):
        a = document.begin_stroke(red, 4.0)
        b = document.begin_stroke(red, 4.0)
        assert a.frozen
        assert document.active_stroke is b

    def test_append_only_to_active(self, document, red):
        a = document.begin_stroke(red, 4.0)
        assert document.append_point(a, Point(1, 1))
        b = document.begin_stroke(red, 4.0)
        assert not document.append_point(a, Point(2, 2))
        assert a.point_count() == 1
        assert document.append_point(b, Point(3, 3))

    def test_end_stroke(self, document, red):
        a = document.begin_stroke(red, 4.0)
        document.append_point(a, Point(0, 0))
        document.end_stroke(a)
        assert a.frozen
        assert document.active_stroke is None
        assert not document.append_point(a, Point(1, 1))


class TestSizeAndClear:
    def test_unsized_by_default(self, document):
        assert not document.is_sized
        assert document.size == (0, 0)

    def test_set_size_keeps_content(self, document, red, green_background):
        document.begin_stroke(red, 2.0)
        document.set_background(green_background)
        document.set_size(100, 50)
        document.set_size(200, 80)
        document.set_size(200, 80)
        assert document.size == (200, 80)
        assert len(document.strokes) == 1
        assert document.background is green_background

    def test_clear_removes_strokes_and_background(self, sized_document, red, green_background):
        sized_document.begin_stroke(red, 2.0)
        sized_document.set_background(green_background)
        sized_document.clear()
        assert sized_document.strokes == ()
        assert sized_document.background is None
        assert sized_document.active_stroke is None
        assert sized_document.size == (100, 100)

    def test_clear_is_idempotent(self, document, red):
        document.begin_stroke(red, 2.0)
        document.clear()
        document.clear()
        assert document.strokes == ()
        assert document.background is None

    def test_clear_bumps_generation(self, document):
        g = document.generation
        document.clear()
        assert document.generation == g + 1


class TestNotifications:
    def test_each_mutation_notifies(self, document, red, green_background):
        calls = []
        document.subscribe(lambda d: calls.append(d))
        s = document.begin_stroke(red, 2.0)
        document.append_point(s, Point(0, 0))
        document.set_background(green_background)
        document.clear()
        assert len(calls) == 4

    def test_set_size_does_not_notify(self, document):
        calls = []
        document.subscribe(lambda d: calls.append(d))
        document.set_size(10, 10)
        assert calls == []

    def test_transaction_notifies_once(self, document, red):
        calls = []
        document.subscribe(lambda d: calls.append(d.strokes[-1].point_count()))
        with document.transaction():
            s = document.begin_stroke(red, 2.0)
            document.append_point(s, Point(5, 5))
        # listener never observes the empty stroke
        assert calls == [1]

    def test_unsubscribe(self, document, red):
        calls = []
        listener = calls.append
        document.subscribe(listener)
        document.unsubscribe(listener)
        document.unsubscribe(listener)
        document.begin_stroke(red, 2.0)
        assert calls == []


class TestSnapshot:
    def test_snapshot_is_frozen_copy(self, sized_document, red):
        s = sized_document.begin_stroke(red, 3.0)
        sized_document.append_point(s, Point(1, 1))
        snap = sized_document.snapshot()
        sized_document.append_point(s, Point(2, 2))
        sized_document.clear()
        assert snap.is_sized
        assert (snap.width, snap.height) == (100, 100)
        assert len(snap.strokes) == 1
        assert snap.strokes[0].points == (Point(1, 1),)
