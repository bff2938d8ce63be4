import itertools

import pytest

from regionsnap.errors import InvalidGestureError
from regionsnap.selection.region_selector import (
    CaptureRectangle,
    Offset,
    PointerPoint,
    RegionSelector,
    rectangle_of,
)

POINTS = [PointerPoint(x, y) for x, y in [(0, 0), (5, 9), (100, 100), (20, 40), (-30, 15), (7, -2)]]


def test_rectangle_of_is_symmetric():
    for a, b in itertools.product(POINTS, repeat=2):
        assert rectangle_of(a, b) == rectangle_of(b, a)


def test_rectangle_of_never_negative():
    for a, b in itertools.product(POINTS, repeat=2):
        rect = rectangle_of(a, b)
        assert rect.width >= 0
        assert rect.height >= 0


def test_rectangle_of_same_point_is_degenerate():
    for a in POINTS:
        assert rectangle_of(a, a) == (a.x, a.y, 0, 0)


@pytest.mark.parametrize("end, expected", [
    (PointerPoint(150, 170), (100, 100, 50, 70)),   # down-right
    (PointerPoint(20, 40), (20, 40, 80, 60)),       # up-left
    (PointerPoint(130, 60), (100, 60, 30, 40)),     # up-right
    (PointerPoint(60, 130), (60, 100, 40, 30)),     # down-left
])
def test_drag_in_every_quadrant_gives_top_left_origin(end, expected):
    selector = RegionSelector()
    selector.on_press(PointerPoint(100, 100))
    assert selector.on_release(end, Offset(0, 0)) == expected


def test_release_applies_offset():
    selector = RegionSelector()
    selector.on_press(PointerPoint(10, 10))
    selector.on_drag(PointerPoint(30, 30))
    rect = selector.on_release(PointerPoint(50, 80), Offset(5, -3))
    assert rect == CaptureRectangle(15, 7, 40, 70)


def test_release_without_press_raises():
    selector = RegionSelector()
    with pytest.raises(InvalidGestureError):
        selector.on_release(PointerPoint(10, 10), Offset(0, 0))


def test_second_press_moves_anchor():
    selector = RegionSelector()
    selector.on_press(PointerPoint(0, 0))
    selector.on_press(PointerPoint(10, 10))
    assert selector.on_release(PointerPoint(30, 30), Offset(0, 0)) == (10, 10, 20, 20)


def test_press_and_release_on_same_point_is_valid():
    selector = RegionSelector()
    selector.on_press(PointerPoint(42, 17))
    rect = selector.on_release(PointerPoint(42, 17), Offset(3, 4))
    assert rect == (45, 21, 0, 0)
    assert rect.is_empty


def test_drag_while_idle_is_ignored():
    selector = RegionSelector()
    selector.on_drag(PointerPoint(5, 5))
    assert not selector.is_armed
    assert selector.live_rectangle is None
    with pytest.raises(InvalidGestureError):
        selector.on_release(PointerPoint(5, 5), Offset(0, 0))


def test_live_rectangle_follows_drag_without_offset():
    selector = RegionSelector()
    selector.on_press(PointerPoint(50, 50))
    assert selector.live_rectangle == (50, 50, 0, 0)
    selector.on_drag(PointerPoint(10, 70))
    assert selector.live_rectangle == (10, 50, 40, 20)


def test_release_returns_selector_to_idle():
    selector = RegionSelector()
    selector.on_press(PointerPoint(1, 1))
    selector.on_release(PointerPoint(2, 2), Offset(0, 0))
    assert not selector.is_armed
    with pytest.raises(InvalidGestureError):
        selector.on_release(PointerPoint(3, 3), Offset(0, 0))


def test_reset_discards_gesture():
    selector = RegionSelector()
    selector.on_press(PointerPoint(1, 1))
    selector.reset()
    assert selector.live_rectangle is None
    with pytest.raises(InvalidGestureError):
        selector.on_release(PointerPoint(3, 3), Offset(0, 0))


def test_as_mss_monitor():
    assert CaptureRectangle(1, 2, 3, 4).as_mss_monitor() == {"left": 1, "top": 2, "width": 3, "height": 4}
