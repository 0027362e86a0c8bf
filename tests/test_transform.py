import math

import pytest

from silica.bounds import CanvasViewBounds
from silica.geometry import Rect, Vec2
from silica.transform import ScreenTransform


def _frame():
    return Rect(Vec2(0.0, 0.0), Vec2(200.0, 100.0))


def _bounds():
    return CanvasViewBounds(Vec2(-4.0, -1.0), Vec2(4.0, 3.0))


def test_invalid_bounds_replaced_by_unit_square():
    transform = ScreenTransform(_frame(), CanvasViewBounds.nothing())
    assert transform.bounds == CanvasViewBounds.new_symmetrical(1.0)


def test_bounds_are_copied():
    bounds = _bounds()
    transform = ScreenTransform(_frame(), bounds)
    transform.bounds.translate(Vec2(1.0, 1.0))
    assert bounds == _bounds()


def test_corners_map_with_flipped_y():
    transform = ScreenTransform(_frame(), _bounds())
    bottom_left = transform.position_from_point(Vec2(-4.0, -1.0))
    top_right = transform.position_from_point(Vec2(4.0, 3.0))
    assert bottom_left == Vec2(0.0, 100.0)
    assert top_right == Vec2(200.0, 0.0)


@pytest.mark.parametrize("point", [Vec2(0.0, 0.0), Vec2(-3.5, 2.25), Vec2(1.0, -0.5)])
def test_position_value_round_trip(point):
    transform = ScreenTransform(_frame(), _bounds())
    back = transform.value_from_position(transform.position_from_point(point))
    assert back.x == pytest.approx(point.x)
    assert back.y == pytest.approx(point.y)


def test_dvalue_dpos_signs_and_consistency():
    transform = ScreenTransform(_frame(), _bounds())
    scale = transform.dvalue_dpos()
    assert scale.x > 0
    assert scale.y < 0
    a = transform.position_from_point(Vec2(0.0, 0.0))
    b = transform.position_from_point(Vec2(1.0, 1.0))
    assert b.x - a.x == pytest.approx(scale.x)
    assert b.y - a.y == pytest.approx(scale.y)


def test_aspect_is_one_for_matching_shapes():
    transform = ScreenTransform(
        Rect(Vec2(0.0, 0.0), Vec2(50.0, 50.0)), CanvasViewBounds.new_symmetrical(2.0)
    )
    assert transform.aspect() == pytest.approx(1.0)


@pytest.mark.parametrize("target", [0.5, 1.0, 2.0])
def test_set_aspect_by_expanding_never_contracts(target):
    transform = ScreenTransform(_frame(), _bounds())
    width, height = transform.bounds.width(), transform.bounds.height()
    transform.set_aspect_by_expanding(target)
    assert transform.aspect() == pytest.approx(target)
    assert transform.bounds.width() >= width
    assert transform.bounds.height() >= height


def test_set_aspect_already_correct_is_noop():
    transform = ScreenTransform(_frame(), _bounds())
    before = CanvasViewBounds(transform.bounds.min, transform.bounds.max)
    transform.set_aspect_by_expanding(transform.aspect())
    assert transform.bounds == before


def test_zoom_keeps_pivot_fixed_and_scales():
    transform = ScreenTransform(_frame(), _bounds())
    center = Vec2(60.0, 30.0)
    pivot_before = transform.value_from_position(center)
    width = transform.bounds.width()
    transform.zoom(Vec2(2.0, 2.0), center)
    pivot_after = transform.value_from_position(center)
    assert pivot_after.x == pytest.approx(pivot_before.x)
    assert pivot_after.y == pytest.approx(pivot_before.y)
    assert transform.bounds.width() == pytest.approx(width / 2.0)


def test_zoom_to_degenerate_bounds_is_rejected():
    transform = ScreenTransform(_frame(), _bounds())
    transform.zoom(Vec2(math.inf, math.inf), Vec2(10.0, 10.0))
    assert transform.bounds == _bounds()


def test_translate_bounds_round_trip():
    transform = ScreenTransform(_frame(), _bounds())
    transform.translate_bounds(Vec2(25.0, -10.0))
    assert transform.bounds.width() == pytest.approx(_bounds().width())
    assert transform.bounds != _bounds()
    transform.translate_bounds(Vec2(-25.0, 10.0))
    assert transform.bounds.min.x == pytest.approx(-4.0)
    assert transform.bounds.max.y == pytest.approx(3.0)


def test_set_bounds_replaces():
    transform = ScreenTransform(_frame(), _bounds())
    new = CanvasViewBounds.new_symmetrical(5.0)
    transform.set_bounds(new)
    assert transform.bounds == new