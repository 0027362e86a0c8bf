"""Mapping between canvas values and screen positions."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from silica.bounds import CanvasViewBounds
from silica.geometry import Rect, Vec2, remap

_ASPECT_EPSILON = 1e-5


@dataclass
class ScreenTransform:
    """A screen rectangle together with the value bounds it shows."""

    frame: Rect
    bounds: CanvasViewBounds

    def __post_init__(self) -> None:
        if self.bounds.is_valid():
            self.bounds = dataclasses.replace(self.bounds)
        else:
            self.bounds = CanvasViewBounds.new_symmetrical(1.0)

    def set_bounds(self, bounds: CanvasViewBounds) -> None:
        self.bounds = dataclasses.replace(bounds)

    def translate_bounds(self, delta_pos: Vec2) -> None:
        """Shift the bounds by a screen-space delta."""
        self.bounds.translate(delta_pos / self.dvalue_dpos())

    def zoom(self, zoom_factor: Vec2, center: Vec2) -> None:
        """Zoom by a relative factor around a screen position."""
        pivot = self.value_from_position(center)
        new_bounds = CanvasViewBounds(
            pivot + (self.bounds.min - pivot) / zoom_factor,
            pivot + (self.bounds.max - pivot) / zoom_factor,
        )
        if new_bounds.is_valid():
            self.bounds = new_bounds

    def position_from_point(self, value: Vec2) -> Vec2:
        """Screen position of a value; the y axis points up in value space."""
        x = remap(
            value.x,
            (self.bounds.min.x, self.bounds.max.x),
            (self.frame.left, self.frame.right),
        )
        y = remap(
            value.y,
            (self.bounds.min.y, self.bounds.max.y),
            (self.frame.bottom, self.frame.top),
        )
        return Vec2(x, y)

    def value_from_position(self, pos: Vec2) -> Vec2:
        """Value shown at a screen position."""
        x = remap(
            pos.x,
            (self.frame.left, self.frame.right),
            (self.bounds.min.x, self.bounds.max.x),
        )
        y = remap(
            pos.y,
            (self.frame.bottom, self.frame.top),
            (self.bounds.min.y, self.bounds.max.y),
        )
        return Vec2(x, y)

    def dvalue_dpos(self) -> Vec2:
        """Screen distance per unit of value along each axis."""
        scale = Vec2(self.frame.width(), -self.frame.height()) / Vec2(
            self.bounds.width(), self.bounds.height()
        )
        return scale

    def aspect(self) -> float:
        """Ratio of value-per-pixel along x to value-per-pixel along y."""
        per_pixel = Vec2(self.bounds.width(), self.bounds.height()) / Vec2(
            self.frame.width(), self.frame.height()
        )
        return (Vec2(per_pixel.x, 0.0) / per_pixel.y).x

    def set_aspect_by_expanding(self, aspect: float) -> None:
        """Reach the given aspect by widening one axis; never contracts."""
        current = self.aspect()
        if abs(current - aspect) < _ASPECT_EPSILON:
            return
        if current < aspect:
            ratio = (Vec2(aspect, 0.0) / current).x
            self.bounds.expand_x((ratio - 1.0) * self.bounds.width() * 0.5)
        else:
            ratio = (Vec2(current, 0.0) / aspect).x
            self.bounds.expand_y((ratio - 1.0) * self.bounds.height() * 0.5)