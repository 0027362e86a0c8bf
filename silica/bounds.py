"""Bounds of the visible region of the canvas view."""

from __future__ import annotations

import math
from dataclasses import dataclass

from silica.geometry import Vec2


@dataclass
class CanvasViewBounds:
    """A 2D bounding box of the values shown in the view."""

    min: Vec2
    max: Vec2

    @classmethod
    def nothing(cls) -> "CanvasViewBounds":
        """Empty bounds that any extension replaces."""
        return cls(Vec2(math.inf, math.inf), Vec2(-math.inf, -math.inf))

    @classmethod
    def new_symmetrical(cls, half_extent: float) -> "CanvasViewBounds":
        """Bounds centred on the origin."""
        return cls(Vec2(-half_extent, -half_extent), Vec2(half_extent, half_extent))

    def is_finite(self) -> bool:
        return self.min.is_finite() and self.max.is_finite()

    def is_valid(self) -> bool:
        """Finite with a positive width and height."""
        return self.is_finite() and self.width() > 0.0 and self.height() > 0.0

    def width(self) -> float:
        return self.max.x - self.min.x

    def height(self) -> float:
        return self.max.y - self.min.y

    def extend_with(self, value: Vec2) -> None:
        """Expand to include the given point."""
        self.extend_with_x(value.x)
        self.extend_with_y(value.y)

    def extend_with_x(self, x: float) -> None:
        self.min = Vec2(min(self.min.x, x), self.min.y)
        self.max = Vec2(max(self.max.x, x), self.max.y)

    def extend_with_y(self, y: float) -> None:
        self.min = Vec2(self.min.x, min(self.min.y, y))
        self.max = Vec2(self.max.x, max(self.max.y, y))

    def expand_x(self, pad: float) -> None:
        self.min = Vec2(self.min.x - pad, self.min.y)
        self.max = Vec2(self.max.x + pad, self.max.y)

    def expand_y(self, pad: float) -> None:
        self.min = Vec2(self.min.x, self.min.y - pad)
        self.max = Vec2(self.max.x, self.max.y + pad)

    def merge_x(self, other: "CanvasViewBounds") -> None:
        self.min = Vec2(min(self.min.x, other.min.x), self.min.y)
        self.max = Vec2(max(self.max.x, other.max.x), self.max.y)

    def merge_y(self, other: "CanvasViewBounds") -> None:
        self.min = Vec2(self.min.x, min(self.min.y, other.min.y))
        self.max = Vec2(self.max.x, max(self.max.y, other.max.y))

    def set_x(self, other: "CanvasViewBounds") -> None:
        self.min = Vec2(other.min.x, self.min.y)
        self.max = Vec2(other.max.x, self.max.y)

    def set_y(self, other: "CanvasViewBounds") -> None:
        self.min = Vec2(self.min.x, other.min.y)
        self.max = Vec2(self.max.x, other.max.y)

    def translate_x(self, delta: float) -> None:
        self.min = Vec2(self.min.x + delta, self.min.y)
        self.max = Vec2(self.max.x + delta, self.max.y)

    def translate_y(self, delta: float) -> None:
        self.min = Vec2(self.min.x, self.min.y + delta)
        self.max = Vec2(self.max.x, self.max.y + delta)

    def translate(self, delta: Vec2) -> None:
        self.translate_x(delta.x)
        self.translate_y(delta.y)

    def add_relative_margin_x(self, margin_fraction: Vec2) -> None:
        """Grow on both sides by a fraction of the current width."""
        self.expand_x(margin_fraction.x * max(self.width(), 0.0))

    def add_relative_margin_y(self, margin_fraction: Vec2) -> None:
        """Grow on both sides by a fraction of the current height."""
        self.expand_y(margin_fraction.y * max(self.height(), 0.0))


@dataclass(frozen=True)
class AutoBounds:
    """Which axes follow the content automatically."""

    x: bool
    y: bool

    @classmethod
    def from_bool(cls, value: bool) -> "AutoBounds":
        return cls(value, value)

    def any(self) -> bool:
        return self.x or self.y