"""Two-dimensional vectors, rectangles and range remapping."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

Number = Union[int, float]


def _div(numerator: float, denominator: float) -> float:
    """Divide with IEEE semantics: division by zero gives an infinity or NaN."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


@dataclass(frozen=True)
class Vec2:
    """A 2D vector or position."""

    x: float
    y: float

    def is_finite(self) -> bool:
        """True when both components are finite."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    def min(self, other: "Vec2") -> "Vec2":
        """Component-wise minimum."""
        return Vec2(min(self.x, other.x), min(self.y, other.y))

    def max(self, other: "Vec2") -> "Vec2":
        """Component-wise maximum."""
        return Vec2(max(self.x, other.x), max(self.y, other.y))

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.y * other.y

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def __mul__(self, other: Union["Vec2", Number]) -> "Vec2":
        if isinstance(other, Vec2):
            return Vec2(self.x * other.x, self.y * other.y)
        return Vec2(self.x * other, self.y * other)

    __rmul__ = __mul__

    def __truediv__(self, other: Union["Vec2", Number]) -> "Vec2":
        if isinstance(other, Vec2):
            return Vec2(_div(self.x, other.x), _div(self.y, other.y))
        return Vec2(_div(self.x, other), _div(self.y, other))


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in screen space; y grows downwards."""

    min: Vec2
    max: Vec2

    @classmethod
    def from_two_pos(cls, a: Vec2, b: Vec2) -> "Rect":
        """The smallest rectangle containing both corners."""
        return cls(a.min(b), a.max(b))

    def width(self) -> float:
        return self.max.x - self.min.x

    def height(self) -> float:
        return self.max.y - self.min.y

    @property
    def left(self) -> float:
        return self.min.x

    @property
    def right(self) -> float:
        return self.max.x

    @property
    def top(self) -> float:
        return self.min.y

    @property
    def bottom(self) -> float:
        return self.max.y


def remap(
    value: float, from_range: tuple[float, float], to_range: tuple[float, float]
) -> float:
    """Linearly map ``value`` from one range onto another."""
    from_start, from_end = from_range
    to_start, to_end = to_range
    t = _div(value - from_start, from_end - from_start)
    return (1.0 - t) * to_start + t * to_end