"""Plain 2D vectors and axis-aligned rectangles."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Vec2:
    """A 2D point or vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: object) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its left/top corner and size."""

    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def _span_x(self) -> tuple[float, float]:
        low, high = sorted((self.left, self.left + self.width))
        return low, high

    def _span_y(self) -> tuple[float, float]:
        low, high = sorted((self.top, self.top + self.height))
        return low, high

    def intersection(self, other: Rect) -> Rect | None:
        """The overlapping area, or ``None`` when the rectangles do not overlap.

        Rectangles that only share an edge do not overlap.
        """
        a_left, a_right = self._span_x()
        a_top, a_bottom = self._span_y()
        b_left, b_right = other._span_x()
        b_top, b_bottom = other._span_y()
        left = max(a_left, b_left)
        right = min(a_right, b_right)
        top = max(a_top, b_top)
        bottom = min(a_bottom, b_bottom)
        if left < right and top < bottom:
            return Rect(left, top, right - left, bottom - top)
        return None

    def intersects(self, other: Rect) -> bool:
        """Whether the two rectangles overlap."""
        return self.intersection(other) is not None

    def moved(self, dx: float, dy: float) -> Rect:
        """A copy shifted by ``dx`` and ``dy``."""
        return replace(self, left=self.left + dx, top=self.top + dy)