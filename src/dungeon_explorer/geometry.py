"""Axis-aligned integer rectangles.

Coordinates are (x, y) with x growing to the right and y growing down, the same
convention the tile grids use. A rectangle spans ``[min, max)`` in tile units, so
a 3x2 room anchored at (4, 5) is ``Rect(Point(4, 5), Point(7, 7))``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Tuple

from .exceptions import InvalidRect

# Scalar coordinates a rectangle exposes to the spatial index, in dimension order.
DIMENSIONS = 4


class Point(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class Rect:
    min: Point
    max: Point

    def __post_init__(self) -> None:
        if self.min.x > self.max.x or self.min.y > self.max.y:
            raise InvalidRect(f"Degenerate rectangle: min={tuple(self.min)} max={tuple(self.max)}")

    @classmethod
    def from_size(cls, pos: Point, width: int, height: int) -> "Rect":
        return cls(Point(pos.x, pos.y), Point(pos.x + width, pos.y + height))

    @property
    def width(self) -> int:
        return self.max.x - self.min.x

    @property
    def height(self) -> int:
        return self.max.y - self.min.y

    @property
    def coords(self) -> Tuple[int, int, int, int]:
        """The four scalar coordinates ``(min.x, min.y, max.x, max.y)``."""
        return (self.min.x, self.min.y, self.max.x, self.max.y)

    def overlaps(self, other: "Rect") -> bool:
        """Open-interval overlap: rectangles sharing only an edge or corner do not overlap."""
        return (
            self.min.x < other.max.x
            and self.max.x > other.min.x
            and self.min.y < other.max.y
            and self.max.y > other.min.y
        )

    def contains(self, other: "Rect") -> bool:
        """True if ``other`` lies entirely inside this rectangle (boundaries included)."""
        return (
            self.min.x <= other.min.x
            and self.min.y <= other.min.y
            and other.max.x <= self.max.x
            and other.max.y <= self.max.y
        )

    def is_dim_less(self, other: "Rect", dim: int) -> bool:
        """Compare a single coordinate, falling back to a lexicographic comparison on ties.

        ``dim`` 0 and 1 select ``min.x`` / ``min.y``; 2 and 3 select ``max.x`` / ``max.y``.
        Only meaningful for deciding spatial index branching.
        """
        if not 0 <= dim < DIMENSIONS:
            raise ValueError(f"Dimension must be in [0, {DIMENSIONS}), got {dim}")
        lhs = self.coords
        rhs = other.coords
        if lhs[dim] != rhs[dim]:
            return lhs[dim] < rhs[dim]
        # Integer coordinates are totally ordered; all-equal compares as not less.
        return lhs < rhs

    def __str__(self) -> str:
        return f"[({self.min.x},{self.min.y}),({self.max.x},{self.max.y})]"


def overlaps(a: Rect, b: Rect) -> bool:
    return a.overlaps(b)


def dimension_less(a: Rect, b: Rect, dim: int) -> bool:
    return a.is_dim_less(b, dim)
