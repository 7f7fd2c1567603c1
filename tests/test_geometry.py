import random

import pytest

from dungeon_explorer.exceptions import InvalidRect
from dungeon_explorer.geometry import Point, Rect, dimension_less, overlaps


def R(x0, y0, x1, y1):
    return Rect(Point(x0, y0), Point(x1, y1))


def test_touching_rectangles_do_not_overlap():
    a = R(0, 0, 10, 10)
    b = R(10, 10, 20, 20)
    assert not overlaps(a, b)
    assert not overlaps(b, a)


def test_shared_edge_is_not_overlap():
    a = R(0, 0, 10, 10)
    b = R(10, 0, 20, 10)
    assert not a.overlaps(b)
    assert not b.overlaps(a)


def test_proper_overlap():
    a = R(0, 0, 10, 10)
    b = R(5, 5, 10, 10)
    assert overlaps(a, b)
    assert overlaps(b, a)


def test_overlap_is_symmetric_on_random_pairs():
    rng = random.Random(99)
    for _ in range(2000):
        x0, y0 = rng.randint(-20, 20), rng.randint(-20, 20)
        x1, y1 = rng.randint(-20, 20), rng.randint(-20, 20)
        a = R(x0, y0, x0 + rng.randint(0, 10), y0 + rng.randint(0, 10))
        b = R(x1, y1, x1 + rng.randint(0, 10), y1 + rng.randint(0, 10))
        assert a.overlaps(b) == b.overlaps(a)


def test_degenerate_rect_rejected():
    with pytest.raises(InvalidRect):
        R(5, 0, 4, 10)
    with pytest.raises(InvalidRect):
        R(0, 5, 10, 4)
    # Zero-area rectangles are allowed; they just never overlap anything.
    line = R(3, 3, 3, 9)
    assert not line.overlaps(R(0, 0, 10, 10))


def test_from_size_and_dimensions():
    r = Rect.from_size(Point(4, 5), 3, 2)
    assert r == R(4, 5, 7, 7)
    assert (r.width, r.height) == (3, 2)
    assert r.coords == (4, 5, 7, 7)


def test_contains_is_closed():
    outer = R(0, 0, 10, 10)
    assert outer.contains(R(0, 0, 10, 10))
    assert outer.contains(R(2, 3, 4, 5))
    assert not outer.contains(R(-1, 0, 5, 5))
    assert not outer.contains(R(5, 5, 11, 6))


@pytest.mark.parametrize(
    "dim,a,b",
    [
        (0, R(0, 9, 9, 9), R(1, 0, 2, 2)),
        (1, R(9, 0, 9, 9), R(0, 1, 2, 2)),
        (2, R(0, 9, 5, 9), R(0, 0, 6, 6)),
        (3, R(0, 0, 9, 5), R(0, 0, 1, 6)),
    ],
)
def test_dimension_less_uses_selected_coordinate(dim, a, b):
    assert dimension_less(a, b, dim)
    assert not dimension_less(b, a, dim)


def test_dimension_less_ties_fall_back_to_lexicographic():
    a = R(0, 0, 5, 5)
    b = R(0, 1, 5, 5)
    # Equal min.x: decided by min.y.
    assert dimension_less(a, b, 0)
    assert not dimension_less(b, a, 0)
    # Equal max.x: decided lexicographically as well.
    assert a.is_dim_less(b, 2)
    # Identical rectangles are never less than each other.
    assert not a.is_dim_less(R(0, 0, 5, 5), 1)


def test_dimension_out_of_range():
    with pytest.raises(ValueError):
        R(0, 0, 1, 1).is_dim_less(R(0, 0, 1, 1), 4)
