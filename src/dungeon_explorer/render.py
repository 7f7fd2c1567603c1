"""Engine-independent rendering helpers.

These turn placements into pixel data or text without touching Arcade, so the
window code stays thin and the conversions can be tested headless.
"""
from __future__ import annotations

from typing import Iterable, List, Tuple

from .rooms import Placement

RGB = Tuple[int, int, int]

LIGHT_DIRT: RGB = (255, 255, 255)
DARK_DIRT: RGB = (0, 0, 0)

ASCII_UNSEEN = " "


def dirt_colour(dark_mode: bool) -> RGB:
    """Background/dirt colour: white normally, black in dark mode."""
    return DARK_DIRT if dark_mode else LIGHT_DIRT


def session_colour(tick: int, green: int) -> RGB:
    """Colour for carved tiles, sweeping red to blue as ``tick`` cycles through 0..254."""
    i = tick % 255
    return (i, green & 0xFF, 255 - i)


def placement_rgb(placement: Placement, empty_colour: RGB, dirt: RGB) -> bytes:
    """Row-major RGB24 pixel data for a placement, one pixel per tile."""
    out = bytearray()
    empty = bytes(empty_colour)
    solid = bytes(dirt)
    for row in placement.tiles:
        for tile in row:
            out += empty if tile.is_empty else solid
    return bytes(out)


def render_ascii(placements: Iterable[Placement], width: int, height: int) -> List[str]:
    """Draw placements onto a ``width`` x ``height`` text grid.

    Tiles falling outside the grid are clipped; cells no placement touches stay blank.
    """
    grid = [[ASCII_UNSEEN] * width for _ in range(height)]
    for placement in placements:
        for x, y, tile in placement.cells():
            if 0 <= x < width and 0 <= y < height:
                grid[y][x] = tile.value
    return ["".join(row) for row in grid]
