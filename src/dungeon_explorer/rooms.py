"""Room templates, placements and the built-in room catalog.

Templates are written as rows of symbols, north to south, west to east:
``.`` is an empty (carved) tile and ``#`` is dirt. Any empty tile on a
template's border is a doorway that another room may attach to.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, Iterator, Sequence, Tuple

from .exceptions import InvalidTemplate
from .geometry import Point, Rect

logger = logging.getLogger(__name__)


class Tile(Enum):
    EMPTY = "."
    DIRT = "#"

    @property
    def is_empty(self) -> bool:
        return self is Tile.EMPTY


class Direction(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def opposite(self) -> "Direction":
        return Direction((self + 2) % 4)


_SYMBOLS: Dict[str, Tile] = {t.value: t for t in Tile}


@dataclass(frozen=True)
class RoomTemplate:
    """Immutable tile grid with its doorway offsets precomputed per direction.

    ``doorway_offsets[d]`` lists, in ascending order, the indices along the side
    facing ``d`` whose border tile is empty: columns for north/south, rows for
    east/west.
    """

    name: str
    tiles: Tuple[Tuple[Tile, ...], ...]
    width: int = field(init=False)
    height: int = field(init=False)
    doorway_offsets: Tuple[Tuple[int, ...], ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        tiles = self.tiles
        if not tiles or not tiles[0]:
            raise InvalidTemplate(f"Room '{self.name}' has zero width or height")
        width = len(tiles[0])
        for y, row in enumerate(tiles):
            if len(row) != width:
                raise InvalidTemplate(
                    f"Room '{self.name}' is not rectangular: row {y} has {len(row)} tiles, expected {width}"
                )
        height = len(tiles)
        north = tuple(x for x, t in enumerate(tiles[0]) if t.is_empty)
        east = tuple(y for y, row in enumerate(tiles) if row[width - 1].is_empty)
        south = tuple(x for x, t in enumerate(tiles[height - 1]) if t.is_empty)
        west = tuple(y for y, row in enumerate(tiles) if row[0].is_empty)
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        object.__setattr__(self, "doorway_offsets", (north, east, south, west))

    @classmethod
    def from_rows(cls, rows: Sequence[str], name: str = "room") -> "RoomTemplate":
        grid = []
        for y, row in enumerate(rows):
            if not isinstance(row, str):
                raise InvalidTemplate(f"Room '{name}' row {y} must be a string, got {type(row).__name__}")
            try:
                grid.append(tuple(_SYMBOLS[ch] for ch in row))
            except KeyError as exc:
                raise InvalidTemplate(f"Room '{name}' row {y} has unknown tile symbol {exc.args[0]!r}") from None
        return cls(name=name, tiles=tuple(grid))

    def doorways(self, direction: Direction) -> Tuple[int, ...]:
        return self.doorway_offsets[direction]

    def place(self, position: Point) -> "Placement":
        return Placement(self, Point(position.x, position.y))

    def to_str_lines(self) -> list[str]:
        return ["".join(t.value for t in row) for row in self.tiles]


@dataclass(frozen=True)
class Placement:
    """A room template anchored by its top-left corner."""

    template: RoomTemplate
    position: Point

    @property
    def width(self) -> int:
        return self.template.width

    @property
    def height(self) -> int:
        return self.template.height

    @property
    def tiles(self) -> Tuple[Tuple[Tile, ...], ...]:
        return self.template.tiles

    @property
    def rect(self) -> Rect:
        return Rect.from_size(self.position, self.template.width, self.template.height)

    def cells(self) -> Iterator[Tuple[int, int, Tile]]:
        """Yield ``(x, y, tile)`` in absolute coordinates, row by row."""
        px, py = self.position
        for dy, row in enumerate(self.template.tiles):
            for dx, tile in enumerate(row):
                yield px + dx, py + dy, tile


@dataclass(frozen=True)
class RoomCatalog:
    """The start room plus the ordered set of shapes new rooms are drawn from."""

    start: RoomTemplate
    rooms: Tuple[RoomTemplate, ...]

    def __post_init__(self) -> None:
        if not self.rooms:
            raise InvalidTemplate("A room catalog needs at least one room template")

    def __len__(self) -> int:
        return len(self.rooms)

    def __getitem__(self, index: int) -> RoomTemplate:
        return self.rooms[index]


START_ROOM_ROWS = (
    "..........",
    "..........",
    ".###.####.",
    ".##....##.",
    ".#.....#..",
    ".#.....#..",
    ".#.....#..",
    ".##....#..",
    ".###...##.",
    "####..####",
)

BUILTIN_ROOM_ROWS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("east-west-hall", ("###", "...", "###")),
    ("zigzag-a", (".##", "...", "##.")),
    ("zigzag-b", ("##.", "...", ".##")),
    ("north-south-hall", ("#.#", "#.#", "#.#")),
    ("s-bend", ("..#", "#.#", "#..")),
    ("chimney", ("....", "#...", "#..#", "#.##", "#.##", "#.##", "####")),
    ("crossing", (".....###", "###..###", "#......#", "###..###")),
    ("comb", (".#.#.#.#.", ".#######.", ".#.#.#.#.")),
    ("overhang", ("........", "########", ".######.", ".##..##.")),
    ("pillared-hall", (
        ".........",
        ".#######.",
        ".#.#.#.#.",
        ".#######.",
        ".#.#.#.#.",
        ".#######.",
    )),
    ("slope", (
        "##.......",
        "#....#...",
        "....###..",
        ".....###.",
        ".....####",
        "...######",
    )),
)


def _build_default_catalog() -> RoomCatalog:
    start = RoomTemplate.from_rows(START_ROOM_ROWS, name="start")
    rooms = tuple(RoomTemplate.from_rows(rows, name=name) for name, rows in BUILTIN_ROOM_ROWS)
    logger.debug("Built default room catalog with %d templates", len(rooms))
    return RoomCatalog(start=start, rooms=rooms)


DEFAULT_CATALOG = _build_default_catalog()
