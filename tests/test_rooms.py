import pytest

from dungeon_explorer.exceptions import InvalidTemplate
from dungeon_explorer.geometry import Point, Rect
from dungeon_explorer.rooms import (
    DEFAULT_CATALOG,
    Direction,
    Placement,
    RoomCatalog,
    RoomTemplate,
    Tile,
)


def test_doorways_come_from_border_tiles():
    room = RoomTemplate.from_rows(["..#", "#.#", "#.."], name="s-bend")
    assert (room.width, room.height) == (3, 3)
    assert room.doorways(Direction.NORTH) == (0, 1)
    assert room.doorways(Direction.EAST) == (2,)
    assert room.doorways(Direction.SOUTH) == (1, 2)
    assert room.doorways(Direction.WEST) == (0,)


def test_room_without_side_doorways():
    hall = RoomTemplate.from_rows(["#.#", "#.#", "#.#"])
    assert hall.doorways(Direction.EAST) == ()
    assert hall.doorways(Direction.WEST) == ()
    assert hall.doorways(Direction.NORTH) == (1,)


@pytest.mark.parametrize(
    "rows",
    [
        [],
        [""],
        ["..", "..."],
        [".x."],
    ],
)
def test_malformed_templates_rejected(rows):
    with pytest.raises(InvalidTemplate):
        RoomTemplate.from_rows(rows)


def test_empty_catalog_rejected():
    with pytest.raises(InvalidTemplate):
        RoomCatalog(start=DEFAULT_CATALOG.start, rooms=())


def test_direction_opposites():
    assert Direction.NORTH.opposite is Direction.SOUTH
    assert Direction.EAST.opposite is Direction.WEST
    assert Direction.SOUTH.opposite is Direction.NORTH
    assert Direction.WEST.opposite is Direction.EAST


def test_default_catalog_shape():
    assert len(DEFAULT_CATALOG) == 11
    start = DEFAULT_CATALOG.start
    assert (start.width, start.height) == (10, 10)
    assert start.doorways(Direction.SOUTH) == (4, 5)
    assert start.doorways(Direction.NORTH) == tuple(range(10))
    for room in DEFAULT_CATALOG.rooms:
        assert room.to_str_lines()
        assert any(room.doorways(d) for d in Direction), room.name


def test_placement_exposes_template_and_rect():
    room = DEFAULT_CATALOG[0]
    placement = room.place(Point(7, -3))
    assert isinstance(placement, Placement)
    assert placement.template is room
    assert placement.rect == Rect(Point(7, -3), Point(10, 0))
    assert placement.tiles is room.tiles
    cells = list(placement.cells())
    assert len(cells) == room.width * room.height
    assert cells[0] == (7, -3, Tile.DIRT)
    assert cells[3] == (7, -2, Tile.EMPTY)


def test_templates_are_immutable():
    room = DEFAULT_CATALOG[1]
    with pytest.raises(AttributeError):
        room.width = 99  # type: ignore[misc]
