"""Randomized depth-first room placement.

The generator keeps a stack of placements whose doorways have not been tried
yet. Each step pops one, tries to attach a new room to every doorway of it, and
hands the popped placement to the caller. Accepted rooms are recorded in a
:class:`~dungeon_explorer.spatial.SpatialIndex` so later candidates can never
overlap them.
"""
from __future__ import annotations

import logging
import random
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, MutableSequence, Optional, Protocol

from .geometry import Point, Rect
from .rooms import DEFAULT_CATALOG, Direction, Placement, RoomCatalog, RoomTemplate
from .spatial import SpatialIndex

logger = logging.getLogger(__name__)

# Rooms may spill this many tiles past the nominal width/height.
BOUNDS_MARGIN = 20


class RandomSource(Protocol):
    """Anything that can shuffle a list in place; ``random.Random`` qualifies."""

    def shuffle(self, x: MutableSequence[Any]) -> None:
        ...


@dataclass
class GenerationStats:
    steps: int = 0
    placed: int = 0
    rejected_bounds: int = 0
    rejected_overlap: int = 0
    dead_ends: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


def attach_position(
    curr: Placement,
    direction: Direction,
    exit_offset: int,
    candidate: RoomTemplate,
    entrance_offset: int,
) -> Point:
    """Anchor for ``candidate`` so its ``entrance_offset`` doorway meets ``curr``'s exit.

    The candidate sits flush against the side of ``curr`` facing ``direction``
    and is shifted along that wall so both doorway cells line up.
    """
    cx, cy = curr.position
    if direction is Direction.NORTH:
        return Point(cx + exit_offset - entrance_offset, cy - candidate.height)
    if direction is Direction.EAST:
        return Point(cx + curr.width, cy + exit_offset - entrance_offset)
    if direction is Direction.SOUTH:
        return Point(cx + exit_offset - entrance_offset, cy + curr.height)
    return Point(cx - candidate.width, cy + exit_offset - entrance_offset)


class MapGenerator:
    """Pull-based producer of room placements.

    Iterate it (or call :meth:`step`) to receive placements one at a time until
    the search is exhausted. The whole output sequence is a deterministic
    function of ``rng``'s state, the bounds and the catalog.

    Usage:
        gen = MapGenerator(120, 80, random.Random(42))
        for placement in gen:
            draw(placement)
    """

    def __init__(
        self,
        width: int,
        height: int,
        rng: Optional[RandomSource] = None,
        *,
        catalog: Optional[RoomCatalog] = None,
        margin: int = BOUNDS_MARGIN,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Generation bounds must be positive, got {width}x{height}")
        if margin < 0:
            raise ValueError(f"Bounds margin must be non-negative, got {margin}")
        self.width = width
        self.height = height
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG
        self.rng: RandomSource = rng if rng is not None else random.Random()
        self._bounds = Rect(Point(0, 0), Point(width + margin, height + margin))
        self._index = SpatialIndex()
        self._stack: List[Placement] = []
        self._stats = GenerationStats()

        start = self.catalog.start
        start_pos = Point(max(0, (width - start.width) // 2), max(0, (height - start.height) // 2))
        first = start.place(start_pos)
        self._index.insert(first.rect)
        self._stack.append(first)
        self._stats.placed += 1
        logger.debug(
            "MapGenerator: %dx%d bounds, %d room templates, start room at %s",
            width,
            height,
            len(self.catalog),
            tuple(start_pos),
        )

    @property
    def bounds(self) -> Rect:
        """Region every placed room must lie within."""
        return self._bounds

    @property
    def index(self) -> SpatialIndex:
        return self._index

    @property
    def pending(self) -> int:
        return len(self._stack)

    @property
    def exhausted(self) -> bool:
        return not self._stack

    @property
    def stats(self) -> GenerationStats:
        return self._stats

    def __iter__(self) -> "MapGenerator":
        return self

    def __next__(self) -> Placement:
        placement = self.step()
        if placement is None:
            raise StopIteration
        return placement

    def step(self) -> Optional[Placement]:
        """Pop the next placement and grow the frontier from it.

        Returns None once no placements are pending; the generator stays
        exhausted from then on.
        """
        if not self._stack:
            return None
        curr = self._stack.pop()
        self._stats.steps += 1
        self._grow_from(curr)
        if not self._stack:
            logger.info(
                "MapGenerator exhausted after %d steps (%s)",
                self._stats.steps,
                ", ".join(f"{k}={v}" for k, v in self._stats.as_dict().items()),
            )
        return curr

    def _grow_from(self, curr: Placement) -> None:
        rooms = self.catalog.rooms
        indices = list(range(len(rooms)))
        directions = list(Direction)
        self.rng.shuffle(directions)
        for direction in directions:
            exits = list(curr.template.doorways(direction))
            self.rng.shuffle(exits)
            facing = direction.opposite
            for exit_offset in exits:
                self.rng.shuffle(indices)
                if not self._attach(curr, direction, facing, exit_offset, indices):
                    self._stats.dead_ends += 1

    def _attach(
        self,
        curr: Placement,
        direction: Direction,
        facing: Direction,
        exit_offset: int,
        indices: List[int],
    ) -> bool:
        rooms = self.catalog.rooms
        for i in indices:
            candidate = rooms[i]
            for entrance in candidate.doorways(facing):
                pos = attach_position(curr, direction, exit_offset, candidate, entrance)
                rect = Rect.from_size(pos, candidate.width, candidate.height)
                if not self._bounds.contains(rect):
                    self._stats.rejected_bounds += 1
                    continue
                if self._index.overlaps(rect):
                    self._stats.rejected_overlap += 1
                    continue
                self._index.insert(rect)
                self._stack.append(candidate.place(pos))
                self._stats.placed += 1
                return True
        return False
