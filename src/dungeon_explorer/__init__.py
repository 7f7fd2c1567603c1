"""
Dungeon Explorer package root.

Incrementally grows a tile-based cavern by attaching rectangular rooms to each
other's doorways. The pure generation core (geometry, spatial index, rooms,
generator) has no rendering dependencies; Arcade is only touched by ``app``.
"""
from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    CatalogError,
    DungeonExplorerError,
    IndexOverlapError,
    InvalidRect,
    InvalidTemplate,
)
from .generator import GenerationStats, MapGenerator
from .geometry import Point, Rect
from .rooms import DEFAULT_CATALOG, Direction, Placement, RoomCatalog, RoomTemplate, Tile
from .spatial import SpatialIndex

try:
    __version__ = version("dungeon-explorer")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "CatalogError",
    "DEFAULT_CATALOG",
    "Direction",
    "DungeonExplorerError",
    "GenerationStats",
    "IndexOverlapError",
    "InvalidRect",
    "InvalidTemplate",
    "MapGenerator",
    "Placement",
    "Point",
    "Rect",
    "RoomCatalog",
    "RoomTemplate",
    "SpatialIndex",
    "Tile",
]
