class DungeonExplorerError(Exception):
    """Base exception for the dungeon-explorer project."""


class InvalidRect(DungeonExplorerError, ValueError):
    """Raised when a rectangle's min corner lies past its max corner."""


class InvalidTemplate(DungeonExplorerError, ValueError):
    """Raised when a room template grid is empty, ragged or uses unknown tiles."""


class CatalogError(DungeonExplorerError):
    """Raised when a room catalog file does not have the expected shape."""


class IndexOverlapError(DungeonExplorerError):
    """Raised by a checked insert when the rectangle overlaps an indexed one."""
