"""Loading room catalogs from YAML.

A catalog file names the start room and the rooms new placements are drawn
from, using the same row notation as the built-in tables::

    start:
      - ".........."
      - "####..####"
    rooms:
      - name: hall
        rows: ["###", "...", "###"]
      - ["#.#", "#.#", "#.#"]

``start`` may be omitted, in which case the built-in start room is used.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .exceptions import CatalogError
from .rooms import DEFAULT_CATALOG, RoomCatalog, RoomTemplate

logger = logging.getLogger(__name__)


def _parse_room(entry: Any, position: int) -> RoomTemplate:
    if isinstance(entry, dict):
        name = str(entry.get("name", f"room-{position}"))
        rows = entry.get("rows")
    else:
        name = f"room-{position}"
        rows = entry
    if not isinstance(rows, list):
        raise CatalogError(f"Room entry {position} must be a list of rows or a mapping with 'rows'")
    return RoomTemplate.from_rows(rows, name=name)


def parse_catalog(raw: Any) -> RoomCatalog:
    if not isinstance(raw, dict):
        raise CatalogError("Room catalog must be a mapping with a 'rooms' list")
    rooms_raw = raw.get("rooms")
    if not isinstance(rooms_raw, list) or not rooms_raw:
        raise CatalogError("Room catalog needs a non-empty 'rooms' list")
    rooms = tuple(_parse_room(entry, i) for i, entry in enumerate(rooms_raw))
    start_raw = raw.get("start")
    if start_raw is None:
        start = DEFAULT_CATALOG.start
    elif isinstance(start_raw, list):
        start = RoomTemplate.from_rows(start_raw, name="start")
    else:
        raise CatalogError("'start' must be a list of rows")
    return RoomCatalog(start=start, rooms=rooms)


def load_catalog(path: Optional[Union[str, Path]] = None) -> RoomCatalog:
    """Load a room catalog from YAML.

    If path is None, returns the built-in catalog.
    """
    if path is None:
        return DEFAULT_CATALOG
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Room catalog not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise CatalogError(f"Room catalog {p} is not valid YAML: {exc}") from exc
    catalog = parse_catalog(raw)
    logger.info("Loaded room catalog from %s (%d rooms)", p, len(catalog))
    return catalog
