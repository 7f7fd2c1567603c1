from __future__ import annotations

import dataclasses
import json
import logging
import os
import sys
from dataclasses import dataclass
from typing import Callable, List, Optional, TextIO

from .catalog import load_catalog
from .config import Settings
from .generator import MapGenerator
from .render import RGB, dirt_colour, placement_rgb, render_ascii, session_colour
from .rng import SeedBank
from .rooms import Placement, RoomCatalog

logger = logging.getLogger(__name__)

WINDOW_TITLE = "dungeon-explorer"


@dataclass(frozen=True)
class Frame:
    placement: Placement
    colour: RGB
    session: int


class ScreensaverSession:
    """Drives generation one placement per tick, restarting when asked to.

    Each session (the first map and every restart) draws its layout from its own
    derived random source, so session N looks the same for a given seed
    no matter how the earlier sessions were displayed.
    """

    def __init__(
        self,
        settings: Settings,
        catalog: Optional[RoomCatalog] = None,
        seeds: Optional[SeedBank] = None,
    ) -> None:
        self.settings = settings
        self.catalog = catalog if catalog is not None else load_catalog(settings.catalog_path)
        self.seeds = seeds if seeds is not None else SeedBank.from_seed(settings.seed)
        self.session = 0
        self.tick_count = 0
        self.on_restart: Optional[Callable[[int], None]] = None
        self._colour_rng = self.seeds.colour_rng()
        self.generator = self._new_generator()
        logger.info(
            "Session %d started (%dx%d, seed=%s)",
            self.session,
            settings.width,
            settings.height,
            self.seeds.seed,
        )

    def _new_generator(self) -> MapGenerator:
        return MapGenerator(
            self.settings.width,
            self.settings.height,
            self.seeds.session_rng(self.session),
            catalog=self.catalog,
        )

    @property
    def finished(self) -> bool:
        """True once the current map is complete and no restart will follow."""
        return self.generator.exhausted and not self.settings.restart

    def tick(self) -> Optional[Frame]:
        """Advance one placement. Returns None when nothing new was produced."""
        self.tick_count = (self.tick_count + 1) % 255
        placement = self.generator.step()
        if placement is not None:
            colour = session_colour(self.tick_count, self._colour_rng.randrange(256))
            return Frame(placement, colour, self.session)
        if self.settings.restart:
            self.restart()
        return None

    def restart(self) -> None:
        self.session += 1
        logger.info("Map complete; restarting as session %d", self.session)
        self.generator = self._new_generator()
        if self.on_restart is not None:
            self.on_restart(self.session)


def _arcade_available() -> bool:
    try:
        import arcade  # noqa: F401
        return True
    except Exception:
        return False


def run_gui(settings: Settings, size_from_display: bool = False) -> int:  # pragma: no cover - requires a display
    """Show generation in an Arcade window, one room per update.

    Args:
        settings: Generation and window settings.
        size_from_display: In fullscreen, size the map to the desktop instead of settings.

    Returns:
        Process exit code (0 on success).
    """
    if not _arcade_available():
        logger.warning("Arcade not available; falling back to headless mode")
        return run_headless(settings)

    import arcade
    from PIL import Image

    if settings.fullscreen and size_from_display:
        display_w, display_h = arcade.get_display_size()
        settings = dataclasses.replace(
            settings,
            width=max(1, display_w // settings.tile_px),
            height=max(1, display_h // settings.tile_px),
        )

    session = ScreensaverSession(settings)
    dirt = dirt_colour(settings.dark_mode)
    scale = settings.tile_px
    window_height = settings.height * scale

    class CavernWindow(arcade.Window):
        def __init__(self) -> None:
            super().__init__(
                settings.width * scale,
                window_height,
                title=WINDOW_TITLE,
                fullscreen=settings.fullscreen,
                update_rate=1.0 / settings.tick_rate,
            )
            self.background_color = dirt
            self.rooms = arcade.SpriteList()
            session.on_restart = self._on_restart

        def _on_restart(self, _session: int) -> None:
            self.rooms.clear()

        def on_update(self, delta_time: float):
            frame = session.tick()
            if frame is None:
                return
            p = frame.placement
            image = Image.frombytes("RGB", (p.width, p.height), placement_rgb(p, frame.colour, dirt))
            texture = arcade.Texture(
                image,
                hash=f"room-{frame.session}-{p.position.x}-{p.position.y}",
                hit_box_algorithm=arcade.hitbox.algo_bounding_box,
            )
            sprite = arcade.Sprite(
                texture,
                scale=scale,
                center_x=(p.position.x + p.width / 2) * scale,
                center_y=window_height - (p.position.y + p.height / 2) * scale,
            )
            self.rooms.append(sprite)

        def on_draw(self):
            self.clear()
            self.rooms.draw(pixelated=True)

        def on_key_press(self, symbol: int, modifiers: int):
            if symbol == arcade.key.ESCAPE:
                self.close()

    window = CavernWindow()
    try:
        logger.info("Launching Arcade window")
        arcade.run()
        logger.info("Arcade loop finished after %d sessions", session.session + 1)
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1
    finally:
        try:
            window.close()
        except Exception:
            pass


def run_headless(
    settings: Settings,
    max_steps: Optional[int] = None,
    ascii_out: bool = False,
    stream: Optional[TextIO] = None,
) -> int:
    """Run generation without a window and print a JSON summary.

    Args:
        settings: Generation settings.
        max_steps: Stop after N ticks; None runs until the map is complete.
        ascii_out: Also print the final map as text.
        stream: Where to write output; defaults to stdout.
    """
    out = stream if stream is not None else sys.stdout
    if settings.restart and max_steps is None:
        # Restarting forever only makes sense with a window to close.
        logger.warning("Ignoring restart in headless mode without a step limit")
        settings = dataclasses.replace(settings, restart=False)

    try:
        session = ScreensaverSession(settings)
        placements: List[Placement] = []
        session.on_restart = lambda _n: placements.clear()
        steps = 0
        while max_steps is None or steps < max_steps:
            if session.finished:
                break
            frame = session.tick()
            steps += 1
            if frame is not None:
                placements.append(frame.placement)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130

    if ascii_out:
        for line in render_ascii(placements, settings.width, settings.height):
            out.write(line.rstrip() + "\n")
    summary = {
        "seed": session.seeds.seed,
        "width": settings.width,
        "height": settings.height,
        "sessions": session.session + 1,
        "ticks": steps,
        "placements": len(placements),
        "complete": session.generator.exhausted,
        "index_depth": session.generator.index.depth(),
        "stats": session.generator.stats.as_dict(),
    }
    out.write(json.dumps(summary, indent=2, sort_keys=True) + "\n")
    return 0


def run_auto(settings: Settings, max_steps: Optional[int] = None, size_from_display: bool = False) -> int:
    """Run GUI if available, else headless. DX_HEADLESS=1 forces headless."""
    if os.getenv("DX_HEADLESS") == "1":
        return run_headless(settings, max_steps=max_steps)
    return run_gui(settings, size_from_display=size_from_display)
