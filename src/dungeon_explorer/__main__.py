from __future__ import annotations

import argparse
import logging
import os
import sys

from . import __version__
from .app import run_auto, run_gui, run_headless
from .config import Settings
from .exceptions import DungeonExplorerError
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dungeon-explorer",
        description="A nice random cavern screensaver",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-f", "--fullscreen", action="store_true", default=None, help="Activate fullscreen mode")
    parser.add_argument("-d", "--dark-mode", action="store_true", default=None, help="Draw on a black background")
    parser.add_argument(
        "-r", "--restart", action="store_true", default=None, help="Start a new map when the current one is full"
    )
    parser.add_argument("-W", "--width", type=int, default=None, help="Width of the map (requires --height)")
    parser.add_argument("-H", "--height", type=int, default=None, help="Height of the map (requires --width)")
    parser.add_argument("--seed", default=None, help="Master seed (int or text); random if omitted")
    parser.add_argument("--catalog", default=None, help="YAML room catalog to use instead of the built-in rooms")
    parser.add_argument("--config", default=None, help="TOML settings file")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Force GUI mode (Arcade)")
    mode.add_argument("--headless", action="store_true", help="Force headless mode (console)")
    parser.add_argument("--max-steps", type=int, default=None, help="Headless: stop after N ticks")
    parser.add_argument("--ascii", action="store_true", help="Headless: print the finished map as text")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if (args.width is None) != (args.height is None):
        parser.error("--width and --height must be given together")
    if args.max_steps is not None and args.max_steps < 0:
        parser.error("--max-steps must be non-negative")
    configure_logging(args.verbose)

    overrides = {
        "width": args.width,
        "height": args.height,
        "fullscreen": args.fullscreen,
        "dark_mode": args.dark_mode,
        "restart": args.restart,
        "seed": args.seed,
        "catalog_path": args.catalog,
    }
    settings = Settings.from_sources(file_path=args.config, overrides=overrides)
    size_from_display = args.width is None and "DX_WIDTH" not in os.environ

    try:
        if args.headless:
            return run_headless(settings, max_steps=args.max_steps, ascii_out=args.ascii)
        if args.gui:
            return run_gui(settings, size_from_display=size_from_display)
        return run_auto(settings, max_steps=args.max_steps, size_from_display=size_from_display)
    except (DungeonExplorerError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
