from __future__ import annotations

import dataclasses
import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 728
DEFAULT_TICK_RATE = 60.0


def _as_bool(value: Any) -> bool:
    """Interpret common truthy/falsey values into a bool.

    Accepts: True/False, 1/0, "true"/"false", "yes"/"no", "on"/"off" (case-insensitive),
    non-empty strings evaluate to True if not matched otherwise.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in {"1", "true", "yes", "y", "on"}:
            return True
        if v in {"0", "false", "no", "n", "off"}:
            return False
        return True
    return bool(value)


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


ENV_MAPPING: Dict[str, Tuple[str, Callable[[Any], Any]]] = {
    "DX_WIDTH": ("width", int),
    "DX_HEIGHT": ("height", int),
    "DX_FULLSCREEN": ("fullscreen", _as_bool),
    "DX_DARK_MODE": ("dark_mode", _as_bool),
    "DX_RESTART": ("restart", _as_bool),
    "DX_SEED": ("seed", _optional_str),
    "DX_TILE_PX": ("tile_px", int),
    "DX_TICK_RATE": ("tick_rate", float),
    "DX_CATALOG": ("catalog_path", _optional_str),
}


@dataclass
class Settings:
    """Runtime settings for the cavern screensaver.

    Settings are assembled from, lowest to highest precedence:
    - the defaults below
    - a TOML file (env DX_SETTINGS_FILE, or an explicit path)
    - environment variables (prefix: DX_)
    - explicit overrides, normally the parsed command line

    ``width``/``height`` are the generation bounds in tiles; with the default
    ``tile_px`` of 1 they are also the window size in pixels.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    fullscreen: bool = False
    dark_mode: bool = False
    restart: bool = False
    seed: Optional[str] = None
    tile_px: int = 1
    tick_rate: float = DEFAULT_TICK_RATE
    catalog_path: Optional[str] = None

    def validate(self) -> None:
        """Validate and normalize settings to safe values."""
        if self.width <= 0 or self.height <= 0:
            logger.warning(
                "Invalid generation size %sx%s; resetting to %sx%s",
                self.width,
                self.height,
                DEFAULT_WIDTH,
                DEFAULT_HEIGHT,
            )
            self.width, self.height = DEFAULT_WIDTH, DEFAULT_HEIGHT
        if self.tile_px <= 0:
            logger.warning("Invalid tile size %s; resetting to 1", self.tile_px)
            self.tile_px = 1
        if self.tick_rate <= 0:
            logger.warning("Invalid tick rate %s; resetting to %s", self.tick_rate, DEFAULT_TICK_RATE)
            self.tick_rate = DEFAULT_TICK_RATE
        self.fullscreen = bool(self.fullscreen)
        self.dark_mode = bool(self.dark_mode)
        self.restart = bool(self.restart)
        self.seed = _optional_str(self.seed)
        self.catalog_path = _optional_str(self.catalog_path)

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Settings":
        allowed = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - allowed)
        if unknown:
            logger.warning("Ignoring unknown settings keys: %s", ", ".join(unknown))
        obj = cls(**{k: v for k, v in data.items() if k in allowed})
        obj.validate()
        return obj

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        env = os.environ if env is None else env
        out: Dict[str, Any] = {}
        for env_key, (field_name, caster) in ENV_MAPPING.items():
            if env_key in env and env[env_key] != "":
                try:
                    out[field_name] = caster(env[env_key])
                except ValueError as exc:
                    logger.error("Invalid env for %s=%r: %s", env_key, env[env_key], exc)
        return out

    @classmethod
    def from_toml_file(cls, path: Path) -> Dict[str, Any]:
        """Read settings from TOML, either top-level keys or [generation]/[window] tables."""
        if not path.exists():
            logger.debug("Settings file not found: %s", path)
            return {}
        try:
            with path.open("rb") as f:
                doc = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.error("Failed to read settings TOML %s: %s", path, exc)
            return {}
        flat: Dict[str, Any] = {}
        for section in ("generation", "window"):
            if isinstance(doc.get(section), dict):
                flat.update(doc[section])
        for k, v in doc.items():
            if not isinstance(v, dict):
                flat[k] = v
        casters = {field_name: caster for field_name, caster in ENV_MAPPING.values()}
        out: Dict[str, Any] = {}
        for k, v in flat.items():
            if k not in casters:
                out[k] = v
                continue
            try:
                out[k] = casters[k](v)
            except (TypeError, ValueError) as exc:
                logger.error("Invalid value in %s for %s=%r: %s", path, k, v, exc)
        return out

    @classmethod
    def discover_config_path(cls, env: Optional[Mapping[str, str]] = None) -> Optional[Path]:
        env = os.environ if env is None else env
        env_path = env.get("DX_SETTINGS_FILE")
        if env_path:
            return Path(env_path).expanduser().resolve()
        return None

    @classmethod
    def from_sources(
        cls,
        *,
        env: Optional[Mapping[str, str]] = None,
        file_path: Optional[Path | str] = None,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> "Settings":
        data: Dict[str, Any] = {}
        if file_path is not None:
            chosen_path: Optional[Path] = Path(file_path).expanduser().resolve()
        else:
            chosen_path = cls.discover_config_path(env)
        if chosen_path is not None:
            data.update(cls.from_toml_file(chosen_path))
        data.update(cls.from_env(env))
        if overrides:
            data.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_dict(data)
