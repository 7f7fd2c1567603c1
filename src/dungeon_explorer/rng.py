"""Reproducible random streams for the screensaver.

One textual seed fans out into a layout stream per session (the first map and
every restart) and a single doorway colour stream. Printing the seed is enough
to replay a run with ``--seed``.
"""
from __future__ import annotations

import logging
import random
import secrets
from dataclasses import dataclass
from typing import Optional, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedBank:
    seed: str

    @classmethod
    def from_seed(cls, raw: Optional[Union[int, str]] = None) -> "SeedBank":
        """Build a bank from a CLI/env seed; blank or missing picks a random one."""
        if isinstance(raw, bool) or not isinstance(raw, (int, str, type(None))):
            raise TypeError(f"Unsupported seed type: {type(raw).__name__}")
        text = "" if raw is None else str(raw).strip()
        if not text:
            text = secrets.token_hex(8)
            logger.info("No seed given; using random seed %s", text)
        return cls(text)

    def session_rng(self, session: int) -> random.Random:
        """Layout stream for restart number ``session`` (0 is the first map)."""
        if session < 0:
            raise ValueError(f"Session number must be non-negative, got {session}")
        return random.Random(f"{self.seed}/session/{session}")

    def colour_rng(self) -> random.Random:
        return random.Random(f"{self.seed}/colour")
