import random
import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from dungeon_explorer.generator import MapGenerator  # noqa: E402


def run_to_completion(gen: MapGenerator, limit: int = 100_000):
    """Drain a generator, failing loudly instead of hanging if it never ends."""
    out = []
    for placement in gen:
        out.append(placement)
        assert len(out) <= limit, "generator did not terminate"
    return out


@pytest.fixture
def small_map():
    gen = MapGenerator(80, 60, random.Random(1234))
    return gen, run_to_completion(gen)


@pytest.fixture
def drain():
    return run_to_completion
