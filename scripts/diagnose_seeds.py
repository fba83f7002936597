#!/usr/bin/env python3
"""World structural diagnostics for specific seeds.

Usage:
  python scripts/diagnose_seeds.py 42 292372 730727

If no seeds are provided as CLI args, a default list is used.
Exits with non-zero status if structural issues are detected.
"""

from __future__ import annotations

import json
import os
import sys
from typing import List

# Ensure project root on path if executed directly
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from cavernforge.world.config import WorldConfig  # noqa: E402 import after path fix
from cavernforge.world.debug_checks import issues  # noqa: E402 import after path fix
from cavernforge.world.world import World  # noqa: E402 import after path fix

DEFAULT_SEEDS = [42, 292372, 730727]


def run_for_seed(seed: int, config: WorldConfig) -> dict:
    world = World(seed=seed, config=config)
    found = issues(world)
    return {
        "seed": seed,
        "floor_tiles": world.floor_count(),
        "hash": world.content_hash(),
        "issues": found,
        "ok": all(v == 0 for v in found.values()),
    }


def main(argv: List[str]) -> int:
    seeds = [int(a) for a in argv] if argv else DEFAULT_SEEDS
    config = WorldConfig.from_env()
    results = [run_for_seed(s, config) for s in seeds]
    print(json.dumps({"results": results}, indent=2))
    # Non-zero exit if any failure
    if not all(r["ok"] for r in results):
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
