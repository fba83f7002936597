import random
from typing import List, Tuple

from .config import WorldConfig
from .grid import Position


def pick_cavern_centers(config: WorldConfig, rng: random.Random) -> Tuple[List[Position], int]:
    """Rejection-sample well separated cavern centers.

    Draws a target count, then candidate positions two tiles in from every
    edge; a candidate survives only if it is at least
    ``config.min_cavern_distance`` (Euclidean) from every accepted center.
    Stops at the target or once ``config.max_attempts`` draws are spent.
    Returns (centers, target); falling short of the target is fine.
    """
    target = rng.randint(config.min_caverns, config.max_caverns)
    min_sq = config.min_cavern_distance * config.min_cavern_distance
    centers: List[Position] = []
    attempts = 0
    while len(centers) < target and attempts < config.max_attempts:
        x = rng.randrange(2, config.width - 2)
        y = rng.randrange(2, config.height - 2)
        attempts += 1
        if any((x - c.x) ** 2 + (y - c.y) ** 2 < min_sq for c in centers):
            continue
        centers.append(Position(x, y))
    return centers, target


__all__ = ["pick_cavern_centers"]
