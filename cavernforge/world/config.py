import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class WorldConfig:
    width: int = 200
    height: int = 120
    min_caverns: int = 30
    max_caverns: int = 45
    min_cavern_distance: int = 8
    max_attempts: int = 5000
    rectangular_chance: float = 0.7
    rect_width: Tuple[int, int] = (5, 12)
    rect_height: Tuple[int, int] = (5, 10)
    compact_width: Tuple[int, int] = (5, 9)
    compact_height: Tuple[int, int] = (5, 7)
    extra_tunnel_probability: float = 0.15
    short_tunnel_distance: int = 8
    enable_metrics: bool = True

    def __post_init__(self):
        if self.width < 7 or self.height < 7:
            raise ValueError(f"world must be at least 7x7, got {self.width}x{self.height}")
        if self.min_caverns < 0 or self.min_caverns > self.max_caverns:
            raise ValueError(f"invalid cavern range {self.min_caverns}..{self.max_caverns}")
        if self.max_attempts <= 0:
            raise ValueError("max_attempts must be positive")
        for name in ("rectangular_chance", "extra_tunnel_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        for name in ("rect_width", "rect_height", "compact_width", "compact_height"):
            lo, hi = getattr(self, name)
            if lo < 1 or lo > hi:
                raise ValueError(f"invalid {name} range {lo}..{hi}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WorldConfig":
        """Build a config from ``WORLD_*`` environment variables, defaults elsewhere."""
        env = os.environ if environ is None else environ
        kwargs = {}
        int_keys = {
            "WORLD_WIDTH": "width",
            "WORLD_HEIGHT": "height",
            "WORLD_MIN_CAVERNS": "min_caverns",
            "WORLD_MAX_CAVERNS": "max_caverns",
        }
        for env_key, attr in int_keys.items():
            if env.get(env_key):
                kwargs[attr] = int(env[env_key])
        if env.get("WORLD_EXTRA_TUNNEL_PROBABILITY"):
            kwargs["extra_tunnel_probability"] = float(env["WORLD_EXTRA_TUNNEL_PROBABILITY"])
        if "WORLD_ENABLE_GENERATION_METRICS" in env:
            val = env.get("WORLD_ENABLE_GENERATION_METRICS", "").lower()
            kwargs["enable_metrics"] = val not in {"0", "false", "no", ""}
        return cls(**kwargs)


__all__ = ["WorldConfig"]
