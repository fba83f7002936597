from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'caverns_target': 0,
        'caverns_placed': 0,
        'rooms_rectangular': 0,
        'rooms_compact': 0,
        'rooms_rejected': 0,
        'tunnels_mst': 0,
        'tunnels_extra': 0,
        'repairs_performed': 0,
        'dead_ends_pruned': 0,
        'prune_passes': 0,
        'border_tiles_sealed': 0,
        'orphan_walls_removed': 0,
        'tiles_floor': 0,
        'tiles_wall': 0,
        'runtime_ms': 0,
        'phase_ms': {},
    }
