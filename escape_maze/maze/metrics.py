from typing import Dict

from .tiles import DOOR, EXIT, FLOOR, LEVER, WALL


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'attempts': 0,
        'fallback': False,
        'rejected_disconnected': 0,
        'rejected_critical_path': 0,
        'rejected_lever_sites': 0,
        'rejected_lever_reach': 0,
        'rejected_path_doors': 0,
        'rejected_exit_unreachable': 0,
        'rejected_validation': 0,
        'doors_reverted': 0,
        'runtime_ms': 0.0,
    }


def tile_counts(grid) -> Dict[str, int]:
    counts = {WALL: 0, FLOOR: 0, DOOR: 0, LEVER: 0, EXIT: 0}
    for col in grid:
        for t in col:
            counts[t] = counts.get(t, 0) + 1
    return {
        'tiles_wall': counts[WALL],
        'tiles_floor': counts[FLOOR],
        'tiles_door': counts[DOOR],
        'tiles_lever': counts[LEVER],
        'tiles_exit': counts[EXIT],
    }
