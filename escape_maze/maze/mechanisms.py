"""Door and lever placement.

Levers go first, on node cells reachable from spawn. Doors are then tried one
at a time on passage cells: each candidate is written as DOOR, every lever is
re-checked for reachability with doors closed, and the tile is reverted if any
lever was cut off. Critical-path passages are tried first so the exit ends up
gated; remaining doors land on side passages.

All functions mutate ``grid`` in place and return None when the attempt should
be discarded.
"""
from __future__ import annotations

import random
from typing import Any, Dict, List, Optional, Tuple

from .carving import is_passage_cell, manhattan
from .cells import Door, Grid, GridPosition, Lever
from .config import MazeConfig
from .pathfinding import find_path, get_reachable_positions, path_exists
from .tiles import DOOR, FLOOR, LEVER


def _clear_of_endpoints(pos, spawn, exit_pos, clearance: int) -> bool:
    return manhattan(pos, spawn) > clearance and manhattan(pos, exit_pos) > clearance


def find_critical_path_passages(grid: Grid, spawn, exit_pos, clearance: int = 2) -> List[GridPosition]:
    """Passage cells on the shortest spawn->exit route (doors ignored), away from both ends."""
    path = find_path(grid, spawn, exit_pos, doors_open=False)
    if not path:
        return []
    return [p for p in path if is_passage_cell(p.x, p.y) and _clear_of_endpoints(p, spawn, exit_pos, clearance)]


def find_passage_positions(grid: Grid, spawn, exit_pos, clearance: int = 2) -> List[GridPosition]:
    """Every carved interior passage cell away from spawn and exit."""
    w = len(grid)
    h = len(grid[0])
    positions = []
    for y in range(1, h - 1):
        for x in range(1, w - 1):
            if grid[x][y] != FLOOR or not is_passage_cell(x, y):
                continue
            if _clear_of_endpoints((x, y), spawn, exit_pos, clearance):
                positions.append(GridPosition(x, y))
    return positions


def find_lever_positions(grid: Grid, spawn, exit_pos) -> List[GridPosition]:
    """Carved node cells other than spawn and exit."""
    w = len(grid)
    h = len(grid[0])
    positions = []
    for y in range(1, h - 1, 2):
        for x in range(1, w - 1, 2):
            if grid[x][y] != FLOOR:
                continue
            if (x, y) == tuple(spawn) or (x, y) == tuple(exit_pos):
                continue
            positions.append(GridPosition(x, y))
    return positions


def _levers_reachable(grid: Grid, spawn, levers: List[Lever]) -> bool:
    return all(path_exists(grid, spawn, lever.position, doors_open=False) for lever in levers)


def _try_place_door(grid: Grid, pos: GridPosition, spawn, levers: List[Lever], metrics: Dict[str, Any]) -> bool:
    original = grid[pos.x][pos.y]
    grid[pos.x][pos.y] = DOOR
    if _levers_reachable(grid, spawn, levers):
        return True
    grid[pos.x][pos.y] = original
    metrics['doors_reverted'] = metrics.get('doors_reverted', 0) + 1
    return False


def place_mechanisms_safely(
    grid: Grid,
    spawn,
    exit_pos,
    config: MazeConfig,
    rng: random.Random,
    metrics: Optional[Dict[str, Any]] = None,
) -> Optional[Tuple[List[Door], List[Lever]]]:
    if metrics is None:
        metrics = {}

    def reject(reason: str):
        key = f'rejected_{reason}'
        metrics[key] = metrics.get(key, 0) + 1
        return None

    clearance = config.endpoint_clearance
    critical = find_critical_path_passages(grid, spawn, exit_pos, clearance)
    if len(critical) < config.min_doors_on_path:
        return reject('critical_path')

    critical_keys = set(critical)
    secondary = [p for p in find_passage_positions(grid, spawn, exit_pos, clearance) if p not in critical_keys]

    candidates = find_lever_positions(grid, spawn, exit_pos)
    rng.shuffle(candidates)
    if len(candidates) < config.lever_count:
        return reject('lever_sites')

    reachable = get_reachable_positions(grid, spawn, doors_open=False)
    candidates = [p for p in candidates if p in reachable]
    if len(candidates) < config.lever_count:
        return reject('lever_reach')

    levers: List[Lever] = []
    for i, pos in enumerate(candidates[: config.lever_count]):
        levers.append(Lever(id=i, x=pos.x, y=pos.y))
        grid[pos.x][pos.y] = LEVER

    doors: List[Door] = []

    # Pass A: gate the critical path
    on_path = 0
    rng.shuffle(critical)
    for pos in critical:
        if on_path >= config.min_doors_on_path or len(doors) >= config.door_count:
            break
        if _try_place_door(grid, pos, spawn, levers, metrics):
            doors.append(Door(id=len(doors), x=pos.x, y=pos.y))
            on_path += 1
    if on_path < config.min_doors_on_path:
        return reject('path_doors')

    # Pass B: top up with side-passage doors; running short here is fine
    rng.shuffle(secondary)
    for pos in secondary:
        if len(doors) >= config.door_count:
            break
        if _try_place_door(grid, pos, spawn, levers, metrics):
            doors.append(Door(id=len(doors), x=pos.x, y=pos.y))

    # Lever i drives door i; surplus levers stay unlinked
    for lever, door in zip(levers, doors):
        lever.linked_door_ids = [door.id]

    if not path_exists(grid, spawn, exit_pos, doors_open=True):
        return reject('exit_unreachable')
    return doors, levers


__all__ = [
    "find_critical_path_passages",
    "find_passage_positions",
    "find_lever_positions",
    "place_mechanisms_safely",
]
