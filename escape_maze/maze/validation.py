"""Post-assembly solvability checks.

Re-verifies, on the finished grid, the properties mechanism placement is
meant to guarantee. A violation discards the attempt, never the whole
generation.
"""
from __future__ import annotations

from typing import List

from ..logging_utils import get_logger
from .cells import Door, Grid, Lever
from .pathfinding import path_exists

_log = get_logger("maze.validation")


def find_violations(grid: Grid, spawn, exit_pos, doors: List[Door], levers: List[Lever]) -> List[str]:
    violations = []
    for lever in levers:
        if not path_exists(grid, spawn, lever.position, doors_open=False):
            violations.append("lever_unreachable")
            break
    if not path_exists(grid, spawn, exit_pos, doors_open=True):
        violations.append("exit_unreachable")
    if doors and len(levers) < len(doors):
        violations.append("insufficient_levers")
    linked = {door_id for lever in levers for door_id in lever.linked_door_ids}
    if any(door.id not in linked for door in doors):
        violations.append("door_without_lever")
    # At least one door must actually gate the exit
    if path_exists(grid, spawn, exit_pos, doors_open=False):
        violations.append("exit_not_gated")
    return violations


def validate_maze(grid: Grid, spawn, exit_pos, doors: List[Door], levers: List[Lever]) -> bool:
    violations = find_violations(grid, spawn, exit_pos, doors, levers)
    if violations:
        _log.debug(event="maze_validation_failed", violations=",".join(violations))
        return False
    return True


__all__ = ["find_violations", "validate_maze"]
