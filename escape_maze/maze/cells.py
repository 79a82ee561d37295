"""Maze value types: positions, mechanisms and the generated maze record.

``MazeData`` is the generator's sole output. Its topology is treated as
immutable once produced; only door/lever *state* changes afterwards and that
state is owned by whoever runs the game session.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, NamedTuple, Optional

from .tiles import DOOR, FLOOR, WALKABLE

Grid = List[List[str]]


class GridPosition(NamedTuple):
    x: int
    y: int

    @property
    def key(self) -> str:
        return f"{self.x},{self.y}"


def position_key(pos) -> str:
    """Canonical ``"x,y"`` key for any (x, y) pair."""
    return f"{pos[0]},{pos[1]}"


@dataclass
class Door:
    id: int
    x: int
    y: int
    is_open: bool = False

    @property
    def position(self) -> GridPosition:
        return GridPosition(self.x, self.y)

    def to_dict(self):
        return {"id": self.id, "x": self.x, "y": self.y, "is_open": self.is_open}


@dataclass
class Lever:
    id: int
    x: int
    y: int
    is_active: bool = False
    linked_door_ids: List[int] = field(default_factory=list)

    @property
    def position(self) -> GridPosition:
        return GridPosition(self.x, self.y)

    def to_dict(self):
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "is_active": self.is_active,
            "linked_door_ids": list(self.linked_door_ids),
        }


@dataclass
class MazeData:
    grid: Grid
    explorer_spawn: GridPosition
    exit_position: GridPosition
    doors: List[Door]
    levers: List[Lever]
    width: int
    height: int
    seed: Optional[int] = None
    attempts: int = 0
    fallback: bool = False
    metrics: Dict[str, Any] = field(default_factory=dict)

    def door_at(self, x: int, y: int) -> Optional[Door]:
        for door in self.doors:
            if door.x == x and door.y == y:
                return door
        return None

    def lever_at(self, x: int, y: int) -> Optional[Lever]:
        for lever in self.levers:
            if lever.x == x and lever.y == y:
                return lever
        return None

    def is_walkable(self, x: int, y: int, doors_open: bool = False) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return False
        tile = self.grid[x][y]
        if tile == DOOR:
            return doors_open
        return tile in WALKABLE

    def grid_with_door_state(self, open_door_ids: Iterable[int]) -> Grid:
        """Copy of the grid with the given doors carved to FLOOR.

        Lets runtime callers feed live door state into the pathfinding
        primitives without touching the generated topology.
        """
        opened = set(open_door_ids)
        grid = [list(col) for col in self.grid]
        for door in self.doors:
            if door.id in opened:
                grid[door.x][door.y] = FLOOR
        return grid

    # Convenience outputs
    def to_ascii(self) -> str:
        return "\n".join("".join(self.grid[x][y] for x in range(self.width)) for y in range(self.height))

    def to_json(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "grid": ["".join(self.grid[x][y] for x in range(self.width)) for y in range(self.height)],
            "explorer_spawn": list(self.explorer_spawn),
            "exit_position": list(self.exit_position),
            "doors": [d.to_dict() for d in self.doors],
            "levers": [lv.to_dict() for lv in self.levers],
            "attempts": self.attempts,
            "fallback": self.fallback,
            "metrics": self.metrics,
        }


__all__ = ["Grid", "GridPosition", "position_key", "Door", "Lever", "MazeData"]
