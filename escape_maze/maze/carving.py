"""Perfect-maze carving via randomized depth-first backtracking.

Node cells sit at odd/odd coordinates, passage cells have exactly one odd
coordinate. Carving starts at (1,1) and visits every node once, knocking out
the passage between a node and each unvisited neighbour, so the result is a
spanning tree over nodes (exactly one simple path between any two).
"""
from __future__ import annotations

import random
from typing import List

from .cells import Grid
from .tiles import FLOOR, WALL

# Step-2 moves landing on the next node cell: up, down, left, right
NODE_STEPS = ((0, -2), (0, 2), (-2, 0), (2, 0))


def init_grid(width: int, height: int) -> Grid:
    return [[WALL for _ in range(height)] for _ in range(width)]


def is_node_cell(x: int, y: int) -> bool:
    return x % 2 == 1 and y % 2 == 1


def is_passage_cell(x: int, y: int) -> bool:
    return (x % 2 == 0) != (y % 2 == 0)


def manhattan(a, b) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _shuffled_steps(rng: random.Random) -> List[tuple]:
    steps = list(NODE_STEPS)
    rng.shuffle(steps)
    return steps


def carve_passages(grid: Grid, start_x: int, start_y: int, rng: random.Random) -> None:
    """Carve in place from (start_x, start_y).

    Each stack frame holds a node and its remaining shuffled directions, which
    reproduces the visiting order of the plain recursive formulation without
    being bound by the interpreter's recursion limit.
    """
    width = len(grid)
    height = len(grid[0])
    grid[start_x][start_y] = FLOOR
    stack = [(start_x, start_y, iter(_shuffled_steps(rng)))]
    while stack:
        x, y, steps = stack[-1]
        for dx, dy in steps:
            nx, ny = x + dx, y + dy
            if 0 < nx < width - 1 and 0 < ny < height - 1 and grid[nx][ny] == WALL:
                grid[x + dx // 2][y + dy // 2] = FLOOR
                grid[nx][ny] = FLOOR
                stack.append((nx, ny, iter(_shuffled_steps(rng))))
                break
        else:
            stack.pop()


def carve_maze(width: int, height: int, rng: random.Random) -> Grid:
    grid = init_grid(width, height)
    carve_passages(grid, 1, 1, rng)
    return grid


__all__ = [
    "NODE_STEPS",
    "init_grid",
    "is_node_cell",
    "is_passage_cell",
    "manhattan",
    "carve_passages",
    "carve_maze",
]
