"""Grid reachability primitives.

Breadth-first search over 4-neighbour adjacency with a single policy switch:
``doors_open`` decides whether DOOR tiles are passable. WALL tiles never are.

These are used while the generator validates intermediate grids and at
runtime by movement checks (fed a grid reflecting live door state, see
``MazeData.grid_with_door_state``). Nothing here mutates the grid, and
start/end positions are trusted to be in bounds.
"""
from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Set

from .cells import Grid, GridPosition
from .tiles import DOOR, WALL

# Expansion order fixes tie-breaking between equal-length paths: up, down, left, right.
DIRECTIONS = ((0, -1), (0, 1), (-1, 0), (1, 0))


def neighbors(pos) -> List[GridPosition]:
    x, y = pos
    return [GridPosition(x + dx, y + dy) for dx, dy in DIRECTIONS]


def is_passable(tile: str, doors_open: bool = False) -> bool:
    if tile == WALL:
        return False
    if tile == DOOR:
        return doors_open
    return True


def _expand(grid: Grid, pos, doors_open: bool):
    w = len(grid)
    h = len(grid[0])
    for nxt in neighbors(pos):
        if 0 <= nxt.x < w and 0 <= nxt.y < h and is_passable(grid[nxt.x][nxt.y], doors_open):
            yield nxt


def path_exists(grid: Grid, start, end, doors_open: bool = False) -> bool:
    start = GridPosition(*start)
    end = GridPosition(*end)
    q = deque([start])
    seen = {start}
    while q:
        cur = q.popleft()
        if cur == end:
            return True
        for nxt in _expand(grid, cur, doors_open):
            if nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return False


# Alias kept for movement code that reads better as a reachability question.
is_reachable = path_exists


def find_path(grid: Grid, start, end, doors_open: bool = False) -> Optional[List[GridPosition]]:
    """Shortest path from start to end inclusive of both, or None if unreachable."""
    start = GridPosition(*start)
    end = GridPosition(*end)
    q = deque([start])
    parent: Dict[GridPosition, Optional[GridPosition]] = {start: None}
    while q:
        cur = q.popleft()
        if cur == end:
            path = []
            node: Optional[GridPosition] = cur
            while node is not None:
                path.append(node)
                node = parent[node]
            path.reverse()
            return path
        for nxt in _expand(grid, cur, doors_open):
            if nxt not in parent:
                parent[nxt] = cur
                q.append(nxt)
    return None


def get_reachable_positions(grid: Grid, start, doors_open: bool = False) -> Set[GridPosition]:
    return set(bfs_distances(grid, start, doors_open))


def bfs_distances(grid: Grid, start, doors_open: bool = False) -> Dict[GridPosition, int]:
    """BFS layer (edge count from start) of every reachable cell, start included at 0."""
    start = GridPosition(*start)
    dist = {start: 0}
    q = deque([start])
    while q:
        cur = q.popleft()
        for nxt in _expand(grid, cur, doors_open):
            if nxt not in dist:
                dist[nxt] = dist[cur] + 1
                q.append(nxt)
    return dist


__all__ = [
    "DIRECTIONS",
    "neighbors",
    "is_passable",
    "path_exists",
    "is_reachable",
    "find_path",
    "get_reachable_positions",
    "bfs_distances",
]
