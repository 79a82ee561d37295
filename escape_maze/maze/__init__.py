"""Public maze package interface.

Generation entry point, pathfinding primitives, value types and tile codes.
"""

from .cells import Door, GridPosition, Lever, MazeData, position_key
from .config import MazeConfig
from .generator import MazeGenerator, generate, normalize_dimensions
from .pathfinding import bfs_distances, find_path, get_reachable_positions, is_reachable, path_exists
from .tiles import DOOR, EXIT, FLOOR, LEVER, WALL
from .validation import find_violations, validate_maze

__all__ = [
    "Door",
    "GridPosition",
    "Lever",
    "MazeData",
    "position_key",
    "MazeConfig",
    "MazeGenerator",
    "generate",
    "normalize_dimensions",
    "path_exists",
    "is_reachable",
    "find_path",
    "get_reachable_positions",
    "bfs_distances",
    "find_violations",
    "validate_maze",
    "WALL",
    "FLOOR",
    "DOOR",
    "LEVER",
    "EXIT",
]
