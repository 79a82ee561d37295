# Tile constants centralized for modular imports
WALL = "W"
FLOOR = "F"
DOOR = "D"  # passage cell gated by a lever; blocks movement unless treated as open
LEVER = "L"  # floor node carrying a lever entity
EXIT = "E"

WALKABLE = {FLOOR, LEVER, EXIT}

__all__ = ["WALL", "FLOOR", "DOOR", "LEVER", "EXIT", "WALKABLE"]
