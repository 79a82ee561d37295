"""Maze generation and path query API routes.

Mazes are regenerated deterministically from ``(seed, width, height)`` and the
active tunables, so clients only ever exchange seeds. Generated mazes are kept
in a small in-process cache.
"""

import hashlib
import random
import threading

from flask import Blueprint, current_app, jsonify, request

from escape_maze.logging_utils import get_logger
from escape_maze.maze import MazeConfig, MazeGenerator, find_path, normalize_dimensions

bp_maze = Blueprint("maze_api", __name__)

_log = get_logger("maze.api")

SEED_MAX_INT = 2**63 - 1

_maze_cache = {}
_maze_cache_lock = threading.Lock()


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a bounded non-negative int."""
    if payload_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, bool):
        raise ValueError("seed must be an integer or string")
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX_INT
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % SEED_MAX_INT
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX_INT
    raise ValueError("seed must be an integer or string")


def _coerce_dimension(raw, default: int, name: str) -> int:
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer") from None
    limit = current_app.config["MAZE_MAX_DIMENSION"]
    if not 3 <= value <= limit:
        raise ValueError(f"{name} must be between 3 and {limit}")
    return value


def _coerce_position(raw, width: int, height: int, name: str):
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ValueError(f"{name} must be [x, y]")
    try:
        x, y = int(raw[0]), int(raw[1])
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be [x, y]") from None
    if not (0 <= x < width and 0 <= y < height):
        raise ValueError(f"{name} is outside the {width}x{height} grid")
    return x, y


def _active_config(seed: int) -> MazeConfig:
    cfg = current_app.config
    return MazeConfig(
        door_count=cfg["MAZE_DOOR_COUNT"],
        lever_count=cfg["MAZE_LEVER_COUNT"],
        min_doors_on_path=cfg["MAZE_MIN_DOORS_ON_PATH"],
        max_attempts=cfg["MAZE_MAX_ATTEMPTS"],
        endpoint_clearance=cfg["MAZE_ENDPOINT_CLEARANCE"],
        enable_metrics=cfg["MAZE_ENABLE_GENERATION_METRICS"],
        seed=seed,
    )


def get_cached_maze(seed: int, width: int, height: int):
    config = _active_config(seed)
    key = (
        seed,
        width,
        height,
        config.door_count,
        config.lever_count,
        config.min_doors_on_path,
        config.max_attempts,
        config.endpoint_clearance,
    )
    with _maze_cache_lock:
        maze = _maze_cache.get(key)
        if maze is not None:
            return maze
    maze = MazeGenerator(config).generate(width, height)
    with _maze_cache_lock:
        _maze_cache[key] = maze
        if len(_maze_cache) > current_app.config["MAZE_CACHE_SIZE"]:
            first_key = next(iter(_maze_cache.keys()))
            if first_key != key:
                _maze_cache.pop(first_key, None)
    return maze


def _bad_request(message: str):
    return jsonify({"error": message}), 400


@bp_maze.route("/api/maze")
def get_maze():
    """Generate (or fetch cached) maze.

    Query params (all optional): width, height, seed (int or string).
    Response: MazeData.to_json()
    """
    try:
        seed = _coerce_seed(request.args.get("seed"))
        width = _coerce_dimension(request.args.get("width"), current_app.config["MAZE_WIDTH"], "width")
        height = _coerce_dimension(request.args.get("height"), current_app.config["MAZE_HEIGHT"], "height")
    except ValueError as e:
        return _bad_request(str(e))
    maze = get_cached_maze(seed, *normalize_dimensions(width, height))
    return jsonify(maze.to_json())


@bp_maze.route("/api/maze/path", methods=["POST"])
def maze_path():
    """Shortest path query against a regenerated maze.

    Body JSON:
      { "seed": <int|str>, "width": <int>, "height": <int>,
        "start": [x, y], "end": [x, y],
        "doors_open": <bool>, "open_doors": [<door id>, ...] }
    ``open_doors`` applies live door state; ``doors_open`` treats every door as open.
    Start defaults to the explorer spawn, end to the exit.

    Response: { "seed", "exists", "path": [[x, y], ...] | null, "length": <int|null> }
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return _bad_request("request body must be a JSON object")
    try:
        seed = _coerce_seed(data.get("seed"))
        width = _coerce_dimension(data.get("width"), current_app.config["MAZE_WIDTH"], "width")
        height = _coerce_dimension(data.get("height"), current_app.config["MAZE_HEIGHT"], "height")
    except ValueError as e:
        return _bad_request(str(e))
    width, height = normalize_dimensions(width, height)
    maze = get_cached_maze(seed, width, height)
    try:
        start = _coerce_position(data.get("start", list(maze.explorer_spawn)), width, height, "start")
        end = _coerce_position(data.get("end", list(maze.exit_position)), width, height, "end")
        open_doors = data.get("open_doors") or []
        if not isinstance(open_doors, list) or not all(isinstance(i, int) for i in open_doors):
            raise ValueError("open_doors must be a list of door ids")
        doors_open = data.get("doors_open", False)
        if not isinstance(doors_open, bool):
            raise ValueError("doors_open must be a boolean")
    except ValueError as e:
        return _bad_request(str(e))

    grid = maze.grid_with_door_state(open_doors) if open_doors else maze.grid
    path = find_path(grid, start, end, doors_open=doors_open)
    _log.debug(event="path_query", seed=seed, start=start, end=end, found=path is not None)
    return jsonify(
        {
            "seed": seed,
            "exists": path is not None,
            "path": [list(p) for p in path] if path is not None else None,
            "length": len(path) - 1 if path is not None else None,
        }
    )


@bp_maze.route("/api/maze/config")
def maze_config():
    cfg = current_app.config
    keys = [
        "MAZE_WIDTH",
        "MAZE_HEIGHT",
        "MAZE_DOOR_COUNT",
        "MAZE_LEVER_COUNT",
        "MAZE_MIN_DOORS_ON_PATH",
        "MAZE_MAX_ATTEMPTS",
        "MAZE_ENDPOINT_CLEARANCE",
        "MAZE_MAX_DIMENSION",
    ]
    return jsonify({k.lower().replace("maze_", "", 1): cfg[k] for k in keys})
