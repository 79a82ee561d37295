"""Escape Maze CLI entry point.

Provides subcommands for generating mazes, querying shortest paths on them,
and running the HTTP API. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from pathlib import Path
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()

TILE_COLORS = {
    "W": Fore.BLUE,
    "F": "",
    "D": Fore.RED,
    "L": Fore.YELLOW,
    "E": Fore.GREEN,
    "*": Fore.MAGENTA,
}


def _load_version() -> str:
    try:
        return (Path(__file__).resolve().parent / "VERSION").read_text(encoding="utf-8").strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Escape Maze generator

    Generate lever-and-door mazes, inspect shortest paths through them, or run
    the JSON API. Configuration can be provided via CLI flags or environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          MAZE_WIDTH / MAZE_HEIGHT   Default maze dimensions (default: 41x35)
          MAZE_DOOR_COUNT            Doors per maze (default: 8)
          MAZE_LEVER_COUNT           Levers per maze (default: 8)
          MAZE_MIN_DOORS_ON_PATH     Doors guaranteed on the spawn->exit route (default: 3)
          MAZE_MAX_ATTEMPTS          Attempts before the plain-maze fallback (default: 100)
          MAZE_ENDPOINT_CLEARANCE    No doors within this many steps of spawn or exit (default: 2)
          MAZE_LOG_LEVEL             debug|info|warn|error (default: info)
          HOST / PORT                Bind address for the API server (default: 0.0.0.0:5000)

        Examples:
          # Print a 21x21 maze
          python run.py generate --width 21 --height 21 --seed 7

          # Same maze as JSON
          python run.py generate --width 21 --height 21 --seed 7 --json

          # Overlay the shortest path with every door open
          python run.py path --width 21 --height 21 --seed 7

          # Run the API on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="escape-maze",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Escape Maze {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    def add_maze_args(p):
        p.add_argument("--width", type=int, default=None, help="Maze width (default: env MAZE_WIDTH or 41)")
        p.add_argument("--height", type=int, default=None, help="Maze height (default: env MAZE_HEIGHT or 35)")
        p.add_argument("--seed", type=int, default=None, help="Seed for reproducible output (default: random)")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a maze and print it",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    add_maze_args(gen_parser)
    gen_parser.add_argument("--json", action="store_true", help="Emit MazeData as JSON instead of ASCII")
    gen_parser.set_defaults(command="generate")

    path_parser = subparsers.add_parser(
        "path",
        help="Print the shortest spawn->exit path on a generated maze",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    add_maze_args(path_parser)
    path_parser.add_argument(
        "--closed",
        action="store_true",
        help="Keep doors closed (a generated puzzle maze then has no path)",
    )
    path_parser.set_defaults(command="path")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the maze JSON API",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    args = parser.parse_args(argv)
    # If no subcommand provided, default to generate
    if args.command is None:
        args = parser.parse_args([*argv, "generate"])
    return args


def render_ascii(maze, overlay=None) -> str:
    overlay = set(overlay or ())
    rows = []
    for y in range(maze.height):
        chars = []
        for x in range(maze.width):
            ch = "*" if (x, y) in overlay and maze.grid[x][y] not in ("E", "L") else maze.grid[x][y]
            if _COLOR_ENABLED and TILE_COLORS.get(ch):
                ch = f"{TILE_COLORS[ch]}{ch}{Style.RESET_ALL}"
            chars.append(ch)
        rows.append("".join(chars))
    return "\n".join(rows)


def _summary(maze) -> str:
    label = (lambda t: f"{Fore.YELLOW}{t}{Style.RESET_ALL}") if _COLOR_ENABLED else (lambda t: t)
    parts = [
        f"{label('seed:')} {maze.seed}",
        f"{label('size:')} {maze.width}x{maze.height}",
        f"{label('attempts:')} {maze.attempts}",
        f"{label('doors:')} {len(maze.doors)}",
        f"{label('levers:')} {len(maze.levers)}",
    ]
    if maze.fallback:
        parts.append(f"{label('fallback:')} yes")
    return "  ".join(parts)


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "generate").lower()

    if mode == "server":
        from escape_maze.logging_utils import log
        from escape_maze.server import start_server

        def handle_sigint(sig, frame):
            print("\n[INFO] Shutting down server...")
            sys.exit(0)

        signal.signal(signal.SIGINT, handle_sigint)
        host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
        port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
        debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")
        log.info(event="listen", host=host, port=port, debug=debug)
        start_server(host=host, port=port, debug=debug)
        return 0

    from escape_maze.maze import MazeConfig, MazeGenerator, find_path

    try:
        config = MazeConfig.from_env(seed=args.seed)
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    width = args.width if args.width is not None else config.width
    height = args.height if args.height is not None else config.height
    if width < 1 or height < 1:
        print("[ERROR] --width and --height must be positive", file=sys.stderr)
        return 1
    maze = MazeGenerator(config).generate(width, height)

    if mode == "generate":
        if args.json:
            print(json.dumps(maze.to_json()))
        else:
            print(render_ascii(maze))
            print(_summary(maze))
        return 0

    # path
    path = find_path(maze.grid, maze.explorer_spawn, maze.exit_position, doors_open=not args.closed)
    print(render_ascii(maze, overlay=path))
    print(_summary(maze))
    if path is None:
        print("No path from spawn to exit with doors closed.")
        return 2
    print(f"Path length: {len(path) - 1}")
    return 0


def _console_main():
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
