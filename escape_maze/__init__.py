"""Flask application factory for the maze generation service.

Configuration is sourced from environment variables (optionally via a local
.env file) with defaults matching ``MazeConfig``. A local ``instance/``
directory holds runtime files such as the rotating log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

from escape_maze.maze.config import MazeConfig

# Load .env if present so MAZE_* tunables can be supplied without exporting
# shell variables during development.
load_dotenv()


def create_app(overrides: dict | None = None) -> Flask:
    """Build a Flask app with the maze API blueprint registered.

    ``overrides`` is applied to ``app.config`` last (tests use this to pin
    tunables without touching the environment).
    """
    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # In some constrained environments this might fail; logging falls back to console only
        pass

    defaults = MazeConfig.from_env()
    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        MAZE_WIDTH=defaults.width,
        MAZE_HEIGHT=defaults.height,
        MAZE_DOOR_COUNT=defaults.door_count,
        MAZE_LEVER_COUNT=defaults.lever_count,
        MAZE_MIN_DOORS_ON_PATH=defaults.min_doors_on_path,
        MAZE_MAX_ATTEMPTS=defaults.max_attempts,
        MAZE_ENDPOINT_CLEARANCE=defaults.endpoint_clearance,
        MAZE_ENABLE_GENERATION_METRICS=defaults.enable_metrics,
        MAZE_MAX_DIMENSION=int(os.getenv("MAZE_MAX_DIMENSION", "201")),
        MAZE_CACHE_SIZE=int(os.getenv("MAZE_CACHE_SIZE", "32")),
    )
    if overrides:
        app.config.update(overrides)

    from escape_maze.routes.maze_api import bp_maze

    app.register_blueprint(bp_maze)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    return app
