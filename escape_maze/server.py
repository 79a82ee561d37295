"""Server bootstrap: builds the Flask app, routes stdlib logging (Flask and
werkzeug request lines) to the console and a rotating file, and runs the
development server for the maze API.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from flask import Flask

from escape_maze import create_app
from escape_maze.logging_utils import log

LOG_FILENAME = "maze_api.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# key=value levels from logging_utils mapped onto stdlib levels
_STDLIB_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (integration / runtime only)
    """Start the maze API server.

    When debug=True, Flask's debugger and reloader provide verbose tracebacks.
    """
    app = create_app()
    log_path = _configure_logging(app)
    log.info(event="server_start", host=host, port=port, log_file=log_path)
    try:
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(app: Flask) -> str:
    """Send root logging to the console and ``instance/maze_api.log``.

    The level follows MAZE_LOG_LEVEL so the stdlib records and the key=value
    generator lines are filtered alike. Returns the log file path.
    """
    os.makedirs(app.instance_path, exist_ok=True)
    log_path = os.path.join(app.instance_path, LOG_FILENAME)
    level = _STDLIB_LEVELS.get(os.getenv("MAZE_LOG_LEVEL", "info").lower(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    console = logging.StreamHandler()

    root = logging.getLogger()
    # Avoid duplicate handlers if reconfigured
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in (file_handler, console):
        h.setLevel(level)
        h.setFormatter(formatter)
        root.addHandler(h)
    root.setLevel(level)
    app.logger.setLevel(level)
    return log_path
