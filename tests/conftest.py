import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from escape_maze import create_app  # noqa: E402
from escape_maze.routes import maze_api  # noqa: E402

# Tunables are pinned so a developer .env cannot change what tests see
_TEST_OVERRIDES = {
    "TESTING": True,
    "MAZE_WIDTH": 21,
    "MAZE_HEIGHT": 21,
    "MAZE_DOOR_COUNT": 4,
    "MAZE_LEVER_COUNT": 4,
    "MAZE_MIN_DOORS_ON_PATH": 3,
    "MAZE_MAX_ATTEMPTS": 100,
    "MAZE_ENDPOINT_CLEARANCE": 2,
    "MAZE_ENABLE_GENERATION_METRICS": True,
    "MAZE_MAX_DIMENSION": 61,
    "MAZE_CACHE_SIZE": 4,
}


@pytest.fixture()
def test_app():
    return create_app(dict(_TEST_OVERRIDES))


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture(autouse=True)
def _clear_maze_cache():
    """Generated mazes must not leak between tests through the API cache."""
    maze_api._maze_cache.clear()
    yield
    maze_api._maze_cache.clear()


@pytest.fixture(autouse=True)
def _clean_maze_env(monkeypatch):
    for key in (
        "MAZE_WIDTH",
        "MAZE_HEIGHT",
        "MAZE_DOOR_COUNT",
        "MAZE_LEVER_COUNT",
        "MAZE_MIN_DOORS_ON_PATH",
        "MAZE_MAX_ATTEMPTS",
        "MAZE_ENDPOINT_CLEARANCE",
        "MAZE_ENABLE_GENERATION_METRICS",
    ):
        monkeypatch.delenv(key, raising=False)
    yield


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "slow: larger grids or wide seed sweeps")
