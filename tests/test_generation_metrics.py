from escape_maze.maze import MazeConfig, generate
from escape_maze.maze.metrics import init_metrics, tile_counts

from tests.maze_test_utils import grid_from_rows


def test_metrics_present_and_consistent():
    m = generate(21, 21, config=MazeConfig(door_count=4, lever_count=4, seed=31))
    met = m.metrics
    for key in init_metrics():
        assert key in met, f"missing metric {key}"
    assert met["attempts"] == m.attempts
    assert met["fallback"] == m.fallback
    assert met["runtime_ms"] >= 0
    assert set(met["phase_ms"]) <= {"carve", "mechanisms", "validate"}
    assert "carve" in met["phase_ms"]
    assert met["tiles_door"] == len(m.doors)
    assert met["tiles_lever"] == len(m.levers)
    assert met["tiles_exit"] == 1
    rejected = sum(v for k, v in met.items() if k.startswith("rejected_"))
    assert rejected == m.attempts - (0 if m.fallback else 1)


def test_metrics_disabled():
    m = generate(11, 11, config=MazeConfig(enable_metrics=False, seed=2))
    assert m.metrics == {}
    assert m.attempts >= 1


def test_tile_counts():
    grid = grid_from_rows(["WWWWW", "WFDLW", "WEWWW"])
    counts = tile_counts(grid)
    assert counts == {"tiles_wall": 11, "tiles_floor": 1, "tiles_door": 1, "tiles_lever": 1, "tiles_exit": 1}
