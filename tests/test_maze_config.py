import pytest

from escape_maze.maze import MazeConfig, generate


def test_defaults():
    cfg = MazeConfig()
    assert (cfg.width, cfg.height) == (41, 35)
    assert cfg.door_count == 8 and cfg.lever_count == 8
    assert cfg.min_doors_on_path == 3
    assert cfg.max_attempts == 100
    assert cfg.seed is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"width": 2},
        {"height": 1},
        {"door_count": 0},
        {"door_count": 2, "min_doors_on_path": 3},
        {"door_count": 8, "lever_count": 5},
        {"max_attempts": 0},
        {"endpoint_clearance": -1},
    ],
)
def test_invalid_tunables_raise(kwargs):
    with pytest.raises(ValueError):
        MazeConfig(**kwargs)


def test_from_env_reads_maze_vars(monkeypatch):
    monkeypatch.setenv("MAZE_WIDTH", "25")
    monkeypatch.setenv("MAZE_DOOR_COUNT", "4")
    monkeypatch.setenv("MAZE_LEVER_COUNT", "6")
    monkeypatch.setenv("MAZE_ENABLE_GENERATION_METRICS", "false")
    cfg = MazeConfig.from_env()
    assert cfg.width == 25 and cfg.height == 35
    assert cfg.door_count == 4 and cfg.lever_count == 6
    assert cfg.enable_metrics is False


def test_from_env_overrides_win(monkeypatch):
    monkeypatch.setenv("MAZE_MAX_ATTEMPTS", "50")
    cfg = MazeConfig.from_env(max_attempts=9, seed=11, bogus="ignored")
    assert cfg.max_attempts == 9
    assert cfg.seed == 11


def test_from_env_rejects_non_integer(monkeypatch):
    monkeypatch.setenv("MAZE_HEIGHT", "tall")
    with pytest.raises(ValueError) as exc:
        MazeConfig.from_env()
    assert "MAZE_HEIGHT" in str(exc.value)


def test_generate_uses_config_dimensions():
    cfg = MazeConfig(width=13, height=9, door_count=3, lever_count=3, seed=2)
    from escape_maze.maze import MazeGenerator

    m = MazeGenerator(cfg).generate()
    assert (m.width, m.height) == (13, 9)
    m2 = generate(13, 9, config=MazeConfig(door_count=3, lever_count=3), seed=2)
    assert m2.grid == m.grid


def test_from_env_reads_endpoint_clearance(monkeypatch):
    monkeypatch.setenv("MAZE_ENDPOINT_CLEARANCE", "3")
    assert MazeConfig.from_env().endpoint_clearance == 3
    monkeypatch.setenv("MAZE_ENDPOINT_CLEARANCE", "-1")
    with pytest.raises(ValueError):
        MazeConfig.from_env()
