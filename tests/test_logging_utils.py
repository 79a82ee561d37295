import json

import pytest

from escape_maze import logging_utils
from escape_maze.logging_utils import get_logger


@pytest.fixture(autouse=True)
def _reset_log_mode(monkeypatch):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)


def test_key_value_format(capsys):
    get_logger("maze.test").info(event="maze_generated", attempt=3, note="two words")
    out = capsys.readouterr().out.strip()
    assert out.startswith("level=info ts=")
    assert "event=maze_generated" in out
    assert "attempt=3" in out
    assert "note=two_words" in out
    assert "logger=maze.test" in out


def test_level_filtering(capsys, monkeypatch):
    log = get_logger("maze.test")
    log.debug(event="hidden")
    assert capsys.readouterr().out == ""
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    log.debug(event="shown")
    assert "event=shown" in capsys.readouterr().out


def test_errors_go_to_stderr(capsys):
    get_logger("maze.test").error(event="boom")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "event=boom" in captured.err


def test_json_mode(capsys, monkeypatch):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    get_logger("maze.test").warn(event="maze_fallback", attempts=100, skipped=None)
    rec = json.loads(capsys.readouterr().out)
    assert rec["level"] == "warn"
    assert rec["event"] == "maze_fallback"
    assert rec["attempts"] == 100
    assert "skipped" not in rec


def test_get_logger_is_cached():
    assert get_logger("maze.a") is get_logger("maze.a")
    assert get_logger("maze.a") is not get_logger("maze.b")


def test_bind_adds_context(capsys):
    base = get_logger("maze.test")
    bound = base.bind(seed=42, width=21)
    bound.info(event="maze_generated", width=23)
    out = capsys.readouterr().out
    assert "seed=42" in out
    # Explicit fields override bound ones
    assert "width=23" in out and "width=21" not in out
    assert bound is not base and base.context == {}


def test_coordinates_render_as_xy(capsys, monkeypatch):
    log = get_logger("maze.test")
    log.info(event="path_query", start=(1, 1), end=[9, 9], label=("a", "b"))
    out = capsys.readouterr().out
    assert "start=1,1" in out and "end=9,9" in out
    assert "label=('a',_'b')" in out
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    log.info(event="path_query", start=(1, 1))
    assert json.loads(capsys.readouterr().out)["start"] == [1, 1]
