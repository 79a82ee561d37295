"""Maze generator (bounded retry with mechanism-free fallback)

Generation phases per attempt:
    * Carve a perfect maze from (1,1) on a fresh all-WALL grid.
    * Fix spawn at (1,1) and the exit at (width-2, height-2).
    * Place levers on reachable nodes, then doors on passages (critical path first),
      reverting any door that would cut a lever off from spawn.
    * Re-validate the assembled maze.

Any phase may reject the attempt; the next attempt starts from scratch. After
``max_attempts`` rejections a plain maze with no doors or levers is returned,
so callers never see a generation error.

Public contract consumed elsewhere:
    generate(width, height) -> MazeData
    MazeGenerator(config, rng=None).generate(width, height) -> MazeData
"""

from __future__ import annotations

import random
import time
from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

from ..logging_utils import get_logger
from .carving import carve_maze
from .cells import GridPosition, MazeData
from .config import MazeConfig
from .mechanisms import place_mechanisms_safely
from .metrics import init_metrics, tile_counts
from .pathfinding import path_exists
from .tiles import EXIT, FLOOR
from .validation import validate_maze

log = get_logger("maze.generator")


def normalize_dimensions(width: int, height: int) -> Tuple[int, int]:
    """Round both dimensions up to the next odd value, never below 3."""
    width = width + 1 if width % 2 == 0 else width
    height = height + 1 if height % 2 == 0 else height
    return max(3, width), max(3, height)


class MazeGenerator:
    def __init__(self, config: MazeConfig | None = None, *, rng: random.Random | None = None):
        # The caller's config is never written to; drawn seeds live on the generator
        self.config = config or MazeConfig()
        self._injected_rng = rng
        self.seed = self.config.seed
        self._rng = rng if rng is not None else random.Random(self.seed)
        self.metrics: Dict[str, Any] = init_metrics()
        self._phase_ms: Dict[str, float] = {}
        self._log = log.bind(seed=self.seed)

    def _reset_rng(self):
        """Start a run from a known seed so ``MazeData.seed`` alone reproduces it.

        An injected RNG is used as-is and keeps advancing across calls.
        """
        if self._injected_rng is not None:
            self._rng = self._injected_rng
            return
        if self.config.seed is not None:
            self.seed = self.config.seed
        else:
            self.seed = random.randint(0, 2**31 - 1)
        # Local RNG so external random usage does not affect generation
        self._rng = random.Random(self.seed)

    def _phase(self, label, fn, *a, **k):
        ps = time.perf_counter()
        r = fn(*a, **k)
        self._phase_ms[label] = self._phase_ms.get(label, 0.0) + (time.perf_counter() - ps) * 1000
        return r

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------
    def generate(self, width: int | None = None, height: int | None = None) -> MazeData:
        width = self.config.width if width is None else width
        height = self.config.height if height is None else height
        width, height = normalize_dimensions(width, height)
        self._reset_rng()
        self.metrics = init_metrics()
        self._phase_ms = {}
        self._log = log.bind(seed=self.seed, width=width, height=height)
        start = time.perf_counter()

        maze: Optional[MazeData] = None
        for attempt in range(1, self.config.max_attempts + 1):
            self.metrics['attempts'] = attempt
            maze = self.try_generate(width, height)
            if maze is not None:
                break

        if maze is None:
            self._log.warn(event="maze_fallback", attempts=self.metrics['attempts'])
            maze = self.generate_simple_maze(width, height)
            self.metrics['fallback'] = True

        self.metrics['runtime_ms'] = round((time.perf_counter() - start) * 1000, 3)
        self.metrics['phase_ms'] = {k: round(v, 3) for k, v in self._phase_ms.items()}
        self.metrics.update(tile_counts(maze.grid))
        maze.seed = self.seed
        maze.attempts = self.metrics['attempts']
        maze.fallback = self.metrics['fallback']
        maze.metrics = dict(self.metrics) if self.config.enable_metrics else {}
        if not maze.fallback:
            self._log.info(
                event="maze_generated",
                attempt=maze.attempts,
                doors=len(maze.doors),
                levers=len(maze.levers),
                runtime_ms=self.metrics['runtime_ms'],
            )
        return maze

    # ------------------------------------------------------------------
    # Single attempt
    # ------------------------------------------------------------------
    def try_generate(self, width: int, height: int) -> Optional[MazeData]:
        grid = self._phase('carve', carve_maze, width, height, self._rng)
        spawn = GridPosition(1, 1)
        exit_pos = GridPosition(width - 2, height - 2)
        grid[spawn.x][spawn.y] = FLOOR
        grid[exit_pos.x][exit_pos.y] = EXIT

        if not path_exists(grid, spawn, exit_pos, doors_open=False):
            self.metrics['rejected_disconnected'] += 1
            self._log.debug(event="maze_attempt_rejected", reason="disconnected", attempt=self.metrics['attempts'])
            return None

        placed = self._phase(
            'mechanisms', place_mechanisms_safely, grid, spawn, exit_pos, self.config, self._rng, self.metrics
        )
        if placed is None:
            self._log.debug(event="maze_attempt_rejected", reason="mechanisms", attempt=self.metrics['attempts'])
            return None
        doors, levers = placed

        if not self._phase('validate', validate_maze, grid, spawn, exit_pos, doors, levers):
            self.metrics['rejected_validation'] += 1
            return None

        return MazeData(
            grid=grid,
            explorer_spawn=spawn,
            exit_position=exit_pos,
            doors=doors,
            levers=levers,
            width=width,
            height=height,
        )

    def generate_simple_maze(self, width: int, height: int) -> MazeData:
        """Mechanism-free maze; always solvable, no puzzle."""
        grid = carve_maze(width, height, self._rng)
        spawn = GridPosition(1, 1)
        exit_pos = GridPosition(width - 2, height - 2)
        grid[spawn.x][spawn.y] = FLOOR
        grid[exit_pos.x][exit_pos.y] = EXIT
        return MazeData(
            grid=grid,
            explorer_spawn=spawn,
            exit_position=exit_pos,
            doors=[],
            levers=[],
            width=width,
            height=height,
        )


def generate(
    width: int,
    height: int,
    *,
    config: MazeConfig | None = None,
    rng: random.Random | None = None,
    seed: int | None = None,
) -> MazeData:
    if config is None:
        config = MazeConfig(seed=seed)
    elif seed is not None:
        config = replace(config, seed=seed)
    return MazeGenerator(config, rng=rng).generate(width, height)


__all__ = ["MazeGenerator", "generate", "normalize_dimensions"]
