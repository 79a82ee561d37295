import os
from dataclasses import dataclass, fields
from typing import Optional

# Environment keys mapped onto MazeConfig attributes
ENV_MAP = {
    "MAZE_WIDTH": "width",
    "MAZE_HEIGHT": "height",
    "MAZE_DOOR_COUNT": "door_count",
    "MAZE_LEVER_COUNT": "lever_count",
    "MAZE_MIN_DOORS_ON_PATH": "min_doors_on_path",
    "MAZE_MAX_ATTEMPTS": "max_attempts",
    "MAZE_ENDPOINT_CLEARANCE": "endpoint_clearance",
    "MAZE_ENABLE_GENERATION_METRICS": "enable_metrics",
}


@dataclass
class MazeConfig:
    width: int = 41
    height: int = 35
    door_count: int = 8
    lever_count: int = 8
    min_doors_on_path: int = 3
    max_attempts: int = 100
    endpoint_clearance: int = 2  # passages this close (Manhattan) to spawn/exit never get doors
    seed: Optional[int] = None
    enable_metrics: bool = True

    def __post_init__(self):
        if self.width < 3 or self.height < 3:
            raise ValueError(f"maze dimensions must be at least 3x3, got {self.width}x{self.height}")
        if self.lever_count < 1 or self.door_count < 1 or self.min_doors_on_path < 1:
            raise ValueError("door_count, lever_count and min_doors_on_path must be positive")
        if self.door_count < self.min_doors_on_path:
            raise ValueError(
                f"door_count ({self.door_count}) must be >= min_doors_on_path ({self.min_doors_on_path})"
            )
        if self.lever_count < self.door_count:
            raise ValueError(f"lever_count ({self.lever_count}) must be >= door_count ({self.door_count})")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.endpoint_clearance < 0:
            raise ValueError("endpoint_clearance must be >= 0")

    @classmethod
    def from_env(cls, **overrides) -> "MazeConfig":
        """Build a config from MAZE_* environment variables; keyword overrides win."""
        known = {f.name for f in fields(cls)}
        values = {}
        for env_key, attr in ENV_MAP.items():
            if env_key not in os.environ:
                continue
            raw = os.environ.get(env_key, "")
            if attr == "enable_metrics":
                values[attr] = raw.lower() not in {"0", "false", "no", ""}
            else:
                try:
                    values[attr] = int(raw)
                except ValueError:
                    raise ValueError(f"{env_key} must be an integer, got {raw!r}") from None
        values.update({k: v for k, v in overrides.items() if k in known})
        return cls(**values)


__all__ = ["MazeConfig", "ENV_MAP"]
