"""Game configuration data structures.

Configurations are plain dataclasses, loaded from dictionaries or JSON files.
Loading does not validate; run ``GameConfigValidator`` before starting a session.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..pipes.shapes import PipeType


@dataclass(frozen=True)
class GridConfig:
    """Board dimensions and obstacles."""
    width: int = 8
    height: int = 8
    cell_size: int = 64  # pixels; only the renderer uses it
    blocked_percentage: float = 10.0
    allow_start_pipe_on_edge: bool = False


@dataclass(frozen=True)
class PipeWeights:
    """Relative generation weights; start is never generated."""
    straight: float = 0.25
    corner: float = 0.55
    cross: float = 0.20
    start: float = 0.0

    def as_mapping(self) -> Dict[PipeType, float]:
        return {
            PipeType.START: self.start,
            PipeType.STRAIGHT: self.straight,
            PipeType.CORNER: self.corner,
            PipeType.CROSS: self.cross,
        }

    @property
    def total(self) -> float:
        return self.straight + self.corner + self.cross


@dataclass(frozen=True)
class QueueConfig:
    max_size: int = 5
    pipe_weights: PipeWeights = field(default_factory=PipeWeights)


@dataclass(frozen=True)
class BombConfig:
    max_bombs: int = 2
    bomb_timer_seconds: float = 0.8


@dataclass(frozen=True)
class FlowConfig:
    pipe_flow_speed: float = 0.2  # cells per second
    start_delay_seconds: float = 10.0


@dataclass(frozen=True)
class ScoreConfig:
    win_filled_pipes_count: int = 12
    points_per_pipe: int = 100


@dataclass(frozen=True)
class GameConfig:
    """Complete configuration for one play session."""
    grid: GridConfig = field(default_factory=GridConfig)
    queue: QueueConfig = field(default_factory=QueueConfig)
    bombs: BombConfig = field(default_factory=BombConfig)
    flow: FlowConfig = field(default_factory=FlowConfig)
    score: ScoreConfig = field(default_factory=ScoreConfig)
    difficulty: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        """
        Build a configuration from a nested dictionary.

        Missing sections and keys fall back to the dataclass defaults.

        Raises:
            ValueError: On unknown sections or keys, or a section that is not a mapping
        """
        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")

        queue_data = dict(_section(data, "queue", "queue"))
        weights = _build(PipeWeights, _section(queue_data, "pipe_weights", "queue.pipe_weights"),
                         "queue.pipe_weights")
        queue_data.pop("pipe_weights", None)

        unknown = set(data) - {"grid", "queue", "bombs", "flow", "score", "difficulty"}
        if unknown:
            raise ValueError(f"Unknown configuration sections: {sorted(unknown)}")

        return cls(
            grid=_build(GridConfig, _section(data, "grid", "grid"), "grid"),
            queue=_build(QueueConfig, dict(queue_data, pipe_weights=weights), "queue"),
            bombs=_build(BombConfig, _section(data, "bombs", "bombs"), "bombs"),
            flow=_build(FlowConfig, _section(data, "flow", "flow"), "flow"),
            score=_build(ScoreConfig, _section(data, "score", "score"), "score"),
            difficulty=_difficulty(data.get("difficulty")),
        )

    @classmethod
    def from_json(cls, text: str) -> "GameConfig":
        return cls.from_dict(json.loads(text))

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "GameConfig":
        with open(path) as f:
            return cls.from_dict(json.load(f))


def _section(data: Dict[str, Any], key: str, section: str) -> Dict[str, Any]:
    values = data.get(key, {})
    if not isinstance(values, dict):
        raise ValueError(f"Section '{section}' must be a mapping, got {type(values).__name__}")
    return values


def _difficulty(value) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ValueError(f"'difficulty' must be a string, got {type(value).__name__}")
    return value


def _build(config_cls, values: Dict[str, Any], section: str):
    allowed = {f.name for f in fields(config_cls)}
    unknown = set(values) - allowed
    if unknown:
        raise ValueError(f"Unknown keys in '{section}': {sorted(unknown)}")
    return config_cls(**values)
