"""Game configuration, validation and difficulty presets."""

from .game_config import (
    BombConfig,
    FlowConfig,
    GameConfig,
    GridConfig,
    PipeWeights,
    QueueConfig,
    ScoreConfig,
)
from .validator import ConfigErrorType, GameConfigValidator, ValidationError
from .difficulty import (
    DIFFICULTY_PRESETS,
    Difficulty,
    DifficultyMetadata,
    DifficultyPreset,
    get_config,
    get_config_or_default,
    get_preset,
    parse_difficulty,
)

__all__ = [
    "BombConfig",
    "FlowConfig",
    "GameConfig",
    "GridConfig",
    "PipeWeights",
    "QueueConfig",
    "ScoreConfig",
    "ConfigErrorType",
    "GameConfigValidator",
    "ValidationError",
    "DIFFICULTY_PRESETS",
    "Difficulty",
    "DifficultyMetadata",
    "DifficultyPreset",
    "get_config",
    "get_config_or_default",
    "get_preset",
    "parse_difficulty",
]
