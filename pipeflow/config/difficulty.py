"""Difficulty presets."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from ..results import Result
from .game_config import (
    BombConfig,
    FlowConfig,
    GameConfig,
    GridConfig,
    PipeWeights,
    QueueConfig,
    ScoreConfig,
)
from .validator import GameConfigValidator

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """Available difficulty levels."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class DifficultyMetadata:
    name: str
    description: str
    recommended_for: str
    estimated_duration: str


@dataclass(frozen=True)
class DifficultyPreset:
    """A complete configuration plus how to present it."""
    config: GameConfig
    metadata: DifficultyMetadata


DEFAULT_DIFFICULTY = Difficulty.MEDIUM

# Bigger boards, more obstacles, fewer straights and faster flow as difficulty rises
DIFFICULTY_PRESETS: Dict[Difficulty, DifficultyPreset] = {
    Difficulty.EASY: DifficultyPreset(
        config=GameConfig(
            grid=GridConfig(width=6, height=6, cell_size=64, blocked_percentage=5,
                            allow_start_pipe_on_edge=False),
            queue=QueueConfig(max_size=5, pipe_weights=PipeWeights(0.4, 0.5, 0.1)),
            bombs=BombConfig(max_bombs=3, bomb_timer_seconds=0.5),
            flow=FlowConfig(pipe_flow_speed=0.15, start_delay_seconds=12),
            score=ScoreConfig(win_filled_pipes_count=8, points_per_pipe=50),
            difficulty=Difficulty.EASY.value,
        ),
        metadata=DifficultyMetadata(
            name="Easy",
            description="Small board, few obstacles and a slow flow.",
            recommended_for="First-time players",
            estimated_duration="2-3 minutes",
        ),
    ),
    Difficulty.MEDIUM: DifficultyPreset(
        config=GameConfig(
            grid=GridConfig(width=8, height=8, cell_size=64, blocked_percentage=10,
                            allow_start_pipe_on_edge=False),
            queue=QueueConfig(max_size=5, pipe_weights=PipeWeights(0.25, 0.55, 0.20)),
            bombs=BombConfig(max_bombs=2, bomb_timer_seconds=0.8),
            flow=FlowConfig(pipe_flow_speed=0.2, start_delay_seconds=10),
            score=ScoreConfig(win_filled_pipes_count=12, points_per_pipe=100),
            difficulty=Difficulty.MEDIUM.value,
        ),
        metadata=DifficultyMetadata(
            name="Medium",
            description="Balanced board with a moderate flow.",
            recommended_for="Players who know the rules",
            estimated_duration="3-5 minutes",
        ),
    ),
    Difficulty.HARD: DifficultyPreset(
        config=GameConfig(
            grid=GridConfig(width=10, height=10, cell_size=64, blocked_percentage=15,
                            allow_start_pipe_on_edge=True),
            queue=QueueConfig(max_size=5, pipe_weights=PipeWeights(0.15, 0.6, 0.25)),
            bombs=BombConfig(max_bombs=1, bomb_timer_seconds=1.0),
            flow=FlowConfig(pipe_flow_speed=0.25, start_delay_seconds=8),
            score=ScoreConfig(win_filled_pipes_count=18, points_per_pipe=150),
            difficulty=Difficulty.HARD.value,
        ),
        metadata=DifficultyMetadata(
            name="Hard",
            description="Large, crowded board; the start may sit on the edge.",
            recommended_for="Experienced players",
            estimated_duration="5-8 minutes",
        ),
    ),
}


def parse_difficulty(value: Union[str, Difficulty]) -> Difficulty:
    """Accept a Difficulty or its name/value in any case."""
    if isinstance(value, Difficulty):
        return value
    try:
        return Difficulty(str(value).lower())
    except ValueError:
        raise ValueError(
            f"Unknown difficulty '{value}'. Choose from: "
            + ", ".join(d.value for d in Difficulty)
        ) from None


def get_preset(difficulty: Union[str, Difficulty]) -> DifficultyPreset:
    return DIFFICULTY_PRESETS[parse_difficulty(difficulty)]


def get_config(difficulty: Union[str, Difficulty]) -> Result:
    """
    Validated configuration for a difficulty.

    Returns:
        Result whose value is the GameConfig, or whose error is the list of
        ValidationErrors
    """
    config = get_preset(difficulty).config
    errors = GameConfigValidator.validate(config)
    if errors:
        return Result.fail(errors)
    return Result.ok(config)


def get_config_or_default(difficulty: Union[str, Difficulty]) -> GameConfig:
    """
    Configuration for a difficulty, falling back to the MEDIUM preset.

    The fallback applies when the name is unknown or the preset fails
    validation, and is logged as a warning.
    """
    try:
        result = get_config(difficulty)
    except ValueError as e:
        logger.warning(f"{e}; falling back to {DEFAULT_DIFFICULTY.value}")
        return DIFFICULTY_PRESETS[DEFAULT_DIFFICULTY].config

    if result.success:
        return result.value
    details = "; ".join(str(e) for e in result.error)
    logger.warning(f"Preset '{difficulty}' is invalid ({details}); "
                   f"falling back to {DEFAULT_DIFFICULTY.value}")
    return DIFFICULTY_PRESETS[DEFAULT_DIFFICULTY].config
