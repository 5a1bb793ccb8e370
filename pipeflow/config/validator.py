"""Game configuration validation with field-tagged errors."""

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from ..errors import ConfigurationError
from .game_config import BombConfig, FlowConfig, GameConfig, GridConfig, PipeWeights, ScoreConfig


class ConfigErrorType(Enum):
    """Kinds of configuration problems."""
    INVALID_GRID_DIMENSIONS = auto()
    GRID_TOO_SMALL = auto()
    INVALID_CELL_SIZE = auto()
    INVALID_BLOCKED_PERCENTAGE = auto()
    INVALID_QUEUE_SIZE = auto()
    INVALID_PIPE_WEIGHTS = auto()
    INVALID_MAX_BOMBS = auto()
    INVALID_BOMB_TIMER = auto()
    INVALID_FLOW_SPEED = auto()
    INVALID_FLOW_DELAY = auto()
    INVALID_WIN_THRESHOLD = auto()
    INVALID_POINTS_PER_PIPE = auto()


@dataclass(frozen=True)
class ValidationError:
    """One problem with a configuration value."""
    error_type: ConfigErrorType
    message: str
    field: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class GameConfigValidator:
    """Checks a whole configuration and reports every problem found."""

    @classmethod
    def validate(cls, config: GameConfig) -> List[ValidationError]:
        """
        Validate a game configuration.

        Returns:
            All validation errors, or an empty list if the configuration is valid
        """
        errors: List[ValidationError] = []
        errors.extend(cls.validate_grid(config.grid))

        if not _is_positive_int(config.queue.max_size):
            errors.append(ValidationError(
                ConfigErrorType.INVALID_QUEUE_SIZE,
                f"Queue size must be a positive integer, got {config.queue.max_size}",
                "queue.max_size",
            ))

        weight_error = cls.validate_pipe_weights(config.queue.pipe_weights)
        if weight_error:
            errors.append(weight_error)

        errors.extend(cls.validate_bombs(config.bombs))
        errors.extend(cls.validate_flow(config.flow))
        errors.extend(cls.validate_score(config.score))
        return errors

    @classmethod
    def is_valid(cls, config: GameConfig) -> bool:
        return not cls.validate(config)

    @classmethod
    def ensure_valid(cls, config: GameConfig) -> GameConfig:
        """Return ``config`` unchanged, or raise ConfigurationError listing every problem."""
        errors = cls.validate(config)
        if errors:
            raise ConfigurationError(errors)
        return config

    @staticmethod
    def validate_grid(grid: GridConfig) -> List[ValidationError]:
        errors = []
        if not (_is_positive_int(grid.width) and _is_positive_int(grid.height)):
            errors.append(ValidationError(
                ConfigErrorType.INVALID_GRID_DIMENSIONS,
                f"Grid dimensions must be positive integers, got {grid.width}x{grid.height}",
                "grid.width/height",
            ))
        elif not grid.allow_start_pipe_on_edge and (grid.width < 3 or grid.height < 3):
            # An interior start cell needs a border on every side
            errors.append(ValidationError(
                ConfigErrorType.GRID_TOO_SMALL,
                f"Grid must be at least 3x3 when the start pipe may not sit on the edge, "
                f"got {grid.width}x{grid.height}",
                "grid.width/height",
            ))
        elif grid.width * grid.height < 2:
            errors.append(ValidationError(
                ConfigErrorType.GRID_TOO_SMALL,
                "Grid needs at least two cells",
                "grid.width/height",
            ))

        if not _is_number(grid.cell_size) or grid.cell_size <= 0:
            errors.append(ValidationError(
                ConfigErrorType.INVALID_CELL_SIZE,
                f"Cell size must be positive, got {grid.cell_size}",
                "grid.cell_size",
            ))

        pct = grid.blocked_percentage
        if not _is_number(pct) or not math.isfinite(pct) or pct < 0 or pct >= 100:
            errors.append(ValidationError(
                ConfigErrorType.INVALID_BLOCKED_PERCENTAGE,
                f"Blocked percentage must be in [0, 100), got {pct}",
                "grid.blocked_percentage",
            ))
        return errors

    @staticmethod
    def validate_pipe_weights(weights: PipeWeights) -> Optional[ValidationError]:
        if weights.start != 0:
            return ValidationError(
                ConfigErrorType.INVALID_PIPE_WEIGHTS,
                f"Start pipe weight must be 0, got {weights.start}",
                "queue.pipe_weights.start",
            )

        total = 0.0
        for name in ("straight", "corner", "cross"):
            weight = getattr(weights, name)
            if not _is_number(weight) or not math.isfinite(weight) or weight < 0:
                return ValidationError(
                    ConfigErrorType.INVALID_PIPE_WEIGHTS,
                    f"Invalid weight for {name}: {weight}",
                    f"queue.pipe_weights.{name}",
                )
            total += weight

        if total <= 0:
            return ValidationError(
                ConfigErrorType.INVALID_PIPE_WEIGHTS,
                "Total pipe weight must be greater than zero",
                "queue.pipe_weights",
            )
        return None

    @staticmethod
    def validate_bombs(bombs: BombConfig) -> List[ValidationError]:
        errors = []
        if not _is_positive_int(bombs.max_bombs):
            errors.append(ValidationError(
                ConfigErrorType.INVALID_MAX_BOMBS,
                f"Max bombs must be a positive integer, got {bombs.max_bombs}",
                "bombs.max_bombs",
            ))
        timer = bombs.bomb_timer_seconds
        if not _is_number(timer) or not math.isfinite(timer) or timer <= 0:
            errors.append(ValidationError(
                ConfigErrorType.INVALID_BOMB_TIMER,
                f"Bomb timer must be positive, got {timer}",
                "bombs.bomb_timer_seconds",
            ))
        return errors

    @staticmethod
    def validate_flow(flow: FlowConfig) -> List[ValidationError]:
        errors = []
        speed = flow.pipe_flow_speed
        if not _is_number(speed) or not math.isfinite(speed) or speed <= 0:
            errors.append(ValidationError(
                ConfigErrorType.INVALID_FLOW_SPEED,
                f"Flow speed must be positive, got {speed}",
                "flow.pipe_flow_speed",
            ))
        delay = flow.start_delay_seconds
        if not _is_number(delay) or not math.isfinite(delay) or delay < 0:
            errors.append(ValidationError(
                ConfigErrorType.INVALID_FLOW_DELAY,
                f"Flow delay cannot be negative, got {delay}",
                "flow.start_delay_seconds",
            ))
        return errors

    @staticmethod
    def validate_score(score: ScoreConfig) -> List[ValidationError]:
        errors = []
        if not _is_positive_int(score.win_filled_pipes_count):
            errors.append(ValidationError(
                ConfigErrorType.INVALID_WIN_THRESHOLD,
                f"Win threshold must be a positive integer, got {score.win_filled_pipes_count}",
                "score.win_filled_pipes_count",
            ))
        if not _is_positive_int(score.points_per_pipe):
            errors.append(ValidationError(
                ConfigErrorType.INVALID_POINTS_PER_PIPE,
                f"Points per pipe must be a positive integer, got {score.points_per_pipe}",
                "score.points_per_pipe",
            ))
        return errors
