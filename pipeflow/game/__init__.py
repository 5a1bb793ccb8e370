"""Session layer: bombs, scoring, timing and the game session facade."""

from .scheduler import DeferredAction, DeferredActionScheduler
from .bombs import BombController
from .score import ScoreTracker
from .clock import Clock, ManualClock, MonotonicClock, SessionDriver
from .session import GameSession

__all__ = [
    "DeferredAction",
    "DeferredActionScheduler",
    "BombController",
    "ScoreTracker",
    "Clock",
    "ManualClock",
    "MonotonicClock",
    "SessionDriver",
    "GameSession",
]
