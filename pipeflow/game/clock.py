"""Time sources for driving a session."""

import time
from typing import Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from .session import GameSession


class Clock(Protocol):
    """Anything that reports the current time in seconds."""

    def now(self) -> float:
        ...


class MonotonicClock:
    """Wall-clock time from ``time.monotonic``."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """A clock that only moves when told to; for tests and replays."""

    def __init__(self, start: float = 0.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"Cannot move a clock backwards by {seconds}")
        self._now += seconds


class SessionDriver:
    """Turns clock readings into ``GameSession.tick`` calls."""

    def __init__(self, session: "GameSession", clock: Optional[Clock] = None):
        self.session = session
        self.clock = clock if clock is not None else MonotonicClock()
        self._last: Optional[float] = None

    def step(self) -> float:
        """
        Tick the session by the time elapsed since the previous step.

        The first step only records the time. Returns the elapsed seconds used.
        """
        now = self.clock.now()
        elapsed = 0.0 if self._last is None else max(now - self._last, 0.0)
        self._last = now
        self.session.tick(elapsed)
        return elapsed

    def reset(self) -> None:
        self._last = None
