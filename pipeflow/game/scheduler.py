"""Cooperative delayed actions keyed by grid position."""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List

logger = logging.getLogger(__name__)

# Slack for float sums of frame times
TIME_EPSILON = 1e-9


@dataclass
class DeferredAction:
    """A callback due after a simulated delay."""
    key: Hashable
    due_at: float
    callback: Callable[[], None]
    sequence: int


class DeferredActionScheduler:
    """
    Runs callbacks after simulated time has passed.

    Time only moves through ``advance``; there are no threads. At most one
    action is pending per key. Cancelling is idempotent, and a cancelled action
    never fires.
    """

    def __init__(self):
        self.now = 0.0
        self._pending: Dict[Hashable, DeferredAction] = {}
        self._sequence = 0

    def schedule(self, key: Hashable, delay_seconds: float, callback: Callable[[], None]) -> None:
        if delay_seconds < 0:
            raise ValueError(f"Delay cannot be negative, got {delay_seconds}")
        if key in self._pending:
            raise ValueError(f"An action is already pending for {key}")
        self._sequence += 1
        self._pending[key] = DeferredAction(key, self.now + delay_seconds, callback, self._sequence)

    def advance(self, elapsed_seconds: float) -> int:
        """
        Move time forward and run every action that became due, oldest due first.

        Returns:
            Number of actions fired
        """
        if elapsed_seconds < 0:
            raise ValueError(f"Elapsed time cannot be negative, got {elapsed_seconds}")
        self.now += elapsed_seconds

        due: List[DeferredAction] = sorted(
            (a for a in self._pending.values() if a.due_at <= self.now + TIME_EPSILON),
            key=lambda a: (a.due_at, a.sequence),
        )
        for action in due:
            # A callback may have cancelled a later action
            if self._pending.get(action.key) is not action:
                continue
            del self._pending[action.key]
            action.callback()
        return len(due)

    def cancel(self, key: Hashable) -> bool:
        """Cancel the action for ``key``. Returns False if nothing was pending."""
        return self._pending.pop(key, None) is not None

    def cancel_all(self) -> int:
        count = len(self._pending)
        self._pending.clear()
        if count:
            logger.debug(f"Cancelled {count} pending actions")
        return count

    def is_pending(self, key: Hashable) -> bool:
        return key in self._pending

    def time_remaining(self, key: Hashable) -> float:
        action = self._pending.get(key)
        if action is None:
            return 0.0
        return max(action.due_at - self.now, 0.0)

    @property
    def pending_keys(self) -> List[Hashable]:
        return list(self._pending)

    def __len__(self) -> int:
        return len(self._pending)
