"""The bounded queue of upcoming pipes."""

import logging
from collections import deque
from typing import Deque, List

from ..errors import QueueEmptyError
from .generator import PipeGenerator
from .pipe import PipeBase

logger = logging.getLogger(__name__)


class PipeQueue:
    """
    FIFO of upcoming pipes, kept at ``max_size`` once filled.

    Every pop is immediately followed by generating a replacement at the back.
    """

    def __init__(self, generator: PipeGenerator, max_size: int):
        if max_size <= 0:
            raise ValueError(f"Queue size must be positive, got {max_size}")
        self.generator = generator
        self.max_size = max_size
        self._queue: Deque[PipeBase] = deque()

    def fill(self) -> None:
        """Top the queue up to ``max_size``."""
        while len(self._queue) < self.max_size:
            self._queue.append(self.generator.generate_next())
        logger.debug(f"PipeQueue filled: {self.describe()}")

    def pop_front(self) -> PipeBase:
        """
        Remove and return the head, then generate a replacement.

        Raises:
            QueueEmptyError: If the queue was never filled
        """
        if not self._queue:
            raise QueueEmptyError("PipeQueue is empty; call fill() first")
        head = self._queue.popleft()
        self._queue.append(self.generator.generate_next())
        logger.debug(f"Dequeued {head}, queue now {self.describe()}")
        return head

    def peek(self, n: int = 1) -> List[PipeBase]:
        """The next ``n`` pipes, front first, without removing them."""
        if n < 0:
            raise ValueError(f"Cannot peek a negative number of pipes: {n}")
        return list(self._queue)[:n]

    @property
    def head(self):
        return self._queue[0] if self._queue else None

    @property
    def contents(self) -> List[PipeBase]:
        return list(self._queue)

    def reset(self) -> None:
        """Discard the current contents and refill."""
        self._queue.clear()
        self.fill()
        logger.info("PipeQueue reset")

    def describe(self) -> str:
        return "[" + ", ".join(str(p) for p in self._queue) + "]"

    def __len__(self) -> int:
        return len(self._queue)
