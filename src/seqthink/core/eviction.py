"""Bounded-retention policy for the thought history."""

import logging
from typing import (
    List,
    TypeVar,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_HISTORY_SIZE = 1000


class EvictionPolicy:
    """
    Keep at most *max_size* entries, discarding the oldest first.

    The limit is fixed when the policy is built.
    """

    def __init__(self, max_size: int = DEFAULT_MAX_HISTORY_SIZE) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be a positive integer, got {max_size}")
        self._max_size = max_size

    @property
    def max_size(self) -> int:
        """The retention ceiling."""
        return self._max_size

    def enforce(self, history: List[T]) -> int:
        """
        Trim *history* in place to the newest ``max_size`` entries.

        Returns the number of entries discarded.
        """
        overflow = len(history) - self._max_size
        if overflow <= 0:
            return 0
        del history[:overflow]
        logger.info("History trimmed to %d items", self._max_size)
        return overflow
