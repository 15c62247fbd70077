"""In-memory store for the thought history and the branch index."""

import logging
import threading
from typing import (
    Dict,
    List,
    Tuple,
)

from seqthink.core.eviction import (
    DEFAULT_MAX_HISTORY_SIZE,
    EvictionPolicy,
)
from seqthink.core.schema import ThoughtRecord

logger = logging.getLogger(__name__)


class ThoughtLedger:
    """
    Ordered history of accepted thoughts plus an index of named branches.

    A branch record is kept both in the history and in ``branches[branch_id]``.  Eviction only
    trims the history, so a branch can still list records that have left the history.
    """

    def __init__(self, max_history_size: int = DEFAULT_MAX_HISTORY_SIZE) -> None:
        self._history: List[ThoughtRecord] = []
        self._branches: Dict[str, List[ThoughtRecord]] = {}
        self._eviction = EvictionPolicy(max_history_size)
        # append/evict/index must never be observed half-done
        self._lock = threading.Lock()

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #
    def append(self, record: ThoughtRecord) -> None:
        """Store *record*, trim the history and index the record under its branch."""
        with self._lock:
            self._history.append(record)
            self._eviction.enforce(self._history)
            if record.branch_from_thought and record.branch_id:
                self._branches.setdefault(record.branch_id, []).append(record)

    def clear(self) -> None:
        """Drop every stored thought and branch."""
        with self._lock:
            self._history = []
            self._branches = {}
        logger.info("History cleared")

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #
    @property
    def max_history_size(self) -> int:
        return self._eviction.max_size

    @property
    def history(self) -> Tuple[ThoughtRecord, ...]:
        """Snapshot of the retained thoughts, oldest first."""
        return tuple(self._history)

    @property
    def branches(self) -> Dict[str, Tuple[ThoughtRecord, ...]]:
        """Snapshot of the branch index."""
        return {branch_id: tuple(records) for branch_id, records in self._branches.items()}

    def branch_ids(self) -> List[str]:
        """Known branch identifiers, in the order they were first seen."""
        return list(self._branches)

    def size(self) -> int:
        """Number of retained thoughts."""
        return len(self._history)

    def __len__(self) -> int:
        return self.size()
