"""Time-ordered event scheduler."""

import heapq
import itertools
import logging
from typing import Iterable, List, Optional, Tuple

from banksim.core.base import (
    ArrivalEvent,
    Event,
    SimulationInvariantError,
    Time,
    event_time,
)

logger = logging.getLogger(__name__)


class EventScheduler:
    """
    Min-heap of pending events.

    Entries are (time, sequence, event). The earliest time always pops first;
    events sharing a time pop in the order they were pushed.
    """

    def __init__(self):
        # Event heap: (time, sequence, event)
        self.event_heap: List[Tuple[Time, int, Event]] = []
        self._sequence = itertools.count()
        self.last_popped_time: Optional[Time] = None

    def push(self, event: Event) -> None:
        """Schedule an event; it may not lie in the past."""
        time = event_time(event)
        if self.last_popped_time is not None and time < self.last_popped_time:
            raise SimulationInvariantError(
                f"Event scheduled at t={time} before current time t={self.last_popped_time}"
            )
        heapq.heappush(self.event_heap, (time, next(self._sequence), event))
        logger.debug("Event queued: %s", event)

    def load(self, arrivals: Iterable[ArrivalEvent]) -> None:
        """Load the arrival workload, preserving input order among equal times."""
        for arrival in arrivals:
            self.push(arrival)

    def pop(self) -> Tuple[Time, Event]:
        """Remove and return the chronologically next (time, event)."""
        if not self.event_heap:
            raise SimulationInvariantError("Popped from an empty event scheduler")
        time, _, event = heapq.heappop(self.event_heap)
        self.last_popped_time = time
        logger.debug("Event dequeued: %s", event)
        return time, event

    def peek_time(self) -> Optional[Time]:
        if not self.event_heap:
            return None
        return self.event_heap[0][0]

    def clear(self) -> None:
        self.event_heap.clear()
        self._sequence = itertools.count()
        self.last_popped_time = None

    def __len__(self) -> int:
        return len(self.event_heap)

    def __bool__(self) -> bool:
        return bool(self.event_heap)
