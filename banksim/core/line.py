"""Bank line implementation."""

import logging
from collections import deque

from banksim.core.base import Customer, SimulationInvariantError

logger = logging.getLogger(__name__)


class WaitingLine:
    """Unbounded FIFO line of customers not yet assigned a teller."""

    def __init__(self):
        self.queue = deque()
        self.peak_length = 0

    def join(self, customer: Customer) -> None:
        """Place a customer at the end of the line."""
        self.queue.append(customer)
        self.peak_length = max(self.peak_length, len(self.queue))
        logger.debug("Customer joined line at t=%d (length %d)",
                     customer.entry_time, len(self.queue))

    def next_customer(self) -> Customer:
        """Remove and return the customer at the head of the line."""
        if not self.queue:
            raise SimulationInvariantError("Dequeued from an empty bank line")
        return self.queue.popleft()

    def clear(self) -> None:
        self.queue.clear()
        self.peak_length = 0

    def __len__(self) -> int:
        return len(self.queue)

    def __bool__(self) -> bool:
        return bool(self.queue)
