"""Teller state machines."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from banksim.core.base import SimulationInvariantError, Time

logger = logging.getLogger(__name__)


class Teller(ABC):
    """Base class for a server that serves at most one customer at a time."""

    def __init__(self, index: int):
        self.index = index

    @abstractmethod
    def is_available(self) -> bool:
        pass

    @abstractmethod
    def start_work(self, current_time: Time) -> None:
        """Available -> Busy. Starting a busy teller is an invariant violation."""
        pass

    @abstractmethod
    def stop_work(self, current_time: Time) -> None:
        """Busy -> Available. Stopping an idle teller is an invariant violation."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Return the teller to its initial, available state."""
        pass

    def _require_available(self, current_time: Time) -> None:
        if not self.is_available():
            raise SimulationInvariantError(
                f"Teller {self.index} started work at t={current_time} while busy"
            )

    def _require_busy(self, current_time: Time) -> None:
        if self.is_available():
            raise SimulationInvariantError(
                f"Teller {self.index} stopped work at t={current_time} while idle"
            )


class BusyTimeTeller(Teller):
    """
    Tracks when the teller became busy and accumulates elapsed busy time.

    The teller stays busy while it moves straight from one customer to the
    next, so back-to-back service counts as one continuous busy period.
    """

    def __init__(self, index: int):
        super().__init__(index)
        self.busy_since: Optional[Time] = None
        self.elapsed_busy_time: Time = 0

    def is_available(self) -> bool:
        return self.busy_since is None

    def start_work(self, current_time: Time) -> None:
        self._require_available(current_time)
        self.busy_since = current_time
        logger.debug("Teller %d busy at t=%d", self.index, current_time)

    def stop_work(self, current_time: Time) -> None:
        self._require_busy(current_time)
        elapsed = current_time - self.busy_since
        if elapsed < 0:
            raise SimulationInvariantError(
                f"Teller {self.index} stopped at t={current_time} before it started at t={self.busy_since}"
            )
        self.elapsed_busy_time += elapsed
        self.busy_since = None
        logger.debug("Teller %d available at t=%d (busy total %d)",
                     self.index, current_time, self.elapsed_busy_time)

    def elapsed_time_working(self) -> Time:
        """Accumulated busy time, read after the run has finished."""
        return self.elapsed_busy_time

    def reset(self) -> None:
        self.busy_since = None
        self.elapsed_busy_time = 0


class ServiceTeller(Teller):
    """Plain busy/available flag; wait times are computed by the simulation."""

    def __init__(self, index: int):
        super().__init__(index)
        self.is_busy = False

    def is_available(self) -> bool:
        return not self.is_busy

    def start_work(self, current_time: Time) -> None:
        self._require_available(current_time)
        self.is_busy = True
        logger.debug("Teller %d busy at t=%d", self.index, current_time)

    def stop_work(self, current_time: Time) -> None:
        self._require_busy(current_time)
        self.is_busy = False
        logger.debug("Teller %d available at t=%d", self.index, current_time)

    def reset(self) -> None:
        self.is_busy = False
