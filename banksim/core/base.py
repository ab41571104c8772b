"""Base types for the bank teller simulation."""

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple, Union

# Integer simulated time units.
Time = int
TellerIndex = int

MIN_TELLERS = 1
MAX_TELLERS = 5


class ConfigurationError(ValueError):
    """Raised when a run is configured with an invalid teller count or workload."""


class SimulationInvariantError(RuntimeError):
    """
    Raised when the engine reaches a state that valid transitions cannot produce.
    Never handled inside the package.
    """


@dataclass(frozen=True)
class ArrivalEvent:
    """A customer entering the bank with a known transaction duration."""
    arrival_time: Time
    transaction_time: Time

    def validate(self) -> None:
        """Reject workloads the engine cannot simulate."""
        for name, value in (('arrival_time', self.arrival_time),
                            ('transaction_time', self.transaction_time)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.arrival_time < 0:
            raise ConfigurationError("arrival_time must be >= 0")
        if self.transaction_time <= 0:
            raise ConfigurationError("transaction_time must be > 0")


@dataclass(frozen=True)
class Customer:
    """An arrival plus the time the customer entered the bank line."""
    arrival_event: ArrivalEvent
    entry_time: Time
    customer_id: int = 0  # position in arrival-processing order

    @property
    def transaction_time(self) -> Time:
        return self.arrival_event.transaction_time


@dataclass(frozen=True)
class DepartureEvent:
    """The moment a teller finishes serving its current customer."""
    departure_time: Time
    teller_index: TellerIndex
    customer: Customer


# Closed union: every dispatch site handles exactly these two cases.
Event = Union[ArrivalEvent, DepartureEvent]

# A list of arrival events used to start the simulation.
SimulationInput = Tuple[ArrivalEvent, ...]


def event_time(event: Event) -> Time:
    """Return the time of either an arrival or a departure event."""
    if isinstance(event, ArrivalEvent):
        return event.arrival_time
    if isinstance(event, DepartureEvent):
        return event.departure_time
    raise SimulationInvariantError(f"Unknown event type: {type(event).__name__}")


def arrivals_from_pairs(pairs: Iterable[Sequence[int]]) -> SimulationInput:
    """Build a validated simulation input from (arrival, transaction) pairs."""
    arrivals = []
    for pair in pairs:
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise ConfigurationError(
                f"Arrival entries must be (arrival_time, transaction_time) pairs, got {pair!r}"
            )
        arrival = ArrivalEvent(arrival_time=pair[0], transaction_time=pair[1])
        arrival.validate()
        arrivals.append(arrival)
    return tuple(arrivals)
