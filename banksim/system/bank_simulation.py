"""Bank simulation driver and event-processing loop."""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Union

from banksim.core import (
    MAX_TELLERS,
    MIN_TELLERS,
    ArrivalEvent,
    BusyTimeResults,
    BusyTimeTeller,
    ConfigurationError,
    Customer,
    DepartureEvent,
    Event,
    EventScheduler,
    ServiceRecord,
    ServiceTeller,
    SimulationInvariantError,
    Teller,
    WaitingLine,
    WaitTimeResults,
    arrivals_from_pairs,
)

logger = logging.getLogger(__name__)

Results = Union[BusyTimeResults, WaitTimeResults]


class SimulationState(Enum):
    IDLE = 'idle'
    CONFIGURING = 'configuring'
    RUNNING = 'running'
    COMPLETED = 'completed'


class BankSimulation(ABC):
    """
    Runs a fixed arrival workload against a configurable number of tellers.

    One mutable context (scheduler, bank line, tellers, accumulators) is
    reused across runs and reset to a known-empty state before each one.
    The arrival workload is the only state that persists between runs.
    """

    def __init__(self, simulation_input: Iterable[Union[ArrivalEvent, Sequence[int]]]):
        # Input is stored to restart the simulation for multiple teller counts.
        self.simulation_input = self._coerce_input(simulation_input)
        self.event_queue = EventScheduler()
        self.bank_line = WaitingLine()
        self.tellers: List[Teller] = []
        self.state = SimulationState.IDLE
        self.current_time = 0
        self.arrivals_processed = 0
        self.departures_processed = 0
        self.service_log: List[ServiceRecord] = []

    @staticmethod
    def _coerce_input(simulation_input) -> tuple:
        arrivals = []
        pairs = []
        for entry in simulation_input:
            if isinstance(entry, ArrivalEvent):
                entry.validate()
                arrivals.append(entry)
            else:
                pairs.append(entry)
        if arrivals and pairs:
            raise ConfigurationError("Simulation input mixes ArrivalEvents and raw pairs")
        return tuple(arrivals) if arrivals else arrivals_from_pairs(pairs)

    @abstractmethod
    def _make_teller(self, index: int) -> Teller:
        pass

    @abstractmethod
    def gather_results(self) -> Results:
        pass

    def _on_departure(self, current_time: int, departure: DepartureEvent) -> None:
        """Hook invoked for every departing customer before the teller is reassigned."""

    def _clear_accumulators(self) -> None:
        """Hook for variant-specific per-run accumulators."""

    @staticmethod
    def validate_teller_count(teller_count: int) -> None:
        if isinstance(teller_count, bool) or not isinstance(teller_count, int):
            raise ConfigurationError(f"Teller count must be an integer, got {teller_count!r}")
        if teller_count < MIN_TELLERS:
            raise ConfigurationError(f"Teller count must be >= {MIN_TELLERS}")
        if teller_count > MAX_TELLERS:
            raise ConfigurationError(f"Teller count must be <= {MAX_TELLERS}")

    def reset(self, teller_count: int) -> None:
        """Configure a fresh run: validate, reload events, clear line, tellers and accumulators."""
        if self.state not in (SimulationState.IDLE, SimulationState.COMPLETED):
            raise SimulationInvariantError(f"Cannot reset a simulation in state {self.state.value}")
        self.validate_teller_count(teller_count)
        self.state = SimulationState.CONFIGURING

        self.event_queue.clear()
        self.event_queue.load(self.simulation_input)
        self.bank_line.clear()

        if len(self.tellers) != teller_count:
            self.tellers = [self._make_teller(i) for i in range(teller_count)]
        for teller in self.tellers:
            teller.reset()

        self.current_time = 0
        self.arrivals_processed = 0
        self.departures_processed = 0
        self.service_log = []
        self._clear_accumulators()

    def run(self, teller_count: int) -> Results:
        """Run the whole workload with the given number of tellers."""
        self.reset(teller_count)
        logger.info("Starting run with %d teller(s), %d arrivals",
                    teller_count, len(self.simulation_input))

        self.state = SimulationState.RUNNING
        try:
            while self.event_queue:
                time, event = self.event_queue.pop()
                self.current_time = time
                self.process_event(time, event)

            self.state = SimulationState.COMPLETED
            self._check_drained()
            results = self.gather_results()
        finally:
            # A failed run leaves its partial state behind; the next reset() clears it
            self.state = SimulationState.IDLE

        logger.info("Finished run with %d teller(s) at t=%d",
                    teller_count, self.current_time)
        return results

    def process_event(self, current_time: int, event: Event) -> None:
        """Dispatch an event to arrival or departure processing."""
        if isinstance(event, ArrivalEvent):
            self.process_arrival(current_time, event)
        elif isinstance(event, DepartureEvent):
            self.process_departure(current_time, event)
        else:
            raise SimulationInvariantError(f"Unknown event type: {type(event).__name__}")

    def search_available_tellers(self) -> Optional[int]:
        """Index of the lowest-numbered available teller, or None if all are busy."""
        for i, teller in enumerate(self.tellers):
            if teller.is_available():
                return i
        return None

    def process_arrival(self, current_time: int, arrival: ArrivalEvent) -> None:
        """Serve the arrival at the first free teller, or send it to the end of the line."""
        customer = Customer(arrival, entry_time=current_time,
                            customer_id=self.arrivals_processed)
        self.arrivals_processed += 1

        teller_index = self.search_available_tellers()
        if teller_index is not None:
            self.tellers[teller_index].start_work(current_time)
            self._begin_service(current_time, teller_index, customer)
        else:
            self.bank_line.join(customer)

    def process_departure(self, current_time: int, departure: DepartureEvent) -> None:
        """Free the teller, or hand it the head of the line without going idle."""
        teller = self.tellers[departure.teller_index]
        if teller.is_available():
            raise SimulationInvariantError(
                f"Departure at t={current_time} from idle teller {departure.teller_index}"
            )
        self.departures_processed += 1
        self._on_departure(current_time, departure)

        if self.bank_line:
            next_customer = self.bank_line.next_customer()
            self._begin_service(current_time, departure.teller_index, next_customer)
        else:
            teller.stop_work(current_time)

    def _begin_service(self, current_time: int, teller_index: int, customer: Customer) -> None:
        departure_time = current_time + customer.transaction_time
        self.event_queue.push(DepartureEvent(departure_time, teller_index, customer))
        self.service_log.append(ServiceRecord(
            customer_id=customer.customer_id,
            teller_index=teller_index,
            arrival_time=customer.arrival_event.arrival_time,
            service_start=current_time,
            service_end=departure_time,
        ))

    def _check_drained(self) -> None:
        if self.event_queue:
            raise SimulationInvariantError(f"{len(self.event_queue)} events left after run")
        if self.bank_line:
            raise SimulationInvariantError(f"{len(self.bank_line)} customers left in line after run")
        busy = [t.index for t in self.tellers if not t.is_available()]
        if busy:
            raise SimulationInvariantError(f"Tellers {busy} still busy after run")
        if self.arrivals_processed != self.departures_processed:
            raise SimulationInvariantError(
                f"{self.arrivals_processed} arrivals but {self.departures_processed} departures"
            )


class BusyTimeSimulation(BankSimulation):
    """Tracks how long each teller was busy."""

    def _make_teller(self, index: int) -> Teller:
        return BusyTimeTeller(index)

    def gather_results(self) -> BusyTimeResults:
        return BusyTimeResults(
            elapsed_time_busy=tuple(t.elapsed_time_working() for t in self.tellers),
            completion_time=self.current_time,
            service_log=tuple(self.service_log),
        )

    def max_teller_busy_time(self, teller_count: int) -> int:
        return self.run(teller_count).max_teller_busy_time()


class WaitTimeSimulation(BankSimulation):
    """Tracks how long each customer waited in line before service."""

    def __init__(self, simulation_input):
        super().__init__(simulation_input)
        self.completed_customer_wait_times: List[int] = []

    def _make_teller(self, index: int) -> Teller:
        return ServiceTeller(index)

    def _clear_accumulators(self) -> None:
        self.completed_customer_wait_times = []

    def _on_departure(self, current_time: int, departure: DepartureEvent) -> None:
        customer = departure.customer
        wait_time = current_time - customer.entry_time - customer.transaction_time
        if wait_time < 0:
            raise SimulationInvariantError(
                f"Customer {customer.customer_id} has negative wait time {wait_time}"
            )
        # Customers served on arrival are not counted as having waited
        if wait_time > 0:
            self.completed_customer_wait_times.append(wait_time)

    def gather_results(self) -> WaitTimeResults:
        return WaitTimeResults(
            customer_wait_times=tuple(self.completed_customer_wait_times),
            completion_time=self.current_time,
            service_log=tuple(self.service_log),
            peak_line_length=self.bank_line.peak_length,
        )


def compare_teller_counts(simulation: BankSimulation,
                          teller_counts: Optional[Iterable[int]] = None) -> Dict[int, Results]:
    """Run the same workload once per teller count."""
    if teller_counts is None:
        teller_counts = range(MIN_TELLERS, MAX_TELLERS + 1)
    return {count: simulation.run(count) for count in teller_counts}
