"""Simulation result containers and aggregation."""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from banksim.core.base import TellerIndex, Time


@dataclass(frozen=True)
class ServiceRecord:
    """One customer's service at a teller."""
    customer_id: int
    teller_index: TellerIndex
    arrival_time: Time
    service_start: Time
    service_end: Time

    @property
    def wait_time(self) -> Time:
        return self.service_start - self.arrival_time


@dataclass(frozen=True)
class BusyTimeResults:
    """Per-teller accumulated busy durations for one run."""
    elapsed_time_busy: Tuple[Time, ...]
    completion_time: Time = 0
    service_log: Tuple[ServiceRecord, ...] = field(default_factory=tuple)

    def max_teller_busy_time(self) -> Time:
        """Finds the max teller busy time, a proxy for how backed up the bank got."""
        if not self.elapsed_time_busy:
            return 0
        return max(self.elapsed_time_busy)

    def utilization(self) -> List[float]:
        """Fraction of the run each teller spent busy."""
        if self.completion_time <= 0:
            return [0.0] * len(self.elapsed_time_busy)
        return [busy / self.completion_time for busy in self.elapsed_time_busy]

    def summary(self) -> Dict:
        return {
            'teller_count': len(self.elapsed_time_busy),
            'elapsed_time_busy': list(self.elapsed_time_busy),
            'max_teller_busy_time': self.max_teller_busy_time(),
            'utilization': self.utilization(),
            'completion_time': self.completion_time,
            'customers_served': len(self.service_log),
        }


@dataclass(frozen=True)
class WaitTimeResults:
    """Positive per-customer wait durations for one run, in departure order."""
    customer_wait_times: Tuple[Time, ...]
    completion_time: Time = 0
    service_log: Tuple[ServiceRecord, ...] = field(default_factory=tuple)
    peak_line_length: int = 0

    def average_wait_time(self) -> float:
        if not self.customer_wait_times:
            return 0.0
        return sum(self.customer_wait_times) / len(self.customer_wait_times)

    def max_wait_time(self) -> Time:
        if not self.customer_wait_times:
            return 0
        return max(self.customer_wait_times)

    def summary(self) -> Dict:
        return {
            'customers_served': len(self.service_log),
            'customers_waited': len(self.customer_wait_times),
            'customer_wait_times': list(self.customer_wait_times),
            'average_wait_time': self.average_wait_time(),
            'max_wait_time': self.max_wait_time(),
            'peak_line_length': self.peak_line_length,
            'completion_time': self.completion_time,
        }
