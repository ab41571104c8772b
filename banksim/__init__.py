"""Bank teller discrete-event simulation package."""

from banksim.core import (
    MAX_TELLERS,
    MIN_TELLERS,
    ArrivalEvent,
    BusyTimeResults,
    ConfigurationError,
    SimulationInvariantError,
    WaitTimeResults,
)
from banksim.system import BusyTimeSimulation, WaitTimeSimulation, compare_teller_counts

__all__ = [
    'MIN_TELLERS',
    'MAX_TELLERS',
    'ArrivalEvent',
    'BusyTimeResults',
    'ConfigurationError',
    'SimulationInvariantError',
    'WaitTimeResults',
    'BusyTimeSimulation',
    'WaitTimeSimulation',
    'compare_teller_counts',
]
