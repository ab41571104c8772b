"""Simulation drivers."""

from .bank_simulation import (
    BankSimulation,
    BusyTimeSimulation,
    SimulationState,
    WaitTimeSimulation,
    compare_teller_counts,
)

__all__ = [
    'BankSimulation',
    'BusyTimeSimulation',
    'SimulationState',
    'WaitTimeSimulation',
    'compare_teller_counts',
]
