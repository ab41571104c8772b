"""Core components of the bank teller simulation."""

from .base import (
    MAX_TELLERS,
    MIN_TELLERS,
    ArrivalEvent,
    ConfigurationError,
    Customer,
    DepartureEvent,
    Event,
    SimulationInput,
    SimulationInvariantError,
    arrivals_from_pairs,
    event_time,
)
from .line import WaitingLine
from .results import BusyTimeResults, ServiceRecord, WaitTimeResults
from .scheduler import EventScheduler
from .teller import BusyTimeTeller, ServiceTeller, Teller

__all__ = [
    'MIN_TELLERS',
    'MAX_TELLERS',
    'ArrivalEvent',
    'ConfigurationError',
    'Customer',
    'DepartureEvent',
    'Event',
    'SimulationInput',
    'SimulationInvariantError',
    'arrivals_from_pairs',
    'event_time',
    'WaitingLine',
    'BusyTimeResults',
    'ServiceRecord',
    'WaitTimeResults',
    'EventScheduler',
    'Teller',
    'BusyTimeTeller',
    'ServiceTeller',
]
