"""Visualization utilities for bank simulation results."""

from .plotting import (
    plot_teller_comparison,
    plot_wait_time_distribution,
    plot_service_timeline
)

__all__ = [
    'plot_teller_comparison',
    'plot_wait_time_distribution',
    'plot_service_timeline'
]
