"""Random workload generation for the bank simulation."""

from .random_variables import (
    exponential,
    uniform,
    exponential_distribution,
    uniform_distribution,
    deterministic_distribution,
    scipy_distribution,
    SERVICE_DISTRIBUTIONS,
    service_distribution,
    generate_workload,
    poisson_workload,
)

__all__ = [
    'exponential',
    'uniform',
    'exponential_distribution',
    'uniform_distribution',
    'deterministic_distribution',
    'scipy_distribution',
    'SERVICE_DISTRIBUTIONS',
    'service_distribution',
    'generate_workload',
    'poisson_workload',
]
