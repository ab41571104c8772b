"""
Random arrival workloads for the bank simulation.
Samplers draw from a numpy Generator so a seed reproduces a workload exactly;
scipy.stats distributions can be plugged in by name.
"""

import numpy as np
from typing import Callable, Dict, List, Optional, Tuple
from scipy import stats

Sampler = Callable[[np.random.Generator], float]


# Basic distributions
def exponential(rng: np.random.Generator, rate: float) -> float:
    """Generate exponential random variable."""
    if rate <= 0:
        return 0.0
    return rng.exponential(1.0 / rate)


def uniform(rng: np.random.Generator, a: float, b: float) -> float:
    """Generate uniform random variable between a and b."""
    return rng.uniform(a, b)


# Distribution factory functions
def exponential_distribution(rate: float) -> Sampler:
    """Create an exponential distribution function."""
    return lambda rng: exponential(rng, rate)


def uniform_distribution(a: float, b: float) -> Sampler:
    """Create a uniform distribution function."""
    return lambda rng: uniform(rng, a, b)


def deterministic_distribution(value: float) -> Sampler:
    """Create a deterministic distribution (always returns same value)."""
    return lambda rng: value


def scipy_distribution(dist_name: str, **params) -> Sampler:
    """
    Create a distribution function from scipy.stats.

    Examples:
        scipy_distribution('gamma', a=2, scale=1.5)   # Gamma(2, 1.5)
        scipy_distribution('poisson', mu=4)           # Poisson(4)
    """
    dist = getattr(stats, dist_name)
    return lambda rng: dist.rvs(random_state=rng, **params)


# Transaction-time families, each parameterized by its mean
SERVICE_DISTRIBUTIONS: Dict[str, Callable[[float], Sampler]] = {
    'exponential': lambda mean: exponential_distribution(1.0 / mean),
    'deterministic': lambda mean: deterministic_distribution(mean),
    'uniform': lambda mean: uniform_distribution(0.5 * mean, 1.5 * mean),
    'gamma': lambda mean: scipy_distribution('gamma', a=2.0, scale=mean / 2.0),
}


def service_distribution(name: str, mean: float) -> Sampler:
    """Transaction-time sampler of the named family with the given mean."""
    if name not in SERVICE_DISTRIBUTIONS:
        raise ValueError(f"Unknown service distribution: {name}")
    if mean <= 0:
        raise ValueError("mean_transaction must be > 0")
    return SERVICE_DISTRIBUTIONS[name](mean)


# Workloads
def generate_workload(n_customers: int,
                      interarrival: Sampler,
                      transaction: Sampler,
                      start: int = 0,
                      seed: Optional[int] = None) -> List[Tuple[int, int]]:
    """
    Generate (arrival_time, transaction_time) integer pairs.

    Args:
        n_customers: Number of arrivals to generate
        interarrival: Sampler for the gap between consecutive arrivals
        transaction: Sampler for service durations
        start: Time of the first possible arrival
        seed: Seed for the numpy Generator

    Returns:
        Pairs sorted by arrival time; transaction times are at least 1.
    """
    if n_customers < 0:
        raise ValueError("n_customers must be >= 0")
    if start < 0:
        raise ValueError("start must be >= 0")

    rng = np.random.default_rng(seed)
    workload = []
    clock = float(start)

    for _ in range(n_customers):
        clock += max(float(interarrival(rng)), 0.0)
        # Rounding a non-decreasing clock keeps arrivals sorted
        arrival_time = int(round(clock))
        transaction_time = max(1, int(round(float(transaction(rng)))))
        workload.append((arrival_time, transaction_time))

    return workload


def poisson_workload(n_customers: int,
                     arrival_rate: float,
                     mean_transaction: float,
                     seed: Optional[int] = None,
                     service: str = 'exponential') -> List[Tuple[int, int]]:
    """Poisson arrivals; transaction times follow the named service distribution."""
    if arrival_rate <= 0:
        raise ValueError("arrival_rate must be > 0")
    if mean_transaction <= 0:
        raise ValueError("mean_transaction must be > 0")
    return generate_workload(
        n_customers,
        interarrival=exponential_distribution(arrival_rate),
        transaction=service_distribution(service, mean_transaction),
        seed=seed,
    )
