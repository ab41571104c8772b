#!/usr/bin/env python3
"""Command-line interface for running bank teller simulations."""

import argparse
import json
import logging
import math
import sys
import numpy as np
from typing import Dict, List, Optional, Sequence, Tuple

from scipy import stats

from banksim.core import MAX_TELLERS, MIN_TELLERS, ConfigurationError
from banksim.distributions import SERVICE_DISTRIBUTIONS, poisson_workload
from banksim.system import BusyTimeSimulation, WaitTimeSimulation, compare_teller_counts
from banksim.visualization import plot_teller_comparison

logger = logging.getLogger(__name__)

# The classic four-customer workload: (arrival_time, transaction_time)
DEFAULT_INPUT: List[Tuple[int, int]] = [(20, 6), (22, 4), (23, 2), (30, 3)]

METRICS = ('busy', 'wait')


def _tellers_label(teller_count: int) -> str:
    return 'teller' if teller_count == 1 else 'tellers'


def format_busy_time(teller_count: int, max_busy_time: int) -> str:
    """Console line for the busy-time variant."""
    return f"Time waiting with {teller_count} {_tellers_label(teller_count)}: {max_busy_time}"


def format_wait_time(teller_count: int, results) -> str:
    """Console line for the wait-time variant."""
    return (f"Results with {teller_count} {_tellers_label(teller_count)}: "
            f"Average Wait Time = {results.average_wait_time()}, "
            f"Max Wait Time = {results.max_wait_time()}")


def load_input(path: str) -> List[Tuple[int, int]]:
    """
    Load an arrival workload from JSON.

    Accepts either a bare list of [arrival_time, transaction_time] pairs or an
    object with an "arrivals" key holding that list.
    """
    with open(path, 'r') as f:
        data = json.load(f)
    logger.info("Loaded workload from %s", path)
    if isinstance(data, dict):
        if 'arrivals' not in data:
            raise ConfigurationError(f"{path}: expected an 'arrivals' key")
        data = data['arrivals']
    if not isinstance(data, list):
        raise ConfigurationError(f"{path}: arrivals must be a list of pairs")
    for pair in data:
        if not isinstance(pair, list):
            raise ConfigurationError(f"{path}: expected [arrival_time, transaction_time], got {pair!r}")
    return [tuple(pair) for pair in data]


def create_simulation(metric: str, simulation_input: Sequence[Sequence[int]]):
    """Create the simulation variant for the requested metric."""
    if metric == 'busy':
        return BusyTimeSimulation(simulation_input)
    if metric == 'wait':
        return WaitTimeSimulation(simulation_input)
    raise ConfigurationError(f"Unknown metric: {metric}")


def run_comparison(metric: str,
                   simulation_input: Sequence[Sequence[int]],
                   teller_counts: Sequence[int]) -> Dict:
    """Run one workload across several teller counts."""
    simulation = create_simulation(metric, simulation_input)
    return compare_teller_counts(simulation, teller_counts)


def _replication_metrics(metric: str, results) -> Dict[str, float]:
    if metric == 'busy':
        return {
            'max_teller_busy_time': float(results.max_teller_busy_time()),
            'mean_utilization': float(np.mean(results.utilization())),
        }
    return {
        'average_wait_time': results.average_wait_time(),
        'max_wait_time': float(results.max_wait_time()),
    }


def mean_ci(values: List[float], confidence_level: float = 0.95) -> Tuple[float, float]:
    """Return (mean, half-width) using a t-distribution critical value."""
    if not values:
        return 0.0, 0.0
    mu = float(np.mean(values))
    n = len(values)
    if n < 2:
        return mu, 0.0
    alpha = 1.0 - confidence_level
    tcrit = stats.t.ppf(1 - alpha / 2.0, n - 1)
    half = float(tcrit * np.std(values, ddof=1) / math.sqrt(n))
    return mu, half


def run_replications(metric: str,
                     teller_counts: Sequence[int],
                     num_replications: int,
                     n_customers: int,
                     arrival_rate: float,
                     mean_transaction: float,
                     base_seed: int = 42,
                     confidence_level: float = 0.95,
                     service: str = 'exponential') -> Dict:
    """
    Run independent random workloads and compute statistics per teller count.

    Every teller count sees the same workload within a replication, so the
    comparison uses common random numbers.
    """
    samples: Dict[int, Dict[str, List[float]]] = {c: {} for c in teller_counts}

    for i in range(num_replications):
        seed = base_seed + i
        workload = poisson_workload(n_customers, arrival_rate, mean_transaction,
                                    seed=seed, service=service)
        for count, results in run_comparison(metric, workload, teller_counts).items():
            for key, value in _replication_metrics(metric, results).items():
                samples[count].setdefault(key, []).append(value)

    summary = {
        'replications': num_replications,
        'n_customers': n_customers,
        'arrival_rate': arrival_rate,
        'mean_transaction': mean_transaction,
        'service': service,
        'tellers': {}
    }

    for count, metrics in samples.items():
        summary['tellers'][count] = {}
        for key, values in metrics.items():
            mu, half = mean_ci(values, confidence_level)
            summary['tellers'][count][key] = {
                'mean': mu,
                'std': float(np.std(values)),
                'min': float(np.min(values)),
                'max': float(np.max(values)),
                'ci_half_width': half
            }

    return summary


def results_to_dict(results: Dict) -> Dict:
    """Convert {teller_count: results} into JSON-serializable summaries."""
    return {str(count): res.summary() for count, res in results.items()}


def save_results(results: Dict, output_path: str) -> None:
    """Save results to JSON file."""
    with open(output_path, 'w') as f:
        json.dump(results, f, indent=2)


def print_results(metric: str, results: Dict, detailed: bool = False) -> None:
    """Print one line per teller count, plus per-teller detail if requested."""
    for count, res in results.items():
        if metric == 'busy':
            print(format_busy_time(count, res.max_teller_busy_time()))
            if detailed:
                for i, (busy, util) in enumerate(zip(res.elapsed_time_busy, res.utilization())):
                    print(f"    Teller {i + 1}: busy {busy}, utilization {util:.4f}")
        else:
            print(format_wait_time(count, res))
            if detailed:
                print(f"    Wait times: {list(res.customer_wait_times)}")
                print(f"    Peak line length: {res.peak_line_length}")


def print_replication_summary(summary: Dict, detailed: bool = False) -> None:
    """Print statistics from multiple replications."""
    print("\n=== Replication Results ===")
    print(f"Replications: {summary['replications']}")
    print(f"Customers per replication: {summary['n_customers']}")

    for count, metrics in summary['tellers'].items():
        print(f"\n{count} {_tellers_label(count)}:")
        for metric, stats_ in metrics.items():
            print(f"  {metric}: {stats_['mean']:.4f} (±{stats_['ci_half_width']:.4f})")
            if detailed:
                print(f"    Std: {stats_['std']:.4f}, Min: {stats_['min']:.4f}, Max: {stats_['max']:.4f}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Run bank teller simulations')

    parser.add_argument('metric', choices=METRICS,
                        help='Track teller busy time or customer wait time')
    parser.add_argument('-t', '--tellers', type=int, nargs='+',
                        default=list(range(MIN_TELLERS, MAX_TELLERS + 1)),
                        help=f'Teller counts to simulate (default: {MIN_TELLERS}..{MAX_TELLERS})')

    # Workload
    parser.add_argument('-i', '--input', type=str,
                        help='JSON file of [arrival_time, transaction_time] pairs')
    parser.add_argument('-g', '--generate', type=int, metavar='N',
                        help='Generate a random workload of N customers')
    parser.add_argument('--arrival-rate', type=float, default=0.2,
                        help='Arrivals per time unit for generated workloads (default: 0.2)')
    parser.add_argument('--mean-transaction', type=float, default=8.0,
                        help='Mean transaction time for generated workloads (default: 8.0)')
    parser.add_argument('--service', choices=sorted(SERVICE_DISTRIBUTIONS), default='exponential',
                        help='Transaction-time distribution for generated workloads (default: exponential)')
    parser.add_argument('-r', '--replications', type=int, default=1,
                        help='Number of random replications (default: 1)')
    parser.add_argument('-s', '--seed', type=int, default=42,
                        help='Random seed (default: 42)')

    # Output options
    parser.add_argument('-o', '--output', type=str,
                        help='Output file for results (JSON)')
    parser.add_argument('-p', '--plot', action='store_true',
                        help='Show comparison plot')
    parser.add_argument('--plot-file', type=str,
                        help='Save comparison plot to file')
    parser.add_argument('-d', '--detailed', action='store_true',
                        help='Show detailed statistics')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Suppress console output')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log every event')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    try:
        if args.replications < 1:
            raise ConfigurationError("--replications must be >= 1")
        if args.replications > 1:
            if args.input:
                raise ConfigurationError("--replications draws random workloads; it cannot use --input")
            if args.plot or args.plot_file:
                raise ConfigurationError("Plots are not available with --replications")
            n_customers = args.generate or 100
            results = run_replications(args.metric, args.tellers, args.replications,
                                       n_customers, args.arrival_rate,
                                       args.mean_transaction, args.seed,
                                       service=args.service)
            if not args.quiet:
                print_replication_summary(results, args.detailed)
            if args.output:
                save_results(results, args.output)
                if not args.quiet:
                    print(f"\nResults saved to: {args.output}")
            return

        if args.input and args.generate:
            raise ConfigurationError("Use either --input or --generate, not both")
        if args.input:
            simulation_input = load_input(args.input)
        elif args.generate:
            simulation_input = poisson_workload(args.generate, args.arrival_rate,
                                                args.mean_transaction, seed=args.seed,
                                                service=args.service)
        else:
            simulation_input = DEFAULT_INPUT

        results = run_comparison(args.metric, simulation_input, args.tellers)
    except (ConfigurationError, ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    # Output results
    if not args.quiet:
        print_results(args.metric, results, args.detailed)

    if args.output:
        save_results(results_to_dict(results), args.output)
        if not args.quiet:
            print(f"\nResults saved to: {args.output}")

    # Generate plots
    if args.plot or args.plot_file:
        fig = plot_teller_comparison(results)

        if args.plot_file:
            fig.savefig(args.plot_file, dpi=300, bbox_inches='tight')
            if not args.quiet:
                print(f"Plot saved to: {args.plot_file}")

        if args.plot:
            import matplotlib.pyplot as plt
            plt.show()


if __name__ == '__main__':
    main()
