"""
Visualization utilities for bank simulation results.
"""

import matplotlib.pyplot as plt
import numpy as np
from typing import Dict, Optional
import seaborn as sns

from banksim.core import BusyTimeResults, WaitTimeResults


def plot_teller_comparison(results: Dict[int, object],
                           title: str = "Teller Count Comparison"):
    """Bar charts of the headline metric for each teller count."""
    counts = sorted(results)
    if not counts:
        raise ValueError("No results to plot")
    first = results[counts[0]]
    labels = [str(c) for c in counts]
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    if isinstance(first, WaitTimeResults):
        sns.barplot(x=labels, y=[results[c].average_wait_time() for c in counts],
                    color='steelblue', ax=ax1)
        ax1.set_ylabel('Average Wait Time')
        ax1.set_title('Average Wait')
        sns.barplot(x=labels, y=[results[c].max_wait_time() for c in counts],
                    color='indianred', ax=ax2)
        ax2.set_ylabel('Max Wait Time')
        ax2.set_title('Max Wait')
    else:
        sns.barplot(x=labels, y=[results[c].max_teller_busy_time() for c in counts],
                    color='steelblue', ax=ax1)
        ax1.set_ylabel('Max Teller Busy Time')
        ax1.set_title('Busiest Teller')
        utilization = [np.mean(results[c].utilization()) for c in counts]
        sns.barplot(x=labels, y=utilization, color='seagreen', ax=ax2)
        ax2.set_ylabel('Mean Utilization')
        ax2.set_ylim(0, 1)
        ax2.set_title('Teller Utilization')

    for ax in (ax1, ax2):
        ax.set_xlabel('Tellers')
    fig.suptitle(title, fontsize=14)
    plt.tight_layout()
    return fig


def plot_wait_time_distribution(results: WaitTimeResults,
                                title: str = "Customer Wait Times"):
    """Histogram of per-customer wait times for a single run."""
    fig, ax = plt.subplots(figsize=(10, 6))

    waits = list(results.customer_wait_times)
    if waits:
        sns.histplot(waits, discrete=True, ax=ax, color='steelblue')
        ax.axvline(results.average_wait_time(), color='red', linestyle='--',
                   label=f'Average = {results.average_wait_time():.2f}')
        ax.legend()
    else:
        ax.text(0.5, 0.5, 'No Wait Time Data',
                ha='center', va='center', transform=ax.transAxes)

    ax.set_xlabel('Wait Time')
    ax.set_ylabel('Customers')
    ax.set_title(title)
    return fig


def plot_service_timeline(results, title: Optional[str] = None):
    """Gantt-like chart of which teller served which customer and when."""
    fig, ax = plt.subplots(figsize=(12, 6))

    log = results.service_log
    if isinstance(results, BusyTimeResults):
        teller_count = len(results.elapsed_time_busy)
    else:
        teller_count = max((r.teller_index for r in log), default=-1) + 1

    palette = sns.color_palette('husl', max(len(log), 1))
    for i, record in enumerate(log):
        ax.barh(record.teller_index, record.service_end - record.service_start,
                left=record.service_start, height=0.5, color=palette[i],
                edgecolor='black')
        ax.text(record.service_start + (record.service_end - record.service_start) / 2,
                record.teller_index, str(record.customer_id),
                ha='center', va='center', fontsize=8)

    ax.set_yticks(range(teller_count))
    ax.set_yticklabels([f'Teller {i + 1}' for i in range(teller_count)])
    ax.set_xlabel('Time')
    ax.set_title(title or f'Service Timeline ({teller_count} teller(s))')
    ax.grid(True, axis='x', alpha=0.3)
    return fig
