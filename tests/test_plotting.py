"""Smoke tests for the plotting helpers."""

import pytest
from matplotlib.figure import Figure

from banksim.core import WaitTimeResults
from banksim.system import BusyTimeSimulation, WaitTimeSimulation, compare_teller_counts
from banksim.visualization import (
    plot_service_timeline,
    plot_teller_comparison,
    plot_wait_time_distribution,
)


class TestPlotting:

    @pytest.mark.parametrize('sim_cls', [BusyTimeSimulation, WaitTimeSimulation])
    def test_teller_comparison(self, classic_input, sim_cls):
        results = compare_teller_counts(sim_cls(classic_input))
        fig = plot_teller_comparison(results)

        assert isinstance(fig, Figure)
        assert len(fig.axes) == 2

    def test_teller_comparison_requires_results(self):
        with pytest.raises(ValueError):
            plot_teller_comparison({})

    def test_wait_time_distribution(self, classic_input):
        fig = plot_wait_time_distribution(WaitTimeSimulation(classic_input).run(1))
        assert isinstance(fig, Figure)

    def test_wait_time_distribution_empty(self):
        fig = plot_wait_time_distribution(WaitTimeResults(()))
        assert fig.axes[0].texts[0].get_text() == 'No Wait Time Data'

    def test_service_timeline(self, classic_input):
        fig = plot_service_timeline(BusyTimeSimulation(classic_input).run(3))

        ax = fig.axes[0]
        assert [label.get_text() for label in ax.get_yticklabels()] == [
            'Teller 1', 'Teller 2', 'Teller 3'
        ]
        assert len(ax.patches) == 4
