"""Tests for the simulation driver in both tracking variants."""

import pytest

from banksim.core import (
    ArrivalEvent,
    ConfigurationError,
    Customer,
    DepartureEvent,
    ServiceRecord,
    SimulationInvariantError,
)
from banksim.distributions import poisson_workload
from banksim.system import (
    BusyTimeSimulation,
    SimulationState,
    WaitTimeSimulation,
    compare_teller_counts,
)

SIMULATIONS = [BusyTimeSimulation, WaitTimeSimulation]


class TestBusyTimeScenario:

    @pytest.mark.parametrize('tellers, expected', [(1, 15), (2, 11), (3, 9), (4, 9), (5, 9)])
    def test_max_teller_busy_time(self, classic_input, tellers, expected):
        sim = BusyTimeSimulation(classic_input)
        assert sim.max_teller_busy_time(tellers) == expected

    def test_single_teller_serves_back_to_back(self, classic_input):
        results = BusyTimeSimulation(classic_input).run(1)

        assert results.elapsed_time_busy == (15,)
        assert results.completion_time == 35
        assert results.utilization() == [15 / 35]
        assert results.service_log == (
            ServiceRecord(0, 0, 20, 20, 26),
            ServiceRecord(1, 0, 22, 26, 30),
            ServiceRecord(2, 0, 23, 30, 32),
            ServiceRecord(3, 0, 30, 32, 35),
        )

    def test_two_tellers(self, classic_input):
        results = BusyTimeSimulation(classic_input).run(2)

        # Teller 0 frees first at the t=26 tie and takes the waiting customer
        assert results.elapsed_time_busy == (11, 4)
        assert results.completion_time == 33

    def test_lowest_index_idle_teller_wins(self, classic_input):
        results = BusyTimeSimulation(classic_input).run(5)

        assert results.elapsed_time_busy == (9, 4, 2, 0, 0)
        assert [r.teller_index for r in results.service_log] == [0, 1, 2, 0]

    def test_busy_time_totals_transaction_times(self):
        workload = poisson_workload(80, arrival_rate=0.3, mean_transaction=7.0, seed=3)
        total = sum(t for _, t in workload)
        sim = BusyTimeSimulation(workload)

        for tellers in range(1, 6):
            assert sum(sim.run(tellers).elapsed_time_busy) == total


class TestWaitTimeScenario:

    def test_single_teller(self, classic_input):
        results = WaitTimeSimulation(classic_input).run(1)

        # The first customer is served on arrival and is not counted
        assert results.customer_wait_times == (4, 7, 2)
        assert results.average_wait_time() == pytest.approx(13 / 3)
        assert results.max_wait_time() == 7
        assert results.peak_line_length == 2

    def test_two_tellers(self, classic_input):
        results = WaitTimeSimulation(classic_input).run(2)

        assert results.customer_wait_times == (3,)
        assert results.average_wait_time() == 3.0
        assert results.max_wait_time() == 3

    @pytest.mark.parametrize('tellers', [3, 4, 5])
    def test_enough_tellers_means_no_waiting(self, classic_input, tellers):
        results = WaitTimeSimulation(classic_input).run(tellers)

        assert results.customer_wait_times == ()
        assert results.average_wait_time() == 0.0
        assert results.max_wait_time() == 0
        assert results.peak_line_length == 0
        assert len(results.service_log) == len(classic_input)

    def test_wait_matches_service_log(self):
        workload = poisson_workload(50, arrival_rate=0.3, mean_transaction=6.0, seed=11)
        results = WaitTimeSimulation(workload).run(2)

        logged = sorted(r.wait_time for r in results.service_log if r.wait_time > 0)
        assert sorted(results.customer_wait_times) == logged


class TestRunProperties:

    @pytest.mark.parametrize('sim_cls', SIMULATIONS)
    @pytest.mark.parametrize('tellers', range(1, 6))
    def test_drain_and_conservation(self, classic_input, sim_cls, tellers):
        sim = sim_cls(classic_input)
        sim.run(tellers)

        assert not sim.event_queue
        assert not sim.bank_line
        assert all(t.is_available() for t in sim.tellers)
        assert sim.arrivals_processed == sim.departures_processed == len(classic_input)
        assert len(sim.service_log) == len(classic_input)
        assert sim.state is SimulationState.IDLE

    @pytest.mark.parametrize('sim_cls', SIMULATIONS)
    def test_runs_are_reproducible(self, sim_cls):
        workload = poisson_workload(60, arrival_rate=0.25, mean_transaction=8.0, seed=5)
        sim = sim_cls(workload)

        first = sim.run(2)
        sim.run(4)
        assert sim.run(2) == first
        assert sim_cls(workload).run(2) == first

    def test_max_wait_non_increasing_with_tellers(self):
        workload = poisson_workload(120, arrival_rate=0.3, mean_transaction=9.0, seed=7)
        results = compare_teller_counts(WaitTimeSimulation(workload))

        max_waits = [results[n].max_wait_time() for n in range(1, 6)]
        waited = [len(results[n].customer_wait_times) for n in range(1, 6)]
        assert max_waits == sorted(max_waits, reverse=True)
        assert waited == sorted(waited, reverse=True)

    def test_max_busy_never_exceeds_single_teller(self):
        workload = poisson_workload(120, arrival_rate=0.3, mean_transaction=9.0, seed=7)
        results = compare_teller_counts(BusyTimeSimulation(workload))

        baseline = results[1].max_teller_busy_time()
        assert all(results[n].max_teller_busy_time() <= baseline for n in range(2, 6))

    def test_simultaneous_arrivals_keep_input_order(self):
        sim = WaitTimeSimulation([(5, 3), (5, 2), (5, 1)])
        results = sim.run(1)

        assert [r.customer_id for r in results.service_log] == [0, 1, 2]
        assert results.customer_wait_times == (3, 5)

    @pytest.mark.parametrize('sim_cls', SIMULATIONS)
    def test_empty_input(self, sim_cls):
        results = sim_cls([]).run(3)

        assert results.completion_time == 0
        assert results.service_log == ()
        if sim_cls is BusyTimeSimulation:
            assert results.max_teller_busy_time() == 0
            assert results.utilization() == [0.0, 0.0, 0.0]
        else:
            assert results.average_wait_time() == 0.0
            assert results.max_wait_time() == 0


class TestConfiguration:

    @pytest.mark.parametrize('sim_cls', SIMULATIONS)
    @pytest.mark.parametrize('tellers', [0, 6, -1])
    def test_teller_count_out_of_range(self, classic_input, sim_cls, tellers):
        sim = sim_cls(classic_input)
        with pytest.raises(ConfigurationError):
            sim.run(tellers)
        assert sim.state is SimulationState.IDLE

    @pytest.mark.parametrize('tellers', [2.0, '2', True])
    def test_teller_count_must_be_integer(self, classic_input, tellers):
        with pytest.raises(ConfigurationError):
            BusyTimeSimulation(classic_input).run(tellers)

    def test_rejects_invalid_workload(self):
        with pytest.raises(ConfigurationError):
            BusyTimeSimulation([(3, 0)])
        with pytest.raises(ConfigurationError):
            WaitTimeSimulation([ArrivalEvent(-2, 4)])

    def test_rejects_mixed_input(self):
        with pytest.raises(ConfigurationError):
            BusyTimeSimulation([ArrivalEvent(1, 1), (2, 2)])

    def test_rejected_config_leaves_simulation_usable(self, classic_input):
        sim = BusyTimeSimulation(classic_input)
        with pytest.raises(ConfigurationError):
            sim.run(6)
        assert sim.max_teller_busy_time(1) == 15

    def test_reset_resizes_tellers(self, classic_input):
        sim = BusyTimeSimulation(classic_input)
        sim.run(5)
        sim.reset(2)

        assert len(sim.tellers) == 2
        assert len(sim.event_queue) == len(classic_input)
        assert sim.state is SimulationState.CONFIGURING

    def test_compare_teller_counts_defaults_to_all_counts(self, classic_input):
        results = compare_teller_counts(BusyTimeSimulation(classic_input))
        assert sorted(results) == [1, 2, 3, 4, 5]


class TestInvariants:

    def test_departure_from_idle_teller(self, classic_input):
        sim = WaitTimeSimulation(classic_input)
        sim.reset(1)
        customer = Customer(ArrivalEvent(20, 6), 20)

        with pytest.raises(SimulationInvariantError):
            sim.process_departure(26, DepartureEvent(26, 0, customer))

    def test_negative_wait_is_invariant_violation(self, classic_input):
        sim = WaitTimeSimulation(classic_input)
        sim.reset(1)
        sim.tellers[0].start_work(20)
        # Departing before the transaction could have finished
        customer = Customer(ArrivalEvent(20, 6), 20)

        with pytest.raises(SimulationInvariantError):
            sim.process_departure(24, DepartureEvent(24, 0, customer))

    def test_unknown_event_type(self, classic_input):
        sim = BusyTimeSimulation(classic_input)
        sim.reset(1)
        with pytest.raises(SimulationInvariantError):
            sim.process_event(0, object())

    def test_failed_run_does_not_block_next_run(self, classic_input):
        class FailsOnFirstEvent(BusyTimeSimulation):
            fail_next = True

            def process_event(self, current_time, event):
                if self.fail_next:
                    self.fail_next = False
                    raise SimulationInvariantError("injected failure")
                super().process_event(current_time, event)

        sim = FailsOnFirstEvent(classic_input)
        with pytest.raises(SimulationInvariantError, match="injected failure"):
            sim.run(1)

        assert sim.state is SimulationState.IDLE
        assert sim.max_teller_busy_time(1) == 15
