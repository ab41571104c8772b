"""Classic four-customer branch: how many tellers does the manager need?"""

from typing import List

from banksim.core import MAX_TELLERS, MIN_TELLERS
from banksim.scripts.run_simulation import DEFAULT_INPUT, format_busy_time, format_wait_time
from banksim.system import BusyTimeSimulation, WaitTimeSimulation


def classic_bank_report(simulation_input=DEFAULT_INPUT) -> List[str]:
    """Report both the busiest-teller time and the customer waits for 1..5 tellers."""
    busy_sim = BusyTimeSimulation(simulation_input)
    wait_sim = WaitTimeSimulation(simulation_input)
    counts = range(MIN_TELLERS, MAX_TELLERS + 1)

    lines = [format_busy_time(n, busy_sim.max_teller_busy_time(n)) for n in counts]
    lines.append('')
    lines.extend(format_wait_time(n, wait_sim.run(n)) for n in counts)
    return lines


if __name__ == '__main__':
    print('\n'.join(classic_bank_report()))
