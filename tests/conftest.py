"""Shared fixtures for the bank simulation tests."""

import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt
import pytest

from banksim.core import arrivals_from_pairs

CLASSIC_PAIRS = [(20, 6), (22, 4), (23, 2), (30, 3)]


@pytest.fixture
def classic_input():
    return arrivals_from_pairs(CLASSIC_PAIRS)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')
