"""Shared fixtures for the repayment calculator tests."""

import pytest

from repayment_calc.data_models import CalculatorInput, SimulationResult
from repayment_calc.engine import simulate


@pytest.fixture
def default_inputs() -> CalculatorInput:
    """$5000 balance at 18.9% APR, 2% minimum, $200 fixed payment."""
    return CalculatorInput(balance=5000.0, apr=18.9, minimum_percentage=2.0, fixed_amount=200.0)


@pytest.fixture
def default_result(default_inputs) -> SimulationResult:
    return simulate(
        default_inputs.balance,
        default_inputs.apr,
        default_inputs.minimum_percentage,
        default_inputs.fixed_amount,
    )


@pytest.fixture
def runaway_result() -> SimulationResult:
    """Every payment is smaller than the monthly interest, so debt grows."""
    return simulate(10000.0, 29.99, 0.1, 10.0)
