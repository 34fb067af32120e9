"""Core simulation engine for the repayment calculator.

This module implements the financial logic that builds month-by-month
repayment schedules for a revolving credit card balance under three
strategies: paying the percentage-of-balance minimum, paying a fixed amount
equal to the first month's minimum, and paying a custom fixed amount. Results
are returned as a ``SimulationResult``.

The running balance is carried at full float precision from month to month;
rounding is applied only to the values recorded in each ``MonthlyEntry`` and
to the final totals.
"""

from __future__ import annotations

import logging
from typing import Callable, List

from .data_models import MonthlyEntry, Scenario, ScenarioKey, SimulationResult
from .utils import round2

logger = logging.getLogger(__name__)

MINIMUM_PAYMENT_FLOOR = 25.0  # no minimum payment is ever below this amount
MAX_MONTHS = 600  # 50 years; bounds schedules that never amortize
PAYOFF_THRESHOLD = 0.01  # sub-cent remainders count as paid off

PaymentRule = Callable[[float], float]


def minimum_payment(balance: float, percentage: float, floor: float = MINIMUM_PAYMENT_FLOOR) -> float:
    """Return the minimum payment due on ``balance``.

    The minimum is ``percentage`` percent of the balance, but never less than
    ``floor``:

        minimum = max(percentage / 100 * balance, floor)
    """
    return max(percentage / 100 * balance, floor)


def _run_scenario(
    key: ScenarioKey,
    balance: float,
    monthly_rate: float,
    nominal_payment: PaymentRule,
    max_months: int,
) -> Scenario:
    """Simulate one strategy until the balance is cleared or the cap is hit.

    Parameters
    ----------
    key: ScenarioKey
        Which strategy is being simulated; recorded on the result.
    balance: float
        Starting balance.
    monthly_rate: float
        Periodic interest rate as a fraction (APR / 100 / 12).
    nominal_payment: Callable[[float], float]
        Returns the scheduled payment for a month given the balance at the
        start of that month.
    max_months: int
        Hard upper bound on the schedule length.
    """
    entries: List[MonthlyEntry] = []
    current_balance = balance
    total_paid = 0.0
    month = 0

    while current_balance > 0 and month < max_months:
        month += 1
        interest = current_balance * monthly_rate
        # Never pay more than clears the debt this month
        payment = min(nominal_payment(current_balance), current_balance + interest)
        current_balance = max(0.0, current_balance + interest - payment)
        total_paid += payment

        entries.append(
            MonthlyEntry(
                month=month,
                balance=round2(current_balance),
                payment=round2(payment),
                interest=round2(interest),
            )
        )

        if current_balance < PAYOFF_THRESHOLD:
            break

    scenario = Scenario(
        key=key,
        entries=tuple(entries),
        total_paid=round2(total_paid),
        paid_off=current_balance < PAYOFF_THRESHOLD,
    )
    logger.debug(
        "Scenario %s: %d months, total paid %.2f", key.value, scenario.months, scenario.total_paid
    )
    if not scenario.paid_off:
        logger.info(
            "Scenario %s did not pay off within %d months; final balance %.2f",
            key.value,
            max_months,
            scenario.final_balance,
        )
    return scenario


def simulate(
    balance: float,
    apr: float,
    minimum_percentage: float,
    fixed_amount: float,
    *,
    floor: float = MINIMUM_PAYMENT_FLOOR,
    max_months: int = MAX_MONTHS,
) -> SimulationResult:
    """Simulate paying off ``balance`` under the three repayment strategies.

    Inputs are expected to be strictly positive; callers should run
    ``CalculatorInput.validate`` first. No validation happens here.

    Parameters
    ----------
    balance: float
        Outstanding card balance.
    apr: float
        Annual percentage rate in percent (e.g. ``18.9``).
    minimum_percentage: float
        Minimum repayment as a percentage of the balance (e.g. ``2``).
    fixed_amount: float
        Custom fixed monthly payment for the third scenario.
    floor: float
        Lowest allowed minimum payment.
    max_months: int
        Schedule length cap. A scenario that reaches it keeps its remaining
        balance in the last entry; no error is raised.

    Returns
    -------
    SimulationResult
        The three schedules with their totals and the initial minimum
        payment.
    """
    monthly_rate = apr / 100 / 12
    initial_minimum = minimum_payment(balance, minimum_percentage, floor)

    def pay_minimum(current_balance: float) -> float:
        return minimum_payment(current_balance, minimum_percentage, floor)

    minimum = _run_scenario(ScenarioKey.MINIMUM, balance, monthly_rate, pay_minimum, max_months)
    fixed_minimum = _run_scenario(
        ScenarioKey.FIXED_MINIMUM, balance, monthly_rate, lambda _: initial_minimum, max_months
    )
    fixed_custom = _run_scenario(
        ScenarioKey.FIXED_CUSTOM, balance, monthly_rate, lambda _: fixed_amount, max_months
    )

    return SimulationResult(
        minimum=minimum,
        fixed_minimum=fixed_minimum,
        fixed_custom=fixed_custom,
        initial_minimum_payment=round2(initial_minimum),
    )
