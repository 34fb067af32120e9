"""Output helpers for the repayment calculator.

This module turns a ``SimulationResult`` into something a person can read:
currency strings, the presentational aggregates shown next to each scenario
(interest paid, interest saved compared with paying the minimum) and simple
tabular text for the terminal. Nothing here re-runs the amortization; every
figure is read from, or is a plain difference of, values the engine produced.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .data_models import CalculatorInput, MonthlyEntry, Scenario, SimulationResult
from .utils import format_duration, round2

CURRENCY_OPTIONS: Dict[str, Dict[str, str]] = {
    "USD": {"label": "US dollar", "symbol": "$"},
    "EUR": {"label": "Euro", "symbol": "€"},
    "GBP": {"label": "British pound", "symbol": "£"},
}
DEFAULT_CURRENCY = "USD"

DISPLAY_RANGES: Dict[str, str] = {
    "all": "All months",
    "first12": "First 12 months",
    "first24": "First 24 months",
    "first60": "First 60 months",
    "last12": "Last 12 months",
}


def normalize_currency(code: str | None) -> str:
    """Return ``code`` upper-cased if supported, otherwise the default."""
    code = (code or "").strip().upper()
    return code if code in CURRENCY_OPTIONS else DEFAULT_CURRENCY


def format_currency(amount: float, currency: str = DEFAULT_CURRENCY) -> str:
    """Format ``amount`` with a currency symbol and thousands separators.

    >>> format_currency(1234.5)
    '$1,234.50'
    >>> format_currency(-12, "GBP")
    '-£12.00'
    """
    symbol = CURRENCY_OPTIONS[normalize_currency(currency)]["symbol"]
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def describe_payoff(scenario: Scenario) -> str:
    """Return the time to pay off, or a note when the cap was reached.

    An unpaid scenario always runs to the month cap, so its length is the cap.
    """
    if not scenario.paid_off:
        return f"Not paid off within {format_duration(scenario.months)}"
    return format_duration(scenario.months)


def interest_paid(scenario: Scenario, balance: float) -> float:
    """Total paid over the life of the scenario minus the starting balance."""
    return round2(scenario.total_paid - balance)


def total_interest(scenario: Scenario) -> float:
    """Sum of the recorded monthly interest amounts."""
    return round2(sum(entry.interest for entry in scenario.entries))


def interest_savings(result: SimulationResult) -> Dict[str, float]:
    """Interest saved by each fixed-payment scenario versus paying the minimum.

    A negative value means the fixed payment accrues more interest than the
    minimum-payment baseline.
    """
    baseline = total_interest(result.minimum)
    return {
        result.fixed_minimum.key.value: round2(baseline - total_interest(result.fixed_minimum)),
        result.fixed_custom.key.value: round2(baseline - total_interest(result.fixed_custom)),
    }


def select_months(entries: Sequence[MonthlyEntry], display_range: str = "all") -> List[MonthlyEntry]:
    """Return the slice of ``entries`` named by ``display_range``.

    Raises
    ------
    ValueError
        If ``display_range`` is not one of ``DISPLAY_RANGES``.
    """
    if display_range == "all":
        return list(entries)
    if display_range == "last12":
        return list(entries[-12:])
    if display_range in DISPLAY_RANGES:
        return list(entries[: int(display_range[len("first"):])])
    raise ValueError(f"Unknown display range: {display_range}")


def first_payments(entries: Sequence[MonthlyEntry], count: int = 3) -> List[Tuple[int, float]]:
    return [(entry.month, entry.payment) for entry in entries[:count]]


def last_payments(entries: Sequence[MonthlyEntry], count: int = 3) -> List[Tuple[int, float]]:
    return [(entry.month, entry.payment) for entry in entries[-count:]]


def scenario_payment_label(
    scenario: Scenario, result: SimulationResult, inputs: CalculatorInput, currency: str
) -> str:
    """Describe the monthly payment for the summary and comparison views."""
    if scenario is result.minimum:
        return f"Decreasing (starts at {format_currency(result.initial_minimum_payment, currency)})"
    if scenario is result.fixed_minimum:
        return format_currency(result.initial_minimum_payment, currency)
    return format_currency(inputs.fixed_amount, currency)


def print_summary(result: SimulationResult, inputs: CalculatorInput, currency: str = DEFAULT_CURRENCY) -> None:
    """Print a summary block for each scenario in a human-readable format."""
    print("Payment Summary")
    print("-" * 72)
    print(f"Starting balance        : {format_currency(inputs.balance, currency)}")
    print(f"Initial minimum payment : {format_currency(result.initial_minimum_payment, currency)}")
    for number, scenario in enumerate(result.scenarios, start=1):
        print()
        print(f"Scenario {number}: {scenario.label}")
        print(f"  Monthly payment : {scenario_payment_label(scenario, result, inputs, currency)}")
        print(f"  Time to pay off : {describe_payoff(scenario)}")
        print(f"  Total paid      : {format_currency(scenario.total_paid, currency)}")
        print(f"  Interest paid   : {format_currency(interest_paid(scenario, inputs.balance), currency)}")
        if not scenario.paid_off:
            print(f"  Balance left    : {format_currency(scenario.final_balance, currency)}")
    print("-" * 72)


def print_schedule(entries: Sequence[MonthlyEntry], currency: str = DEFAULT_CURRENCY) -> None:
    """Print a repayment schedule as a simple tab-separated table."""
    print("\t".join(["Month", "Payment", "Interest", "Balance"]))
    for entry in entries:
        row = [
            str(entry.month),
            format_currency(entry.payment, currency),
            format_currency(entry.interest, currency),
            format_currency(entry.balance, currency),
        ]
        print("\t".join(row))


def print_comparison(result: SimulationResult, inputs: CalculatorInput, currency: str = DEFAULT_CURRENCY) -> None:
    """Print the three scenarios side by side.

    The last row shows interest saved relative to scenario 1; a positive
    number means the scenario is cheaper than paying only the minimum.
    """
    savings = interest_savings(result)
    scenarios = result.scenarios

    def row(metric: str, values: Sequence[str]) -> None:
        print(f"{metric:24s}" + "".join(f"{v:>26s}" for v in values))

    print("Side-by-Side Comparison")
    print("=" * 102)
    row("Metric", ["Scenario 1", "Scenario 2", "Scenario 3"])
    row("Starting balance", [format_currency(inputs.balance, currency)] * 3)
    row("Monthly payment", [scenario_payment_label(s, result, inputs, currency) for s in scenarios])
    row("Time to pay off", [describe_payoff(s) for s in scenarios])
    row("Total paid", [format_currency(s.total_paid, currency) for s in scenarios])
    row("Total interest", [format_currency(total_interest(s), currency) for s in scenarios])
    row(
        "Interest saved vs. min",
        ["-"] + [format_currency(savings[s.key.value], currency) for s in scenarios[1:]],
    )
    print("=" * 102)
