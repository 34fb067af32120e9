"""Command-line interface for the repayment calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can print full repayment schedules, view the payment
summary, compare the three strategies side by side or draw a chart. Results
can be printed to the terminal or exported to JSON/CSV/PNG files.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click

from .data_models import CalculatorInput, InvalidInputError, ScenarioKey, SimulationResult
from .engine import simulate
from .formatter import (
    CURRENCY_OPTIONS,
    DISPLAY_RANGES,
    format_currency,
    interest_paid,
    interest_savings,
    print_comparison,
    print_schedule,
    print_summary,
    select_months,
    total_interest,
)
from .plotting import CHART_METRICS, render_chart
from .utils import parse_amount, parse_percent

_DEFAULTS = CalculatorInput()


def _parse_option(parser: Callable[[str], float], value: str, name: str) -> float:
    try:
        return parser(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint=name)


def build_inputs_from_options(
    balance: str,
    apr: str,
    minimum_percentage: str,
    fixed_amount: str,
) -> CalculatorInput:
    """Parse raw option strings into a validated ``CalculatorInput``.

    Raises
    ------
    click.BadParameter
        If a value is not a number or is not strictly positive.
    """
    inputs = CalculatorInput(
        balance=_parse_option(parse_amount, balance, "--balance"),
        apr=_parse_option(parse_percent, apr, "--apr"),
        minimum_percentage=_parse_option(parse_percent, minimum_percentage, "--minimum-percentage"),
        fixed_amount=_parse_option(parse_amount, fixed_amount, "--fixed-amount"),
    )
    try:
        return inputs.validate()
    except InvalidInputError as exc:
        raise click.BadParameter(str(exc), param_hint="--" + exc.field.replace("_", "-"))


def run_simulation(inputs: CalculatorInput) -> SimulationResult:
    return simulate(inputs.balance, inputs.apr, inputs.minimum_percentage, inputs.fixed_amount)


def result_to_dict(result: SimulationResult, inputs: CalculatorInput) -> Dict[str, Any]:
    """Convert a result into a JSON-serialisable document."""
    savings = interest_savings(result)
    scenarios = {}
    for scenario in result.scenarios:
        scenarios[scenario.key.value] = {
            "label": scenario.label,
            "total_paid": scenario.total_paid,
            "months": scenario.months,
            "paid_off": scenario.paid_off,
            "total_interest": total_interest(scenario),
            "interest_paid": interest_paid(scenario, inputs.balance),
            "interest_saved": savings.get(scenario.key.value),
            "schedule": [
                {
                    "month": e.month,
                    "balance": e.balance,
                    "payment": e.payment,
                    "interest": e.interest,
                }
                for e in scenario.entries
            ],
        }
    return {
        "inputs": inputs.as_dict(),
        "initial_minimum_payment": result.initial_minimum_payment,
        "scenarios": scenarios,
    }


def export_to_json(path: Path, result: SimulationResult, inputs: CalculatorInput, include_schedule: bool = True) -> None:
    """Export the simulation to a JSON file."""
    data = result_to_dict(result, inputs)
    if not include_schedule:
        for scenario in data["scenarios"].values():
            scenario.pop("schedule")
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, result: SimulationResult) -> None:
    """Export all three schedules to one CSV file, one row per scenario month."""
    header = ["Scenario", "Month", "Payment", "Interest", "Balance"]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for scenario in result.scenarios:
            for e in scenario.entries:
                writer.writerow([scenario.key.value, e.month, e.payment, e.interest, e.balance])


def input_options(func):
    """Attach the four calculator inputs and the currency option to a command."""
    options = [
        click.option("--balance", "-b", "balance", default=str(_DEFAULTS.balance), show_default=True, help="Current card balance"),
        click.option("--apr", "-r", "apr", default=str(_DEFAULTS.apr), show_default=True, help="Annual percentage rate (percent)"),
        click.option(
            "--minimum-percentage",
            "-m",
            "minimum_percentage",
            default=str(_DEFAULTS.minimum_percentage),
            show_default=True,
            help="Minimum repayment as a percentage of the balance",
        ),
        click.option(
            "--fixed-amount",
            "-f",
            "fixed_amount",
            default=str(_DEFAULTS.fixed_amount),
            show_default=True,
            help="Custom fixed monthly payment",
        ),
        click.option(
            "--currency",
            "currency",
            type=click.Choice(list(CURRENCY_OPTIONS), case_sensitive=False),
            default="USD",
            show_default=True,
            help="Currency used for display only",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log simulation details")
def cli(verbose: bool) -> None:
    """Compare paying off a credit card by minimum or fixed payments."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@input_options
@click.option(
    "--scenario",
    "scenario",
    type=click.Choice(["all"] + [k.value for k in ScenarioKey]),
    default="all",
    show_default=True,
    help="Which schedule to print",
)
@click.option(
    "--range",
    "display_range",
    type=click.Choice(list(DISPLAY_RANGES)),
    default="first12",
    show_default=True,
    help="Months of the schedule to print",
)
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(
    balance: str,
    apr: str,
    minimum_percentage: str,
    fixed_amount: str,
    currency: str,
    scenario: str,
    display_range: str,
    output: Optional[str],
) -> None:
    """Compute and print the repayment schedules."""
    inputs = build_inputs_from_options(balance, apr, minimum_percentage, fixed_amount)
    result = run_simulation(inputs)
    currency = currency.upper()
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, result, inputs)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, result)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv", param_hint="--output")
        click.echo(f"Schedules exported to {path}")
        return

    print_summary(result, inputs, currency)
    selected = result.scenarios if scenario == "all" else [result.scenario(scenario)]
    for item in selected:
        rows = select_months(item.entries, display_range)
        click.echo("")
        click.echo(f"{item.label} ({DISPLAY_RANGES[display_range].lower()}, {len(rows)} of {item.months} rows)")
        print_schedule(rows, currency)


@cli.command()
@input_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(
    balance: str,
    apr: str,
    minimum_percentage: str,
    fixed_amount: str,
    currency: str,
    output: Optional[str],
) -> None:
    """Compute and print only the payment summary."""
    inputs = build_inputs_from_options(balance, apr, minimum_percentage, fixed_amount)
    result = run_simulation(inputs)
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension", param_hint="--output")
        export_to_json(path, result, inputs, include_schedule=False)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(result, inputs, currency.upper())


@cli.command()
@input_options
def compare(
    balance: str,
    apr: str,
    minimum_percentage: str,
    fixed_amount: str,
    currency: str,
) -> None:
    """Compare the three repayment strategies side by side."""
    inputs = build_inputs_from_options(balance, apr, minimum_percentage, fixed_amount)
    result = run_simulation(inputs)
    currency = currency.upper()
    print_comparison(result, inputs, currency)
    cheapest = min(result.scenarios, key=lambda s: (not s.paid_off, s.total_paid))
    click.echo(f"Cheapest strategy: {cheapest.label} ({format_currency(cheapest.total_paid, currency)})")


@cli.command()
@input_options
@click.option(
    "--metric",
    "metric",
    type=click.Choice(list(CHART_METRICS)),
    default="balance",
    show_default=True,
    help="What to plot",
)
@click.option("--output", "output", required=True, type=str, help="Output image path (.png)")
def chart(
    balance: str,
    apr: str,
    minimum_percentage: str,
    fixed_amount: str,
    currency: str,
    metric: str,
    output: str,
) -> None:
    """Draw a chart comparing the three scenarios."""
    path = Path(output)
    if path.suffix.lower() != ".png":
        raise click.BadParameter("Charts must use .png extension", param_hint="--output")
    inputs = build_inputs_from_options(balance, apr, minimum_percentage, fixed_amount)
    result = run_simulation(inputs)
    render_chart(result, metric, path, CURRENCY_OPTIONS[currency.upper()]["symbol"])
    click.echo(f"Chart saved to {path}")


if __name__ == "__main__":
    cli()
