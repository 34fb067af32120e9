"""Data models for the repayment calculator.

This module defines dataclasses representing the entities used by the
calculator: the validated user input, a single simulated month, a repayment
scenario and the overall simulation result. Results are frozen so that the
presentation layer can share them freely without copying.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from enum import Enum
from typing import Tuple


class ScenarioKey(str, Enum):
    """Identifies one of the three repayment strategies."""

    MINIMUM = "minimum"
    FIXED_MINIMUM = "fixed_minimum"
    FIXED_CUSTOM = "fixed_custom"

    @property
    def label(self) -> str:
        return _SCENARIO_LABELS[self]


_SCENARIO_LABELS = {
    ScenarioKey.MINIMUM: "Minimum Payment Only",
    ScenarioKey.FIXED_MINIMUM: "Fixed Payment Equal to Initial Minimum",
    ScenarioKey.FIXED_CUSTOM: "Fixed Custom Payment",
}


class InvalidInputError(ValueError):
    """Raised when a calculator input is not a finite positive number.

    Attributes
    ----------
    field: str
        Name of the offending ``CalculatorInput`` attribute.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


_POSITIVE_MESSAGES = {
    "balance": "Please enter a positive balance amount.",
    "apr": "Please enter a positive APR percentage.",
    "minimum_percentage": "Please enter a positive minimum repayment percentage.",
    "fixed_amount": "Please enter a positive fixed payment amount.",
}


@dataclass(frozen=True)
class CalculatorInput:
    """The four values a user supplies to run a simulation.

    ``apr`` and ``minimum_percentage`` are expressed in percent, so an APR of
    18.9 % is ``18.9`` and a 2 % minimum repayment is ``2``.
    """

    balance: float = 5000.0
    apr: float = 18.9
    minimum_percentage: float = 2.0
    fixed_amount: float = 200.0

    def validate(self) -> "CalculatorInput":
        """Check that every field is a finite, strictly positive number.

        Fields are checked in declaration order and the first failure is
        reported. Returns ``self`` so calls can be chained.

        Raises
        ------
        InvalidInputError
            If any field is zero, negative, infinite or NaN.
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if not (math.isfinite(value) and value > 0):
                raise InvalidInputError(f.name, _POSITIVE_MESSAGES[f.name])
        return self

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class MonthlyEntry:
    """One simulated month of one scenario.

    All monetary fields are rounded to two decimal places independently of
    each other. ``balance`` is the amount left *after* the payment and
    ``interest`` was accrued on the balance *before* it.
    """

    month: int
    balance: float
    payment: float
    interest: float


@dataclass(frozen=True)
class Scenario:
    """The full repayment schedule for a single strategy.

    ``paid_off`` is False when the schedule stopped at the month cap with debt
    still outstanding.
    """

    key: ScenarioKey
    entries: Tuple[MonthlyEntry, ...]
    total_paid: float
    paid_off: bool

    @property
    def label(self) -> str:
        return self.key.label

    @property
    def months(self) -> int:
        return len(self.entries)

    @property
    def final_balance(self) -> float:
        return self.entries[-1].balance if self.entries else 0.0


@dataclass(frozen=True)
class SimulationResult:
    """Aggregate of the three repayment scenarios.

    Attributes
    ----------
    minimum: Scenario
        Paying the percentage-of-balance minimum every month.
    fixed_minimum: Scenario
        Paying a constant amount equal to the first month's minimum.
    fixed_custom: Scenario
        Paying the user's chosen fixed amount.
    initial_minimum_payment: float
        Minimum payment on the original balance, rounded to two places.
    """

    minimum: Scenario
    fixed_minimum: Scenario
    fixed_custom: Scenario
    initial_minimum_payment: float

    @property
    def scenarios(self) -> Tuple[Scenario, Scenario, Scenario]:
        return (self.minimum, self.fixed_minimum, self.fixed_custom)

    def scenario(self, key: ScenarioKey | str) -> Scenario:
        key = ScenarioKey(key)
        for scenario in self.scenarios:
            if scenario.key is key:
                return scenario
        raise KeyError(key)

    @property
    def total_paid_minimum(self) -> float:
        return self.minimum.total_paid

    @property
    def total_paid_fixed_minimum(self) -> float:
        return self.fixed_minimum.total_paid

    @property
    def total_paid_fixed_custom(self) -> float:
        return self.fixed_custom.total_paid

    @property
    def months_minimum(self) -> int:
        return self.minimum.months

    @property
    def months_fixed_minimum(self) -> int:
        return self.fixed_minimum.months

    @property
    def months_fixed_custom(self) -> int:
        return self.fixed_custom.months
