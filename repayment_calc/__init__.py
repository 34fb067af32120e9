"""Credit card repayment calculator.

Simulates paying off a card balance by the minimum payment, by a fixed
payment equal to the first minimum, and by a custom fixed payment.
"""

from .data_models import CalculatorInput, InvalidInputError, MonthlyEntry, Scenario, ScenarioKey, SimulationResult
from .engine import simulate

__all__ = [
    "CalculatorInput",
    "InvalidInputError",
    "MonthlyEntry",
    "Scenario",
    "ScenarioKey",
    "SimulationResult",
    "simulate",
]
