"""Charts comparing the three repayment scenarios.

Each chart has the month on the x axis and one line per scenario. The series
are built from the recorded schedule entries only. Rendering uses a
standalone ``Figure`` with the Agg canvas so it is safe to call from a web
request handler.
"""

from __future__ import annotations

import io
from itertools import accumulate
from pathlib import Path
from typing import Dict, List, Union

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from .data_models import ScenarioKey, SimulationResult
from .utils import round2

CHART_METRICS: Dict[str, str] = {
    "balance": "Remaining Balance Over Time",
    "payment": "Monthly Payments",
    "interest": "Monthly Interest Charges",
    "cumulative-payment": "Total Amount Paid Over Time",
    "cumulative-interest": "Total Interest Paid Over Time",
}

COLORS = {
    ScenarioKey.MINIMUM: "#e74c3c",
    ScenarioKey.FIXED_MINIMUM: "#3498db",
    ScenarioKey.FIXED_CUSTOM: "#2ecc71",
}


def chart_series(result: SimulationResult, metric: str) -> Dict[str, List[float]]:
    """Build the data behind one chart.

    Returns a dict with a ``"month"`` axis running from 1 to the longest
    schedule, plus one list per scenario keyed by ``ScenarioKey`` value.
    Months after a scenario has finished read as zero, except on cumulative
    charts where the final total carries forward.

    Raises
    ------
    ValueError
        If ``metric`` is not one of ``CHART_METRICS``.
    """
    if metric not in CHART_METRICS:
        raise ValueError(f"Unknown chart metric: {metric}")
    length = max(s.months for s in result.scenarios)
    series: Dict[str, List[float]] = {"month": list(range(1, length + 1))}

    for scenario in result.scenarios:
        if metric in ("balance", "payment", "interest"):
            values = [getattr(entry, metric) for entry in scenario.entries]
            values += [0.0] * (length - len(values))
        else:
            field = "payment" if metric == "cumulative-payment" else "interest"
            values = [round2(v) for v in accumulate(getattr(e, field) for e in scenario.entries)]
            values += [values[-1] if values else 0.0] * (length - len(values))
        series[scenario.key.value] = values
    return series


def render_chart(
    result: SimulationResult,
    metric: str,
    output: Union[str, Path, io.BytesIO],
    currency_symbol: str = "$",
) -> None:
    """Draw ``metric`` for every scenario and save it as a PNG to ``output``."""
    series = chart_series(result, metric)

    fig = Figure(figsize=(10, 5))
    FigureCanvasAgg(fig)
    ax = fig.add_subplot(1, 1, 1)
    for number, scenario in enumerate(result.scenarios, start=1):
        ax.plot(
            series["month"],
            series[scenario.key.value],
            label=f"Scenario {number}: {scenario.label}",
            color=COLORS[scenario.key],
            linewidth=1.8,
        )

    ax.set_title(CHART_METRICS[metric], fontsize=12, fontweight="bold")
    ax.set_xlabel("Month")
    ax.set_ylabel(f"Amount ({currency_symbol})")
    ax.grid(axis="y", alpha=0.3)
    ax.legend(loc="best", fontsize=9)
    fig.tight_layout()

    if isinstance(output, (str, Path)):
        out = Path(output)
        out.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(str(out), format="png", dpi=120)
    else:
        fig.savefig(output, format="png", dpi=120)
