import io
import os

from flask import Flask, abort, jsonify, render_template, request, send_file

from repayment_calc.data_models import CalculatorInput, InvalidInputError, ScenarioKey
from repayment_calc.formatter import (
    CURRENCY_OPTIONS,
    DISPLAY_RANGES,
    describe_payoff,
    first_payments,
    format_currency,
    interest_paid,
    interest_savings,
    last_payments,
    normalize_currency,
    scenario_payment_label,
    select_months,
    total_interest,
)
from repayment_calc.main import result_to_dict, run_simulation
from repayment_calc.plotting import CHART_METRICS, render_chart
from repayment_calc.utils import parse_amount, parse_percent

app = Flask(__name__)
app.config["ASSET_VERSION"] = os.environ.get("ASSET_VERSION", "1")
app.config["DEFAULT_CURRENCY"] = normalize_currency(os.environ.get("REPAYMENT_CALC_CURRENCY"))

_DEFAULTS = CalculatorInput()


def _field(values, name: str) -> str:
    raw = values.get(name, "")
    raw = raw.strip() if raw else ""
    return raw or str(getattr(_DEFAULTS, name))


def _form_to_inputs(values) -> CalculatorInput:
    """Parse and validate the calculator fields from a form or query string.

    Missing fields fall back to the form defaults. Raises ``ValueError``
    (including ``InvalidInputError``) on bad input.
    """
    return CalculatorInput(
        balance=parse_amount(_field(values, "balance")),
        apr=parse_percent(_field(values, "apr")),
        minimum_percentage=parse_percent(_field(values, "minimum_percentage")),
        fixed_amount=parse_amount(_field(values, "fixed_amount")),
    ).validate()


def _last(values, name: str, default: str) -> str:
    # Tab buttons resubmit the form, so the clicked value follows the hidden one
    submitted = values.getlist(name)
    return submitted[-1] if submitted else default


def _form_echo(values) -> dict:
    """Raw field values to re-populate the form with what the user typed."""
    return {name: _field(values, name) for name in _DEFAULTS.as_dict()}


def _summary_cards(result, inputs, currency: str) -> list[dict]:
    cards = []
    for number, scenario in enumerate(result.scenarios, start=1):
        cards.append(
            {
                "number": number,
                "key": scenario.key.value,
                "label": scenario.label,
                "payment": scenario_payment_label(scenario, result, inputs, currency),
                "time_to_pay": describe_payoff(scenario),
                "paid_off": scenario.paid_off,
                "total_paid": format_currency(scenario.total_paid, currency),
                "interest_paid": format_currency(interest_paid(scenario, inputs.balance), currency),
            }
        )
    return cards


def _comparison_rows(result, inputs, currency: str) -> list[tuple[str, list[str]]]:
    savings = interest_savings(result)
    scenarios = result.scenarios

    def payments(pairs):
        return ", ".join(f"Month {m}: {format_currency(p, currency)}" for m, p in pairs)

    return [
        ("Starting Balance", [format_currency(inputs.balance, currency)] * 3),
        ("Monthly Payment", [scenario_payment_label(s, result, inputs, currency) for s in scenarios]),
        ("Time to Pay Off", [describe_payoff(s) for s in scenarios]),
        ("Total Paid", [format_currency(s.total_paid, currency) for s in scenarios]),
        ("Total Interest", [format_currency(total_interest(s), currency) for s in scenarios]),
        (
            "Interest Savings vs. Minimum",
            ["-"] + [format_currency(savings[s.key.value], currency) for s in scenarios[1:]],
        ),
        ("First 3 Payments", [payments(first_payments(s.entries)) for s in scenarios]),
        ("Last 3 Payments", [payments(last_payments(s.entries)) for s in scenarios]),
    ]


@app.route("/", methods=["GET", "POST"])
def index():
    values = request.form if request.method == "POST" else request.args
    currency = normalize_currency(values.get("currency") or app.config["DEFAULT_CURRENCY"])
    active_scenario = _last(values, "scenario", ScenarioKey.MINIMUM.value)
    if active_scenario not in {k.value for k in ScenarioKey}:
        active_scenario = ScenarioKey.MINIMUM.value
    display_range = _last(values, "range", "all")
    if display_range not in DISPLAY_RANGES:
        display_range = "all"

    context = {
        "form": _form_echo(values),
        "error": None,
        "result": None,
        "currency_code": currency,
        "currency_options": CURRENCY_OPTIONS,
        "display_ranges": DISPLAY_RANGES,
        "chart_metrics": CHART_METRICS,
        "scenario_keys": list(ScenarioKey),
        "active_scenario": active_scenario,
        "display_range": display_range,
        "asset_version": app.config["ASSET_VERSION"],
        "format_currency": format_currency,
    }
    status = 200

    if request.method == "POST":
        try:
            inputs = _form_to_inputs(values)
        except ValueError as exc:
            app.logger.warning("Rejected calculator input: %s", exc)
            context["error"] = str(exc)
            status = 400
        else:
            result = run_simulation(inputs)
            scenario = result.scenario(active_scenario)
            context.update(
                result=result,
                inputs=inputs,
                query=inputs.as_dict(),
                summary_cards=_summary_cards(result, inputs, currency),
                comparison_rows=_comparison_rows(result, inputs, currency),
                schedule_title=scenario.label,
                schedule=select_months(scenario.entries, display_range),
            )

    return render_template("index.html", **context), status


@app.get("/chart/<metric>.png")
def chart(metric: str):
    if metric not in CHART_METRICS:
        abort(404)
    try:
        inputs = _form_to_inputs(request.args)
    except ValueError as exc:
        abort(400, description=str(exc))
    currency = normalize_currency(request.args.get("currency") or app.config["DEFAULT_CURRENCY"])
    buffer = io.BytesIO()
    render_chart(run_simulation(inputs), metric, buffer, CURRENCY_OPTIONS[currency]["symbol"])
    buffer.seek(0)
    return send_file(buffer, mimetype="image/png")


@app.get("/api/simulate")
def api_simulate():
    try:
        inputs = _form_to_inputs(request.args)
    except InvalidInputError as exc:
        return jsonify({"error": str(exc), "field": exc.field}), 400
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify(result_to_dict(run_simulation(inputs), inputs))


if __name__ == "__main__":
    print("Starting Repayment Calculator web app...")
    app.run(host="0.0.0.0", port=8710, debug=True)
