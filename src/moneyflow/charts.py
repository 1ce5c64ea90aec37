"""
Chart functions for visualizing a monthly plan.

All chart functions return (figure, tidy_dataframe_used) for consistency.
"""

from __future__ import annotations

import pandas as pd

from moneyflow.core.models import PlanConfig
from moneyflow.core.results import PlanResult
from moneyflow.kpi import debt_reduction, end_of_day_balances

# Plotly imports with graceful fallback
try:
    import plotly.express as px
    import plotly.graph_objects as go

    PLOTLY_AVAILABLE = True
except ImportError:
    PLOTLY_AVAILABLE = False


def _check_plotly() -> None:
    """Check if Plotly is available and raise helpful error if not."""
    if not PLOTLY_AVAILABLE:
        raise ImportError(
            "Plotly is required for chart functions. Install with:\n"
            "pip install plotly\n"
            "or\n"
            "pip install moneyflow[viz]"
        )


def balance_timeline(result: PlanResult) -> tuple[go.Figure, pd.DataFrame]:
    """
    Plot the end-of-day cash balance over the month.

    Days with a shortfall are marked, which makes it easy to see where the
    month runs out of cash.

    **Args:**
        result: Outcome of a plan run

    **Returns:**
        Tuple of (plotly_figure, tidy_dataframe_used) with columns day,
        balance and unpaid

    **Example:**
        ```python
        from moneyflow import balance_timeline, plan

        fig, data = balance_timeline(plan(document))
        fig.show()
        ```
    """
    _check_plotly()

    balances = end_of_day_balances(result)
    unpaid = (
        result.ledger_frame()
        .query("kind == 'shortfall'")
        .groupby("day")["amount"]
        .sum()
    )
    tidy = balances.to_frame().reset_index()
    tidy["unpaid"] = tidy["day"].map(unpaid).fillna(0.0)

    fig = px.line(
        tidy,
        x="day",
        y="balance",
        markers=True,
        title="Cash Balance by Day",
        labels={"balance": "Balance", "day": "Day"},
    )
    short = tidy[tidy["unpaid"] > 0]
    if not short.empty:
        fig.add_trace(
            go.Scatter(
                x=short["day"],
                y=short["balance"],
                mode="markers",
                marker={"color": "crimson", "size": 10, "symbol": "x"},
                name="Shortfall",
                customdata=short["unpaid"],
                hovertemplate="Day %{x}<br>Unpaid: %{customdata:,.0f}<extra></extra>",
            )
        )
    fig.update_layout(hovermode="x unified")

    return fig, tidy


def loan_balances_bar(
    result: PlanResult, config: PlanConfig
) -> tuple[go.Figure, pd.DataFrame]:
    """
    Plot start and end balance of every loan side by side.

    **Args:**
        result: Outcome of a plan run
        config: Configuration the result was produced from

    **Returns:**
        Tuple of (plotly_figure, tidy_dataframe_used) in long format with
        columns loan_id, name, stage (start/end) and balance
    """
    _check_plotly()

    reduction = debt_reduction(result, config).reset_index()
    tidy = reduction.melt(
        id_vars=["loan_id", "name"],
        value_vars=["start_balance", "end_balance"],
        var_name="stage",
        value_name="balance",
    )
    tidy["stage"] = tidy["stage"].map(
        {"start_balance": "start", "end_balance": "end"}
    )

    fig = px.bar(
        tidy,
        x="name",
        y="balance",
        color="stage",
        barmode="group",
        title=f"Loan Balances ({result.meta.get('strategy', '')})",
        labels={"balance": "Balance", "name": "Loan", "stage": ""},
    )

    return fig, tidy
