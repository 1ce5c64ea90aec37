"""
KPI calculation utilities for monthly plan analysis.

This module provides standalone functions for computing indicators from a
PlanResult. All functions work on the ledger DataFrame (see
`PlanResult.ledger_frame`) and return pandas Series or DataFrames.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from moneyflow.core.kinds import K
from moneyflow.core.models import MAX_DAY, PlanConfig
from moneyflow.core.results import PlanResult

DAY_INDEX = pd.RangeIndex(1, MAX_DAY + 1, name="day")


def end_of_day_balances(result: PlanResult) -> pd.Series:
    """
    Cash balance at the end of every day of the month.

    Days without ledger entries carry the previous day's balance; days before
    the first entry carry the start balance.

    Args:
        result: Outcome of a plan run

    Returns:
        Series indexed by day (1..31) with the end-of-day balance
    """
    start = float(result.meta.get("start_balance", 0.0))
    df = result.ledger_frame()
    if df.empty:
        return pd.Series(start, index=DAY_INDEX, name="balance", dtype=float)

    last = df.groupby("day")["running_balance"].last()
    balances = last.reindex(DAY_INDEX).ffill().fillna(start)
    return balances.rename("balance")


def lowest_balance(result: PlanResult) -> tuple[int, float]:
    """
    Day and amount of the lowest end-of-day balance.

    Ties resolve to the earliest day.
    """
    balances = end_of_day_balances(result)
    day = int(balances.idxmin())
    return day, float(balances.loc[day])


def shortfall_days(result: PlanResult) -> pd.Series:
    """
    Unpaid amount per day, for days with at least one shortfall.

    Returns:
        Series indexed by day with the summed shortfall amount (empty when
        every obligation was covered)
    """
    df = result.ledger_frame()
    shortfalls = df[df["kind"] == K.SHORTFALL]
    return shortfalls.groupby("day")["amount"].sum().rename("unpaid")


def category_totals(result: PlanResult) -> pd.DataFrame:
    """
    Ledger amounts summed by category and entry kind.

    Returns:
        DataFrame indexed by category with one column per entry kind
        (credit, debit, shortfall), zeros where a combination never occurs
    """
    df = result.ledger_frame()
    if df.empty:
        return pd.DataFrame(
            0.0, index=K.all_categories(), columns=K.all_entry_kinds()
        )
    table = df.pivot_table(
        index="category",
        columns="kind",
        values="amount",
        aggfunc="sum",
        fill_value=0.0,
    )
    return table.reindex(
        index=K.all_categories(), columns=K.all_entry_kinds(), fill_value=0.0
    )


def debt_reduction(result: PlanResult, config: PlanConfig) -> pd.DataFrame:
    """
    Per-loan balance reduction over the month.

    Args:
        result: Outcome of a plan run
        config: Configuration the result was produced from

    Returns:
        DataFrame indexed by loan id with columns name, start_balance,
        end_balance, paid and paid_pct (share of the starting balance
        repaid; NaN for loans that started at zero)
    """
    rows = [
        {
            "loan_id": loan.id,
            "name": loan.name,
            "start_balance": float(loan.balance),
            "end_balance": float(result.loan_balances.get(loan.id, loan.balance)),
        }
        for loan in config.loans
    ]
    df = pd.DataFrame(
        rows, columns=["loan_id", "name", "start_balance", "end_balance"]
    ).set_index("loan_id")
    df["paid"] = df["start_balance"] - df["end_balance"]

    start = df["start_balance"].to_numpy()
    paid = df["paid"].to_numpy()
    with np.errstate(divide="ignore", invalid="ignore"):
        df["paid_pct"] = np.where(start > 0, paid / start, np.nan)
    return df
