"""
Event scheduler: turns a plan configuration into 31 day buckets.
"""

from __future__ import annotations

from .events import CashEvent, DayBucket
from .kinds import K
from .models import MAX_DAY, PlanConfig, clamp_day

# Goals carry no day of their own; every contribution is booked on the 25th.
GOAL_DAY = 25


def _outflow_sort_key(event: CashEvent) -> tuple[int, int]:
    order = K.OUTFLOW_ORDER[event.kind]
    priority = -event.priority if event.kind == K.E_BILL else 0
    return order, priority


def build_schedule(config: PlanConfig) -> list[DayBucket]:
    """
    Distribute incomes, bills, loan minimums and goal contributions over days.

    Outflows inside a bucket settle bills first (higher priority first), then
    loan minimums, then goal contributions. The sort is stable, so ties keep
    configuration order. Inflows keep configuration order.

    Args:
        config: Normalized plan configuration

    Returns:
        List of 31 buckets; index i holds day i + 1
    """
    days = [DayBucket(day=d) for d in range(1, MAX_DAY + 1)]

    for income in config.incomes:
        days[clamp_day(income.day) - 1].inflow.append(
            CashEvent(K.E_INCOME, income.id, income.name, income.amount)
        )

    for bill in config.bills:
        days[clamp_day(bill.day) - 1].outflow.append(
            CashEvent(K.E_BILL, bill.id, bill.name, bill.amount, priority=bill.priority)
        )

    for loan in config.loans:
        days[clamp_day(loan.day) - 1].outflow.append(
            CashEvent(
                K.E_LOAN_MIN, loan.id, loan.name, loan.min_payment, apr=loan.apr
            )
        )

    for goal in config.goals:
        days[GOAL_DAY - 1].outflow.append(
            CashEvent(K.E_GOAL, goal.id, goal.name, goal.monthly)
        )

    for bucket in days:
        bucket.outflow.sort(key=_outflow_sort_key)

    return days
