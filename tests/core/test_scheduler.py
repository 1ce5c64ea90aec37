"""
Tests for the event scheduler.
"""

from decimal import Decimal

from moneyflow.core.events import CashEvent, DayBucket
from moneyflow.core.kinds import K
from moneyflow.core.models import Bill, Goal, Income, Loan, PlanConfig
from moneyflow.core.scheduler import GOAL_DAY, build_schedule


def _config(**kwargs):
    return PlanConfig(**kwargs)


def test_always_31_buckets():
    days = build_schedule(_config())
    assert [b.day for b in days] == list(range(1, 32))
    assert all(len(b) == 0 for b in days)


def test_incomes_are_inflows_in_config_order():
    config = _config(
        incomes=[
            Income("i1", "Salary", Decimal("100"), 15),
            Income("i2", "Side job", Decimal("50"), 15),
        ]
    )
    bucket = build_schedule(config)[14]
    assert [e.ref_id for e in bucket.inflow] == ["i1", "i2"]
    assert bucket.outflow == []
    assert bucket.total_inflow() == Decimal("150")


def test_out_of_range_days_are_clamped_again():
    config = _config(
        bills=[
            Bill("b1", "Rent", Decimal("10"), 0),
            Bill("b2", "Gym", Decimal("5"), 99),
        ]
    )
    days = build_schedule(config)
    assert [e.ref_id for e in days[0].outflow] == ["b1"]
    assert [e.ref_id for e in days[30].outflow] == ["b2"]


def test_goals_are_scheduled_on_day_25():
    config = _config(goals=[Goal("g1", "Trip", Decimal("800"), Decimal("70"))])
    days = build_schedule(config)
    assert GOAL_DAY == 25
    assert days[24].outflow == [CashEvent(K.E_GOAL, "g1", "Trip", Decimal("70"))]
    assert sum(len(b) for b in days) == 1


def test_outflow_order_within_a_day():
    config = _config(
        bills=[
            Bill("b1", "Low", Decimal("1"), 10, priority=2),
            Bill("b2", "High", Decimal("1"), 10, priority=8),
        ],
        loans=[Loan("l1", "Card", Decimal("100"), Decimal("20"), Decimal("5"), 10)],
    )
    outflow = build_schedule(config)[9].outflow
    assert [(e.kind, e.ref_id) for e in outflow] == [
        (K.E_BILL, "b2"),
        (K.E_BILL, "b1"),
        (K.E_LOAN_MIN, "l1"),
    ]
    assert outflow[2].apr == Decimal("20")


def test_equal_priority_keeps_config_order():
    bills = [Bill(f"b{i}", "x", Decimal("1"), 3, priority=5) for i in range(5)]
    outflow = build_schedule(_config(bills=bills))[2].outflow
    assert [e.ref_id for e in outflow] == [f"b{i}" for i in range(5)]


def test_day_bucket_len():
    bucket = DayBucket(day=1)
    bucket.inflow.append(CashEvent(K.E_INCOME, "i1", "x", Decimal("1")))
    bucket.outflow.append(CashEvent(K.E_BILL, "b1", "y", Decimal("1")))
    assert len(bucket) == 2
