"""
Tests for the monthly simulator: day loop, shortfalls and accelerated payoff.
"""

from decimal import Decimal

import pytest
from moneyflow.core.kinds import K
from moneyflow.core.models import PlanConfig
from moneyflow.core.simulator import MonthlySimulator, plan


def _entries(result, category=None, kind=None):
    return [
        e
        for e in result.ledger
        if (category is None or e.category == category)
        and (kind is None or e.kind == kind)
    ]


class TestReferenceScenario:
    """One income, one bill and one loan under the avalanche strategy."""

    @pytest.fixture
    def result(self):
        return plan(
            {
                "startBalance": 50000,
                "incomes": [{"id": "i1", "name": "Зарплата", "amount": 420000, "day": 15}],
                "bills": [
                    {"id": "b1", "name": "Аренда", "amount": 180000, "day": 25,
                     "priority": 10}
                ],
                "loans": [
                    {"id": "l1", "name": "Кредит карта", "balance": 350000,
                     "apr": 34.9, "minPayment": 20000, "day": 27}
                ],
                "strategy": "avalanche",
            }
        )

    def test_income_credited_on_day_15(self, result):
        credit = _entries(result, kind=K.CREDIT)[0]
        assert credit.day == 15
        assert credit.amount == Decimal("420000")
        assert credit.running_balance == Decimal("470000")

    def test_accelerated_payment_on_following_even_day(self, result):
        extra = result.accelerated_payments()
        assert len(extra) == 1
        assert extra[0].day == 16
        assert extra[0].amount == Decimal("105000")
        assert extra[0].label == "Кредит карта (ускор.)"
        assert extra[0].running_balance == Decimal("365000")

    def test_bill_and_minimum_payment(self, result):
        bill = _entries(result, category=K.E_BILL)[0]
        assert (bill.day, bill.amount, bill.running_balance) == (
            25,
            Decimal("180000"),
            Decimal("185000"),
        )
        minimum = _entries(result, category=K.E_LOAN_MIN)[0]
        assert minimum.day == 27
        assert minimum.label == "Кредит карта (мин.)"
        assert minimum.amount == Decimal("20000")
        assert minimum.running_balance == Decimal("165000")

    def test_final_balances_and_totals(self, result):
        assert result.loan_balances == {"l1": Decimal("225000")}
        assert result.totals.paid_bills == Decimal("180000")
        assert result.totals.paid_loans == Decimal("125000")
        assert result.totals.to_goals == 0
        assert result.totals.end_balance == Decimal("165000")
        assert result.totals.unpaid == 0
        assert result.shortfalls() == []

    def test_meta(self, result):
        assert result.meta["strategy"] == "avalanche"
        assert result.meta["start_balance"] == 50000.0
        assert result.meta["unspent_extra"] == 0.0
        assert len(result.meta["fingerprint"]) == 16


class TestShortfalls:
    """Obligations that the balance cannot cover are paid partially."""

    def test_partial_bill_and_missed_minimum(self):
        result = plan(
            {
                "startBalance": 100,
                "bills": [{"id": "b1", "name": "Rent", "amount": 500, "day": 1}],
                "loans": [
                    {"id": "l1", "name": "Card", "balance": 1000, "apr": 20,
                     "minPayment": 200, "day": 1}
                ],
            }
        )
        labels = [(e.kind, e.label, e.amount) for e in result.ledger]
        assert labels == [
            (K.DEBIT, "Rent", Decimal("100")),
            (K.SHORTFALL, "Rent: частично оплачено", Decimal("400")),
            (K.DEBIT, "Card (мин.)", Decimal("0")),
            (K.SHORTFALL, "Card: не хватило на мин. платёж", Decimal("200")),
        ]
        assert result.totals.unpaid == Decimal("600")
        assert result.totals.paid_bills == Decimal("100")
        assert result.totals.end_balance == 0
        assert result.loan_balances["l1"] == Decimal("1000")

    def test_shortfall_does_not_move_cash(self):
        result = plan(
            {"startBalance": 0, "goals": [{"id": "g1", "name": "Trip", "monthly": 70}]}
        )
        debit, short = result.ledger
        assert short.kind == K.SHORTFALL
        assert short.amount == Decimal("70")
        assert short.running_balance == debit.running_balance == 0

    def test_month_runs_to_the_end_after_shortfall(self):
        result = plan(
            {
                "startBalance": 0,
                "bills": [{"name": "Rent", "amount": 500, "day": 1}],
                "incomes": [{"name": "Salary", "amount": 1000, "day": 30}],
            }
        )
        assert result.ledger[-1].day == 30
        assert result.totals.end_balance == Decimal("1000")


class TestOrdering:
    """Intra-day settlement order."""

    def test_bills_by_priority_then_loans_then_goals(self):
        result = plan(
            {
                "startBalance": 10000,
                "bills": [
                    {"id": "b1", "name": "Low", "amount": 10, "day": 25, "priority": 3},
                    {"id": "b2", "name": "High", "amount": 10, "day": 25,
                     "priority": 9},
                    {"id": "b3", "name": "Also low", "amount": 10, "day": 25,
                     "priority": 3},
                ],
                "loans": [
                    {"id": "l1", "name": "Card", "balance": 100, "minPayment": 10,
                     "day": 25}
                ],
                "goals": [{"id": "g1", "name": "Trip", "target": 500, "monthly": 10}],
            }
        )
        assert [e.ref_id for e in result.ledger] == ["b2", "b1", "b3", "l1", "g1"]
        assert all(e.day == 25 for e in result.ledger)

    def test_inflows_settle_before_outflows(self):
        result = plan(
            {
                "startBalance": 0,
                "bills": [{"id": "b1", "name": "Rent", "amount": 300, "day": 5}],
                "incomes": [{"id": "i1", "name": "Salary", "amount": 300, "day": 5}],
            }
        )
        assert [e.kind for e in result.ledger] == [K.CREDIT, K.DEBIT]
        assert result.shortfalls() == []

    def test_goal_contributions_land_on_day_25(self):
        result = plan(
            {"startBalance": 1000, "goals": [{"name": "Trip", "monthly": 70}]}
        )
        (entry,) = result.ledger
        assert entry.day == 25
        assert entry.category == K.E_GOAL
        assert result.totals.to_goals == Decimal("70")


class TestLoanMinimums:
    """Minimum payments never push a loan below zero."""

    def test_minimum_capped_by_remaining_balance(self):
        result = plan(
            {
                "startBalance": 5000,
                "loans": [{"id": "l1", "name": "Card", "balance": 300,
                           "minPayment": 1000, "day": 1}],
            }
        )
        (entry,) = result.ledger
        assert entry.amount == Decimal("300")
        assert result.shortfalls() == []
        assert result.loan_balances["l1"] == 0

    def test_repaid_loan_posts_zero_minimum(self):
        result = plan(
            {
                "startBalance": 0,
                "incomes": [{"name": "Salary", "amount": 10000, "day": 2}],
                "loans": [{"id": "l1", "name": "Card", "balance": 1000,
                           "minPayment": 100, "day": 10}],
            }
        )
        (minimum,) = _entries(result, category=K.E_LOAN_MIN)
        assert (minimum.day, minimum.amount) == (10, Decimal("0"))
        assert minimum.label == "Card (мин.)"
        assert result.shortfalls() == []
        assert result.loan_balances["l1"] == 0

    def test_negative_loan_balance_is_treated_as_repaid(self):
        config = PlanConfig.from_dict(
            {"loans": [{"id": "l1", "balance": -50, "minPayment": 10, "day": 3}]}
        )
        sim = MonthlySimulator(config)
        assert sim.loan_balances["l1"] == 0
        (entry,) = sim.run().ledger
        assert (entry.kind, entry.amount) == (K.DEBIT, Decimal("0"))


class TestExtraAccumulator:
    """A quarter of every inflow is diverted to loans on even days."""

    def test_extra_is_floored(self):
        result = plan(
            {
                "startBalance": 0,
                "incomes": [{"name": "Tip", "amount": 1003, "day": 2}],
                "loans": [{"id": "l1", "name": "Card", "balance": 5000, "day": 31}],
            }
        )
        extra = result.accelerated_payments()
        assert [e.amount for e in extra] == [Decimal("250")]

    def test_odd_day_inflow_waits_for_next_even_day(self):
        result = plan(
            {
                "startBalance": 0,
                "incomes": [{"name": "Salary", "amount": 4000, "day": 3}],
                "loans": [{"id": "l1", "name": "Card", "balance": 5000, "day": 31}],
            }
        )
        assert [(e.day, e.amount) for e in result.accelerated_payments()] == [
            (4, Decimal("1000"))
        ]

    def test_unspent_extra_carries_over(self):
        result = plan(
            {
                "startBalance": 0,
                "incomes": [
                    {"name": "Salary", "amount": 1000, "day": 1},
                    {"name": "Bonus", "amount": 400, "day": 3},
                ],
                "bills": [{"name": "Rent", "amount": 1000, "day": 1}],
                "loans": [{"id": "l1", "name": "Card", "balance": 5000, "day": 31}],
            }
        )
        # Day 2 has no cash, so the 250 carries over and day 3 adds 100
        assert [(e.day, e.amount) for e in result.accelerated_payments()] == [
            (4, Decimal("350"))
        ]
        assert result.meta["unspent_extra"] == 0.0

    def test_extra_left_when_loans_are_repaid(self):
        result = plan(
            {
                "startBalance": 0,
                "incomes": [{"name": "Salary", "amount": 10000, "day": 2}],
                "loans": [{"id": "l1", "name": "Card", "balance": 1000, "day": 10}],
            }
        )
        assert [e.amount for e in result.accelerated_payments()] == [Decimal("1000")]
        assert result.meta["unspent_extra"] == 1500.0
        assert result.totals.end_balance == Decimal("9000")

    def test_no_paydown_without_loans(self):
        result = plan(
            {
                "startBalance": 0,
                "incomes": [{"name": "Salary", "amount": 800, "day": 2}],
            }
        )
        assert result.accelerated_payments() == []
        assert result.meta["unspent_extra"] == 200.0

    def test_paydown_spills_over_to_next_loan(self):
        result = plan(
            {
                "startBalance": 0,
                "incomes": [{"name": "Salary", "amount": 400000, "day": 2}],
                "loans": [
                    {"id": "a", "name": "A", "balance": 100000, "apr": 10, "day": 31},
                    {"id": "b", "name": "B", "balance": 50000, "apr": 25, "day": 31},
                ],
            }
        )
        assert [(e.ref_id, e.amount) for e in result.accelerated_payments()] == [
            ("b", Decimal("50000")),
            ("a", Decimal("50000")),
        ]
        assert result.loan_balances == {"a": Decimal("50000"), "b": Decimal("0")}


class TestPlanEntryPoint:
    def test_accepts_mapping_and_config(self):
        doc = {"startBalance": 10, "incomes": [{"name": "x", "amount": 5, "day": 1}]}
        assert plan(doc).ledger == plan(PlanConfig.from_dict(doc)).ledger

    def test_config_is_not_modified(self):
        config = PlanConfig.from_dict(
            {"loans": [{"id": "l1", "balance": 100, "minPayment": 10, "day": 1}],
             "startBalance": 100}
        )
        plan(config)
        assert config.loans[0].balance == Decimal("100")

    def test_empty_config(self):
        result = plan({})
        assert result.ledger == ()
        assert result.loan_balances == {}
        assert result.totals.end_balance == 0


class TestUnusableAmounts:
    """Negative and oversized amounts are normalized before the run."""

    def test_negative_income_is_ignored(self):
        result = plan(
            {
                "startBalance": 1000,
                "incomes": [{"name": "Refund", "amount": -100, "day": 3}],
            }
        )
        (entry,) = result.ledger
        assert entry.kind == K.CREDIT
        assert entry.amount == 0
        assert result.totals.end_balance == Decimal("1000")

    def test_negative_bill_is_not_a_credit(self):
        result = plan(
            {
                "startBalance": 1000,
                "bills": [{"name": "Rebate", "amount": -300, "day": 5}],
                "goals": [{"name": "Trip", "monthly": -50}],
            }
        )
        assert [e.amount for e in result.ledger] == [Decimal("0"), Decimal("0")]
        assert result.totals.end_balance == Decimal("1000")

    @pytest.mark.parametrize(
        "document",
        [
            {"startBalance": 10**27},
            {"incomes": [{"amount": "1e30", "day": 3}]},
            {"bills": [{"amount": 1e40, "day": 3}]},
            {"loans": [{"balance": "9" * 40, "minPayment": 10, "apr": "1e99",
                        "day": 4}]},
        ],
    )
    def test_oversized_amounts_become_zero(self, document):
        result = plan(document)
        assert result.totals.end_balance == 0
        assert all(e.amount == 0 for e in result.ledger)
