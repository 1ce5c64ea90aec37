"""
Results and output structures for MoneyFlow.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

import pandas as pd

from .currency import ZERO
from .kinds import K
from .ledger import LedgerEntry, ledger_to_frame

# Ledger category -> totals bucket. Every debit category maps to exactly one bucket.
_DEBIT_BUCKETS = {
    K.E_BILL: "paid_bills",
    K.E_LOAN_MIN: "paid_loans",
    K.E_LOAN_EXTRA: "paid_loans",
    K.E_GOAL: "to_goals",
}


@dataclass(frozen=True)
class Totals:
    """
    Aggregate totals of one simulated month.

    Attributes:
        paid_bills: Cash paid towards bills
        paid_loans: Cash paid towards loans (minimum and accelerated payments)
        to_goals: Cash contributed to savings goals
        end_balance: Running balance after the last ledger entry
        unpaid: Sum of all shortfalls (obligations that could not be covered)
    """

    paid_bills: Decimal = ZERO
    paid_loans: Decimal = ZERO
    to_goals: Decimal = ZERO
    end_balance: Decimal = ZERO
    unpaid: Decimal = ZERO

    def to_dict(self) -> dict[str, float]:
        return {
            "paidBills": float(self.paid_bills),
            "paidLoans": float(self.paid_loans),
            "toGoals": float(self.to_goals),
            "endBalance": float(self.end_balance),
            "unpaid": float(self.unpaid),
        }


def aggregate_totals(
    entries: Iterable[LedgerEntry], start_balance: Decimal = ZERO
) -> Totals:
    """
    Aggregate a ledger into totals.

    Classification uses each entry's category, so no entry can land in more
    than one bucket. Credits only contribute through the end balance.

    Args:
        entries: Ledger entries in chronological order
        start_balance: Balance reported when the ledger is empty

    Returns:
        Totals computed from the ledger alone
    """
    sums = {"paid_bills": ZERO, "paid_loans": ZERO, "to_goals": ZERO}
    unpaid = ZERO
    end_balance = start_balance

    for entry in entries:
        end_balance = entry.running_balance
        if entry.kind == K.DEBIT:
            sums[_DEBIT_BUCKETS[entry.category]] += entry.amount
        elif entry.kind == K.SHORTFALL:
            unpaid += entry.amount

    return Totals(end_balance=end_balance, unpaid=unpaid, **sums)


@dataclass
class PlanResult:
    """
    Outcome of one monthly plan run.

    Attributes:
        ledger: Chronological ledger entries
        loan_balances: Remaining balance per loan id, in configuration order
        totals: Aggregated totals
        meta: Run metadata (strategy, fingerprint, start balance)
    """

    ledger: tuple[LedgerEntry, ...]
    loan_balances: dict[str, Decimal]
    totals: Totals
    meta: dict[str, Any] = field(default_factory=dict)

    def ledger_frame(self) -> pd.DataFrame:
        """Ledger as a DataFrame (one row per entry)."""
        return ledger_to_frame(self.ledger)

    def shortfalls(self) -> list[LedgerEntry]:
        return [e for e in self.ledger if e.kind == K.SHORTFALL]

    def accelerated_payments(self) -> list[LedgerEntry]:
        return [e for e in self.ledger if e.category == K.E_LOAN_EXTRA]

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation (`ledger`, `loanBalances`, `totals`, `meta`)."""
        return {
            "ledger": [e.to_dict() for e in self.ledger],
            "loanBalances": {k: float(v) for k, v in self.loan_balances.items()},
            "totals": self.totals.to_dict(),
            "meta": dict(self.meta),
        }
