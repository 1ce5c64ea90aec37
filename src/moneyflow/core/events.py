"""
Scheduled cash events and day buckets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import NamedTuple, Optional


class CashEvent(NamedTuple):
    """
    A single cash movement scheduled on a day of the month.

    Attributes:
        kind: Event class (K.E_INCOME, K.E_BILL, K.E_LOAN_MIN, K.E_GOAL)
        ref_id: Id of the income/bill/loan/goal that produced the event
        name: Display name of the originating item
        amount: Scheduled amount (inflow or contractual outflow)
        priority: Bill priority (only meaningful for bills)
        apr: Annual rate in percent (only meaningful for loan minimums)
    """

    kind: str
    ref_id: str
    name: str
    amount: Decimal
    priority: int = 0
    apr: Optional[Decimal] = None


class PaydownCandidate(NamedTuple):
    """A loan with a remaining balance, as seen by a payoff strategy."""

    loan_id: str
    name: str
    balance: Decimal
    apr: Decimal
    position: int  # Index of the loan in the configuration


@dataclass
class DayBucket:
    """Inflow and outflow events scheduled for one calendar day."""

    day: int
    inflow: list[CashEvent] = field(default_factory=list)
    outflow: list[CashEvent] = field(default_factory=list)

    def total_inflow(self) -> Decimal:
        return sum((e.amount for e in self.inflow), Decimal("0"))

    def __len__(self) -> int:
        return len(self.inflow) + len(self.outflow)
