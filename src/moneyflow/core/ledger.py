"""
Append-only cash ledger for MoneyFlow.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any

import pandas as pd

from .currency import ZERO
from .kinds import K

LEDGER_COLUMNS = [
    "day",
    "kind",
    "label",
    "amount",
    "running_balance",
    "category",
    "ref_id",
]


@dataclass(frozen=True)
class LedgerEntry:
    """
    A single line of the monthly timeline.

    Attributes:
        day: Day of month (1..31)
        kind: K.CREDIT, K.DEBIT or K.SHORTFALL
        label: Display label
        amount: Non-negative amount of the movement (or of the unpaid part)
        running_balance: Cash balance after this entry
        category: Event class that produced the entry (K.E_*)
        ref_id: Id of the income/bill/loan/goal behind the entry
    """

    day: int
    kind: str
    label: str
    amount: Decimal
    running_balance: Decimal
    category: str
    ref_id: str = ""

    def __post_init__(self):
        """Validate entry after initialization."""
        if self.kind not in K.all_entry_kinds():
            raise ValueError(f"Unknown ledger entry kind: {self.kind}")
        if self.category not in K.all_categories():
            raise ValueError(f"Unknown ledger category: {self.category}")

    @property
    def signed_amount(self) -> Decimal:
        """Effect of this entry on the cash balance (shortfalls move no cash)."""
        if self.kind == K.CREDIT:
            return self.amount
        if self.kind == K.DEBIT:
            return -self.amount
        return ZERO

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["amount"] = float(self.amount)
        data["runningBalance"] = float(data.pop("running_balance"))
        data["refId"] = data.pop("ref_id")
        return data

    def __str__(self) -> str:
        sign = {K.CREDIT: "+", K.DEBIT: "-", K.SHORTFALL: "!"}[self.kind]
        return (
            f"day {self.day:>2} {sign}{self.amount} {self.label} "
            f"(balance {self.running_balance})"
        )


class Ledger:
    """
    Append-only ledger tracking the running cash balance.

    Entries are recorded in chronological-then-intra-day order and are never
    reordered or mutated once appended.

    Attributes:
        start_balance: Cash balance before the first entry
    """

    def __init__(self, start_balance: Decimal = ZERO):
        self.start_balance = start_balance
        self._entries: list[LedgerEntry] = []
        self._balance = start_balance

    @property
    def balance(self) -> Decimal:
        """Current running balance."""
        return self._balance

    @property
    def entries(self) -> tuple[LedgerEntry, ...]:
        return tuple(self._entries)

    def post(
        self,
        kind: str,
        day: int,
        label: str,
        amount: Decimal,
        category: str,
        ref_id: str = "",
    ) -> LedgerEntry:
        """
        Append an entry and apply it to the running balance.

        Args:
            kind: K.CREDIT, K.DEBIT or K.SHORTFALL
            day: Day of month
            label: Display label
            amount: Non-negative amount
            category: Event class (K.E_*)
            ref_id: Id of the originating item

        Raises:
            ValueError: If the entry would go back in time or the amount is negative
        """
        if self._entries and day < self._entries[-1].day:
            raise ValueError(
                f"Ledger is chronological: day {day} after day {self._entries[-1].day}"
            )
        if amount < 0:
            raise ValueError(f"Ledger amounts are non-negative, got {amount}")

        if kind == K.CREDIT:
            self._balance += amount
        elif kind == K.DEBIT:
            self._balance -= amount

        entry = LedgerEntry(
            day=day,
            kind=kind,
            label=label,
            amount=amount,
            running_balance=self._balance,
            category=category,
            ref_id=ref_id,
        )
        self._entries.append(entry)
        return entry

    def credit(
        self, day: int, label: str, amount: Decimal, category: str, ref_id: str = ""
    ) -> LedgerEntry:
        return self.post(K.CREDIT, day, label, amount, category, ref_id)

    def debit(
        self, day: int, label: str, amount: Decimal, category: str, ref_id: str = ""
    ) -> LedgerEntry:
        return self.post(K.DEBIT, day, label, amount, category, ref_id)

    def shortfall(
        self, day: int, label: str, amount: Decimal, category: str, ref_id: str = ""
    ) -> LedgerEntry:
        return self.post(K.SHORTFALL, day, label, amount, category, ref_id)

    def __iter__(self) -> Iterator[LedgerEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def ledger_to_frame(
    entries: tuple[LedgerEntry, ...] | list[LedgerEntry],
) -> pd.DataFrame:
    """
    Convert ledger entries to a DataFrame.

    Amounts are converted to float for analysis; the Decimal ledger stays the
    source of truth.
    """
    rows = [
        {
            "day": e.day,
            "kind": e.kind,
            "label": e.label,
            "amount": float(e.amount),
            "running_balance": float(e.running_balance),
            "category": e.category,
            "ref_id": e.ref_id,
        }
        for e in entries
    ]
    return pd.DataFrame(rows, columns=LEDGER_COLUMNS)
