"""
Data models for the monthly plan configuration.

Every loosely typed value coming from a document, a form or a test is
normalized here, at the boundary, so that the simulator only ever sees
validated `Decimal` amounts and in-range integer days and priorities.
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from .currency import ZERO, in_amount_range, parse_number, to_amount
from .errors import ConfigError
from .interfaces import get_payoff_strategy

logger = logging.getLogger(__name__)

MIN_DAY = 1
MAX_DAY = 31
MIN_PRIORITY = 1
MAX_PRIORITY = 10
DEFAULT_PRIORITY = 5
DEFAULT_STRATEGY = "avalanche"


def clamp_day(value: Any) -> int:
    """
    Normalize a scheduled day into [1, 31].

    Non-numeric or missing values become 1, fractional values are truncated
    toward zero before clamping.

    >>> clamp_day(0), clamp_day(45), clamp_day("abc")
    (1, 31, 1)
    """
    parsed = parse_number(value)
    if parsed is None:
        return MIN_DAY
    if parsed >= MAX_DAY:
        return MAX_DAY
    if parsed < MIN_DAY:
        return MIN_DAY
    return int(parsed)


def clamp_priority(value: Any) -> int:
    """Normalize a bill priority into [1, 10], defaulting to 5."""
    parsed = parse_number(value)
    if parsed is None:
        return DEFAULT_PRIORITY
    if parsed >= MAX_PRIORITY:
        return MAX_PRIORITY
    if parsed < MIN_PRIORITY:
        return MIN_PRIORITY
    return int(parsed)


def _as_mapping(raw: Any, ctx: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise ConfigError(f"{ctx}: expected a mapping, got {type(raw).__name__}")
    return raw


def _day_field(
    data: Mapping[str, Any], ctx: str, notes: Optional[list[str]]
) -> int:
    raw = data.get("day")
    day = clamp_day(raw)
    if notes is not None and (parse_number(raw) is None or parse_number(raw) != day):
        notes.append(f"{ctx}.day: {raw!r} normalized to {day}")
    return day


def _amount_field(
    data: Mapping[str, Any], key: str, ctx: str, notes: Optional[list[str]]
) -> Decimal:
    raw = data.get(key)
    parsed = parse_number(raw)
    if parsed is None:
        problem = None if raw is None else "is not a number"
    elif not in_amount_range(parsed):
        problem = "is out of range"
    elif parsed < 0:
        problem = "is negative"
    else:
        problem = None
    if notes is not None and problem:
        notes.append(f"{ctx}.{key}: {raw!r} {problem}, using 0")
    return max(ZERO, to_amount(raw))


def _name_field(data: Mapping[str, Any]) -> str:
    name = data.get("name")
    return "" if name is None else str(name)


def _explicit_id(raw: Any) -> Optional[str]:
    if not isinstance(raw, Mapping) or raw.get("id") in (None, ""):
        return None
    return str(raw["id"])


def _id_field(
    data: Mapping[str, Any], prefix: str, index: int, taken: Optional[set[str]]
) -> str:
    explicit = _explicit_id(data)
    if explicit is not None:
        return explicit
    # Positional id, skipping ids other items already use
    number = index + 1
    while taken is not None and f"{prefix}{number}" in taken:
        number += 1
    generated = f"{prefix}{number}"
    if taken is not None:
        taken.add(generated)
    return generated


@dataclass(frozen=True)
class Income:
    """A recurring monthly income, credited on `day`."""

    id: str
    name: str
    amount: Decimal
    day: int

    @classmethod
    def from_dict(
        cls,
        raw: Any,
        index: int = 0,
        notes: Optional[list[str]] = None,
        taken: Optional[set[str]] = None,
    ) -> Income:
        ctx = f"incomes[{index}]"
        data = _as_mapping(raw, ctx)
        return cls(
            id=_id_field(data, "i", index, taken),
            name=_name_field(data),
            amount=_amount_field(data, "amount", ctx, notes),
            day=_day_field(data, ctx, notes),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "amount": _plain_number(self.amount),
            "day": self.day,
        }


@dataclass(frozen=True)
class Bill:
    """A fixed monthly bill. Higher priority settles earlier on the same day."""

    id: str
    name: str
    amount: Decimal
    day: int
    priority: int = DEFAULT_PRIORITY

    @classmethod
    def from_dict(
        cls,
        raw: Any,
        index: int = 0,
        notes: Optional[list[str]] = None,
        taken: Optional[set[str]] = None,
    ) -> Bill:
        ctx = f"bills[{index}]"
        data = _as_mapping(raw, ctx)
        raw_priority = data.get("priority")
        priority = clamp_priority(raw_priority)
        if notes is not None and raw_priority is not None and (
            parse_number(raw_priority) is None or parse_number(raw_priority) != priority
        ):
            notes.append(f"{ctx}.priority: {raw_priority!r} normalized to {priority}")
        return cls(
            id=_id_field(data, "b", index, taken),
            name=_name_field(data),
            amount=_amount_field(data, "amount", ctx, notes),
            day=_day_field(data, ctx, notes),
            priority=priority,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "amount": _plain_number(self.amount),
            "day": self.day,
            "priority": self.priority,
        }


@dataclass(frozen=True)
class Loan:
    """
    A loan with a contractual minimum payment due on `day`.

    `apr` is an annual percentage (34.9 means 34.9%) and is only used to
    rank loans for accelerated payments; no interest is accrued.
    """

    id: str
    name: str
    balance: Decimal
    apr: Decimal
    min_payment: Decimal
    day: int

    @classmethod
    def from_dict(
        cls,
        raw: Any,
        index: int = 0,
        notes: Optional[list[str]] = None,
        taken: Optional[set[str]] = None,
    ) -> Loan:
        ctx = f"loans[{index}]"
        data = _as_mapping(raw, ctx)
        min_key = "minPayment" if "minPayment" in data else "min_payment"
        apr = parse_number(data.get("apr"))
        return cls(
            id=_id_field(data, "l", index, taken),
            name=_name_field(data),
            balance=_amount_field(data, "balance", ctx, notes),
            apr=apr if apr is not None and in_amount_range(apr) else ZERO,
            min_payment=_amount_field(data, min_key, ctx, notes),
            day=_day_field(data, ctx, notes),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "balance": _plain_number(self.balance),
            "apr": _plain_number(self.apr),
            "minPayment": _plain_number(self.min_payment),
            "day": self.day,
        }


@dataclass(frozen=True)
class Goal:
    """A savings goal funded by a fixed monthly contribution (always on day 25)."""

    id: str
    name: str
    target: Decimal
    monthly: Decimal

    @classmethod
    def from_dict(
        cls,
        raw: Any,
        index: int = 0,
        notes: Optional[list[str]] = None,
        taken: Optional[set[str]] = None,
    ) -> Goal:
        ctx = f"goals[{index}]"
        data = _as_mapping(raw, ctx)
        return cls(
            id=_id_field(data, "g", index, taken),
            name=_name_field(data),
            target=_amount_field(data, "target", ctx, notes),
            monthly=_amount_field(data, "monthly", ctx, notes),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "target": _plain_number(self.target),
            "monthly": _plain_number(self.monthly),
        }


@dataclass(frozen=True)
class PlanConfig:
    """
    Complete configuration of one simulated month.

    Attributes:
        start_balance: Cash available on day 1 before any event
        incomes: Recurring incomes
        bills: Fixed bills
        loans: Loans with minimum payments (ids must be unique)
        goals: Savings goals
        strategy: Registered payoff strategy name ('avalanche' or 'snowball')
    """

    start_balance: Decimal = ZERO
    incomes: tuple[Income, ...] = field(default_factory=tuple)
    bills: tuple[Bill, ...] = field(default_factory=tuple)
    loans: tuple[Loan, ...] = field(default_factory=tuple)
    goals: tuple[Goal, ...] = field(default_factory=tuple)
    strategy: str = DEFAULT_STRATEGY

    def __post_init__(self):
        # Accept any iterable for the collections, store tuples
        for name in ("incomes", "bills", "loans", "goals"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(self, "start_balance", to_amount(self.start_balance))

        get_payoff_strategy(self.strategy)

        seen: set[str] = set()
        duplicates = []
        for loan in self.loans:
            if loan.id in seen:
                duplicates.append(loan.id)
            seen.add(loan.id)
        if duplicates:
            raise ConfigError(f"Duplicate loan ids: {', '.join(duplicates)}")

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], notes: Optional[list[str]] = None
    ) -> PlanConfig:
        """
        Build a configuration from a plan document.

        Keys follow the exported document format (`startBalance`,
        `minPayment`); missing collections are empty. When `notes` is given,
        a human-readable message is appended for every value that had to be
        clamped or defaulted.

        Raises:
            ConfigError: If a collection is not a list of mappings, the
                strategy is unknown or loan ids collide
        """
        data = _as_mapping(data, "config")

        def items(key: str) -> list[Any]:
            raw = data.get(key)
            if raw is None:
                return []
            if not isinstance(raw, (list, tuple)):
                raise ConfigError(f"{key}: expected a list")
            return list(raw)

        def build(key: str, item_cls: Any) -> list[Any]:
            raw_items = items(key)
            taken = {i for i in map(_explicit_id, raw_items) if i is not None}
            return [
                item_cls.from_dict(r, i, notes, taken) for i, r in enumerate(raw_items)
            ]

        raw_start = data.get("startBalance", data.get("start_balance"))
        if notes is not None and raw_start is not None:
            parsed = parse_number(raw_start)
            if parsed is None:
                notes.append(f"startBalance: {raw_start!r} is not a number, using 0")
            elif not in_amount_range(parsed):
                notes.append(f"startBalance: {raw_start!r} is out of range, using 0")

        strategy = data.get("strategy") or DEFAULT_STRATEGY
        config = cls(
            start_balance=to_amount(raw_start),
            incomes=build("incomes", Income),
            bills=build("bills", Bill),
            loans=build("loans", Loan),
            goals=build("goals", Goal),
            strategy=str(strategy).strip().lower(),
        )
        if notes:
            logger.debug("Normalized plan configuration: %s", "; ".join(notes))
        return config

    def to_document(self) -> dict[str, Any]:
        """Export in the document format (top-level keys match the importer)."""
        return {
            "incomes": [i.to_dict() for i in self.incomes],
            "bills": [b.to_dict() for b in self.bills],
            "loans": [loan.to_dict() for loan in self.loans],
            "goals": [g.to_dict() for g in self.goals],
            "startBalance": _plain_number(self.start_balance),
        }

    def fingerprint(self) -> str:
        """Stable hash of the full configuration, usable as a memoization key."""
        payload = dict(self.to_document(), strategy=self.strategy)
        canonical = json.dumps(payload, sort_keys=True, ensure_ascii=False)
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]

    def loan_names(self) -> dict[str, str]:
        return {loan.id: loan.name for loan in self.loans}


def _plain_number(value: Decimal) -> int | float:
    """Convert a Decimal to the JSON number a user would have typed."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)
