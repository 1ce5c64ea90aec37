"""
Monthly cashflow simulator.

Walks days 1..31 of a single month, settling scheduled incomes and
obligations against a running cash balance and diverting part of every
incoming payment into accelerated loan payments.

Algorithm per day:
    1. Credit every inflow.
    2. Settle every outflow in schedule order, paying what the balance allows
       and recording a shortfall for any unpaid remainder.
    3. Add floor(25% of the day's inflow) to the extra-funds accumulator.
    4. On even days, spend up to min(balance, accumulator) on loans in the
       order given by the payoff strategy, then reduce the accumulator by
       exactly what was spent.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from .currency import ZERO, floor_amount
from .events import CashEvent, PaydownCandidate
from .interfaces import IPayoffStrategy, get_payoff_strategy
from .kinds import (
    LABEL_LOAN_EXTRA,
    LABEL_LOAN_MIN,
    LABEL_MISSED_MIN,
    LABEL_PARTIAL,
    K,
)
from .ledger import Ledger
from .models import PlanConfig
from .results import PlanResult, aggregate_totals
from .scheduler import build_schedule

logger = logging.getLogger(__name__)

# Share of every day's inflow diverted to accelerated debt payoff
EXTRA_SHARE = Decimal("0.25")


class MonthlySimulator:
    """
    Single-use runner for one simulated month.

    The simulator owns the mutable working set of a run (ledger, per-loan
    balances, extra-funds accumulator); the configuration is never modified.

    Example:
        ```python
        from moneyflow.core.models import PlanConfig
        from moneyflow.core.simulator import MonthlySimulator

        config = PlanConfig.from_dict({"startBalance": 1000, "incomes": [...]})
        result = MonthlySimulator(config).run()
        print(result.totals.end_balance)
        ```
    """

    def __init__(self, config: PlanConfig):
        self.config = config
        self.strategy: IPayoffStrategy = get_payoff_strategy(config.strategy)
        self.ledger = Ledger(config.start_balance)
        self.loan_balances: dict[str, Decimal] = {
            loan.id: max(ZERO, loan.balance) for loan in config.loans
        }
        self.extra = ZERO
        self._loans = {loan.id: loan for loan in config.loans}
        self._positions = {loan.id: i for i, loan in enumerate(config.loans)}

    def run(self) -> PlanResult:
        """Simulate the month and return the ledger, loan balances and totals."""
        for bucket in build_schedule(self.config):
            for event in bucket.inflow:
                self.ledger.credit(
                    bucket.day, event.name, event.amount, K.E_INCOME, event.ref_id
                )

            for event in bucket.outflow:
                self._settle(bucket.day, event)

            inflow = bucket.total_inflow()
            if inflow > 0:
                self.extra += floor_amount(inflow * EXTRA_SHARE)

            if self.extra > 0 and bucket.day % 2 == 0:
                spent = self._paydown(bucket.day)
                self.extra -= spent

        entries = self.ledger.entries
        return PlanResult(
            ledger=entries,
            loan_balances=dict(self.loan_balances),
            totals=aggregate_totals(entries, self.config.start_balance),
            meta={
                "strategy": self.strategy.name,
                "fingerprint": self.config.fingerprint(),
                "start_balance": float(self.config.start_balance),
                "unspent_extra": float(self.extra),
            },
        )

    def _settle(self, day: int, event: CashEvent) -> None:
        """Pay one scheduled outflow as far as the cash balance allows."""
        due = max(ZERO, event.amount)

        if event.kind == K.E_LOAN_MIN:
            # A repaid loan still gets its (zero) minimum on the timeline
            due = min(due, max(ZERO, self.loan_balances[event.ref_id]))

        payable = max(ZERO, min(self.ledger.balance, due))

        if event.kind == K.E_LOAN_MIN:
            self.loan_balances[event.ref_id] -= payable
            label = LABEL_LOAN_MIN.format(name=event.name)
            short_label = LABEL_MISSED_MIN.format(name=event.name)
        else:
            label = event.name
            short_label = LABEL_PARTIAL.format(name=event.name)

        self.ledger.debit(day, label, payable, event.kind, event.ref_id)
        if payable < due:
            self.ledger.shortfall(
                day, short_label, due - payable, event.kind, event.ref_id
            )

    def _paydown(self, day: int) -> Decimal:
        """
        Spend surplus cash on loans in strategy order.

        Returns:
            Amount actually spent (0 <= spent <= accumulator)
        """
        budget = min(self.ledger.balance, self.extra)
        if budget <= 0:
            return ZERO

        candidates = [
            PaydownCandidate(
                loan_id=loan_id,
                name=self._loans[loan_id].name,
                balance=balance,
                apr=self._loans[loan_id].apr,
                position=self._positions[loan_id],
            )
            for loan_id, balance in self.loan_balances.items()
            if balance > 0
        ]

        spent = ZERO
        for candidate in self.strategy.order(candidates):
            if budget <= 0:
                break
            pay = min(budget, self.loan_balances[candidate.loan_id])
            if pay <= 0:
                continue
            self.loan_balances[candidate.loan_id] -= pay
            budget -= pay
            spent += pay
            self.ledger.debit(
                day,
                LABEL_LOAN_EXTRA.format(name=candidate.name),
                pay,
                K.E_LOAN_EXTRA,
                candidate.loan_id,
            )

        logger.debug(
            "Day %d: %s paydown spent %s of %s extra",
            day,
            self.strategy.name,
            spent,
            self.extra,
        )
        return spent


def plan(config: PlanConfig | Mapping[str, Any]) -> PlanResult:
    """
    Simulate one month for a configuration.

    Args:
        config: A PlanConfig, or a plan document mapping that is normalized
            through PlanConfig.from_dict

    Returns:
        PlanResult with ledger, loan balances and totals

    Raises:
        ConfigError: If a mapping cannot be turned into a configuration
    """
    if not isinstance(config, PlanConfig):
        config = PlanConfig.from_dict(config)
    return MonthlySimulator(config).run()
