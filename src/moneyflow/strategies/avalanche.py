"""
Avalanche payoff strategy: highest interest rate first.
"""

from __future__ import annotations

from collections.abc import Sequence

from moneyflow.core.events import PaydownCandidate
from moneyflow.core.interfaces import IPayoffStrategy


class PayoffAvalanche(IPayoffStrategy):
    """
    Avalanche payoff strategy (name: 'avalanche').

    Surplus cash goes to the loan with the highest APR. Loans with equal APR
    are ranked by the smaller remaining balance, then by configuration order.
    Minimizes the interest carried by the remaining debt.
    """

    name = "avalanche"

    def order(
        self, candidates: Sequence[PaydownCandidate]
    ) -> list[PaydownCandidate]:
        return sorted(candidates, key=lambda c: (-c.apr, c.balance, c.position))
