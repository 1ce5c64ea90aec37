"""
Snowball payoff strategy: lowest balance first.
"""

from __future__ import annotations

from collections.abc import Sequence

from moneyflow.core.events import PaydownCandidate
from moneyflow.core.interfaces import IPayoffStrategy


class PayoffSnowball(IPayoffStrategy):
    """
    Snowball payoff strategy (name: 'snowball').

    Surplus cash goes to the loan with the smallest remaining balance. Loans
    with equal balance are ranked by the higher APR, then by configuration
    order. Closes individual loans as early as possible.
    """

    name = "snowball"

    def order(
        self, candidates: Sequence[PaydownCandidate]
    ) -> list[PaydownCandidate]:
        return sorted(candidates, key=lambda c: (c.balance, -c.apr, c.position))
