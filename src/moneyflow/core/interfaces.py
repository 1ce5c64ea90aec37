"""
Strategy interface protocols for MoneyFlow.
Defines the contract a payoff strategy must satisfy and the registry that maps
strategy names to implementations.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .errors import ConfigError
from .events import PaydownCandidate


@runtime_checkable
class IPayoffStrategy(Protocol):
    """
    Contract for payoff strategies used by the opportunistic paydown round.
    Responsibilities: decide in which order loans with a remaining balance
    receive surplus cash.
    """

    name: str

    def order(
        self, candidates: Sequence[PaydownCandidate]
    ) -> list[PaydownCandidate]:
        """
        Return the candidates in payment order.

        Must be deterministic: equal inputs give an equal ordering, and
        candidates that tie on every strategy key keep their input order.
        """
        ...


# Global registry: strategy name -> implementation
PayoffRegistry: dict[str, IPayoffStrategy] = {}


def get_payoff_strategy(name: str) -> IPayoffStrategy:
    """Look up a registered payoff strategy, raising ConfigError if unknown."""
    try:
        return PayoffRegistry[name]
    except KeyError:
        available = ", ".join(sorted(PayoffRegistry)) or "<none registered>"
        raise ConfigError(
            f"Unknown payoff strategy '{name}' (available: {available})"
        ) from None
