"""
Payoff strategy implementations for MoneyFlow.

A payoff strategy decides in which order loans receive surplus cash during
an opportunistic paydown round. Strategies are looked up by name from
`PayoffRegistry`; importing this module registers the defaults.
"""

from .avalanche import PayoffAvalanche
from .registry import register_defaults
from .snowball import PayoffSnowball

# Register all default strategies when module is imported
register_defaults()

__all__ = [
    "PayoffAvalanche",
    "PayoffSnowball",
    "register_defaults",
]
