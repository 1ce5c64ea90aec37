"""
Strategy registry setup for MoneyFlow.
"""

from moneyflow.core.interfaces import PayoffRegistry

from .avalanche import PayoffAvalanche
from .snowball import PayoffSnowball


def register_defaults():
    """
    Register the default payoff strategies in the global registry.

    Registered Strategies:
        - 'avalanche': highest APR first, ties by lower balance
        - 'snowball': lowest balance first, ties by higher APR

    Note:
        This function is automatically called when the module is imported.
        Additional strategies can be registered by assigning into
        `PayoffRegistry` directly.
    """
    PayoffRegistry[PayoffAvalanche.name] = PayoffAvalanche()
    PayoffRegistry[PayoffSnowball.name] = PayoffSnowball()
