"""
Core module for MoneyFlow.

This module contains the building blocks of the monthly cashflow simulation:
configuration models, the event scheduler, the ledger and the simulator.
"""

from .currency import Currency, floor_amount, parse_number, to_amount
from .errors import ConfigError, MalformedImportError
from .events import CashEvent, DayBucket, PaydownCandidate
from .interfaces import IPayoffStrategy, PayoffRegistry, get_payoff_strategy
from .kinds import K
from .ledger import Ledger, LedgerEntry, ledger_to_frame
from .models import (
    Bill,
    Goal,
    Income,
    Loan,
    PlanConfig,
    clamp_day,
    clamp_priority,
)
from .results import PlanResult, Totals, aggregate_totals
from .scheduler import GOAL_DAY, build_schedule
from .simulator import EXTRA_SHARE, MonthlySimulator, plan

__all__ = [
    # Errors
    "ConfigError",
    "MalformedImportError",
    # Currency
    "Currency",
    "parse_number",
    "to_amount",
    "floor_amount",
    # Kinds
    "K",
    # Models
    "Income",
    "Bill",
    "Loan",
    "Goal",
    "PlanConfig",
    "clamp_day",
    "clamp_priority",
    # Events and scheduling
    "CashEvent",
    "DayBucket",
    "PaydownCandidate",
    "GOAL_DAY",
    "build_schedule",
    # Strategies
    "IPayoffStrategy",
    "PayoffRegistry",
    "get_payoff_strategy",
    # Ledger and results
    "Ledger",
    "LedgerEntry",
    "ledger_to_frame",
    "Totals",
    "PlanResult",
    "aggregate_totals",
    # Simulation
    "EXTRA_SHARE",
    "MonthlySimulator",
    "plan",
]
