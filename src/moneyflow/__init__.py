"""
MoneyFlow - Monthly Cashflow Planner

MoneyFlow simulates one calendar month of personal finances day by day. Given a
starting balance and recurring incomes, bills, loan minimum payments and
savings-goal contributions, it produces a chronological ledger of every cash
movement, the remaining loan balances and the month's totals.

Key Features:
- **Deterministic**: The same configuration always produces the same ledger
- **Shortfall-aware**: Obligations that cannot be covered are paid partially
  and the unpaid remainder is recorded, the month still runs to the end
- **Accelerated payoff**: A quarter of every incoming payment is diverted to
  extra loan payments on even days
- **Pluggable strategies**: Avalanche and snowball ordering, registered by name

Quick Start:
    ```python
    from moneyflow import plan

    result = plan({
        "startBalance": 50000,
        "incomes": [{"id": "i1", "name": "Salary", "amount": 420000, "day": 15}],
        "bills": [{"id": "b1", "name": "Rent", "amount": 180000, "day": 25,
                   "priority": 10}],
        "loans": [{"id": "l1", "name": "Card", "balance": 350000, "apr": 34.9,
                   "minPayment": 20000, "day": 27}],
        "goals": [],
    })
    for entry in result.ledger:
        print(entry)
    print(result.totals)
    ```
"""

# Version information
__version__ = "0.1.0"
__author__ = "MoneyFlow Team"
__description__ = "Monthly cashflow planner with debt payoff strategies"

# Register default payoff strategies
import moneyflow.strategies

from .config_io import (
    SAMPLE_DOCUMENT,
    apply_import,
    dumps_config,
    load_config,
    loads_config,
    save_config,
)
from .core import (
    Bill,
    ConfigError,
    Goal,
    Income,
    K,
    Ledger,
    LedgerEntry,
    Loan,
    MalformedImportError,
    MonthlySimulator,
    PayoffRegistry,
    PlanConfig,
    PlanResult,
    Totals,
    aggregate_totals,
    build_schedule,
    clamp_day,
    clamp_priority,
    plan,
)
from .kpi import (
    category_totals,
    debt_reduction,
    end_of_day_balances,
    lowest_balance,
    shortfall_days,
)

# Chart functions need plotly at call time (optional "viz" extra)
from .charts import PLOTLY_AVAILABLE as CHARTS_AVAILABLE
from .charts import balance_timeline, loan_balances_bar

__all__ = [
    # Models
    "Income",
    "Bill",
    "Loan",
    "Goal",
    "PlanConfig",
    "clamp_day",
    "clamp_priority",
    # Simulation
    "plan",
    "MonthlySimulator",
    "build_schedule",
    "PayoffRegistry",
    "K",
    # Ledger and results
    "Ledger",
    "LedgerEntry",
    "PlanResult",
    "Totals",
    "aggregate_totals",
    # Errors
    "ConfigError",
    "MalformedImportError",
    # Import / export
    "SAMPLE_DOCUMENT",
    "apply_import",
    "dumps_config",
    "loads_config",
    "load_config",
    "save_config",
    # KPI utilities
    "category_totals",
    "debt_reduction",
    "end_of_day_balances",
    "lowest_balance",
    "shortfall_days",
    # Charts
    "CHARTS_AVAILABLE",
    "balance_timeline",
    "loan_balances_bar",
    # Version info
    "__version__",
    "__author__",
    "__description__",
]
