"""
Error classes for MoneyFlow.

This module defines the exceptions raised at the configuration boundary. The
simulator itself never raises for out-of-range days, priorities or loose
numeric input; those are normalized before the engine sees them.
"""


class ConfigError(ValueError):
    """
    Configuration error raised while building a plan configuration.

    Raised when a configuration is structurally unusable, as opposed to
    merely sloppy. Sloppy values (a day of 45, a priority of "high") are
    clamped or defaulted instead.

    **Common Causes:**
    - An income/bill/loan/goal entry that is not a mapping
    - Two loans sharing the same id (loan balances are keyed by id)
    - An unknown payoff strategy name

    **Example Usage:**
        ```python
        from moneyflow.core.errors import ConfigError
        from moneyflow.core.models import PlanConfig

        try:
            PlanConfig.from_dict({"strategy": "random"})
        except ConfigError as e:
            print(f"Configuration error: {e}")
        ```
    """

    pass


class MalformedImportError(ConfigError):
    """
    Raised when an imported configuration document cannot be parsed.

    The import is all-or-nothing: when this is raised, the currently loaded
    configuration has not been modified.

    Attributes:
        source: Label of the document that failed (file path or "<text>")
    """

    def __init__(self, message: str, source: str = "<text>"):
        self.source = source
        super().__init__(f"[{source}] {message}")
