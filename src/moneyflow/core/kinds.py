"""
MoneyFlow kind constants (event classes, ledger kinds, ledger categories).
"""


class K:
    # === Scheduled event classes (what produced a cash movement) ===
    E_INCOME = "income"
    E_BILL = "bill"
    E_LOAN_MIN = "loan_min"  # Contractual minimum payment
    E_GOAL = "goal"  # Savings-goal contribution
    E_LOAN_EXTRA = "loan_extra"  # Accelerated payment from diverted surplus

    # === Ledger entry kinds ===
    CREDIT = "credit"
    DEBIT = "debit"
    SHORTFALL = "shortfall"

    # Outflow settlement order within a day (lower settles first)
    OUTFLOW_ORDER = {E_BILL: 0, E_LOAN_MIN: 1, E_GOAL: 2}

    @classmethod
    def all_categories(cls) -> list[str]:
        """Enumerate all ledger categories (for validation and docs)."""
        return [
            cls.E_INCOME,
            cls.E_BILL,
            cls.E_LOAN_MIN,
            cls.E_GOAL,
            cls.E_LOAN_EXTRA,
        ]

    @classmethod
    def all_entry_kinds(cls) -> list[str]:
        return [cls.CREDIT, cls.DEBIT, cls.SHORTFALL]


# Ledger label templates, in the wording the timeline shows to the user.
LABEL_LOAN_MIN = "{name} (мин.)"
LABEL_LOAN_EXTRA = "{name} (ускор.)"
LABEL_MISSED_MIN = "{name}: не хватило на мин. платёж"
LABEL_PARTIAL = "{name}: частично оплачено"
