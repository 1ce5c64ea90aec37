"""
Example comparing the avalanche and snowball payoff strategies.

This example shows how to:
1. Load the sample plan document
2. Run the same month under both payoff strategies
3. Compare accelerated payments, shortfalls and remaining debt
"""

from dataclasses import replace

from moneyflow import SAMPLE_DOCUMENT, PlanConfig, debt_reduction, lowest_balance, plan


def main():
    """Run the sample month under every strategy and print a comparison."""
    print("=== MoneyFlow Strategy Comparison Example ===\n")

    base = PlanConfig.from_dict(SAMPLE_DOCUMENT)

    for strategy in ("avalanche", "snowball"):
        config = replace(base, strategy=strategy)
        result = plan(config)

        print(f"--- {strategy} ---")
        for entry in result.accelerated_payments():
            print(f"  day {entry.day:>2}: {entry.label} {entry.amount:,.0f}")

        day, balance = lowest_balance(result)
        print(f"  Lowest balance: {balance:,.0f} on day {day}")
        print(f"  Unpaid obligations: {result.totals.unpaid:,.0f}")
        print(f"  End balance: {result.totals.end_balance:,.0f}")

        reduction = debt_reduction(result, config)
        print(reduction[["name", "end_balance", "paid_pct"]].to_string())
        print()


if __name__ == "__main__":
    main()
