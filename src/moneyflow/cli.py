"""
Command-line interface for MoneyFlow.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace

from moneyflow import __version__
from moneyflow.config_io import SAMPLE_DOCUMENT, load_config
from moneyflow.core.interfaces import PayoffRegistry
from moneyflow.core.kinds import K
from moneyflow.core.results import PlanResult
from moneyflow.core.simulator import plan


def _fmt(value) -> str:
    return f"{float(value):,.0f}"


def _save_json(path: str, data: dict) -> None:
    """Save data as JSON to file path."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def _print_result(result: PlanResult, loan_names: dict[str, str]) -> None:
    """Print timeline, loan balances and totals to stdout."""
    signs = {K.CREDIT: "+", K.DEBIT: "-", K.SHORTFALL: "!"}

    print(f"Timeline ({result.meta.get('strategy')})")
    print("=" * 60)
    for entry in result.ledger:
        amount = f"{signs[entry.kind]}{_fmt(entry.amount)}"
        print(
            f"  day {entry.day:>2}  {entry.label:<36} {amount:>12}"
            f"  balance {_fmt(entry.running_balance)}"
        )
    print()

    if result.loan_balances:
        print("Loan balances:")
        for loan_id, balance in result.loan_balances.items():
            print(f"  {loan_names.get(loan_id) or loan_id}: {_fmt(balance)}")
        print()

    totals = result.totals
    print("Totals:")
    print(f"  Paid bills:  {_fmt(totals.paid_bills)}")
    print(f"  Paid loans:  {_fmt(totals.paid_loans)}")
    print(f"  To goals:    {_fmt(totals.to_goals)}")
    print(f"  End balance: {_fmt(totals.end_balance)}")
    if totals.unpaid > 0:
        print(f"  Unpaid:      {_fmt(totals.unpaid)}")


def cmd_example(_) -> int:
    """Print the sample plan document."""
    json.dump(SAMPLE_DOCUMENT, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


def cmd_run(args) -> int:
    """Run a plan document and print or export the result."""
    try:
        config = load_config(args.input)
        if args.strategy:
            config = replace(config, strategy=args.strategy)

        result = plan(config)

        if args.output:
            _save_json(args.output, result.to_dict())
            print(f"Results saved to {args.output}")
        elif args.json:
            json.dump(result.to_dict(), sys.stdout, indent=2, ensure_ascii=False)
            sys.stdout.write("\n")
        else:
            _print_result(result, config.loan_names())
        return 0

    except Exception as e:
        print(f"Error running plan: {e}", file=sys.stderr)
        return 1


def cmd_validate(args) -> int:
    """
    Validate a plan document.

    Exit codes:
        0: Valid, nothing had to be normalized
        1: Document is malformed
        2: Valid, but some values were clamped or defaulted
    """
    notes: list[str] = []
    try:
        load_config(args.input, notes=notes)
    except Exception as e:
        if args.format == "json":
            report = {"is_valid": False, "error": str(e), "exit_code": 1}
            json.dump(report, sys.stdout, indent=2)
            sys.stdout.write("\n")
        else:
            print(f"Validation failed: {e}", file=sys.stderr)
        return 1

    exit_code = 2 if notes else 0
    if args.format == "json":
        report = {"is_valid": True, "notes": notes, "exit_code": exit_code}
        json.dump(report, sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
    else:
        print("Validation passed")
        for note in notes:
            print(f"  normalized {note}")
    return exit_code


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="moneyflow", description="MoneyFlow - Monthly cashflow planner"
    )

    parser.add_argument(
        "--version", action="version", version=f"MoneyFlow {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(
        dest="cmd", required=True, help="Available commands"
    )

    # Example command
    example_parser = subparsers.add_parser(
        "example", help="Print a sample plan document"
    )
    example_parser.set_defaults(func=cmd_example)

    # Run command
    run_parser = subparsers.add_parser(
        "run", help="Simulate one month for a plan document"
    )
    run_parser.add_argument(
        "-i", "--input", required=True, help="Input plan document (JSON or YAML)"
    )
    run_parser.add_argument("-o", "--output", help="Write the result JSON to a file")
    run_parser.add_argument(
        "--strategy",
        choices=sorted(PayoffRegistry),
        help="Override the payoff strategy of the document",
    )
    run_parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )
    run_parser.set_defaults(func=cmd_run)

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a plan document")
    validate_parser.add_argument(
        "-i", "--input", required=True, help="Input plan document (JSON or YAML)"
    )
    validate_parser.add_argument(
        "--format", choices=["human", "json"], default="human", help="Output format"
    )
    validate_parser.set_defaults(func=cmd_validate)

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
