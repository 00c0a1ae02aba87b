"""Choose which transactions to process within a latency budget.

Loads transactions (CSV) and the country latency table (JSON), runs a
selector and prints the maximum value with the chosen transactions.

Usage:
    python -m scripts.prioritize 1000
    python -m scripts.prioritize 1000 --transactions data/transactions.csv \\
        --latencies data/latencies.json --selector ratio-greedy
    python -m scripts.prioritize 1000 --compare
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

import structlog

from prioritizer.config.settings import Settings, get_settings
from prioritizer.data.loaders import load_latencies, load_transactions
from prioritizer.engine import (
    SelectionError,
    SelectionResult,
    compare_selectors,
    get_selector,
)
from prioritizer.models.common import SelectorKind
from prioritizer.observability.logging import configure_logging

_BUDGET_HELP = "please input a total time in ms"


def _budget_ms(value: str) -> int:
    """argparse type: a non-negative integer number of milliseconds."""
    try:
        budget = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{_BUDGET_HELP} (got {value!r})") from None
    if budget < 0:
        raise argparse.ArgumentTypeError(f"{_BUDGET_HELP} (got {value!r})")
    return budget


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from None
    if n <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return n


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    """Command-line parser; defaults come from ``settings``."""
    parser = argparse.ArgumentParser(
        description="Select the transactions that maximize processed value within a time budget",
    )
    parser.add_argument("budget", type=_budget_ms, help="Total processing time in ms")
    parser.add_argument(
        "--transactions", default=settings.TRANSACTIONS_PATH,
        help=f"Transactions CSV (default: {settings.TRANSACTIONS_PATH})",
    )
    parser.add_argument(
        "--latencies", default=settings.LATENCIES_PATH,
        help="Latency table JSON (default: packaged table)",
    )
    parser.add_argument(
        "--selector", choices=[k.value for k in SelectorKind],
        default=settings.DEFAULT_SELECTOR.value,
        help="Selection strategy",
    )
    parser.add_argument(
        "--compare", action="store_true",
        help="Run every selector and print a summary row for each",
    )
    parser.add_argument(
        "--limit", type=_positive_int, default=None,
        help="Print at most this many chosen transactions",
    )
    return parser


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def _print_header(budget: int, n_transactions: int, n_countries: int) -> None:
    w = 60
    print("=" * w)
    print("  Transaction Prioritization")
    print("=" * w)
    print(f"  Budget:        {budget:,} ms")
    print(f"  Transactions:  {n_transactions:,}")
    print(f"  Countries:     {n_countries:,}")


def _print_result(result: SelectionResult, limit: int | None) -> None:
    print()
    print(f"  Selector:      {result.strategy}")
    print(f"  The max USD value that can be processed in {result.budget:,}ms is ${result.value:,.2f}")
    print(f"  Latency used:  {result.latency_used:,} / {result.budget:,} ms")
    print(f"  Chosen:        {len(result.chosen):,}")

    if not result.chosen:
        return

    shown = result.chosen if limit is None else result.chosen[:limit]
    print()
    print(f"  {'ID':<38} {'Amount (USD)':>14} {'Country':>8}")
    print(f"  {'-' * 38} {'-' * 14} {'-' * 8}")
    for tx in shown:
        print(f"  {tx.id:<38} {tx.amount:>14,.2f} {tx.bank_country_code:>8}")
    if len(shown) < len(result.chosen):
        print(f"  ... {len(result.chosen) - len(shown):,} more")


def _print_comparison(results: dict[SelectorKind, SelectionResult]) -> None:
    print()
    print(f"  {'Selector':<15} {'Value (USD)':>16} {'Latency (ms)':>13} {'Chosen':>7}")
    print(f"  {'-' * 15} {'-' * 16} {'-' * 13} {'-' * 7}")
    for kind, result in results.items():
        print(
            f"  {kind.value:<15} {result.value:>16,.2f}"
            f" {result.latency_used:>13,} {len(result.chosen):>7,}"
        )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> int:
    """Run the prioritizer. Returns the process exit status."""
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)
    configure_logging(settings)
    log = structlog.get_logger()

    try:
        transactions = load_transactions(args.transactions)
        latencies = load_latencies(args.latencies)
    except (OSError, ValueError) as exc:
        log.error("input_load_failed", error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1

    _print_header(args.budget, len(transactions), len(latencies))

    try:
        if args.compare:
            results = compare_selectors(
                transactions, latencies, args.budget, max_cells=settings.table_cell_limit,
            )
        else:
            selector = get_selector(args.selector, max_cells=settings.table_cell_limit)
            results = {SelectorKind(args.selector): selector.select(transactions, latencies, args.budget)}
    except SelectionError as exc:
        log.error("selection_failed", error=str(exc), budget_ms=args.budget)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for kind, result in results.items():
        log.info(
            "selection_complete",
            selector=kind.value,
            budget_ms=result.budget,
            value=round(result.value, 2),
            latency_used_ms=result.latency_used,
            chosen=len(result.chosen),
        )

    if args.compare:
        _print_comparison(results)
    else:
        _print_result(next(iter(results.values())), args.limit)
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
