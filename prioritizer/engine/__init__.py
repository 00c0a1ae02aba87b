"""Selection engine — choose transactions to process within a latency budget.

Three interchangeable strategies share one contract,
``select(transactions, latencies, budget) -> SelectionResult``:

- KnapsackSelector: exact 0/1 knapsack optimum via dynamic programming.
- RatioGreedySelector: value-per-millisecond greedy, O(N log N).
- AmountGreedySelector: largest-amount-first greedy.

This package is DETERMINISTIC and side-effect free. The latency table is
always passed in by the caller; nothing here reads files or settings.
"""

from prioritizer.engine.errors import (
    DivisionByZeroOrMissingLatency,
    InvalidArgument,
    MissingLatencyEntry,
    SelectionError,
    TableTooLarge,
)
from prioritizer.engine.greedy import AmountGreedySelector, RatioGreedySelector
from prioritizer.engine.knapsack import KnapsackSelector
from prioritizer.engine.latency import LatencyTable
from prioritizer.engine.registry import (
    available_selectors,
    compare_selectors,
    get_selector,
)
from prioritizer.engine.selector import SelectionResult, Selector

__all__ = [
    "AmountGreedySelector",
    "DivisionByZeroOrMissingLatency",
    "InvalidArgument",
    "KnapsackSelector",
    "LatencyTable",
    "MissingLatencyEntry",
    "RatioGreedySelector",
    "SelectionError",
    "SelectionResult",
    "Selector",
    "TableTooLarge",
    "available_selectors",
    "compare_selectors",
    "get_selector",
]
