"""Selector lookup by kind, plus side-by-side comparison."""

from collections.abc import Iterable, Mapping, Sequence

from prioritizer.engine.greedy import AmountGreedySelector, RatioGreedySelector
from prioritizer.engine.knapsack import KnapsackSelector
from prioritizer.engine.selector import SelectionResult, Selector
from prioritizer.models.common import SelectorKind
from prioritizer.models.transaction import Transaction


def available_selectors() -> list[SelectorKind]:
    """All selector kinds, exact first."""
    return list(SelectorKind)


def get_selector(kind: SelectorKind | str, *, max_cells: int | None = None) -> Selector:
    """Build the selector for ``kind``.

    ``max_cells`` only applies to the exact selector.

    Raises:
        ValueError: If ``kind`` is not a known selector.
    """
    try:
        kind = SelectorKind(kind)
    except ValueError:
        known = ", ".join(k.value for k in SelectorKind)
        msg = f"unknown selector {kind!r}; expected one of: {known}"
        raise ValueError(msg) from None

    if kind == SelectorKind.EXACT:
        return KnapsackSelector(max_cells=max_cells)
    if kind == SelectorKind.RATIO_GREEDY:
        return RatioGreedySelector()
    return AmountGreedySelector()


def compare_selectors(
    transactions: Sequence[Transaction],
    latencies: Mapping[str, int],
    budget: int,
    *,
    kinds: Iterable[SelectorKind | str] | None = None,
    max_cells: int | None = None,
) -> dict[SelectorKind, SelectionResult]:
    """Run several selectors on the same input.

    Any selector error propagates; no partial comparison is returned.
    """
    selected = [SelectorKind(k) for k in kinds] if kinds is not None else available_selectors()
    return {
        kind: get_selector(kind, max_cells=max_cells).select(transactions, latencies, budget)
        for kind in selected
    }
