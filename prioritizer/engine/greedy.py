"""Greedy selectors — fast approximations of the knapsack optimum.

Both walk a stably sorted copy of the input and accept transactions until
the first one that no longer fits, then STOP. They never skip an
unaffordable transaction to try a cheaper one further down the list, so
a result can leave budget unused even when a later transaction would fit.
Their value is always <= the KnapsackSelector value.
"""

import logging
from collections.abc import Mapping, Sequence

from prioritizer.engine.errors import (
    DivisionByZeroOrMissingLatency,
    MissingLatencyEntry,
)
from prioritizer.engine.latency import resolve_latencies
from prioritizer.engine.selector import SelectionResult
from prioritizer.models.common import SelectorKind
from prioritizer.models.transaction import Transaction

logger = logging.getLogger(__name__)


def _take_prefix(
    ordered: list[tuple[Transaction, int]],
    budget: int,
    strategy: str,
) -> SelectionResult:
    """Accept the longest prefix of ``ordered`` whose latency fits ``budget``.

    A zero budget accepts nothing, zero-latency transactions included.
    """
    chosen: list[Transaction] = []
    value = 0.0
    time_used = 0
    for tx, latency in ordered:
        if budget == 0 or time_used + latency > budget:
            break
        chosen.append(tx)
        value += tx.amount
        time_used += latency

    logger.debug(
        "%s accepted %d of %d transactions using %d/%dms",
        strategy, len(chosen), len(ordered), time_used, budget,
    )
    return SelectionResult(
        value=value,
        chosen=tuple(chosen),
        latency_used=time_used,
        budget=budget,
        strategy=strategy,
    )


class RatioGreedySelector:
    """Rank by amount per millisecond of latency, highest first.

    O(N log N). Equal ratios keep their input order (``sorted`` is stable),
    so the result is reproducible for a given input ordering.
    """

    name = SelectorKind.RATIO_GREEDY.value

    def select(
        self,
        transactions: Sequence[Transaction],
        latencies: Mapping[str, int],
        budget: int,
    ) -> SelectionResult:
        """Select transactions greedily by amount/latency ratio.

        Raises:
            InvalidArgument: Negative budget, amount, or latency.
            DivisionByZeroOrMissingLatency: A transaction's latency is zero
                or its country is absent from the table.
        """
        try:
            weights = resolve_latencies(transactions, latencies, budget)
        except MissingLatencyEntry as exc:
            raise DivisionByZeroOrMissingLatency(
                exc.country_code, exc.transaction_id,
            ) from exc

        ranked: list[tuple[float, Transaction, int]] = []
        for tx, latency in zip(transactions, weights):
            if latency == 0:
                raise DivisionByZeroOrMissingLatency(tx.bank_country_code, tx.id)
            ranked.append((tx.amount / latency, tx, latency))

        ranked = sorted(ranked, key=lambda item: item[0], reverse=True)
        return _take_prefix(
            [(tx, latency) for _, tx, latency in ranked], budget, self.name,
        )


class AmountGreedySelector:
    """Rank by amount alone, largest first. Ignores latency when ranking."""

    name = SelectorKind.AMOUNT_GREEDY.value

    def select(
        self,
        transactions: Sequence[Transaction],
        latencies: Mapping[str, int],
        budget: int,
    ) -> SelectionResult:
        """Select transactions greedily by amount, largest first.

        Raises:
            InvalidArgument: Negative budget, amount, or latency.
            MissingLatencyEntry: A country code is absent from ``latencies``.
        """
        weights = resolve_latencies(transactions, latencies, budget)
        ordered = sorted(
            zip(transactions, weights), key=lambda item: item[0].amount, reverse=True,
        )
        return _take_prefix(ordered, budget, self.name)
