"""Exact selector — 0/1 knapsack by dynamic programming.

    V[i][t] = max value using the first i transactions within t ms
    V[0][t] = 0
    V[i][t] = max(V[i-1][t], amount_i + V[i-1][t - w_i])   if t >= w_i

Column 0 stays 0 unless a transaction has zero latency. A zero budget
short-circuits to the empty selection before any table is built.

``keep[i][t]`` records whether transaction i was taken at (i, t). It is
set only when including strictly beats excluding, so ties resolve to the
selection without the later transaction. The traceback follows ``keep``
from (N, budget) back to row 0.

Both tables are single flat buffers of (N+1)*(budget+1) cells indexed by
``i*(budget+1) + t``. Each row is filled with one vectorized comparison
against the previous row, which is equivalent to the scalar recurrence
since row i only reads row i-1.

O(N*budget) time and memory. Callers with large budgets should set
``max_cells``.
"""

import logging
from collections.abc import Mapping, Sequence

import numpy as np

from prioritizer.engine.errors import TableTooLarge
from prioritizer.engine.latency import resolve_latencies
from prioritizer.engine.selector import SelectionResult
from prioritizer.models.common import SelectorKind
from prioritizer.models.transaction import Transaction

logger = logging.getLogger(__name__)


class KnapsackSelector:
    """Maximum-value selection under a latency budget.

    Instances hold configuration only. Tables are allocated per call and
    released on return, so one instance can be shared freely.
    """

    name = SelectorKind.EXACT.value

    def __init__(self, *, max_cells: int | None = None) -> None:
        self.max_cells = max_cells

    def select(
        self,
        transactions: Sequence[Transaction],
        latencies: Mapping[str, int],
        budget: int,
    ) -> SelectionResult:
        """Compute the optimum and one optimal subset.

        Args:
            transactions: Candidates, in input order.
            latencies: Country code -> latency (ms).
            budget: Total latency available (ms), >= 0.

        Returns:
            SelectionResult with the chosen transactions in input order.

        Raises:
            InvalidArgument: Negative budget, amount, or latency.
            MissingLatencyEntry: A country code is absent from ``latencies``.
            TableTooLarge: (N+1)*(budget+1) exceeds ``max_cells``.
        """
        weights = resolve_latencies(transactions, latencies, budget)
        n = len(transactions)

        if n == 0 or budget == 0:
            return SelectionResult(
                value=0.0, chosen=(), latency_used=0, budget=budget, strategy=self.name,
            )

        width = budget + 1
        cells = (n + 1) * width
        if self.max_cells is not None and cells > self.max_cells:
            raise TableTooLarge(cells, self.max_cells)

        logger.debug("knapsack table: %d transactions x %d time units", n, width)

        values = np.zeros(cells, dtype=np.float64)
        keep = np.zeros(cells, dtype=np.bool_)

        for i in range(1, n + 1):
            w = weights[i - 1]
            amount = transactions[i - 1].amount
            prev = values[(i - 1) * width:i * width]
            row = values[i * width:(i + 1) * width]
            row[:] = prev

            # columns t < w cannot take transaction i
            if w > budget:
                continue
            with_current = amount + prev[:width - w]
            take = with_current > prev[w:]
            row[w:] = np.where(take, with_current, prev[w:])
            keep[i * width + w:(i + 1) * width] = take

        best = float(values[n * width + budget])

        chosen: list[Transaction] = []
        t = budget
        for i in range(n, 0, -1):
            if keep[i * width + t]:
                chosen.append(transactions[i - 1])
                t -= weights[i - 1]
        chosen.reverse()
        latency_used = budget - t

        logger.info(
            "max value processable in %dms is %.2f (%d of %d transactions)",
            budget, best, len(chosen), n,
        )
        return SelectionResult(
            value=best,
            chosen=tuple(chosen),
            latency_used=latency_used,
            budget=budget,
            strategy=self.name,
        )
