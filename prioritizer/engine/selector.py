"""Selection contract shared by every strategy."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol

from prioritizer.models.transaction import Transaction


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of one selection call.

    ``value`` is the sum of the chosen amounts and ``latency_used`` the
    sum of their latencies, which never exceeds ``budget``.
    """

    value: float
    chosen: tuple[Transaction, ...]
    latency_used: int
    budget: int
    strategy: str

    @property
    def chosen_ids(self) -> list[str]:
        return [tx.id for tx in self.chosen]

    @property
    def latency_remaining(self) -> int:
        return self.budget - self.latency_used


class Selector(Protocol):
    """A strategy that picks transactions to process within a budget."""

    name: str

    def select(
        self,
        transactions: Sequence[Transaction],
        latencies: Mapping[str, int],
        budget: int,
    ) -> SelectionResult:
        ...
