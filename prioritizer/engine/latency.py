"""Latency table and shared input validation.

A latency table maps a bank country code to the processing cost, in
milliseconds, of one transaction from that country. Lookups never fall
back to a default: an unknown country would otherwise look free and
distort every selection built on top of it.
"""

import math
from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType

from prioritizer.engine.errors import InvalidArgument, MissingLatencyEntry
from prioritizer.models.transaction import Transaction


class LatencyTable(Mapping[str, int]):
    """Read-only country code -> latency (ms) mapping.

    Every value is validated on construction: it must be a non-negative
    ``int`` (``bool`` is rejected even though it subclasses ``int``).
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, int] | None = None) -> None:
        checked: dict[str, int] = {}
        for code, latency in (entries or {}).items():
            if not isinstance(code, str) or not code:
                raise InvalidArgument(f"country code must be a non-empty string, got {code!r}")
            if isinstance(latency, bool) or not isinstance(latency, int):
                raise InvalidArgument(
                    f"latency for {code!r} must be an integer, got {latency!r}"
                )
            if latency < 0:
                raise InvalidArgument(f"latency for {code!r} is negative ({latency})")
            checked[code] = latency
        self._entries = MappingProxyType(checked)

    @classmethod
    def coerce(cls, latencies: "Mapping[str, int] | LatencyTable") -> "LatencyTable":
        """Return ``latencies`` as a LatencyTable, validating plain mappings."""
        if isinstance(latencies, cls):
            return latencies
        return cls(latencies)

    def __getitem__(self, code: str) -> int:
        return self._entries[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"LatencyTable({dict(self._entries)!r})"

    def latency_for(self, transaction: Transaction) -> int:
        """Latency of ``transaction``; raises MissingLatencyEntry if unknown."""
        code = transaction.bank_country_code
        try:
            return self._entries[code]
        except KeyError:
            raise MissingLatencyEntry(code, transaction.id) from None


def resolve_latencies(
    transactions: Sequence[Transaction],
    latencies: Mapping[str, int],
    budget: int,
) -> list[int]:
    """Validate selector inputs and return per-transaction latencies.

    Runs before any selector computation. Checks, in order: the budget,
    every table entry, then every transaction's amount and country code.

    Returns:
        Latency of each transaction, parallel to ``transactions``.

    Raises:
        InvalidArgument: Negative / non-integer budget, negative latency,
            negative or non-finite amount.
        MissingLatencyEntry: A transaction's country is not in the table.
    """
    if isinstance(budget, bool) or not isinstance(budget, int):
        raise InvalidArgument(f"budget must be an integer, got {budget!r}")
    if budget < 0:
        raise InvalidArgument(f"budget must be >= 0, got {budget}")

    table = LatencyTable.coerce(latencies)

    weights: list[int] = []
    for tx in transactions:
        if not math.isfinite(tx.amount) or tx.amount < 0:
            raise InvalidArgument(
                f"transaction {tx.id!r} has invalid amount {tx.amount}"
            )
        weights.append(table.latency_for(tx))
    return weights
