"""Engine error kinds.

Every failure aborts the whole selection call; there are no partial
results. Each kind also subclasses the closest builtin so callers that
only know ``ValueError`` / ``LookupError`` still catch it.
"""


class SelectionError(Exception):
    """Base class for every error raised by a selector."""


class InvalidArgument(SelectionError, ValueError):
    """Negative budget, negative amount, or invalid latency value."""


class TableTooLarge(InvalidArgument):
    """The exact selector's table would exceed the configured cell bound."""

    def __init__(self, cells: int, max_cells: int) -> None:
        self.cells = cells
        self.max_cells = max_cells
        super().__init__(
            f"knapsack table needs {cells:,} cells, limit is {max_cells:,}"
        )


class MissingLatencyEntry(SelectionError, LookupError):
    """A transaction references a country code absent from the latency table."""

    def __init__(self, country_code: str, transaction_id: str | None = None) -> None:
        self.country_code = country_code
        self.transaction_id = transaction_id
        msg = f"no latency entry for country code {country_code!r}"
        if transaction_id is not None:
            msg += f" (transaction {transaction_id!r})"
        super().__init__(msg)


class DivisionByZeroOrMissingLatency(SelectionError, ArithmeticError):
    """Ratio-greedy needs a strictly positive latency for every transaction."""

    def __init__(self, country_code: str, transaction_id: str | None = None) -> None:
        self.country_code = country_code
        self.transaction_id = transaction_id
        msg = f"cannot rank by amount/latency: latency for {country_code!r} is zero or missing"
        if transaction_id is not None:
            msg += f" (transaction {transaction_id!r})"
        super().__init__(msg)
