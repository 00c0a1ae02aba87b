"""Tests for the exact knapsack selector.

Covers: the US/UK worked example, tie-break toward excluding later
transactions, zero budget / empty input, oversized latencies,
zero-latency transactions, argument validation, and the table-size guard.
"""

import pytest
from pydantic import ValidationError

from prioritizer.engine.errors import (
    InvalidArgument,
    MissingLatencyEntry,
    SelectionError,
    TableTooLarge,
)
from prioritizer.engine.knapsack import KnapsackSelector
from prioritizer.engine.latency import LatencyTable
from prioritizer.models.transaction import Transaction


# ===================================================================
# Worked example
# ===================================================================


class TestWorkedExample:
    """a=100@US, b=60@UK, c=120@US, US=50, UK=20, budget 70."""

    def test_optimum_is_b_and_c(self, abc_transactions, abc_latencies) -> None:
        result = KnapsackSelector().select(abc_transactions, abc_latencies, 70)
        assert result.value == pytest.approx(180.0)
        assert result.chosen_ids == ["b", "c"]
        assert result.latency_used == 70
        assert result.latency_remaining == 0

    def test_result_metadata(self, abc_transactions, abc_latencies) -> None:
        result = KnapsackSelector().select(abc_transactions, abc_latencies, 70)
        assert result.strategy == "exact"
        assert result.budget == 70

    def test_chosen_are_input_objects(self, abc_transactions, abc_latencies) -> None:
        result = KnapsackSelector().select(abc_transactions, abc_latencies, 70)
        assert result.chosen[0] is abc_transactions[1]
        assert result.chosen[1] is abc_transactions[2]

    def test_larger_budget_takes_everything(self, abc_transactions, abc_latencies) -> None:
        result = KnapsackSelector().select(abc_transactions, abc_latencies, 120)
        assert result.value == pytest.approx(280.0)
        assert result.chosen_ids == ["a", "b", "c"]
        assert result.latency_used == 120

    def test_budget_below_cheapest(self, abc_transactions, abc_latencies) -> None:
        result = KnapsackSelector().select(abc_transactions, abc_latencies, 19)
        assert result.value == 0.0
        assert result.chosen == ()

    def test_accepts_plain_dict(self, abc_transactions) -> None:
        result = KnapsackSelector().select(abc_transactions, {"US": 50, "UK": 20}, 70)
        assert result.value == pytest.approx(180.0)


# ===================================================================
# Tie-break
# ===================================================================


class TestTieBreak:
    """Equal values resolve to the selection without the later transaction."""

    def test_equal_alternatives_prefer_earlier(self, make_tx) -> None:
        txs = [make_tx("first", 50.0, "X"), make_tx("second", 50.0, "X")]
        result = KnapsackSelector().select(txs, {"X": 10}, 10)
        assert result.chosen_ids == ["first"]
        assert result.value == pytest.approx(50.0)

    def test_tie_against_combination(self, make_tx) -> None:
        # {a, b} = 100 @ 20ms ties with {c} = 100 @ 20ms; c is last so it is excluded
        txs = [
            make_tx("a", 40.0, "S"),
            make_tx("b", 60.0, "S"),
            make_tx("c", 100.0, "L"),
        ]
        result = KnapsackSelector().select(txs, {"S": 10, "L": 20}, 20)
        assert result.chosen_ids == ["a", "b"]

    def test_zero_amount_never_chosen(self, make_tx) -> None:
        txs = [make_tx("free", 0.0, "X"), make_tx("paid", 5.0, "X")]
        result = KnapsackSelector().select(txs, {"X": 1}, 5)
        assert result.chosen_ids == ["paid"]


# ===================================================================
# Edge cases
# ===================================================================


class TestEdgeCases:
    def test_zero_budget(self, abc_transactions, abc_latencies) -> None:
        result = KnapsackSelector().select(abc_transactions, abc_latencies, 0)
        assert result.value == 0.0
        assert result.chosen == ()
        assert result.latency_used == 0

    def test_empty_input(self, abc_latencies) -> None:
        result = KnapsackSelector().select([], abc_latencies, 500)
        assert result.value == 0.0
        assert result.chosen == ()

    def test_latency_exceeding_budget_never_chosen(self, make_tx) -> None:
        txs = [make_tx("big", 1_000_000.0, "SLOW"), make_tx("small", 1.0, "FAST")]
        result = KnapsackSelector().select(txs, {"SLOW": 101, "FAST": 1}, 100)
        assert result.chosen_ids == ["small"]

    def test_zero_latency_transactions_taken(self, make_tx) -> None:
        txs = [make_tx("z1", 10.0, "Z"), make_tx("p", 5.0, "P"), make_tx("z2", 7.0, "Z")]
        result = KnapsackSelector().select(txs, {"Z": 0, "P": 3}, 3)
        assert result.chosen_ids == ["z1", "p", "z2"]
        assert result.value == pytest.approx(22.0)
        assert result.latency_used == 3

    def test_zero_budget_excludes_zero_latency(self, make_tx) -> None:
        result = KnapsackSelector().select([make_tx("z", 5.0, "ZERO")], {"ZERO": 0}, 0)
        assert result.chosen == ()
        assert result.value == 0.0
        assert result.latency_used == 0

    def test_exact_fit(self, make_tx) -> None:
        txs = [make_tx("a", 3.0, "A"), make_tx("b", 4.0, "B"), make_tx("c", 5.0, "C")]
        result = KnapsackSelector().select(txs, {"A": 2, "B": 3, "C": 4}, 5)
        assert result.chosen_ids == ["a", "b"]
        assert result.value == pytest.approx(7.0)

    def test_fractional_amounts(self, make_tx) -> None:
        txs = [make_tx("a", 0.1, "X"), make_tx("b", 0.2, "X")]
        result = KnapsackSelector().select(txs, {"X": 1}, 2)
        assert result.value == pytest.approx(0.3)
        assert result.value == sum(tx.amount for tx in result.chosen)


# ===================================================================
# Validation
# ===================================================================


class TestValidation:
    def test_negative_budget(self, abc_transactions, abc_latencies) -> None:
        with pytest.raises(InvalidArgument, match="budget"):
            KnapsackSelector().select(abc_transactions, abc_latencies, -1)

    def test_non_integer_budget(self, abc_transactions, abc_latencies) -> None:
        with pytest.raises(InvalidArgument):
            KnapsackSelector().select(abc_transactions, abc_latencies, 70.5)  # type: ignore[arg-type]

    def test_negative_amount(self, make_tx, abc_latencies) -> None:
        txs = [make_tx("neg", -5.0, "US")]
        with pytest.raises(InvalidArgument, match="neg"):
            KnapsackSelector().select(txs, abc_latencies, 100)

    def test_negative_latency(self, abc_transactions) -> None:
        with pytest.raises(InvalidArgument, match="negative"):
            KnapsackSelector().select(abc_transactions, {"US": -1, "UK": 20}, 70)

    def test_missing_latency_names_country(self, make_tx, abc_latencies) -> None:
        txs = [make_tx("a", 100.0, "US"), make_tx("x", 10.0, "FR")]
        with pytest.raises(MissingLatencyEntry) as exc_info:
            KnapsackSelector().select(txs, abc_latencies, 70)
        assert exc_info.value.country_code == "FR"
        assert exc_info.value.transaction_id == "x"

    def test_missing_latency_even_with_zero_budget(self, make_tx, abc_latencies) -> None:
        with pytest.raises(MissingLatencyEntry):
            KnapsackSelector().select([make_tx("x", 1.0, "FR")], abc_latencies, 0)

    def test_errors_share_base_class(self, make_tx) -> None:
        with pytest.raises(SelectionError):
            KnapsackSelector().select([make_tx("x", 1.0, "FR")], LatencyTable(), 10)

    def test_invalid_argument_is_value_error(self, abc_transactions, abc_latencies) -> None:
        with pytest.raises(ValueError):
            KnapsackSelector().select(abc_transactions, abc_latencies, -10)


# ===================================================================
# Table-size guard
# ===================================================================


class TestTableGuard:
    def test_raises_before_allocation(self, abc_transactions, abc_latencies) -> None:
        selector = KnapsackSelector(max_cells=100)
        with pytest.raises(TableTooLarge) as exc_info:
            selector.select(abc_transactions, abc_latencies, 70)
        assert exc_info.value.cells == 4 * 71
        assert exc_info.value.max_cells == 100

    def test_guard_is_invalid_argument(self, abc_transactions, abc_latencies) -> None:
        with pytest.raises(InvalidArgument):
            KnapsackSelector(max_cells=1).select(abc_transactions, abc_latencies, 70)

    def test_within_limit(self, abc_transactions, abc_latencies) -> None:
        result = KnapsackSelector(max_cells=4 * 71).select(abc_transactions, abc_latencies, 70)
        assert result.value == pytest.approx(180.0)

    def test_zero_budget_skips_guard(self, abc_transactions, abc_latencies) -> None:
        result = KnapsackSelector(max_cells=1).select(abc_transactions, abc_latencies, 0)
        assert result.chosen == ()


class TestInputsUntouched:
    def test_transactions_not_mutated(self, abc_transactions, abc_latencies) -> None:
        before = [tx.model_dump() for tx in abc_transactions]
        KnapsackSelector().select(abc_transactions, abc_latencies, 70)
        assert [tx.model_dump() for tx in abc_transactions] == before

    def test_transactions_are_frozen(self) -> None:
        tx = Transaction(id="a", amount=1.0, bank_country_code="US")
        with pytest.raises(ValidationError):
            tx.amount = 2.0  # type: ignore[misc]
