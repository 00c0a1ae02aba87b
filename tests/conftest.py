"""Shared pytest fixtures for the prioritizer test suite.

Provides:
- make_tx: factory for Transaction records
- abc_transactions / abc_latencies: the three-transaction US/UK example
- transactions_csv / latencies_json: the same example written to tmp files
"""

import json

import pytest

from prioritizer.engine.latency import LatencyTable
from prioritizer.models.transaction import Transaction


def _make_tx(tx_id: str, amount: float, country: str) -> Transaction:
    return Transaction(id=tx_id, amount=amount, bank_country_code=country)


@pytest.fixture
def make_tx():
    """Factory: make_tx("a", 100.0, "US") -> Transaction."""
    return _make_tx


@pytest.fixture
def abc_transactions() -> list[Transaction]:
    """a=100@US, b=60@UK, c=120@US."""
    return [
        _make_tx("a", 100.0, "US"),
        _make_tx("b", 60.0, "UK"),
        _make_tx("c", 120.0, "US"),
    ]


@pytest.fixture
def abc_latencies() -> LatencyTable:
    """US=50ms, UK=20ms."""
    return LatencyTable({"US": 50, "UK": 20})


@pytest.fixture
def transactions_csv(tmp_path):
    path = tmp_path / "transactions.csv"
    path.write_text(
        "id,amount,bank_country_code\n"
        "a,100.00,US\n"
        "b,60.00,UK\n"
        "c,120.00,US\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def latencies_json(tmp_path):
    path = tmp_path / "latencies.json"
    path.write_text(json.dumps({"US": 50, "UK": 20}), encoding="utf-8")
    return path
