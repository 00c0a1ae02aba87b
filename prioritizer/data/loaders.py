"""Input loaders — transactions from CSV, latency table from JSON.

Provides:
  load_transactions(path) -> list[Transaction]
  parse_transactions(text, source) -> list[Transaction]
  load_latencies(path=None) -> LatencyTable
  parse_latencies(text, source) -> LatencyTable

Loader failures (unreadable or malformed files) are reported as
ValueError / OSError here and never translated into engine errors.
"""

from __future__ import annotations

import csv
import io
import json
from importlib import resources
from pathlib import Path

from pydantic import ValidationError

from prioritizer.engine.latency import LatencyTable
from prioritizer.models.transaction import Transaction

REQUIRED_COLUMNS: tuple[str, ...] = ("id", "amount", "bank_country_code")

DEFAULT_LATENCIES_RESOURCE = "latencies.json"

# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


def parse_transactions(text: str, source: str = "<string>") -> list[Transaction]:
    """Parse CSV text with a header row into Transaction records.

    Extra columns are ignored. Blank lines are skipped.

    Raises:
        ValueError: Missing header columns or an invalid row (names the line).
    """
    reader = csv.DictReader(io.StringIO(text))
    header = [name.strip() for name in (reader.fieldnames or [])]
    missing = [col for col in REQUIRED_COLUMNS if col not in header]
    if missing:
        msg = f"{source}: missing required column(s): {', '.join(missing)}"
        raise ValueError(msg)
    reader.fieldnames = header

    transactions: list[Transaction] = []
    for row in reader:
        if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
            continue
        try:
            tx = Transaction(
                id=(row["id"] or "").strip(),
                amount=(row["amount"] or "").strip(),
                bank_country_code=row["bank_country_code"] or "",
            )
        except ValidationError as exc:
            fields = ", ".join(
                ".".join(str(part) for part in err["loc"]) for err in exc.errors()
            )
            msg = f"{source}:{reader.line_num}: invalid transaction ({fields})"
            raise ValueError(msg) from exc
        transactions.append(tx)
    return transactions


def load_transactions(path: str | Path) -> list[Transaction]:
    """Load transactions from a CSV file.

    Raises:
        FileNotFoundError: If path does not exist.
        ValueError: If the CSV is malformed.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        text = f.read()
    return parse_transactions(text, source=path.name)


# ---------------------------------------------------------------------------
# Latencies
# ---------------------------------------------------------------------------


def parse_latencies(text: str, source: str = "<string>") -> LatencyTable:
    """Parse a JSON object of country code -> latency (ms).

    Raises:
        ValueError: If the document is not valid JSON or not an object.
        InvalidArgument: If a latency is negative or not an integer.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"{source}: invalid JSON ({exc.msg} at line {exc.lineno})"
        raise ValueError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{source}: expected a JSON object, got {type(data).__name__}"
        raise ValueError(msg)
    return LatencyTable(data)


def load_latencies(path: str | Path | None = None) -> LatencyTable:
    """Load the latency table from ``path``, or the packaged default if None.

    Raises:
        FileNotFoundError: If path does not exist.
        ValueError: If the JSON is malformed.
    """
    if path is None:
        ref = resources.files("prioritizer.data").joinpath(DEFAULT_LATENCIES_RESOURCE)
        return parse_latencies(ref.read_text(encoding="utf-8"), source=DEFAULT_LATENCIES_RESOURCE)

    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        text = f.read()
    return parse_latencies(text, source=path.name)
