"""Transaction record as produced by the CSV loader.

Amounts are kept as plain floats in a single currency unit (USD in the
reference data). Sign checks are the engine's job, not the model's, so a
record built by any loader reaches the same validation path.
"""

import math

from pydantic import Field, field_validator

from prioritizer.models.common import PrioritizerBase


class Transaction(PrioritizerBase):
    """A single transaction awaiting processing. Immutable once built."""

    model_config = {**PrioritizerBase.model_config, "frozen": True}

    id: str = Field(..., min_length=1)
    amount: float
    bank_country_code: str = Field(..., min_length=1)

    @field_validator("amount")
    @classmethod
    def _finite_amount(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"amount must be finite, got {v}")
        return v

    @field_validator("bank_country_code")
    @classmethod
    def _strip_country_code(cls, v: str) -> str:
        code = v.strip()
        if not code:
            raise ValueError("bank_country_code must not be blank")
        return code
