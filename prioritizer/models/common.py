"""Shared enums and base model used across prioritizer domain models."""

from enum import StrEnum

from pydantic import BaseModel


class SelectorKind(StrEnum):
    """Selection strategies available to callers."""

    EXACT = "exact"
    RATIO_GREEDY = "ratio-greedy"
    AMOUNT_GREEDY = "amount-greedy"


# --- Base model ---


class PrioritizerBase(BaseModel):
    """Base model with common configuration for all prioritizer Pydantic models."""

    model_config = {
        "populate_by_name": True,
        "protected_namespaces": (),
    }
