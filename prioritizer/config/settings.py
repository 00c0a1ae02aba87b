"""Prioritizer settings loaded from environment variables."""

from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from prioritizer.models.common import SelectorKind


class Environment(StrEnum):
    """Deployment environment."""

    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Settings loaded from environment variables / .env file.

    Only the command-line entry point reads these. Selectors take every
    input as an explicit argument.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Inputs ---
    TRANSACTIONS_PATH: str = Field(
        default="transactions.csv",
        description="CSV file with id, amount, bank_country_code columns.",
    )
    LATENCIES_PATH: str | None = Field(
        default=None,
        description="JSON latency table. None uses the packaged default.",
    )

    # --- Engine ---
    DEFAULT_SELECTOR: SelectorKind = Field(
        default=SelectorKind.EXACT,
        description="Selection strategy used when none is given.",
    )
    MAX_TABLE_CELLS: int = Field(
        default=50_000_000,
        ge=0,
        description="Upper bound on (N+1)*(budget+1) for the exact selector. 0 disables.",
    )

    # --- Logging ---
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application log level.",
    )

    # --- Environment ---
    ENVIRONMENT: Environment = Field(
        default=Environment.DEV,
        description="Deployment environment (dev/staging/prod).",
    )

    @property
    def is_dev(self) -> bool:
        """Check if running in local development."""
        return self.ENVIRONMENT == Environment.DEV

    @property
    def table_cell_limit(self) -> int | None:
        """MAX_TABLE_CELLS as the knapsack guard expects it (None = unbounded)."""
        return self.MAX_TABLE_CELLS or None


def get_settings() -> Settings:
    """Factory for the settings object."""
    return Settings()
