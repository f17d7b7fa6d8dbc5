"""Configuration management for invest-ledger."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from invest_ledger.exceptions import ConfigurationError

STORAGE_BACKENDS = ("memory", "postgres")


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "investimentos"
    user: str = "postgres"
    password: str = "postgres"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class ReferenceDataConfig:
    """Location of the historical price reference file."""

    path: Path = field(default_factory=lambda: Path("data") / "DADOS_HISTORICOS.txt")


@dataclass
class LedgerConfig:
    """Main configuration for invest-ledger."""

    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    reference: ReferenceDataConfig = field(default_factory=ReferenceDataConfig)
    storage_backend: str = "memory"
    max_wallets_per_account: int = 5
    log_level: str = "INFO"
    log_format: str = "standard"

    def __post_init__(self) -> None:
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ConfigurationError(
                f"Unknown storage backend {self.storage_backend!r}; "
                f"expected one of {', '.join(STORAGE_BACKENDS)}"
            )
        if self.max_wallets_per_account < 1:
            raise ConfigurationError("max_wallets_per_account must be at least 1")

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        try:
            port = int(os.getenv("POSTGRES_PORT", "5432"))
            max_wallets = int(os.getenv("MAX_WALLETS", "5"))
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting: {e}") from e

        postgres = PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=port,
            database=os.getenv("POSTGRES_DB", "investimentos"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", "postgres"),
        )

        reference = ReferenceDataConfig(
            path=Path(os.getenv("REFERENCE_DATA_PATH", str(Path("data") / "DADOS_HISTORICOS.txt"))),
        )

        return cls(
            postgres=postgres,
            reference=reference,
            storage_backend=os.getenv("STORAGE_BACKEND", "memory").lower(),
            max_wallets_per_account=max_wallets,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
