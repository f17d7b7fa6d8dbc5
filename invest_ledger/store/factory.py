"""Store selection from configuration."""

from invest_ledger.config import LedgerConfig
from invest_ledger.store.base import LedgerStore
from invest_ledger.store.memory import InMemoryLedgerStore


def create_store(config: LedgerConfig) -> LedgerStore:
    """Build the (unconnected) store named by ``config.storage_backend``."""
    if config.storage_backend == "postgres":
        from invest_ledger.store.postgres import PostgresLedgerStore

        return PostgresLedgerStore(config.postgres.connection_string)
    return InMemoryLedgerStore()
