"""Persistence backends for ledger entities."""

from invest_ledger.store.base import LedgerStore
from invest_ledger.store.factory import create_store
from invest_ledger.store.memory import InMemoryLedgerStore

__all__ = ["InMemoryLedgerStore", "LedgerStore", "create_store"]
