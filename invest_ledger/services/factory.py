"""Process wiring: build, connect and release the ledger's collaborators."""

from contextlib import contextmanager
from typing import Iterator

from invest_ledger.config import LedgerConfig
from invest_ledger.logging import get_logger
from invest_ledger.reference import ReferencePriceFile
from invest_ledger.services.ledger import LedgerService
from invest_ledger.store import LedgerStore, create_store

logger = get_logger(__name__)


@contextmanager
def open_ledger(config: LedgerConfig, store: LedgerStore | None = None) -> Iterator[LedgerService]:
    """Yield a wired :class:`LedgerService`, closing the store on exit.

    A ``StorageUnavailableError`` raised while connecting propagates:
    without storage the process cannot start.

    Parameters
    ----------
    config : LedgerConfig
        Application configuration.
    store : LedgerStore | None
        Pre-built store; one is created from ``config`` when omitted.
    """
    store = store if store is not None else create_store(config)
    store.connect()
    logger.info("Ledger storage ready (%s)", type(store).__name__)
    try:
        yield LedgerService(
            store,
            ReferencePriceFile(config.reference.path),
            max_wallets_per_account=config.max_wallets_per_account,
        )
    finally:
        store.close()
