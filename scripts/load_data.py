#!/usr/bin/env python3
"""Seed a ledger store with generated accounts, wallets and priced orders.

Every record goes through the service layer, so uniqueness, the wallet
cap and order pricing are enforced exactly as for interactive use.

Backends:
- memory (default): useful for a dry run of the reference file
- postgres: connection taken from POSTGRES_* variables or --postgres-url
"""

import argparse
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from invest_ledger.config import LedgerConfig, ReferenceDataConfig
from invest_ledger.exceptions import LedgerError
from invest_ledger.generators import AccountGenerator, OrderRequestGenerator, WalletGenerator
from invest_ledger.logging import get_logger, setup_logging_from_config
from invest_ledger.reference import ReferencePriceFile
from invest_ledger.services import LedgerService, open_ledger
from invest_ledger.store import LedgerStore

logger = get_logger(__name__)


def seed_ledger(
    service: LedgerService,
    price_file: ReferencePriceFile,
    num_accounts: int,
    wallets_per_account: int,
    orders_per_wallet: int,
    seed: int,
) -> dict[str, int]:
    """Create accounts, wallets and orders; return counts of what was stored."""
    account_gen = AccountGenerator(seed=seed)
    wallet_gen = WalletGenerator(seed=seed)
    order_gen = OrderRequestGenerator(price_file, seed=seed)

    counts = {"accounts": 0, "wallets": 0, "orders": 0, "rejected": 0}
    t0 = time.perf_counter()

    for account in account_gen.generate_batch(num_accounts):
        if not service.register_account(account):
            counts["rejected"] += 1
            continue
        counts["accounts"] += 1

        for wallet in wallet_gen.generate_for_account(account, wallets_per_account):
            if not service.create_wallet(wallet):
                counts["rejected"] += 1
                continue
            counts["wallets"] += 1

            for _ in range(orders_per_wallet):
                request = order_gen.generate()
                result = service.create_order(
                    wallet.code,
                    request.order_code,
                    request.asset_code,
                    request.date,
                    request.quantity,
                )
                if result.ok:
                    counts["orders"] += 1
                else:
                    counts["rejected"] += 1

        logger.info(
            "Account %s (%s): balance R$ %s",
            account.cpf,
            account.name,
            service.account_balance(account.cpf),
        )

    logger.info("Seeded ledger in %.1fs", time.perf_counter() - t0)
    return counts


def print_summary(counts: dict[str, int], store: LedgerStore, elapsed: float) -> None:
    """Log a summary of the load."""
    logger.info("=" * 60)
    logger.info("Load Complete! (%.1fs total)", elapsed)
    logger.info("=" * 60)
    logger.info("  - Accounts: %d", counts["accounts"])
    logger.info("  - Wallets: %d", counts["wallets"])
    logger.info("  - Orders: %d", counts["orders"])
    logger.info("  - Rejected operations: %d", counts["rejected"])
    stored = store.statistics() if hasattr(store, "statistics") else store.summary()
    for table, rows in stored.items():
        logger.info("  [store] %s: %d rows", table, rows)


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the investment ledger with sample data")
    parser.add_argument("--backend", choices=["memory", "postgres"], default=None, help="Storage backend")
    parser.add_argument("--postgres-url", default=None, help="PostgreSQL connection string")
    parser.add_argument(
        "--reference-file",
        type=Path,
        default=None,
        help="Historical price file (default: REFERENCE_DATA_PATH or data/DADOS_HISTORICOS.txt)",
    )
    parser.add_argument("--accounts", type=int, default=10, help="Number of accounts")
    parser.add_argument("--wallets", type=int, default=3, help="Wallets per account")
    parser.add_argument("--orders", type=int, default=5, help="Orders per wallet")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL or INFO)")
    args = parser.parse_args()

    try:
        config = LedgerConfig.from_env()
        if args.backend:
            config.storage_backend = args.backend
        if args.reference_file:
            config.reference = ReferenceDataConfig(path=args.reference_file)
        if args.log_level:
            config.log_level = args.log_level
    except LedgerError as e:
        parser.error(str(e))

    setup_logging_from_config(config)

    store = None
    if config.storage_backend == "postgres" and args.postgres_url:
        from invest_ledger.store.postgres import PostgresLedgerStore

        store = PostgresLedgerStore(args.postgres_url)

    price_file = ReferencePriceFile(config.reference.path)
    start = time.perf_counter()
    try:
        with open_ledger(config, store=store) as service:
            counts = seed_ledger(
                service,
                price_file,
                args.accounts,
                args.wallets,
                args.orders,
                args.seed,
            )
            print_summary(counts, service.store, time.perf_counter() - start)
    except LedgerError as e:
        logger.error("Load failed: %s", e)
        return 1
    except ValueError as e:
        logger.error("Load failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
