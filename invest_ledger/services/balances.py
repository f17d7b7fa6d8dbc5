"""Wallet and account balances, recomputed from stored orders on every call."""

from invest_ledger.exceptions import LedgerError
from invest_ledger.logging import get_logger
from invest_ledger.models import Identifier5, TaxpayerId
from invest_ledger.money import NO_FUNDS_SENTINEL, from_cents, to_cents
from invest_ledger.store.base import LedgerStore

logger = get_logger(__name__)


class BalanceCalculator:
    """Sum order values in integer cents.

    Balances are never cached. Empty wallets and accounts, and listings
    that fail, report :data:`NO_FUNDS_SENTINEL`.
    """

    def __init__(self, store: LedgerStore) -> None:
        self.store = store

    def wallet_balance(self, wallet_code: Identifier5) -> str:
        """Total value of the wallet's orders as a display string."""
        try:
            orders = self.store.list_orders_for_wallet(wallet_code)
        except LedgerError as e:
            logger.warning("Could not list orders for wallet %s: %s", wallet_code, e)
            return NO_FUNDS_SENTINEL

        if not orders:
            return NO_FUNDS_SENTINEL
        return from_cents(sum(to_cents(order.value.value) for order in orders))

    def account_balance(self, cpf: TaxpayerId) -> str:
        """Sum of the balances of every wallet owned by ``cpf``.

        Each wallet contributes its displayed balance, so an empty wallet
        adds the 0,01 floor.
        """
        try:
            wallets = self.store.list_wallets_for_account(cpf)
        except LedgerError as e:
            logger.warning("Could not list wallets for account %s: %s", cpf, e)
            return NO_FUNDS_SENTINEL

        total = sum(to_cents(self.wallet_balance(wallet.code)) for wallet in wallets)
        return from_cents(total)
