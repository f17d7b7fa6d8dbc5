"""Account and wallet operations with referential checks."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from invest_ledger.exceptions import (
    AuthenticationError,
    DuplicateEntityError,
    EntityNotFoundError,
    ReferentialIntegrityError,
    WalletLimitExceededError,
)
from invest_ledger.logging import get_logger
from invest_ledger.models import (
    Account,
    CalendarDate,
    Identifier5,
    Order,
    Password,
    Quantity,
    TaxpayerId,
    TradedAssetCode,
    Wallet,
)
from invest_ledger.reference import ReferencePriceFile
from invest_ledger.services.balances import BalanceCalculator
from invest_ledger.services.pricing import OrderPricingService
from invest_ledger.services.results import ServiceResult, service_operation
from invest_ledger.store.base import LedgerStore

logger = get_logger(__name__)

DEFAULT_MAX_WALLETS = 5


@dataclass
class AccountSnapshot:
    """Account with its balance at read time."""

    account: Account
    balance: str


@dataclass
class WalletSnapshot:
    """Wallet with its balance and orders at read time."""

    wallet: Wallet
    balance: str
    orders: list[Order] = field(default_factory=list)


class LedgerService:
    """Single entry point for presentation code.

    Every mutating or reading operation returns a :class:`ServiceResult`;
    domain failures (missing entities, duplicates, blocked deletes,
    missing price data) are reported as the result's error.

    Parameters
    ----------
    store : LedgerStore
        Connected persistence backend.
    price_file : ReferencePriceFile
        Historical price source used to value orders.
    max_wallets_per_account : int
        Wallet cap per account.
    """

    def __init__(
        self,
        store: LedgerStore,
        price_file: ReferencePriceFile,
        max_wallets_per_account: int = DEFAULT_MAX_WALLETS,
    ) -> None:
        self.store = store
        self.max_wallets_per_account = max_wallets_per_account
        self.pricing = OrderPricingService(store, price_file)
        self.balances = BalanceCalculator(store)

    # Accounts
    @service_operation
    def register_account(self, account: Account) -> ServiceResult[Account]:
        """Create an account; the CPF must not be registered yet."""
        if self.store.find_account(account.cpf) is not None:
            raise DuplicateEntityError(f"CPF {account.cpf} is already registered")
        self.store.insert_account(account)
        logger.info("Account %s registered", account.cpf)
        return ServiceResult.success(account)

    @service_operation
    def authenticate(self, cpf: TaxpayerId, password: Password) -> ServiceResult[Account]:
        """Check credentials and return the matching account."""
        if not self.store.authenticate(cpf, password):
            raise AuthenticationError("Invalid CPF or password")
        account = self.store.find_account(cpf)
        if account is None:
            raise AuthenticationError("Invalid CPF or password")
        return ServiceResult.success(account)

    @service_operation
    def get_account(self, cpf: TaxpayerId) -> ServiceResult[AccountSnapshot]:
        account = self.store.find_account(cpf)
        if account is None:
            raise EntityNotFoundError(f"Account {cpf} not found")
        return ServiceResult.success(AccountSnapshot(account, self.balances.account_balance(cpf)))

    @service_operation
    def edit_account(self, account: Account) -> ServiceResult[Account]:
        """Replace name and password; the CPF identifies the account."""
        if self.store.find_account(account.cpf) is None:
            raise EntityNotFoundError(f"Account {account.cpf} not found")
        if not self.store.update_account(account):
            raise EntityNotFoundError(f"Account {account.cpf} not found")
        logger.info("Account %s updated", account.cpf)
        return ServiceResult.success(account)

    @service_operation
    def delete_account(self, cpf: TaxpayerId) -> ServiceResult[Account]:
        """Delete an account that owns no wallets."""
        account = self.store.find_account(cpf)
        if account is None:
            raise EntityNotFoundError(f"Account {cpf} not found")
        wallets = self.store.list_wallets_for_account(cpf)
        if wallets:
            raise ReferentialIntegrityError(
                f"Account {cpf} still owns {len(wallets)} wallet(s); delete them first"
            )
        self.store.delete_account(cpf)
        logger.info("Account %s deleted", cpf)
        return ServiceResult.success(account)

    # Wallets
    @service_operation
    def create_wallet(self, wallet: Wallet) -> ServiceResult[Wallet]:
        """Create a wallet for an existing account, within the wallet cap."""
        if self.store.find_account(wallet.owner_cpf) is None:
            raise EntityNotFoundError(f"Account {wallet.owner_cpf} not found")
        owned = self.store.list_wallets_for_account(wallet.owner_cpf)
        if len(owned) >= self.max_wallets_per_account:
            raise WalletLimitExceededError(
                f"Account {wallet.owner_cpf} already has {len(owned)} wallets "
                f"(limit {self.max_wallets_per_account})"
            )
        if self.store.find_wallet(wallet.code) is not None:
            raise DuplicateEntityError(f"Wallet {wallet.code} already exists")
        self.store.insert_wallet(wallet)
        logger.info("Wallet %s created for account %s", wallet.code, wallet.owner_cpf)
        return ServiceResult.success(wallet)

    @service_operation
    def list_wallets(self, cpf: TaxpayerId) -> ServiceResult[list[Wallet]]:
        if self.store.find_account(cpf) is None:
            raise EntityNotFoundError(f"Account {cpf} not found")
        return ServiceResult.success(self.store.list_wallets_for_account(cpf))

    @service_operation
    def get_wallet(self, code: Identifier5) -> ServiceResult[WalletSnapshot]:
        wallet = self.store.find_wallet(code)
        if wallet is None:
            raise EntityNotFoundError(f"Wallet {code} not found")
        return ServiceResult.success(
            WalletSnapshot(
                wallet=wallet,
                balance=self.balances.wallet_balance(code),
                orders=self.store.list_orders_for_wallet(code),
            )
        )

    @service_operation
    def edit_wallet(self, wallet: Wallet) -> ServiceResult[Wallet]:
        """Replace name and profile; code and owner stay as stored."""
        current = self.store.find_wallet(wallet.code)
        if current is None:
            raise EntityNotFoundError(f"Wallet {wallet.code} not found")
        updated = replace(current, name=wallet.name, profile=wallet.profile)
        self.store.update_wallet(updated)
        logger.info("Wallet %s updated", wallet.code)
        return ServiceResult.success(updated)

    @service_operation
    def delete_wallet(self, code: Identifier5) -> ServiceResult[Wallet]:
        """Delete a wallet that holds no orders."""
        wallet = self.store.find_wallet(code)
        if wallet is None:
            raise EntityNotFoundError(f"Wallet {code} not found")
        if self.store.wallet_has_orders(code):
            raise ReferentialIntegrityError(f"Wallet {code} still has orders; delete them first")
        self.store.delete_wallet(code)
        logger.info("Wallet %s deleted", code)
        return ServiceResult.success(wallet)

    # Orders and balances
    def create_order(
        self,
        wallet_code: Identifier5,
        order_code: Identifier5,
        asset_code: TradedAssetCode,
        date: CalendarDate,
        quantity: Quantity,
    ) -> ServiceResult[Order]:
        return self.pricing.create_order(wallet_code, order_code, asset_code, date, quantity)

    def list_orders(self, wallet_code: Identifier5) -> ServiceResult[list[Order]]:
        return self.pricing.list_orders(wallet_code)

    def delete_order(self, order_code: Identifier5) -> ServiceResult[Order]:
        return self.pricing.delete_order(order_code)

    def available_dates(self, asset_code: TradedAssetCode) -> list[str]:
        return self.pricing.available_dates(asset_code)

    def wallet_balance(self, wallet_code: Identifier5) -> str:
        return self.balances.wallet_balance(wallet_code)

    def account_balance(self, cpf: TaxpayerId) -> str:
        return self.balances.account_balance(cpf)
