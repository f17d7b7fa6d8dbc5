"""In-memory ledger store with relationship tracking."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import TracebackType

from invest_ledger.exceptions import DuplicateEntityError, StorageUnavailableError
from invest_ledger.models import Account, Identifier5, Order, Password, TaxpayerId, Wallet


@dataclass
class InMemoryLedgerStore:
    """Dict-backed store keyed by the entities' string values.

    Relationship indexes keep wallet and order listings in insertion
    order. Stored entities are shallow copies, so reassigning fields on a
    caller's instance does not change persisted state.
    """

    accounts: dict[str, Account] = field(default_factory=dict)
    wallets: dict[str, Wallet] = field(default_factory=dict)
    orders: dict[str, Order] = field(default_factory=dict)

    # Relationship indexes
    _account_wallets: dict[str, list[str]] = field(default_factory=dict)
    _wallet_orders: dict[str, list[str]] = field(default_factory=dict)

    _connected: bool = False

    def connect(self) -> None:
        """Mark the store as available."""
        self._connected = True

    def close(self) -> None:
        """Mark the store as unavailable; data is kept."""
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    def __enter__(self) -> InMemoryLedgerStore:
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _require_connection(self) -> None:
        if not self._connected:
            raise StorageUnavailableError("In-memory store is not connected")

    # Accounts
    def find_account(self, cpf: TaxpayerId) -> Account | None:
        """Find an account by CPF."""
        self._require_connection()
        account = self.accounts.get(cpf.value)
        return replace(account) if account else None

    def insert_account(self, account: Account) -> None:
        """Add an account to the store."""
        self._require_connection()
        key = account.cpf.value
        if key in self.accounts:
            raise DuplicateEntityError(f"Account {key} already exists")
        self.accounts[key] = replace(account)
        self._account_wallets[key] = []

    def update_account(self, account: Account) -> bool:
        """Replace name and password of an existing account."""
        self._require_connection()
        key = account.cpf.value
        if key not in self.accounts:
            return False
        self.accounts[key] = replace(account)
        return True

    def delete_account(self, cpf: TaxpayerId) -> bool:
        """Remove an account."""
        self._require_connection()
        if self.accounts.pop(cpf.value, None) is None:
            return False
        self._account_wallets.pop(cpf.value, None)
        return True

    def authenticate(self, cpf: TaxpayerId, password: Password) -> bool:
        """Check a CPF/password pair."""
        self._require_connection()
        account = self.accounts.get(cpf.value)
        return account is not None and account.password.value == password.value

    # Wallets
    def find_wallet(self, code: Identifier5) -> Wallet | None:
        """Find a wallet by code."""
        self._require_connection()
        wallet = self.wallets.get(code.value)
        return replace(wallet) if wallet else None

    def list_wallets_for_account(self, cpf: TaxpayerId) -> list[Wallet]:
        """Get all wallets owned by an account."""
        self._require_connection()
        codes = self._account_wallets.get(cpf.value, [])
        return [replace(self.wallets[code]) for code in codes]

    def insert_wallet(self, wallet: Wallet) -> None:
        """Add a wallet to the store."""
        self._require_connection()
        key = wallet.code.value
        if key in self.wallets:
            raise DuplicateEntityError(f"Wallet {key} already exists")
        self.wallets[key] = replace(wallet)
        self._account_wallets.setdefault(wallet.owner_cpf.value, []).append(key)
        self._wallet_orders[key] = []

    def update_wallet(self, wallet: Wallet) -> bool:
        """Replace name and profile of an existing wallet."""
        self._require_connection()
        key = wallet.code.value
        current = self.wallets.get(key)
        if current is None:
            return False
        self.wallets[key] = replace(current, name=wallet.name, profile=wallet.profile)
        return True

    def delete_wallet(self, code: Identifier5) -> bool:
        """Remove a wallet."""
        self._require_connection()
        wallet = self.wallets.pop(code.value, None)
        if wallet is None:
            return False
        owned = self._account_wallets.get(wallet.owner_cpf.value, [])
        if code.value in owned:
            owned.remove(code.value)
        self._wallet_orders.pop(code.value, None)
        return True

    def wallet_has_orders(self, code: Identifier5) -> bool:
        """Whether any order references the wallet."""
        self._require_connection()
        return bool(self._wallet_orders.get(code.value))

    # Orders
    def find_order(self, code: Identifier5) -> Order | None:
        """Find an order by code."""
        self._require_connection()
        order = self.orders.get(code.value)
        return replace(order) if order else None

    def list_orders_for_wallet(self, code: Identifier5) -> list[Order]:
        """Get all orders of a wallet."""
        self._require_connection()
        codes = self._wallet_orders.get(code.value, [])
        return [replace(self.orders[c]) for c in codes]

    def insert_order(self, order: Order) -> None:
        """Add an order to the store."""
        self._require_connection()
        key = order.code.value
        if key in self.orders:
            raise DuplicateEntityError(f"Order {key} already exists")
        self.orders[key] = replace(order)
        self._wallet_orders.setdefault(order.wallet_code.value, []).append(key)

    def delete_order(self, code: Identifier5) -> bool:
        """Remove an order."""
        self._require_connection()
        order = self.orders.pop(code.value, None)
        if order is None:
            return False
        owned = self._wallet_orders.get(order.wallet_code.value, [])
        if code.value in owned:
            owned.remove(code.value)
        return True

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "accounts": len(self.accounts),
            "wallets": len(self.wallets),
            "orders": len(self.orders),
        }
