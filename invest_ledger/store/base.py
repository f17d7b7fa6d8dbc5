"""Persistence contract consumed by the ledger services."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from invest_ledger.models import Account, Identifier5, Order, Password, TaxpayerId, Wallet


@runtime_checkable
class LedgerStore(Protocol):
    """Insert/find/update/delete/list for accounts, wallets and orders.

    Every operation raises ``StorageUnavailableError`` while the store is
    disconnected. Inserts raise ``DuplicateEntityError`` on an existing
    key; ``find_*`` return ``None`` when absent; ``update_*`` and
    ``delete_*`` return whether a record changed. Referential checks
    before deletes belong to the service layer.
    """

    def connect(self) -> None: ...

    def close(self) -> None: ...

    @property
    def is_connected(self) -> bool: ...

    # Accounts
    def find_account(self, cpf: TaxpayerId) -> Account | None: ...

    def insert_account(self, account: Account) -> None: ...

    def update_account(self, account: Account) -> bool: ...

    def delete_account(self, cpf: TaxpayerId) -> bool: ...

    def authenticate(self, cpf: TaxpayerId, password: Password) -> bool: ...

    # Wallets
    def find_wallet(self, code: Identifier5) -> Wallet | None: ...

    def list_wallets_for_account(self, cpf: TaxpayerId) -> list[Wallet]: ...

    def insert_wallet(self, wallet: Wallet) -> None: ...

    def update_wallet(self, wallet: Wallet) -> bool: ...

    def delete_wallet(self, code: Identifier5) -> bool: ...

    def wallet_has_orders(self, code: Identifier5) -> bool: ...

    # Orders
    def find_order(self, code: Identifier5) -> Order | None: ...

    def list_orders_for_wallet(self, code: Identifier5) -> list[Order]: ...

    def insert_order(self, order: Order) -> None: ...

    def delete_order(self, code: Identifier5) -> bool: ...
