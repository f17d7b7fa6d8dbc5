"""Tests for InMemoryLedgerStore."""

import pytest

from invest_ledger.exceptions import DuplicateEntityError, StorageUnavailableError
from invest_ledger.models import (
    Account,
    CalendarDate,
    Identifier5,
    Money,
    Order,
    Password,
    PersonName,
    Quantity,
    RiskProfile,
    TaxpayerId,
    TradedAssetCode,
    Wallet,
)
from invest_ledger.store import InMemoryLedgerStore, LedgerStore


def make_order(code: str, wallet: Wallet, value: str = "100,00") -> Order:
    return Order(
        code=Identifier5(code),
        asset_code=TradedAssetCode.from_ticker("PETR4"),
        date=CalendarDate("20240102"),
        value=Money(value),
        quantity=Quantity("10"),
        wallet_code=wallet.code,
    )


class TestStoreLifecycle:
    """Tests for connection state."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(InMemoryLedgerStore(), LedgerStore)

    def test_operations_require_connection(self, sample_account: Account) -> None:
        store = InMemoryLedgerStore()

        with pytest.raises(StorageUnavailableError):
            store.find_account(sample_account.cpf)
        with pytest.raises(StorageUnavailableError):
            store.insert_account(sample_account)

    def test_context_manager(self, sample_account: Account) -> None:
        store = InMemoryLedgerStore()

        with store:
            assert store.is_connected
            store.insert_account(sample_account)

        assert not store.is_connected
        store.connect()
        assert store.find_account(sample_account.cpf) == sample_account


class TestStoreAccounts:
    """Tests for account operations."""

    def test_insert_and_find(self, store: InMemoryLedgerStore, sample_account: Account) -> None:
        store.insert_account(sample_account)

        assert store.find_account(sample_account.cpf) == sample_account
        assert store.summary()["accounts"] == 1

    def test_find_missing(self, store: InMemoryLedgerStore) -> None:
        assert store.find_account(TaxpayerId("111.444.777-35")) is None

    def test_insert_duplicate(self, store: InMemoryLedgerStore, sample_account: Account) -> None:
        store.insert_account(sample_account)

        with pytest.raises(DuplicateEntityError, match="already exists"):
            store.insert_account(sample_account)

    def test_stored_copy_is_independent(self, store: InMemoryLedgerStore, sample_account: Account) -> None:
        store.insert_account(sample_account)
        sample_account.name = PersonName("Outro Nome")

        assert store.find_account(sample_account.cpf).name.value == "Maria Silva"

    def test_update(self, store: InMemoryLedgerStore, sample_account: Account) -> None:
        store.insert_account(sample_account)
        updated = Account(sample_account.cpf, PersonName("Maria Souza"), Password("Zx9%wq"))

        assert store.update_account(updated)
        assert store.find_account(sample_account.cpf).name.value == "Maria Souza"

    def test_update_missing(self, store: InMemoryLedgerStore, sample_account: Account) -> None:
        assert not store.update_account(sample_account)

    def test_delete(self, store: InMemoryLedgerStore, sample_account: Account) -> None:
        store.insert_account(sample_account)

        assert store.delete_account(sample_account.cpf)
        assert store.find_account(sample_account.cpf) is None
        assert not store.delete_account(sample_account.cpf)

    def test_authenticate(self, store: InMemoryLedgerStore, sample_account: Account) -> None:
        store.insert_account(sample_account)

        assert store.authenticate(sample_account.cpf, Password("Ab1#cd"))
        assert not store.authenticate(sample_account.cpf, Password("Ab1#ce"))
        assert not store.authenticate(TaxpayerId("111.444.777-35"), Password("Ab1#cd"))


class TestStoreWallets:
    """Tests for wallet operations."""

    def test_insert_and_list(
        self, store: InMemoryLedgerStore, sample_account: Account, sample_wallet: Wallet
    ) -> None:
        store.insert_account(sample_account)
        store.insert_wallet(sample_wallet)
        second = Wallet(Identifier5("10002"), PersonName("Viagem"), RiskProfile("Agressivo"), sample_account.cpf)
        store.insert_wallet(second)

        wallets = store.list_wallets_for_account(sample_account.cpf)

        assert [w.code.value for w in wallets] == ["10001", "10002"]
        assert store.find_wallet(sample_wallet.code) == sample_wallet

    def test_list_for_unknown_account(self, store: InMemoryLedgerStore) -> None:
        assert store.list_wallets_for_account(TaxpayerId("111.444.777-35")) == []

    def test_insert_duplicate(
        self, store: InMemoryLedgerStore, sample_account: Account, sample_wallet: Wallet
    ) -> None:
        store.insert_account(sample_account)
        store.insert_wallet(sample_wallet)

        with pytest.raises(DuplicateEntityError):
            store.insert_wallet(sample_wallet)

    def test_update_keeps_owner(
        self, store: InMemoryLedgerStore, sample_account: Account, sample_wallet: Wallet
    ) -> None:
        store.insert_account(sample_account)
        store.insert_wallet(sample_wallet)
        edited = Wallet(
            sample_wallet.code,
            PersonName("Dividendos"),
            RiskProfile("Conservador"),
            TaxpayerId("111.444.777-35"),
        )

        assert store.update_wallet(edited)
        stored = store.find_wallet(sample_wallet.code)
        assert stored.name.value == "Dividendos"
        assert stored.profile.value == "Conservador"
        assert stored.owner_cpf == sample_account.cpf

    def test_delete(self, store: InMemoryLedgerStore, sample_account: Account, sample_wallet: Wallet) -> None:
        store.insert_account(sample_account)
        store.insert_wallet(sample_wallet)

        assert store.delete_wallet(sample_wallet.code)
        assert store.find_wallet(sample_wallet.code) is None
        assert store.list_wallets_for_account(sample_account.cpf) == []
        assert not store.delete_wallet(sample_wallet.code)


class TestStoreOrders:
    """Tests for order operations."""

    @pytest.fixture
    def wallet_store(
        self, store: InMemoryLedgerStore, sample_account: Account, sample_wallet: Wallet
    ) -> InMemoryLedgerStore:
        store.insert_account(sample_account)
        store.insert_wallet(sample_wallet)
        return store

    def test_insert_and_list(self, wallet_store: InMemoryLedgerStore, sample_wallet: Wallet) -> None:
        assert not wallet_store.wallet_has_orders(sample_wallet.code)

        wallet_store.insert_order(make_order("20001", sample_wallet))
        wallet_store.insert_order(make_order("20002", sample_wallet, "250,50"))

        assert wallet_store.wallet_has_orders(sample_wallet.code)
        orders = wallet_store.list_orders_for_wallet(sample_wallet.code)
        assert [o.code.value for o in orders] == ["20001", "20002"]
        assert wallet_store.find_order(Identifier5("20002")).value.value == "250,50"

    def test_insert_duplicate(self, wallet_store: InMemoryLedgerStore, sample_wallet: Wallet) -> None:
        wallet_store.insert_order(make_order("20001", sample_wallet))

        with pytest.raises(DuplicateEntityError):
            wallet_store.insert_order(make_order("20001", sample_wallet))

    def test_delete(self, wallet_store: InMemoryLedgerStore, sample_wallet: Wallet) -> None:
        wallet_store.insert_order(make_order("20001", sample_wallet))

        assert wallet_store.delete_order(Identifier5("20001"))
        assert wallet_store.find_order(Identifier5("20001")) is None
        assert not wallet_store.wallet_has_orders(sample_wallet.code)
        assert not wallet_store.delete_order(Identifier5("20001"))
