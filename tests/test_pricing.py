"""Tests for order pricing and order operations."""

from pathlib import Path

import pytest

from invest_ledger.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    PriceDataMissingError,
    ValidationError,
)
from invest_ledger.generators import build_record
from invest_ledger.models import Account, CalendarDate, Identifier5, Quantity, TradedAssetCode, Wallet
from invest_ledger.reference import ReferencePriceFile
from invest_ledger.services import OrderPricingService
from invest_ledger.store import InMemoryLedgerStore

PETR4 = TradedAssetCode.from_ticker("PETR4")


@pytest.fixture
def pricing(
    store: InMemoryLedgerStore,
    price_file: ReferencePriceFile,
    sample_account: Account,
    sample_wallet: Wallet,
) -> OrderPricingService:
    """Pricing service with one account and one wallet stored."""
    store.insert_account(sample_account)
    store.insert_wallet(sample_wallet)
    return OrderPricingService(store, price_file)


class TestPriceOrder:
    """Tests for order valuation."""

    def test_price_times_quantity(self, pricing: OrderPricingService) -> None:
        value = pricing.price_order(PETR4, CalendarDate("20240102"), Quantity("100"))

        assert value.value == "3.550,00"

    def test_grouped_quantity(self, pricing: OrderPricingService) -> None:
        value = pricing.price_order(
            TradedAssetCode.from_ticker("VALE3"), CalendarDate("20240102"), Quantity("1.000")
        )

        assert value.value == "70.250,00"

    def test_missing_price(self, pricing: OrderPricingService) -> None:
        with pytest.raises(PriceDataMissingError, match="PETR4"):
            pricing.price_order(PETR4, CalendarDate("20240110"), Quantity("1"))

    def test_largest_quantity(self, pricing: OrderPricingService) -> None:
        assert pricing.price_order(
            TradedAssetCode.from_ticker("VALE3"), CalendarDate("20240102"), Quantity("1.000.000")
        ).cents == 7025000000


class TestCreateOrder:
    """Tests for order creation."""

    def test_creates_and_persists(
        self, pricing: OrderPricingService, store: InMemoryLedgerStore, sample_wallet: Wallet
    ) -> None:
        result = pricing.create_order(
            sample_wallet.code, Identifier5("20001"), PETR4, CalendarDate("20240103"), Quantity("10")
        )

        assert result.ok
        assert result.value.value.value == "360,00"
        assert result.value.wallet_code == sample_wallet.code
        assert store.find_order(Identifier5("20001")) == result.value

    def test_unknown_wallet(self, pricing: OrderPricingService, store: InMemoryLedgerStore) -> None:
        result = pricing.create_order(
            Identifier5("99999"), Identifier5("20001"), PETR4, CalendarDate("20240102"), Quantity("1")
        )

        assert not result.ok
        assert isinstance(result.error, EntityNotFoundError)
        assert store.summary()["orders"] == 0

    def test_duplicate_order_code(self, pricing: OrderPricingService, sample_wallet: Wallet) -> None:
        args = (sample_wallet.code, Identifier5("20001"), PETR4, CalendarDate("20240102"), Quantity("1"))
        assert pricing.create_order(*args).ok

        result = pricing.create_order(*args)

        assert isinstance(result.error, DuplicateEntityError)

    def test_missing_price_persists_nothing(
        self, pricing: OrderPricingService, store: InMemoryLedgerStore, sample_wallet: Wallet
    ) -> None:
        before = len(store.orders)

        result = pricing.create_order(
            sample_wallet.code,
            Identifier5("20001"),
            TradedAssetCode.from_ticker("ITUB4"),
            CalendarDate("20240102"),
            Quantity("5"),
        )

        assert isinstance(result.error, PriceDataMissingError)
        assert len(store.orders) == before
        assert not store.wallet_has_orders(sample_wallet.code)

    def test_amount_outside_money_range(
        self, store: InMemoryLedgerStore, tmp_path: Path, sample_account: Account, sample_wallet: Wallet
    ) -> None:
        path = tmp_path / "expensive.txt"
        path.write_text(build_record("20240102", "EXPN3", 50000000) + "\n", encoding="latin-1")
        store.insert_account(sample_account)
        store.insert_wallet(sample_wallet)
        pricing = OrderPricingService(store, ReferencePriceFile(path))

        result = pricing.create_order(
            sample_wallet.code,
            Identifier5("20001"),
            TradedAssetCode.from_ticker("EXPN3"),
            CalendarDate("20240102"),
            Quantity("1.000"),
        )

        assert isinstance(result.error, ValidationError)
        assert result.error.rule == "money.range"
        assert store.summary()["orders"] == 0

    def test_zero_priced_quote_is_rejected(
        self, store: InMemoryLedgerStore, tmp_path: Path, sample_account: Account, sample_wallet: Wallet
    ) -> None:
        path = tmp_path / "zero.txt"
        path.write_text(build_record("20240102", "ZERO3", 0) + "\n", encoding="latin-1")
        store.insert_account(sample_account)
        store.insert_wallet(sample_wallet)
        pricing = OrderPricingService(store, ReferencePriceFile(path))

        result = pricing.create_order(
            sample_wallet.code,
            Identifier5("20001"),
            TradedAssetCode.from_ticker("ZERO3"),
            CalendarDate("20240102"),
            Quantity("100"),
        )

        assert isinstance(result.error, ValidationError)
        assert result.error.rule == "money.range"
        assert store.find_order(Identifier5("20001")) is None
        assert store.summary()["orders"] == 0


class TestOrderListing:
    """Tests for listing and deleting orders."""

    def test_list_orders(self, pricing: OrderPricingService, sample_wallet: Wallet) -> None:
        pricing.create_order(sample_wallet.code, Identifier5("20001"), PETR4, CalendarDate("20240102"), Quantity("1"))
        pricing.create_order(sample_wallet.code, Identifier5("20002"), PETR4, CalendarDate("20240103"), Quantity("2"))

        result = pricing.list_orders(sample_wallet.code)

        assert [o.code.value for o in result.value] == ["20001", "20002"]

    def test_list_orders_unknown_wallet(self, pricing: OrderPricingService) -> None:
        result = pricing.list_orders(Identifier5("99999"))

        assert isinstance(result.error, EntityNotFoundError)

    def test_delete_order(self, pricing: OrderPricingService, sample_wallet: Wallet) -> None:
        pricing.create_order(sample_wallet.code, Identifier5("20001"), PETR4, CalendarDate("20240102"), Quantity("1"))

        assert pricing.delete_order(Identifier5("20001")).ok
        assert isinstance(pricing.delete_order(Identifier5("20001")).error, EntityNotFoundError)

    def test_available_dates_sorted(self, pricing: OrderPricingService) -> None:
        assert pricing.available_dates(PETR4) == ["20240102", "20240103"]
        assert pricing.available_dates(TradedAssetCode.from_ticker("ITUB4")) == []
