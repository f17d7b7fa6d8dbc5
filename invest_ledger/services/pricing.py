"""Order creation priced from the historical reference file."""

from __future__ import annotations

from invest_ledger.exceptions import DuplicateEntityError, EntityNotFoundError, PriceDataMissingError
from invest_ledger.logging import get_logger
from invest_ledger.models import (
    CalendarDate,
    Identifier5,
    Money,
    Order,
    Quantity,
    TradedAssetCode,
)
from invest_ledger.money import format_decimal_amount, parse_quantity
from invest_ledger.reference import ReferencePriceFile
from invest_ledger.services.results import ServiceResult, service_operation
from invest_ledger.store.base import LedgerStore

logger = get_logger(__name__)


class OrderPricingService:
    """Create, list and delete orders.

    An order's value is the reference average price for its asset and
    date multiplied by the quantity; it is never supplied by the caller.

    Parameters
    ----------
    store : LedgerStore
        Persistence backend.
    price_file : ReferencePriceFile
        Historical price source.
    """

    def __init__(self, store: LedgerStore, price_file: ReferencePriceFile) -> None:
        self.store = store
        self.price_file = price_file

    def price_order(self, asset_code: TradedAssetCode, date: CalendarDate, quantity: Quantity) -> Money:
        """Compute the value of ``quantity`` shares at the reference price.

        Raises
        ------
        PriceDataMissingError
            No reference record for the asset/date pair.
        ValidationError
            The resulting amount falls outside Money's range.
        """
        average_price = self.price_file.find_price(asset_code.value, date.value)
        if average_price is None:
            raise PriceDataMissingError(
                f"No reference price for {asset_code.ticker} on {date.formatted()}"
            )
        final_value = average_price * parse_quantity(quantity.value)
        return Money(format_decimal_amount(final_value))

    @service_operation
    def create_order(
        self,
        wallet_code: Identifier5,
        order_code: Identifier5,
        asset_code: TradedAssetCode,
        date: CalendarDate,
        quantity: Quantity,
    ) -> ServiceResult[Order]:
        """Price and persist a new order in ``wallet_code``.

        Fails with ``EntityNotFoundError`` for an unknown wallet,
        ``DuplicateEntityError`` for a used order code and
        ``PriceDataMissingError`` when the reference file has no record.
        Nothing is stored on failure.
        """
        if self.store.find_wallet(wallet_code) is None:
            raise EntityNotFoundError(f"Wallet {wallet_code} not found")
        if self.store.find_order(order_code) is not None:
            raise DuplicateEntityError(f"Order {order_code} already exists")

        value = self.price_order(asset_code, date, quantity)
        order = Order(
            code=order_code,
            asset_code=asset_code,
            date=date,
            value=value,
            quantity=quantity,
            wallet_code=wallet_code,
        )
        self.store.insert_order(order)
        logger.info(
            "Order %s created in wallet %s: %s x %s = %s",
            order_code,
            wallet_code,
            quantity,
            asset_code.ticker,
            value,
        )
        return ServiceResult.success(order)

    @service_operation
    def list_orders(self, wallet_code: Identifier5) -> ServiceResult[list[Order]]:
        """All orders of an existing wallet."""
        if self.store.find_wallet(wallet_code) is None:
            raise EntityNotFoundError(f"Wallet {wallet_code} not found")
        return ServiceResult.success(self.store.list_orders_for_wallet(wallet_code))

    @service_operation
    def delete_order(self, order_code: Identifier5) -> ServiceResult[Order]:
        """Remove an order; orders have no dependants."""
        order = self.store.find_order(order_code)
        if order is None:
            raise EntityNotFoundError(f"Order {order_code} not found")
        if not self.store.delete_order(order_code):
            raise EntityNotFoundError(f"Order {order_code} not found")
        logger.info("Order %s deleted from wallet %s", order_code, order.wallet_code)
        return ServiceResult.success(order)

    def available_dates(self, asset_code: TradedAssetCode) -> list[str]:
        """Sorted dates with reference data for ``asset_code``."""
        return sorted(self.price_file.list_available_dates(asset_code.value))
