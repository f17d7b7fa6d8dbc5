"""Domain models for the investment ledger."""

from invest_ledger.models.entities import Account, Order, Wallet
from invest_ledger.models.enums import ProfileType
from invest_ledger.models.values import (
    CalendarDate,
    DomainValue,
    Identifier5,
    Money,
    Password,
    PersonName,
    Quantity,
    RiskProfile,
    TaxpayerId,
    TradedAssetCode,
)

__all__ = [
    "Account",
    "CalendarDate",
    "DomainValue",
    "Identifier5",
    "Money",
    "Order",
    "Password",
    "PersonName",
    "ProfileType",
    "Quantity",
    "RiskProfile",
    "TaxpayerId",
    "TradedAssetCode",
    "Wallet",
]
