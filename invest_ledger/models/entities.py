"""Account, wallet and order entities composed of validated values."""

from dataclasses import dataclass

from invest_ledger.models.values import (
    CalendarDate,
    Identifier5,
    Money,
    Password,
    PersonName,
    Quantity,
    RiskProfile,
    TaxpayerId,
    TradedAssetCode,
)


@dataclass
class Account:
    """Registered user, keyed by CPF."""

    cpf: TaxpayerId
    name: PersonName
    password: Password


@dataclass
class Wallet:
    """Named investment portfolio owned by one account.

    The code is immutable once created; name and profile may be edited.
    """

    code: Identifier5
    name: PersonName
    profile: RiskProfile
    owner_cpf: TaxpayerId


@dataclass
class Order:
    """Buy order recorded against a wallet.

    ``value`` is always derived from the reference price and the
    quantity, never supplied by the user.
    """

    code: Identifier5
    asset_code: TradedAssetCode
    date: CalendarDate
    value: Money
    quantity: Quantity
    wallet_code: Identifier5
