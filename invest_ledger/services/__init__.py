"""Ledger services: accounts, wallets, order pricing and balances."""

from invest_ledger.services.balances import BalanceCalculator
from invest_ledger.services.factory import open_ledger
from invest_ledger.services.ledger import AccountSnapshot, LedgerService, WalletSnapshot
from invest_ledger.services.pricing import OrderPricingService
from invest_ledger.services.results import ServiceResult, service_operation, validated

__all__ = [
    "AccountSnapshot",
    "BalanceCalculator",
    "LedgerService",
    "OrderPricingService",
    "ServiceResult",
    "WalletSnapshot",
    "open_ledger",
    "service_operation",
    "validated",
]
