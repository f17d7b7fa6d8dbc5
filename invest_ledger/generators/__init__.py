"""Sample-data generators for accounts, wallets and reference prices."""

from invest_ledger.generators.accounts import AccountGenerator, WalletGenerator, to_ascii_name
from invest_ledger.generators.base import BaseGenerator, CodeAllocator
from invest_ledger.generators.reference_data import (
    OrderRequest,
    OrderRequestGenerator,
    ReferenceDataGenerator,
    build_record,
    business_days,
)

__all__ = [
    "AccountGenerator",
    "BaseGenerator",
    "CodeAllocator",
    "OrderRequest",
    "OrderRequestGenerator",
    "ReferenceDataGenerator",
    "WalletGenerator",
    "build_record",
    "business_days",
    "to_ascii_name",
]
