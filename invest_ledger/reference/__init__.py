"""Historical price reference data."""

from invest_ledger.reference.price_file import (
    PRICING_OFFSETS,
    SHALLOW_OFFSETS,
    OffsetProfile,
    PriceRecord,
    ReferencePriceFile,
)

__all__ = [
    "OffsetProfile",
    "PRICING_OFFSETS",
    "PriceRecord",
    "ReferencePriceFile",
    "SHALLOW_OFFSETS",
]
