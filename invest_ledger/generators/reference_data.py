"""Synthetic historical price files and order requests.

Records mimic the exchange's fixed-width daily quote layout: record type,
trade date, BDI code, ticker, then the price columns read by both offset
profiles. Lines are padded to :data:`RECORD_WIDTH` characters.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Iterator

from invest_ledger.generators.base import BaseGenerator, CodeAllocator
from invest_ledger.models import CalendarDate, Identifier5, Quantity, TradedAssetCode
from invest_ledger.money import group_thousands
from invest_ledger.reference import PRICING_OFFSETS, SHALLOW_OFFSETS, ReferencePriceFile

RECORD_WIDTH = 245
RECORD_TYPE_QUOTE = "01"
BDI_STANDARD_LOT = "02"
FILE_HEADER = "# Historical daily quotes: date[2:10] code[12:24] price[24:34] average[113:126]"


def build_record(trade_date: str, ticker: str, average_cents: int, company: str = "") -> str:
    """Render one fixed-width quote line.

    Parameters
    ----------
    trade_date : str
        Date as ``YYYYMMDD``.
    ticker : str
        Asset code, at most 12 characters.
    average_cents : int
        Average price in hundredths.
    company : str
        Short company name written in the filler area.

    Returns
    -------
    str
        Line of :data:`RECORD_WIDTH` characters without newline.
    """
    shallow_start, shallow_end = SHALLOW_OFFSETS.price
    pricing_start, pricing_end = PRICING_OFFSETS.price

    line = (
        RECORD_TYPE_QUOTE
        + trade_date
        + BDI_STANDARD_LOT
        + ticker.ljust(12)[:12]
        + str(average_cents).zfill(shallow_end - shallow_start)
    )
    line += company.upper()[:12].ljust(pricing_start - len(line))
    line += str(average_cents).zfill(pricing_end - pricing_start)
    return line.ljust(RECORD_WIDTH)


def business_days(start: date, count: int) -> Iterator[date]:
    """Yield ``count`` weekdays starting at ``start``."""
    current = start
    produced = 0
    while produced < count:
        if current.weekday() < 5:
            yield current
            produced += 1
        current += timedelta(days=1)


class ReferenceDataGenerator(BaseGenerator):
    """Generate daily average prices for a set of B3 tickers."""

    B3_STOCKS = [
        {"ticker": "PETR4", "company": "Petrobras", "price_range": (25, 40)},
        {"ticker": "VALE3", "company": "Vale", "price_range": (60, 85)},
        {"ticker": "ITUB4", "company": "Itau Unibanco", "price_range": (25, 35)},
        {"ticker": "BBDC4", "company": "Bradesco", "price_range": (12, 18)},
        {"ticker": "BBAS3", "company": "Banco do Brasil", "price_range": (45, 60)},
        {"ticker": "ABEV3", "company": "Ambev", "price_range": (10, 16)},
        {"ticker": "MGLU3", "company": "Magazine Luiza", "price_range": (1, 5)},
        {"ticker": "WEGE3", "company": "WEG", "price_range": (35, 45)},
        {"ticker": "SANB11", "company": "Santander Brasil", "price_range": (25, 35)},
        {"ticker": "TAEE11", "company": "Taesa", "price_range": (30, 38)},
    ]

    # Maximum daily relative move of the random walk
    DAILY_VOLATILITY = 0.03

    def __init__(self, seed: int | None = None) -> None:
        super().__init__(seed)

    def generate_lines(self, start: date, days: int, tickers: list[str] | None = None) -> Iterator[str]:
        """Yield one record per ticker per business day.

        Parameters
        ----------
        start : date
            First calendar day to consider.
        days : int
            Number of business days to cover.
        tickers : list[str] | None
            Subset of known tickers (all when omitted).
        """
        stocks = [s for s in self.B3_STOCKS if tickers is None or s["ticker"] in tickers]
        prices = {s["ticker"]: self.random.uniform(*s["price_range"]) for s in stocks}

        for day in business_days(start, days):
            trade_date = day.strftime("%Y%m%d")
            for stock in stocks:
                ticker = stock["ticker"]
                low, high = stock["price_range"]
                move = self.random.uniform(-self.DAILY_VOLATILITY, self.DAILY_VOLATILITY)
                prices[ticker] = min(high, max(low, prices[ticker] * (1 + move)))
                yield build_record(trade_date, ticker, round(prices[ticker] * 100), stock["company"])

    def write(self, path: str | Path, start: date, days: int, tickers: list[str] | None = None) -> int:
        """Write a reference file and return the number of records."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        count = 0
        with open(path, "w", encoding="latin-1", newline="\n") as f:
            f.write(FILE_HEADER + "\n")
            for line in self.generate_lines(start, days, tickers):
                f.write(line + "\n")
                count += 1
        return count


@dataclass
class OrderRequest:
    """Validated inputs for one order creation."""

    order_code: Identifier5
    asset_code: TradedAssetCode
    date: CalendarDate
    quantity: Quantity


class OrderRequestGenerator(BaseGenerator):
    """Pick asset/date pairs present in a reference file and random quantities."""

    QUANTITY_RANGE = (1, 5000)

    def __init__(self, price_file: ReferencePriceFile, seed: int | None = None) -> None:
        super().__init__(seed)
        self._quotes = sorted({(r.asset_code, r.date) for r in price_file.iter_records(PRICING_OFFSETS)})
        self.codes = CodeAllocator(self.random)

    def generate(self) -> OrderRequest:
        """Generate one request; the reference file must not be empty."""
        if not self._quotes:
            raise ValueError("Reference file has no usable quotes")
        ticker, trade_date = self.random.choice(self._quotes)
        quantity = self.random.randint(*self.QUANTITY_RANGE)
        return OrderRequest(
            order_code=Identifier5(self.codes.next()),
            asset_code=TradedAssetCode.from_ticker(ticker),
            date=CalendarDate(trade_date),
            quantity=Quantity(group_thousands(str(quantity))),
        )
