"""Fixed-width historical price reference file.

One record per line, fields located by byte offset. Two consumers read
the same file with different layouts for the price column, so both are
kept as named offset profiles:

- ``SHALLOW_OFFSETS``: price text at ``[24, 34)``, minimum width 24.
- ``PRICING_OFFSETS``: average price in hundredths at ``[113, 126)``,
  minimum width 126.

Date ``[2, 10)`` and asset code ``[12, 24)`` are shared by both.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, NamedTuple

from invest_ledger.logging import get_logger

logger = get_logger(__name__)

COMMENT_MARKER = "#"


class OffsetProfile(NamedTuple):
    """Half-open byte ranges used to slice one record."""

    name: str
    date: tuple[int, int]
    asset_code: tuple[int, int]
    price: tuple[int, int]
    min_length: int


SHALLOW_OFFSETS = OffsetProfile(
    name="shallow",
    date=(2, 10),
    asset_code=(12, 24),
    price=(24, 34),
    min_length=24,
)

PRICING_OFFSETS = OffsetProfile(
    name="pricing",
    date=(2, 10),
    asset_code=(12, 24),
    price=(113, 126),
    min_length=126,
)


@dataclass(frozen=True)
class PriceRecord:
    """Fields extracted from one line; ``price_text`` is right-trimmed."""

    date: str
    asset_code: str
    price_text: str


def extract_record(line: str, profile: OffsetProfile) -> PriceRecord | None:
    """Slice ``line`` according to ``profile``.

    Returns ``None`` for comments, blank lines and lines shorter than
    the profile's minimum width.
    """
    if not line or line.startswith(COMMENT_MARKER) or len(line) < profile.min_length:
        return None
    return PriceRecord(
        date=line[profile.date[0] : profile.date[1]],
        asset_code=line[profile.asset_code[0] : profile.asset_code[1]].rstrip(" "),
        price_text=line[profile.price[0] : profile.price[1]].rstrip(" "),
    )


def parse_hundredths(price_text: str) -> float | None:
    """Convert a pre-scaled integer price field to a float price."""
    digits = price_text.strip()
    if not digits or not digits.isascii() or not digits.isdigit():
        return None
    return int(digits) / 100.0


class ReferencePriceFile:
    """Read-only lookups over the historical price file.

    The file is re-read on every query, so records appended by the data
    provider are seen without restarting. A missing file behaves as an
    empty dataset.

    Parameters
    ----------
    path : str | Path
        Location of the reference file.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _lines(self) -> Iterator[str]:
        try:
            handle = open(self.path, "rb")
        except FileNotFoundError:
            logger.warning("Reference price file not found: %s", self.path)
            return
        with handle:
            for raw in handle:
                # Latin-1 keeps one character per byte, so offsets stay byte offsets
                yield raw.rstrip(b"\r\n").decode("latin-1")

    def iter_records(self, profile: OffsetProfile = SHALLOW_OFFSETS) -> Iterator[PriceRecord]:
        """Yield every usable record under ``profile``."""
        for line in self._lines():
            record = extract_record(line, profile)
            if record is not None:
                yield record

    def find_price(self, asset_code: str, date: str) -> float | None:
        """Return the average price for ``asset_code`` on ``date``.

        Uses the pricing profile. Records whose price field is not a
        plain integer are skipped.

        Parameters
        ----------
        asset_code : str
            Ticker, with or without trailing padding.
        date : str
            Date as ``YYYYMMDD``.

        Returns
        -------
        float | None
            Price in currency units, or ``None`` when absent.
        """
        wanted = asset_code.rstrip(" ")
        for record in self.iter_records(PRICING_OFFSETS):
            if record.asset_code != wanted or record.date != date:
                continue
            price = parse_hundredths(record.price_text)
            if price is None:
                logger.debug("Skipping malformed price field %r for %s/%s", record.price_text, wanted, date)
                continue
            return price
        return None

    def find_quote_text(self, asset_code: str, date: str) -> str | None:
        """Return the raw shallow price text for ``asset_code`` on ``date``."""
        wanted = asset_code.rstrip(" ")
        for record in self.iter_records(SHALLOW_OFFSETS):
            if record.asset_code == wanted and record.date == date:
                return record.price_text
        return None

    def has_quote(self, asset_code: str, date: str) -> bool:
        """Whether any record exists for the asset/date combination."""
        return self.find_quote_text(asset_code, date) is not None

    def list_available_dates(self, asset_code: str) -> set[str]:
        """All dates with a record for ``asset_code``; empty when unknown."""
        wanted = asset_code.rstrip(" ")
        return {
            record.date
            for record in self.iter_records(SHALLOW_OFFSETS)
            if record.asset_code == wanted
        }
