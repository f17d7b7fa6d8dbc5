"""Integer-cent arithmetic for Brazilian-formatted monetary strings.

Display values use ``.`` as thousands separator and ``,`` as decimal
separator (``1.234.567,89``). Sums are always carried out on integer
cents so that no floating-point drift leaks into balances.
"""

# Balance shown for wallets and accounts without orders. Money's valid
# range starts at 0,01, so an empty total is displayed as that floor.
NO_FUNDS_SENTINEL = "0,01"


def group_thousands(digits: str) -> str:
    """Insert ``.`` every three digits from the right.

    Parameters
    ----------
    digits : str
        Plain decimal digits (no sign, no separators).

    Returns
    -------
    str
        Grouped digits, e.g. ``"1234567"`` -> ``"1.234.567"``.
    """
    head = len(digits) % 3 or 3
    groups = [digits[:head]]
    for i in range(head, len(digits), 3):
        groups.append(digits[i : i + 3])
    return ".".join(groups)


def to_cents(display: str) -> int:
    """Convert a display money string to integer cents.

    Thousands separators are stripped, the integer part defaults to zero
    when empty and the fractional part is truncated or right-padded to
    exactly two digits.

    Parameters
    ----------
    display : str
        Money display string such as ``"1.234,5"`` or ``"0,01"``.

    Returns
    -------
    int
        Value in cents (``123450`` for ``"1.234,5"``).
    """
    cleaned = str(display).replace(".", "")
    integer_part, _, fraction_part = cleaned.partition(",")
    reais = int(integer_part) if integer_part else 0
    cents = int(fraction_part[:2].ljust(2, "0"))
    return reais * 100 + cents


def format_cents(cents: int) -> str:
    """Format non-negative integer cents as ``reais,cents`` with grouping.

    Unlike :func:`from_cents`, zero is written as ``"0,00"``.
    """
    if cents < 0:
        raise ValueError(f"Cannot format negative amount: {cents}")
    reais, remainder = divmod(cents, 100)
    return f"{group_thousands(str(reais))},{remainder:02d}"


def from_cents(cents: int) -> str:
    """Convert integer cents to a display money string.

    Zero maps to :data:`NO_FUNDS_SENTINEL` rather than ``"0,00"``.

    Raises
    ------
    ValueError
        If ``cents`` is negative.
    """
    if cents == 0:
        return NO_FUNDS_SENTINEL
    return format_cents(cents)


def format_decimal_amount(amount: float) -> str:
    """Round a floating-point amount to two decimals and format it.

    The rounding happens once, through ``"%.2f"``; everything after that
    goes through integer cents. An amount that rounds to zero comes out
    as ``"0,00"``, never as the empty-balance sentinel.
    """
    fixed = f"{amount:.2f}"
    return format_cents(to_cents(fixed.replace(".", ",")))


def parse_quantity(display: str) -> int:
    """Parse a quantity string, ignoring ``.`` thousands separators."""
    return int(str(display).replace(".", ""))
