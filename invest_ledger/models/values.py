"""Self-validating scalar values used by every ledger entity.

Each value wraps a display string. ``set_value`` validates the raw input
and only then replaces the stored string, so a failed assignment leaves
the previous value (or its absence) untouched. Validation accepts any
object and never raises anything but :class:`ValidationError`.
"""

from __future__ import annotations

import re
import string

from invest_ledger.exceptions import ValidationError
from invest_ledger.models.enums import ProfileType
from invest_ledger.money import parse_quantity, to_cents


class DomainValue:
    """Base class for validated display strings."""

    __slots__ = ("_value",)

    def __init__(self, raw: str | None = None) -> None:
        self._value = ""
        if raw is not None:
            self.set_value(raw)

    def set_value(self, raw: str) -> None:
        """Validate ``raw`` and store it verbatim."""
        if not isinstance(raw, str):
            raise ValidationError(
                f"{self._rule_prefix()}.type",
                f"{type(self).__name__} expects a string, got {type(raw).__name__}",
                raw,
            )
        self._validate(raw)
        self._value = raw

    def get_value(self) -> str:
        """Return the stored value (empty string when never set)."""
        return self._value

    @property
    def value(self) -> str:
        return self._value

    @property
    def is_set(self) -> bool:
        return self._value != ""

    def _validate(self, raw: str) -> None:
        raise NotImplementedError

    @classmethod
    def _rule_prefix(cls) -> str:
        return cls.__name__.lower()

    def _fail(self, rule: str, message: str, raw: object) -> ValidationError:
        return ValidationError(f"{self._rule_prefix()}.{rule}", message, raw)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._value))

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class Identifier5(DomainValue):
    """Five-digit code identifying a wallet or an order."""

    __slots__ = ()
    LENGTH = 5
    _PATTERN = re.compile(r"[0-9]{5}")

    def _validate(self, raw: str) -> None:
        if len(raw) != self.LENGTH:
            raise self._fail("length", f"Code must have exactly {self.LENGTH} characters", raw)
        if not self._PATTERN.fullmatch(raw):
            raise self._fail("digits", "Code must contain only digits 0-9", raw)


class TradedAssetCode(DomainValue):
    """Twelve-character exchange ticker, right-padded with spaces."""

    __slots__ = ()
    LENGTH = 12
    _PATTERN = re.compile(r"[A-Za-z0-9 ]{12}")

    @classmethod
    def from_ticker(cls, ticker: str) -> TradedAssetCode:
        """Pad a short ticker (e.g. ``"PETR4"``) to the fixed width."""
        if not isinstance(ticker, str):
            return cls(ticker)
        return cls(ticker.ljust(cls.LENGTH))

    @property
    def ticker(self) -> str:
        """Code without its trailing padding."""
        return self._value.rstrip(" ")

    def _validate(self, raw: str) -> None:
        if len(raw) != self.LENGTH:
            raise self._fail("length", f"Asset code must have exactly {self.LENGTH} characters", raw)
        if not self._PATTERN.fullmatch(raw):
            raise self._fail("charset", "Asset code accepts only letters, digits and spaces", raw)

    @classmethod
    def _rule_prefix(cls) -> str:
        return "asset_code"


class TaxpayerId(DomainValue):
    """Brazilian CPF in the ``DDD.DDD.DDD-DD`` format.

    The two trailing digits are checked with the weighted modulo-11
    algorithm; sequences of one repeated digit are rejected outright.
    """

    __slots__ = ()
    _PATTERN = re.compile(r"[0-9]{3}\.[0-9]{3}\.[0-9]{3}-[0-9]{2}")

    @staticmethod
    def check_digit(digits: list[int]) -> int:
        """Compute the next CPF check digit for ``digits`` (9 or 10 of them)."""
        weight = len(digits) + 1
        total = sum(d * (weight - i) for i, d in enumerate(digits))
        remainder = total % 11
        return 0 if remainder < 2 else 11 - remainder

    @property
    def digits(self) -> str:
        """The eleven digits without punctuation."""
        return self._value.replace(".", "").replace("-", "")

    def _validate(self, raw: str) -> None:
        if len(raw) != 14 or not self._PATTERN.fullmatch(raw):
            raise self._fail("format", "CPF must follow the format XXX.XXX.XXX-XX", raw)

        digits = [int(c) for c in raw if c.isdigit()]
        if len(set(digits)) == 1:
            raise self._fail("repeated_digits", "CPF cannot consist of a single repeated digit", raw)

        if self.check_digit(digits[:9]) != digits[9]:
            raise self._fail("check_digit", "CPF first check digit does not match", raw)
        if self.check_digit(digits[:10]) != digits[10]:
            raise self._fail("check_digit", "CPF second check digit does not match", raw)

    @classmethod
    def _rule_prefix(cls) -> str:
        return "cpf"


class CalendarDate(DomainValue):
    """Gregorian date written as ``YYYYMMDD``."""

    __slots__ = ()
    _PATTERN = re.compile(r"[0-9]{8}")
    _DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

    @staticmethod
    def is_leap_year(year: int) -> bool:
        return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)

    @classmethod
    def days_in_month(cls, month: int, year: int) -> int:
        if month == 2 and cls.is_leap_year(year):
            return 29
        return cls._DAYS_IN_MONTH[month - 1]

    @property
    def year(self) -> int:
        return int(self._value[:4])

    @property
    def month(self) -> int:
        return int(self._value[4:6])

    @property
    def day(self) -> int:
        return int(self._value[6:8])

    def formatted(self) -> str:
        """Return the date as ``DD/MM/YYYY``."""
        return f"{self._value[6:8]}/{self._value[4:6]}/{self._value[:4]}"

    def _validate(self, raw: str) -> None:
        if not self._PATTERN.fullmatch(raw):
            raise self._fail("format", "Date must have exactly 8 digits (YYYYMMDD)", raw)

        year, month, day = int(raw[:4]), int(raw[4:6]), int(raw[6:8])
        if not 1 <= month <= 12:
            raise self._fail("month", f"Month {month:02d} is outside 01-12", raw)
        last_day = self.days_in_month(month, year)
        if not 1 <= day <= last_day:
            raise self._fail("day", f"Day {day:02d} is outside 01-{last_day:02d} for {month:02d}/{year:04d}", raw)

    @classmethod
    def _rule_prefix(cls) -> str:
        return "date"


class PersonName(DomainValue):
    """Name of up to 20 letters, digits and single spaces."""

    __slots__ = ()
    MAX_LENGTH = 20
    _ALLOWED = frozenset(string.ascii_letters + string.digits + " ")

    def _validate(self, raw: str) -> None:
        if not 1 <= len(raw) <= self.MAX_LENGTH:
            raise self._fail("length", f"Name must have between 1 and {self.MAX_LENGTH} characters", raw)
        if not set(raw) <= self._ALLOWED:
            raise self._fail("charset", "Name accepts only letters, digits and spaces", raw)
        if "  " in raw:
            raise self._fail("spaces", "Name cannot contain consecutive spaces", raw)

    @classmethod
    def _rule_prefix(cls) -> str:
        return "name"


class RiskProfile(DomainValue):
    """One of the literal profile names (case-sensitive)."""

    __slots__ = ()
    _ALLOWED = frozenset(p.value for p in ProfileType)

    @property
    def profile_type(self) -> ProfileType:
        return ProfileType(self._value)

    def _validate(self, raw: str) -> None:
        if raw not in self._ALLOWED:
            raise self._fail(
                "choice",
                "Profile must be one of: " + ", ".join(p.value for p in ProfileType),
                raw,
            )

    @classmethod
    def _rule_prefix(cls) -> str:
        return "profile"


class Money(DomainValue):
    """Brazilian currency display value between 0,01 and 100.000.000,00."""

    __slots__ = ()
    MIN_CENTS = 1
    MAX_CENTS = 100_000_000_00
    _PATTERN = re.compile(r"(0|[1-9][0-9]{0,2}(?:\.[0-9]{3}){1,2}|[1-9][0-9]{0,8}),[0-9]{2}")

    @property
    def cents(self) -> int:
        return to_cents(self._value)

    def _validate(self, raw: str) -> None:
        if not self._PATTERN.fullmatch(raw):
            raise self._fail("format", "Amount must follow the format #.###.###,## with 2 decimals", raw)
        cents = to_cents(raw)
        if not self.MIN_CENTS <= cents <= self.MAX_CENTS:
            raise self._fail("range", "Amount must be between 0,01 and 100.000.000,00", raw)


class Quantity(DomainValue):
    """Share count between 1 and 1.000.000, optionally with separators."""

    __slots__ = ()
    MIN = 1
    MAX = 1_000_000
    _PATTERN = re.compile(r"0|[1-9][0-9]{0,2}(?:\.[0-9]{3}){1,2}|[1-9][0-9]{0,6}")

    @property
    def amount(self) -> int:
        return parse_quantity(self._value)

    def _validate(self, raw: str) -> None:
        if not self._PATTERN.fullmatch(raw):
            raise self._fail("format", "Quantity must be a whole number, optionally grouped as 1.000", raw)
        amount = parse_quantity(raw)
        if not self.MIN <= amount <= self.MAX:
            raise self._fail("range", "Quantity must be between 1 and 1.000.000", raw)


class Password(DomainValue):
    """Six distinct characters mixing upper, lower, digit and #$%&."""

    __slots__ = ()
    LENGTH = 6
    SPECIALS = frozenset("#$%&")
    _ALLOWED = frozenset(string.ascii_letters + string.digits) | SPECIALS

    def _validate(self, raw: str) -> None:
        if len(raw) != self.LENGTH:
            raise self._fail("length", f"Password must have exactly {self.LENGTH} characters", None)
        if not set(raw) <= self._ALLOWED:
            raise self._fail("charset", "Password accepts only letters, digits and #$%&", None)
        if not any(c in string.ascii_uppercase for c in raw):
            raise self._fail("uppercase", "Password needs at least one uppercase letter", None)
        if not any(c in string.ascii_lowercase for c in raw):
            raise self._fail("lowercase", "Password needs at least one lowercase letter", None)
        if not any(c in string.digits for c in raw):
            raise self._fail("digit", "Password needs at least one digit", None)
        if not any(c in self.SPECIALS for c in raw):
            raise self._fail("special", "Password needs at least one of #$%&", None)
        if len(set(raw)) != len(raw):
            raise self._fail("repeated", "Password characters must all be different", None)

    def __repr__(self) -> str:
        return "Password('******')" if self._value else "Password('')"
