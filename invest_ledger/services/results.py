"""Uniform result type returned by service operations."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from invest_ledger.exceptions import LedgerError
from invest_ledger.logging import get_logger
from invest_ledger.models.values import DomainValue

logger = get_logger(__name__)

T = TypeVar("T")
V = TypeVar("V", bound=DomainValue)


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Outcome of a service call: a value on success, an error otherwise."""

    value: T | None = None
    error: LedgerError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        """Error text, or an empty string on success."""
        return str(self.error) if self.error is not None else ""

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, value: T | None = None) -> ServiceResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: LedgerError) -> ServiceResult[T]:
        return cls(error=error)


def service_operation(func: Callable[..., ServiceResult[Any]]) -> Callable[..., ServiceResult[Any]]:
    """Turn ``LedgerError`` raised inside ``func`` into a failed result."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> ServiceResult[Any]:
        try:
            return func(*args, **kwargs)
        except LedgerError as e:
            logger.warning("%s rejected: %s", func.__name__, e)
            return ServiceResult.failure(e)

    return wrapper


def validated(value_type: type[V], raw: object) -> ServiceResult[V]:
    """Build a domain value from raw input without raising.

    Parameters
    ----------
    value_type : type[DomainValue]
        Target value class, e.g. ``TaxpayerId``.
    raw : object
        Unvalidated user input.

    Returns
    -------
    ServiceResult
        The value, or the ``ValidationError`` naming the broken rule.
    """
    try:
        return ServiceResult.success(value_type(raw))
    except LedgerError as e:
        return ServiceResult.failure(e)
