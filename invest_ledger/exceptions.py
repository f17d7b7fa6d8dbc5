"""Custom exception hierarchy for invest-ledger."""


class LedgerError(Exception):
    """Base exception for all invest-ledger errors."""


class ValidationError(LedgerError):
    """Raised when a raw value violates a domain rule.

    Parameters
    ----------
    rule : str
        Short name of the violated rule (e.g. ``"cpf.check_digit"``).
    message : str
        Human-readable description.
    value : object
        The rejected input.
    """

    def __init__(self, rule: str, message: str, value: object = None) -> None:
        super().__init__(message)
        self.rule = rule
        self.value = value


class EntityNotFoundError(LedgerError):
    """Raised when a referenced entity does not exist."""


class DuplicateEntityError(LedgerError):
    """Raised when a uniqueness constraint is violated."""


class ReferentialIntegrityError(LedgerError):
    """Raised when a delete is blocked by entities that still reference it."""


class PriceDataMissingError(LedgerError):
    """Raised when no reference price exists for an asset/date pair."""


class WalletLimitExceededError(LedgerError):
    """Raised when an account already owns the maximum number of wallets."""


class AuthenticationError(LedgerError):
    """Raised when a CPF/password pair does not match a stored account."""


class StorageUnavailableError(LedgerError):
    """Raised when the persistence connection is absent."""


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""
