"""Base generator class for sample-data generators."""

from __future__ import annotations

import random
from abc import ABC

from faker import Faker


class BaseGenerator(ABC):
    """Base class for all sample-data generators.

    Provides common initialization: Faker instance creation and
    seed-based reproducibility.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``pt_BR``).
    """

    def __init__(self, seed: int | None = None, locale: str = "pt_BR") -> None:
        self.fake = Faker(locale)
        self.random = random.Random(seed)
        if seed is not None:
            self.fake.seed_instance(seed)


class CodeAllocator:
    """Hand out distinct five-digit codes.

    Parameters
    ----------
    rng : random.Random
        Source of randomness (usually the owning generator's).
    """

    CAPACITY = 100_000

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng
        self._used: set[str] = set()

    def reserve(self, code: str) -> None:
        """Mark an externally chosen code as taken."""
        self._used.add(code)

    def next(self) -> str:
        """Return an unused code."""
        if len(self._used) >= self.CAPACITY:
            raise RuntimeError("All five-digit codes are in use")
        while True:
            code = f"{self._rng.randint(0, self.CAPACITY - 1):05d}"
            if code not in self._used:
                self._used.add(code)
                return code
