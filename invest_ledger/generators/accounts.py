"""Account and wallet generators producing values that pass validation."""

from __future__ import annotations

import string
import unicodedata
from typing import Iterator

from invest_ledger.generators.base import BaseGenerator, CodeAllocator
from invest_ledger.models import (
    Account,
    Identifier5,
    Password,
    PersonName,
    ProfileType,
    RiskProfile,
    TaxpayerId,
    Wallet,
)


def to_ascii_name(text: str, max_length: int = PersonName.MAX_LENGTH) -> str:
    """Reduce a display name to ASCII letters, digits and single spaces."""
    decomposed = unicodedata.normalize("NFKD", text)
    kept = "".join(c for c in decomposed if c in string.ascii_letters + string.digits + " ")
    words = kept.split()
    name = ""
    for word in words:
        candidate = f"{name} {word}" if name else word
        if len(candidate) > max_length:
            break
        name = candidate
    if not name and words:
        name = words[0][:max_length]
    return name


class AccountGenerator(BaseGenerator):
    """Generate accounts with valid CPFs, names and passwords."""

    SPECIALS = "#$%&"

    def __init__(self, seed: int | None = None) -> None:
        super().__init__(seed)
        self._used_cpfs: set[str] = set()

    def cpf(self) -> TaxpayerId:
        """Return a new valid, formatted CPF."""
        while True:
            digits = [self.random.randint(0, 9) for _ in range(9)]
            if len(set(digits)) == 1:
                continue
            digits.append(TaxpayerId.check_digit(digits))
            digits.append(TaxpayerId.check_digit(digits))
            raw = "".join(str(d) for d in digits)
            formatted = f"{raw[:3]}.{raw[3:6]}.{raw[6:9]}-{raw[9:]}"
            if formatted not in self._used_cpfs:
                self._used_cpfs.add(formatted)
                return TaxpayerId(formatted)

    def name(self) -> PersonName:
        """Return a Faker name reduced to the accepted character set."""
        name = to_ascii_name(f"{self.fake.first_name()} {self.fake.last_name()}")
        return PersonName(name or "Investidor")

    def password(self) -> Password:
        """Return a password with one char of each class, all distinct."""
        chars = [
            self.random.choice(string.ascii_uppercase),
            self.random.choice(string.ascii_lowercase),
            self.random.choice(string.digits),
            self.random.choice(self.SPECIALS),
        ]
        pool = [c for c in string.ascii_letters + string.digits + self.SPECIALS if c not in chars]
        chars.extend(self.random.sample(pool, Password.LENGTH - len(chars)))
        self.random.shuffle(chars)
        return Password("".join(chars))

    def generate(self) -> Account:
        """Generate a single account."""
        return Account(cpf=self.cpf(), name=self.name(), password=self.password())

    def generate_batch(self, count: int) -> Iterator[Account]:
        """Generate multiple accounts with distinct CPFs."""
        for _ in range(count):
            yield self.generate()


class WalletGenerator(BaseGenerator):
    """Generate wallets with globally unique five-digit codes."""

    PROFILES = list(ProfileType)
    PROFILE_WEIGHTS = [0.40, 0.40, 0.20]
    NAME_SUFFIXES = ["Reserva", "Dividendos", "Longo Prazo", "Viagem", "Estudos", "Previdencia"]

    def __init__(self, seed: int | None = None) -> None:
        super().__init__(seed)
        self.codes = CodeAllocator(self.random)

    def code(self) -> Identifier5:
        """Return an unused wallet code."""
        return Identifier5(self.codes.next())

    def generate(self, owner: Account) -> Wallet:
        """Generate a wallet owned by ``owner``."""
        profile = self.random.choices(self.PROFILES, weights=self.PROFILE_WEIGHTS, k=1)[0]
        return Wallet(
            code=self.code(),
            name=PersonName(f"Carteira {self.random.choice(self.NAME_SUFFIXES)}"),
            profile=RiskProfile(profile.value),
            owner_cpf=owner.cpf,
        )

    def generate_for_account(self, owner: Account, count: int) -> list[Wallet]:
        """Generate ``count`` wallets for one account."""
        return [self.generate(owner) for _ in range(count)]
