"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from invest_ledger.generators import build_record
from invest_ledger.models import (
    Account,
    Identifier5,
    Password,
    PersonName,
    RiskProfile,
    TaxpayerId,
    Wallet,
)
from invest_ledger.reference import ReferencePriceFile
from invest_ledger.services import LedgerService
from invest_ledger.store import InMemoryLedgerStore

VALID_CPF = "529.982.247-25"


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def store() -> InMemoryLedgerStore:
    """Fresh, connected in-memory store."""
    store = InMemoryLedgerStore()
    store.connect()
    return store


@pytest.fixture
def reference_lines() -> list[str]:
    """Quote lines for PETR4 and VALE3 on two days."""
    return [
        "# comment line",
        build_record("20240102", "PETR4", 3550, "Petrobras"),
        build_record("20240103", "PETR4", 3600, "Petrobras"),
        build_record("20240102", "VALE3", 7025, "Vale"),
    ]


@pytest.fixture
def reference_file(tmp_path: Path, reference_lines: list[str]) -> Path:
    """Reference price file written to a temporary directory."""
    path = tmp_path / "DADOS_HISTORICOS.txt"
    path.write_text("\n".join(reference_lines) + "\n", encoding="latin-1")
    return path


@pytest.fixture
def price_file(reference_file: Path) -> ReferencePriceFile:
    """Price file reader over the temporary reference file."""
    return ReferencePriceFile(reference_file)


@pytest.fixture
def sample_account() -> Account:
    """Sample account with valid credentials."""
    return Account(
        cpf=TaxpayerId(VALID_CPF),
        name=PersonName("Maria Silva"),
        password=Password("Ab1#cd"),
    )


@pytest.fixture
def sample_wallet(sample_account: Account) -> Wallet:
    """Sample wallet owned by ``sample_account``."""
    return Wallet(
        code=Identifier5("10001"),
        name=PersonName("Carteira Reserva"),
        profile=RiskProfile("Moderado"),
        owner_cpf=sample_account.cpf,
    )


@pytest.fixture
def service(store: InMemoryLedgerStore, price_file: ReferencePriceFile) -> LedgerService:
    """Ledger service over the in-memory store and temporary reference file."""
    return LedgerService(store, price_file)
