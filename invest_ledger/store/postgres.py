"""PostgreSQL ledger store built on psycopg 3."""

from __future__ import annotations

from types import TracebackType
from typing import Any

import psycopg
from psycopg import errors as pg_errors

from invest_ledger.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ReferentialIntegrityError,
    StorageUnavailableError,
)
from invest_ledger.logging import get_logger
from invest_ledger.models import (
    Account,
    CalendarDate,
    Identifier5,
    Money,
    Order,
    Password,
    PersonName,
    Quantity,
    RiskProfile,
    TaxpayerId,
    TradedAssetCode,
    Wallet,
)

logger = get_logger(__name__)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS contas (
        cpf TEXT PRIMARY KEY,
        nome TEXT NOT NULL,
        senha TEXT NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS carteiras (
        codigo TEXT PRIMARY KEY,
        nome TEXT NOT NULL,
        tipo_perfil TEXT NOT NULL CHECK (tipo_perfil IN ('Conservador', 'Moderado', 'Agressivo')),
        cpf_conta TEXT NOT NULL REFERENCES contas(cpf),
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS ordens (
        codigo TEXT PRIMARY KEY,
        codigo_neg TEXT NOT NULL,
        data TEXT NOT NULL,
        valor TEXT NOT NULL,
        quantidade TEXT NOT NULL,
        codigo_carteira TEXT NOT NULL REFERENCES carteiras(codigo),
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_carteiras_cpf ON carteiras(cpf_conta)",
    "CREATE INDEX IF NOT EXISTS idx_ordens_carteira ON ordens(codigo_carteira)",
)

TABLES = ("contas", "carteiras", "ordens")

_WALLET_COLUMNS = "codigo, nome, tipo_perfil, cpf_conta"
_ORDER_COLUMNS = "codigo, codigo_neg, data, valor, quantidade, codigo_carteira"


def _wallet_from_row(row: tuple[Any, ...]) -> Wallet:
    return Wallet(
        code=Identifier5(row[0]),
        name=PersonName(row[1]),
        profile=RiskProfile(row[2]),
        owner_cpf=TaxpayerId(row[3]),
    )


def _order_from_row(row: tuple[Any, ...]) -> Order:
    return Order(
        code=Identifier5(row[0]),
        asset_code=TradedAssetCode(row[1]),
        date=CalendarDate(row[2]),
        value=Money(row[3]),
        quantity=Quantity(row[4]),
        wallet_code=Identifier5(row[5]),
    )


class PostgresLedgerStore:
    """Ledger store backed by the ``contas``/``carteiras``/``ordens`` tables.

    One connection is opened by :meth:`connect` and held until
    :meth:`close`. The connection runs in autocommit mode; each public
    method issues a single statement.

    Parameters
    ----------
    conninfo : str
        libpq connection string, e.g. ``PostgresConfig.connection_string``.
    """

    def __init__(self, conninfo: str) -> None:
        self.conninfo = conninfo
        self._conn: psycopg.Connection | None = None

    def connect(self) -> None:
        """Open the connection and make sure the schema exists.

        A held connection that has been closed (for example dropped by the
        server) is discarded and replaced.
        """
        if self._conn is not None:
            if not self._conn.closed:
                return
            logger.warning("PostgreSQL connection was closed; reconnecting")
            self._conn = None
        try:
            self._conn = psycopg.connect(self.conninfo, autocommit=True)
        except psycopg.OperationalError as e:
            raise StorageUnavailableError(f"Could not connect to PostgreSQL: {e}") from e
        logger.info("Connected to PostgreSQL")
        self.initialize_schema()

    def close(self) -> None:
        """Close the connection if open."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.info("PostgreSQL connection closed")

    @property
    def is_connected(self) -> bool:
        return self._conn is not None and not self._conn.closed

    def __enter__(self) -> PostgresLedgerStore:
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _connection(self) -> psycopg.Connection:
        if self._conn is None or self._conn.closed:
            raise StorageUnavailableError("PostgreSQL store is not connected")
        return self._conn

    def _execute(self, sql: str, params: tuple[Any, ...] = ()) -> int:
        """Run a write statement and return the affected row count."""
        conn = self._connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                return cur.rowcount
        except psycopg.OperationalError as e:
            raise StorageUnavailableError(f"PostgreSQL error: {e}") from e

    def _fetchone(self, sql: str, params: tuple[Any, ...]) -> tuple[Any, ...] | None:
        conn = self._connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                return cur.fetchone()
        except psycopg.OperationalError as e:
            raise StorageUnavailableError(f"PostgreSQL error: {e}") from e

    def _fetchall(self, sql: str, params: tuple[Any, ...]) -> list[tuple[Any, ...]]:
        conn = self._connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                return cur.fetchall()
        except psycopg.OperationalError as e:
            raise StorageUnavailableError(f"PostgreSQL error: {e}") from e

    def _insert(self, sql: str, params: tuple[Any, ...], label: str) -> None:
        try:
            self._execute(sql, params)
        except pg_errors.UniqueViolation as e:
            raise DuplicateEntityError(f"{label} already exists") from e
        except pg_errors.ForeignKeyViolation as e:
            raise EntityNotFoundError(f"{label} references a missing parent") from e
        except psycopg.IntegrityError as e:
            raise ReferentialIntegrityError(f"{label} violates a storage constraint: {e}") from e

    def _delete(self, sql: str, params: tuple[Any, ...], label: str) -> bool:
        try:
            return self._execute(sql, params) > 0
        except psycopg.IntegrityError as e:
            raise ReferentialIntegrityError(f"{label} is still referenced") from e

    def initialize_schema(self) -> None:
        """Create tables and indexes when missing."""
        conn = self._connection()
        with conn.transaction():
            with conn.cursor() as cur:
                for statement in SCHEMA_STATEMENTS:
                    cur.execute(statement)

    # Accounts
    def find_account(self, cpf: TaxpayerId) -> Account | None:
        row = self._fetchone("SELECT cpf, nome, senha FROM contas WHERE cpf = %s", (cpf.value,))
        if row is None:
            return None
        return Account(cpf=TaxpayerId(row[0]), name=PersonName(row[1]), password=Password(row[2]))

    def insert_account(self, account: Account) -> None:
        self._insert(
            "INSERT INTO contas (cpf, nome, senha) VALUES (%s, %s, %s)",
            (account.cpf.value, account.name.value, account.password.value),
            f"Account {account.cpf.value}",
        )

    def update_account(self, account: Account) -> bool:
        return self._execute(
            "UPDATE contas SET nome = %s, senha = %s WHERE cpf = %s",
            (account.name.value, account.password.value, account.cpf.value),
        ) > 0

    def delete_account(self, cpf: TaxpayerId) -> bool:
        return self._delete("DELETE FROM contas WHERE cpf = %s", (cpf.value,), f"Account {cpf.value}")

    def authenticate(self, cpf: TaxpayerId, password: Password) -> bool:
        row = self._fetchone(
            "SELECT 1 FROM contas WHERE cpf = %s AND senha = %s",
            (cpf.value, password.value),
        )
        return row is not None

    # Wallets
    def find_wallet(self, code: Identifier5) -> Wallet | None:
        row = self._fetchone(f"SELECT {_WALLET_COLUMNS} FROM carteiras WHERE codigo = %s", (code.value,))
        return _wallet_from_row(row) if row else None

    def list_wallets_for_account(self, cpf: TaxpayerId) -> list[Wallet]:
        rows = self._fetchall(
            f"SELECT {_WALLET_COLUMNS} FROM carteiras WHERE cpf_conta = %s ORDER BY created_at, codigo",
            (cpf.value,),
        )
        return [_wallet_from_row(row) for row in rows]

    def insert_wallet(self, wallet: Wallet) -> None:
        self._insert(
            f"INSERT INTO carteiras ({_WALLET_COLUMNS}) VALUES (%s, %s, %s, %s)",
            (wallet.code.value, wallet.name.value, wallet.profile.value, wallet.owner_cpf.value),
            f"Wallet {wallet.code.value}",
        )

    def update_wallet(self, wallet: Wallet) -> bool:
        return self._execute(
            "UPDATE carteiras SET nome = %s, tipo_perfil = %s WHERE codigo = %s",
            (wallet.name.value, wallet.profile.value, wallet.code.value),
        ) > 0

    def delete_wallet(self, code: Identifier5) -> bool:
        return self._delete("DELETE FROM carteiras WHERE codigo = %s", (code.value,), f"Wallet {code.value}")

    def wallet_has_orders(self, code: Identifier5) -> bool:
        row = self._fetchone("SELECT 1 FROM ordens WHERE codigo_carteira = %s LIMIT 1", (code.value,))
        return row is not None

    # Orders
    def find_order(self, code: Identifier5) -> Order | None:
        row = self._fetchone(f"SELECT {_ORDER_COLUMNS} FROM ordens WHERE codigo = %s", (code.value,))
        return _order_from_row(row) if row else None

    def list_orders_for_wallet(self, code: Identifier5) -> list[Order]:
        rows = self._fetchall(
            f"SELECT {_ORDER_COLUMNS} FROM ordens WHERE codigo_carteira = %s ORDER BY created_at, codigo",
            (code.value,),
        )
        return [_order_from_row(row) for row in rows]

    def insert_order(self, order: Order) -> None:
        self._insert(
            f"INSERT INTO ordens ({_ORDER_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s)",
            (
                order.code.value,
                order.asset_code.value,
                order.date.value,
                order.value.value,
                order.quantity.value,
                order.wallet_code.value,
            ),
            f"Order {order.code.value}",
        )

    def delete_order(self, code: Identifier5) -> bool:
        return self._delete("DELETE FROM ordens WHERE codigo = %s", (code.value,), f"Order {code.value}")

    # Utilities
    def clear_all(self) -> None:
        """Delete every row, children first."""
        conn = self._connection()
        with conn.transaction():
            with conn.cursor() as cur:
                for table in reversed(TABLES):
                    cur.execute(f"DELETE FROM {table}")

    def statistics(self) -> dict[str, int]:
        """Row counts per table."""
        counts = {}
        for table in TABLES:
            row = self._fetchone(f"SELECT COUNT(*) FROM {table}", ())
            counts[table] = row[0] if row else 0
        return counts
