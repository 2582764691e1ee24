"""Repositories that keep balances and transactions in an SQL database."""

from __future__ import annotations

import abc
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator

from walletcli.models import Transaction, TransactionType


class StorageError(Exception):
    """A repository operation failed."""


class RecordNotFoundError(StorageError):
    """The requested record does not exist."""


class BalanceRepository(abc.ABC):
    """Access to user balances."""

    @abc.abstractmethod
    def get_balance(self, user_id: int) -> float:
        """Return the balance of the user."""

    @abc.abstractmethod
    def update_balance(self, user_id: int, new_balance: float) -> None:
        """Set the balance of the user."""


class TransactionRepository(abc.ABC):
    """Access to the transaction log."""

    @abc.abstractmethod
    def create_transaction(self, transaction: Transaction) -> Transaction:
        """Store a transaction and return it with its id and timestamp set."""

    @abc.abstractmethod
    def get_transactions_by_user_id(self, user_id: int) -> list[Transaction]:
        """Return the user's transactions, newest first."""


_SCHEMA = """
CREATE TABLE IF NOT EXISTS balances (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL UNIQUE,
    balance REAL NOT NULL DEFAULT 0,
    created_at TEXT
);
CREATE TABLE IF NOT EXISTS transactions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL,
    type INTEGER NOT NULL,
    amount REAL NOT NULL,
    timestamp TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_transactions_user_id ON transactions (user_id);
"""


@contextmanager
def _sql_errors(action: str) -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as exc:
        raise StorageError(f"{action}: {exc}") from exc


def ensure_schema(connection: sqlite3.Connection) -> None:
    """Create the wallet tables if they do not exist yet."""
    with _sql_errors("create schema"):
        connection.executescript(_SCHEMA)
        connection.commit()


def _encode_timestamp(moment: datetime) -> str:
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="microseconds")


class SqlBalanceRepository(BalanceRepository):
    """Balance repository backed by a DB-API connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def get_balance(self, user_id: int) -> float:
        with _sql_errors(f"fetch balance for user {user_id}"):
            row = self._connection.execute(
                "SELECT balance FROM balances WHERE user_id = ? ORDER BY id LIMIT 1",
                (user_id,),
            ).fetchone()
        if row is None:
            raise RecordNotFoundError(f"record not found: balance for user {user_id}")
        return float(row[0])

    def update_balance(self, user_id: int, new_balance: float) -> None:
        with _sql_errors(f"update balance for user {user_id}"), self._connection:
            self._connection.execute(
                "UPDATE balances SET balance = ? WHERE user_id = ?",
                (new_balance, user_id),
            )


class SqlTransactionRepository(TransactionRepository):
    """Transaction repository backed by a DB-API connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def create_transaction(self, transaction: Transaction) -> Transaction:
        timestamp = transaction.timestamp or datetime.now(timezone.utc)
        columns = ["user_id", "type", "amount", "timestamp"]
        values: list[object] = [
            transaction.user_id,
            int(transaction.type),
            transaction.amount,
            _encode_timestamp(timestamp),
        ]
        if transaction.id:
            columns.insert(0, "id")
            values.insert(0, transaction.id)
        placeholders = ", ".join("?" for _ in columns)
        sql = f"INSERT INTO transactions ({', '.join(columns)}) VALUES ({placeholders})"
        with _sql_errors(f"create transaction for user {transaction.user_id}"), self._connection:
            cursor = self._connection.execute(sql, values)
        transaction.id = cursor.lastrowid if not transaction.id else transaction.id
        transaction.timestamp = timestamp
        return transaction

    def get_transactions_by_user_id(self, user_id: int) -> list[Transaction]:
        with _sql_errors(f"fetch transactions for user {user_id}"):
            rows = self._connection.execute(
                "SELECT id, user_id, type, amount, timestamp FROM transactions "
                "WHERE user_id = ? ORDER BY timestamp DESC, id ASC",
                (user_id,),
            ).fetchall()
        try:
            return [
                Transaction(
                    id=row_id,
                    user_id=owner,
                    type=TransactionType(kind),
                    amount=float(amount),
                    timestamp=datetime.fromisoformat(stamp),
                )
                for row_id, owner, kind, amount, stamp in rows
            ]
        except ValueError as exc:
            raise StorageError(f"malformed transaction for user {user_id}: {exc}") from exc