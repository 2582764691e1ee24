"""Command-line wallet with balances, transfers and transaction history kept in SQLite."""

__version__ = "0.1.0"