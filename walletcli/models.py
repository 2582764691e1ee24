"""Domain records for wallet balances and transactions."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime


class TransactionType(enum.IntEnum):
    """Kind of a recorded wallet transaction."""

    DEPOSIT = 0
    WITHDRAW = 1
    TRANSFER_SEND = 2
    TRANSFER_RECEIVE = 3

    def __str__(self) -> str:
        return _LABELS.get(self, "Unknown")

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)


_LABELS = {
    TransactionType.DEPOSIT: "Deposit",
    TransactionType.WITHDRAW: "Withdraw",
    TransactionType.TRANSFER_SEND: "TransferSend",
    TransactionType.TRANSFER_RECEIVE: "TransferReceive",
}


@dataclass
class Balance:
    """The stored balance of one user; each user has at most one."""

    id: int = 0
    user_id: int = 0
    balance: float = 0.0
    created_at: datetime | None = None


@dataclass
class Transaction:
    """One entry in a user's transaction history."""

    id: int = 0
    user_id: int = 0
    type: TransactionType = TransactionType.DEPOSIT
    amount: float = 0.0
    timestamp: datetime | None = None