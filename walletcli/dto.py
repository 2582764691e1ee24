"""Request and response objects exchanged with the wallet handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from walletcli.models import Transaction


@dataclass
class TransferRequest:
    from_user_id: int = 0
    to_user_id: int = 0
    amount: float = 0.0


@dataclass
class TransferResponse:
    success: bool = False
    message: str = ""
    data: dict[str, float] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the response with its wire field names."""
        return {
            "success": self.success,
            "message": self.message,
            "data": dict(self.data) if self.data is not None else None,
        }


@dataclass
class DepositRequest:
    user_id: int = 0
    amount: float = 0.0


@dataclass
class DepositResponse:
    success: bool = False
    message: str = ""
    balance: float = 0.0


@dataclass
class WithdrawRequest:
    user_id: int = 0
    amount: float = 0.0


@dataclass
class WithdrawResponse:
    success: bool = False
    message: str = ""
    balance: float = 0.0


@dataclass
class CheckBalanceRequest:
    user_id: int = 0


@dataclass
class TransactionHistoryRequest:
    user_id: int = 0


def _transaction_to_dict(transaction: Transaction) -> dict[str, Any]:
    timestamp = transaction.timestamp
    return {
        "id": transaction.id,
        "user_id": transaction.user_id,
        "type": int(transaction.type),
        "amount": transaction.amount,
        "timestamp": timestamp.isoformat() if timestamp is not None else None,
    }


@dataclass
class TransactionHistoryResponse:
    transactions: list[Transaction] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the history with its wire field names."""
        return {"transactions": [_transaction_to_dict(tx) for tx in self.transactions]}