"""Wallet operations built on top of the balance and transaction repositories."""

from __future__ import annotations

import logging

from walletcli.dto import (
    DepositRequest,
    DepositResponse,
    TransactionHistoryResponse,
    TransferRequest,
    TransferResponse,
    WithdrawRequest,
    WithdrawResponse,
)
from walletcli.models import Transaction, TransactionType
from walletcli.storage import BalanceRepository, StorageError, TransactionRepository

logger = logging.getLogger(__name__)


class HandlerError(Exception):
    """A wallet operation could not be completed."""


class InsufficientBalanceError(HandlerError):
    """The account does not hold enough money for the operation."""


class TransferError(HandlerError):
    """A transfer failed; ``response`` holds the unsuccessful response."""

    def __init__(self, message: str, response: TransferResponse) -> None:
        super().__init__(message)
        self.response = response


class BalanceHandler:
    """Deposits, withdrawals, transfers and balance queries."""

    def __init__(
        self,
        balance_repo: BalanceRepository,
        transaction_repo: TransactionRepository | None = None,
    ) -> None:
        self.balance_repo = balance_repo
        self.transaction_repo = transaction_repo

    def _fetch_balance(self, user_id: int) -> float:
        try:
            return self.balance_repo.get_balance(user_id)
        except StorageError as exc:
            logger.warning("Error fetching balance for user %d: %s", user_id, exc)
            raise HandlerError(f"failed to fetch balance for user {user_id}: {exc}") from exc

    def _store_balance(self, user_id: int, new_balance: float) -> None:
        try:
            self.balance_repo.update_balance(user_id, new_balance)
        except StorageError as exc:
            logger.warning("Error updating balance for user %d: %s", user_id, exc)
            raise HandlerError(f"failed to update balance for user {user_id}: {exc}") from exc

    def _record(self, user_id: int, kind: TransactionType, amount: float) -> None:
        if self.transaction_repo is None:
            raise HandlerError(f"failed to create transaction for user {user_id}: no transaction log")
        try:
            self.transaction_repo.create_transaction(
                Transaction(user_id=user_id, type=kind, amount=amount)
            )
        except StorageError as exc:
            logger.warning("Error creating transaction for user %d: %s", user_id, exc)
            raise HandlerError(f"failed to create transaction for user {user_id}: {exc}") from exc

    def check_balance(self, user_id: int) -> float:
        """Return the current balance of the user."""
        return self._fetch_balance(user_id)

    def deposit(self, request: DepositRequest) -> DepositResponse:
        """Add money to the user's balance and log the deposit."""
        balance = self._fetch_balance(request.user_id)
        new_balance = balance + request.amount
        self._store_balance(request.user_id, new_balance)
        self._record(request.user_id, TransactionType.DEPOSIT, request.amount)
        return DepositResponse(success=True, message="Success Deposit", balance=new_balance)

    def withdraw(self, request: WithdrawRequest) -> WithdrawResponse:
        """Take money from the user's balance and log the withdrawal."""
        balance = self._fetch_balance(request.user_id)
        if balance < request.amount:
            logger.warning("Insufficient balance for user %d", request.user_id)
            raise InsufficientBalanceError(f"insufficient balance for user {request.user_id}")
        new_balance = balance - request.amount
        self._store_balance(request.user_id, new_balance)
        self._record(request.user_id, TransactionType.WITHDRAW, request.amount)
        return WithdrawResponse(success=True, message="Withdrawal successful", balance=new_balance)

    def transfer(self, request: TransferRequest) -> TransferResponse:
        """Move money between two users.

        Raises TransferError, carrying an unsuccessful response, when a balance
        cannot be read or written or the sender lacks funds. Failures to log
        the transfer in the history are reported but do not fail it.
        """
        sender, recipient, amount = request.from_user_id, request.to_user_id, request.amount

        def fail(message: str, error: object) -> TransferError:
            return TransferError(str(error), TransferResponse(success=False, message=message))

        try:
            sender_balance = self.balance_repo.get_balance(sender)
        except StorageError as exc:
            logger.warning("Error fetching balance for sender %d: %s", sender, exc)
            raise fail(f"Failed to fetch balance for sender {sender}", exc) from exc

        if sender_balance < amount:
            logger.warning("Insufficient balance for sender %d", sender)
            raise fail("Insufficient balance", f"insufficient balance for sender {sender}")

        try:
            recipient_balance = self.balance_repo.get_balance(recipient)
        except StorageError as exc:
            logger.warning("Error fetching balance for recipient %d: %s", recipient, exc)
            raise fail(f"Failed to fetch balance for recipient {recipient}", exc) from exc

        new_sender_balance = sender_balance - amount
        new_recipient_balance = recipient_balance + amount

        try:
            self.balance_repo.update_balance(sender, new_sender_balance)
        except StorageError as exc:
            logger.warning("Error updating balance for sender %d: %s", sender, exc)
            raise fail(f"Failed to update balance for sender {sender}", exc) from exc

        try:
            self.balance_repo.update_balance(recipient, new_recipient_balance)
        except StorageError as exc:
            logger.warning("Error updating balance for recipient %d: %s", recipient, exc)
            raise fail(f"Failed to update balance for recipient {recipient}", exc) from exc

        for user_id, kind, value, role in (
            (sender, TransactionType.TRANSFER_SEND, -amount, "sender"),
            (recipient, TransactionType.TRANSFER_RECEIVE, amount, "recipient"),
        ):
            if self.transaction_repo is None:
                logger.warning("No transaction log for %s %d", role, user_id)
                continue
            try:
                self.transaction_repo.create_transaction(
                    Transaction(user_id=user_id, type=kind, amount=value)
                )
            except StorageError as exc:
                logger.warning("Error logging transaction for %s %d: %s", role, user_id, exc)

        return TransferResponse(
            success=True,
            message="Transfer successful",
            data={
                "sender_balance": new_sender_balance,
                "recipient_balance": new_recipient_balance,
            },
        )


class TransactionHandler:
    """Queries over the transaction history."""

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self.transaction_repo = transaction_repo

    def view_transaction_history(self, user_id: int) -> TransactionHistoryResponse:
        """Return the user's transactions, newest first."""
        try:
            transactions = self.transaction_repo.get_transactions_by_user_id(user_id)
        except StorageError as exc:
            logger.warning("Error fetching transaction history for user %d: %s", user_id, exc)
            raise HandlerError(
                f"failed to fetch transaction history for user {user_id}: {exc}"
            ) from exc
        return TransactionHistoryResponse(transactions=list(transactions))