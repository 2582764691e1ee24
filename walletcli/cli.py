"""Interactive menu for working with wallets from a terminal."""

from __future__ import annotations

import argparse
import sqlite3
import sys
import time
from contextlib import closing
from typing import Callable, Iterator, Sequence, TextIO

from walletcli.dto import DepositRequest, TransferRequest, WithdrawRequest
from walletcli.handlers import BalanceHandler, HandlerError, TransactionHandler
from walletcli.storage import SqlBalanceRepository, SqlTransactionRepository, ensure_schema

_MENU = (
    "\nWallet App CLI",
    "----------",
    "1. Deposit Money",
    "2. Withdraw Money",
    "3. Check Balance",
    "4. View Transaction History",
    "5. Transfer Money",
    "6. Exit",
)
_EXIT_CHOICE = 6
_COUNTDOWN_SECONDS = 3
_ZERO_TIME = "0001-01-01 00:00:00"


def _tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


class App:
    """Menu loop that reads commands and runs them against the handlers."""

    def __init__(
        self,
        balance_handler: BalanceHandler,
        transaction_handler: TransactionHandler,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        pause: Callable[[float], object] | None = None,
    ) -> None:
        self.balance_handler = balance_handler
        self.transaction_handler = transaction_handler
        self._tokens = _tokens(stdin if stdin is not None else sys.stdin)
        self._out = stdout if stdout is not None else sys.stdout
        self._pause = pause if pause is not None else time.sleep

    def _say(self, text: str = "") -> None:
        print(text, file=self._out)

    def _prompt(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()

    def _next_int(self) -> int | None:
        token = next(self._tokens, None)
        if token is None:
            return None
        try:
            return int(token)
        except ValueError:
            return 0

    def _ask_user(self, text: str) -> int:
        self._prompt(text)
        value = self._next_int()
        return value if value is not None and value >= 0 else 0

    def _ask_amount(self, text: str) -> float:
        self._prompt(text)
        token = next(self._tokens, None)
        try:
            return float(token) if token is not None else 0.0
        except ValueError:
            return 0.0

    def start(self) -> None:
        """Run the menu until the user exits or input runs out."""
        actions = {
            1: self._deposit,
            2: self._withdraw,
            3: self._check_balance,
            4: self._history,
            5: self._transfer,
        }
        while True:
            for line in _MENU:
                self._say(line)
            self._prompt("Enter your choice: ")
            choice = self._next_int()
            if choice is None:
                self._say()
                return
            if choice == _EXIT_CHOICE:
                self._say("Exiting...")
                return
            action = actions.get(choice)
            if action is None:
                self._say("Invalid choice. Please try again.")
            else:
                action()
            self._countdown()

    def _countdown(self) -> None:
        for remaining in range(_COUNTDOWN_SECONDS, 0, -1):
            self._say(f"\nReturning to the main menu in: {remaining} seconds")
            self._pause(1)

    def _deposit(self) -> None:
        user_id = self._ask_user("Enter user ID: ")
        amount = self._ask_amount("Enter amount to deposit: ")
        try:
            response = self.balance_handler.deposit(DepositRequest(user_id=user_id, amount=amount))
        except HandlerError as exc:
            self._say(f"Error: {exc}")
            return
        self._say("Deposit successful!")
        self._say(f"New Balance: {response.balance:.2f}")

    def _withdraw(self) -> None:
        user_id = self._ask_user("Enter user ID: ")
        amount = self._ask_amount("Enter amount to withdraw: ")
        try:
            response = self.balance_handler.withdraw(WithdrawRequest(user_id=user_id, amount=amount))
        except HandlerError as exc:
            self._say(f"Error: {exc}")
            return
        self._say("Withdrawal successful!")
        self._say(f"New Balance: {response.balance:.2f}")

    def _check_balance(self) -> None:
        user_id = self._ask_user("Enter user ID: ")
        try:
            balance = self.balance_handler.check_balance(user_id)
        except HandlerError as exc:
            self._say(f"Error: {exc}")
            return
        self._say("Balance fetched successfully!")
        self._say(f"Balance: {balance:.2f}")

    def _history(self) -> None:
        user_id = self._ask_user("Enter user ID: ")
        try:
            response = self.transaction_handler.view_transaction_history(user_id)
        except HandlerError as exc:
            self._say(f"Error: {exc}")
            return
        self._say("Transaction History:")
        self._say("--------------------")
        for transaction in response.transactions:
            stamp = (
                transaction.timestamp.strftime("%Y-%m-%d %H:%M:%S")
                if transaction.timestamp is not None
                else _ZERO_TIME
            )
            self._say(f"{transaction.type}: {transaction.amount:.2f} at {stamp}")

    def _transfer(self) -> None:
        sender = self._ask_user("Enter sender user ID: ")
        recipient = self._ask_user("Enter recipient user ID: ")
        amount = self._ask_amount("Enter amount to transfer: ")
        try:
            response = self.balance_handler.transfer(
                TransferRequest(from_user_id=sender, to_user_id=recipient, amount=amount)
            )
        except HandlerError as exc:
            self._say(f"Error: {exc}")
            return
        self._say(response.message)
        if response.success and response.data is not None:
            self._say(f"Sender's New Balance: {response.data['sender_balance']:.2f}")
            self._say(f"Recipient's New Balance: {response.data['recipient_balance']:.2f}")


def main(argv: Sequence[str] | None = None) -> int:
    """Open the wallet database and run the interactive menu."""
    parser = argparse.ArgumentParser(prog="walletcli", description="Wallet command-line app.")
    parser.add_argument("--database", default="wallet.db", help="SQLite database file")
    args = parser.parse_args(argv)

    with closing(sqlite3.connect(args.database)) as connection:
        ensure_schema(connection)
        transactions = SqlTransactionRepository(connection)
        app = App(
            BalanceHandler(SqlBalanceRepository(connection), transactions),
            TransactionHandler(transactions),
        )
        app.start()
    return 0


if __name__ == "__main__":
    sys.exit(main())