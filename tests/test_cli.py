import io
import sqlite3

import pytest

from walletcli.cli import App, main
from walletcli.handlers import BalanceHandler, TransactionHandler
from walletcli.storage import SqlBalanceRepository, SqlTransactionRepository, ensure_schema


@pytest.fixture
def wallet():
    connection = sqlite3.connect(":memory:")
    ensure_schema(connection)
    with connection:
        connection.executemany(
            "INSERT INTO balances (user_id, balance) VALUES (?, ?)",
            [(1, 100.0), (2, 100.0)],
        )
    balances = SqlBalanceRepository(connection)
    transactions = SqlTransactionRepository(connection)
    yield balances, transactions
    connection.close()


def run(wallet, text):
    balances, transactions = wallet
    out = io.StringIO()
    pauses = []
    app = App(
        BalanceHandler(balances, transactions),
        TransactionHandler(transactions),
        stdin=io.StringIO(text),
        stdout=out,
        pause=pauses.append,
    )
    app.start()
    return out.getvalue(), pauses


def test_exit_immediately(wallet):
    output, pauses = run(wallet, "6\n")
    assert "Wallet App CLI" in output
    assert "Enter your choice: " in output
    assert output.rstrip().endswith("Exiting...")
    assert pauses == []


def test_deposit_updates_balance_and_counts_down(wallet):
    output, pauses = run(wallet, "1\n1\n50\n6\n")
    stored = wallet[0].get_balance(1)
    assert stored == 150.0
    assert "Deposit successful!" in output
    assert f"New Balance: {stored:.2f}" in output
    assert "Returning to the main menu in: 3 seconds" in output
    assert pauses == [1, 1, 1]


def test_withdraw_insufficient_reports_error(wallet):
    output, _ = run(wallet, "2\n1\n150\n6\n")
    assert "Error: insufficient balance for user 1" in output
    assert wallet[0].get_balance(1) == 100.0


def test_withdraw_success(wallet):
    output, _ = run(wallet, "2 1 50 6")
    stored = wallet[0].get_balance(1)
    assert "Withdrawal successful!" in output
    assert f"New Balance: {stored:.2f}" in output


def test_check_balance_unknown_user(wallet):
    output, _ = run(wallet, "3\n7\n6\n")
    assert "Error: failed to fetch balance for user 7" in output


def test_check_balance_known_user(wallet):
    output, _ = run(wallet, "3\n2\n6\n")
    stored = wallet[0].get_balance(2)
    assert "Balance fetched successfully!" in output
    assert f"Balance: {stored:.2f}" in output


def test_history_lists_deposit(wallet):
    output, _ = run(wallet, "1\n1\n50\n4\n1\n6\n")
    history = wallet[1].get_transactions_by_user_id(1)
    assert len(history) == 1
    stamp = history[0].timestamp.strftime("%Y-%m-%d %H:%M:%S")
    assert "Transaction History:" in output
    assert f"Deposit: 50.00 at {stamp}" in output


def test_transfer_moves_money(wallet):
    output, _ = run(wallet, "5\n1\n2\n50\n6\n")
    balances = wallet[0]
    assert "Transfer successful" in output
    assert f"Sender's New Balance: {balances.get_balance(1):.2f}" in output
    assert f"Recipient's New Balance: {balances.get_balance(2):.2f}" in output
    assert balances.get_balance(1) + balances.get_balance(2) == 200.0


def test_transfer_insufficient(wallet):
    output, _ = run(wallet, "5\n1\n2\n500\n6\n")
    assert "Error: insufficient balance for sender 1" in output
    assert wallet[0].get_balance(2) == 100.0


@pytest.mark.parametrize("choice", ["9", "abc", "0"])
def test_invalid_choice(wallet, choice):
    output, pauses = run(wallet, f"{choice}\n6\n")
    assert "Invalid choice. Please try again." in output
    assert pauses == [1, 1, 1]


def test_end_of_input_stops(wallet):
    output, pauses = run(wallet, "")
    assert output.count("Wallet App CLI") == 1
    assert "Exiting..." not in output
    assert pauses == []


def test_main_creates_database(tmp_path, monkeypatch, capsys):
    database = tmp_path / "wallet.db"
    monkeypatch.setattr("sys.stdin", io.StringIO("6\n"))
    assert main(["--database", str(database)]) == 0
    assert "Exiting..." in capsys.readouterr().out
    with sqlite3.connect(database) as connection:
        tables = {
            name
            for (name,) in connection.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
    assert {"balances", "transactions"} <= tables