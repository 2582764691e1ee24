# walletcli

A small interactive wallet for the terminal. Each user has one balance;
you can deposit, withdraw, check a balance, transfer money between users
and list a user's transaction history. Data is kept in an SQLite file.

## Installation

```
pip install .
```

## Running

```
walletcli
```

By default the data lives in `wallet.db` in the current directory. Use
`--database` to pick another file:

```
walletcli --database /path/to/my-wallet.db
```

The tables are created on first use. A menu is shown:

```
Wallet App CLI
----------
1. Deposit Money
2. Withdraw Money
3. Check Balance
4. View Transaction History
5. Transfer Money
6. Exit
Enter your choice:
```

Pick an option and answer the prompts for user IDs and amounts. After
each action the menu returns after a three-second countdown. Choose `6`
to quit; the program also stops when its input ends. Answers that are
not numbers are read as `0`.

Rules the wallet follows:

- A user must already have a row in the `balances` table; operations on
  unknown users print an error.
- Withdrawals and transfers fail when the balance is smaller than the
  amount.
- A deposit records a `Deposit` entry and a withdrawal a `Withdraw`
  entry. A transfer records a `TransferSend` entry (with a negative
  amount) for the sender and a `TransferReceive` entry for the
  recipient; if writing these entries fails, the transfer itself still
  stands.
- History is listed newest first, each line as
  `<type>: <amount> at <YYYY-MM-DD HH:MM:SS>`.

## What it does not do

The package never creates balance records. There is no menu entry or
function for opening an account, so before a user can deposit, withdraw
or transfer, a row has to be put into the `balances` table by other
means, for example:

```
sqlite3 wallet.db "INSERT INTO balances (user_id, balance) VALUES (1, 0)"
```

(run `walletcli` once first, or call `ensure_schema`, so the table
exists). Changes to balances are not grouped into one database
transaction: a transfer that fails part-way can leave the sender's
balance already changed.

## Using it from Python

```python
import sqlite3

from walletcli.dto import DepositRequest, TransferRequest
from walletcli.handlers import BalanceHandler, TransactionHandler
from walletcli.storage import (
    SqlBalanceRepository,
    SqlTransactionRepository,
    ensure_schema,
)

connection = sqlite3.connect("wallet.db")
ensure_schema(connection)
with connection:
    connection.execute("INSERT OR IGNORE INTO balances (user_id, balance) VALUES (1, 0)")
    connection.execute("INSERT OR IGNORE INTO balances (user_id, balance) VALUES (2, 0)")

balances = SqlBalanceRepository(connection)
transactions = SqlTransactionRepository(connection)
wallet = BalanceHandler(balances, transactions)
history = TransactionHandler(transactions)

response = wallet.deposit(DepositRequest(user_id=1, amount=50.0))
print(response.balance)

result = wallet.transfer(TransferRequest(from_user_id=1, to_user_id=2, amount=20.0))
print(result.data)  # {'sender_balance': 30.0, 'recipient_balance': 20.0}

for entry in history.view_transaction_history(1).transactions:
    print(entry.type, entry.amount, entry.timestamp)
```

`BalanceHandler` offers `check_balance`, `deposit`, `withdraw` and
`transfer`; `TransactionHandler` offers `view_transaction_history`. The
request and response types live in `walletcli.dto`; `TransferResponse`
and `TransactionHistoryResponse` have a `to_dict()` method. The records
`Balance`, `Transaction` and the `TransactionType` enum live in
`walletcli.models`.

The repositories in `walletcli.storage` implement the abstract
`BalanceRepository` and `TransactionRepository`; any object that
implements them can be given to the handlers instead.

Failures raise exceptions. The storage layer raises `StorageError`, and
`RecordNotFoundError` when a user has no balance row. The handlers turn
these into `HandlerError`; a withdrawal without enough money raises
`InsufficientBalanceError`, and any failed transfer raises
`TransferError`, whose `response` attribute holds the unsuccessful
`TransferResponse` with its message.

## Tests

```
pip install ".[test]"
pytest
```