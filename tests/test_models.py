from datetime import datetime, timezone

import pytest

from walletcli.models import Balance, Transaction, TransactionType


@pytest.mark.parametrize(
    "kind, label",
    [
        (TransactionType.DEPOSIT, "Deposit"),
        (TransactionType.WITHDRAW, "Withdraw"),
        (TransactionType.TRANSFER_SEND, "TransferSend"),
        (TransactionType.TRANSFER_RECEIVE, "TransferReceive"),
    ],
)
def test_transaction_type_labels(kind, label):
    assert str(kind) == label
    assert f"{kind}" == label


def test_transaction_type_values_follow_declaration_order():
    assert list(TransactionType) == sorted(TransactionType, key=int)
    assert TransactionType(0) is TransactionType.DEPOSIT
    assert TransactionType(3) is TransactionType.TRANSFER_RECEIVE


def test_format_spec_applies_to_label():
    kind = TransactionType(1)
    assert f"{kind:>10}" == "  Withdraw"
    assert f"{kind:<10}|" == "Withdraw  |"


def test_transaction_defaults_to_deposit_without_timestamp():
    tx = Transaction(user_id=5, amount=12.5)
    assert tx.type is TransactionType.DEPOSIT
    assert tx.timestamp is None
    assert tx.id == 0
    assert tx.user_id == 5


def test_balance_holds_given_values():
    created = datetime(2024, 1, 2, tzinfo=timezone.utc)
    record = Balance(id=7, user_id=3, balance=99.5, created_at=created)
    assert (record.id, record.user_id, record.balance, record.created_at) == (
        7,
        3,
        99.5,
        created,
    )