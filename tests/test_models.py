import datetime as dt
from decimal import Decimal

import pytest
from pydantic import ValidationError

from statement_extraction.models import Category, Section, Transaction, TransactionType


def _tx(**overrides):
    fields = {
        "date": dt.date(2024, 10, 27),
        "description": "mta*nyct paygo",
        "amount": Decimal("-12.50"),
        "category": Category.TRAVEL,
    }
    fields.update(overrides)
    return Transaction(**fields)


def test_transaction_normalizes_description_and_cents():
    tx = _tx(description="  MTA   PAYGO ", amount=Decimal("-12.505"))
    assert tx.description == "MTA PAYGO"
    assert tx.amount == Decimal("-12.51")


@pytest.mark.parametrize(
    "overrides",
    [
        {"description": "   "},
        {"amount": Decimal("NaN")},
        {"amount": Decimal("Infinity")},
        {"date": dt.date(1999, 12, 31)},
        {"date": dt.date(2100, 1, 1)},
        {"type": TransactionType.CREDIT},
        {"extra": "nope"},
    ],
)
def test_transaction_rejects_invalid_fields(overrides):
    with pytest.raises(ValidationError):
        _tx(**overrides)


def test_transaction_is_frozen():
    tx = _tx()
    with pytest.raises(ValidationError):
        tx.amount = Decimal("1.00")


def test_type_must_agree_with_sign():
    assert _tx(type=TransactionType.DEBIT).type is TransactionType.DEBIT
    credit = _tx(amount=Decimal("60.00"), type=TransactionType.CREDIT)
    assert credit.type is TransactionType.CREDIT


def test_as_dict_is_json_friendly():
    assert _tx().as_dict() == {
        "date": "2024-10-27",
        "description": "mta*nyct paygo",
        "amount": "-12.50",
        "category": "Travel",
    }
    assert _tx(type=TransactionType.DEBIT).as_dict()["type"] == "debit"


def test_to_expense_uses_unsigned_amount():
    assert _tx().to_expense() == {
        "amount": Decimal("12.50"),
        "category": "Travel",
        "date": "2024-10-27",
        "note": "mta*nyct paygo",
    }


def test_section_label_lookup():
    section = Section(0, 100, labels=(("deposits", 0, 40), ("withdrawals", 40, 100)))
    assert section.label_at(0) == "deposits"
    assert section.label_at(40) == "withdrawals"
    assert section.label_at(100) is None
    assert Section(0, 10).label_at(5) is None
