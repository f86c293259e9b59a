import datetime as dt
from decimal import Decimal

import pytest

from statement_extraction.models import Category
from statement_extraction.parsers import DiscoverParser
from statement_extraction.parsers.discover import split_merchant_category
from tests.helpers.statements import DISCOVER


def test_discover_sample_transactions():
    txs = DiscoverParser().parse(DISCOVER)

    assert [(t.date, t.description, t.amount, t.category) for t in txs] == [
        (dt.date(2024, 7, 15), "INTERNET PAYMENT - THANK YOU", Decimal("-55.00"), Category.BILLS),
        (
            dt.date(2024, 7, 18),
            "STARBUCKS STORE 1234 SEATTLE WA",
            Decimal("5.75"),
            Category.FOOD,
        ),
        (dt.date(2024, 7, 20), "SHELL OIL 57444 HOUSTON TX", Decimal("40.60"), Category.TRAVEL),
        (dt.date(2024, 7, 25), "AMAZON MKTPLACE PMTS", Decimal("74.00"), Category.SHOPPING),
        (dt.date(2024, 7, 28), "HOLIDAY INN EXPRESS", Decimal("33.00"), Category.UNCATEGORIZED),
    ]


def test_payment_without_marker_is_negative():
    text = (
        "DISCOVER Payments and Credits TRANSACTIONS "
        "01/05 01/05 ONLINE PAYMENT RECEIVED 100.00 "
        "01/09 01/10 BOOKSHOP Merchandise 20.00"
    )
    txs = DiscoverParser().parse(text)
    assert [t.amount for t in txs] == [Decimal("-100.00"), Decimal("20.00")]


def test_single_date_rows_and_missing_header():
    text = "DISCOVER Purchases Statement Period Jul 13 - Aug 12, 2024 07/20 CAFE LUNA Restaurants 14.20"
    (tx,) = DiscoverParser().parse(text)
    assert tx.date == dt.date(2024, 7, 20)
    assert tx.description == "CAFE LUNA"
    assert tx.category is Category.FOOD


@pytest.mark.parametrize(
    "body, expected",
    [
        ("STARBUCKS STORE 1234 Restaurants", ("STARBUCKS STORE 1234", "Restaurants")),
        ("TRAVEL AGENCY Travel/Entertainment", ("TRAVEL AGENCY", "Travel/Entertainment")),
        ("HOLIDAY INN EXPRESS", ("HOLIDAY INN EXPRESS", None)),
        ("  SHELL OIL Gasoline ", ("SHELL OIL", "Gasoline")),
    ],
)
def test_split_merchant_category(body, expected):
    assert split_merchant_category(body) == expected
