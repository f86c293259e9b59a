import datetime as dt
from decimal import Decimal

from statement_extraction.models import Category
from statement_extraction.parsers import CapitalOneParser
from tests.helpers.statements import CAPITAL_ONE


def test_capital_one_sample_transactions():
    txs = CapitalOneParser().parse(CAPITAL_ONE)

    assert [(t.date, t.description, t.amount, t.category) for t in txs] == [
        (dt.date(2024, 8, 5), "Withdrawal to SAVINGS", Decimal("-1000.00"), Category.MISCELLANEOUS),
        (dt.date(2024, 8, 14), "Direct deposit ACME CORP", Decimal("2652.81"), Category.INCOME),
        (dt.date(2024, 8, 20), "TRADER JOES #552", Decimal("-45.10"), Category.FOOD),
    ]


def test_opening_and_closing_balance_rows_are_skipped():
    txs = CapitalOneParser().parse(CAPITAL_ONE)
    assert not any("Balance" in t.description for t in txs)


def test_only_dollar_amounts_count():
    text = (
        "Capital One Statement period: Sep 1 - Sep 30, 2024 "
        "DATE DESCRIPTION CATEGORY AMOUNT BALANCE "
        "Sep 3 CAFE 12.50 REWARDS Dining - $8.25 $991.75 "
        "Fee Summary"
    )
    (tx,) = CapitalOneParser().parse(text)
    assert tx.amount == Decimal("-8.25")
    assert tx.category is Category.FOOD
    assert tx.description == "CAFE 12.50 REWARDS"


def test_missing_table_header_yields_nothing():
    assert CapitalOneParser().parse("Capital One 360 Checking Aug 5 Coffee - $3.00 $10.00") == []
