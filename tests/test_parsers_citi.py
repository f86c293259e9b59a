import datetime as dt
from decimal import Decimal

from statement_extraction.models import Category, TransactionType
from statement_extraction.parsers import CitiParser
from tests.helpers.statements import CITI


def test_citi_sample_transactions():
    txs = CitiParser().parse(CITI)

    assert [(t.date, t.description, t.amount, t.type) for t in txs] == [
        (dt.date(2025, 6, 20), "ATM WITHDRAWAL", Decimal("-200.00"), TransactionType.DEBIT),
        (
            dt.date(2025, 6, 22),
            "DIRECT DEPOSIT ACME PAYROLL",
            Decimal("1500.00"),
            TransactionType.CREDIT,
        ),
        (dt.date(2025, 6, 25), "CON ED ELECTRIC BILL", Decimal("-85.40"), TransactionType.DEBIT),
        (dt.date(2025, 6, 28), "ZELLE FROM JANE DOE", Decimal("60.00"), TransactionType.CREDIT),
    ]
    assert [t.category for t in txs] == [
        Category.MISCELLANEOUS,
        Category.INCOME,
        Category.BILLS,
        Category.OTHER,
    ]


def test_citi_skips_beginning_balance_row():
    txs = CitiParser().parse(CITI)
    assert Decimal("5000.00") not in {abs(t.amount) for t in txs}


def test_citi_without_regular_checking_yields_nothing(caplog):
    text = CITI.replace("Regular Checking", "Savings Plus")
    with caplog.at_level("WARNING", logger="statement_extraction"):
        assert CitiParser().parse(text) == []
    assert "no transactions extracted" in caplog.text


def test_citi_balance_printed_twice_is_ignored():
    text = (
        "CITIBANK CHECKING ACTIVITY Regular Checking "
        "07/01 Beginning Balance 900.00 "
        "07/02 GROCERY OUTLET 25.00 875.00 875.00 "
        "Total Subtracted/Added 25.00 0.00"
    )
    (tx,) = CitiParser().parse(text)
    assert tx.amount == Decimal("-25.00")
    assert tx.description == "GROCERY OUTLET"


def test_citi_zero_placeholder_stays_out_of_description():
    text = (
        "CITIBANK CHECKING ACTIVITY Regular Checking "
        "06/28 ZELLE FROM JANE DOE 0.00 60.00 1,050.00 "
        "Total Subtracted/Added 0.00 60.00"
    )
    (tx,) = CitiParser().parse(text)
    assert tx.description == "ZELLE FROM JANE DOE"
    assert tx.amount == Decimal("60.00")
    assert tx.type is TransactionType.CREDIT


def test_citi_first_row_sign_follows_beginning_balance():
    text = (
        "CITIBANK CHECKING ACTIVITY Regular Checking "
        "06/18 Beginning Balance 5,000.00 "
        "06/19 DIRECT DEPOSIT PAYROLL 1,500.00 6,500.00 "
        "06/20 ATM WITHDRAWAL 100.00 6,400.00 "
        "Total Subtracted/Added 100.00 1,500.00"
    )
    txs = CitiParser().parse(text)
    assert [(t.description, t.amount) for t in txs] == [
        ("DIRECT DEPOSIT PAYROLL", Decimal("1500.00")),
        ("ATM WITHDRAWAL", Decimal("-100.00")),
    ]
    assert txs[0].type is TransactionType.CREDIT
