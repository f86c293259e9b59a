import datetime as dt
import logging
from decimal import Decimal

import pytest

from statement_extraction import (
    PARSERS,
    Bank,
    Transaction,
    classify_statement,
    get_parser,
    parse_statement,
)
from statement_extraction.parsers import ChaseParser
from tests.helpers.statements import ALL, BANK_OF_AMERICA, DISCOVER

MTA_STATEMENT = (
    "JPMORGAN CHASE BANK\n"
    "Statement Period: 10/01/2024 to 10/31/2024\n"
    "TRANSACTION DETAIL\n"
    "10/27 MTA*NYCT PAYGO NEW YORK NY CARD 3208 -12.50 340.10"
)


@pytest.mark.parametrize("name, text", sorted(ALL.items()))
def test_output_invariants_hold_for_every_sample(name, text):
    txs = parse_statement(text)
    assert txs, name
    for tx in txs:
        assert isinstance(tx, Transaction)
        assert tx.amount.is_finite()
        assert tx.description.strip()
        assert 2000 <= tx.date.year <= 2099


@pytest.mark.parametrize("name, text", sorted(ALL.items()))
def test_parsing_is_idempotent(name, text):
    assert parse_statement(text) == parse_statement(text)


def test_mta_scenario():
    (tx,) = parse_statement(MTA_STATEMENT)
    assert tx.date == dt.date(2024, 10, 27)
    assert tx.amount == Decimal("-12.50")
    assert tx.description == "mta*nyct paygo new york ny"


def test_year_completion_from_statement_period():
    text = (
        "CHASE\nStatement Period: 08/01/2024 to 08/31/2024\n"
        "TRANSACTION DETAIL\n08/14 COFFEE SHOP 42.10"
    )
    (tx,) = parse_statement(text)
    assert tx.date == dt.date(2024, 8, 14)
    assert tx.amount == Decimal("42.10")


def test_bank_of_america_signs_follow_sections():
    txs = parse_statement(BANK_OF_AMERICA)
    assert [t.amount > 0 for t in txs] == [True, True, False, False]


def test_summary_rows_never_become_transactions():
    markers = ("balance", "total", "subtotal")
    for text in ALL.values():
        for tx in parse_statement(text):
            assert not any(m in tx.description.lower() for m in markers)


def test_discover_credit_marker_is_negative():
    txs = parse_statement(DISCOVER)
    assert txs[0].amount == Decimal("-55.00")


@pytest.mark.parametrize("text", ["", "   ", "Wells Fargo\n01/02 COFFEE 3.00"])
def test_unrecognized_statement_returns_empty(text, caplog):
    with caplog.at_level(logging.DEBUG, logger="statement_extraction"):
        assert parse_statement(text) == []


def test_non_text_input_returns_empty():
    assert parse_statement(None) == []  # type: ignore[arg-type]


def test_explicit_bank_skips_classification():
    text = "TRANSACTION DETAIL 10/27 TAXI -9.00 100.00"
    assert classify_statement(text) is None
    (tx,) = parse_statement(text, bank="chase")
    assert tx.amount == Decimal("-9.00")


def test_unexpected_errors_are_logged_and_swallowed(monkeypatch, caplog):
    def boom(self, text):
        raise RuntimeError("boom")

    monkeypatch.setattr(ChaseParser, "parse", boom)
    with caplog.at_level(logging.ERROR, logger="statement_extraction"):
        assert parse_statement(MTA_STATEMENT) == []
    assert "statement parsing failed" in caplog.text


def test_injected_logger_receives_diagnostics(caplog):
    logger = logging.getLogger("tests.api")
    with caplog.at_level(logging.DEBUG, logger="tests.api"):
        parse_statement(MTA_STATEMENT, logger=logger)
    assert any(r.name == "tests.api" for r in caplog.records)
    assert "classified as chase" in caplog.text


def test_registry_covers_every_bank():
    assert set(PARSERS) == set(Bank)
    for bank in Bank:
        assert get_parser(bank).bank is bank
    with pytest.raises(ValueError):
        get_parser("wells_fargo")


def test_unrecognized_statement_is_reported_at_info(caplog):
    with caplog.at_level(logging.INFO, logger="statement_extraction"):
        assert parse_statement("Wells Fargo\n01/02 COFFEE 3.00") == []
    (record,) = [r for r in caplog.records if "not recognized" in r.getMessage()]
    assert record.levelno == logging.INFO
    assert record.name == "statement_extraction.api"
    assert "no transactions extracted" in record.getMessage()
