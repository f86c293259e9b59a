import pytest

from statement_extraction.descriptions import (
    DEFAULT_PROFILE,
    DISCOVER_FX_NOISE,
    DescriptionProfile,
    is_summary_row,
    labels,
    normalize_description,
    normalize_merchant,
)


@pytest.mark.parametrize(
    "text",
    [
        "Beginning Balance",
        "  ending   balance ",
        "Total Deposits and other credits",
        "TOTAL",
        "Balance forward",
        "Monthly Service Fee waived",
        "OVERDRAFT PROTECTION TRANSFER",
        "description",
    ],
)
def test_summary_rows(text):
    assert is_summary_row(text)


@pytest.mark.parametrize("text", ["STARBUCKS STORE 1234", "ATM WITHDRAWAL", "", "BALANCED BIKES"])
def test_regular_rows_are_not_summary(text):
    assert not is_summary_row(text)


def test_summary_row_drops_candidate():
    assert normalize_description(" Ending Balance ") is None
    assert normalize_description("Total withdrawals and other debits") is None


def test_strips_dates_cards_pages_and_labels():
    raw = " POS 10/26 STARBUCKS CARD 3208 Page 2 of 5 continued "
    assert normalize_description(raw) == "POS STARBUCKS"


def test_too_short_after_cleanup_is_dropped():
    assert normalize_description(" 10/26 CARD 1234 ") is None
    assert normalize_description(" AB ") is None


def test_fx_noise_is_removed():
    raw = "LONDON CAFE POUND STERLING EXCHG RTE 1.27"
    assert normalize_description(raw) == "LONDON CAFE 1.27"

    discover = DescriptionProfile(fx_noise=DISCOVER_FX_NOISE)
    assert normalize_description("HOTEL PARIS EUR @ RATE", discover) == "HOTEL PARIS"


def test_extra_labels_and_lowercase():
    profile = DescriptionProfile(
        extra_labels=labels(r"(?:RECURRING\s+)?CARD\s+PURCHASE(?:\s+WITH\s+PIN)?"),
        lowercase=True,
    )
    raw = " Recurring Card Purchase NETFLIX.COM Card 3208 "
    assert normalize_description(raw, profile) == "netflix.com"


def test_default_profile_keeps_case():
    assert normalize_description(" Direct deposit ACME ", DEFAULT_PROFILE) == "Direct deposit ACME"


@pytest.mark.parametrize(
    "raw, clean",
    [
        ("STARBUCKS STORE 12345 SEATTLE WA", "Starbucks"),
        ("UBER *TRIP HELP.UBER.COM", "Uber"),
        ("AMZN Mktp US*2K1", "Amazon"),
        ("AMAZON MKTPLACE PMTS", "Amazon"),
        ("TRADER JOES #552", "TRADER JOES"),
        ("SHELL OIL 57444", "SHELL OIL"),
        ("", ""),
    ],
)
def test_normalize_merchant(raw, clean):
    assert normalize_merchant(raw) == clean
