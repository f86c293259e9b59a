import datetime as dt
import logging

import pytest

from statement_extraction.dates import complete_date, resolve_year
from statement_extraction.errors import InvalidNumeric
from statement_extraction.tokens import scan_dates


@pytest.mark.parametrize(
    "text, year",
    [
        ("Statement Period: October 1, 2024 through October 31, 2024", 2024),
        ("Statement Period Jun 18 - Jul 15, 2025", 2025),
        ("Opening/Closing Aug 1 - Aug 31, 2023\nsomething 2030", 2023),
        ("Activity 10/01/24 - 10/31/2024", 2024),
        ("Activity from October 1 to October 31 2022", 2022),
        ("Printed 03/05/2021 for your records", 2021),
        ("Copyright 2019 notes 2021 and 1999", 2021),
    ],
)
def test_resolve_year_priority(text, year):
    assert resolve_year(text) == year


def test_resolve_year_statement_period_spanning_new_year_takes_closing_year():
    assert resolve_year("Statement Period: 12/15/2023 to 01/14/2024\n") == 2024
    assert resolve_year("Statement Period Dec 15, 2023 - Jan 14, 2024\nPage 1") == 2024


def test_resolve_year_statement_period_beats_other_years():
    text = "Printed 01/02/2019\nStatement period: 08/01/2024 to 08/31/2024"
    assert resolve_year(text) == 2024


def test_resolve_year_ignores_out_of_range_years():
    text = "Account opened 1998; statement period 2187 ref 2026"
    assert resolve_year(text) == 2026


def test_resolve_year_falls_back_to_today_and_warns(caplog):
    logger = logging.getLogger("tests.dates")
    with caplog.at_level(logging.WARNING, logger="tests.dates"):
        year = resolve_year("no year at all 10/27", logger=logger, today=dt.date(2031, 5, 1))
    assert year == 2031
    assert "could not resolve statement year" in caplog.text


def test_complete_date_uses_resolved_year_unless_token_has_one():
    partial, full = scan_dates("08/14 and 08/01/24")
    assert complete_date(partial, 2024) == dt.date(2024, 8, 14)
    assert complete_date(full, 2019) == dt.date(2024, 8, 1)


def test_complete_date_rejects_impossible_calendar_dates():
    (token,) = scan_dates("02/30")
    with pytest.raises(InvalidNumeric):
        complete_date(token, 2024)
