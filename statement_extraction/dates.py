"""Statement-year resolution and completion of partial dates.

Statements print transaction dates as ``MM/DD`` or ``Mon D`` only, so each
parse resolves a single reporting year from the header text first. The
resolver never fails: when nothing in the text pins down a year it falls back
to the current calendar year and logs a warning.
"""

from __future__ import annotations

import datetime as dt
import logging
import re

from .errors import InvalidNumeric
from .models import MAX_YEAR, MIN_YEAR
from .tokens import DateToken

_YEAR = r"(20\d{2})"
_MONTH_DAY = r"(?:[A-Za-z]{3,9}\.?\s*\d{1,2}|\d{1,2}/\d{1,2}(?:/\d{2,4})?)"

# Ordered by priority; each pattern captures the year in group 1.
_YEAR_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "statement period",
        re.compile(r"statement\s+period\b[^\n]{0,80}\b" + _YEAR + r"\b", re.IGNORECASE),
    ),
    (
        "date range",
        re.compile(
            _MONTH_DAY + r"(?:,?\s*20\d{2})?\s*(?:-|–|—|to|through|thru)\s*"
            + _MONTH_DAY.replace(r"(?:/\d{2,4})?", "")
            + r"(?:,\s*|\s+|/)"
            + _YEAR
            + r"\b",
            re.IGNORECASE,
        ),
    ),
    (
        "from/to range",
        re.compile(r"\bfrom\b[^\n]{0,60}?\bto\b[^\n]{0,40}?\b" + _YEAR + r"\b", re.IGNORECASE),
    ),
    ("full date", re.compile(r"\b\d{1,2}/\d{1,2}/" + _YEAR + r"\b")),
)

_ANY_YEAR_RE = re.compile(r"(?<!\d)(\d{4})(?!\d)")


def _in_range(year: int) -> bool:
    return MIN_YEAR <= year <= MAX_YEAR


def resolve_year(
    text: str,
    *,
    logger: logging.Logger | None = None,
    today: dt.date | None = None,
) -> int:
    """Return the statement's reporting year, always within [2000, 2099].

    Tries, in order: the last year on a ``statement period`` line, the year that
    closes a date-range expression, a ``from ... to ... <year>`` phrase, the
    first ``MM/DD/YYYY`` date, and finally the latest 4-digit token in range
    anywhere in the text. Falls back to the current year.
    """

    for name, pattern in _YEAR_PATTERNS:
        for m in pattern.finditer(text or ""):
            year = int(m.group(1))
            if _in_range(year):
                if logger is not None:
                    logger.debug("statement year %d resolved from %s", year, name)
                return year

    years = [int(y) for y in _ANY_YEAR_RE.findall(text or "") if _in_range(int(y))]
    if years:
        latest = max(years)
        if logger is not None:
            logger.debug("statement year %d resolved from latest year token", latest)
        return latest

    fallback = (today or dt.date.today()).year
    if logger is not None:
        logger.warning("could not resolve statement year; using current year %d", fallback)
    return fallback


def complete_date(token: DateToken, year: int) -> dt.date:
    """Build a full date from a token, using ``year`` unless the token has one.

    Raises :class:`InvalidNumeric` for impossible calendar dates (``02/30``).
    """

    resolved = token.year if token.year is not None else year
    try:
        return dt.date(resolved, token.month, token.day)
    except ValueError as exc:
        raise InvalidNumeric(f"invalid date {token.raw!r} for year {resolved}") from exc


__all__ = ["complete_date", "resolve_year"]
