"""Discover card statements.

Rows are matched in a single pass by one composite pattern::

    MM/DD [MM/DD] description [merchant category] amount [CR|DR]

Discover ledgers are debit-positive: purchases are positive, while ``CR``
rows and payments are negative. The optional merchant category is the
known category name ending the description and serves as the category hint;
rows with neither a hint nor a description match are ``Uncategorized``.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from typing import Any

from ..amounts import DISCOVER_CONVENTION, AmountProfile, ColumnLayout, disambiguate
from ..categories import DISCOVER_HINT_RULES, categorize
from ..dates import complete_date
from ..descriptions import DISCOVER_FX_NOISE, DescriptionProfile, normalize_description
from ..errors import ExtractionError, InvalidNumeric
from ..models import Bank, Category, ParseContext
from ..sections import DISCOVER_SECTION
from ..tokens import AMOUNT_PATTERN, NUMERIC_DATE_PATTERN, DateStyle, parse_amount_token, scan_dates
from .base import StatementParser

_BARE_DATE = r"(?<![\d/.])\d{1,2}/\d{1,2}(?!\d)"

# Transaction date, optional post date, description, amount.
_ROW_RE = re.compile(
    rf"(?P<date>{NUMERIC_DATE_PATTERN})"
    rf"(?:\s+{_BARE_DATE})?"
    rf"\s+(?P<body>(?:(?!{_BARE_DATE}).)+?)\s+"
    rf"(?P<amount>{AMOUNT_PATTERN})"
)

# Longest names first so "travel/entertainment" wins over "travel".
_MERCHANT_CATEGORIES = (
    "travel/entertainment",
    "travel & entertainment",
    "online shopping",
    "restaurants",
    "restaurant",
    "merchandise",
    "entertainment",
    "supermarkets",
    "groceries",
    "gasoline",
    "services",
    "shopping",
    "grocery",
    "service",
    "travel",
    "retail",
    "gas",
)
_CATEGORY_RE = re.compile(
    r"(?:^|\s)(?P<hint>" + "|".join(re.escape(c) for c in _MERCHANT_CATEGORIES) + r")$",
    re.IGNORECASE,
)
_PAYMENT_RE = re.compile(r"payment", re.IGNORECASE)


def split_merchant_category(body: str) -> tuple[str, str | None]:
    """Split a trailing Discover merchant category off ``body``."""

    body = body.strip()
    m = _CATEGORY_RE.search(body)
    if m is None:
        return body, None
    return body[: m.start()].strip(), m.group("hint")


class DiscoverParser(StatementParser):
    bank = Bank.DISCOVER
    section_rule = DISCOVER_SECTION
    amount_profile = AmountProfile(layout=ColumnLayout.AMOUNT_BALANCE, convention=DISCOVER_CONVENTION)
    description_profile = DescriptionProfile(fx_noise=DISCOVER_FX_NOISE)

    def extract(self, context: ParseContext) -> Iterator[Mapping[str, Any]]:
        matches = list(_ROW_RE.finditer(context.text, context.section.start, context.section.end))
        self.logger.debug("%s: %d row pattern matches", self.bank.value, len(matches))
        for m in matches:
            try:
                fields = self._row(m, context)
            except ExtractionError as exc:
                self.logger.debug(
                    "%s: dropped row at %d (%s): %s",
                    self.bank.value,
                    m.start(),
                    type(exc).__name__,
                    exc,
                )
                continue
            if fields is not None:
                yield fields

    def _row(self, m: re.Match[str], context: ParseContext) -> Mapping[str, Any] | None:
        dates = scan_dates(context.text, DateStyle.NUMERIC, m.start("date"), m.end("date"))
        if not dates:
            raise InvalidNumeric(f"invalid date {m.group('date')!r}")
        token = parse_amount_token(m.group("amount"))
        if token is None:
            raise InvalidNumeric(f"invalid amount {m.group('amount')!r}")

        body, hint = split_merchant_category(m.group("body"))
        description = normalize_description(body, self.description_profile)
        if description is None:
            self.logger.debug("%s: dropped summary or empty row %r", self.bank.value, body)
            return None

        resolved = disambiguate(
            [token],
            self.amount_profile,
            fallback=-1 if _PAYMENT_RE.search(description) else None,
        )
        return {
            "date": complete_date(dates[0], context.year),
            "description": description,
            "amount": resolved.amount,
            "category": categorize(
                description,
                hint,
                hint_rules=DISCOVER_HINT_RULES,
                default=Category.UNCATEGORIZED,
            ),
        }


__all__ = ["DiscoverParser", "split_merchant_category"]
