"""The ``StatementParser`` contract and the shared date-anchored pipeline.

``StatementParser.parse`` is a template method: it normalizes the text,
resolves the statement year, locates the transaction section and lexes it,
then hands a :class:`~statement_extraction.models.ParseContext` to the
subclass's :meth:`StatementParser.extract`. Every candidate the subclass
yields is validated into a :class:`~statement_extraction.models.Transaction`;
invalid candidates are dropped and logged, never raised.

Four of the five institutions print one date per row and share
:class:`DateAnchoredParser`, which only needs per-bank configuration
(section rule, amount profile, description profile, noise patterns) and a
few small hooks.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping, Sequence
from decimal import Decimal
from typing import Any, ClassVar

from pydantic import ValidationError

from ..amounts import (
    AmountProfile,
    ResolvedAmount,
    count_amounts,
    disambiguate,
    filter_amounts,
    opening_balance,
)
from ..categories import categorize
from ..dates import complete_date, resolve_year
from ..descriptions import DEFAULT_PROFILE, DescriptionProfile, normalize_description
from ..errors import ExtractionError
from ..logging_setup import resolve_logger
from ..models import Bank, Category, ParseContext, Transaction, TransactionType
from ..rules import Rule
from ..sections import SectionRule, locate_section
from ..segment import COMMON_NOISE, Block, segment_by_dates
from ..tokens import (
    AmountToken,
    DateStyle,
    amount_tokens,
    date_tokens,
    normalize_text,
    scan_amounts,
    scan_dates,
    text_between,
    tokenize,
)


class StatementParser(ABC):
    """Turn one statement blob from a single institution into transactions."""

    bank: ClassVar[Bank]
    section_rule: ClassVar[SectionRule]
    date_style: ClassVar[DateStyle] = DateStyle.NUMERIC

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = resolve_logger(logger, f"parsers.{self.bank.value}")

    def parse(self, text: str) -> list[Transaction]:
        normalized = normalize_text(text)
        if not normalized:
            self.logger.debug("%s: empty statement text", self.bank.value)
            return []

        # The raw text keeps line breaks, which the year phrases rely on.
        year = resolve_year(text, logger=self.logger)
        try:
            context = self.prepare(normalized, year)
        except ExtractionError as exc:
            self.logger.warning("%s: %s; no transactions extracted", self.bank.value, exc)
            return []

        transactions: list[Transaction] = []
        for fields in self.extract(context):
            try:
                transactions.append(Transaction(**fields))
            except ValidationError as exc:
                self.logger.debug(
                    "%s: dropped invalid candidate %r: %s",
                    self.bank.value,
                    fields.get("description"),
                    exc.errors(include_url=False),
                )
        self.logger.debug(
            "%s: extracted %d transactions (year %d)", self.bank.value, len(transactions), year
        )
        return transactions

    def prepare(self, text: str, year: int) -> ParseContext:
        """Locate and lex the transaction section of normalized ``text``."""

        section = locate_section(text, self.section_rule, style=self.date_style, logger=self.logger)
        tokens = tokenize(text, self.date_style, section.start, section.end)
        counts = count_amounts(scan_amounts(text, exclude=scan_dates(text, self.date_style)))
        self.logger.debug(
            "%s: %d dates and %d amounts in section",
            self.bank.value,
            len(date_tokens(tokens)),
            len(amount_tokens(tokens)),
        )
        return ParseContext(
            bank=self.bank,
            text=text,
            year=year,
            section=section,
            tokens=tokens,
            amount_counts=counts,
        )

    @abstractmethod
    def extract(self, context: ParseContext) -> Iterator[Mapping[str, Any]]:
        """Yield candidate transaction fields in source order.

        Implementations drop (and log) candidates that fail with an
        :class:`~statement_extraction.errors.ExtractionError` and continue.
        """


class DateAnchoredParser(StatementParser):
    """Shared pipeline for layouts with exactly one date per row."""

    amount_profile: ClassVar[AmountProfile]
    description_profile: ClassVar[DescriptionProfile] = DEFAULT_PROFILE
    noise_patterns: ClassVar[tuple[re.Pattern[str], ...]] = COMMON_NOISE
    hint_rules: ClassVar[tuple[Rule[Category], ...]] = ()
    default_category: ClassVar[Category] = Category.OTHER

    def extract(self, context: ParseContext) -> Iterator[Mapping[str, Any]]:
        section = context.section
        every_amount = amount_tokens(context.tokens)
        amounts: Sequence[AmountToken] = every_amount
        if self.amount_profile.filter_repeats:
            amounts = filter_amounts(amounts, context.amount_counts)
        blocks = segment_by_dates(
            context.text, date_tokens(context.tokens), amounts, section, self.noise_patterns
        )

        previous_balance: Decimal | None = None
        if self.amount_profile.balance_delta:
            previous_balance = opening_balance(
                context.text, every_amount, section.start, section.end
            )
        for block in blocks:
            try:
                resolved = disambiguate(
                    self.block_amounts(block),
                    self.amount_profile,
                    label=section.label_at(block.start),
                    previous_balance=previous_balance,
                )
                if resolved.balance is not None:
                    previous_balance = resolved.balance
                fields = self.build(block, resolved, context)
            except ExtractionError as exc:
                self.logger.debug(
                    "%s: dropped block at %d (%s): %s",
                    self.bank.value,
                    block.start,
                    type(exc).__name__,
                    exc,
                )
                continue
            if fields is not None:
                yield fields

    def block_amounts(self, block: Block) -> Sequence[AmountToken]:
        return block.amounts

    def split_hint(self, description: str) -> tuple[str, str | None]:
        """Separate a bank category token from the description."""

        return description, None

    def transaction_type(self, amount: Decimal) -> TransactionType | None:
        return None

    def build(
        self, block: Block, resolved: ResolvedAmount, context: ParseContext
    ) -> Mapping[str, Any] | None:
        raw = text_between(context.tokens, block.date.end, resolved.start)
        description = normalize_description(raw, self.description_profile)
        if description is None:
            self.logger.debug("%s: dropped summary or empty row %r", self.bank.value, raw.strip())
            return None
        description, hint = self.split_hint(description)
        return {
            "date": complete_date(block.date, context.year),
            "description": description,
            "amount": resolved.amount,
            "category": categorize(
                description,
                hint,
                hint_rules=self.hint_rules,
                default=self.default_category,
            ),
            "type": self.transaction_type(resolved.amount),
        }


__all__ = ["DateAnchoredParser", "StatementParser"]
