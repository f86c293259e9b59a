"""Locate the transaction-bearing region of a statement.

A :class:`SectionRule` declares, per institution, where the transaction table
starts (header phrases), where it ends (footer phrases) and which named
sub-ranges it contains. :func:`locate_section` applies a rule to normalized
text and returns a :class:`~statement_extraction.models.Section`.

Footers are not trusted blindly: when the earliest footer sits before the
last date found in the region, the footer phrase is treated as part of a
transaction row and the cut is pushed past the last date plus a buffer.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .errors import StructuralMiss
from .models import Section
from .tokens import DateStyle, scan_dates

_FOOTER_BUFFER = 200


def _compile(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


@dataclass(frozen=True, slots=True)
class SectionRule:
    start_patterns: tuple[re.Pattern[str], ...] = ()
    footer_patterns: tuple[re.Pattern[str], ...] = ()
    # Searched after the start header; the section begins after it.
    anchor: re.Pattern[str] | None = None
    required: bool = False
    # Start at the earliest of all start patterns rather than the first listed.
    earliest_start: bool = False
    # Named sub-section headers; each range runs to the next header.
    labels: tuple[tuple[str, re.Pattern[str]], ...] = ()


CHASE_SECTION = SectionRule(
    start_patterns=_compile(r"TRANSACTION DETAIL", r"ACCOUNT ACTIVITY"),
    footer_patterns=_compile(
        r"IN CASE OF ERRORS",
        r"TOTALS YEAR-TO-DATE",
        r"INTEREST CHARGES",
        r"DAILY ENDING BALANCE",
    ),
)

CITI_SECTION = SectionRule(
    start_patterns=_compile(r"CHECKING ACTIVITY"),
    anchor=re.compile(r"REGULAR CHECKING", re.IGNORECASE),
    footer_patterns=_compile(
        r"TOTAL SUBTRACTED/ADDED",
        r"THANKYOU POINTS",
        r"OVERDRAFT AND RETURNED ITEM FEES",
    ),
    required=True,
)

BANK_OF_AMERICA_SECTION = SectionRule(
    start_patterns=_compile(r"DEPOSITS AND OTHER CREDITS", r"WITHDRAWALS AND OTHER DEBITS"),
    footer_patterns=_compile(
        r"SERVICE FEES",
        r"IMPORTANT INFORMATION",
        r"ACCOUNT SECURITY",
        r"DAILY LEDGER BALANCES",
        r"PAGE \d+ OF \d+",
        r"PAGE \d+",
    ),
    required=True,
    earliest_start=True,
    labels=(
        ("deposits", re.compile(r"DEPOSITS AND OTHER CREDITS", re.IGNORECASE)),
        ("withdrawals", re.compile(r"WITHDRAWALS AND OTHER DEBITS", re.IGNORECASE)),
    ),
)

CAPITAL_ONE_SECTION = SectionRule(
    start_patterns=_compile(
        r"DATE\s+DESCRIPTION\s+CATEGORY\s+AMOUNT\s+BALANCE",
        r"DATE\s+DESCRIPTION\s+CATEGORY\s+AMOUNT",
        r"DATE.*?DESCRIPTION.*?CATEGORY.*?AMOUNT",
    ),
    footer_patterns=_compile(r"FEE\s+SUMMARY", r"PAGE\s+\d+\s+OF", r"PAGE\s+\d+$"),
    required=True,
)

DISCOVER_SECTION = SectionRule(
    start_patterns=_compile(r"\bTRANSACTIONS\b"),
    footer_patterns=_compile(
        r"FEES AND INTEREST CHARGED",
        r"INTEREST CHARGED",
        r"TOTAL FEES",
        r"INTEREST CHARGE CALCULATION",
    ),
)


def _find_start(text: str, rule: SectionRule) -> int | None:
    if rule.earliest_start:
        ends = [m.end() for p in rule.start_patterns if (m := p.search(text))]
        return min(ends) if ends else None
    for pattern in rule.start_patterns:
        m = pattern.search(text)
        if m:
            return m.end()
    return None


def _find_footer(text: str, rule: SectionRule, start: int) -> int | None:
    hits = [m.start() for p in rule.footer_patterns if (m := p.search(text, start))]
    return min(hits) if hits else None


def _find_labels(text: str, rule: SectionRule, end: int) -> tuple[tuple[str, int, int], ...]:
    headers = sorted(
        (m.start(), name) for name, pattern in rule.labels for m in pattern.finditer(text, 0, end)
    )
    out: list[tuple[str, int, int]] = []
    for i, (pos, name) in enumerate(headers):
        hi = headers[i + 1][0] if i + 1 < len(headers) else end
        out.append((name, pos, hi))
    return tuple(out)


def locate_section(
    text: str,
    rule: SectionRule,
    *,
    style: DateStyle = DateStyle.NUMERIC,
    logger: logging.Logger | None = None,
) -> Section:
    """Return the ``[start, end)`` region of ``text`` holding transactions.

    Raises :class:`StructuralMiss` when a required header (or the secondary
    anchor) is missing, or when the resolved region is empty.
    """

    start = _find_start(text, rule)
    if start is None:
        if rule.required:
            raise StructuralMiss("transaction section header not found")
        start = 0

    if rule.anchor is not None:
        m = rule.anchor.search(text, start)
        if m is None:
            raise StructuralMiss(f"secondary anchor {rule.anchor.pattern!r} not found")
        start = m.end()

    end = len(text)
    footer = _find_footer(text, rule, start)
    if footer is not None:
        end = footer
        dates = scan_dates(text, style, start)
        last_date_end = max((d.end for d in dates), default=-1)
        if footer < last_date_end:
            end = min(len(text), max(footer, last_date_end + _FOOTER_BUFFER))
            if logger is not None:
                logger.debug(
                    "footer at %d precedes last date ending at %d; section end pushed to %d",
                    footer,
                    last_date_end,
                    end,
                )

    if end <= start:
        raise StructuralMiss(f"empty transaction section [{start}, {end})")

    labels = _find_labels(text, rule, end) if rule.labels else ()
    if logger is not None:
        logger.debug("section located at [%d, %d) with %d labelled ranges", start, end, len(labels))
    return Section(start=start, end=end, labels=labels)


__all__ = [
    "BANK_OF_AMERICA_SECTION",
    "CAPITAL_ONE_SECTION",
    "CHASE_SECTION",
    "CITI_SECTION",
    "DISCOVER_SECTION",
    "SectionRule",
    "locate_section",
]
