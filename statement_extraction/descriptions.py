"""Description cleanup and the summary-row guard.

The raw description is the text between the date anchor and the chosen
amount token. Before anything is stripped, the raw text is checked against
a closed set of summary markers (balances, totals, fee summaries); a match
discards the whole candidate. What survives is stripped of embedded dates,
card numbers, FX noise and column labels.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

_MIN_DESCRIPTION_LENGTH = 3

SUMMARY_MARKERS: tuple[str, ...] = (
    "OPENING BALANCE",
    "CLOSING BALANCE",
    "BEGINNING BALANCE",
    "ENDING BALANCE",
    "PREVIOUS BALANCE",
    "NEW BALANCE",
    "TOTAL SUBTRACTED",
    "TOTAL ADDED",
    "TOTAL DEPOSITS",
    "TOTAL WITHDRAWALS",
    "SUBTOTAL",
    "MONTHLY SERVICE FEE",
    "RELATIONSHIP SUMMARY",
    "CLIENT SERVICES",
    "RECONCILIATION",
    "OVERDRAFT",
    "RETURNED ITEM",
)
SUMMARY_PREFIXES: tuple[str, ...] = ("TOTAL ", "BALANCE ")
SUMMARY_EXACT: frozenset[str] = frozenset({"TOTAL", "BALANCE", "AMOUNT", "DATE", "DESCRIPTION"})

_DATE_RE = re.compile(r"(?<![\d/])\d{1,2}/\d{1,2}(?:/\d{4}|/\d{2})?(?![\d/])")
_CARD_RE = re.compile(r"\bCARD\s+\d{4}\b", re.IGNORECASE)
_PAGE_RE = re.compile(r"\bPAGE\s+\d+(?:\s+OF\s+\d+)?\b", re.IGNORECASE)
_LABELS_RE = re.compile(
    r"\b(?:TOTAL|SUBTOTAL|BALANCE|AMOUNT|CONTINUED|PAGE|DATE|DESCRIPTION)\b", re.IGNORECASE
)

FX_NOISE = re.compile(
    r"\b(?:POUND\s+STERL(?:ING)?|EURO|EXCHG\s+RTE|FOREIGN\s+EXCH\s+RT\s+ADJ\s+FEE)\b",
    re.IGNORECASE,
)
DISCOVER_FX_NOISE = re.compile(r"@|\b(?:EUR|GBP|USD|EXCHANGE|EXCH|RATE|FOREIGN)\b", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class DescriptionProfile:
    """Per-institution cleanup knobs."""

    extra_labels: tuple[re.Pattern[str], ...] = ()
    fx_noise: re.Pattern[str] | None = FX_NOISE
    lowercase: bool = False


DEFAULT_PROFILE = DescriptionProfile()


def labels(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(rf"\b(?:{p})\b", re.IGNORECASE) for p in patterns)


def _collapse(text: str) -> str:
    return " ".join(text.split())


def is_summary_row(text: str) -> bool:
    """True when ``text`` reads as a balance, total or header row."""

    upper = _collapse(text).upper()
    if not upper:
        return False
    if upper in SUMMARY_EXACT:
        return True
    if upper.startswith(SUMMARY_PREFIXES):
        return True
    return any(marker in upper for marker in SUMMARY_MARKERS)


def normalize_description(
    raw: str, profile: DescriptionProfile = DEFAULT_PROFILE
) -> str | None:
    """Return the cleaned description, or ``None`` when the row must be dropped."""

    if is_summary_row(raw):
        return None

    text = _DATE_RE.sub(" ", raw)
    text = _CARD_RE.sub(" ", text)
    if profile.fx_noise is not None:
        text = profile.fx_noise.sub(" ", text)
    for pattern in profile.extra_labels:
        text = pattern.sub(" ", text)
    text = _PAGE_RE.sub(" ", text)
    text = _LABELS_RE.sub(" ", text)
    text = _collapse(text)

    if len(text) < _MIN_DESCRIPTION_LENGTH or is_summary_row(text):
        return None
    return text.lower() if profile.lowercase else text


# ---- Merchant names ----------------------------------------------------------------

MERCHANT_ALIASES: tuple[tuple[str, str], ...] = (
    ("STARBUCKS", "Starbucks"),
    ("UBER *TRIP", "Uber"),
    ("UBER", "Uber"),
    ("AMZN", "Amazon"),
    ("AMAZON MKTPLACE", "Amazon"),
    ("MCDONALDS", "McDonald's"),
)

_STORE_NUMBER_RE = re.compile(r"#\d+")
_TRAILING_NUMBER_RE = re.compile(r"\s+\d+$")


def normalize_merchant(name: str, aliases: Sequence[tuple[str, str]] = MERCHANT_ALIASES) -> str:
    """Map a raw merchant string to a display name.

    Known chains collapse to their brand; anything else loses store numbers
    (``#4321``) and a trailing standalone number.
    """

    if not name:
        return name
    upper = name.upper().strip()
    for needle, clean in aliases:
        if needle in upper:
            return clean
    cleaned = _STORE_NUMBER_RE.sub("", name.strip())
    cleaned = _TRAILING_NUMBER_RE.sub("", cleaned)
    return _collapse(cleaned)


__all__ = [
    "DEFAULT_PROFILE",
    "DISCOVER_FX_NOISE",
    "DescriptionProfile",
    "FX_NOISE",
    "MERCHANT_ALIASES",
    "SUMMARY_MARKERS",
    "is_summary_row",
    "labels",
    "normalize_description",
    "normalize_merchant",
]
