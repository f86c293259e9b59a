"""Primitive matchers: the lexer stage of the extraction pipeline.

Statement text is flattened once (:func:`normalize_text`) and then lexed into
an immutable, position-ordered tuple of typed tokens:

- :class:`DateToken`: ``MM/DD``, ``MM/DD/YY``, ``MM/DD/YYYY`` or ``Mon D``
- :class:`AmountToken`: currency-shaped numbers with exactly two decimals,
  optional leading ``+``/``-``, ``$`` and trailing ``CR``/``DR``
- :class:`TextSpan`: everything in between

Amount tokens never overlap a date token. Segmenters, the amount
disambiguator and the description builder (:func:`text_between`) consume
these tokens; none of them rescan raw text for numbers on their own.
"""

from __future__ import annotations

import re
from bisect import bisect_left
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from typing import TypeAlias

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

MONTHS: dict[str, int] = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

# MM/DD with an optional /YY or /YYYY; never part of a longer slash/number run.
NUMERIC_DATE_PATTERN = r"(?<![\d/.])(?P<month>\d{1,2})/(?P<day>\d{1,2})(?:/(?P<year>\d{4}|\d{2}))?(?![\d/])"

# "Aug 1", "Sept 14", "Dec. 3" (month names only, no arbitrary three letters).
MONTH_NAME_DATE_PATTERN = (
    r"\b(?P<mon>jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?"
    r"|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?"
    r"\s+(?P<mday>\d{1,2})\b(?!\s*[,/]?\s*\d{4}\b)(?![.,]\d)"
)

AMOUNT_PATTERN = (
    r"(?<![\w.,/$])"
    r"(?P<sign>[+\-−]\s?)?"
    r"(?P<dollar>\$\s?)?"
    r"(?P<num>\d{1,3}(?:,\d{3})+|\d+)\.(?P<cents>\d{2})"
    r"(?![\d,]|\.\d)"
    r"(?:\s?(?P<marker>CR|DR)\b)?"
)

_NUMERIC_DATE_RE = re.compile(NUMERIC_DATE_PATTERN)
_MONTH_NAME_DATE_RE = re.compile(MONTH_NAME_DATE_PATTERN, re.IGNORECASE)
_AMOUNT_RE = re.compile(AMOUNT_PATTERN)


class DateStyle(StrEnum):
    NUMERIC = "numeric"  # 10/27, 10/27/24, 10/27/2024
    MONTH_NAME = "month_name"  # Aug 1


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DateToken:
    start: int
    end: int
    raw: str
    month: int
    day: int
    # Four-digit year when the source carried one (2-digit years are expanded).
    year: int | None = None


@dataclass(frozen=True, slots=True)
class AmountToken:
    start: int
    end: int
    raw: str
    value: Decimal  # unsigned magnitude
    sign: str | None = None  # "+" / "-" when written explicitly
    marker: str | None = None  # "CR" / "DR" when written explicitly
    has_dollar: bool = False

    @property
    def key(self) -> str:
        """Magnitude key used for frequency and repeat comparisons."""

        return f"{self.value:.2f}"

    @property
    def is_zero(self) -> bool:
        return self.value == 0


@dataclass(frozen=True, slots=True)
class TextSpan:
    start: int
    end: int
    text: str


Token: TypeAlias = DateToken | AmountToken | TextSpan


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def normalize_text(text: str) -> str:
    """Flatten a statement blob into a single-spaced stream.

    Non-breaking spaces, tabs and every line-break flavor become plain
    spaces; runs of whitespace collapse to one. Page structure is not
    preserved: parsers work on the continuous text.
    """

    if not text:
        return ""
    flat = text.replace("\u00a0", " ")
    return re.sub(r"\s+", " ", flat).strip()


def expand_year(raw: str) -> int | None:
    """Expand a 2- or 4-digit year string; 2-digit ``00..30`` maps to 20xx."""

    if not raw:
        return None
    value = int(raw)
    if len(raw) == 2:
        return 2000 + value if value <= 30 else 1900 + value
    return value


# ---------------------------------------------------------------------------
# Scanners
# ---------------------------------------------------------------------------


def scan_dates(
    text: str, style: DateStyle = DateStyle.NUMERIC, start: int = 0, end: int | None = None
) -> list[DateToken]:
    """Return date tokens in ``text[start:end]`` ordered by position.

    Month/day values outside 1..12 / 1..31 are not dates (fractions, ratios)
    and are skipped here rather than failing later.
    """

    stop = len(text) if end is None else end
    out: list[DateToken] = []
    if style is DateStyle.NUMERIC:
        for m in _NUMERIC_DATE_RE.finditer(text, start, stop):
            month, day = int(m.group("month")), int(m.group("day"))
            if not (1 <= month <= 12 and 1 <= day <= 31):
                continue
            year = expand_year(m.group("year") or "")
            out.append(DateToken(m.start(), m.end(), m.group(0), month, day, year))
    else:
        for m in _MONTH_NAME_DATE_RE.finditer(text, start, stop):
            month = MONTHS[m.group("mon").lower()[:3]]
            day = int(m.group("mday"))
            if not 1 <= day <= 31:
                continue
            out.append(DateToken(m.start(), m.end(), m.group(0), month, day))
    return out


def scan_amounts(
    text: str,
    start: int = 0,
    end: int | None = None,
    *,
    exclude: list[DateToken] | None = None,
) -> list[AmountToken]:
    """Return currency-shaped amount tokens ordered by position.

    Tokens overlapping any of ``exclude`` (already-consumed dates) are dropped.
    """

    stop = len(text) if end is None else end
    dates = sorted(exclude or (), key=lambda d: d.start)
    starts = [d.start for d in dates]
    out: list[AmountToken] = []
    for m in _AMOUNT_RE.finditer(text, start, stop):
        # Dates never overlap each other, so only the last one opening before
        # the match can overlap it.
        i = bisect_left(starts, m.end()) - 1
        if i >= 0 and dates[i].end > m.start():
            continue
        token = _amount_from_match(m)
        if token is not None:
            out.append(token)
    return out


def _amount_from_match(m: re.Match[str]) -> AmountToken | None:
    try:
        value = Decimal(f"{m.group('num').replace(',', '')}.{m.group('cents')}")
    except InvalidOperation:
        return None
    sign_raw = (m.group("sign") or "").strip()
    sign = "-" if sign_raw in {"-", "−"} else ("+" if sign_raw == "+" else None)
    marker = m.group("marker")
    return AmountToken(
        start=m.start(),
        end=m.end(),
        raw=m.group(0),
        value=value,
        sign=sign,
        marker=marker.upper() if marker else None,
        has_dollar=m.group("dollar") is not None,
    )


def parse_amount_token(raw: str) -> AmountToken | None:
    """Lex a single amount string (e.g. ``"- $1,000.00"``, ``"55.00 CR"``)."""

    m = _AMOUNT_RE.fullmatch(raw.strip())
    return _amount_from_match(m) if m else None


def tokenize(
    text: str,
    style: DateStyle = DateStyle.NUMERIC,
    start: int = 0,
    end: int | None = None,
) -> tuple[DateToken | AmountToken | TextSpan, ...]:
    """Lex ``text[start:end]`` into dates, amounts and the text between them."""

    stop = len(text) if end is None else end
    dates = scan_dates(text, style, start, stop)
    amounts = scan_amounts(text, start, stop, exclude=dates)
    anchors: list[DateToken | AmountToken] = sorted([*dates, *amounts], key=lambda t: t.start)
    return tuple(_with_text_spans(text, anchors, start, stop))


def _with_text_spans(
    text: str, anchors: list[DateToken | AmountToken], start: int, stop: int
) -> Iterator[DateToken | AmountToken | TextSpan]:
    cursor = start
    for tok in anchors:
        if tok.start > cursor and text[cursor : tok.start].strip():
            yield TextSpan(cursor, tok.start, text[cursor : tok.start])
        yield tok
        cursor = tok.end
    if stop > cursor and text[cursor:stop].strip():
        yield TextSpan(cursor, stop, text[cursor:stop])


def date_tokens(tokens: tuple[Token, ...]) -> list[DateToken]:
    return [t for t in tokens if isinstance(t, DateToken)]


def amount_tokens(tokens: tuple[Token, ...]) -> list[AmountToken]:
    return [t for t in tokens if isinstance(t, AmountToken)]


def text_between(tokens: Sequence[Token], start: int, end: int) -> str:
    """Rejoin the tokens lying wholly inside ``[start, end)`` into source text.

    Whitespace-only gaps are not tokens, so neighbours are joined by a space.
    """

    parts: list[str] = []
    for i in range(bisect_left(tokens, start, key=lambda t: t.start), len(tokens)):
        tok = tokens[i]
        if tok.end > end:
            break
        parts.append(tok.text if isinstance(tok, TextSpan) else tok.raw)
    return " ".join(parts)


__all__ = [
    "AMOUNT_PATTERN",
    "AmountToken",
    "DateStyle",
    "DateToken",
    "MONTHS",
    "MONTH_NAME_DATE_PATTERN",
    "NUMERIC_DATE_PATTERN",
    "TextSpan",
    "Token",
    "amount_tokens",
    "date_tokens",
    "expand_year",
    "normalize_text",
    "parse_amount_token",
    "scan_amounts",
    "scan_dates",
    "text_between",
    "tokenize",
]
