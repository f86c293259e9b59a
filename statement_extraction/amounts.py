"""Pick the transaction amount out of a block and give it a sign.

A block usually carries more than one currency-shaped token: the amount, a
running balance, sometimes an empty-column ``0.00`` placeholder, and
occasionally a balance printed twice. Disambiguation runs in three steps:

1. :func:`filter_amounts` drops tokens that are balances by repetition
   (the same value printed more than five times in the document, or twice
   within 50 characters).
2. :func:`infer_columns` maps the remaining tokens onto the institution's
   column layout and returns the amount, its column direction and the
   balance (if any).
3. :func:`resolve_sign` applies, in priority order: the labelled section,
   an explicit marker, the column direction, the running-balance delta and
   the institution default.

Zero values are placeholders and never become amounts.
"""

from __future__ import annotations

import re
from bisect import bisect_left
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum

from .errors import AmbiguousAmount, InvalidNumeric
from .tokens import AmountToken

_FREQUENCY_LIMIT = 5
_REPEAT_WINDOW = 50
_BALANCE_RATIO = 10
_OPENING_GAP = 20

_OPENING_BALANCE_RE = re.compile(r"\b(?:BEGINNING|OPENING|STARTING)\s+BALANCE\b", re.IGNORECASE)


class ColumnLayout(StrEnum):
    AMOUNT_BALANCE = "amount_balance"  # ... amount [balance]
    DEBIT_CREDIT_BALANCE = "debit_credit_balance"  # ... subtracted added [balance]


class Direction(StrEnum):
    OUT = "out"
    IN = "in"


@dataclass(frozen=True, slots=True)
class SignConvention:
    """How an institution writes direction: ``CR``/``DR`` markers and default."""

    credit: int = 1
    debit: int = -1
    default: int = 1


GENERIC_CONVENTION = SignConvention()
# Discover ledgers are debit-positive: purchases add to the owed balance.
DISCOVER_CONVENTION = SignConvention(credit=-1, debit=1, default=1)


@dataclass(frozen=True, slots=True)
class AmountProfile:
    layout: ColumnLayout
    convention: SignConvention = GENERIC_CONVENTION
    # A trailing balance column is always printed (two tokens = amount, balance).
    balance_column: bool = False
    # Frequency and repeat filters.
    filter_repeats: bool = False
    # Use the running balance delta when the column direction is unknown.
    balance_delta: bool = False
    label_signs: tuple[tuple[str, int], ...] = ()

    def label_sign(self, label: str | None) -> int | None:
        for name, sign in self.label_signs:
            if name == label:
                return sign
        return None


@dataclass(frozen=True, slots=True)
class Columns:
    amount: AmountToken
    direction: Direction | None = None
    balance: AmountToken | None = None
    # Leftmost token mapped onto a column; row text before it is the description.
    first: AmountToken | None = None

    @property
    def start(self) -> int:
        return (self.first or self.amount).start


@dataclass(frozen=True, slots=True)
class ResolvedAmount:
    token: AmountToken
    amount: Decimal
    # Offset where the amount columns begin.
    start: int
    balance: Decimal | None = None


# ---- Filters -------------------------------------------------------------------


def count_amounts(tokens: Iterable[AmountToken]) -> dict[str, int]:
    """Occurrences of each magnitude across the document."""

    return dict(Counter(t.key for t in tokens))


def filter_amounts(
    tokens: Sequence[AmountToken], counts: dict[str, int]
) -> tuple[AmountToken, ...]:
    """Drop balance repeats from a position-ordered token sequence.

    A value seen more than five times in the document is a balance, as is a
    value equal to the previously accepted token and starting within 50
    characters of it. Zero placeholders always pass and never count as the
    previously accepted token.
    """

    kept: list[AmountToken] = []
    previous: AmountToken | None = None
    for tok in tokens:
        if tok.is_zero:
            kept.append(tok)
            continue
        if counts.get(tok.key, 0) > _FREQUENCY_LIMIT:
            continue
        if (
            previous is not None
            and previous.key == tok.key
            and tok.start - previous.start < _REPEAT_WINDOW
        ):
            continue
        kept.append(tok)
        previous = tok
    return tuple(kept)


def opening_balance(
    text: str, tokens: Sequence[AmountToken], start: int = 0, end: int | None = None
) -> Decimal | None:
    """Value printed right after a ``Beginning Balance`` label in ``text[start:end]``.

    The summary row itself never becomes a block, but its balance is where
    the running-balance delta of the first transaction starts.
    """

    m = _OPENING_BALANCE_RE.search(text, start, len(text) if end is None else end)
    if m is None:
        return None
    i = bisect_left(tokens, m.end(), key=lambda t: t.start)
    if i == len(tokens) or tokens[i].start - m.end() > _OPENING_GAP:
        return None
    return tokens[i].value


# ---- Columns -------------------------------------------------------------------


def _balance_shaped(first: AmountToken, second: AmountToken, profile: AmountProfile) -> bool:
    if profile.balance_column:
        return True
    return not first.is_zero and second.value >= first.value * _BALANCE_RATIO


def infer_columns(tokens: Sequence[AmountToken], profile: AmountProfile) -> Columns:
    """Map a block's amount tokens onto the layout's columns.

    Raises :class:`AmbiguousAmount` when no non-zero token is left to serve
    as the amount.
    """

    if not tokens:
        raise AmbiguousAmount("no amount token in block")

    if profile.layout is ColumnLayout.AMOUNT_BALANCE:
        if len(tokens) >= 2:
            amount, balance = tokens[-2], tokens[-1]
        else:
            amount, balance = tokens[0], None
        if amount.is_zero:
            raise AmbiguousAmount(f"zero amount {amount.raw!r}")
        return Columns(amount=amount, balance=balance, first=amount)

    balance: AmountToken | None = None
    if len(tokens) >= 3:
        subtracted, added, balance = tokens[-3], tokens[-2], tokens[-1]
    elif len(tokens) == 2 and _balance_shaped(tokens[0], tokens[1], profile):
        only, balance = tokens
        if only.is_zero:
            raise AmbiguousAmount(f"zero amount {only.raw!r}")
        return Columns(amount=only, balance=balance, first=only)
    elif len(tokens) == 2:
        subtracted, added = tokens
    else:
        if tokens[0].is_zero:
            raise AmbiguousAmount(f"zero amount {tokens[0].raw!r}")
        return Columns(amount=tokens[0], first=tokens[0])

    # A zero placeholder in the subtracted column still opens the columns.
    if not subtracted.is_zero:
        return Columns(
            amount=subtracted, direction=Direction.OUT, balance=balance, first=subtracted
        )
    if not added.is_zero:
        return Columns(amount=added, direction=Direction.IN, balance=balance, first=subtracted)
    raise AmbiguousAmount("both subtracted and added columns are zero")


# ---- Sign ----------------------------------------------------------------------


def marker_sign(token: AmountToken, convention: SignConvention) -> int | None:
    if token.marker == "CR":
        return convention.credit
    if token.marker == "DR":
        return convention.debit
    if token.sign == "-":
        return -1
    if token.sign == "+":
        return 1
    return None


def resolve_sign(
    columns: Columns,
    profile: AmountProfile,
    *,
    label: str | None = None,
    previous_balance: Decimal | None = None,
    fallback: int | None = None,
) -> int:
    """Return ``+1`` or ``-1`` for the chosen amount.

    ``fallback`` is an institution-specific hint consulted just before the
    default (e.g. Discover treats payments as credits).
    """

    sign = profile.label_sign(label)
    if sign is not None:
        return sign

    sign = marker_sign(columns.amount, profile.convention)
    if sign is not None:
        return sign

    if columns.direction is Direction.OUT:
        return -1
    if columns.direction is Direction.IN:
        return 1

    if profile.balance_delta and columns.balance is not None and previous_balance is not None:
        delta = columns.balance.value - previous_balance
        if delta > 0:
            return 1
        if delta < 0:
            return -1

    if fallback is not None:
        return fallback
    return profile.convention.default


def disambiguate(
    tokens: Sequence[AmountToken],
    profile: AmountProfile,
    *,
    label: str | None = None,
    previous_balance: Decimal | None = None,
    fallback: int | None = None,
) -> ResolvedAmount:
    """Choose and sign the amount of one block."""

    columns = infer_columns(tokens, profile)
    value = columns.amount.value
    if not value.is_finite():
        raise InvalidNumeric(f"non-finite amount {columns.amount.raw!r}")
    sign = resolve_sign(
        columns,
        profile,
        label=label,
        previous_balance=previous_balance,
        fallback=fallback,
    )
    balance = columns.balance.value if columns.balance is not None else None
    return ResolvedAmount(
        token=columns.amount, amount=value * sign, start=columns.start, balance=balance
    )


__all__ = [
    "AmountProfile",
    "ColumnLayout",
    "Columns",
    "DISCOVER_CONVENTION",
    "Direction",
    "GENERIC_CONVENTION",
    "ResolvedAmount",
    "SignConvention",
    "count_amounts",
    "disambiguate",
    "filter_amounts",
    "infer_columns",
    "marker_sign",
    "opening_balance",
    "resolve_sign",
]
