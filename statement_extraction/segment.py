"""Split a located section into one candidate block per transaction.

Every date token opens a block that runs to the next date token (or the end
of the section). Column titles, page markers and subtotal rows that bleed in
between rows are cut off at the first noise match after the date.
"""

from __future__ import annotations

import re
from bisect import bisect_left
from collections.abc import Sequence
from dataclasses import dataclass

from .models import Section
from .tokens import AmountToken, DateToken

_MIN_BLOCK_LENGTH = 5


def noise(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


# Shared by every date-anchored layout; parsers append their own.
COMMON_NOISE: tuple[re.Pattern[str], ...] = noise(
    r"\(?\bCONTINUED\b\)?",
    r"\bPAGE\s+\d+\s+OF\s+\d+\b",
    r"\bDATE\s+(?:POSTED\s+)?DESCRIPTION\b",
    r"\bTOTAL\s+(?:DEPOSITS|WITHDRAWALS|CHECKS|SUBTRACTED|ADDED|FEES|CREDITS|DEBITS)\b",
    r"\b(?:BEGINNING|ENDING|OPENING|CLOSING)\s+BALANCE\b",
)


@dataclass(frozen=True, slots=True)
class Block:
    """One candidate transaction: a date anchor plus the text that follows it."""

    date: DateToken
    end: int
    text: str  # source text from the date start to ``end``
    amounts: tuple[AmountToken, ...] = ()

    @property
    def start(self) -> int:
        return self.date.start

    @property
    def body(self) -> str:
        """Text after the date anchor."""

        return self.text[self.date.end - self.date.start :]


def _noise_cut(text: str, start: int, end: int, patterns: Sequence[re.Pattern[str]]) -> int:
    hits = [m.start() for p in patterns if (m := p.search(text, start, end))]
    return min(hits, default=end)


def _owned_amounts(
    amounts: Sequence[AmountToken], start: int, end: int
) -> tuple[AmountToken, ...]:
    owned: list[AmountToken] = []
    for i in range(bisect_left(amounts, start, key=lambda a: a.start), len(amounts)):
        if amounts[i].end > end:
            break
        owned.append(amounts[i])
    return tuple(owned)


def segment_by_dates(
    text: str,
    dates: Sequence[DateToken],
    amounts: Sequence[AmountToken],
    section: Section,
    noise_patterns: Sequence[re.Pattern[str]] = COMMON_NOISE,
) -> list[Block]:
    """Return date-anchored blocks in source order.

    Blocks shorter than five characters, or with nothing after the date, are
    dropped. Amount tokens (ordered by position) are assigned to the block whose
    body contains them.
    """

    anchors = [d for d in dates if section.start <= d.start and d.end <= section.end]
    blocks: list[Block] = []
    for i, date in enumerate(anchors):
        nxt = anchors[i + 1].start if i + 1 < len(anchors) else section.end
        end = _noise_cut(text, date.end, nxt, noise_patterns)
        raw = text[date.start : end].rstrip()
        end = date.start + len(raw)
        if len(raw) < _MIN_BLOCK_LENGTH or not raw[date.end - date.start :].strip():
            continue
        owned = _owned_amounts(amounts, date.end, end)
        blocks.append(Block(date=date, end=end, text=raw, amounts=owned))
    return blocks


__all__ = ["Block", "COMMON_NOISE", "noise", "segment_by_dates"]
