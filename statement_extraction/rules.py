"""Ordered ``(predicate, result)`` rule tables and the matcher that walks them.

Keyword heuristics (statement detection, category inference) are declared as
data: a tuple of :class:`Rule` evaluated top to bottom, first match wins.
Order is significant and ties are never broken by specificity.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

ResultT = TypeVar("ResultT")

Predicate = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class Rule(Generic[ResultT]):
    """A single rule: when ``predicate(text)`` holds, the answer is ``result``."""

    predicate: Predicate
    result: ResultT
    name: str = ""


def first_match(
    rules: Iterable[Rule[ResultT]], text: str, default: ResultT | None = None
) -> ResultT | None:
    """Return the result of the first rule whose predicate accepts ``text``."""

    for rule in rules:
        if rule.predicate(text):
            return rule.result
    return default


# ---- Predicate builders ------------------------------------------------------


def contains_all(*needles: str) -> Predicate:
    """Case-insensitive conjunction of substring checks."""

    wanted = tuple(n.upper() for n in needles)

    def _pred(text: str) -> bool:
        upper = text.upper()
        return all(n in upper for n in wanted)

    return _pred


def contains_any(*needles: str) -> Predicate:
    """Case-insensitive disjunction of substring checks."""

    wanted = tuple(n.upper() for n in needles)

    def _pred(text: str) -> bool:
        upper = text.upper()
        return any(n in upper for n in wanted)

    return _pred


def both(first: Predicate, second: Predicate) -> Predicate:
    return lambda text: first(text) and second(text)


def keywords(words: Sequence[str]) -> Predicate:
    """Match any of ``words`` as whole words/phrases, case-insensitively.

    Phrases may contain spaces or punctuation; boundaries are only asserted
    where the keyword itself starts/ends with a word character so that tokens
    such as ``mta*`` still match inside ``mta*nyct``.
    """

    parts = []
    for w in words:
        esc = re.escape(w)
        left = r"\b" if re.match(r"\w", w) else ""
        right = r"\b" if re.search(r"\w$", w) else ""
        parts.append(f"{left}{esc}{right}")
    pattern = re.compile("|".join(parts), re.IGNORECASE)
    return lambda text: pattern.search(text) is not None


__all__ = [
    "Predicate",
    "Rule",
    "both",
    "contains_all",
    "contains_any",
    "first_match",
    "keywords",
]
