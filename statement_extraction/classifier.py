"""Decide which institution produced a statement blob.

Each institution is described by one predicate over the upper-cased text.
Rules are checked strictest first: Citi's conjunctive rule must run before
the looser substring rules because its statements overlap lexically with the
others (e.g. they can mention "deposits and other credits").
"""

from __future__ import annotations

from .models import Bank
from .rules import Rule, both, contains_all, contains_any, first_match

STATEMENT_RULES: tuple[Rule[Bank], ...] = (
    Rule(
        contains_all("CITIBANK", "CHECKING ACTIVITY", "REGULAR CHECKING"),
        Bank.CITI,
        name="citi",
    ),
    Rule(
        both(
            contains_all("DISCOVER"),
            contains_any("PURCHASES", "PAYMENTS AND CREDITS", "PAYMENTS"),
        ),
        Bank.DISCOVER,
        name="discover",
    ),
    Rule(contains_any("CAPITAL ONE"), Bank.CAPITAL_ONE, name="capital_one"),
    Rule(
        contains_any(
            "BANK OF AMERICA",
            "YOUR CHECKING ACCOUNT",
            "DEPOSITS AND OTHER CREDITS",
            "WITHDRAWALS AND OTHER DEBITS",
        ),
        Bank.BANK_OF_AMERICA,
        name="bank_of_america",
    ),
    Rule(contains_any("CHASE"), Bank.CHASE, name="chase"),
)


def classify_statement(text: str) -> Bank | None:
    """Return the institution whose rule first matches ``text``, else ``None``."""

    if not text or not isinstance(text, str):
        return None
    return first_match(STATEMENT_RULES, text)


__all__ = ["STATEMENT_RULES", "classify_statement"]
