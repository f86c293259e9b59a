"""Data models for ``statement_extraction``.

``Transaction`` is the only entity handed back to callers. It is a frozen,
validated pydantic model so that every instance that exists satisfies the
output invariants (resolved date in 2000..2099, non-empty description,
finite cents-accurate amount). Parsers build candidates and let validation
reject the ones that do not hold up.

``ParseContext`` and ``Section`` are per-call internals and never leave a
parser invocation.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .tokens import Token

_CENTS = Decimal("0.01")

MIN_YEAR = 2000
MAX_YEAR = 2099


class Category(StrEnum):
    INCOME = "Income"
    FOOD = "Food"
    BILLS = "Bills"
    TRAVEL = "Travel"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    HEALTH = "Health"
    MISCELLANEOUS = "Miscellaneous"
    OTHER = "Other"
    UNCATEGORIZED = "Uncategorized"


class Bank(StrEnum):
    CHASE = "chase"
    CITI = "citi"
    BANK_OF_AMERICA = "bank_of_america"
    CAPITAL_ONE = "capital_one"
    DISCOVER = "discover"


class TransactionType(StrEnum):
    DEBIT = "debit"
    CREDIT = "credit"


class Transaction(BaseModel):
    """A single normalized statement transaction.

    ``amount`` is negative for money leaving the account and positive for
    money entering it, except for Discover card statements where purchases
    are positive and payments/credits negative.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    date: dt.date
    description: str
    amount: Decimal
    category: Category
    type: TransactionType | None = None

    @field_validator("date")
    @classmethod
    def _year_in_range(cls, v: dt.date) -> dt.date:
        if not MIN_YEAR <= v.year <= MAX_YEAR:
            raise ValueError(f"date year must be within [{MIN_YEAR}, {MAX_YEAR}]")
        return v

    @field_validator("description")
    @classmethod
    def _description_non_empty(cls, v: str) -> str:
        s = " ".join(v.split())
        if not s:
            raise ValueError("description must be non-empty")
        return s

    @field_validator("amount")
    @classmethod
    def _amount_finite_cents(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("amount must be finite")
        return v.quantize(_CENTS, rounding=ROUND_HALF_UP)

    @model_validator(mode="after")
    def _type_matches_sign(self) -> Transaction:
        if self.type is None:
            return self
        expected = TransactionType.DEBIT if self.amount < 0 else TransactionType.CREDIT
        if self.type is not expected:
            raise ValueError(f"type {self.type.value!r} disagrees with amount {self.amount}")
        return self

    def as_dict(self) -> dict[str, Any]:
        """JSON-friendly mapping (ISO date, amount as a 2-decimal string)."""

        out: dict[str, Any] = {
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": f"{self.amount:.2f}",
            "category": self.category.value,
        }
        if self.type is not None:
            out["type"] = self.type.value
        return out

    def to_expense(self) -> dict[str, Any]:
        """Project into the budgeting app's expense shape.

        Expenses carry an unsigned amount; the direction lives in the
        category (income vs. spend), not in the number.
        """

        return {
            "amount": abs(self.amount),
            "category": self.category.value,
            "date": self.date.isoformat(),
            "note": self.description,
        }


# ---------------------------------------------------------------------------
# Per-call internals
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Section:
    """Offsets of the transaction-bearing region within the normalized text.

    ``labels`` holds optional named sub-ranges (absolute offsets), e.g. the
    Bank of America deposits and withdrawals tables.
    """

    start: int
    end: int
    labels: tuple[tuple[str, int, int], ...] = ()

    def label_at(self, pos: int) -> str | None:
        for name, lo, hi in self.labels:
            if lo <= pos < hi:
                return name
        return None


@dataclass(frozen=True, slots=True)
class ParseContext:
    """State scoped to one ``StatementParser.parse`` call."""

    bank: Bank
    text: str
    year: int
    section: Section
    tokens: tuple[Token, ...] = field(default_factory=tuple)
    # Occurrence counts of amount values across the whole document.
    amount_counts: dict[str, int] = field(default_factory=dict)


__all__ = [
    "Bank",
    "Category",
    "MAX_YEAR",
    "MIN_YEAR",
    "ParseContext",
    "Section",
    "Transaction",
    "TransactionType",
]
