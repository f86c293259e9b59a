"""Map a cleaned description (and an optional bank category hint) to a Category.

Rules are ordered and the first match wins; order resolves overlaps rather
than specificity (a grocery "deposit correction" is Income because Income is
checked before Food). Keywords match on word boundaries, case-insensitively.

A bank-supplied hint (Discover's merchant category, Capital One's category
column) is matched against that bank's hint table first.
"""

from __future__ import annotations

from collections.abc import Sequence

from .models import Category
from .rules import Rule, first_match, keywords

DESCRIPTION_RULES: tuple[Rule[Category], ...] = (
    Rule(
        keywords(
            [
                "deposit",
                "direct deposit",
                "payroll",
                "paycheck",
                "salary",
                "income",
                "wages",
                "payment received",
                "refund",
                "reimbursement",
            ]
        ),
        Category.INCOME,
        name="income",
    ),
    Rule(
        keywords(
            [
                "grocery",
                "groceries",
                "supermarket",
                "whole foods",
                "restaurant",
                "restaurants",
                "dining",
                "fast food",
                "food",
                "bar",
                "cafe",
                "coffee",
                "bakery",
                "deli",
                "pizza",
                "burger",
                "starbucks",
                "mcdonald",
                "mcdonalds",
                "chipotle",
                "dunkin",
                "panera",
                "taco",
                "domino",
            ]
        ),
        Category.FOOD,
        name="food",
    ),
    Rule(
        keywords(
            [
                "rent",
                "bill",
                "electric",
                "electricity",
                "utility",
                "utilities",
                "internet",
                "wifi",
                "phone",
                "cell phone",
                "mobile",
                "cable",
                "water",
                "gas bill",
                "power",
                "energy",
                "trash",
                "sewer",
                "insurance",
            ]
        ),
        Category.BILLS,
        name="bills",
    ),
    Rule(
        keywords(
            [
                "travel",
                "airline",
                "airlines",
                "hotel",
                "motel",
                "lodging",
                "car rental",
                "transportation",
                "rail",
                "train",
                "taxi",
                "cab",
                "rideshare",
                "uber",
                "lyft",
                "metro",
                "transit",
                "mta",
                "nyct",
                "bus",
                "parking",
                "toll",
                "ezpass",
                "gas",
                "gas station",
                "fuel",
                "exxon",
                "shell",
                "chevron",
                "mobil",
            ]
        ),
        Category.TRAVEL,
        name="travel",
    ),
    Rule(
        keywords(
            [
                "shopping",
                "online shopping",
                "store",
                "gift",
                "retail",
                "department store",
                "warehouse club",
                "wholesale",
                "general merchandise",
                "merchandise",
                "clothing",
                "mall",
                "amazon",
                "amzn",
                "target",
                "walmart",
                "costco",
                "best buy",
                "home depot",
                "lowes",
                "nike",
                "adidas",
            ]
        ),
        Category.SHOPPING,
        name="shopping",
    ),
    Rule(
        keywords(
            [
                "entertainment",
                "amusement",
                "movie",
                "movies",
                "theater",
                "theatre",
                "cinema",
                "streaming",
                "music",
                "concert",
                "ticket",
                "tickets",
                "netflix",
                "spotify",
                "hulu",
                "disney",
                "amc",
                "regal",
                "gaming",
            ]
        ),
        Category.ENTERTAINMENT,
        name="entertainment",
    ),
    Rule(
        keywords(
            [
                "pharmacy",
                "drug store",
                "hospital",
                "clinic",
                "urgent care",
                "health",
                "medical",
                "doctor",
                "dental",
                "vision",
                "prescription",
                "cvs",
                "walgreens",
                "rite aid",
            ]
        ),
        Category.HEALTH,
        name="health",
    ),
    Rule(
        keywords(
            [
                "atm",
                "withdrawal",
                "transfer",
                "service",
                "services",
                "professional",
                "fee",
                "fees",
                "charges",
            ]
        ),
        Category.MISCELLANEOUS,
        name="miscellaneous",
    ),
)

_HINT_FOOD = ["restaurant", "restaurants", "dining", "fast food", "food", "bar", "cafe", "coffee"]
_HINT_GROCERY = ["grocery", "groceries", "supermarket"]
_HINT_TRAVEL = [
    "travel",
    "airline",
    "hotel",
    "motel",
    "lodging",
    "car rental",
    "transportation",
    "rail",
    "taxi",
    "rideshare",
    "uber",
    "lyft",
]
_HINT_SHOPPING = [
    "retail",
    "shopping",
    "online shopping",
    "department store",
    "warehouse club",
    "wholesale",
    "general merchandise",
    "merchandise",
]
_HINT_ENTERTAINMENT = ["entertainment", "amusement", "movie", "theater", "cinema", "streaming", "music"]
_HINT_HEALTH = ["health", "medical", "pharmacy", "drug store", "hospital", "clinic", "dental", "vision"]

DISCOVER_HINT_RULES: tuple[Rule[Category], ...] = (
    Rule(keywords(_HINT_FOOD + _HINT_GROCERY), Category.FOOD, name="food"),
    Rule(
        keywords(["utility", "utilities", "phone", "internet", "cable", "water", "electric", "gas bill"]),
        Category.BILLS,
        name="bills",
    ),
    Rule(keywords(_HINT_TRAVEL), Category.TRAVEL, name="travel"),
    Rule(keywords(["gas station", "gas", "gasoline", "fuel"]), Category.TRAVEL, name="fuel"),
    Rule(keywords(_HINT_SHOPPING), Category.SHOPPING, name="shopping"),
    Rule(keywords(_HINT_ENTERTAINMENT), Category.ENTERTAINMENT, name="entertainment"),
    Rule(keywords(_HINT_HEALTH), Category.HEALTH, name="health"),
    Rule(
        keywords(["service", "services", "professional", "fee", "charges", "other"]),
        Category.MISCELLANEOUS,
        name="miscellaneous",
    ),
)

CAPITAL_ONE_HINT_RULES: tuple[Rule[Category], ...] = (
    Rule(keywords(_HINT_FOOD + _HINT_GROCERY), Category.FOOD, name="food"),
    Rule(
        keywords(
            ["utility", "utilities", "phone", "internet", "cable", "water", "electric", "gas bill", "rent"]
        ),
        Category.BILLS,
        name="bills",
    ),
    Rule(keywords(_HINT_TRAVEL), Category.TRAVEL, name="travel"),
    Rule(keywords(["gas station", "gas", "fuel", "automotive"]), Category.TRAVEL, name="fuel"),
    Rule(keywords(_HINT_SHOPPING + ["store"]), Category.SHOPPING, name="shopping"),
    Rule(keywords(_HINT_ENTERTAINMENT), Category.ENTERTAINMENT, name="entertainment"),
    Rule(keywords(_HINT_HEALTH), Category.HEALTH, name="health"),
    Rule(
        keywords(["service", "services", "professional", "fee", "charges"]),
        Category.MISCELLANEOUS,
        name="miscellaneous",
    ),
)


def categorize(
    description: str,
    hint: str | None = None,
    *,
    hint_rules: Sequence[Rule[Category]] = (),
    default: Category = Category.OTHER,
) -> Category:
    """Return the category for ``description``.

    ``hint`` is tried against ``hint_rules`` first; the shared description
    rules follow; ``default`` applies when nothing matches.
    """

    if hint and hint_rules:
        found = first_match(hint_rules, hint)
        if found is not None:
            return found
    if not description:
        return default
    found = first_match(DESCRIPTION_RULES, description)
    return found if found is not None else default


__all__ = [
    "CAPITAL_ONE_HINT_RULES",
    "DESCRIPTION_RULES",
    "DISCOVER_HINT_RULES",
    "categorize",
]
