"""Capital One statements.

Rows read ``Mon D description category [+|-] $amount $balance`` under a
``DATE DESCRIPTION CATEGORY AMOUNT BALANCE`` header. Only dollar-prefixed
numbers are amounts. The category column is either a direction word
(``Debit``/``Credit``) or a merchant category used as a category hint.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from ..amounts import AmountProfile, ColumnLayout
from ..categories import CAPITAL_ONE_HINT_RULES
from ..models import Bank
from ..sections import CAPITAL_ONE_SECTION
from ..segment import Block
from ..tokens import AmountToken, DateStyle
from .base import DateAnchoredParser

_CATEGORY_COLUMN_RE = re.compile(
    r"\s+(?P<hint>Debit|Credit|Dining|Restaurants|Groceries|Grocery|Merchandise|Gas/Automotive"
    r"|Gas|Entertainment|Travel|Airfare|Lodging|Car Rental|Health Care|Healthcare"
    r"|Phone/Cable|Utilities|Internet|Other Services|Other Travel|Other)$",
    re.IGNORECASE,
)


class CapitalOneParser(DateAnchoredParser):
    bank = Bank.CAPITAL_ONE
    section_rule = CAPITAL_ONE_SECTION
    date_style = DateStyle.MONTH_NAME
    amount_profile = AmountProfile(layout=ColumnLayout.AMOUNT_BALANCE)
    hint_rules = CAPITAL_ONE_HINT_RULES

    def block_amounts(self, block: Block) -> Sequence[AmountToken]:
        return tuple(a for a in block.amounts if a.has_dollar)

    def split_hint(self, description: str) -> tuple[str, str | None]:
        m = _CATEGORY_COLUMN_RE.search(description)
        if m is None:
            return description, None
        return description[: m.start()].strip(), m.group("hint")
