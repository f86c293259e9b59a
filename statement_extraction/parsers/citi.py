"""Citibank checking statements.

The activity table has ``Amount Subtracted``, ``Amount Added`` and
``Balance`` columns; flattened rows show whichever of them are filled.
When only one amount and the balance survive, the change in balance from
the previous row tells debits from credits. Rows carry a ``type`` tag.
"""

from __future__ import annotations

from decimal import Decimal

from ..amounts import AmountProfile, ColumnLayout, SignConvention
from ..descriptions import DescriptionProfile, labels
from ..models import Bank, TransactionType
from ..sections import CITI_SECTION
from .base import DateAnchoredParser


class CitiParser(DateAnchoredParser):
    bank = Bank.CITI
    section_rule = CITI_SECTION
    amount_profile = AmountProfile(
        layout=ColumnLayout.DEBIT_CREDIT_BALANCE,
        convention=SignConvention(default=-1),
        balance_column=True,
        filter_repeats=True,
        balance_delta=True,
    )
    description_profile = DescriptionProfile(
        extra_labels=labels(r"AMOUNT\s+SUBTRACTED", r"AMOUNT\s+ADDED", "SUBTRACTED", "ADDED"),
    )

    def transaction_type(self, amount: Decimal) -> TransactionType | None:
        return TransactionType.DEBIT if amount < 0 else TransactionType.CREDIT
