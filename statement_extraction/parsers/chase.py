"""Chase checking and card statements.

Rows read ``MM/DD description [-]amount [balance]``; debits carry an explicit
minus sign and a running balance may trail the amount. Descriptions are
lowercased.
"""

from __future__ import annotations

from ..amounts import AmountProfile, ColumnLayout
from ..descriptions import DescriptionProfile, labels
from ..models import Bank
from ..sections import CHASE_SECTION
from ..segment import COMMON_NOISE, noise
from .base import DateAnchoredParser


class ChaseParser(DateAnchoredParser):
    bank = Bank.CHASE
    section_rule = CHASE_SECTION
    amount_profile = AmountProfile(layout=ColumnLayout.AMOUNT_BALANCE)
    description_profile = DescriptionProfile(
        extra_labels=labels(r"(?:RECURRING\s+)?CARD\s+PURCHASE(?:\s+WITH\s+PIN)?"),
        lowercase=True,
    )
    noise_patterns = COMMON_NOISE + noise(r"\bDAILY\s+ENDING\s+BALANCE\b")
