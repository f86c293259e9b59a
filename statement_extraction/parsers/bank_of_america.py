"""Bank of America checking statements.

Transactions are listed under ``Deposits and other credits`` and
``Withdrawals and other debits``; the table a row sits in decides its sign.
Dates may carry a two- or four-digit year.
"""

from __future__ import annotations

from ..amounts import AmountProfile, ColumnLayout
from ..models import Bank
from ..sections import BANK_OF_AMERICA_SECTION
from ..segment import COMMON_NOISE, noise
from .base import DateAnchoredParser


class BankOfAmericaParser(DateAnchoredParser):
    bank = Bank.BANK_OF_AMERICA
    section_rule = BANK_OF_AMERICA_SECTION
    amount_profile = AmountProfile(
        layout=ColumnLayout.DEBIT_CREDIT_BALANCE,
        filter_repeats=True,
        label_signs=(("deposits", 1), ("withdrawals", -1)),
    )
    noise_patterns = COMMON_NOISE + noise(
        r"\bDEPOSITS\s+AND\s+OTHER\s+CREDITS\b",
        r"\bWITHDRAWALS\s+AND\s+OTHER\s+DEBITS\b",
        r"\bDAILY\s+LEDGER\s+BALANCES\b",
        r"\bSERVICE\s+FEES\b",
    )
