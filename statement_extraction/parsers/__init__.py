"""Institution parsers and the ``Bank`` → parser dispatch table."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from ..models import Bank
from .bank_of_america import BankOfAmericaParser
from .base import DateAnchoredParser, StatementParser
from .capital_one import CapitalOneParser
from .chase import ChaseParser
from .citi import CitiParser
from .discover import DiscoverParser

PARSERS: Mapping[Bank, type[StatementParser]] = MappingProxyType(
    {
        Bank.CHASE: ChaseParser,
        Bank.CITI: CitiParser,
        Bank.BANK_OF_AMERICA: BankOfAmericaParser,
        Bank.CAPITAL_ONE: CapitalOneParser,
        Bank.DISCOVER: DiscoverParser,
    }
)


def get_parser(bank: Bank | str, logger: logging.Logger | None = None) -> StatementParser:
    """Instantiate the parser registered for ``bank``.

    Raises ``ValueError`` for names outside :class:`Bank`.
    """

    return PARSERS[Bank(bank)](logger=logger)


__all__ = [
    "BankOfAmericaParser",
    "CapitalOneParser",
    "ChaseParser",
    "CitiParser",
    "DateAnchoredParser",
    "DiscoverParser",
    "PARSERS",
    "StatementParser",
    "get_parser",
]
