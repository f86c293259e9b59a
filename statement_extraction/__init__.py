"""Transaction extraction from flattened bank statement text.

Supported institutions: Chase, Citi, Bank of America, Capital One and
Discover. The main entry point is :func:`parse_statement`.
"""

from .api import parse_statement
from .batch import parse_many
from .classifier import classify_statement
from .models import Bank, Category, Transaction, TransactionType
from .parsers import PARSERS, StatementParser, get_parser

__all__ = [
    "Bank",
    "Category",
    "PARSERS",
    "StatementParser",
    "Transaction",
    "TransactionType",
    "classify_statement",
    "get_parser",
    "parse_many",
    "parse_statement",
]
