"""Public entry points for the ``statement_extraction`` package.

:func:`parse_statement` is total: whatever the input, it returns a list
(possibly empty) and never raises. Unrecognized statements, missing
sections and malformed rows are logged and turn into "nothing extracted".
"""

from __future__ import annotations

import logging

from .classifier import classify_statement
from .errors import UnrecognizedFormat
from .logging_setup import resolve_logger
from .models import Bank, Transaction
from .parsers import get_parser


def _choose_bank(text: str, bank: Bank | str | None) -> Bank:
    if bank is not None:
        return Bank(bank)
    chosen = classify_statement(text)
    if chosen is None:
        raise UnrecognizedFormat("statement not recognized as any supported institution")
    return chosen


def parse_statement(
    text: str,
    *,
    bank: Bank | str | None = None,
    logger: logging.Logger | None = None,
) -> list[Transaction]:
    """Extract the transactions of one statement blob in source order.

    Input
    -----
    text:
        The flattened text of one statement document (pages joined by
        newlines). Line wrapping is irrelevant.
    bank:
        Skip classification and use this institution's parser.
    logger:
        Diagnostics sink; defaults to the package logger.

    Output
    ------
    A list of validated :class:`~statement_extraction.models.Transaction`.
    Empty when the statement is not recognized or nothing could be extracted.
    """

    log = resolve_logger(logger, "api")
    if not isinstance(text, str) or not text.strip():
        log.debug("empty or non-text statement input")
        return []
    try:
        chosen = _choose_bank(text, bank)
        log.debug("statement classified as %s", chosen.value)
        return get_parser(chosen, logger=log).parse(text)
    except UnrecognizedFormat as exc:
        log.info("%s; no transactions extracted", exc)
        return []
    except Exception:
        log.exception("statement parsing failed; no transactions extracted")
        return []


__all__ = ["classify_statement", "parse_statement"]
