"""Parse many statements concurrently while preserving input order.

Parsing holds no shared mutable state, so documents can be handed to a
thread pool without locks. Results come back in input order; there is no
cancellation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from .api import parse_statement
from .models import Bank, Transaction

_MAX_WORKERS = 32


def resolve_concurrency(requested: int | None, n_items: int) -> int:
    """Cap ``requested`` to ``[1, min(32, n_items)]``; default is modest."""

    if requested is not None and requested > 0:
        return max(1, min(requested, n_items, _MAX_WORKERS))
    return max(1, min(4, n_items))


def parse_many(
    texts: Iterable[str],
    *,
    concurrency: int | None = None,
    bank: Bank | str | None = None,
    logger: logging.Logger | None = None,
) -> list[list[Transaction]]:
    """Run :func:`~statement_extraction.api.parse_statement` over ``texts``.

    The i-th result belongs to the i-th input.
    """

    items = list(texts)
    if not items:
        return []
    workers = resolve_concurrency(concurrency, len(items))
    if workers == 1:
        return [parse_statement(t, bank=bank, logger=logger) for t in items]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda t: parse_statement(t, bank=bank, logger=logger), items))


__all__ = ["parse_many", "resolve_concurrency"]
