"""Where extraction diagnostics go.

Every stage logs through a logger it is handed: ``parse_statement`` and the
parsers accept an optional ``logger`` and otherwise pick a child of the
``statement_extraction`` logger via :func:`resolve_logger`. As a library the
package stays silent (a ``NullHandler`` on the package logger); the CLI
calls :func:`configure_logging` once to print to stderr, with the level taken
from ``STATEMENT_EXTRACTION_LOG_LEVEL`` when not given.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE = "statement_extraction"
LEVEL_ENV = "STATEMENT_EXTRACTION_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_CONFIGURED = False


def _parse_level(level: int | str | None) -> int:
    """Numeric level for ``level``, the environment, or ``INFO``."""

    if level is None:
        level = os.getenv(LEVEL_ENV) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelNamesMapping().get(name)
    return numeric if numeric is not None else logging.INFO


def _package_logger() -> logging.Logger:
    return logging.getLogger(PACKAGE)


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Send package diagnostics to ``stream``; later calls do nothing."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    pkg = _package_logger()
    for handler in [h for h in pkg.handlers if isinstance(h, logging.NullHandler)]:
        pkg.removeHandler(handler)

    numeric = _parse_level(level)
    handler = logging.StreamHandler(stream)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    pkg.addHandler(handler)
    pkg.setLevel(numeric)
    pkg.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    pkg = _package_logger()
    if not _CONFIGURED and not pkg.handlers:
        pkg.addHandler(logging.NullHandler())
    return logging.getLogger(name)


def resolve_logger(logger: logging.Logger | None, component: str) -> logging.Logger:
    """The injected ``logger``, or the package child named ``component``."""

    if logger is not None:
        return logger
    return get_logger(f"{PACKAGE}.{component}")


__all__ = ["configure_logging", "get_logger", "resolve_logger"]
