"""Pytest configuration for test isolation.

The CLI configures the package logger once per process (a ``StreamHandler``
with ``propagate=False``) and reads its level and worker count from the
environment. Either leaking into a later test would hide records from
``caplog`` or change concurrency, so every test starts from a clean
environment and an unconfigured package logger.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from statement_extraction import logging_setup


@pytest.fixture(autouse=True)
def _isolate_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("STATEMENT_EXTRACTION_LOG_LEVEL", raising=False)
    monkeypatch.delenv("STATEMENT_EXTRACTION_MAX_WORKERS", raising=False)
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)

    yield

    pkg_logger = logging.getLogger("statement_extraction")
    for h in list(pkg_logger.handlers):
        pkg_logger.removeHandler(h)
    pkg_logger.setLevel(logging.NOTSET)
    pkg_logger.propagate = True
