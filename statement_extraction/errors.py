"""Error taxonomy for the extraction pipeline.

None of these escape :func:`statement_extraction.api.parse_statement`. Stages
raise them; the parser catches them either per candidate row (drop the row)
or per document (drop everything) and logs the reason.
"""

from __future__ import annotations


class ExtractionError(ValueError):
    """Base class for recoverable extraction failures."""


class UnrecognizedFormat(ExtractionError):
    """No known institution matched the statement text."""


class StructuralMiss(ExtractionError):
    """A required section boundary or date anchor could not be located."""


class AmbiguousAmount(ExtractionError):
    """No amount token survived disambiguation for a candidate block."""


class InvalidNumeric(ExtractionError):
    """A matched token (amount or date) did not parse to a valid value."""


__all__ = [
    "ExtractionError",
    "UnrecognizedFormat",
    "StructuralMiss",
    "AmbiguousAmount",
    "InvalidNumeric",
]
