"""Typer console interface for ``statement_extraction``.

Reads statement text files (one flattened statement per file, UTF-8) and
prints the extracted transactions. Environment variables are loaded from a
local ``.env`` with ``python-dotenv`` (never overriding the existing
environment) before logging is configured:

- ``STATEMENT_EXTRACTION_LOG_LEVEL``: logging level name or number.
- ``STATEMENT_EXTRACTION_MAX_WORKERS``: default ``--concurrency``.
"""

from __future__ import annotations

import csv
import json
import os
import sys
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .batch import parse_many, resolve_concurrency
from .classifier import classify_statement
from .descriptions import normalize_merchant
from .logging_setup import configure_logging
from .models import Bank, Transaction

_WORKERS_ENV = "STATEMENT_EXTRACTION_MAX_WORKERS"

console = Console()


class OutputFormat(StrEnum):
    TABLE = "table"
    JSON = "json"
    CSV = "csv"


# ---- Helpers -----------------------------------------------------------------


def _resolve_max_workers(requested: int | None, n_files: int) -> int:
    """Worker count from ``--concurrency`` or the env var, capped to 1..32."""

    if requested is None:
        env_workers = os.getenv(_WORKERS_ENV)
        try:
            requested = int(env_workers) if env_workers else None
        except ValueError:
            requested = None
    return resolve_concurrency(requested, n_files)


def _read_texts(paths: list[Path]) -> list[str]:
    texts: list[str] = []
    for path in paths:
        try:
            texts.append(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"[red]Error:[/red] cannot read {path}: {e}")
            raise typer.Exit(1) from e
    return texts


def _rows(paths: list[Path], results: list[list[Transaction]]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for path, transactions in zip(paths, results, strict=True):
        for tx in transactions:
            row = {"file": str(path), **tx.as_dict()}
            row["merchant"] = normalize_merchant(tx.description)
            rows.append(row)
    return rows


def _print_table(rows: list[dict[str, str]]) -> None:
    table = Table(title="Transactions")
    for column in ("file", "date", "description", "merchant", "amount", "category"):
        table.add_column(column, justify="right" if column == "amount" else "left")
    for row in rows:
        table.add_row(
            Path(row["file"]).name,
            row["date"],
            row["description"],
            row["merchant"],
            row["amount"],
            row["category"],
        )
    console.print(table)


def _print_csv(rows: list[dict[str, str]]) -> None:
    fields = ["file", "date", "description", "merchant", "amount", "category", "type"]
    writer = csv.DictWriter(sys.stdout, fieldnames=fields, extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Extract transactions from flattened bank statement text.",
)


@app.callback()
def _root() -> None:
    """Load ``.env`` from the current directory and configure logging."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


@app.command("parse")
def parse_cmd(
    paths: Annotated[list[Path], typer.Argument(help="Statement text files to parse.")],
    output: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format.")
    ] = OutputFormat.TABLE,
    bank: Annotated[
        Bank | None, typer.Option(help="Skip detection and use this institution's parser.")
    ] = None,
    concurrency: Annotated[
        int | None, typer.Option(help="Parse up to N files at once (default from env).")
    ] = None,
) -> None:
    """Print the transactions found in each statement."""

    texts = _read_texts(paths)
    results = parse_many(texts, concurrency=_resolve_max_workers(concurrency, len(texts)), bank=bank)
    rows = _rows(paths, results)

    if output is OutputFormat.JSON:
        typer.echo(json.dumps(rows, indent=2))
    elif output is OutputFormat.CSV:
        _print_csv(rows)
    elif rows:
        _print_table(rows)


@app.command("classify")
def classify_cmd(
    paths: Annotated[list[Path], typer.Argument(help="Statement text files to classify.")],
) -> None:
    """Print the detected institution of each statement."""

    for path, text in zip(paths, _read_texts(paths), strict=True):
        bank = classify_statement(text)
        typer.echo(f"{path}\t{bank.value if bank is not None else 'unrecognized'}")


if __name__ == "__main__":  # pragma: no cover
    app()
