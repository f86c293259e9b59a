"""Run the console interface: ``python -m statement_extraction``."""

from .cli import app

app(prog_name="statement-extraction")
