"""Console output for circle commands.

Messages are printed with a style rather than inline markup, so store paths
and usernames containing ``[`` are shown verbatim.
"""

from __future__ import annotations

from typing import NoReturn

import typer
from rich.console import Console
from rich.table import Table

console = Console(highlight=False)

STYLES = {
    "ok": "green",
    "warn": "yellow",
    "error": "red",
    "note": "dim",
}


def say(kind: str, msg: str) -> None:
    """Print ``msg`` in the style registered for ``kind``."""
    console.print(msg, style=STYLES[kind], markup=False)


def fail(msg: str, code: int = 1) -> NoReturn:
    """Print an error and leave the command with ``code``."""
    say("error", msg)
    raise typer.Exit(code)


def table(title: str, *columns: str | tuple[str, dict]) -> Table:
    """Build a table; a bare string is a plain column, a tuple adds options."""
    result = Table(title=title)
    for column in columns:
        if isinstance(column, str):
            result.add_column(column)
        else:
            name, options = column
            result.add_column(name, **options)
    return result
