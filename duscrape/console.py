"""
Console output shared by all scrapers.

Status lines go to stdout, warnings and errors to stderr, both through rich.
Messages are printed literally (no rich markup is interpreted in them).
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console()
err_console = Console(stderr=True)


def info(msg: str = "") -> None:
    console.print(escape(msg))


def warn(msg: str) -> None:
    err_console.print(escape(msg), style="yellow")


def error(msg: str) -> None:
    err_console.print(escape(msg), style="bold red")
