"""Shared console and logging setup for the CLI."""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

no_color = os.environ.get("NO_COLOR", "").lower() in ("1", "true", "yes")

# Summaries go to stdout via typer.echo; diagnostics and logs go here.
err_console = Console(stderr=True, highlight=False, no_color=no_color)


def error(kind: str, msg: str) -> None:
    err_console.print(f"[bold red]{kind}[/bold red]: {escape(msg)}")


def setup_logging(verbose: bool = False) -> None:
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    handler = RichHandler(
        console=err_console,
        show_time=False,
        show_path=False,
        markup=False,
    )

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
    logging.getLogger("puma_stats").setLevel(level)
