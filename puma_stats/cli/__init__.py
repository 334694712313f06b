"""puma-stats CLI."""

import asyncio

import typer

from puma_stats.cli._console import error, setup_logging
from puma_stats.core.config import settings
from puma_stats.core.exceptions import StatsError
from puma_stats.services.control_client import PumaControlClient
from puma_stats.services.renderer import render

app = typer.Typer(
    name="puma-stats",
    help="Report Puma worker, thread and backlog usage.",
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        from puma_stats import __version__

        typer.echo(f"puma-stats {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version",
    ),
) -> None:
    """Read-only status reports for a running Puma cluster."""


@app.command()
def stats(
    locator: str = typer.Argument(
        None,
        help="Control URL (unix:///path, tcp://host:port) or socket path. Defaults to PUMA_STATS_CONTROL_URL.",
        show_default=False,
    ),
    token: str = typer.Option(None, "--token", "-t", help="Control app token"),
    transport: str = typer.Option(
        None, "--transport", help="'http' (control app) or 'pumactl'", show_default=False
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Print per-worker and total thread usage."""
    setup_logging(verbose)

    kind = transport or settings.transport
    if kind not in ("http", "pumactl"):
        raise typer.BadParameter(f"unknown transport {kind!r}", param_hint="--transport")

    client = PumaControlClient(locator, token=token, transport=kind)
    try:
        snapshot = asyncio.run(client.fetch_snapshot())
    except StatsError as e:
        error(e.kind, str(e))
        raise typer.Exit(1)

    typer.echo(render(snapshot))


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
) -> None:
    """Serve the stats over HTTP."""
    import uvicorn

    setup_logging(settings.debug)
    uvicorn.run("puma_stats.main:app", host=host, port=port)
