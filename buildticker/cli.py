"""``buildticker`` command line: serve CI webhooks and show a live build board."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from buildticker.app import main
from buildticker.board import BoardRenderer
from buildticker.core.config import load_settings
from buildticker.core.exceptions import ConfigError
from buildticker.core.logging import setup_logging

console = Console(stderr=True)

app = typer.Typer(add_completion=False, help="Live terminal board for CI build webhooks.")


@app.command()
def run(
    bind: str | None = typer.Option(
        None,
        "--bind",
        "-b",
        help="Address to listen on. [default: 127.0.0.1]",
    ),
    port: int | None = typer.Option(
        None,
        "--port",
        "-p",
        help="Port to listen on. [default: 9876]",
    ),
    max_cards: int | None = typer.Option(
        None,
        "--max-cards",
        "-n",
        help="Number of build cards kept on the board. [default: 20]",
    ),
    refresh: float | None = typer.Option(
        None,
        "--refresh",
        "-r",
        help="Seconds between redraws. [default: 1.0]",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level name. [default: WARNING]",
    ),
    log_file: str | None = typer.Option(
        None,
        "--log-file",
        help="Write logs to this file instead of stderr.",
    ),
) -> None:
    """Listen for build webhooks on POST /webhook and redraw the board once per tick."""
    try:
        settings = load_settings(
            bind=bind,
            port=port,
            max_cards=max_cards,
            refresh_interval=refresh,
            log_level=log_level,
            log_file=log_file,
        )
    except ConfigError as e:
        console.print(f"[bold red]Invalid configuration:[/bold red] {e}")
        raise typer.Exit(code=2)

    renderer = BoardRenderer(listen_url=settings.listen_url)
    setup_logging(settings.log_level_value, settings.log_file, console=renderer.console)

    try:
        asyncio.run(main(settings, renderer=renderer))
    except KeyboardInterrupt:
        pass
    except OSError as e:
        console.print(f"[bold red]Failed to bind {settings.bind}:{settings.port}:[/bold red] {e}")
        console.print("[dim]Check IP/port or firewall.[/dim]")
        raise typer.Exit(code=1)
