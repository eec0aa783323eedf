# src/cli/runner.py

"""Headless build runner: load config, build every feed, print a summary."""

import logging

from rich.console import Console
from rich.table import Table

from src.config.feeds_config import load_config
from src.models.errors import ConfigError
from src.services.build_runner import BuildResult, BuildRunner

logger = logging.getLogger("catalog_feeds.cli")

# Stderr console so stdout stays free for piping
_err = Console(stderr=True)


def _print_summary(result: BuildResult) -> None:
    """Render a Rich table with one line per feed."""
    table = Table(
        title="Feed Build",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Feed", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Products", justify="right")
    table.add_column("Files", justify="right")
    table.add_column("Notes", style="dim", overflow="fold")

    for outcome in result.outcomes:
        if outcome.ok:
            status = "[green]✅ OK[/green]"
            products = str(outcome.product_count)
            files = str(len(outcome.written))
        else:
            status = "[red]❌ SKIPPED[/red]"
            products = "—"
            files = "0"
        table.add_row(
            outcome.slug, status, products, files, outcome.error,
        )

    _err.print(table)


async def cli_build() -> int:
    """Build all configured feeds and return an exit code.

    Per-feed failures are reported but leave the exit code at 0; only a
    configuration error (or any unhandled failure) returns 1.
    """
    try:
        site, feeds = load_config()
    except ConfigError as exc:
        logger.critical("Configuration error: %s", exc)
        _err.print(f"[red]Configuration error: {exc}[/red]")
        return 1

    _err.print(f"[bold]Building {len(feeds)} feed(s)...[/bold]")

    runner = BuildRunner()
    try:
        result = await runner.run(feeds, site)
    finally:
        runner.fetcher.close()

    for error_msg in result.errors:
        _err.print(f"[red]Error: {error_msg}[/red]")

    _print_summary(result)
    _err.print(
        f"[green]✓ {len(result.succeeded)}/{len(feeds)} feeds built"
        f"[/green] [dim]index → {result.index_path}[/dim]"
    )
    return 0
