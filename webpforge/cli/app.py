"""Main Typer application — registers all CLI commands.

Entry point: ``webpforge`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from webpforge.cli.commands.reclaim_cmd import reclaim_cmd
from webpforge.cli.commands.resolve_cmd import resolve_cmd
from webpforge.config import ForgeSettings

app = typer.Typer(
    name="webpforge",
    help="webpforge: content-addressed WebP variants for build pipelines.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(name="resolve", help="Resolve references through the decision engine.")(resolve_cmd)
app.command(name="reclaim", help="Delete stale tagged artifacts for a stem.")(reclaim_cmd)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    """Configure logging once for every subcommand."""
    level = "DEBUG" if verbose else ForgeSettings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


@app.command(name="config", help="Show the effective settings.")
def config_cmd() -> None:
    """Print the settings the engine would run with."""
    settings = ForgeSettings()
    tc = settings.to_transform_config()

    table = Table(title="webpforge settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("environment", settings.environment)
    table.add_row("extensions", ", ".join(tc.extensions))
    table.add_row("virtual_extension", tc.virtual_extension)
    table.add_row("hash_length", str(tc.hash_length))
    table.add_row("codec_params", str(tc.codec_params))
    table.add_row("inline_limit", str(tc.effective_inline_limit))
    table.add_row("reclaim", "[green]on[/green]" if tc.reclaim else "[dim]off[/dim]")
    for name, target in settings.aliases.items():
        table.add_row(f"alias {name}", str(target))
    Console().print(table)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
