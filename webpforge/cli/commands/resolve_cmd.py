"""``webpforge resolve REQUEST...`` — run references through the engine.

Prints a table of decisions.  ``--dry-run`` layers an in-memory overlay over
the filesystem so artifacts and reclaims are computed but never written.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from webpforge.cli.renderer import DecisionRenderer
from webpforge.config import ForgeSettings
from webpforge.core.byte_store import LocalByteStore, OverlayByteStore
from webpforge.core.forge import Forge
from webpforge.core.production_guard import ProductionConfigError

logger = logging.getLogger(__name__)
console = Console()


def _parse_aliases(values: list[str]) -> dict[str, Path]:
    aliases: dict[str, Path] = {}
    for value in values:
        name, sep, target = value.partition("=")
        if not sep or not name or not target:
            raise typer.BadParameter(f"Alias must look like NAME=PATH, got {value!r}")
        aliases[name] = Path(target)
    return aliases


def resolve_cmd(
    requests: list[str] = typer.Argument(
        ..., help="References to resolve, e.g. '@/img/icon.webp'."
    ),
    context: Path = typer.Option(
        Path("."), "--context", "-c", help="Directory the references are relative to."
    ),
    alias: list[str] = typer.Option(
        [], "--alias", "-a", help="Resolver alias NAME=PATH (repeatable)."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Compute decisions without writing anything."
    ),
    workers: int = typer.Option(4, "--workers", "-w", min=1, help="Concurrent requests."),
    keep_going: bool = typer.Option(
        False, "--keep-going", "-k", help="Pass failing requests through instead of aborting."
    ),
) -> None:
    """Resolve references and show what the engine decided for each."""
    store = OverlayByteStore(LocalByteStore()) if dry_run else LocalByteStore()
    try:
        forge = Forge(
            ForgeSettings(),
            root=context,
            store=store,
            aliases=_parse_aliases(alias),
            on_error="passthrough" if keep_going else "raise",
        )
    except ProductionConfigError as exc:
        console.print(f"[bold red]{exc}[/bold red]")
        raise typer.Exit(code=1) from exc

    try:
        decisions = forge.rewrite_many(requests, max_workers=workers)
    except Exception as exc:
        logger.debug("resolve failed", exc_info=True)
        console.print(f"[bold red]{type(exc).__name__}:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    DecisionRenderer(console=console).render(decisions)
    if dry_run and isinstance(store, OverlayByteStore):
        for path in sorted(store.pending_writes):
            console.print(f"[dim]Would write:[/dim] {path}")
