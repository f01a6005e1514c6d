"""``webpforge reclaim DIRECTORY STEM`` — delete tagged artifacts for a stem."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from webpforge.config import ForgeSettings
from webpforge.core.byte_store import LocalByteStore
from webpforge.core.path_mapper import VirtualPathMapper
from webpforge.core.reaper import StaleArtifactReaper

logger = logging.getLogger(__name__)
console = Console()


def reclaim_cmd(
    directory: Path = typer.Argument(..., help="Directory holding the artifacts."),
    stem: str = typer.Argument(..., help="Source stem, e.g. 'icon' for icon.png."),
    hash_length: int = typer.Option(
        None, "--hash-length", help="Fingerprint length (default: from settings)."
    ),
    force: bool = typer.Option(
        False, "--force", help="Reclaim even when WEBPFORGE_ENVIRONMENT=production."
    ),
) -> None:
    """Remove every ``<stem>.<hex>.webp`` artifact in DIRECTORY."""
    settings = ForgeSettings()
    if settings.is_production and not force:
        console.print(
            "[bold red]Refusing to reclaim in production:[/bold red] "
            "deployed pages may still reference these artifacts. Pass --force to override."
        )
        raise typer.Exit(code=1)
    if settings.is_production:
        logger.warning("Forced reclaim of %s artifacts in %s (production)", stem, directory)

    if not directory.is_dir():
        console.print(f"[bold red]Not a directory:[/bold red] {directory}")
        raise typer.Exit(code=1)

    reaper = StaleArtifactReaper(
        LocalByteStore(), VirtualPathMapper(settings.virtual_extension)
    )
    removed = reaper.reclaim(
        directory.resolve().as_posix(), stem, hash_length or settings.hash_length
    )
    if not removed:
        console.print("[dim]Nothing to reclaim.[/dim]")
        return
    for name in removed:
        console.print(f"[red]removed[/red] {name}")
