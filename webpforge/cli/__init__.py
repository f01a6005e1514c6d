"""webpforge CLI — Typer-based command-line interface.

Provides the ``webpforge`` command with subcommands for resolving
references, reclaiming stale artifacts, and showing effective settings.

All output uses Rich for formatted terminal display.
"""
