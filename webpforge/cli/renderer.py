"""Rich terminal rendering for engine decisions.

Color scheme
------------
- green   : TRANSFORMED
- cyan    : CACHE_HIT
- yellow  : SIZE_REGRESSION
- blue    : INLINE_ORIGINAL
- dim     : PASSTHROUGH
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from webpforge.models.decisions import Decision, DecisionOutcome

_OUTCOME_LABELS: dict[DecisionOutcome, str] = {
    DecisionOutcome.TRANSFORMED: "[green]TRANSFORMED[/green]",
    DecisionOutcome.CACHE_HIT: "[cyan]CACHE HIT[/cyan]",
    DecisionOutcome.SIZE_REGRESSION: "[yellow]SIZE REGRESSION[/yellow]",
    DecisionOutcome.INLINE_ORIGINAL: "[blue]INLINE[/blue]",
    DecisionOutcome.PASSTHROUGH: "[dim]PASSTHROUGH[/dim]",
}


def _size(num: int) -> str:
    if not num:
        return "-"
    if num < 1024:
        return f"{num} B"
    return f"{num / 1024:.1f} KiB"


class DecisionRenderer:
    """Renders decisions as Rich tables.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def build_table(self, decisions: Sequence[Decision]) -> Table:
        table = Table(title="webpforge decisions")
        table.add_column("Request", style="cyan")
        table.add_column("Outcome")
        table.add_column("Reference", style="bold")
        table.add_column("Source", justify="right")
        table.add_column("Output", justify="right")
        table.add_column("Saved", justify="right")

        for d in decisions:
            saved = ""
            if d.outcome == DecisionOutcome.TRANSFORMED and d.source_size:
                saved = f"{100 * (d.source_size - d.output_size) / d.source_size:.0f}%"
            table.add_row(
                d.request,
                _OUTCOME_LABELS[d.outcome],
                d.reference,
                _size(d.source_size),
                _size(d.output_size),
                saved,
            )
        return table

    def summary(self, decisions: Sequence[Decision]) -> str:
        counts = Counter(d.outcome for d in decisions)
        parts = [
            f"{counts[outcome]} {outcome.value}"
            for outcome in DecisionOutcome
            if counts[outcome]
        ]
        return f"[bold]{len(decisions)} request(s):[/bold] " + (", ".join(parts) or "none")

    def render(self, decisions: Sequence[Decision]) -> None:
        self.console.print(self.build_table(decisions))
        self.console.print(self.summary(decisions))
        reclaimed = [name for d in decisions for name in d.reclaimed]
        if reclaimed:
            self.console.print(f"[dim]Reclaimed:[/dim] {', '.join(reclaimed)}")
