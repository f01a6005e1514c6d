"""Tests for DecisionRenderer."""

from __future__ import annotations

from rich.console import Console

from webpforge.cli.renderer import DecisionRenderer
from webpforge.models.decisions import Decision, DecisionOutcome


def _decisions() -> list[Decision]:
    return [
        Decision(
            request="a.webp",
            reference="a.ff00ff.webp",
            outcome=DecisionOutcome.TRANSFORMED,
            source_size=20000,
            output_size=5000,
            reclaimed=["a.000000.webp"],
        ),
        Decision(request="b.webp", reference="b.png", outcome=DecisionOutcome.INLINE_ORIGINAL),
        Decision(request="c.webp", reference="c.png", outcome=DecisionOutcome.INLINE_ORIGINAL),
    ]


class TestDecisionRenderer:
    def test_summary_counts_outcomes(self):
        summary = DecisionRenderer().summary(_decisions())
        assert "3 request(s)" in summary
        assert "1 transformed" in summary
        assert "2 inline_original" in summary

    def test_summary_empty(self):
        assert "none" in DecisionRenderer().summary([])

    def test_table_has_one_row_per_decision(self):
        table = DecisionRenderer().build_table(_decisions())
        assert table.row_count == 3

    def test_render_prints_savings_and_reclaims(self):
        console = Console(record=True, width=160)
        DecisionRenderer(console=console).render(_decisions())
        text = console.export_text()
        assert "75%" in text
        assert "a.000000.webp" in text
