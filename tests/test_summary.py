"""
Section summary calculator tests.
"""
from __future__ import annotations

from dealerwatch.engine import SUMMARY_NOTES, count_ratings, rollup_rag, summarize
from dealerwatch.models import RagStatus

from conftest import make_control


G, A, R = RagStatus.GREEN, RagStatus.AMBER, RagStatus.RED


def _controls(*ratings):
    return [make_control(id=f"c-{n}", rating=r) for n, r in enumerate(ratings)]


class TestRollup:
    """red > amber > green precedence."""

    def test_red_wins(self) -> None:
        assert rollup_rag(amber=3, red=1) == R

    def test_amber_without_red(self) -> None:
        assert rollup_rag(amber=1, red=0) == A

    def test_green_when_clean(self) -> None:
        assert rollup_rag(amber=0, red=0) == G


class TestSummarize:
    """summarize() counts and notes."""

    def test_counts(self) -> None:
        summary = summarize(_controls(G, G, A, R, A))
        assert (summary.green, summary.amber, summary.red) == (2, 2, 1)
        assert summary.total == 5

    def test_red_section(self) -> None:
        summary = summarize(_controls(G, R))
        assert summary.rag_status == R
        assert summary.notes == "Critical controls require immediate attention."

    def test_amber_section(self) -> None:
        summary = summarize(_controls(G, A, A))
        assert summary.rag_status == A
        assert summary.notes == "Minor gaps identified; monitoring recommended."

    def test_green_section(self) -> None:
        summary = summarize(_controls(G, G))
        assert summary.rag_status == G
        assert summary.notes == "All controls operating effectively."

    def test_empty_section_is_green(self) -> None:
        summary = summarize([])
        assert (summary.green, summary.amber, summary.red) == (0, 0, 0)
        assert summary.rag_status == G
        assert summary.notes == SUMMARY_NOTES[G]

    def test_counts_follow_rating_not_result(self) -> None:
        from dealerwatch.models import ControlResult

        odd = make_control(rating=A, result=ControlResult.PASS)
        assert count_ratings([odd]) == (0, 1, 0)
