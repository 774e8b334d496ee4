"""
DealerWatch Engine: Section Summary Calculator

Rolls a list of controls up into green/amber/red counts, a RAG status and a
narrative note. rollup_rag() carries the single precedence rule
(red > amber > green) used for both section and overall status.
"""
from __future__ import annotations

from typing import Iterable

from ..models.audit import ControlCheck, SectionSummary
from ..models.enums import RagStatus


SUMMARY_NOTES: dict[RagStatus, str] = {
    RagStatus.RED: "Critical controls require immediate attention.",
    RagStatus.AMBER: "Minor gaps identified; monitoring recommended.",
    RagStatus.GREEN: "All controls operating effectively.",
}


def count_ratings(controls: Iterable[ControlCheck]) -> tuple[int, int, int]:
    """Count controls by risk rating as (green, amber, red)."""
    green = amber = red = 0
    for control in controls:
        if control.risk_rating == RagStatus.RED:
            red += 1
        elif control.risk_rating == RagStatus.AMBER:
            amber += 1
        else:
            green += 1
    return green, amber, red


def rollup_rag(amber: int, red: int) -> RagStatus:
    """Any red wins; otherwise any amber; otherwise green."""
    if red > 0:
        return RagStatus.RED
    if amber > 0:
        return RagStatus.AMBER
    return RagStatus.GREEN


def summarize(controls: list[ControlCheck]) -> SectionSummary:
    """
    Summarize a section's controls.

    An empty list yields a green summary with zero counts.
    """
    green, amber, red = count_ratings(controls)
    rag = rollup_rag(amber, red)
    return SectionSummary(
        green=green,
        amber=amber,
        red=red,
        rag_status=rag,
        notes=SUMMARY_NOTES[rag],
    )
