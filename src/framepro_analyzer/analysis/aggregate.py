"""Issue aggregation: run the selected detectors, rank, summarize."""

from __future__ import annotations

import logging
from collections import Counter
from enum import Enum
from typing import Callable, Iterable

from attrs import field, frozen

from framepro_analyzer.analysis.cpu import analyze_cpu_performance
from framepro_analyzer.analysis.frames import analyze_frame_performance
from framepro_analyzer.analysis.threads import analyze_thread_performance
from framepro_analyzer.data.models import PerformanceIssue, ProfileSession, Severity

logger = logging.getLogger(__name__)


class Focus(Enum):
    """Which detectors an analysis runs."""

    CPU = "cpu"
    FRAMES = "frames"
    THREADS = "threads"
    ALL = "all"


Detector = Callable[[ProfileSession], list[PerformanceIssue]]

_DETECTORS: tuple[tuple[Focus, Detector], ...] = (
    (Focus.CPU, analyze_cpu_performance),
    (Focus.FRAMES, analyze_frame_performance),
    (Focus.THREADS, analyze_thread_performance),
)


@frozen(kw_only=True)
class PerformanceAnalysis:
    """Ranked issues for one session plus a one-line summary."""

    focus: Focus
    issues: tuple[PerformanceIssue, ...] = field(converter=tuple)
    summary: str

    @property
    def issues_found(self) -> int:
        return len(self.issues)


def rank_issues(issues: Iterable[PerformanceIssue]) -> list[PerformanceIssue]:
    """Stable sort by severity; ties keep detector emission order."""

    return sorted(issues, key=lambda issue: issue.severity)


def generate_summary(issues: Iterable[PerformanceIssue]) -> str:
    """Count issues per severity and append an urgency phrase."""

    counts = Counter(issue.severity for issue in issues)
    summary = (
        "Performance Analysis Summary: "
        f"{counts[Severity.CRITICAL]} critical, {counts[Severity.HIGH]} high, "
        f"{counts[Severity.MEDIUM]} medium, {counts[Severity.LOW]} low priority issues detected"
    )
    if counts[Severity.CRITICAL] > 0:
        summary += " - IMMEDIATE ACTION REQUIRED"
    elif counts[Severity.HIGH] > 0:
        summary += " - Optimization recommended"
    elif counts[Severity.MEDIUM] > 0:
        summary += " - Moderate optimization opportunities"
    return summary


def analyze_performance(session: ProfileSession, focus: Focus | str = Focus.ALL) -> PerformanceAnalysis:
    """Run the detectors selected by ``focus`` and rank their issues.

    Parameters
    ----------
    session : ProfileSession
        Parsed profiling session.
    focus : Focus or str, default='all'
        One of ``cpu``, ``frames``, ``threads`` or ``all``.

    Returns
    -------
    PerformanceAnalysis
        Issues ordered critical → high → medium → low → info.

    Raises
    ------
    ValueError
        If ``focus`` is not a known focus name.
    """

    focus = Focus(focus)
    collected: list[PerformanceIssue] = []
    for detector_focus, detector in _DETECTORS:
        if focus is Focus.ALL or focus is detector_focus:
            collected.extend(detector(session))

    ranked = rank_issues(collected)
    logger.info(
        "Performance analysis | session=%s focus=%s issues=%d",
        session.session_name,
        focus.value,
        len(ranked),
    )
    return PerformanceAnalysis(focus=focus, issues=ranked, summary=generate_summary(ranked))
