"""CPU issue detection over per-function aggregate metrics.

Each function record is checked independently against four rules (hotspot,
call frequency, frame spike, thread saturation); a record may trigger several.
"""

from __future__ import annotations

import logging

from framepro_analyzer.analysis.suggestions import optimization_suggestion
from framepro_analyzer.data.models import (
    FRAME_BUDGET_60_FPS_MS,
    FunctionRecord,
    PerformanceIssue,
    ProfileSession,
    Severity,
)

logger = logging.getLogger(__name__)


def _hotspot_issue(fn: FunctionRecord) -> PerformanceIssue:
    severity = Severity.CRITICAL if fn.total_time_ms > 500.0 else Severity.HIGH
    thread_info = fn.thread_name
    if fn.is_main_thread:
        thread_info += " (MAIN THREAD - blocks rendering!)"
        severity = Severity.CRITICAL
    elif fn.is_render_thread:
        thread_info += " (RENDER THREAD - affects FPS!)"

    return PerformanceIssue(
        severity=severity,
        category="CPU Hotspot",
        description=f"Function '{fn.function_name}' on {thread_info} consumes excessive CPU time",
        impact=(
            f"{fn.total_time_ms:.2f}ms total ({fn.avg_time_per_frame_ms:.2f}ms avg/frame), "
            f"{fn.total_count} total calls, {fn.thread_utilization_percent:.1f}% thread utilization"
        ),
        suggestion=optimization_suggestion(fn),
        value=fn.total_time_ms,
    )


def function_cpu_issues(fn: FunctionRecord) -> list[PerformanceIssue]:
    """Return every CPU issue triggered by a single function record."""

    issues: list[PerformanceIssue] = []

    if fn.total_time_ms > 100.0:
        issues.append(_hotspot_issue(fn))

    if fn.total_count > 10000 and fn.total_time_ms > 50.0:
        issues.append(
            PerformanceIssue(
                severity=Severity.MEDIUM,
                category="Call Frequency",
                description=f"Function '{fn.function_name}' called very frequently on {fn.thread_name}",
                impact=(
                    f"{fn.total_count} total calls ({fn.avg_count_per_frame:.1f} avg/frame), "
                    f"{fn.total_time_ms:.2f}ms total time"
                ),
                suggestion="Consider caching results, batching calls, or reducing call frequency",
                value=fn.total_count,
            )
        )

    # Longer than one frame at 60 FPS
    if fn.max_time_per_frame_ms > FRAME_BUDGET_60_FPS_MS and fn.total_count > 100:
        issues.append(
            PerformanceIssue(
                severity=Severity.HIGH,
                category="Frame Spike",
                description=f"Function '{fn.function_name}' causes frame spikes",
                impact=(
                    f"Max {fn.max_time_per_frame_ms:.2f}ms in single frame "
                    f"(avg: {fn.avg_time_per_frame_ms:.2f}ms) on {fn.thread_name}"
                ),
                suggestion=(
                    "Investigate why this function occasionally takes much longer. "
                    "Consider spreading work across frames"
                ),
                value=fn.max_time_per_frame_ms,
            )
        )

    if fn.thread_utilization_percent > 95.0 and fn.total_time_ms > 100.0:
        issues.append(
            PerformanceIssue(
                severity=Severity.CRITICAL,
                category="Thread Saturation",
                description=f"Function '{fn.function_name}' saturates {fn.thread_name}",
                impact=(
                    f"{fn.thread_utilization_percent:.1f}% thread utilization, "
                    f"{fn.total_time_ms:.2f}ms total time"
                ),
                suggestion=(
                    "Thread is completely saturated. Critical optimization needed "
                    "or work redistribution to other threads"
                ),
                value=fn.thread_utilization_percent,
            )
        )

    return issues


def analyze_cpu_performance(session: ProfileSession) -> list[PerformanceIssue]:
    """Scan every function record for CPU issues (unordered)."""

    issues: list[PerformanceIssue] = []
    for fn in session.functions:
        issues.extend(function_cpu_issues(fn))
    logger.debug("CPU detector | session=%s issues=%d", session.session_name, len(issues))
    return issues
