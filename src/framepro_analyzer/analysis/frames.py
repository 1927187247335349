"""Frame-budget issue detection.

Main-thread functions are checked against the 30 FPS and 60 FPS frame
budgets; every function is checked for inconsistent per-frame timing. The
detector only runs for sessions that captured frames.
"""

from __future__ import annotations

import logging

from framepro_analyzer.data.models import (
    FRAME_BUDGET_30_FPS_MS,
    FRAME_BUDGET_60_FPS_MS,
    PerformanceIssue,
    ProfileSession,
    Severity,
)

logger = logging.getLogger(__name__)

VARIANCE_ISSUE_RATIO = 5.0
VARIANCE_MIN_AVG_MS = 1.0


def analyze_frame_performance(session: ProfileSession) -> list[PerformanceIssue]:
    """Return frame-budget and variance issues plus one session info entry.

    Sessions with ``total_frames == 0`` yield no issues at all.
    """

    issues: list[PerformanceIssue] = []
    if session.total_frames <= 0:
        return issues

    for fn in session.functions:
        if fn.is_main_thread and fn.max_time_per_frame_ms > FRAME_BUDGET_30_FPS_MS:
            issues.append(
                PerformanceIssue(
                    severity=Severity.CRITICAL,
                    category="Frame Spike - Main Thread",
                    description=f"Function '{fn.function_name}' causes critical frame spikes on main thread",
                    impact=(
                        f"Max {fn.max_time_per_frame_ms:.2f}ms per frame "
                        f"(target: {FRAME_BUDGET_60_FPS_MS}ms for 60fps), avg {fn.avg_time_per_frame_ms:.2f}ms"
                    ),
                    suggestion=(
                        "This blocks the main thread and causes stuttering. "
                        "Move to worker thread or optimize urgently"
                    ),
                    value=fn.max_time_per_frame_ms,
                )
            )
        elif fn.is_main_thread and fn.max_time_per_frame_ms > FRAME_BUDGET_60_FPS_MS:
            issues.append(
                PerformanceIssue(
                    severity=Severity.HIGH,
                    category="Frame Performance",
                    description=f"Function '{fn.function_name}' on main thread exceeds 60fps budget",
                    impact=(
                        f"Max {fn.max_time_per_frame_ms:.2f}ms per frame "
                        f"(target: {FRAME_BUDGET_60_FPS_MS}ms), avg {fn.avg_time_per_frame_ms:.2f}ms"
                    ),
                    suggestion="Optimize or move to worker thread to maintain 60fps",
                    value=fn.max_time_per_frame_ms,
                )
            )

        variance = fn.variance_ratio
        if variance > VARIANCE_ISSUE_RATIO and fn.avg_time_per_frame_ms > VARIANCE_MIN_AVG_MS:
            issues.append(
                PerformanceIssue(
                    severity=Severity.MEDIUM,
                    category="Inconsistent Performance",
                    description=f"Function '{fn.function_name}' has highly variable frame times",
                    impact=(
                        f"Max/Avg ratio: {variance:.1f}x "
                        f"(max: {fn.max_time_per_frame_ms:.2f}ms, avg: {fn.avg_time_per_frame_ms:.2f}ms)"
                    ),
                    suggestion=(
                        "Inconsistent performance causes stuttering. "
                        "Investigate what causes occasional slowdowns"
                    ),
                    value=variance,
                )
            )

    issues.append(
        PerformanceIssue(
            severity=Severity.INFO,
            category="Session Info",
            description=f"Profiling session: {session.session_name}",
            impact=f"Captured {session.total_frames} frames with {session.function_count} unique functions",
            suggestion="Analysis based on this profiling session",
            value=session.total_frames,
        )
    )
    logger.debug("Frame detector | session=%s issues=%d", session.session_name, len(issues))
    return issues
