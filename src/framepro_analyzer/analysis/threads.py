"""Thread-level issue detection (saturation and main/render balance)."""

from __future__ import annotations

import logging

from framepro_analyzer.data.models import PerformanceIssue, ProfileSession, Severity, ThreadStats

logger = logging.getLogger(__name__)


def thread_key(thread_name: str, thread_id: int) -> str:
    return f"{thread_name} (ID:{thread_id})"


def collect_thread_stats(session: ProfileSession) -> dict[str, ThreadStats]:
    """Group function records by thread, in first-seen order.

    Role flags of a thread are taken from its first member function.
    """

    stats: dict[str, ThreadStats] = {}
    for fn in session.functions:
        key = thread_key(fn.thread_name, fn.thread_id)
        entry = stats.get(key)
        if entry is None:
            entry = ThreadStats(
                thread_name=fn.thread_name,
                thread_id=fn.thread_id,
                is_main_thread=fn.is_main_thread,
                is_render_thread=fn.is_render_thread,
            )
            stats[key] = entry
        entry.add(fn)
    return stats


def analyze_thread_performance(session: ProfileSession) -> list[PerformanceIssue]:
    """Return saturation issues per thread and one balance issue if skewed."""

    issues: list[PerformanceIssue] = []
    main_time = 0.0
    render_time = 0.0

    for stats in collect_thread_stats(session).values():
        if stats.is_main_thread:
            main_time = stats.total_time
        if stats.is_render_thread:
            render_time = stats.total_time

        if stats.max_utilization > 90.0:
            severity = Severity.HIGH if (stats.is_main_thread or stats.is_render_thread) else Severity.MEDIUM
            issues.append(
                PerformanceIssue(
                    severity=severity,
                    category="Thread Saturation",
                    description=f"Thread '{stats.thread_name}' is heavily saturated",
                    impact=(
                        f"{stats.max_utilization:.1f}% utilization with {stats.total_time:.2f}ms "
                        f"total work across {len(stats.functions)} functions"
                    ),
                    suggestion=(
                        "Thread is running at capacity. Consider redistributing work "
                        "or optimizing top functions"
                    ),
                    value=stats.max_utilization,
                )
            )

    if main_time > 0 and render_time > 0:
        ratio = main_time / render_time
        if ratio > 2.0 or ratio < 0.5:
            issues.append(
                PerformanceIssue(
                    severity=Severity.MEDIUM,
                    category="Thread Balance",
                    description="Imbalance between main thread and render thread",
                    impact=(
                        f"Main thread: {main_time:.2f}ms, Render thread: {render_time:.2f}ms "
                        f"(ratio: {ratio:.2f}:1)"
                    ),
                    suggestion=(
                        "Consider redistributing work between main and render threads "
                        "for better parallelization"
                    ),
                    value=ratio,
                )
            )

    logger.debug("Thread detector | session=%s issues=%d", session.session_name, len(issues))
    return issues
