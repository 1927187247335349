"""Baseline-vs-current profile comparison.

Functions are matched on ``(function_name, thread_id)``. Matching runs in two
passes: the first classifies every current function and records which baseline
keys it consumed; the second reports unconsumed baseline entries as removed.
"""

from __future__ import annotations

import logging

from attrs import evolve

from framepro_analyzer.data.models import (
    ComparisonResult,
    FunctionRecord,
    Improvement,
    NewFunction,
    ProfileSession,
    Regression,
    RemovedFunction,
    Severity,
)

logger = logging.getLogger(__name__)

REGRESSION_THRESHOLD_PCT = 10.0
HIGH_REGRESSION_THRESHOLD_PCT = 50.0
SIGNIFICANT_TIME_MS = 10.0


def percent_change(baseline: float, current: float) -> float:
    return (current - baseline) / (baseline + 0.001) * 100


def regression_severity(change_pct: float, current: FunctionRecord) -> Severity:
    if current.is_main_thread:
        return Severity.CRITICAL
    if change_pct > HIGH_REGRESSION_THRESHOLD_PCT:
        return Severity.HIGH
    return Severity.MEDIUM


def comparison_summary(result: ComparisonResult) -> str:
    return (
        f"Found {len(result.regressions)} regressions ({result.critical_regressions} critical), "
        f"{len(result.improvements)} improvements, {len(result.new_functions)} new functions, "
        f"{len(result.removed_functions)} removed functions"
    )


def compare_profiles(baseline: ProfileSession, current: ProfileSession) -> ComparisonResult:
    """Classify regressions, improvements, new and removed functions."""

    baseline_index: dict[tuple[str, int], FunctionRecord] = {fn.key: fn for fn in baseline.functions}
    consumed: set[tuple[str, int]] = set()

    regressions: list[Regression] = []
    improvements: list[Improvement] = []
    new_functions: list[NewFunction] = []

    for cur in current.functions:
        # A baseline entry matches at most one current entry.
        base = None if cur.key in consumed else baseline_index.get(cur.key)
        if base is None:
            if cur.total_time_ms > SIGNIFICANT_TIME_MS:
                new_functions.append(NewFunction(current=cur))
            continue

        consumed.add(cur.key)
        change = percent_change(base.total_time_ms, cur.total_time_ms)
        avg_change = percent_change(base.avg_time_per_frame_ms, cur.avg_time_per_frame_ms)
        if change > REGRESSION_THRESHOLD_PCT:
            regressions.append(
                Regression(
                    severity=regression_severity(change, cur),
                    baseline=base,
                    current=cur,
                    time_diff_ms=cur.total_time_ms - base.total_time_ms,
                    percent_change=change,
                    avg_time_diff_ms=cur.avg_time_per_frame_ms - base.avg_time_per_frame_ms,
                    avg_percent_change=avg_change,
                )
            )
        elif change < -REGRESSION_THRESHOLD_PCT:
            improvements.append(
                Improvement(
                    baseline=base,
                    current=cur,
                    time_diff_ms=cur.total_time_ms - base.total_time_ms,
                    percent_change=change,
                    avg_percent_change=avg_change,
                )
            )

    removed = [
        RemovedFunction(baseline=fn)
        for key, fn in baseline_index.items()
        if key not in consumed and fn.total_time_ms > SIGNIFICANT_TIME_MS
    ]

    regressions.sort(key=lambda r: (r.severity.rank, -r.percent_change))

    result = ComparisonResult(
        regressions=regressions,
        improvements=improvements,
        new_functions=new_functions,
        removed_functions=removed,
    )
    result = evolve(result, summary=comparison_summary(result))
    logger.info(
        "Profile comparison | baseline=%s current=%s %s",
        baseline.session_name,
        current.session_name,
        result.summary,
    )
    return result
