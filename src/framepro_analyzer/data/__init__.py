"""Domain models for FramePro profiling sessions and analysis results.

This package hosts the attrs-based session model (sessions, function and
frame records) plus the issue/hotspot/comparison result types. File loading
lives in :mod:`framepro_analyzer.data.loader`.
"""

from __future__ import annotations

from .models import (
    ComparisonResult,
    FrameRecord,
    FunctionRecord,
    Hotspot,
    Improvement,
    NewFunction,
    PerformanceIssue,
    ProfileSession,
    Regression,
    RemovedFunction,
    Severity,
    ThreadStats,
)

__all__ = [
    # Session model
    "FunctionRecord",
    "FrameRecord",
    "ProfileSession",
    # Analysis results
    "Severity",
    "PerformanceIssue",
    "ThreadStats",
    "Hotspot",
    "Regression",
    "Improvement",
    "NewFunction",
    "RemovedFunction",
    "ComparisonResult",
]
