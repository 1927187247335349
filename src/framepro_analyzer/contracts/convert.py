"""Contract/domain conversion utilities using `cattrs`.

Two shared converters live here:

``input_converter``
    Structures FramePro JSON exports (PascalCase keys) into the attrs domain
    models of :mod:`framepro_analyzer.data.models`.
``output_converter``
    Unstructures analysis results into the camelCase mappings returned by the
    tools (and rendered as JSON text or Markdown).
"""

from __future__ import annotations

import math
from typing import Any

import attrs
from cattrs import Converter
from cattrs.gen import make_dict_structure_fn, override

from framepro_analyzer.analysis.aggregate import PerformanceAnalysis
from framepro_analyzer.analysis.frame_times import FrameTimeAnalysis
from framepro_analyzer.data.models import (
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
)

# Public converter instances; hooks are registered on import.
input_converter = Converter()
output_converter = Converter()


def pascal_case(name: str) -> str:
    """Map a snake_case attribute name to its FramePro JSON key.

    >>> pascal_case("max_time_per_frame_ms")
    'MaxTimePerFrameMs'
    """

    return "".join(part.capitalize() for part in name.split("_"))


def _structure_strict_bool(value: Any, _: type) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected a JSON boolean, got {type(value).__name__}")
    return value


def _structure_strict_int(value: Any, _: type) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a JSON integer, got {type(value).__name__}")
    if isinstance(value, float) and not value.is_integer():
        raise TypeError(f"expected a JSON integer, got {value!r}")
    return int(value)


def _structure_strict_float(value: Any, _: type) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a JSON number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise ValueError(f"expected a finite number, got {value!r}")
    return float(value)


def _structure_strict_str(value: Any, _: type) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a JSON string, got {type(value).__name__}")
    return value


def register_framepro_input_hooks(conv: Converter) -> None:
    """Register PascalCase structure hooks for the session models.

    Primitive hooks are strict: JSON values of the wrong type are rejected
    rather than coerced (``"false"`` is not a bool, ``1.9`` is not an int).
    They are registered before the class hooks, which look them up when
    generated. Leaf types come first so container fields pick up their hooks.
    """

    conv.register_structure_hook(bool, _structure_strict_bool)
    conv.register_structure_hook(int, _structure_strict_int)
    conv.register_structure_hook(float, _structure_strict_float)
    conv.register_structure_hook(str, _structure_strict_str)

    for cls in (FunctionRecord, FrameRecord, ProfileSession):
        renames = {a.name: override(rename=pascal_case(a.name)) for a in attrs.fields(cls)}
        conv.register_structure_hook(cls, make_dict_structure_fn(cls, conv, **renames))


def structure_session(payload: dict[str, Any]) -> ProfileSession:
    """Structure a decoded FramePro export into a :class:`ProfileSession`."""

    return input_converter.structure(payload, ProfileSession)


# ---------------------------------------------------------------------------
# Output mappings
# ---------------------------------------------------------------------------


def _issue(issue: PerformanceIssue) -> dict:
    return {
        "severity": issue.severity.value,
        "category": issue.category,
        "description": issue.description,
        "impact": issue.impact,
        "suggestion": issue.suggestion,
        "value": issue.value,
    }


def _hotspot(h: Hotspot) -> dict:
    fn = h.function
    return {
        "rank": h.rank,
        "functionName": fn.function_name,
        "threadName": fn.thread_name,
        "threadId": fn.thread_id,
        "isMainThread": fn.is_main_thread,
        "isRenderThread": fn.is_render_thread,
        "totalTimeMs": fn.total_time_ms,
        "avgTimePerFrameMs": fn.avg_time_per_frame_ms,
        "maxTimePerFrameMs": fn.max_time_per_frame_ms,
        "totalCount": fn.total_count,
        "avgCountPerFrame": fn.avg_count_per_frame,
        "avgTimePerCallMs": h.avg_time_per_call_ms,
        "threadUtilization": fn.thread_utilization_percent,
        "suggestions": list(h.suggestions),
    }


def _regression(r: Regression) -> dict:
    return {
        "severity": r.severity.value,
        "function": r.current.function_name,
        "threadName": r.current.thread_name,
        "isMainThread": r.current.is_main_thread,
        "baselineTotalMs": r.baseline.total_time_ms,
        "currentTotalMs": r.current.total_time_ms,
        "totalTimeDiffMs": r.time_diff_ms,
        "totalPercentChange": r.percent_change,
        "baselineAvgMs": r.baseline.avg_time_per_frame_ms,
        "currentAvgMs": r.current.avg_time_per_frame_ms,
        "avgTimeDiffMs": r.avg_time_diff_ms,
        "avgPercentChange": r.avg_percent_change,
        "baselineUtilization": r.baseline.thread_utilization_percent,
        "currentUtilization": r.current.thread_utilization_percent,
    }


def _improvement(i: Improvement) -> dict:
    return {
        "function": i.current.function_name,
        "threadName": i.current.thread_name,
        "baselineTotalMs": i.baseline.total_time_ms,
        "currentTotalMs": i.current.total_time_ms,
        "totalTimeDiffMs": i.time_diff_ms,
        "totalPercentChange": i.percent_change,
        "avgPercentChange": i.avg_percent_change,
    }


def _new_function(n: NewFunction) -> dict:
    return {
        "function": n.current.function_name,
        "threadName": n.current.thread_name,
        "totalMs": n.current.total_time_ms,
        "avgMs": n.current.avg_time_per_frame_ms,
    }


def _removed_function(r: RemovedFunction) -> dict:
    return {
        "function": r.baseline.function_name,
        "threadName": r.baseline.thread_name,
        "totalMs": r.baseline.total_time_ms,
    }


def _problem_function(fn: FunctionRecord) -> dict:
    return {
        "function": fn.function_name,
        "maxTimePerFrame": fn.max_time_per_frame_ms,
        "avgTimePerFrame": fn.avg_time_per_frame_ms,
        "threadUtilization": fn.thread_utilization_percent,
        "impact": "Blocks main thread, causes frame drops",
    }


def register_output_hooks(conv: Converter) -> None:
    """Register unstructure hooks producing the tool output mappings."""

    conv.register_unstructure_hook(PerformanceIssue, _issue)
    conv.register_unstructure_hook(Hotspot, _hotspot)
    conv.register_unstructure_hook(Regression, _regression)
    conv.register_unstructure_hook(Improvement, _improvement)
    conv.register_unstructure_hook(NewFunction, _new_function)
    conv.register_unstructure_hook(RemovedFunction, _removed_function)

    def _analysis(a: PerformanceAnalysis) -> dict:
        return {
            "focus": a.focus.value,
            "issuesFound": a.issues_found,
            "issues": [_issue(i) for i in a.issues],
            "summary": a.summary,
        }

    def _frame_times(f: FrameTimeAnalysis) -> dict:
        return {
            "targetFps": f.target_fps,
            "estimatedFps": f.estimated_fps,
            "mainThreadAvgWorkMs": f.main_thread_avg_work_ms,
            "targetFrameTimeMs": f.target_frame_time_ms,
            "problemFunctions": [_problem_function(fn) for fn in f.problem_functions],
            "mainThreadFunctionCount": f.main_thread_function_count,
            "slowFrames": f.slow_frames,
            "stutters": f.stutters,
            "analysis": list(f.analysis),
        }

    def _comparison(c: ComparisonResult) -> dict:
        return {
            "regressions": [_regression(r) for r in c.regressions],
            "improvements": [_improvement(i) for i in c.improvements],
            "newFunctions": [_new_function(n) for n in c.new_functions],
            "removedFunctions": [_removed_function(r) for r in c.removed_functions],
            "summary": c.summary,
        }

    conv.register_unstructure_hook(PerformanceAnalysis, _analysis)
    conv.register_unstructure_hook(FrameTimeAnalysis, _frame_times)
    conv.register_unstructure_hook(ComparisonResult, _comparison)


# Configure the shared converters on import so downstream callers can rely on them.
register_framepro_input_hooks(input_converter)
register_output_hooks(output_converter)
