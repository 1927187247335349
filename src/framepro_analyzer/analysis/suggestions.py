"""Heuristic optimization suggestions for a single function record.

Suggestions come from one declarative rule table. Each rule pairs a predicate
over a :class:`FunctionRecord` with per-style hint templates; a rule only
contributes to the styles it has templates for. Two styles exist:

``SuggestionStyle.SUMMARY``
    Short hints joined into one string (used by the CPU detector).
``SuggestionStyle.DETAILED``
    An ordered list of longer hints (used by the hotspot ranker).

Templates are ``str.format`` strings and may reference ``utilization``,
``variance`` and ``avg_call_ms``.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Mapping

from attrs import frozen

from framepro_analyzer.data.models import FunctionRecord


class SuggestionStyle(Enum):
    SUMMARY = "summary"
    DETAILED = "detailed"


SUMMARY = SuggestionStyle.SUMMARY
DETAILED = SuggestionStyle.DETAILED


@frozen
class SuggestionRule:
    """A ``(predicate, templates)`` pair in the suggestion table."""

    name: str
    predicate: Callable[[FunctionRecord], bool]
    templates: Mapping[SuggestionStyle, tuple[str, ...]]

    def render(self, fn: FunctionRecord, style: SuggestionStyle) -> list[str]:
        templates = self.templates.get(style)
        if not templates or not self.predicate(fn):
            return []
        ctx = {
            "utilization": fn.thread_utilization_percent,
            "variance": fn.variance_ratio,
            "avg_call_ms": fn.avg_time_per_call_ms,
        }
        return [t.format(**ctx) for t in templates]


def _name_has_any(*words: str) -> Callable[[FunctionRecord], bool]:
    def _pred(fn: FunctionRecord) -> bool:
        lowered = fn.function_name.lower()
        return any(w in lowered for w in words)

    return _pred


def _name_has_all(*words: str) -> Callable[[FunctionRecord], bool]:
    def _pred(fn: FunctionRecord) -> bool:
        lowered = fn.function_name.lower()
        return all(w in lowered for w in words)

    return _pred


SUGGESTION_RULES: tuple[SuggestionRule, ...] = (
    SuggestionRule(
        "main_thread",
        lambda fn: fn.is_main_thread,
        {SUMMARY: ("MAIN THREAD: Move to worker thread if possible",)},
    ),
    SuggestionRule(
        "render_thread",
        lambda fn: fn.is_render_thread,
        {SUMMARY: ("RENDER THREAD: Optimize GPU calls and state changes",)},
    ),
    SuggestionRule(
        "call_count",
        lambda fn: fn.total_count > 10000,
        {
            SUMMARY: ("High call count - consider caching or batching",),
            DETAILED: (
                "Consider caching or memoization to reduce repeated calculations",
                "Evaluate if call frequency can be reduced through batching",
            ),
        },
    ),
    SuggestionRule(
        "utilization_high",
        lambda fn: fn.thread_utilization_percent > 80.0,
        {SUMMARY: ("{utilization:.1f}% thread utilization - critical optimization target",)},
    ),
    SuggestionRule(
        "utilization_saturated",
        lambda fn: fn.thread_utilization_percent > 90.0,
        {DETAILED: ("Thread {utilization:.1f}% saturated - this is a critical optimization target",)},
    ),
    SuggestionRule(
        "main_thread_heavy",
        lambda fn: fn.is_main_thread and fn.avg_time_per_frame_ms > 5.0,
        {DETAILED: ("Main thread function taking significant time - consider moving to worker thread",)},
    ),
    SuggestionRule(
        "variance",
        lambda fn: fn.variance_ratio > 3.0,
        {
            SUMMARY: ("High variance ({variance:.1f}x) - investigate occasional slowdowns",),
            DETAILED: ("Inconsistent performance (max/avg: {variance:.1f}x) - investigate occasional slowdowns",),
        },
    ),
    SuggestionRule(
        "slow_calls",
        lambda fn: fn.avg_time_per_call_ms > 0.1 and fn.total_count > 1000,
        {DETAILED: ("High avg time per call ({avg_call_ms:.3f}ms) - review algorithm complexity",)},
    ),
    SuggestionRule(
        "wait_sleep",
        _name_has_any("wait", "sleep"),
        {SUMMARY: ("WAIT/SLEEP detected - may indicate synchronization issues or idle time",)},
    ),
    SuggestionRule(
        "event_wait",
        _name_has_all("event", "wait"),
        {DETAILED: ("Event waiting - may indicate thread synchronization overhead or idle time",)},
    ),
    SuggestionRule(
        "lock",
        _name_has_any("lock", "mutex"),
        {SUMMARY: ("Lock contention possible - review synchronization strategy",)},
    ),
    SuggestionRule(
        "physics",
        _name_has_any("physics"),
        {
            SUMMARY: ("Physics calculation - review collision detection and simulation complexity",),
            DETAILED: ("Physics - review collision detection, spatial partitioning, and simulation timestep",),
        },
    ),
    SuggestionRule(
        "rendering",
        _name_has_any("render", "draw"),
        {
            SUMMARY: ("Rendering function - check draw calls, batching, and GPU state changes",),
            DETAILED: ("Rendering - optimize draw calls, use instancing, check GPU state changes",),
        },
    ),
    SuggestionRule(
        "audio",
        _name_has_any("audio"),
        {SUMMARY: ("Audio processing - ensure streaming and buffering are optimized",)},
    ),
    SuggestionRule(
        "update",
        _name_has_any("update"),
        {
            SUMMARY: ("Update loop - review what systems are being updated and their frequency",),
            DETAILED: ("Update function - profile child systems and consider update frequency",),
        },
    ),
)

FALLBACK_HINTS: Mapping[SuggestionStyle, str] = {
    SUMMARY: "Review algorithm complexity and consider profiling child functions",
    DETAILED: "Profile child functions to identify specific bottlenecks",
}


def generate_suggestions(
    fn: FunctionRecord,
    style: SuggestionStyle,
    rules: tuple[SuggestionRule, ...] = SUGGESTION_RULES,
) -> list[str]:
    """Return the ordered hints for ``fn`` under ``style``.

    Exactly one fallback hint is returned when no rule fires.
    """

    hints: list[str] = []
    for rule in rules:
        hints.extend(rule.render(fn, style))
    if not hints:
        hints.append(FALLBACK_HINTS[style])
    return hints


def optimization_suggestion(fn: FunctionRecord) -> str:
    """Single-string suggestion attached to CPU hotspot issues."""

    return "; ".join(generate_suggestions(fn, SuggestionStyle.SUMMARY))


def function_suggestions(fn: FunctionRecord) -> list[str]:
    """Suggestion list attached to each ranked hotspot."""

    return generate_suggestions(fn, SuggestionStyle.DETAILED)


__all__ = [
    "FALLBACK_HINTS",
    "SUGGESTION_RULES",
    "SuggestionRule",
    "SuggestionStyle",
    "function_suggestions",
    "generate_suggestions",
    "optimization_suggestion",
]
