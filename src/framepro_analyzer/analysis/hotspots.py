"""Hotspot ranking by total function time."""

from __future__ import annotations

from framepro_analyzer.analysis.suggestions import function_suggestions
from framepro_analyzer.data.models import FunctionRecord, Hotspot, ProfileSession

DEFAULT_TOP_N = 10


def sort_by_total_time(functions: tuple[FunctionRecord, ...] | list[FunctionRecord]) -> list[FunctionRecord]:
    """Return records ordered by ``total_time_ms`` descending; ties keep input order."""

    return sorted(functions, key=lambda fn: fn.total_time_ms, reverse=True)


def clamp_top_n(top_n: int, available: int) -> int:
    return min(max(int(top_n), 0), available)


def find_hotspots(session: ProfileSession, top_n: int = DEFAULT_TOP_N) -> list[Hotspot]:
    """Return the ``top_n`` most expensive functions with suggestions.

    ``top_n`` is clamped to ``[0, len(session.functions)]``.
    """

    ranked = sort_by_total_time(session.functions)
    n = clamp_top_n(top_n, len(ranked))
    return [
        Hotspot(rank=i, function=fn, suggestions=function_suggestions(fn))
        for i, fn in enumerate(ranked[:n], start=1)
    ]
