"""Analysis engine: issue detectors, hotspot ranking, frame times, diffing.

Every function here is pure and works on an already-parsed
:class:`~framepro_analyzer.data.models.ProfileSession`.
"""

from __future__ import annotations

from .aggregate import Focus, PerformanceAnalysis, analyze_performance, generate_summary, rank_issues
from .compare import compare_profiles
from .cpu import analyze_cpu_performance
from .frame_times import FrameTimeAnalysis, analyze_frame_times
from .frames import analyze_frame_performance
from .hotspots import find_hotspots
from .suggestions import SuggestionStyle, function_suggestions, generate_suggestions, optimization_suggestion
from .threads import analyze_thread_performance

__all__ = [
    "Focus",
    "FrameTimeAnalysis",
    "PerformanceAnalysis",
    "SuggestionStyle",
    "analyze_cpu_performance",
    "analyze_frame_performance",
    "analyze_frame_times",
    "analyze_performance",
    "analyze_thread_performance",
    "compare_profiles",
    "find_hotspots",
    "function_suggestions",
    "generate_summary",
    "generate_suggestions",
    "optimization_suggestion",
    "rank_issues",
]
