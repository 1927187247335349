"""Markdown rendering of tool results.

Functions
---------
write_result_markdown
    Write any tool result mapping as a Markdown report using mdutils.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from mdutils.mdutils import MdUtils  # type: ignore[import-untyped]

_TITLES = {
    "analyze_performance": "Performance Analysis",
    "find_hotspots": "Hotspots",
    "analyze_frame_times": "Frame Time Analysis",
    "compare_profiles": "Profile Comparison",
}


def _fmt(value: Any) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float):
        return f"{value:.3f}"
    if isinstance(value, (list, tuple)):
        return "<br>".join(str(v) for v in value)
    return str(value)


def _table(md: MdUtils, title: str, rows: Sequence[Mapping[str, Any]], columns: Sequence[str]) -> None:
    """Emit a header plus a table (or an empty-state paragraph)."""

    md.new_header(level=2, title=title)
    if not rows:
        md.new_paragraph("None.")
        return
    # mdutils expects a flattened list row-wise (including header)
    table_data: list[str] = list(columns)
    for r in rows:
        table_data.extend(_fmt(r.get(c, "")) for c in columns)
    md.new_table(columns=len(columns), rows=len(rows) + 1, text=table_data, text_align="left")


def _overview(md: MdUtils, result: Mapping[str, Any], keys: Sequence[str]) -> None:
    items = [f"{k}: {_fmt(result[k])}" for k in keys if k in result]
    if items:
        md.new_list(items=items)


def write_result_markdown(tool_name: str, result: Mapping[str, Any], path: str) -> None:
    """Write a tool result as a Markdown report.

    Parameters
    ----------
    tool_name : str
        Tool that produced ``result`` (selects the sections rendered).
    result : Mapping[str, Any]
        Mapping returned by :func:`framepro_analyzer.runners.tools.invoke_tool`.
    path : str
        Destination file path. A trailing ``.md`` is stripped because mdutils
        appends it automatically.
    """

    file_base = path[:-3] if path.endswith(".md") else path
    md = MdUtils(file_name=file_base)
    md.new_header(level=1, title=_TITLES.get(tool_name, tool_name))
    md.new_list(items=[f"Generated: {datetime.now(timezone.utc).isoformat()}"])

    if "summary" in result:
        md.new_paragraph(str(result["summary"]))

    if tool_name == "analyze_performance":
        _overview(md, result, ["file", "sessionName", "focus", "issuesFound"])
        _table(
            md,
            "Issues",
            result.get("issues", []),
            ["severity", "category", "description", "impact", "suggestion"],
        )
    elif tool_name == "find_hotspots":
        _overview(md, result, ["file", "sessionName", "topN"])
        _table(
            md,
            "Top Functions",
            result.get("hotspots", []),
            ["rank", "functionName", "threadName", "totalTimeMs", "totalCount", "avgTimePerCallMs", "suggestions"],
        )
    elif tool_name == "analyze_frame_times":
        _overview(
            md,
            result,
            ["file", "sessionName", "totalFrames", "targetFps", "estimatedFps", "mainThreadAvgWorkMs", "slowFrames", "stutters"],
        )
        md.new_header(level=2, title="Findings")
        md.new_list(items=[str(a) for a in result.get("analysis", [])] or ["None."])
        _table(
            md,
            "Problem Functions",
            result.get("problemFunctions", []),
            ["function", "maxTimePerFrame", "avgTimePerFrame", "threadUtilization"],
        )
    elif tool_name == "compare_profiles":
        _overview(md, result, ["baseline", "baselineSession", "current", "currentSession"])
        _table(
            md,
            "Regressions",
            result.get("regressions", []),
            ["severity", "function", "threadName", "baselineTotalMs", "currentTotalMs", "totalPercentChange"],
        )
        _table(
            md,
            "Improvements",
            result.get("improvements", []),
            ["function", "threadName", "baselineTotalMs", "currentTotalMs", "totalPercentChange"],
        )
        _table(md, "New Functions", result.get("newFunctions", []), ["function", "threadName", "totalMs", "avgMs"])
        _table(md, "Removed Functions", result.get("removedFunctions", []), ["function", "threadName", "totalMs"])

    md.create_md_file()
