"""Tool layer: map a tool name plus arguments to an analysis run.

Each tool loads its session file(s), runs one analysis operation and returns a
JSON-ready mapping. The same entry points back the MCP server and the CLI.

Functions
---------
invoke_tool
    Validate arguments, run the named tool, return its result mapping.
render_result
    Serialize a result mapping as indented JSON text.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Mapping, Optional

from attrs import frozen

from framepro_analyzer.analysis.aggregate import analyze_performance
from framepro_analyzer.analysis.compare import compare_profiles
from framepro_analyzer.analysis.frame_times import analyze_frame_times
from framepro_analyzer.analysis.hotspots import clamp_top_n, find_hotspots
from framepro_analyzer.config import AnalyzerSettings
from framepro_analyzer.contracts.convert import output_converter
from framepro_analyzer.contracts.models import (
    FOCUS_VALUES,
    AnalyzeFrameTimesRequest,
    AnalyzePerformanceRequest,
    CompareProfilesRequest,
    FindHotspotsRequest,
)
from framepro_analyzer.data.loader import load_session
from framepro_analyzer.data.models import ProfileSession
from framepro_analyzer.errors import AnalyzerError, InvalidRequestError

logger = logging.getLogger(__name__)


@frozen(kw_only=True)
class ToolDefinition:
    """Published description of one tool (name, help text, JSON schema)."""

    name: str
    description: str
    input_schema: Mapping[str, Any]


TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name="analyze_performance",
        description=(
            "Analyzes FramePro JSON data and identifies performance bottlenecks, "
            "hotspots, and optimization opportunities"
        ),
        input_schema={
            "type": "object",
            "properties": {
                "file_path": {"type": "string", "description": "Path to the FramePro JSON file to analyze"},
                "focus": {
                    "type": "string",
                    "enum": list(FOCUS_VALUES),
                    "description": "Optional focus area: 'cpu', 'frames', 'threads', or 'all' (default: 'all')",
                },
            },
            "required": ["file_path"],
        },
    ),
    ToolDefinition(
        name="find_hotspots",
        description="Identifies the top performance hotspots (most expensive functions) in the FramePro data",
        input_schema={
            "type": "object",
            "properties": {
                "file_path": {"type": "string", "description": "Path to the FramePro JSON file"},
                "top_n": {"type": "number", "description": "Number of top hotspots to return (default: 10)"},
            },
            "required": ["file_path"],
        },
    ),
    ToolDefinition(
        name="analyze_frame_times",
        description="Analyzes frame timing data to detect stuttering, spikes, and frame rate issues",
        input_schema={
            "type": "object",
            "properties": {
                "file_path": {"type": "string", "description": "Path to the FramePro JSON file"},
                "target_fps": {"type": "number", "description": "Target FPS for comparison (default: 60)"},
            },
            "required": ["file_path"],
        },
    ),
    ToolDefinition(
        name="compare_profiles",
        description="Compares two FramePro profiles to identify performance regressions or improvements",
        input_schema={
            "type": "object",
            "properties": {
                "baseline_path": {"type": "string", "description": "Path to the baseline FramePro JSON file"},
                "current_path": {"type": "string", "description": "Path to the current FramePro JSON file"},
            },
            "required": ["baseline_path", "current_path"],
        },
    ),
)


def _arg(arguments: Mapping[str, Any], name: str, default: Any) -> Any:
    """Return an argument value; ``None`` and empty strings mean "unset"."""

    value = arguments.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    return value


def _load(path: str, settings: AnalyzerSettings, context: str) -> ProfileSession:
    try:
        return load_session(path, settings.data_dir)
    except AnalyzerError as exc:
        exc.context = context
        raise


def run_analyze_performance(req: AnalyzePerformanceRequest, settings: AnalyzerSettings) -> dict:
    session = _load(req.file_path, settings, "Failed to load FramePro data")
    result = analyze_performance(session, req.focus)
    return {"file": req.file_path, "sessionName": session.session_name, **output_converter.unstructure(result)}


def run_find_hotspots(req: FindHotspotsRequest, settings: AnalyzerSettings) -> dict:
    session = _load(req.file_path, settings, "Failed to load FramePro data")
    hotspots = find_hotspots(session, req.top_n)
    return {
        "file": req.file_path,
        "sessionName": session.session_name,
        "topN": clamp_top_n(req.top_n, session.function_count),
        "hotspots": [output_converter.unstructure(h) for h in hotspots],
    }


def run_analyze_frame_times(req: AnalyzeFrameTimesRequest, settings: AnalyzerSettings) -> dict:
    session = _load(req.file_path, settings, "Failed to load FramePro data")
    result = analyze_frame_times(session, req.target_fps)
    return {
        "file": req.file_path,
        "sessionName": session.session_name,
        "totalFrames": session.total_frames,
        **output_converter.unstructure(result),
    }


def run_compare_profiles(req: CompareProfilesRequest, settings: AnalyzerSettings) -> dict:
    baseline = _load(req.baseline_path, settings, "Failed to load baseline data")
    current = _load(req.current_path, settings, "Failed to load current data")
    result = compare_profiles(baseline, current)
    return {
        "baseline": req.baseline_path,
        "baselineSession": baseline.session_name,
        "current": req.current_path,
        "currentSession": current.session_name,
        **output_converter.unstructure(result),
    }


def _build_request(name: str, arguments: Mapping[str, Any], settings: AnalyzerSettings) -> object:
    if name == "analyze_performance":
        return AnalyzePerformanceRequest(
            file_path=_arg(arguments, "file_path", ""),
            focus=_arg(arguments, "focus", settings.default_focus),
        )
    if name == "find_hotspots":
        return FindHotspotsRequest(
            file_path=_arg(arguments, "file_path", ""),
            top_n=_arg(arguments, "top_n", settings.default_top_n),
        )
    if name == "analyze_frame_times":
        return AnalyzeFrameTimesRequest(
            file_path=_arg(arguments, "file_path", ""),
            target_fps=_arg(arguments, "target_fps", settings.default_target_fps),
        )
    if name == "compare_profiles":
        return CompareProfilesRequest(
            baseline_path=_arg(arguments, "baseline_path", ""),
            current_path=_arg(arguments, "current_path", ""),
        )
    raise InvalidRequestError(f"Unknown tool: {name}")


_RUNNERS: dict[str, Callable[[Any, AnalyzerSettings], dict]] = {
    "analyze_performance": run_analyze_performance,
    "find_hotspots": run_find_hotspots,
    "analyze_frame_times": run_analyze_frame_times,
    "compare_profiles": run_compare_profiles,
}


def invoke_tool(
    name: str,
    arguments: Optional[Mapping[str, Any]] = None,
    settings: Optional[AnalyzerSettings] = None,
) -> dict:
    """Run tool ``name`` with ``arguments``.

    Raises
    ------
    InvalidRequestError
        Unknown tool or arguments rejected by the request contract.
    InputUnavailableError, InputMalformedError
        The session file(s) could not be loaded.
    """

    settings = settings or AnalyzerSettings()
    if not isinstance(arguments, Mapping):
        if arguments is not None:
            raise InvalidRequestError("Invalid arguments format")
        arguments = {}
    try:
        request = _build_request(name, arguments, settings)
    except (TypeError, ValueError) as exc:
        raise InvalidRequestError(f"Invalid arguments for {name}: {exc}") from exc

    logger.info("Tool call | name=%s request=%s", name, request)
    return _RUNNERS[name](request, settings)


def render_result(result: Mapping[str, Any]) -> str:
    """Serialize a tool result as 2-space indented JSON."""

    return json.dumps(result, indent=2)
