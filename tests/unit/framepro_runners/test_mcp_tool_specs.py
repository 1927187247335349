"""Unit tests for the MCP server wiring (no stdio transport involved)."""

from __future__ import annotations

from framepro_analyzer.config import AnalyzerSettings
from framepro_analyzer.runners.mcp_server import build_server, list_tool_specs


def test_tool_specs_mirror_tool_definitions() -> None:
    specs = list_tool_specs()
    assert [s.name for s in specs] == ["analyze_performance", "find_hotspots", "analyze_frame_times", "compare_profiles"]
    analyze = specs[0]
    assert analyze.inputSchema["properties"]["focus"]["enum"] == ["cpu", "frames", "threads", "all"]
    assert analyze.inputSchema["required"] == ["file_path"]


def test_server_uses_configured_name() -> None:
    server = build_server(AnalyzerSettings(server_name="Perf", server_version="9.9"))
    assert server.name == "Perf"
