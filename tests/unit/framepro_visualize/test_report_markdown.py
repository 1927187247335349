"""Unit tests for the Markdown report writer."""

from __future__ import annotations

from pathlib import Path

from framepro_analyzer.visualize.report_md import write_result_markdown


def test_hotspot_table(tmp_path: Path) -> None:
    result = {
        "file": "capture.json",
        "sessionName": "Level1",
        "topN": 1,
        "hotspots": [
            {
                "rank": 1,
                "functionName": "Render|Draw",
                "threadName": "Render",
                "totalTimeMs": 250.0,
                "totalCount": 9,
                "avgTimePerCallMs": 25.0,
                "suggestions": ["a", "b"],
            }
        ],
    }
    out = tmp_path / "hotspots.md"
    write_result_markdown("find_hotspots", result, str(out))
    text = out.read_text(encoding="utf-8")
    assert "# Hotspots" in text or "Hotspots\n===" in text
    assert "Top Functions" in text
    assert "Render\\|Draw" in text
    assert "Render\\\\|Draw" not in text
    assert "250.000" in text
    assert "a<br>b" in text


def test_empty_sections_render_placeholder(tmp_path: Path) -> None:
    result = {
        "baseline": "a.json",
        "baselineSession": "A",
        "current": "b.json",
        "currentSession": "B",
        "regressions": [],
        "improvements": [],
        "newFunctions": [],
        "removedFunctions": [],
        "summary": "Found 0 regressions (0 critical), 0 improvements, 0 new functions, 0 removed functions",
    }
    out = tmp_path / "compare"
    write_result_markdown("compare_profiles", result, str(out))
    text = (tmp_path / "compare.md").read_text(encoding="utf-8")
    for header in ("Regressions", "Improvements", "New Functions", "Removed Functions"):
        assert header in text
    assert text.count("None.") == 4
    assert "Found 0 regressions" in text


def test_frame_findings_listed(tmp_path: Path) -> None:
    result = {
        "file": "capture.json",
        "totalFrames": 4,
        "targetFps": 60.0,
        "estimatedFps": 33.3,
        "problemFunctions": [],
        "analysis": ["1 frames exceeded target frame time"],
    }
    out = tmp_path / "frames.md"
    write_result_markdown("analyze_frame_times", result, str(out))
    text = out.read_text(encoding="utf-8")
    assert "Findings" in text
    assert "1 frames exceeded target frame time" in text
    assert "Problem Functions" in text
