"""Unit tests for the CPU issue detector."""

from __future__ import annotations

from framepro_analyzer.analysis.aggregate import analyze_performance
from framepro_analyzer.analysis.cpu import analyze_cpu_performance, function_cpu_issues
from framepro_analyzer.data.models import FunctionRecord, ProfileSession, Severity


def _fn(name: str = "Work", **kw) -> FunctionRecord:
    kw.setdefault("thread_name", "Worker 0")
    return FunctionRecord(function_name=name, **kw)


def _categories(issues) -> list[str]:
    return [i.category for i in issues]


def test_empty_session_yields_no_issues() -> None:
    assert analyze_cpu_performance(ProfileSession(functions=[])) == []


def test_hotspot_severity_thresholds() -> None:
    high = function_cpu_issues(_fn(total_time_ms=150.0))
    critical = function_cpu_issues(_fn(total_time_ms=501.0))
    assert [(i.category, i.severity) for i in high] == [("CPU Hotspot", Severity.HIGH)]
    assert [(i.category, i.severity) for i in critical] == [("CPU Hotspot", Severity.CRITICAL)]
    assert function_cpu_issues(_fn(total_time_ms=100.0)) == []


def test_main_thread_hotspot_is_always_critical() -> None:
    issues = function_cpu_issues(_fn(total_time_ms=600.0, is_main_thread=True, thread_name="Main"))
    hotspot = [i for i in issues if i.category == "CPU Hotspot"]
    assert hotspot[0].severity is Severity.CRITICAL
    assert "MAIN THREAD" in hotspot[0].description
    assert hotspot[0].value == 600.0

    lower = function_cpu_issues(_fn(total_time_ms=120.0, is_main_thread=True))
    assert lower[0].severity is Severity.CRITICAL


def test_render_thread_is_labelled_in_description() -> None:
    issues = function_cpu_issues(_fn(total_time_ms=200.0, is_render_thread=True, thread_name="Render"))
    assert "RENDER THREAD" in issues[0].description
    assert issues[0].severity is Severity.HIGH


def test_call_frequency_rule() -> None:
    issues = function_cpu_issues(_fn(total_count=20000, total_time_ms=60.0))
    assert _categories(issues) == ["Call Frequency"]
    assert issues[0].severity is Severity.MEDIUM
    assert issues[0].value == 20000.0
    assert function_cpu_issues(_fn(total_count=20000, total_time_ms=50.0)) == []


def test_frame_spike_requires_call_volume() -> None:
    spike = function_cpu_issues(_fn(max_time_per_frame_ms=20.0, total_count=101))
    assert _categories(spike) == ["Frame Spike"]
    assert spike[0].severity is Severity.HIGH
    assert spike[0].value == 20.0
    assert function_cpu_issues(_fn(max_time_per_frame_ms=20.0, total_count=100)) == []


def test_thread_saturation_rule_and_multiple_triggers() -> None:
    issues = function_cpu_issues(_fn(thread_utilization_percent=97.0, total_time_ms=150.0))
    assert _categories(issues) == ["CPU Hotspot", "Thread Saturation"]
    saturation = issues[1]
    assert saturation.severity is Severity.CRITICAL
    assert saturation.value == 97.0


def test_physics_step_scenario() -> None:
    session = ProfileSession(
        session_name="A",
        functions=[
            FunctionRecord(
                function_name="Physics.Step",
                thread_id=1,
                thread_name="Main",
                is_main_thread=True,
                total_time_ms=600,
                total_count=50,
                max_time_per_frame_ms=20,
                avg_time_per_frame_ms=18,
                thread_utilization_percent=40,
            )
        ],
    )
    result = analyze_performance(session, "cpu")
    critical = [i for i in result.issues if i.severity is Severity.CRITICAL]
    assert critical
    assert critical[0].category in ("CPU Hotspot", "Frame Spike")
    assert "physics" in critical[0].suggestion.lower()
