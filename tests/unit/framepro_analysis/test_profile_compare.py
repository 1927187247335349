"""Unit tests for the baseline-vs-current profile differ."""

from __future__ import annotations

import pytest

from framepro_analyzer.analysis.compare import compare_profiles, percent_change
from framepro_analyzer.data.models import FunctionRecord, ProfileSession, Severity


def _fn(name: str, total: float, thread_id: int = 2, **kw) -> FunctionRecord:
    kw.setdefault("thread_name", "Render" if thread_id == 2 else "Main")
    return FunctionRecord(function_name=name, thread_id=thread_id, total_time_ms=total, **kw)


def _session(name: str, *functions: FunctionRecord) -> ProfileSession:
    return ProfileSession(session_name=name, functions=list(functions))


def test_identical_sessions_have_no_changes() -> None:
    s = _session("same", _fn("A", 100.0), _fn("B", 5.0))
    result = compare_profiles(s, s)
    assert result.regressions == ()
    assert result.improvements == ()
    assert result.new_functions == ()
    assert result.removed_functions == ()
    assert result.summary == "Found 0 regressions (0 critical), 0 improvements, 0 new functions, 0 removed functions"


def test_regression_severity_and_percent() -> None:
    baseline = _session("base", _fn("Draw", 100.0))
    current = _session("cur", _fn("Draw", 160.0))
    result = compare_profiles(baseline, current)
    assert len(result.regressions) == 1
    reg = result.regressions[0]
    assert reg.severity is Severity.HIGH
    assert reg.percent_change == pytest.approx(59.9994, rel=1e-5)
    assert reg.time_diff_ms == pytest.approx(60.0)


def test_main_thread_regression_is_critical() -> None:
    baseline = _session("base", _fn("Tick", 100.0, thread_id=1))
    current = _session("cur", _fn("Tick", 115.0, thread_id=1, is_main_thread=True))
    result = compare_profiles(baseline, current)
    assert result.regressions[0].severity is Severity.CRITICAL
    assert result.critical_regressions == 1
    assert "(1 critical)" in result.summary


def test_small_changes_are_ignored_and_improvements_detected() -> None:
    baseline = _session("base", _fn("Stable", 100.0), _fn("Faster", 100.0))
    current = _session("cur", _fn("Stable", 109.0), _fn("Faster", 50.0))
    result = compare_profiles(baseline, current)
    assert result.regressions == ()
    assert [i.current.function_name for i in result.improvements] == ["Faster"]
    assert result.improvements[0].percent_change < -10.0


def test_new_and_removed_respect_significance() -> None:
    baseline = _session("base", _fn("Gone", 50.0), _fn("Tiny", 5.0))
    current = _session("cur", _fn("Fresh", 20.0), _fn("Blip", 3.0))
    result = compare_profiles(baseline, current)
    assert [n.current.function_name for n in result.new_functions] == ["Fresh"]
    assert [r.baseline.function_name for r in result.removed_functions] == ["Gone"]


def test_same_name_on_other_thread_is_a_different_function() -> None:
    baseline = _session("base", _fn("Work", 100.0, thread_id=1))
    current = _session("cur", _fn("Work", 100.0, thread_id=2))
    result = compare_profiles(baseline, current)
    assert len(result.new_functions) == 1
    assert len(result.removed_functions) == 1


def test_regressions_sorted_by_severity_then_magnitude() -> None:
    baseline = _session(
        "base", _fn("Small", 100.0), _fn("Big", 100.0), _fn("Main", 100.0, thread_id=1)
    )
    current = _session(
        "cur",
        _fn("Small", 120.0),
        _fn("Big", 300.0),
        _fn("Main", 111.0, thread_id=1, is_main_thread=True),
    )
    result = compare_profiles(baseline, current)
    assert [r.current.function_name for r in result.regressions] == ["Main", "Big", "Small"]
    assert [r.severity for r in result.regressions] == [Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM]


def test_baseline_entry_matches_only_once() -> None:
    baseline = _session("base", _fn("Dup", 100.0))
    current = _session("cur", _fn("Dup", 200.0), _fn("Dup", 200.0))
    result = compare_profiles(baseline, current)
    assert len(result.regressions) == 1
    assert len(result.new_functions) == 1


def test_percent_change_is_finite_for_zero_baseline() -> None:
    assert percent_change(0.0, 1.0) == pytest.approx(100000.0)


def test_empty_sessions_compare_empty() -> None:
    result = compare_profiles(_session("a"), _session("b"))
    assert (result.regressions, result.improvements, result.new_functions, result.removed_functions) == (
        (),
        (),
        (),
        (),
    )


def test_swapping_sessions_inverts_the_classification() -> None:
    older = _session("older", _fn("Draw", 100.0), _fn("Gone", 40.0), _fn("Stable", 50.0))
    newer = _session("newer", _fn("Draw", 160.0), _fn("Fresh", 25.0), _fn("Stable", 52.0))

    forward = compare_profiles(older, newer)
    backward = compare_profiles(newer, older)

    assert [r.current.function_name for r in forward.regressions] == ["Draw"]
    assert [i.current.function_name for i in backward.improvements] == ["Draw"]
    assert backward.improvements[0].time_diff_ms == pytest.approx(-forward.regressions[0].time_diff_ms)
    assert backward.regressions == ()

    assert [(n.current.function_name, n.current.total_time_ms) for n in forward.new_functions] == [("Fresh", 25.0)]
    assert [(r.baseline.function_name, r.baseline.total_time_ms) for r in backward.removed_functions] == [
        ("Fresh", 25.0)
    ]
    assert [(r.baseline.function_name, r.baseline.total_time_ms) for r in forward.removed_functions] == [
        ("Gone", 40.0)
    ]
    assert [(n.current.function_name, n.current.total_time_ms) for n in backward.new_functions] == [("Gone", 40.0)]
