"""Unit tests for the session model and severity ordering."""

from __future__ import annotations

import pytest

from framepro_analyzer.data.models import FunctionRecord, ProfileSession, Severity


def test_severity_total_order_puts_info_last() -> None:
    ordered = sorted([Severity.INFO, Severity.LOW, Severity.CRITICAL, Severity.MEDIUM, Severity.HIGH])
    assert ordered == [Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW, Severity.INFO]
    assert Severity.CRITICAL < Severity.HIGH
    assert Severity.INFO > Severity.LOW
    assert Severity.MEDIUM <= Severity.MEDIUM


def test_function_record_derived_metrics_use_offsets() -> None:
    fn = FunctionRecord(
        function_name="Tick",
        total_time_ms=100,
        total_count=0,
        max_time_per_frame_ms=5.0,
        avg_time_per_frame_ms=0.0,
    )
    assert fn.avg_time_per_call_ms == pytest.approx(100.0)
    assert fn.variance_ratio == pytest.approx(5000.0)
    assert isinstance(fn.total_time_ms, float)


def test_function_record_identity_is_name_and_thread() -> None:
    a = FunctionRecord(function_name="Draw", thread_id=1)
    b = FunctionRecord(function_name="Draw", thread_id=2)
    assert a.key == ("Draw", 1)
    assert a.key != b.key


def test_function_record_rejects_negative_metrics() -> None:
    with pytest.raises(ValueError):
        FunctionRecord(function_name="Bad", total_time_ms=-1.0)


def test_session_function_count_ignores_advisory_total() -> None:
    session = ProfileSession(
        session_name="s",
        total_functions=99,
        functions=[FunctionRecord(function_name="A"), FunctionRecord(function_name="B")],
    )
    assert session.function_count == 2
    assert isinstance(session.functions, tuple)
