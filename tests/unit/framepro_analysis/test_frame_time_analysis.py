"""Unit tests for frame time analysis against a target frame rate."""

from __future__ import annotations

import pytest

from framepro_analyzer.analysis.frame_times import (
    analyze_frame_issues,
    analyze_frame_times,
    count_slow_frames_and_stutters,
)
from framepro_analyzer.data.models import FrameRecord, FunctionRecord, ProfileSession


def _main(name: str, avg: float, peak: float = 0.0) -> FunctionRecord:
    return FunctionRecord(
        function_name=name,
        thread_name="Main",
        is_main_thread=True,
        avg_time_per_frame_ms=avg,
        max_time_per_frame_ms=peak,
    )


def _frame(number: int, main_ms: float, worker_ms: float = 0.0) -> FrameRecord:
    return FrameRecord(
        frame_number=number,
        functions=[
            FunctionRecord(function_name="Tick", is_main_thread=True, time_ms=main_ms),
            FunctionRecord(function_name="Job", thread_id=3, time_ms=worker_ms),
        ],
    )


def test_estimated_fps_from_main_thread_work() -> None:
    session = ProfileSession(
        total_frames=4,
        functions=[_main("A", 15.0), _main("B", 15.0), FunctionRecord(function_name="W", avg_time_per_frame_ms=50.0)],
    )
    result = analyze_frame_times(session, 60.0)
    assert result.target_frame_time_ms == pytest.approx(16.6667, rel=1e-4)
    assert result.main_thread_avg_work_ms == pytest.approx(30.0)
    assert result.estimated_fps == pytest.approx(33.333, rel=1e-4)
    assert result.main_thread_function_count == 2
    assert result.analysis[0] == "FPS is 44.4% below target - significant optimization needed"


def test_idle_main_thread_caps_estimate() -> None:
    result = analyze_frame_times(ProfileSession(functions=[]), 60.0)
    assert result.estimated_fps == 1000.0
    assert result.problem_functions == ()
    assert result.analysis == ("Frame performance is within acceptable parameters",)


def test_estimate_is_capped_for_tiny_work() -> None:
    result = analyze_frame_times(ProfileSession(functions=[_main("A", 0.5)]), 60.0)
    assert result.estimated_fps == 1000.0


def test_problem_functions_use_target_budget() -> None:
    session = ProfileSession(functions=[_main("Spiky", 1.0, peak=20.0), _main("Calm", 1.0, peak=10.0)])
    at_60 = analyze_frame_times(session, 60.0)
    at_30 = analyze_frame_times(session, 30.0)
    assert [f.function_name for f in at_60.problem_functions] == ["Spiky"]
    assert "1 main-thread functions exceed the target frame time" in at_60.analysis
    assert at_30.problem_functions == ()


def test_slow_frames_and_stutters_from_frame_records() -> None:
    frames = tuple(_frame(i, t, worker_ms=100.0) for i, t in enumerate([10.0, 10.0, 10.0, 50.0]))
    assert count_slow_frames_and_stutters(frames, 1000.0 / 60.0) == (1, 1)
    assert count_slow_frames_and_stutters((), 16.0) == (0, 0)

    session = ProfileSession(total_frames=4, functions=[_main("Tick", 5.0)], frames=frames)
    result = analyze_frame_times(session, 60.0)
    assert (result.slow_frames, result.stutters) == (1, 1)
    assert result.analysis == (
        "1 frames exceeded target frame time",
        "1 stutter events detected - investigate sudden workload spikes",
    )


def test_findings_order() -> None:
    assert analyze_frame_issues(2, 3, 1, 20.0, 60.0) == [
        "FPS is 66.7% below target - significant optimization needed",
        "2 main-thread functions exceed the target frame time",
        "3 frames exceeded target frame time",
        "1 stutter events detected - investigate sudden workload spikes",
    ]
    assert analyze_frame_issues(0, 0, 0, 50.0, 60.0) == ["Frame performance is within acceptable parameters"]


@pytest.mark.parametrize("target", [0.0, -30.0])
def test_non_positive_target_is_rejected(target: float) -> None:
    with pytest.raises(ValueError):
        analyze_frame_times(ProfileSession(functions=[]), target)
