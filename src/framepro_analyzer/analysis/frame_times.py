"""Frame time analysis against a caller-supplied target frame rate.

Unlike the frame detector, which uses the fixed 60/30 FPS budgets, this
analysis derives its budget from ``target_fps``. It estimates the achievable
frame rate from the summed average main-thread work per frame and, when the
export carries per-frame records, counts slow frames and stutters.
"""

from __future__ import annotations

import logging

from attrs import field, frozen

from framepro_analyzer.data.models import FrameRecord, FunctionRecord, ProfileSession

logger = logging.getLogger(__name__)

DEFAULT_TARGET_FPS = 60.0
MAX_ESTIMATED_FPS = 1000.0
# A frame stutters when its main-thread time exceeds this multiple of the mean.
STUTTER_FACTOR = 2.0


@frozen(kw_only=True)
class FrameTimeAnalysis:
    """Result of :func:`analyze_frame_times`."""

    target_fps: float
    target_frame_time_ms: float
    estimated_fps: float
    main_thread_avg_work_ms: float
    main_thread_function_count: int
    problem_functions: tuple[FunctionRecord, ...] = field(converter=tuple)
    slow_frames: int = 0
    stutters: int = 0
    analysis: tuple[str, ...] = field(factory=tuple, converter=tuple)


def _main_thread_frame_time(frame: FrameRecord) -> float:
    return sum(fn.time_ms for fn in frame.functions if fn.is_main_thread)


def count_slow_frames_and_stutters(frames: tuple[FrameRecord, ...], target_frame_time_ms: float) -> tuple[int, int]:
    """Count frames over budget and frames far above the mean frame time."""

    if not frames:
        return 0, 0
    times = [_main_thread_frame_time(f) for f in frames]
    mean_time = sum(times) / len(times)
    slow = sum(1 for t in times if t > target_frame_time_ms)
    stutters = sum(1 for t in times if mean_time > 0 and t > STUTTER_FACTOR * mean_time)
    return slow, stutters


def analyze_frame_issues(
    problem_functions: int,
    slow_frames: int,
    stutters: int,
    actual_fps: float,
    target_fps: float,
) -> list[str]:
    """Return human-readable findings for the frame time analysis."""

    findings: list[str] = []
    if actual_fps < target_fps * 0.8:
        findings.append(
            f"FPS is {(1 - actual_fps / target_fps) * 100:.1f}% below target - significant optimization needed"
        )
    if problem_functions > 0:
        findings.append(f"{problem_functions} main-thread functions exceed the target frame time")
    if slow_frames > 0:
        findings.append(f"{slow_frames} frames exceeded target frame time")
    if stutters > 0:
        findings.append(f"{stutters} stutter events detected - investigate sudden workload spikes")
    if not findings:
        findings.append("Frame performance is within acceptable parameters")
    return findings


def analyze_frame_times(session: ProfileSession, target_fps: float = DEFAULT_TARGET_FPS) -> FrameTimeAnalysis:
    """Analyze main-thread frame work against ``target_fps``.

    Raises
    ------
    ValueError
        If ``target_fps`` is not positive.
    """

    if target_fps <= 0:
        raise ValueError(f"target_fps must be positive, got {target_fps!r}")
    target_frame_time = 1000.0 / target_fps

    main_thread = [fn for fn in session.functions if fn.is_main_thread]
    problems = [fn for fn in main_thread if fn.max_time_per_frame_ms > target_frame_time]
    work_ms = sum(fn.avg_time_per_frame_ms for fn in main_thread)
    estimated_fps = min(1000.0 / work_ms, MAX_ESTIMATED_FPS) if work_ms > 0 else MAX_ESTIMATED_FPS

    slow_frames, stutters = count_slow_frames_and_stutters(session.frames, target_frame_time)
    logger.info(
        "Frame time analysis | session=%s target_fps=%.1f estimated_fps=%.1f problems=%d slow_frames=%d",
        session.session_name,
        target_fps,
        estimated_fps,
        len(problems),
        slow_frames,
    )
    return FrameTimeAnalysis(
        target_fps=float(target_fps),
        target_frame_time_ms=target_frame_time,
        estimated_fps=estimated_fps,
        main_thread_avg_work_ms=work_ms,
        main_thread_function_count=len(main_thread),
        problem_functions=problems,
        slow_frames=slow_frames,
        stutters=stutters,
        analysis=analyze_frame_issues(len(problems), slow_frames, stutters, estimated_fps, target_fps),
    )
