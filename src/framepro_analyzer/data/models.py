"""Domain data models for FramePro profiling analysis.

This module defines `attrs`-based data models for one profiling export and for
the results derived from it. Records are immutable once constructed; the
analysis components only read them. Conversion to/from the FramePro JSON
layout and the tool output mappings lives in
:mod:`framepro_analyzer.contracts.convert`.

Classes
-------
Severity
    Ordered issue severity (``critical`` highest, ``info`` lowest).
FunctionRecord
    One function's aggregate timing on one thread.
FrameRecord
    Optional per-frame function list.
ProfileSession
    One profiling capture.
PerformanceIssue
    One detected problem.
ThreadStats
    Per-thread rollup built by the thread detector.
Hotspot
    One ranked entry of the hotspot table.
Regression, Improvement, NewFunction, RemovedFunction, ComparisonResult
    Profile differ outputs.
"""

from __future__ import annotations

import functools
from enum import Enum

from attrs import Attribute, define, field, frozen
from attrs.validators import instance_of

FRAME_BUDGET_60_FPS_MS = 16.67
FRAME_BUDGET_30_FPS_MS = 33.0


def _validate_non_negative(_instance: object, attribute: Attribute[float], value: float) -> None:
    """Ensure a metric is non-negative."""

    if value < 0:
        raise ValueError(f"{attribute.name} must be non-negative, got {value!r}")


@functools.total_ordering
class Severity(Enum):
    """Issue severity with a total order.

    Lower rank means higher priority, so ``Severity.CRITICAL < Severity.HIGH``
    and sorting ascending yields the most urgent issues first. ``INFO`` ranks
    after every other severity.
    """

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank


_SEVERITY_RANK = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
    Severity.INFO: 4,
}


@frozen(kw_only=True)
class FunctionRecord:
    """Aggregate behavior of one function on one thread across a session.

    Identity is the ``(function_name, thread_id)`` pair; the same function
    name can appear on several threads. Metric fields accept ints or floats
    and are normalized on construction.

    The ``time_ms``/``count``/``max_time_ms`` fields are only populated for
    entries inside a :class:`FrameRecord`.
    """

    function_name: str = field(default="", validator=[instance_of(str)])
    thread_id: int = field(default=0, converter=int)
    thread_name: str = field(default="", validator=[instance_of(str)])
    total_time_ms: float = field(default=0.0, converter=float, validator=[_validate_non_negative])
    total_count: int = field(default=0, converter=int, validator=[_validate_non_negative])
    max_time_per_frame_ms: float = field(default=0.0, converter=float, validator=[_validate_non_negative])
    max_count_per_frame: int = field(default=0, converter=int, validator=[_validate_non_negative])
    avg_time_per_frame_ms: float = field(default=0.0, converter=float, validator=[_validate_non_negative])
    avg_count_per_frame: float = field(default=0.0, converter=float, validator=[_validate_non_negative])
    thread_utilization_percent: float = field(default=0.0, converter=float, validator=[_validate_non_negative])
    is_main_thread: bool = field(default=False, validator=[instance_of(bool)])
    is_render_thread: bool = field(default=False, validator=[instance_of(bool)])
    is_worker_thread: bool = field(default=False, validator=[instance_of(bool)])
    thread_priority: int = field(default=0, converter=int)
    time_ms: float = field(default=0.0, converter=float, validator=[_validate_non_negative])
    count: int = field(default=0, converter=int, validator=[_validate_non_negative])
    max_time_ms: float = field(default=0.0, converter=float, validator=[_validate_non_negative])

    @property
    def key(self) -> tuple[str, int]:
        """Identity key used to match functions across sessions."""

        return (self.function_name, self.thread_id)

    @property
    def variance_ratio(self) -> float:
        """Max/avg per-frame time ratio; the 0.001 offset keeps it finite."""

        return self.max_time_per_frame_ms / (self.avg_time_per_frame_ms + 0.001)

    @property
    def avg_time_per_call_ms(self) -> float:
        """Average time per call; the +1 offset keeps it finite."""

        return self.total_time_ms / (self.total_count + 1)


@frozen(kw_only=True)
class FrameRecord:
    """Functions observed in a single captured frame."""

    frame_number: int = field(default=0, converter=int)
    functions: tuple[FunctionRecord, ...] = field(factory=tuple, converter=tuple)


@frozen(kw_only=True)
class ProfileSession:
    """One profiling capture.

    Parameters
    ----------
    session_name : str
        Session identifier.
    total_frames : int
        Number of captured frames (0 for non per-frame exports).
    functions : tuple of FunctionRecord
        Aggregated per-function records; the source of truth for all
        derived statistics.
    total_functions : int or None
        Advisory count from the export; never used over ``len(functions)``.
    frames : tuple of FrameRecord
        Optional per-frame breakdown.
    """

    functions: tuple[FunctionRecord, ...] = field(converter=tuple)
    session_name: str = field(default="", validator=[instance_of(str)])
    total_frames: int = field(default=0, converter=int, validator=[_validate_non_negative])
    total_functions: int | None = field(default=None)
    frames: tuple[FrameRecord, ...] = field(factory=tuple, converter=tuple)

    @property
    def function_count(self) -> int:
        return len(self.functions)


@frozen(kw_only=True)
class PerformanceIssue:
    """A single detected performance problem."""

    severity: Severity = field(validator=[instance_of(Severity)])
    category: str = field(validator=[instance_of(str)])
    description: str = field(validator=[instance_of(str)])
    impact: str = field(validator=[instance_of(str)])
    suggestion: str = field(validator=[instance_of(str)])
    value: float = field(default=0.0, converter=float)


@define(kw_only=True)
class ThreadStats:
    """Per-thread rollup (intermediate; rebuilt on every detector call)."""

    thread_name: str = field(validator=[instance_of(str)])
    thread_id: int = field(validator=[instance_of(int)])
    is_main_thread: bool = field(default=False)
    is_render_thread: bool = field(default=False)
    total_time: float = field(default=0.0)
    max_utilization: float = field(default=0.0)
    functions: list[FunctionRecord] = field(factory=list)

    def add(self, fn: FunctionRecord) -> None:
        self.total_time += fn.total_time_ms
        self.functions.append(fn)
        if fn.thread_utilization_percent > self.max_utilization:
            self.max_utilization = fn.thread_utilization_percent


@frozen(kw_only=True)
class Hotspot:
    """One row of the hotspot ranking (1-indexed ``rank``)."""

    rank: int = field(validator=[instance_of(int)])
    function: FunctionRecord = field(validator=[instance_of(FunctionRecord)])
    suggestions: tuple[str, ...] = field(factory=tuple, converter=tuple)

    @property
    def avg_time_per_call_ms(self) -> float:
        return self.function.avg_time_per_call_ms


@frozen(kw_only=True)
class Regression:
    """A matched function whose total time grew by more than 10%."""

    severity: Severity = field(validator=[instance_of(Severity)])
    baseline: FunctionRecord = field()
    current: FunctionRecord = field()
    time_diff_ms: float = field(converter=float)
    percent_change: float = field(converter=float)
    avg_time_diff_ms: float = field(converter=float)
    avg_percent_change: float = field(converter=float)


@frozen(kw_only=True)
class Improvement:
    """A matched function whose total time shrank by more than 10%."""

    baseline: FunctionRecord = field()
    current: FunctionRecord = field()
    time_diff_ms: float = field(converter=float)
    percent_change: float = field(converter=float)
    avg_percent_change: float = field(converter=float)


@frozen(kw_only=True)
class NewFunction:
    """A function present only in the current session."""

    current: FunctionRecord = field()


@frozen(kw_only=True)
class RemovedFunction:
    """A function present only in the baseline session."""

    baseline: FunctionRecord = field()


@frozen(kw_only=True)
class ComparisonResult:
    """Output of the profile differ: four disjoint sequences plus a summary."""

    regressions: tuple[Regression, ...] = field(factory=tuple, converter=tuple)
    improvements: tuple[Improvement, ...] = field(factory=tuple, converter=tuple)
    new_functions: tuple[NewFunction, ...] = field(factory=tuple, converter=tuple)
    removed_functions: tuple[RemovedFunction, ...] = field(factory=tuple, converter=tuple)
    summary: str = field(default="")

    @property
    def critical_regressions(self) -> int:
        return sum(1 for r in self.regressions if r.severity is Severity.CRITICAL)
