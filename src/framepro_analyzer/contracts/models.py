"""Contract models (attrs-based request schemas).

This module defines the request schemas of the four analysis tools. They
mirror the tool input schemas published by the MCP server
(:data:`framepro_analyzer.runners.tools.TOOL_DEFINITIONS`) and are the single
place where tool arguments are validated.

Notes
-----
- Paths may be absolute or relative; relative paths are resolved against the
  configured data directory by :func:`framepro_analyzer.utils.paths.resolve_profile_path`.
- Numeric arguments arrive as JSON numbers and are coerced on construction.
"""

from __future__ import annotations

from attrs import Attribute, define, field
from attrs.validators import in_, instance_of

FOCUS_VALUES = ("cpu", "frames", "threads", "all")


def _non_empty(_: object, attr: Attribute[str], value: str) -> None:
    """Reject empty or whitespace-only strings.

    Raises
    ------
    ValueError
        If ``value`` is blank.
    """

    if not value.strip():
        raise ValueError(f"{attr.name} must not be empty")


def _positive(_: object, attr: Attribute[float], value: float) -> None:
    if value <= 0:
        raise ValueError(f"{attr.name} must be positive, got {value!r}")


@define(kw_only=True)
class AnalyzePerformanceRequest:
    """Inputs for ``analyze_performance``.

    Examples
    --------
    >>> AnalyzePerformanceRequest(file_path="captures/level1.json", focus="cpu")
    AnalyzePerformanceRequest(...)
    """

    file_path: str = field(validator=[instance_of(str), _non_empty])
    focus: str = field(default="all", validator=[instance_of(str), in_(FOCUS_VALUES)])


@define(kw_only=True)
class FindHotspotsRequest:
    """Inputs for ``find_hotspots``; negative ``top_n`` yields no rows."""

    file_path: str = field(validator=[instance_of(str), _non_empty])
    top_n: int = field(default=10, converter=int)


@define(kw_only=True)
class AnalyzeFrameTimesRequest:
    """Inputs for ``analyze_frame_times``."""

    file_path: str = field(validator=[instance_of(str), _non_empty])
    target_fps: float = field(default=60.0, converter=float, validator=[_positive])


@define(kw_only=True)
class CompareProfilesRequest:
    """Inputs for ``compare_profiles``."""

    baseline_path: str = field(validator=[instance_of(str), _non_empty])
    current_path: str = field(validator=[instance_of(str), _non_empty])
