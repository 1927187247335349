"""FramePro profiling export analysis.

Rule-based issue detection, hotspot ranking and baseline/current comparison
for FramePro JSON exports, exposed as MCP tools and a CLI.
"""

__version__ = "1.0.0"
