"""Command-line front end for the FramePro analysis tools.

Runs one tool against local files, prints the JSON result to stdout and can
additionally write a Markdown report.

Examples
--------
::

    framepro-analyze analyze capture.json --focus cpu
    framepro-analyze hotspots capture.json --top-n 5 --markdown hotspots.md
    framepro-analyze frames capture.json --target-fps 30
    framepro-analyze compare baseline.json current.json
"""

from __future__ import annotations

import argparse
import sys
from typing import Any

from framepro_analyzer.config import AnalyzerSettings, configure_logging, load_config
from framepro_analyzer.contracts.models import FOCUS_VALUES
from framepro_analyzer.errors import AnalyzerError
from framepro_analyzer.runners.tools import invoke_tool, render_result
from framepro_analyzer.visualize.report_md import write_result_markdown


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Analyze FramePro JSON profiling exports.")
    parser.add_argument(
        "-o",
        "--override",
        action="append",
        default=None,
        help="Config override in key=value form (e.g., logging.level=INFO). May be repeated.",
    )
    parser.add_argument("--markdown", type=str, default=None, help="Optional Markdown report path.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_an = sub.add_parser("analyze", help="Detect CPU, frame and thread issues.")
    p_an.add_argument("file_path")
    p_an.add_argument("--focus", choices=FOCUS_VALUES, default=None)

    p_hs = sub.add_parser("hotspots", help="Rank the most expensive functions.")
    p_hs.add_argument("file_path")
    p_hs.add_argument("--top-n", type=int, default=None)

    p_fr = sub.add_parser("frames", help="Analyze main-thread frame times.")
    p_fr.add_argument("file_path")
    p_fr.add_argument("--target-fps", type=float, default=None)

    p_cmp = sub.add_parser("compare", help="Compare a baseline and a current profile.")
    p_cmp.add_argument("baseline_path")
    p_cmp.add_argument("current_path")
    return parser.parse_args(argv)


def _tool_call(args: argparse.Namespace) -> tuple[str, dict[str, Any]]:
    if args.command == "analyze":
        return "analyze_performance", {"file_path": args.file_path, "focus": args.focus}
    if args.command == "hotspots":
        return "find_hotspots", {"file_path": args.file_path, "top_n": args.top_n}
    if args.command == "frames":
        return "analyze_frame_times", {"file_path": args.file_path, "target_fps": args.target_fps}
    return "compare_profiles", {"baseline_path": args.baseline_path, "current_path": args.current_path}


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    cfg = load_config(args.override)
    configure_logging(cfg)
    settings = AnalyzerSettings.from_config(cfg)

    name, arguments = _tool_call(args)
    try:
        result = invoke_tool(name, arguments, settings)
    except AnalyzerError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print(render_result(result))
    if args.markdown:
        write_result_markdown(name, result, args.markdown)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
