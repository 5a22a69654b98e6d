"""Command-line entry point: trace an algorithm and print its replay."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from .api import (
    dump_trace,
    trace_failure_table,
    trace_graph_file,
    trace_preset,
    trace_search,
    trace_stats,
)
from .config import TraceConfig
from .graph_types import InvalidEdgeError
from .presets import PRESET_IDS
from .trace_types import Trace, TraceCursor
from . import constants

logger = logging.getLogger(__name__)


def _print_steps(trace: Trace) -> None:
    for frame in trace:
        print(f"[step {frame.step_index}] {frame.kind.value:<18} {frame.note}")


def _print_summary(command: str, trace: Trace) -> None:
    print()
    if command == "failure":
        print(f"═══ Failure table ═══\n  {list(trace.table)}")
    elif command == "search":
        print(f"═══ Matches ═══\n  {list(trace.matches)}")
    else:
        print("═══ Components ═══")
        for index, labels in enumerate(trace.component_labels(), start=1):
            print(f"  #{index}: {', '.join(labels)}")
    print(f"\n({len(trace)} frames)")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="algo-replay",
        description="Step-by-step replay of KMP and Kosaraju SCC",
    )
    parser.add_argument("--json", action="store_true",
                        help="Dump the full trace as JSON")
    parser.add_argument("--step", type=int, default=None,
                        help="Print only the frame at this index (clamped)")
    parser.add_argument("--stats", action="store_true",
                        help="Print step-kind counts")
    parser.add_argument("--no-sanitize", action="store_true",
                        help="Skip input cleanup and length limits")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable INFO logging")

    sub = parser.add_subparsers(dest="command", required=True)

    failure = sub.add_parser("failure", help="Build a KMP failure table")
    failure.add_argument("pattern", nargs="?", default=constants.DEFAULT_PATTERN)

    search = sub.add_parser("search", help="Run a KMP search")
    search.add_argument("text", nargs="?", default=constants.DEFAULT_TEXT)
    search.add_argument("pattern", nargs="?", default=constants.DEFAULT_PATTERN)

    scc = sub.add_parser("scc", help="Decompose a directed graph into SCCs")
    source = scc.add_mutually_exclusive_group()
    source.add_argument("--preset", "-p", default=constants.DEFAULT_PRESET,
                        choices=list(PRESET_IDS),
                        help=f"Built-in graph (default: {constants.DEFAULT_PRESET})")
    source.add_argument("--graph-file", "-g", default=None,
                        help="JSON file with 'nodes' and 'edges'")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    config = TraceConfig(sanitize=not args.no_sanitize)

    try:
        if args.command == "failure":
            trace = trace_failure_table(args.pattern, config)
        elif args.command == "search":
            trace = trace_search(args.text, args.pattern, config)
        elif args.graph_file:
            trace = trace_graph_file(args.graph_file)
        else:
            trace = trace_preset(args.preset)
    except (InvalidEdgeError, ValidationError, OSError, UnicodeDecodeError) as exc:
        logger.error("%s", exc)
        return 1

    if args.json:
        print(dump_trace(trace))
    elif args.step is not None:
        frame = TraceCursor(trace, args.step).frame
        print(json.dumps(frame.to_dict(), indent=2))
    else:
        _print_steps(trace)
        _print_summary(args.command, trace)

    if args.stats:
        print("═══ Step kinds ═══")
        for kind, count in trace_stats(trace).items():
            print(f"  {kind:<20} {count:>5}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
