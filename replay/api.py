"""Composable API functions for the replay tracers.

Each function corresponds to a CLI workflow (failure, search, scc) but is
callable programmatically without argparse.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

from .config import TraceConfig
from .graph_types import GraphSpec
from .inputs import sanitize_input
from .prefix_function import FailureTrace, build_failure_trace
from .presets import get_preset
from .scc import SccTrace, decompose_graph
from .string_search import SearchTrace, search
from .trace_stats import count_kinds
from .trace_types import Trace
from . import constants

logger = logging.getLogger(__name__)


def trace_failure_table(
    pattern: str = constants.DEFAULT_PATTERN,
    config: TraceConfig = TraceConfig(),
) -> FailureTrace:
    """Trace the failure-table construction for *pattern*.

    Args:
        pattern: Raw pattern text.
        config: Input limits; the pattern is sanitized first when
            ``config.sanitize`` is set.

    Returns:
        A FailureTrace.
    """
    if config.sanitize:
        pattern = sanitize_input(pattern, config.max_pattern_length)
    t0 = time.perf_counter()
    trace = build_failure_trace(pattern)
    logger.info(
        "Failure table for %r: %d frames in %.2fms",
        pattern,
        len(trace),
        (time.perf_counter() - t0) * 1000,
    )
    return trace


def trace_search(
    text: str = constants.DEFAULT_TEXT,
    pattern: str = constants.DEFAULT_PATTERN,
    config: TraceConfig = TraceConfig(),
) -> SearchTrace:
    """Trace a KMP search of *pattern* in *text*.

    Args:
        text: Raw text to scan.
        pattern: Raw pattern text.
        config: Input limits; both strings are sanitized first when
            ``config.sanitize`` is set.

    Returns:
        A SearchTrace.
    """
    if config.sanitize:
        text = sanitize_input(text, config.max_text_length)
        pattern = sanitize_input(pattern, config.max_pattern_length)
    t0 = time.perf_counter()
    trace = search(text, pattern)
    logger.info(
        "Search for %r in %r: %d match(es), %d frames in %.2fms",
        pattern,
        text,
        len(trace.matches),
        len(trace),
        (time.perf_counter() - t0) * 1000,
    )
    return trace


def trace_graph(spec: GraphSpec) -> SccTrace:
    """Trace the SCC decomposition of a graph spec."""
    logger.info("Decomposing graph '%s' (%d nodes)", spec.id or spec.name, len(spec.nodes))
    return decompose_graph(spec.to_graph())


def trace_preset(preset_id: str = constants.DEFAULT_PRESET) -> SccTrace:
    """Trace the SCC decomposition of a built-in preset graph."""
    return trace_graph(get_preset(preset_id))


def trace_graph_file(path: str | Path) -> SccTrace:
    """Load a JSON graph file and trace its SCC decomposition.

    The file holds a single object with ``nodes`` (labels) and ``edges``
    (``[from, to]`` pairs); ``id``, ``name`` and ``description`` are optional.
    """
    spec = GraphSpec.model_validate_json(Path(path).read_text(encoding="utf-8"))
    return trace_graph(spec)


def dump_trace(trace: Trace, indent: int = 2) -> str:
    """Serialize a trace to JSON text."""
    return json.dumps(trace.to_dict(), indent=indent)


def trace_stats(trace: Trace) -> dict[str, int]:
    """Return step-kind counts for a trace."""
    return count_kinds(trace)
