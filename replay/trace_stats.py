"""Pure functions for computing statistics over traces."""

from __future__ import annotations

from collections import Counter

from replay.trace_types import Trace


def count_kinds(trace: Trace) -> dict[str, int]:
    """Return a frequency map of step kinds in the given trace.

    Args:
        trace: Any finished trace.

    Returns:
        A dict mapping step kind strings to their occurrence counts, in
        order of first appearance.
    """
    return dict(Counter(trace.kinds()))
