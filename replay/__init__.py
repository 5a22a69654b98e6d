"""Instrumented algorithm tracers for step-by-step replay."""

from .prefix_function import build_failure_trace, failure_table  # noqa: F401
from .string_search import search  # noqa: F401
from .scc import decompose  # noqa: F401
from .graph_types import InvalidEdgeError  # noqa: F401
from .trace_types import Trace, TraceCursor  # noqa: F401
