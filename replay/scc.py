"""Kosaraju strongly-connected-components decomposition, instrumented for replay.

Pass 1 runs depth-first search over the forward graph, restarting from every
unvisited node in index order, and records the finish order. Pass 2 walks
the reversed graph, taking start nodes from the reversed finish order; each
DFS tree of pass 2 is exactly one component.

Both passes use an explicit stack of ``(node, next edge offset)`` pairs, so
deep graphs cannot exhaust the interpreter's recursion limit. Frames come
out in the same order as the textbook recursive formulation: ``visit`` on
entry, ``traverse_edge`` for every out-edge examined (already-visited
targets included), ``finish`` once the adjacency list is exhausted.
Successors are explored in edge insertion order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from .graph_types import DirectedGraph
from .trace_types import Frame, Trace

logger = logging.getLogger(__name__)


class SccPhase(str, Enum):
    PASS1 = "pass1"
    REVERSE = "reverse"
    PASS2 = "pass2"
    DONE = "done"


class SccStep(str, Enum):
    START = "start"
    VISIT = "visit"
    TRAVERSE_EDGE = "traverse_edge"
    FINISH = "finish"
    REVERSE = "reverse"
    SKIP = "skip"
    COMPONENT_COMPLETE = "component_complete"
    DONE = "done"


@dataclass(frozen=True)
class SccFrame(Frame):
    phase: SccPhase
    active_node: int | None
    active_edge: tuple[int, int] | None
    stack: tuple[int, ...]
    visited_forward: tuple[bool, ...]
    finish_order: tuple[int, ...]
    visited_reverse: tuple[bool, ...]
    components: tuple[tuple[int, ...], ...]
    current_component: tuple[int, ...]
    order: tuple[int, ...]
    order_index: int


@dataclass(frozen=True)
class SccTrace(Trace[SccFrame]):
    graph: DirectedGraph = field(default_factory=lambda: DirectedGraph((), ()))
    reversed_graph: DirectedGraph = field(default_factory=lambda: DirectedGraph((), ()))

    @property
    def reversed_edges(self) -> tuple[tuple[int, int], ...]:
        return self.reversed_graph.edges

    @property
    def components(self) -> tuple[tuple[int, ...], ...]:
        return self.last.components

    def component_labels(self) -> list[list[str]]:
        return [[self.graph.label(node) for node in comp] for comp in self.components]


@dataclass
class _WorkingState:
    """Mutable state of one decomposition; frames copy it on emission."""

    phase: SccPhase
    visited_forward: list[bool]
    visited_reverse: list[bool]
    active_node: int | None = None
    active_edge: tuple[int, int] | None = None
    stack: list[int] = field(default_factory=list)
    finish_order: list[int] = field(default_factory=list)
    components: list[list[int]] = field(default_factory=list)
    current_component: list[int] = field(default_factory=list)
    order: list[int] = field(default_factory=list)
    order_index: int = -1


class _SccRecorder:
    def __init__(self, graph: DirectedGraph):
        n = graph.node_count
        self.graph = graph
        self.frames: list[SccFrame] = []
        self.state = _WorkingState(
            phase=SccPhase.PASS1,
            visited_forward=[False] * n,
            visited_reverse=[False] * n,
        )

    def emit(
        self,
        kind: SccStep,
        note: str,
        active_node: int | None,
        active_edge: tuple[int, int] | None = None,
    ) -> None:
        s = self.state
        s.active_node = active_node
        s.active_edge = active_edge
        self.frames.append(
            SccFrame(
                step_index=len(self.frames),
                kind=kind,
                note=note,
                phase=s.phase,
                active_node=s.active_node,
                active_edge=s.active_edge,
                stack=tuple(s.stack),
                visited_forward=tuple(s.visited_forward),
                finish_order=tuple(s.finish_order),
                visited_reverse=tuple(s.visited_reverse),
                components=tuple(tuple(comp) for comp in s.components),
                current_component=tuple(s.current_component),
                order=tuple(s.order),
                order_index=s.order_index,
            )
        )

    def label(self, node: int) -> str:
        return self.graph.label(node)

    def forward_pass(self, adj: tuple[tuple[int, ...], ...]) -> None:
        s = self.state
        for root in range(self.graph.node_count):
            if s.visited_forward[root]:
                continue
            self.emit(SccStep.START, f"Pass 1: start DFS from {self.label(root)}.", root)
            self._dfs(root, adj, s.visited_forward, forward=True)

    def reverse(self) -> None:
        s = self.state
        s.phase = SccPhase.REVERSE
        s.order = list(reversed(s.finish_order))
        s.stack = []
        s.order_index = -1
        order_labels = ", ".join(self.label(node) for node in s.order)
        self.emit(
            SccStep.REVERSE,
            f"Reverse graph and process nodes by finish order: {order_labels}.",
            None,
        )

    def reverse_pass(self, radj: tuple[tuple[int, ...], ...]) -> None:
        s = self.state
        s.phase = SccPhase.PASS2
        for index, node in enumerate(s.order):
            s.order_index = index
            if s.visited_reverse[node]:
                self.emit(
                    SccStep.SKIP,
                    f"Pass 2: {self.label(node)} already assigned, skip.",
                    node,
                )
                continue
            s.current_component = []
            s.stack = []
            self.emit(SccStep.START, f"Pass 2: start new SCC from {self.label(node)}.", node)
            self._dfs(node, radj, s.visited_reverse, forward=False)
            s.components.append(list(s.current_component))
            s.stack = []
            members = ", ".join(self.label(member) for member in s.current_component)
            self.emit(
                SccStep.COMPONENT_COMPLETE,
                f"Pass 2: complete SCC #{len(s.components)}: {members}.",
                node,
            )

    def finish(self) -> None:
        s = self.state
        s.phase = SccPhase.DONE
        s.stack = []
        s.order_index = len(s.order) - 1
        self.emit(SccStep.DONE, f"All SCCs discovered. Total: {len(s.components)}.", None)

    def _enter(self, node: int, visited: list[bool], forward: bool) -> None:
        s = self.state
        visited[node] = True
        s.stack.append(node)
        if forward:
            note = f"Pass 1: visit {self.label(node)}."
        else:
            s.current_component.append(node)
            note = f"Pass 2: add {self.label(node)} to current SCC."
        self.emit(SccStep.VISIT, note, node)

    def _dfs(
        self,
        root: int,
        adj: tuple[tuple[int, ...], ...],
        visited: list[bool],
        forward: bool,
    ) -> None:
        s = self.state
        pending: list[tuple[int, int]] = [(root, 0)]
        self._enter(root, visited, forward)

        while pending:
            node, offset = pending[-1]
            if offset < len(adj[node]):
                pending[-1] = (node, offset + 1)
                nxt = adj[node][offset]
                if forward:
                    note = f"Pass 1: follow edge {self.label(node)} -> {self.label(nxt)}."
                else:
                    note = f"Pass 2: follow reversed edge {self.label(node)} -> {self.label(nxt)}."
                self.emit(SccStep.TRAVERSE_EDGE, note, node, (node, nxt))
                if not visited[nxt]:
                    pending.append((nxt, 0))
                    self._enter(nxt, visited, forward)
                continue

            pending.pop()
            s.stack.pop()
            if forward:
                s.finish_order.append(node)
                note = f"Pass 1: finish {self.label(node)} and push to order."
            else:
                note = f"Pass 2: finish {self.label(node)} in this SCC."
            self.emit(SccStep.FINISH, note, node)


def decompose(
    nodes: Sequence[str], edges: Sequence[tuple[int, int]]
) -> SccTrace:
    """Split a directed graph into strongly connected components, recording every step.

    Args:
        nodes: Display labels; node ``i`` is ``nodes[i]``.
        edges: ``(from, to)`` index pairs. Self-loops and parallel edges are
            allowed.

    Returns:
        An SccTrace whose last frame holds the component partition, in the
        order pass 2 completed them.

    Raises:
        InvalidEdgeError: an edge endpoint lies outside ``[0, len(nodes))``.
            Raised before any frame is recorded.
    """
    graph = DirectedGraph.build(nodes, edges)
    return decompose_graph(graph)


def decompose_graph(graph: DirectedGraph) -> SccTrace:
    """Same as decompose() for an already validated DirectedGraph."""
    recorder = _SccRecorder(graph)
    recorder.forward_pass(graph.adjacency())
    recorder.reverse()
    reversed_graph = graph.reversed()
    recorder.reverse_pass(reversed_graph.adjacency())
    recorder.finish()

    trace = SccTrace(
        frames=tuple(recorder.frames), graph=graph, reversed_graph=reversed_graph
    )
    logger.info(
        "Decomposed %d nodes / %d edges into %d SCC(s), %d frames",
        graph.node_count,
        len(graph.edges),
        len(trace.components),
        len(trace),
    )
    return trace
