"""Directed graph data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from pydantic import BaseModel


class InvalidEdgeError(ValueError):
    """An edge references a node index outside ``[0, node_count)``."""

    def __init__(self, edge: tuple[int, int], edge_index: int, node_count: int):
        self.edge = edge
        self.edge_index = edge_index
        self.node_count = node_count
        super().__init__(
            f"Edge #{edge_index} {edge[0]} -> {edge[1]} references a node "
            f"outside [0, {node_count})"
        )


@dataclass(frozen=True)
class DirectedGraph:
    labels: tuple[str, ...]
    edges: tuple[tuple[int, int], ...]

    @classmethod
    def build(
        cls, nodes: Sequence[str], edges: Sequence[tuple[int, int]]
    ) -> DirectedGraph:
        """Validate edge endpoints and freeze the inputs.

        Raises ``InvalidEdgeError`` for the first edge with an endpoint
        outside ``[0, len(nodes))``; negative indices are rejected too.
        """
        labels = tuple(nodes)
        frozen = tuple((src, dst) for src, dst in edges)
        n = len(labels)
        for index, (src, dst) in enumerate(frozen):
            if not (0 <= src < n and 0 <= dst < n):
                raise InvalidEdgeError((src, dst), index, n)
        return cls(labels=labels, edges=frozen)

    @property
    def node_count(self) -> int:
        return len(self.labels)

    def label(self, index: int) -> str:
        return self.labels[index] if 0 <= index < len(self.labels) else str(index)

    def adjacency(self) -> tuple[tuple[int, ...], ...]:
        """Successors per node, in the order their edges were supplied."""
        adj: list[list[int]] = [[] for _ in self.labels]
        for src, dst in self.edges:
            adj[src].append(dst)
        return tuple(tuple(targets) for targets in adj)

    def reversed(self) -> DirectedGraph:
        return DirectedGraph(
            labels=self.labels,
            edges=tuple((dst, src) for src, dst in self.edges),
        )


class GraphSpec(BaseModel):
    """A named graph as supplied by presets or a JSON graph file."""

    id: str = ""
    name: str = ""
    description: str = ""
    nodes: list[str]
    edges: list[tuple[int, int]] = []

    def to_graph(self) -> DirectedGraph:
        return DirectedGraph.build(self.nodes, self.edges)
