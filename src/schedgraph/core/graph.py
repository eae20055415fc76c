"""Weighted task-dependency graph used by every schedgraph algorithm."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .invariants import check_vertex

DEFAULT_DURATION = 1


@dataclass(frozen=True)
class Edge:
    """Directed edge ``source -> target`` carrying an integer weight."""

    source: int
    target: int
    weight: int = 1

    def __str__(self) -> str:
        return f"{self.source} -> {self.target} (w={self.weight})"


class Graph:
    """Directed multigraph over vertices ``0..num_vertices-1``.

    Edges keep their insertion order both globally and per source vertex, so
    every traversal over the graph is reproducible. Vertex durations default
    to ``DEFAULT_DURATION`` until set explicitly.
    """

    def __init__(self, num_vertices: int) -> None:
        if num_vertices < 0:
            raise ValueError(f"num_vertices must be non-negative, got {num_vertices}")
        self._num_vertices = num_vertices
        self._edges: List[Edge] = []
        self._adjacency: List[List[Edge]] = [[] for _ in range(num_vertices)]
        self._durations: Dict[int, int] = {}

    @property
    def num_vertices(self) -> int:
        return self._num_vertices

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return tuple(self._edges)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def vertices(self) -> range:
        return range(self._num_vertices)

    def add_edge(self, source: int, target: int, weight: int = 1) -> Edge:
        check_vertex(source, self._num_vertices)
        check_vertex(target, self._num_vertices)
        edge = Edge(source, target, weight)
        self._adjacency[source].append(edge)
        self._edges.append(edge)
        return edge

    def set_node_duration(self, vertex: int, duration: int) -> None:
        check_vertex(vertex, self._num_vertices)
        if duration < 0:
            raise ValueError(f"duration for vertex {vertex} must be non-negative, got {duration}")
        self._durations[vertex] = duration

    def node_duration(self, vertex: int) -> int:
        check_vertex(vertex, self._num_vertices)
        return self._durations.get(vertex, DEFAULT_DURATION)

    def durations(self) -> List[int]:
        return [self._durations.get(v, DEFAULT_DURATION) for v in range(self._num_vertices)]

    def outgoing_edges(self, vertex: int) -> Tuple[Edge, ...]:
        check_vertex(vertex, self._num_vertices)
        return tuple(self._adjacency[vertex])

    def has_edge(self, source: int, target: int) -> bool:
        return any(edge.target == target for edge in self.outgoing_edges(source))

    def reversed(self) -> "Graph":
        """Return an independent copy with every edge flipped."""

        flipped = Graph(self._num_vertices)
        flipped._durations = dict(self._durations)
        for edge in self._edges:
            flipped.add_edge(edge.target, edge.source, edge.weight)
        return flipped

    def describe(self) -> str:
        lines = [f"Graph with {self._num_vertices} vertices:"]
        for vertex in self.vertices():
            adjacency = self._adjacency[vertex]
            targets = "[" + ", ".join(str(edge) for edge in adjacency) + "]"
            lines.append(f"{vertex} -> {targets} (duration={self.node_duration(vertex)})")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Graph(num_vertices={self._num_vertices}, edges={len(self._edges)})"


def build_graph(
    num_vertices: int,
    edges: Iterable[Tuple[int, ...]],
    durations: Optional[Mapping[int, int]] = None,
) -> Graph:
    """Convenience helper to build a graph from iterables.

    ``edges`` holds ``(source, target)`` or ``(source, target, weight)`` tuples.
    """

    graph = Graph(num_vertices)
    for vertex, duration in (durations or {}).items():
        graph.set_node_duration(vertex, duration)
    for entry in edges:
        graph.add_edge(*entry)
    return graph
