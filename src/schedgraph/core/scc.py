"""Strongly connected component utilities (Kosaraju's two-pass search)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from .graph import Edge, Graph
from .metrics import Metrics, timed

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SCCResult:
    """Components in launch order plus the vertex -> component index map.

    ``self_loops`` lists the vertices carrying an edge to themselves; such a
    vertex forms a singleton component that is still cyclic.
    """

    components: Tuple[Tuple[int, ...], ...]
    vertex_to_component: Tuple[int, ...]
    self_loops: Tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.components)

    def component_of(self, vertex: int) -> int:
        return self.vertex_to_component[vertex]

    def sizes(self) -> List[int]:
        return [len(members) for members in self.components]

    def nontrivial(self) -> List[int]:
        """Indices of components holding more than one vertex."""

        return [idx for idx, members in enumerate(self.components) if len(members) > 1]

    def cyclic_components(self) -> List[int]:
        """Indices of components containing a cycle (size > 1 or a self-loop)."""

        looped = {self.vertex_to_component[v] for v in self.self_loops}
        return [
            idx
            for idx, members in enumerate(self.components)
            if len(members) > 1 or idx in looped
        ]

    @property
    def is_acyclic(self) -> bool:
        return not self.cyclic_components()

    def partition(self) -> Set[frozenset]:
        return {frozenset(members) for members in self.components}


def _finish_order(adjacency: Sequence[Tuple[Edge, ...]], metrics: Metrics) -> List[int]:
    """First pass: post-order finish stack, starting points in increasing id order."""

    visited = [False] * len(adjacency)
    finished: List[int] = []
    for start in range(len(adjacency)):
        if visited[start]:
            continue
        visited[start] = True
        metrics.dfs_visits += 1
        stack: List[Tuple[int, int]] = [(start, 0)]
        while stack:
            vertex, pos = stack[-1]
            edges = adjacency[vertex]
            if pos < len(edges):
                stack[-1] = (vertex, pos + 1)
                metrics.edge_traversals += 1
                neighbor = edges[pos].target
                if not visited[neighbor]:
                    visited[neighbor] = True
                    metrics.dfs_visits += 1
                    stack.append((neighbor, 0))
            else:
                stack.pop()
                finished.append(vertex)
    return finished


def _collect(
    root: int,
    adjacency: Sequence[Tuple[Edge, ...]],
    visited: List[bool],
    metrics: Metrics,
) -> Tuple[int, ...]:
    """Second pass: every vertex reachable from ``root`` in the reversed graph."""

    visited[root] = True
    metrics.dfs_visits += 1
    members = [root]
    stack: List[Tuple[int, int]] = [(root, 0)]
    while stack:
        vertex, pos = stack[-1]
        edges = adjacency[vertex]
        if pos < len(edges):
            stack[-1] = (vertex, pos + 1)
            metrics.edge_traversals += 1
            neighbor = edges[pos].target
            if not visited[neighbor]:
                visited[neighbor] = True
                metrics.dfs_visits += 1
                members.append(neighbor)
                stack.append((neighbor, 0))
        else:
            stack.pop()
    return tuple(members)


def find_components(graph: Graph, metrics: Optional[Metrics] = None) -> SCCResult:
    """Kosaraju's SCC algorithm.

    Both passes walk adjacency lists in insertion order with an explicit
    ``(vertex, edge position)`` stack, so deep chains never hit the recursion
    limit and component numbering is stable for a fixed edge order.
    """

    with timed(metrics) as tracker:
        adjacency = [graph.outgoing_edges(v) for v in graph.vertices()]
        finished = _finish_order(adjacency, tracker)

        reversed_graph = graph.reversed()
        reversed_adjacency = [reversed_graph.outgoing_edges(v) for v in reversed_graph.vertices()]
        visited = [False] * graph.num_vertices
        components: List[Tuple[int, ...]] = []
        while finished:
            vertex = finished.pop()
            if not visited[vertex]:
                components.append(_collect(vertex, reversed_adjacency, visited, tracker))

        vertex_to_component = [0] * graph.num_vertices
        for idx, members in enumerate(components):
            for vertex in members:
                vertex_to_component[vertex] = idx

    LOGGER.debug(
        "find_components vertices=%d components=%d nontrivial=%d",
        graph.num_vertices,
        len(components),
        sum(1 for members in components if len(members) > 1),
    )
    self_loops = sorted({edge.source for edge in graph.edges if edge.source == edge.target})
    return SCCResult(
        components=tuple(components),
        vertex_to_component=tuple(vertex_to_component),
        self_loops=tuple(self_loops),
    )


def build_condensation(graph: Graph, result: SCCResult) -> Graph:
    """Contract every component of ``result`` into one vertex.

    A component's duration is the largest member duration. Cross-component
    edges are deduplicated per ordered component pair; the first edge seen in
    insertion order decides the stored weight.
    """

    condensed = Graph(len(result.components))
    for idx, members in enumerate(result.components):
        condensed.set_node_duration(idx, max(graph.node_duration(v) for v in members))

    added: Set[Tuple[int, int]] = set()
    for edge in graph.edges:
        source = result.vertex_to_component[edge.source]
        target = result.vertex_to_component[edge.target]
        if source == target or (source, target) in added:
            continue
        added.add((source, target))
        condensed.add_edge(source, target, edge.weight)
    return condensed


def condensation(graph: Graph, metrics: Optional[Metrics] = None) -> Tuple[SCCResult, Graph]:
    """Return SCCs and the condensation DAG."""

    result = find_components(graph, metrics)
    return result, build_condensation(graph, result)
