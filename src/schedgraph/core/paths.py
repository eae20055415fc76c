"""Shortest and longest (critical) paths over a DAG."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .graph import Graph
from .invariants import check_vertex
from .metrics import Metrics, timed
from .topo import topological_order

LOGGER = logging.getLogger(__name__)

UNREACHED = None
NO_PREDECESSOR = None


@dataclass(frozen=True)
class PathResult:
    """Distances and predecessor links indexed by vertex id.

    ``None`` marks an unreached vertex in ``distances`` and the start of a
    chain in ``predecessors``; neither sentinel can collide with a real value.
    """

    distances: Tuple[Optional[int], ...]
    predecessors: Tuple[Optional[int], ...]
    source: Optional[int] = None

    def reachable(self, vertex: int) -> bool:
        return self.distances[vertex] is not UNREACHED

    def path_to(self, vertex: int) -> List[int]:
        if not self.reachable(vertex):
            return []
        return reconstruct_path(self.predecessors, vertex)


@dataclass(frozen=True)
class CriticalPathResult:
    path: Tuple[int, ...]
    length: int

    def __str__(self) -> str:
        return f"Critical Path: {list(self.path)} (length: {self.length})"


def reconstruct_path(predecessors: Sequence[Optional[int]], target: int) -> List[int]:
    """Follow predecessor links back from ``target`` and return them source-first."""

    path: List[int] = []
    current: Optional[int] = target
    while current is not NO_PREDECESSOR:
        path.append(current)
        current = predecessors[current]
    path.reverse()
    return path


def shortest_paths_from(graph: Graph, source: int, metrics: Optional[Metrics] = None) -> PathResult:
    """Single-source shortest distances by edge weight.

    One relaxation pass in topological order; negative weights are fine since
    the input is acyclic. Raises ``CycleDetected`` when it is not.
    """

    check_vertex(source, graph.num_vertices)
    with timed(metrics) as tracker:
        order = topological_order(graph)
        distances: List[Optional[int]] = [UNREACHED] * graph.num_vertices
        predecessors: List[Optional[int]] = [NO_PREDECESSOR] * graph.num_vertices
        distances[source] = 0
        for vertex in order:
            base = distances[vertex]
            if base is UNREACHED:
                continue
            for edge in graph.outgoing_edges(vertex):
                tracker.relaxations += 1
                candidate = base + edge.weight
                current = distances[edge.target]
                if current is UNREACHED or candidate < current:
                    distances[edge.target] = candidate
                    predecessors[edge.target] = vertex
    LOGGER.debug(
        "shortest_paths_from source=%d reached=%d relaxations=%d",
        source,
        sum(1 for d in distances if d is not UNREACHED),
        tracker.relaxations,
    )
    return PathResult(distances=tuple(distances), predecessors=tuple(predecessors), source=source)


def longest_paths(graph: Graph, metrics: Optional[Metrics] = None) -> PathResult:
    """Largest cumulative node duration of any path ending at each vertex.

    Every vertex starts at its own duration, so the result does not depend on
    a source; this is the forward pass of the critical path method.
    """

    with timed(metrics) as tracker:
        order = topological_order(graph)
        distances: List[Optional[int]] = list(graph.durations())
        predecessors: List[Optional[int]] = [NO_PREDECESSOR] * graph.num_vertices
        for vertex in order:
            for edge in graph.outgoing_edges(vertex):
                tracker.relaxations += 1
                candidate = distances[vertex] + graph.node_duration(edge.target)
                if candidate > distances[edge.target]:
                    distances[edge.target] = candidate
                    predecessors[edge.target] = vertex
    return PathResult(distances=tuple(distances), predecessors=tuple(predecessors))


def critical_path(graph: Graph, metrics: Optional[Metrics] = None) -> CriticalPathResult:
    """Maximum-duration chain; ties go to the lowest end vertex id."""

    result = longest_paths(graph, metrics)
    if not result.distances:
        return CriticalPathResult(path=(), length=0)
    end = 0
    for vertex, distance in enumerate(result.distances):
        if distance > result.distances[end]:
            end = vertex
    path = reconstruct_path(result.predecessors, end)
    LOGGER.debug("critical_path end=%d length=%d hops=%d", end, result.distances[end], len(path))
    return CriticalPathResult(path=tuple(path), length=result.distances[end])
