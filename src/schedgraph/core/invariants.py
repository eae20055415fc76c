"""Error types and invariant checks for schedgraph graphs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .graph import Graph
    from .scc import SCCResult


class GraphError(RuntimeError):
    """Base error for structural graph problems."""


class InvalidVertex(GraphError, IndexError):
    """Raised when a vertex id falls outside ``[0, num_vertices)``."""

    def __init__(self, vertex: int, num_vertices: int) -> None:
        super().__init__(f"vertex {vertex} is outside [0, {num_vertices})")
        self.vertex = vertex
        self.num_vertices = num_vertices


class CycleDetected(GraphError):
    """Raised when a topological order cannot cover every vertex."""

    reason = "cycle present"

    def __init__(self, num_vertices: int, ordered: int) -> None:
        super().__init__(
            f"graph contains a cycle: ordered {ordered} of {num_vertices} vertices"
        )
        self.num_vertices = num_vertices
        self.ordered = ordered


class InvariantViolation(GraphError):
    """Raised when a computed result breaks a structural invariant."""


def check_vertex(vertex: int, num_vertices: int) -> None:
    if not 0 <= vertex < num_vertices:
        raise InvalidVertex(vertex, num_vertices)


def validate_order(graph: "Graph", order: Sequence[int]) -> None:
    """Ensure ``order`` is a linearization of ``graph``."""

    if sorted(order) != list(graph.vertices()):
        raise InvariantViolation("order is not a permutation of the vertex ids")
    position = {vertex: idx for idx, vertex in enumerate(order)}
    for edge in graph.edges:
        if position[edge.source] >= position[edge.target]:
            raise InvariantViolation(
                f"edge {edge.source} -> {edge.target} runs against the order"
            )


def validate_partition(graph: "Graph", result: "SCCResult") -> None:
    """Check every vertex sits in exactly one component."""

    seen = set()
    for idx, members in enumerate(result.components):
        if not members:
            raise InvariantViolation(f"component {idx} is empty")
        for vertex in members:
            if vertex in seen:
                raise InvariantViolation(f"vertex {vertex} appears in two components")
            seen.add(vertex)
            if result.vertex_to_component[vertex] != idx:
                raise InvariantViolation(f"vertex {vertex} is mapped to the wrong component")
    if len(seen) != graph.num_vertices or len(result.vertex_to_component) != graph.num_vertices:
        raise InvariantViolation("components do not cover every vertex")


def validate_condensation(graph: "Graph", result: "SCCResult", condensed: "Graph") -> None:
    """Check the condensation has one vertex per component and no intra-component edges."""

    if condensed.num_vertices != len(result.components):
        raise InvariantViolation("condensation vertex count differs from component count")
    pairs = set()
    for edge in condensed.edges:
        if edge.source == edge.target:
            raise InvariantViolation(f"condensation keeps self-loop on {edge.source}")
        key = (edge.source, edge.target)
        if key in pairs:
            raise InvariantViolation(f"duplicate condensation edge {key}")
        pairs.add(key)
    for idx, members in enumerate(result.components):
        expected = max(graph.node_duration(v) for v in members)
        if condensed.node_duration(idx) != expected:
            raise InvariantViolation(f"component {idx} duration is not its member maximum")
