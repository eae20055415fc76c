"""Topological ordering (Kahn's algorithm)."""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional, Sequence

from .graph import Graph
from .invariants import CycleDetected
from .metrics import Metrics, timed

LOGGER = logging.getLogger(__name__)


def topological_order(graph: Graph, metrics: Optional[Metrics] = None) -> List[int]:
    """Return a linearization of ``graph`` or raise :class:`CycleDetected`.

    Zero in-degree vertices are seeded in increasing id order and consumed
    FIFO, so the result is reproducible for a fixed graph.
    """

    with timed(metrics) as tracker:
        in_degree = [0] * graph.num_vertices
        for edge in graph.edges:
            in_degree[edge.target] += 1

        queue: Deque[int] = deque()
        for vertex in graph.vertices():
            if in_degree[vertex] == 0:
                queue.append(vertex)
                tracker.kahn_pushes += 1

        order: List[int] = []
        while queue:
            vertex = queue.popleft()
            tracker.kahn_pops += 1
            order.append(vertex)
            for edge in graph.outgoing_edges(vertex):
                in_degree[edge.target] -= 1
                if in_degree[edge.target] == 0:
                    queue.append(edge.target)
                    tracker.kahn_pushes += 1

    if len(order) != graph.num_vertices:
        LOGGER.debug("topological_order ordered=%d of %d", len(order), graph.num_vertices)
        raise CycleDetected(graph.num_vertices, len(order))
    return order


def is_acyclic(graph: Graph) -> bool:
    try:
        topological_order(graph)
    except CycleDetected:
        return False
    return True


def expand_component_order(
    component_order: Sequence[int],
    vertex_to_component: Sequence[int],
    components: Sequence[Sequence[int]],
) -> List[int]:
    """Map an order over component ids back to original vertex ids.

    Each component contributes its members in the order they were collected.
    ``vertex_to_component`` is accepted so callers can pass an ``SCCResult``'s
    fields straight through; the expansion only needs ``components``.
    """

    order: List[int] = []
    for component in component_order:
        order.extend(components[component])
    return order
