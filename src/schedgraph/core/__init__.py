"""
Core algorithms for schedgraph.

The core package holds the weighted graph representation, Kosaraju SCC
detection with condensation, Kahn topological ordering, DAG shortest and
critical paths, the shared error types, and per-call metrics counters.
"""

from . import graph, scc, topo, paths, metrics, invariants  # noqa: F401
from .graph import Edge, Graph, build_graph
from .invariants import CycleDetected, GraphError, InvalidVertex, InvariantViolation
from .metrics import Metrics
from .paths import CriticalPathResult, PathResult, critical_path, longest_paths, reconstruct_path, shortest_paths_from
from .scc import SCCResult, build_condensation, condensation, find_components
from .topo import expand_component_order, is_acyclic, topological_order

__all__ = [
    "graph",
    "scc",
    "topo",
    "paths",
    "metrics",
    "invariants",
    "Edge",
    "Graph",
    "build_graph",
    "GraphError",
    "InvalidVertex",
    "CycleDetected",
    "InvariantViolation",
    "Metrics",
    "SCCResult",
    "find_components",
    "build_condensation",
    "condensation",
    "topological_order",
    "is_acyclic",
    "expand_component_order",
    "PathResult",
    "CriticalPathResult",
    "shortest_paths_from",
    "longest_paths",
    "critical_path",
    "reconstruct_path",
]
