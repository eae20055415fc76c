"""schedgraph: structural analysis of task-dependency graphs."""

from importlib import metadata

from . import core, datasets, loader, pipeline, report
from .core import (
    CriticalPathResult,
    CycleDetected,
    Edge,
    Graph,
    InvalidVertex,
    Metrics,
    PathResult,
    SCCResult,
    build_condensation,
    build_graph,
    critical_path,
    expand_component_order,
    find_components,
    longest_paths,
    reconstruct_path,
    shortest_paths_from,
    topological_order,
)
from .loader import LoaderError, TaskGraph, load_graph
from .pipeline import AnalysisReport, analyze_graph

try:  # pragma: no cover - metadata only at runtime
    __version__ = metadata.version("schedgraph")
except metadata.PackageNotFoundError:  # pragma: no cover - source tree / editable installs
    __version__ = "0.0.0"

__all__ = [
    "core",
    "datasets",
    "loader",
    "pipeline",
    "report",
    "Edge",
    "Graph",
    "build_graph",
    "InvalidVertex",
    "CycleDetected",
    "Metrics",
    "SCCResult",
    "find_components",
    "build_condensation",
    "topological_order",
    "expand_component_order",
    "PathResult",
    "CriticalPathResult",
    "shortest_paths_from",
    "longest_paths",
    "critical_path",
    "reconstruct_path",
    "LoaderError",
    "TaskGraph",
    "load_graph",
    "AnalysisReport",
    "analyze_graph",
    "__version__",
]
