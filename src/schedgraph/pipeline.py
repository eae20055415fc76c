"""Batch analysis pipeline: SCC -> condensation -> order -> paths."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .config import AnalysisOptions
from .core.graph import Graph
from .core.invariants import CycleDetected, InvalidVertex
from .core.metrics import Metrics
from .core.paths import CriticalPathResult, PathResult, critical_path, shortest_paths_from
from .core.scc import SCCResult, build_condensation, find_components
from .core.topo import expand_component_order, topological_order
from .export import export_graphml
from .loader import LoaderError, load_graph

LOGGER = logging.getLogger(__name__)

STAGE_SCC = "scc"
STAGE_TOPO = "topological_order"
STAGE_SHORTEST = "shortest_paths"
STAGE_CRITICAL = "critical_path"


@dataclass
class AnalysisReport:
    label: str
    graph: Graph
    components: SCCResult
    condensation: Graph
    component_order: Optional[List[int]] = None
    vertex_order: Optional[List[int]] = None
    shortest_source: Optional[int] = None
    shortest: Optional[PathResult] = None
    critical: Optional[CriticalPathResult] = None
    metrics: Dict[str, Metrics] = field(default_factory=dict)
    refusals: Dict[str, str] = field(default_factory=dict)
    names: Dict[int, str] = field(default_factory=dict)

    @property
    def self_loops(self) -> List[int]:
        return list(self.components.self_loops)

    @property
    def is_acyclic(self) -> bool:
        """True when the input graph itself (not just its condensation) is a DAG."""

        return self.components.is_acyclic

    def total_metrics(self) -> Metrics:
        total = Metrics()
        for stage_metrics in self.metrics.values():
            total = total.merge(stage_metrics)
        return total


@dataclass
class BatchEntry:
    path: Path
    report: Optional[AnalysisReport] = None
    error: Optional[str] = None


def _resolve_source(order: Optional[List[int]], requested: Union[str, int]) -> Optional[int]:
    if requested == "first":
        return order[0] if order else None
    return int(requested)


def analyze_graph(
    graph: Graph,
    label: str = "graph",
    options: Optional[AnalysisOptions] = None,
    names: Optional[Dict[int, str]] = None,
) -> AnalysisReport:
    """Run every analysis stage over ``graph``.

    A stage that hits ``CycleDetected`` is recorded as refused with reason
    ``"cycle present"`` and the stages depending on it are skipped.
    """

    options = options or AnalysisOptions()
    scc_metrics = Metrics()
    components = find_components(graph, scc_metrics)
    condensed = build_condensation(graph, components)
    report = AnalysisReport(
        label=label,
        graph=graph,
        components=components,
        condensation=condensed,
        metrics={STAGE_SCC: scc_metrics},
        names=dict(names or {}),
    )
    LOGGER.info(
        "%s: %d vertices, %d edges, %d components",
        label,
        graph.num_vertices,
        graph.edge_count,
        len(components),
    )

    topo_metrics = Metrics()
    report.metrics[STAGE_TOPO] = topo_metrics
    try:
        report.component_order = topological_order(condensed, topo_metrics)
    except CycleDetected as exc:
        LOGGER.warning("%s: topological order refused (%s)", label, exc)
        report.refusals[STAGE_TOPO] = exc.reason
        report.refusals[STAGE_SHORTEST] = exc.reason
        report.refusals[STAGE_CRITICAL] = exc.reason
        return report
    report.vertex_order = expand_component_order(
        report.component_order, components.vertex_to_component, components.components
    )

    if condensed.num_vertices:
        shortest_metrics = Metrics()
        report.metrics[STAGE_SHORTEST] = shortest_metrics
        try:
            source = _resolve_source(report.component_order, options.shortest_source)
            report.shortest_source = source
            report.shortest = shortest_paths_from(condensed, source, shortest_metrics)
        except CycleDetected as exc:
            LOGGER.warning("%s: shortest paths refused (%s)", label, exc)
            report.refusals[STAGE_SHORTEST] = exc.reason
        except InvalidVertex as exc:
            LOGGER.warning("%s: shortest paths refused (%s)", label, exc)
            report.refusals[STAGE_SHORTEST] = str(exc)

    critical_metrics = Metrics()
    report.metrics[STAGE_CRITICAL] = critical_metrics
    try:
        report.critical = critical_path(condensed, critical_metrics)
    except CycleDetected as exc:
        LOGGER.warning("%s: critical path refused (%s)", label, exc)
        report.refusals[STAGE_CRITICAL] = exc.reason

    if options.graphml_dir is not None:
        target = Path(options.graphml_dir) / f"{Path(label).stem}.condensation.graphml"
        export_graphml(condensed, target, members=components.components)
        LOGGER.info("%s: wrote %s", label, target)
    return report


def analyze_file(path: Path, options: Optional[AnalysisOptions] = None) -> AnalysisReport:
    task_graph = load_graph(path)
    return analyze_graph(task_graph.graph, label=str(path), options=options, names=task_graph.names)


def run_batch(paths: Iterable[Path], options: Optional[AnalysisOptions] = None) -> List[BatchEntry]:
    """Analyse each dataset in turn; a bad file is recorded and the batch continues."""

    entries: List[BatchEntry] = []
    for path in paths:
        entry = BatchEntry(path=Path(path))
        try:
            entry.report = analyze_file(entry.path, options)
        except (LoaderError, OSError) as exc:
            LOGGER.error("%s: could not load dataset (%s)", path, exc)
            entry.error = str(exc)
        entries.append(entry)
    return entries
