"""Console and JSON rendering of analysis reports."""

from __future__ import annotations

from typing import Any, Dict, List

from .pipeline import (
    STAGE_CRITICAL,
    STAGE_SCC,
    STAGE_SHORTEST,
    STAGE_TOPO,
    AnalysisReport,
    BatchEntry,
)

RULE = "-" * 80
SEPARATOR = "=" * 80


def _metrics_line(report: AnalysisReport, stage: str, title: str) -> List[str]:
    metrics = report.metrics.get(stage)
    return [f"{title}: {metrics}"] if metrics is not None else []


def format_report(report: AnalysisReport) -> str:
    lines = [f"Processing: {report.label}", RULE]
    lines.append(
        f"Loaded graph with {report.graph.num_vertices} vertices and {report.graph.edge_count} edges"
    )

    lines += ["", "--- 1. Strongly Connected Components (SCC) ---", "Strongly Connected Components:"]
    lines.append(f"Total SCCs: {len(report.components)}")
    for idx, members in enumerate(report.components.components):
        lines.append(f"SCC {idx}: {list(members)} (size: {len(members)})")
    lines += _metrics_line(report, STAGE_SCC, "SCC Metrics")
    lines += [
        "",
        "Condensation Graph:",
        f"  - Vertices (SCCs): {report.condensation.num_vertices}",
        f"  - Edges: {report.condensation.edge_count}",
    ]

    lines += ["", "--- 2. Topological Sort ---"]
    if report.component_order is None:
        lines.append(f"Cannot perform topological sort: {report.refusals.get(STAGE_TOPO, 'unknown')}")
    else:
        lines.append(f"Topological Order (SCCs): {report.component_order}")
        lines += _metrics_line(report, STAGE_TOPO, "Topo Metrics")
        lines.append(f"Derived Vertex Order: {report.vertex_order}")

    lines += ["", "--- 3. Shortest and Longest Paths in DAG ---"]
    if report.shortest is not None:
        lines += ["", f"Shortest Paths from source SCC {report.shortest_source}:"]
        for vertex, distance in enumerate(report.shortest.distances):
            if distance is not None:
                lines.append(f"  SCC {vertex}: {distance}")
        lines += _metrics_line(report, STAGE_SHORTEST, "DAGSP Metrics (shortest)")
    elif STAGE_SHORTEST in report.refusals:
        lines.append(f"Shortest paths computation skipped: {report.refusals[STAGE_SHORTEST]}")

    if report.critical is not None:
        lines += ["", str(report.critical)]
        lines += _metrics_line(report, STAGE_CRITICAL, "Critical Path Metrics")
    elif STAGE_CRITICAL in report.refusals:
        lines.append(f"Critical path computation failed: {report.refusals[STAGE_CRITICAL]}")
    return "\n".join(lines)


def format_batch(entries: List[BatchEntry]) -> str:
    blocks = []
    for entry in entries:
        if entry.report is not None:
            blocks.append(format_report(entry.report))
        else:
            blocks.append(f"Processing: {entry.path}\n{RULE}\nError loading dataset: {entry.error}")
    return f"\n\n{SEPARATOR}\n\n".join(blocks)


def report_to_payload(report: AnalysisReport) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "label": report.label,
        "vertices": report.graph.num_vertices,
        "edges": report.graph.edge_count,
        "acyclic": report.is_acyclic,
        "components": [list(members) for members in report.components.components],
        "vertex_to_component": list(report.components.vertex_to_component),
        "condensation": {
            "vertices": report.condensation.num_vertices,
            "durations": report.condensation.durations(),
            "edges": [
                [edge.source, edge.target, edge.weight] for edge in report.condensation.edges
            ],
        },
        "component_order": report.component_order,
        "vertex_order": report.vertex_order,
        "shortest_paths": None,
        "critical_path": None,
        "metrics": {stage: metrics.as_dict() for stage, metrics in report.metrics.items()},
        "refusals": dict(report.refusals),
    }
    if report.shortest is not None:
        payload["shortest_paths"] = {
            "source": report.shortest_source,
            "distances": list(report.shortest.distances),
            "predecessors": list(report.shortest.predecessors),
        }
    if report.critical is not None:
        payload["critical_path"] = {
            "path": list(report.critical.path),
            "length": report.critical.length,
        }
    if report.names:
        payload["names"] = {str(k): v for k, v in sorted(report.names.items())}
    return payload


def batch_to_payload(entries: List[BatchEntry]) -> Dict[str, Any]:
    return {
        "datasets": [
            {"path": str(entry.path), "error": entry.error}
            if entry.report is None
            else report_to_payload(entry.report)
            for entry in entries
        ]
    }
