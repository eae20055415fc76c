"""networkx conversion and GraphML export."""
from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional, Sequence

import networkx as nx

from .core.graph import Graph


def to_networkx(
    graph: Graph,
    *,
    labels: Optional[Mapping[int, str]] = None,
    members: Optional[Sequence[Sequence[int]]] = None,
) -> nx.MultiDiGraph:
    """Convert a graph into a ``MultiDiGraph`` keeping duplicate edges.

    ``members`` (one entry per vertex) is recorded as a comma-separated node
    attribute, which is how condensation vertices list their original tasks.
    """
    out = nx.MultiDiGraph()
    for vertex in graph.vertices():
        attrs = {"duration": graph.node_duration(vertex)}
        if labels and vertex in labels:
            attrs["label"] = labels[vertex]
        if members is not None:
            attrs["members"] = ",".join(str(v) for v in members[vertex])
        out.add_node(vertex, **attrs)
    for edge in graph.edges:
        out.add_edge(edge.source, edge.target, weight=edge.weight)
    return out


def export_graphml(
    graph: Graph,
    path: Path,
    *,
    labels: Optional[Mapping[int, str]] = None,
    members: Optional[Sequence[Sequence[int]]] = None,
) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    nx.write_graphml(to_networkx(graph, labels=labels, members=members), out)
    return out
