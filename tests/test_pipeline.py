import json
from pathlib import Path

import networkx as nx

from schedgraph import pipeline
from schedgraph.config import AnalysisOptions
from schedgraph.core.graph import build_graph
from schedgraph.core.invariants import CycleDetected, validate_order


def mixed_graph():
    # {0,1} -> {2,3} -> 4, plus an isolated heavy task 5
    return build_graph(
        6,
        [(0, 1, 2), (1, 0, 2), (1, 2, 3), (2, 3, 1), (3, 2, 1), (3, 4, 5)],
        durations={0: 2, 1: 4, 2: 1, 3: 6, 4: 3, 5: 2},
    )


def test_analyze_graph_runs_every_stage():
    graph = mixed_graph()
    report = pipeline.analyze_graph(graph, label="mixed")
    assert len(report.components) == 4
    assert report.refusals == {}
    assert not report.is_acyclic
    validate_order(report.condensation, report.component_order)
    assert sorted(report.vertex_order) == list(range(6))
    assert report.shortest_source == report.component_order[0]
    assert report.shortest.distances[report.shortest_source] == 0
    # heaviest chain: {0,1} (4) -> {2,3} (6) -> 4 (3)
    assert report.critical.length == 13
    assert set(report.metrics) == {"scc", "topological_order", "shortest_paths", "critical_path"}
    assert report.total_metrics().dfs_visits == report.metrics["scc"].dfs_visits


def test_explicit_shortest_source():
    report = pipeline.analyze_graph(mixed_graph(), options=AnalysisOptions(shortest_source=3))
    assert report.shortest_source == 3
    assert report.shortest.distances[3] == 0


def test_out_of_range_source_is_refused():
    report = pipeline.analyze_graph(mixed_graph(), options=AnalysisOptions(shortest_source=40))
    assert report.shortest is None
    assert "outside" in report.refusals["shortest_paths"]
    assert report.critical is not None


def test_cycle_refusal_skips_dependent_stages(monkeypatch):
    def refuse(graph, metrics=None):
        raise CycleDetected(graph.num_vertices, 0)

    monkeypatch.setattr(pipeline, "topological_order", refuse)
    report = pipeline.analyze_graph(mixed_graph())
    assert report.component_order is None
    assert report.shortest is None and report.critical is None
    assert report.refusals == {
        "topological_order": "cycle present",
        "shortest_paths": "cycle present",
        "critical_path": "cycle present",
    }


def test_self_loop_reported_as_cyclic():
    report = pipeline.analyze_graph(build_graph(2, [(0, 0), (0, 1)]))
    assert report.self_loops == [0]
    assert report.components.cyclic_components() == [report.components.component_of(0)]
    assert not report.is_acyclic
    assert report.component_order == [0, 1]


def test_empty_graph_report():
    report = pipeline.analyze_graph(build_graph(0, []))
    assert report.component_order == []
    assert report.shortest is None
    assert report.critical.length == 0
    assert report.refusals == {}


def test_graphml_export(tmp_path: Path):
    options = AnalysisOptions(graphml_dir=tmp_path / "out")
    pipeline.analyze_graph(mixed_graph(), label="data/mixed.json", options=options)
    exported = nx.read_graphml(tmp_path / "out" / "mixed.condensation.graphml")
    assert exported.number_of_nodes() == 4


def test_run_batch_continues_past_bad_files(tmp_path: Path):
    good = tmp_path / "good.json"
    good.write_text(json.dumps({"tasks": [{"id": 0}, {"id": 1, "dependencies": [0]}]}), encoding="utf-8")
    broken = tmp_path / "broken.json"
    broken.write_text("[]", encoding="utf-8")
    bad_deps = tmp_path / "bad_deps.json"
    bad_deps.write_text(json.dumps({"tasks": [{"id": 0}, {"id": 1, "dependencies": 3}]}), encoding="utf-8")
    not_utf8 = tmp_path / "not_utf8.json"
    not_utf8.write_bytes(b"{\"tasks\": [{\"id\": 0, \"name\": \"\xff\"}]}")
    entries = pipeline.run_batch([tmp_path / "missing.json", broken, bad_deps, not_utf8, good])
    assert [entry.report is None for entry in entries] == [True, True, True, True, False]
    assert all(entry.error for entry in entries[:4])
    assert entries[4].report.component_order == [0, 1]
