import json
import random
from pathlib import Path

import pytest

from schedgraph import datasets
from schedgraph.core.scc import find_components
from schedgraph.core.topo import is_acyclic
from schedgraph.loader import load_graph, parse_tasks


def _graph(graph_type, n, seed=0):
    return parse_tasks(datasets.generate_tasks(n, graph_type, random.Random(seed))).graph


@pytest.mark.parametrize(
    "graph_type",
    [datasets.GraphType.PURE_DAG, datasets.GraphType.DENSE_DAG, datasets.GraphType.SPARSE_DAG],
)
@pytest.mark.parametrize("seed", range(3))
def test_dag_recipes_are_acyclic(graph_type, seed):
    payload = datasets.generate_tasks(20, graph_type, random.Random(seed))
    for task in payload["tasks"]:
        assert all(dep < task["id"] for dep in task["dependencies"])
    assert is_acyclic(parse_tasks(payload).graph)


def test_pure_dag_dependency_counts():
    payload = datasets.generate_tasks(10, datasets.GraphType.PURE_DAG, random.Random(1))
    for task in payload["tasks"][1:]:
        deps = task["dependencies"]
        assert 1 <= len(deps) <= min(3, task["id"])
        assert len(set(deps)) == len(deps)


def test_durations_in_range():
    payload = datasets.generate_tasks(50, datasets.GraphType.SPARSE_DAG, random.Random(3))
    assert all(1 <= task["duration"] <= 10 for task in payload["tasks"])


def test_two_cycles_shape():
    result = find_components(_graph(datasets.GraphType.TWO_CYCLES, 9))
    assert sorted(result.sizes()) == [4, 5]


@pytest.mark.parametrize("n,size,count", [(18, 3, 6), (30, 6, 5)])
@pytest.mark.parametrize("seed", range(3))
def test_multiple_sccs_forms_rings(n, size, count, seed):
    result = find_components(_graph(datasets.GraphType.MULTIPLE_SCCS, n, seed))
    assert sorted(result.sizes()) == [size] * count


def test_multiple_sccs_partial_tail_cluster_stays_in_range():
    graph = _graph(datasets.GraphType.MULTIPLE_SCCS, 11)
    assert graph.num_vertices == 11
    assert sorted(find_components(graph).sizes()) == [1, 2, 2, 2, 2, 2]


def test_generate_all_is_reproducible(tmp_path: Path):
    first = datasets.generate_all(tmp_path / "a", seed=42)
    second = datasets.generate_all(tmp_path / "b", seed=42)
    assert [p.name for p in first] == [name for name, _, _ in datasets.STANDARD_DATASETS]
    for a, b in zip(first, second):
        assert a.read_text(encoding="utf-8") == b.read_text(encoding="utf-8")
    for path, (_, size, _) in zip(first, datasets.STANDARD_DATASETS):
        assert load_graph(path).graph.num_vertices == size


def test_generate_dataset_writes_json(tmp_path: Path):
    path = datasets.generate_dataset(tmp_path / "nested" / "g.json", 4, datasets.GraphType.COMPLEX_MIXED, random.Random(0))
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert [task["id"] for task in payload["tasks"]] == [0, 1, 2, 3]


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        datasets.generate_tasks(-1, datasets.GraphType.PURE_DAG, random.Random(0))
