import random

import networkx as nx
import pytest

from schedgraph.core import scc
from schedgraph.core.graph import Graph, build_graph
from schedgraph.core.invariants import validate_condensation, validate_partition
from schedgraph.core.metrics import Metrics
from schedgraph.core.topo import topological_order
from schedgraph.export import to_networkx


def random_graph(seed: int, n: int = 12, p: float = 0.15) -> Graph:
    rng = random.Random(seed)
    graph = Graph(n)
    for u in range(n):
        for v in range(n):
            if rng.random() < p:
                graph.add_edge(u, v, rng.randint(-3, 9))
    return graph


def test_simple_dag_gives_singletons():
    result = scc.find_components(build_graph(3, [(0, 1), (1, 2)]))
    assert len(result) == 3
    assert all(size == 1 for size in result.sizes())
    assert result.nontrivial() == []
    assert result.cyclic_components() == []
    assert result.is_acyclic


def test_self_loop_singleton_is_cyclic():
    result = scc.find_components(build_graph(3, [(0, 1), (1, 1), (1, 1), (1, 2)]))
    assert result.sizes() == [1, 1, 1]
    assert result.nontrivial() == []
    assert result.self_loops == (1,)
    assert result.cyclic_components() == [result.component_of(1)]
    assert not result.is_acyclic


def test_cyclic_components_include_multi_vertex_cycles():
    result = scc.find_components(build_graph(4, [(0, 1), (1, 0), (2, 3), (3, 3)]))
    expected = sorted({result.component_of(0), result.component_of(3)})
    assert result.cyclic_components() == expected
    assert not result.is_acyclic


def test_single_cycle_is_one_component():
    result = scc.find_components(build_graph(3, [(0, 1), (1, 2), (2, 0)]))
    assert len(result) == 1
    assert set(result.components[0]) == {0, 1, 2}


def test_two_cycles_in_launch_order():
    result = scc.find_components(build_graph(4, [(0, 1), (1, 0), (2, 3), (3, 2)]))
    assert result.components == ((2, 3), (0, 1))
    assert result.vertex_to_component == (1, 1, 0, 0)


def test_condensation_keeps_cross_edges():
    graph = build_graph(3, [(0, 1), (1, 0), (1, 2, 6)], durations={0: 2, 1: 5, 2: 3})
    result, condensed = scc.condensation(graph)
    assert result.components == ((0, 1), (2,))
    assert condensed.num_vertices == 2
    assert condensed.has_edge(result.component_of(0), result.component_of(2))
    assert condensed.durations() == [5, 3]
    assert condensed.edges[0].weight == 6
    validate_condensation(graph, result, condensed)


def test_condensation_dedupes_with_first_weight():
    graph = build_graph(4, [(0, 1), (1, 0), (0, 2, 8), (1, 2, 2), (0, 2, 1), (2, 3, 4), (3, 2, 4)])
    result, condensed = scc.condensation(graph)
    assert condensed.num_vertices == 2
    assert condensed.edge_count == 1
    assert condensed.edges[0].weight == 8


def test_condensation_drops_self_loops():
    graph = build_graph(2, [(0, 0), (0, 1)])
    result, condensed = scc.condensation(graph)
    assert len(result) == 2
    assert [(e.source, e.target) for e in condensed.edges] == [(0, 1)]


def test_empty_graph():
    result, condensed = scc.condensation(Graph(0))
    assert result.components == ()
    assert result.vertex_to_component == ()
    assert condensed.num_vertices == 0


def test_single_vertex():
    result = scc.find_components(Graph(1))
    assert result.components == ((0,),)


def test_deep_chain_does_not_recurse():
    n = 20000
    graph = Graph(n)
    for v in range(n - 1):
        graph.add_edge(v, v + 1)
    graph.add_edge(n - 1, 0)
    result = scc.find_components(graph)
    assert len(result) == 1
    assert len(result.components[0]) == n


def test_deep_acyclic_chain_components_follow_ids():
    n = 5000
    graph = build_graph(n, [(v, v + 1) for v in range(n - 1)])
    result = scc.find_components(graph)
    assert result.components == tuple((v,) for v in range(n))


def test_find_components_is_idempotent():
    graph = random_graph(7)
    first = scc.find_components(graph)
    second = scc.find_components(graph)
    assert first == second


def test_metrics_count_both_passes():
    metrics = Metrics()
    scc.find_components(build_graph(3, [(0, 1), (1, 2)]), metrics)
    assert metrics.dfs_visits == 6
    assert metrics.edge_traversals == 4
    assert metrics.elapsed_ns >= 0


@pytest.mark.parametrize("seed", range(8))
def test_partition_matches_networkx(seed):
    graph = random_graph(seed)
    result = scc.find_components(graph)
    validate_partition(graph, result)
    expected = {frozenset(comp) for comp in nx.strongly_connected_components(to_networkx(graph))}
    assert result.partition() == expected


@pytest.mark.parametrize("seed", range(8))
def test_condensation_is_acyclic(seed):
    graph = random_graph(seed, n=15, p=0.2)
    result, condensed = scc.condensation(graph)
    validate_condensation(graph, result, condensed)
    again = scc.find_components(condensed)
    assert all(size == 1 for size in again.sizes())
    assert len(topological_order(condensed)) == condensed.num_vertices
    assert nx.is_directed_acyclic_graph(to_networkx(condensed))
