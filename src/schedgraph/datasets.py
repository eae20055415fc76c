"""Synthetic task datasets with known structure (DAGs, cycles, SCC clusters)."""

from __future__ import annotations

import json
import logging
import random
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

LOGGER = logging.getLogger(__name__)

MIN_DURATION = 1
MAX_DURATION = 10


class GraphType(str, Enum):
    PURE_DAG = "pure_dag"
    SINGLE_CYCLE = "single_cycle"
    TWO_CYCLES = "two_cycles"
    MIXED_STRUCTURE = "mixed_structure"
    MULTIPLE_SCCS = "multiple_sccs"
    DENSE_DAG = "dense_dag"
    SPARSE_DAG = "sparse_dag"
    COMPLEX_MIXED = "complex_mixed"


STANDARD_DATASETS: Tuple[Tuple[str, int, GraphType], ...] = (
    ("small_pure_dag.json", 8, GraphType.PURE_DAG),
    ("small_single_cycle.json", 7, GraphType.SINGLE_CYCLE),
    ("small_two_cycles.json", 9, GraphType.TWO_CYCLES),
    ("medium_mixed.json", 15, GraphType.MIXED_STRUCTURE),
    ("medium_multiple_sccs.json", 18, GraphType.MULTIPLE_SCCS),
    ("medium_dense.json", 12, GraphType.DENSE_DAG),
    ("large_sparse.json", 25, GraphType.SPARSE_DAG),
    ("large_complex.json", 35, GraphType.COMPLEX_MIXED),
    ("large_multiple_sccs.json", 30, GraphType.MULTIPLE_SCCS),
)


def _pure_dag(node: int, num_nodes: int, rng: random.Random) -> List[int]:
    if node == 0:
        return []
    count = rng.randint(1, min(3, node))
    return sorted(rng.sample(range(node), count))


def _single_cycle(node: int, num_nodes: int, rng: random.Random) -> List[int]:
    if node == 0:
        return []
    if node < num_nodes - 1:
        return [node - 1]
    deps = [0]
    if node > 1:
        deps.append(node - 1)
    return deps


def _two_cycles(node: int, num_nodes: int, rng: random.Random) -> List[int]:
    mid = num_nodes // 2
    if node < mid:
        if node > 0:
            return [node - 1]
        return [mid - 1] if mid > 1 else []
    if node > mid:
        return [node - 1]
    return [num_nodes - 1] if num_nodes > mid + 1 else []


def _mixed_structure(node: int, num_nodes: int, rng: random.Random) -> List[int]:
    deps: List[int] = []
    if node == 0:
        return deps
    if rng.random() < 0.6:
        deps.append(node - 1)
    if rng.random() < 0.4 and node > 2:
        deps.append(rng.randrange(node - 1))
    return deps


def _multiple_sccs(node: int, num_nodes: int, rng: random.Random) -> List[int]:
    size = max(2, num_nodes // 5)
    cluster, local = divmod(node, size)
    # ring inside each cluster; ids past the last full cluster close their own ring
    last = min(cluster * size + size, num_nodes) - 1
    deps = [node - 1] if local > 0 else ([last] if last != node else [])
    if cluster > 0 and rng.random() < 0.3:
        deps.append((cluster - 1) * size + rng.randrange(size))
    return deps


def _dense_dag(node: int, num_nodes: int, rng: random.Random) -> List[int]:
    return [dep for dep in range(node) if rng.random() < 0.5]


def _sparse_dag(node: int, num_nodes: int, rng: random.Random) -> List[int]:
    if node > 0 and rng.random() < 0.3:
        return [rng.randrange(node)]
    return []


def _complex_mixed(node: int, num_nodes: int, rng: random.Random) -> List[int]:
    if node == 0:
        return []
    deps = [node - 3] if node % 3 == 0 else [node - 1]
    if rng.random() < 0.2 and node > 2:
        deps.append(rng.randrange(node - 1))
    return deps


_RECIPES = {
    GraphType.PURE_DAG: _pure_dag,
    GraphType.SINGLE_CYCLE: _single_cycle,
    GraphType.TWO_CYCLES: _two_cycles,
    GraphType.MIXED_STRUCTURE: _mixed_structure,
    GraphType.MULTIPLE_SCCS: _multiple_sccs,
    GraphType.DENSE_DAG: _dense_dag,
    GraphType.SPARSE_DAG: _sparse_dag,
    GraphType.COMPLEX_MIXED: _complex_mixed,
}


def generate_tasks(num_nodes: int, graph_type: GraphType, rng: random.Random) -> Dict[str, Any]:
    """Return a task document with ``num_nodes`` tasks shaped by ``graph_type``."""

    if num_nodes < 0:
        raise ValueError(f"num_nodes must be non-negative, got {num_nodes}")
    recipe = _RECIPES[GraphType(graph_type)]
    tasks = []
    for node in range(num_nodes):
        duration = rng.randint(MIN_DURATION, MAX_DURATION)
        tasks.append(
            {
                "id": node,
                "name": f"task{node}",
                "duration": duration,
                "dependencies": recipe(node, num_nodes, rng),
            }
        )
    return {"tasks": tasks}


def generate_dataset(path: Path, num_nodes: int, graph_type: GraphType, rng: random.Random) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    payload = generate_tasks(num_nodes, graph_type, rng)
    out.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    LOGGER.info("generated %s (%d tasks, %s)", out, num_nodes, GraphType(graph_type).value)
    return out


def generate_all(
    data_dir: Path,
    seed: int = 42,
    datasets: Sequence[Tuple[str, int, GraphType]] = STANDARD_DATASETS,
) -> List[Path]:
    """Write every dataset in ``datasets`` under ``data_dir`` from one seeded RNG."""

    rng = random.Random(seed)
    return [generate_dataset(Path(data_dir) / name, size, kind, rng) for name, size, kind in datasets]
