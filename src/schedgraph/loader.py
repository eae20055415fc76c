"""JSON task-file loading.

A task file looks like::

    {"tasks": [{"id": 0, "name": "survey", "duration": 5, "dependencies": [1, 2]}]}

Each dependency ``d`` of task ``t`` becomes an edge ``d -> t``. Its weight is
``d``'s own duration when that task declares one, otherwise the configured
default weight. A dependency may also be written ``{"id": d, "weight": w}`` to set the
weight explicitly.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .config import default_edge_weight
from .core.graph import Graph

LOGGER = logging.getLogger(__name__)


class LoaderError(ValueError):
    """Raised when a task file is structurally invalid."""


@dataclass
class TaskGraph:
    graph: Graph
    names: Dict[int, str] = field(default_factory=dict)

    def label(self, vertex: int) -> str:
        return self.names.get(vertex, f"task{vertex}")


def _as_int(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise LoaderError(f"{what} must be an integer, got {value!r}")
    return value


def _tasks(payload: Any) -> List[Mapping[str, Any]]:
    if not isinstance(payload, Mapping):
        raise LoaderError("Task file must be a JSON object.")
    tasks = payload.get("tasks")
    if not isinstance(tasks, list):
        raise LoaderError("Task file requires a 'tasks' list.")
    for idx, task in enumerate(tasks):
        if not isinstance(task, Mapping) or "id" not in task:
            raise LoaderError(f"Task #{idx} must be an object with an 'id'.")
    return tasks


def _dependencies(task: Mapping[str, Any], task_id: int) -> List[Any]:
    deps = task.get("dependencies")
    if deps is None:
        return []
    if not isinstance(deps, list):
        raise LoaderError(f"dependencies of task {task_id} must be a list, got {deps!r}")
    return deps


def parse_tasks(payload: Any, *, default_weight: Optional[int] = None) -> TaskGraph:
    """Build a :class:`TaskGraph` from a decoded task document."""

    tasks = _tasks(payload)
    fallback = default_edge_weight() if default_weight is None else default_weight

    max_id = -1
    names: Dict[int, str] = {}
    durations: Dict[int, int] = {}
    for task in tasks:
        task_id = _as_int(task["id"], "task id")
        if task_id < 0:
            raise LoaderError(f"task id must be non-negative, got {task_id}")
        max_id = max(max_id, task_id)
        if "name" in task:
            names[task_id] = str(task["name"])
        if "duration" in task:
            duration = _as_int(task["duration"], f"duration of task {task_id}")
            if duration < 0:
                raise LoaderError(f"duration of task {task_id} must be non-negative")
            durations[task_id] = duration

    graph = Graph(max_id + 1)
    for task_id, duration in durations.items():
        graph.set_node_duration(task_id, duration)

    for task in tasks:
        task_id = task["id"]
        for dep in _dependencies(task, task_id):
            explicit = None
            if isinstance(dep, Mapping):
                if "weight" in dep:
                    explicit = _as_int(dep["weight"], f"dependency weight of task {task_id}")
                dep = dep.get("id")
            dep_id = _as_int(dep, f"dependency of task {task_id}")
            if not 0 <= dep_id <= max_id:
                raise LoaderError(f"task {task_id} depends on unknown task {dep_id}")
            weight = explicit if explicit is not None else durations.get(dep_id, fallback)
            graph.add_edge(dep_id, task_id, weight)

    LOGGER.debug("parse_tasks vertices=%d edges=%d", graph.num_vertices, graph.edge_count)
    return TaskGraph(graph=graph, names=names)


def load_graph(path: Path) -> TaskGraph:
    file_path = Path(path)
    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise LoaderError(f"{file_path} is not UTF-8 text: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise LoaderError(f"{file_path} is not valid JSON: {exc}") from exc
    return parse_tasks(payload)


def dump_tasks(graph: Graph, names: Optional[Mapping[int, str]] = None) -> Dict[str, Any]:
    """Inverse of :func:`parse_tasks` for graphs whose edge weights follow the default rule."""

    names = names or {}
    dependencies: Dict[int, List[int]] = {v: [] for v in graph.vertices()}
    for edge in graph.edges:
        dependencies[edge.target].append(edge.source)
    tasks = []
    for vertex in graph.vertices():
        tasks.append(
            {
                "id": vertex,
                "name": names.get(vertex, f"task{vertex}"),
                "duration": graph.node_duration(vertex),
                "dependencies": dependencies[vertex],
            }
        )
    return {"tasks": tasks}
