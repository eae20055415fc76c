"""Advisory counters collected by a single algorithm invocation."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from time import perf_counter_ns
from typing import Dict, Iterator, Optional


@dataclass
class Metrics:
    """Operation counters plus wall-clock time for one algorithm call.

    Callers own the instance and pass it in; algorithms only ever add to it.
    Counters never influence results.
    """

    dfs_visits: int = 0
    edge_traversals: int = 0
    kahn_pushes: int = 0
    kahn_pops: int = 0
    relaxations: int = 0
    elapsed_ns: int = 0
    _started_ns: Optional[int] = field(default=None, repr=False, compare=False)

    def reset(self) -> None:
        self.dfs_visits = 0
        self.edge_traversals = 0
        self.kahn_pushes = 0
        self.kahn_pops = 0
        self.relaxations = 0
        self.elapsed_ns = 0
        self._started_ns = None

    def start(self) -> None:
        self._started_ns = perf_counter_ns()

    def stop(self) -> None:
        if self._started_ns is None:
            return
        self.elapsed_ns += perf_counter_ns() - self._started_ns
        self._started_ns = None

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1_000_000.0

    def merge(self, other: "Metrics") -> "Metrics":
        """Return a new instance holding the sum of both counter sets."""

        return Metrics(
            dfs_visits=self.dfs_visits + other.dfs_visits,
            edge_traversals=self.edge_traversals + other.edge_traversals,
            kahn_pushes=self.kahn_pushes + other.kahn_pushes,
            kahn_pops=self.kahn_pops + other.kahn_pops,
            relaxations=self.relaxations + other.relaxations,
            elapsed_ns=self.elapsed_ns + other.elapsed_ns,
        )

    def as_dict(self) -> Dict[str, float]:
        payload: Dict[str, float] = asdict(self)
        payload.pop("_started_ns", None)
        payload["elapsed_ms"] = self.elapsed_ms
        return payload

    def __str__(self) -> str:
        return (
            f"Metrics{{DFS Visits: {self.dfs_visits}, Edge Traversals: {self.edge_traversals}, "
            f"Kahn Pops: {self.kahn_pops}, Kahn Pushes: {self.kahn_pushes}, "
            f"Relaxations: {self.relaxations}, Time: {self.elapsed_ms:.3f} ms}}"
        )


@contextmanager
def timed(metrics: Optional[Metrics]) -> Iterator[Metrics]:
    """Time the enclosed block into ``metrics`` (a private instance when ``None``)."""

    tracker = metrics if metrics is not None else Metrics()
    tracker.start()
    try:
        yield tracker
    finally:
        tracker.stop()
