import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple, Optional, Tuple

from .config import ARROW, INFINITY_LABEL


@dataclass(frozen=True)
class Snapshot:
    """Read-only capture of an algorithm run at one step."""
    visited: Tuple[str, ...] = ()
    frontier: Tuple[str, ...] = ()
    current: Optional[str] = None
    step: int = 0
    result: Tuple[str, ...] = ()
    distances: Optional[Mapping[str, float]] = None
    algorithm: Optional[str] = None

    def is_visited(self, node_id: str) -> bool:
        return node_id in self.visited

    def in_frontier(self, node_id: str) -> bool:
        return node_id in self.frontier

    def distance_to(self, node_id: str) -> float:
        if self.distances is None:
            return math.inf
        return self.distances.get(node_id, math.inf)


@dataclass
class AlgorithmState:
    algorithm: Optional[str] = None
    visited: Dict[str, None] = field(default_factory=dict)
    frontier: List[str] = field(default_factory=list)
    current: Optional[str] = None
    step: int = 0
    result: List[str] = field(default_factory=list)
    distances: Optional[Dict[str, float]] = None

    def visit(self, node_id: str):
        self.visited[node_id] = None

    def is_visited(self, node_id: str) -> bool:
        return node_id in self.visited

    def capture(self) -> Snapshot:
        distances = None
        if self.distances is not None:
            distances = MappingProxyType(dict(self.distances))
        return Snapshot(
            visited=tuple(self.visited),
            frontier=tuple(self.frontier),
            current=self.current,
            step=self.step,
            result=tuple(self.result),
            distances=distances,
            algorithm=self.algorithm,
        )


EMPTY_SNAPSHOT = AlgorithmState().capture()


class InfoPanel(NamedTuple):
    frontier: str
    visited: str
    step: str
    result: str

    def lines(self) -> List[str]:
        return [self.frontier, self.visited, self.step, self.result]


def format_distance(distance: float) -> str:
    if math.isinf(distance):
        return INFINITY_LABEL
    if float(distance).is_integer():
        return str(int(distance))
    return f"{distance:g}"


def format_info(snapshot: Snapshot, algorithm: Optional[str] = None) -> InfoPanel:
    algorithm = algorithm or snapshot.algorithm
    label = 'Stack' if algorithm == 'dfs' else 'Queue'

    frontier = f"{label}: [{', '.join(snapshot.frontier)}]"
    visited = f"Visited: [{', '.join(snapshot.visited)}]"
    step = f"Step: {snapshot.step}"

    if algorithm == 'dijkstra' and snapshot.distances is not None:
        text = ', '.join(f"{node}:{format_distance(d)}" for node, d in snapshot.distances.items())
        result = f"Distances: {{{text}}}"
    else:
        separator = f" {ARROW} "
        result = f"Result: {separator.join(snapshot.result)}"

    return InfoPanel(frontier, visited, step, result)
