import math
from abc import ABC, abstractmethod
from collections import deque
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .config import ARROW, NO_PATHS_PLACEHOLDER
from .errors import EmptyGraphError, UnknownAlgorithmError, UnknownNodeError
from .graph import Graph
from .state import AlgorithmState, Snapshot, format_distance


class RunnerStatus(Enum):
    IDLE = 'idle'
    RUNNING = 'running'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


class StepRunner(ABC):
    """Turns one algorithm into a sequence of snapshots, one per call to next().

    The first snapshot (step 0) shows the initialised state. Work that happens
    between two visible steps (expanding the node just shown) is done lazily
    by has_next(), so nothing changes until the caller asks for more.
    """

    name: str = ''

    def __init__(self, graph: Graph, source: str, state: Optional[AlgorithmState] = None):
        if not graph.has_node(source):
            raise UnknownNodeError(source)
        self.graph = graph
        self.source = source
        self.state = state if state is not None else AlgorithmState()
        self.state.algorithm = self.name
        self.status = RunnerStatus.IDLE
        self._pending: Optional[str] = None

    def __iter__(self):
        return self

    def __next__(self) -> Snapshot:
        return self.next()

    @property
    def finished(self) -> bool:
        return self.status in (RunnerStatus.COMPLETED, RunnerStatus.CANCELLED)

    def has_next(self) -> bool:
        if self.status is RunnerStatus.IDLE:
            return True
        if self.status is not RunnerStatus.RUNNING:
            return False

        self._settle()
        if self._exhausted():
            self.status = RunnerStatus.COMPLETED
            return False
        return True

    def next(self) -> Snapshot:
        if not self.has_next():
            raise StopIteration

        if self.status is RunnerStatus.IDLE:
            self.status = RunnerStatus.RUNNING
            self._start()
        else:
            self._advance()
            self.state.step += 1
        return self.state.capture()

    def cancel(self):
        if not self.finished:
            self.status = RunnerStatus.CANCELLED

    @abstractmethod
    def _start(self):
        pass

    @abstractmethod
    def _advance(self):
        pass

    @abstractmethod
    def _settle(self):
        pass

    @abstractmethod
    def _exhausted(self) -> bool:
        pass


class TraversalRunner(StepRunner):
    # nodes are marked visited when they enter the frontier, never when they leave it

    def _start(self):
        self._discover(self.source)

    def _discover(self, node_id: str):
        self.state.visit(node_id)
        self._push(node_id)
        self.state.result.append(node_id)
        self.state.frontier = list(self._frontier)

    def _advance(self):
        current = self._pop()
        self.state.current = current
        self.state.frontier = list(self._frontier)
        self._pending = current

    def _settle(self):
        if self._pending is None:
            return
        current, self._pending = self._pending, None
        for neighbor in self._expansion_order(self.graph.neighbors_of(current)):
            if not self.state.is_visited(neighbor):
                self._discover(neighbor)

    def _exhausted(self) -> bool:
        return not self._frontier

    @abstractmethod
    def _push(self, node_id: str):
        pass

    @abstractmethod
    def _pop(self) -> str:
        pass

    def _expansion_order(self, neighbors: List[str]) -> Iterable[str]:
        return neighbors


class BFSRunner(TraversalRunner):
    name = 'bfs'

    def __init__(self, graph, source, state=None):
        super().__init__(graph, source, state)
        self._frontier = deque()

    def _push(self, node_id):
        self._frontier.append(node_id)

    def _pop(self):
        return self._frontier.popleft()


class DFSRunner(TraversalRunner):
    name = 'dfs'

    def __init__(self, graph, source, state=None):
        super().__init__(graph, source, state)
        self._frontier = []

    def _push(self, node_id):
        self._frontier.append(node_id)

    def _pop(self):
        return self._frontier.pop()

    def _expansion_order(self, neighbors):
        # reversed so the smallest id ends up on top of the stack
        return reversed(neighbors)


class DijkstraRunner(StepRunner):
    name = 'dijkstra'

    def _start(self):
        ids = self.graph.node_ids()
        self._distances: Dict[str, float] = {node_id: math.inf for node_id in ids}
        self._distances[self.source] = 0
        self._previous: Dict[str, Optional[str]] = dict.fromkeys(ids)
        self._unvisited = dict.fromkeys(ids)
        self._done = False
        self._sync()

    def _sync(self):
        self.state.distances = dict(self._distances)
        self.state.frontier = [node_id for node_id in self._unvisited
                               if not math.isinf(self._distances[node_id])]

    def _closest(self) -> Optional[str]:
        closest = None
        smallest = math.inf
        for node_id in self._unvisited:
            if self._distances[node_id] < smallest:
                smallest = self._distances[node_id]
                closest = node_id
        return closest

    def _advance(self):
        current = self._closest()
        if current is None:
            self._finish()
            return

        self.state.current = current
        self.state.visit(current)
        del self._unvisited[current]
        self._pending = current
        self._sync()

    def _settle(self):
        if self._pending is None:
            return
        current, self._pending = self._pending, None
        for neighbor, weight in self.graph.neighbors_with_weights(current):
            if neighbor not in self._unvisited:
                continue
            candidate = self._distances[current] + weight
            if candidate < self._distances[neighbor]:
                self._distances[neighbor] = candidate
                self._previous[neighbor] = current
        self._sync()

    def _finish(self):
        self._done = True
        self.state.current = None
        self.state.result = describe_paths(self._distances, self._previous, self.source)
        self._sync()

    def _exhausted(self):
        return self._done


def shortest_path(previous: Dict[str, Optional[str]], source: str, target: str) -> List[str]:
    path = []
    current = target
    while current is not None and len(path) <= len(previous):
        path.insert(0, current)
        current = previous.get(current)
    if not path or path[0] != source or current is not None:
        return []
    return path


def describe_paths(distances: Dict[str, float], previous: Dict[str, Optional[str]],
                   source: str) -> List[str]:
    result = []
    for node_id, distance in distances.items():
        if math.isinf(distance):
            continue
        path = shortest_path(previous, source, node_id)
        if len(path) > 1:
            route = ARROW.join(path)
            result.append(f"{source}{ARROW}{node_id}: {route} (cost: {format_distance(distance)})")
    return result or [NO_PATHS_PLACEHOLDER]


RUNNERS = {
    'bfs': BFSRunner,
    'dfs': DFSRunner,
    'dijkstra': DijkstraRunner,
}


def create_runner(algorithm: str, graph: Graph, source: Optional[str] = None,
                  state: Optional[AlgorithmState] = None) -> StepRunner:
    runner_class = RUNNERS.get(algorithm)
    if runner_class is None:
        raise UnknownAlgorithmError(algorithm)
    if not graph.nodes:
        raise EmptyGraphError()
    if source is None:
        source = graph.nodes[0].id
    return runner_class(graph, source, state)


def collect_snapshots(algorithm: str, graph: Graph, source: Optional[str] = None) -> List[Snapshot]:
    return list(create_runner(algorithm, graph, source))
