import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import (CANVAS_HEIGHT, CANVAS_WIDTH, MAX_WEIGHT, MIN_NODE_SPACING, MIN_WEIGHT,
                     NODE_RADIUS, RANDOM_EXTRA_EDGES, RANDOM_POSITIONS, SAMPLE_EDGES,
                     SAMPLE_NODES)
from .errors import (DuplicateEdgeRejected, DuplicatePositionRejected, InvalidWeightError,
                     SelfLoopRejected, UnknownNodeError)


@dataclass
class Node:
    id: str
    x: float
    y: float


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    weight: int

    def connects(self, a: str, b: str) -> bool:
        return (self.source == a and self.target == b) or (self.source == b and self.target == a)

    def other(self, node_id: str) -> Optional[str]:
        if self.source == node_id:
            return self.target
        if self.target == node_id:
            return self.source
        return None


class Graph:
    """Simple weighted undirected graph.

    Nodes keep insertion order, which is also id order ("N1", "N2", ...).
    Every mutation validates first, so a rejected call leaves the graph as it was.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 width: float = CANVAS_WIDTH, height: float = CANVAS_HEIGHT):
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []
        self.rng = rng or random.Random()
        self.width = width
        self.height = height

    def __len__(self):
        return len(self.nodes)

    def __contains__(self, node_id):
        return self.has_node(node_id)

    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    def has_node(self, node_id: str) -> bool:
        return any(node.id == node_id for node in self.nodes)

    def get_node(self, node_id: str) -> Node:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise UnknownNodeError(node_id)

    def node_at(self, x: float, y: float) -> Optional[Node]:
        for node in self.nodes:
            if math.hypot(node.x - x, node.y - y) <= NODE_RADIUS:
                return node
        return None

    def add_node(self, x: float, y: float) -> Node:
        for node in self.nodes:
            if math.hypot(node.x - x, node.y - y) < MIN_NODE_SPACING:
                raise DuplicatePositionRejected(x, y, node.id)

        node = Node(f"N{len(self.nodes) + 1}", x, y)
        self.nodes.append(node)
        return node

    def find_edge(self, a: str, b: str) -> Optional[Edge]:
        for edge in self.edges:
            if edge.connects(a, b):
                return edge
        return None

    def add_edge(self, a: str, b: str, weight: Optional[int] = None) -> Edge:
        if a == b:
            raise SelfLoopRejected(a)
        for node_id in (a, b):
            if not self.has_node(node_id):
                raise UnknownNodeError(node_id)
        if self.find_edge(a, b) is not None:
            raise DuplicateEdgeRejected(a, b)

        if weight is None:
            weight = self.rng.randint(MIN_WEIGHT, MAX_WEIGHT)
        elif not MIN_WEIGHT <= weight <= MAX_WEIGHT:
            raise InvalidWeightError(weight, MIN_WEIGHT, MAX_WEIGHT)

        edge = Edge(a, b, int(weight))
        self.edges.append(edge)
        return edge

    def move_node(self, node_id: str, x: float, y: float) -> Node:
        node = self.get_node(node_id)
        # keep the whole circle on the canvas
        node.x = max(NODE_RADIUS, min(self.width - NODE_RADIUS, x))
        node.y = max(NODE_RADIUS, min(self.height - NODE_RADIUS, y))
        return node

    def neighbors_of(self, node_id: str) -> List[str]:
        neighbors = []
        for edge in self.edges:
            other = edge.other(node_id)
            if other is not None:
                neighbors.append(other)
        return sorted(neighbors)

    def neighbors_with_weights(self, node_id: str) -> List[Tuple[str, int]]:
        neighbors = []
        for edge in self.edges:
            other = edge.other(node_id)
            if other is not None:
                neighbors.append((other, edge.weight))
        return neighbors

    def clear(self):
        self.nodes = []
        self.edges = []

    def copy(self) -> 'Graph':
        clone = type(self)(self.rng, self.width, self.height)
        clone.nodes = [Node(node.id, node.x, node.y) for node in self.nodes]
        clone.edges = list(self.edges)
        return clone


def sample_graph(rng: Optional[random.Random] = None) -> Graph:
    graph = Graph(rng)
    for x, y in SAMPLE_NODES:
        graph.add_node(x, y)
    for a, b, weight in SAMPLE_EDGES:
        graph.add_edge(a, b, weight)
    return graph


def random_graph(rng: Optional[random.Random] = None) -> Graph:
    graph = Graph(rng)
    rng = graph.rng
    for x, y in RANDOM_POSITIONS:
        graph.add_node(x, y)

    ids = graph.node_ids()
    for a, b in zip(ids, ids[1:]):
        graph.add_edge(a, b)

    for _ in range(RANDOM_EXTRA_EDGES):
        a = rng.choice(ids)
        b = rng.choice(ids)
        if a == b or graph.find_edge(a, b) is not None:
            continue
        graph.add_edge(a, b)
    return graph
