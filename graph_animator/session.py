import random
from enum import Enum
from typing import Callable, Dict, Optional

from .config import ALGORITHMS
from .controller import AnimationController, RunOutcome
from .errors import GraphAnimatorError, UnknownAlgorithmError
from .graph import Graph, Node, random_graph, sample_graph


class Mode(Enum):
    ADD_NODE = 'addNode'
    ADD_EDGE = 'addEdge'
    DRAG_NODE = 'dragNode'


MODE_HINTS = {
    Mode.ADD_NODE: 'Mode: Add Node - click on the canvas to add a node',
    Mode.ADD_EDGE: 'Mode: Add Edge - click two nodes to connect them',
    Mode.DRAG_NODE: 'Mode: Drag Node - drag a node to move it',
}

AUTHORING_CONTROLS = ('addNode', 'addEdge', 'dragNode', 'clear', 'randomGraph', 'start')


class Session:
    """Everything the canvas UI needs: one graph, one controller, one status line.

    Engine errors never escape from here; they end up in `status`.
    """

    def __init__(self, graph: Optional[Graph] = None,
                 on_state=None, on_info=None,
                 on_status: Optional[Callable[[str], None]] = print,
                 rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.on_status = on_status
        self.status = ''
        self.graph = graph if graph is not None else sample_graph(self.rng)
        self.controller = AnimationController(on_state, on_info, self._report)

        self.algorithm = 'bfs'
        self.mode = Mode.ADD_NODE
        self.first_node: Optional[Node] = None
        self.dragging: Optional[Node] = None
        self._drag_offset = (0.0, 0.0)

    def _report(self, message: str):
        self.status = message
        if self.on_status is not None:
            self.on_status(message)

    @property
    def is_running(self) -> bool:
        return self.controller.is_running

    def _editable(self) -> bool:
        if self.is_running:
            self._report('The graph cannot be edited while a visualization is running')
            return False
        return True

    def set_mode(self, mode: Mode):
        self.mode = Mode(mode)
        self.first_node = None
        self.dragging = None
        self._report(MODE_HINTS[self.mode])

    def select_algorithm(self, algorithm: str):
        if algorithm not in ALGORITHMS:
            self._report(str(UnknownAlgorithmError(algorithm)))
            return
        self.algorithm = algorithm

    def set_speed(self, speed: float) -> int:
        return self.controller.set_speed(speed)

    def add_node(self, x: float, y: float) -> Optional[Node]:
        if not self._editable():
            return None
        try:
            node = self.graph.add_node(x, y)
        except GraphAnimatorError as e:
            self._report(str(e))
            return None
        self._report(f"Node {node.id} added")
        return node

    def add_edge(self, a: str, b: str):
        if not self._editable():
            return None
        try:
            edge = self.graph.add_edge(a, b)
        except GraphAnimatorError as e:
            self._report(str(e))
            return None
        self._report(f"Edge created between {a} and {b}")
        return edge

    def click(self, x: float, y: float):
        if self.is_running:
            return
        if self.mode is Mode.ADD_NODE:
            self.add_node(x, y)
        elif self.mode is Mode.ADD_EDGE:
            node = self.graph.node_at(x, y)
            if node is None:
                return
            if self.first_node is None:
                self.first_node = node
                self._report(f"Node {node.id} selected, choose the target node")
            else:
                first, self.first_node = self.first_node, None
                self.add_edge(first.id, node.id)

    def begin_drag(self, x: float, y: float) -> Optional[Node]:
        if self.is_running or self.mode is not Mode.DRAG_NODE:
            return None
        node = self.graph.node_at(x, y)
        if node is not None:
            self.dragging = node
            self._drag_offset = (x - node.x, y - node.y)
            self._report(f"Dragging node {node.id}")
        return node

    def drag_to(self, x: float, y: float):
        if self.dragging is None:
            return
        dx, dy = self._drag_offset
        self.graph.move_node(self.dragging.id, x - dx, y - dy)

    def end_drag(self):
        if self.dragging is not None:
            self.dragging = None
            self._report('Node moved')

    def clear(self):
        if not self._editable():
            return
        self.graph.clear()
        self.first_node = None
        self._report('Graph cleared')

    def randomize(self):
        if not self._editable():
            return
        self.graph = random_graph(self.rng)
        self.first_node = None
        self._report('Random graph generated')

    def load_sample(self):
        if not self._editable():
            return
        self.graph = sample_graph(self.rng)
        self._report('Sample graph created')

    def start(self, source: Optional[str] = None, background: bool = False) -> Optional[RunOutcome]:
        try:
            if background:
                self.controller.start(self.algorithm, self.graph, source)
                return None
            return self.controller.run(self.algorithm, self.graph, source)
        except GraphAnimatorError as e:
            self._report(str(e))
            return None

    def stop(self):
        self.controller.stop()

    def reset(self):
        self.controller.reset()

    def controls_enabled(self) -> Dict[str, bool]:
        running = self.is_running
        controls = {name: not running for name in AUTHORING_CONTROLS}
        controls['reset'] = running or self.controller.state.step != 0
        return controls
