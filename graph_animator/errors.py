class GraphAnimatorError(Exception):
    pass


class GraphError(GraphAnimatorError):
    """Authoring-time validation failure. The graph is left untouched."""


class DuplicatePositionRejected(GraphError):
    def __init__(self, x, y, node_id):
        super().__init__(f"Position ({x:g}, {y:g}) is too close to node {node_id}")
        self.x = x
        self.y = y
        self.node_id = node_id


class SelfLoopRejected(GraphError):
    def __init__(self, node_id):
        super().__init__(f"Cannot connect node {node_id} to itself")
        self.node_id = node_id


class DuplicateEdgeRejected(GraphError):
    def __init__(self, a, b):
        super().__init__(f"An edge already exists between {a} and {b}")
        self.a = a
        self.b = b


class UnknownNodeError(GraphError):
    def __init__(self, node_id):
        super().__init__(f"Unknown node: {node_id}")
        self.node_id = node_id


class InvalidWeightError(GraphError):
    def __init__(self, weight, low, high):
        super().__init__(f"Edge weight {weight} is outside [{low}, {high}]")
        self.weight = weight


class RunError(GraphAnimatorError):
    pass


class EmptyGraphError(RunError):
    def __init__(self):
        super().__init__("Error: there are no nodes to visualize")


class AlreadyRunningError(RunError):
    def __init__(self):
        super().__init__("A visualization is already running")


class UnknownAlgorithmError(RunError):
    def __init__(self, name):
        super().__init__(f"Unknown algorithm: {name}")
        self.name = name


class StepFailure(RunError):
    def __init__(self, step, algorithm):
        super().__init__(f"An error occurred during visualization ({algorithm}, step {step})")
        self.step = step
        self.algorithm = algorithm
