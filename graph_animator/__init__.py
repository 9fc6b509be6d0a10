from .controller import AnimationController, RunOutcome, speed_to_delay
from .errors import (AlreadyRunningError, DuplicateEdgeRejected, DuplicatePositionRejected,
                     EmptyGraphError, GraphAnimatorError, GraphError, InvalidWeightError, RunError,
                     SelfLoopRejected, StepFailure, UnknownAlgorithmError, UnknownNodeError)
from .graph import Edge, Graph, Node, random_graph, sample_graph
from .runners import (BFSRunner, DFSRunner, DijkstraRunner, RunnerStatus, StepRunner,
                      collect_snapshots, create_runner)
from .session import Mode, Session
from .state import AlgorithmState, InfoPanel, Snapshot, format_info

__version__ = "0.1.0"
