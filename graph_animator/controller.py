import threading
from enum import Enum
from typing import Callable, Optional

from .config import DEFAULT_DELAY_MS, MAX_DELAY_MS, MIN_DELAY_MS, SPEED_SLIDER_SUM
from .errors import AlreadyRunningError, EmptyGraphError, StepFailure
from .graph import Graph
from .runners import StepRunner, create_runner
from .state import EMPTY_SNAPSHOT, AlgorithmState, InfoPanel, Snapshot, format_info


class RunOutcome(Enum):
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'
    FAILED = 'failed'


def clamp_delay(delay_ms: float) -> int:
    return int(max(MIN_DELAY_MS, min(MAX_DELAY_MS, delay_ms)))


def speed_to_delay(speed: float) -> int:
    """Slider value to delay: a faster setting waits less between steps."""
    return clamp_delay(SPEED_SLIDER_SUM - speed)


def _ignore(*args):
    pass


class AnimationController:
    """Drives one step runner at a time with cancellable pacing.

    Snapshots go to on_state, the formatted info panel to on_info, and
    human-readable progress to on_status. Pacing waits on a threading.Event,
    so stop() and reset() interrupt a delay instead of sitting it out.
    """

    def __init__(self,
                 on_state: Optional[Callable[[Snapshot], None]] = None,
                 on_info: Optional[Callable[[InfoPanel], None]] = None,
                 on_status: Optional[Callable[[str], None]] = print,
                 delay_ms: int = DEFAULT_DELAY_MS):
        self.on_state = on_state or _ignore
        self.on_info = on_info or _ignore
        self.on_status = on_status or _ignore
        self.delay_ms = clamp_delay(delay_ms)

        self.state = AlgorithmState()
        self.algorithm: Optional[str] = None
        self.runner: Optional[StepRunner] = None
        self.last_outcome: Optional[RunOutcome] = None
        self.last_error: Optional[StepFailure] = None

        self._running = False
        self._resetting = False
        self._cancel = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def snapshot(self) -> Snapshot:
        return self.state.capture()

    def set_speed(self, speed: float) -> int:
        self.delay_ms = speed_to_delay(speed)
        return self.delay_ms

    def _publish(self, snapshot: Snapshot):
        self.on_state(snapshot)
        self.on_info(format_info(snapshot, self.algorithm))

    def _prepare(self, algorithm: str, graph: Graph, source: Optional[str]) -> StepRunner:
        if self._running:
            raise AlreadyRunningError()
        if not graph.nodes:
            raise EmptyGraphError()

        # runs walk a private copy of the graph
        state = AlgorithmState()
        runner = create_runner(algorithm, graph.copy(), source, state)

        self._cancel.clear()
        self._resetting = False
        self.state = state
        self.algorithm = algorithm
        self.runner = runner
        self.last_error = None
        self._running = True
        return runner

    def run(self, algorithm: str, graph: Graph, source: Optional[str] = None,
            delay_ms: Optional[int] = None) -> RunOutcome:
        runner = self._prepare(algorithm, graph, source)
        self._thread = None
        return self._drive(runner, delay_ms)

    def start(self, algorithm: str, graph: Graph, source: Optional[str] = None,
              delay_ms: Optional[int] = None) -> threading.Thread:
        """Same as run() but on a daemon thread. Validation errors still raise here."""
        runner = self._prepare(algorithm, graph, source)
        self._thread = threading.Thread(target=self._drive, args=(runner, delay_ms),
                                        name=f"animate-{algorithm}", daemon=True)
        self._thread.start()
        return self._thread

    def _drive(self, runner: StepRunner, delay_ms: Optional[int]) -> RunOutcome:
        outcome = RunOutcome.COMPLETED
        try:
            self._publish(EMPTY_SNAPSHOT)
            while not self._cancel.is_set() and runner.has_next():
                snapshot = runner.next()
                if self._cancel.is_set():
                    break
                self._publish(snapshot)
                delay = self.delay_ms if delay_ms is None else delay_ms
                if self._cancel.wait(delay / 1000.0):
                    break
            if self._cancel.is_set():
                runner.cancel()
                outcome = RunOutcome.CANCELLED
                if not self._resetting:
                    self.on_status('Visualization stopped')
            else:
                self.on_status('Visualization completed')
        except Exception as e:
            failure = StepFailure(runner.state.step, runner.name)
            failure.__cause__ = e
            self.last_error = failure
            runner.cancel()
            outcome = RunOutcome.FAILED
            self.on_status(str(failure))
        finally:
            self._running = False
            self._resetting = False
            self._cancel.clear()
            self.last_outcome = outcome
        return outcome

    def stop(self, wait: bool = True):
        if not self._running:
            return
        self._cancel.set()
        thread = self._thread
        if wait and thread is not None and thread is not threading.current_thread():
            thread.join()

    def reset(self, wait: bool = True):
        if self._running:
            # the interrupted run skips its "stopped" status
            self._resetting = True
        self.stop(wait)
        self.state = AlgorithmState()
        self._publish(self.state.capture())
        self.on_status('Visualization reset')
