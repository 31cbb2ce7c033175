"""
Observable holder of the current run state.

Consumers either poll `value`, register a listener, or block in
wait_for_terminal(). Publishing only moves forward:
Idle -> Running -> Completed | Failed, and a terminal state may start a new run.
"""
import threading
from typing import Callable, List, Optional

from cpubench.models.run_state import Completed, Failed, Idle, Running, RunState
from cpubench.util.log_config import setup_logger

Listener = Callable[[RunState], None]

logger = setup_logger(__name__)


class InvalidTransitionError(RuntimeError):
    """Raised when a published state would move a run backwards."""


def _allowed(current: RunState, new: RunState) -> bool:
    if isinstance(new, Idle):
        return not isinstance(current, Running)
    if isinstance(new, Running):
        if isinstance(current, Running):
            return new.progress.completed_count >= current.progress.completed_count
        return new.progress.completed_count == 0
    # Completed / Failed
    return isinstance(current, Running)


class RunStateStore:

    def __init__(self):
        self._state: RunState = Idle()
        self._listeners: List[Listener] = []
        self._condition = threading.Condition()

    @property
    def value(self) -> RunState:
        with self._condition:
            return self._state

    def subscribe(self, listener: Listener) -> None:
        with self._condition:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._condition:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def publish(self, state: RunState) -> None:
        """
        Replace the current state and notify every listener.

        Raises:
            InvalidTransitionError: if state does not follow the current one
        """
        with self._condition:
            if not _allowed(self._state, state):
                raise InvalidTransitionError(
                    f"Cannot move from {type(self._state).__name__} to {type(state).__name__}"
                )
            self._state = state
            listeners = list(self._listeners)
            self._condition.notify_all()

        for listener in listeners:
            try:
                listener(state)
            except Exception:
                logger.exception(f"State listener {listener!r} failed")

    def wait_for_terminal(self, timeout: Optional[float] = None) -> Optional[RunState]:
        """
        Block until the current state is Completed or Failed.

        Returns:
            The terminal state, or None if timeout expired first
        """
        with self._condition:
            done = self._condition.wait_for(lambda: isinstance(self._state, (Completed, Failed)), timeout)
            return self._state if done else None
