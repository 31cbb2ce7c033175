from .run_orchestrator import RunOrchestrator
from .state_store import InvalidTransitionError, RunStateStore

__all__ = ["InvalidTransitionError", "RunOrchestrator", "RunStateStore"]
