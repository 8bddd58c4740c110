"""Analysis workflow state machine: idle -> staged -> analyzing -> resulted."""

import logging
from typing import Callable, List, Optional

from core.analysis_simulator import AnalysisSimulator, CancelHandle
from core.risk_classifier import build_result
from core.utils import AnalysisResult, ImageRef, RawAnalysisOutput, SessionState

logger = logging.getLogger(__name__)

SessionListener = Callable[["AnalysisSession"], None]


class InvalidStateError(RuntimeError):
    """An operation was attempted in a state that forbids it."""

    def __init__(self, operation: str, state: SessionState):
        super().__init__(f"Cannot {operation} while {state.value}")
        self.operation = operation
        self.state = state


class AnalysisSession:
    """Owns the staged image, run progress, and result of one analysis view.

    State and progress are only mutated by the public methods below and by
    simulator callbacks belonging to the current run.
    """

    def __init__(self, simulator: AnalysisSimulator):
        self._simulator = simulator
        self._state = SessionState.IDLE
        self._image: Optional[ImageRef] = None
        self._progress = 0
        self._result: Optional[AnalysisResult] = None
        self._run_id = 0
        self._handle: Optional[CancelHandle] = None
        self._listeners: List[SessionListener] = []

    # --- Read-only view ---

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def image(self) -> Optional[ImageRef]:
        return self._image

    @property
    def progress(self) -> int:
        return self._progress

    @property
    def result(self) -> Optional[AnalysisResult]:
        return self._result

    @property
    def run_id(self) -> int:
        return self._run_id

    @property
    def is_analyzing(self) -> bool:
        return self._state == SessionState.ANALYZING

    @property
    def can_start(self) -> bool:
        return self._state == SessionState.STAGED

    # --- Listeners ---

    def add_listener(self, listener: SessionListener):
        self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self):
        for listener in list(self._listeners):
            listener(self)

    # --- Transitions ---

    def stage_image(self, image: ImageRef):
        """Stage a new image, discarding any prior run or result."""
        if image is None:
            raise ValueError("An image is required to stage")
        self._cancel_run()
        self._image = image
        self._result = None
        self._progress = 0
        self._set_state(SessionState.STAGED)

    def start_analysis(self):
        """Start a simulated run on the staged image."""
        if self._state != SessionState.STAGED:
            logger.warning("Rejected start_analysis in state %s", self._state.value)
            raise InvalidStateError("start analysis", self._state)

        self._run_id += 1
        run_id = self._run_id
        self._progress = 0
        # The handle must exist before listeners run, so a listener that
        # resets or re-stages can cancel this run.
        self._handle = self._simulator.run(
            on_progress=lambda p: self._on_progress(run_id, p),
            on_complete=lambda raw: self._on_complete(run_id, raw),
        )
        logger.info("Analysis run %d started", run_id)
        self._set_state(SessionState.ANALYZING)

    def reset(self):
        """Clear everything and return to idle."""
        self._cancel_run()
        self._image = None
        self._result = None
        self._progress = 0
        self._set_state(SessionState.IDLE)

    # --- Simulator callbacks ---

    def _is_current(self, run_id: int) -> bool:
        return run_id == self._run_id and self._state == SessionState.ANALYZING

    def _on_progress(self, run_id: int, value: int):
        if not self._is_current(run_id):
            logger.debug("Dropped progress %d from stale run %d", value, run_id)
            return
        if value <= self._progress or value > 100:
            return
        self._progress = value
        self._notify()

    def _on_complete(self, run_id: int, raw: RawAnalysisOutput):
        if not self._is_current(run_id):
            logger.debug("Dropped result from stale run %d", run_id)
            return
        self._result = build_result(raw)
        self._progress = 100
        if self._handle is not None:
            # Stops a progress timer that has not reached 100 yet
            self._handle.cancel()
            self._handle = None
        logger.info(
            "Analysis run %d finished: %s risk (confidence %.2f%%)",
            run_id, self._result.risk_tier.value, raw.confidence_pct,
        )
        self._set_state(SessionState.RESULTED)

    # --- Internals ---

    def _cancel_run(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            logger.info("Analysis run %d cancelled", self._run_id)

    def _set_state(self, state: SessionState):
        if state != self._state:
            logger.debug("Session %s -> %s", self._state.value, state.value)
        self._state = state
        self._notify()
