"""Simulated chest X-ray analysis.

No image is inspected. A run drives two independent timers: an interval
timer that reports progress in fixed steps, and a single-shot timer that
produces one randomized RawAnalysisOutput. Both are armed on the scheduler
passed in, which in the desktop app is the Qt event loop.
"""

import logging
from typing import Callable, Optional

import numpy as np

from core.utils import (
    CompleteCallback,
    ProgressCallback,
    RawAnalysisOutput,
    SimulationConfig,
)

logger = logging.getLogger(__name__)


class Timer:
    """A timer armed on a TimerScheduler."""

    def stop(self):
        raise NotImplementedError


class TimerScheduler:
    """Source of interval and single-shot timers."""

    def start_interval(self, interval_ms: int, callback: Callable[[], None]) -> Timer:
        raise NotImplementedError

    def start_single_shot(self, delay_ms: int, callback: Callable[[], None]) -> Timer:
        raise NotImplementedError


class CancelHandle:
    """Stops a run. Nothing is delivered after cancel(), even if already queued."""

    def __init__(self):
        self._timers = []
        self._cancelled = False

    def _attach(self, timer: Timer):
        self._timers.append(timer)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self):
        if self._cancelled:
            return
        self._cancelled = True
        for timer in self._timers:
            timer.stop()
        self._timers.clear()


class AnalysisSimulator:
    """Produces a simulated analysis result after a fixed delay."""

    def __init__(
        self,
        scheduler: TimerScheduler,
        config: Optional[SimulationConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self._scheduler = scheduler
        self._config = config or SimulationConfig()
        self._rng = rng if rng is not None else np.random.default_rng()

    @property
    def config(self) -> SimulationConfig:
        return self._config

    def generate_output(self) -> RawAnalysisOutput:
        """Draw one output: accuracy in [85, 100), confidence in [75, 95), 40% positive."""
        accuracy = float(self._rng.random()) * 15 + 85
        confidence = float(self._rng.random()) * 20 + 75
        is_positive = bool(self._rng.random() > 0.6)
        return RawAnalysisOutput(
            accuracy_pct=accuracy,
            confidence_pct=confidence,
            is_positive=is_positive,
        )

    def run(self, on_progress: ProgressCallback, on_complete: CompleteCallback) -> CancelHandle:
        """Start a run. Progress goes 10, 20, ... 100; the result fires once."""
        handle = CancelHandle()
        step = self._config.progress_step
        state = {"progress": 0}
        progress_timer = None

        def tick():
            if handle.cancelled or state["progress"] >= 100:
                return
            state["progress"] = min(state["progress"] + step, 100)
            if state["progress"] >= 100 and progress_timer is not None:
                progress_timer.stop()
            on_progress(state["progress"])

        def finish():
            if handle.cancelled:
                return
            output = self.generate_output()
            logger.debug("Simulated output ready: %s", output)
            on_complete(output)

        progress_timer = self._scheduler.start_interval(self._config.tick_interval_ms, tick)
        handle._attach(progress_timer)
        handle._attach(
            self._scheduler.start_single_shot(self._config.result_delay_ms, finish)
        )
        return handle
