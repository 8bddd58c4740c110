"""Tests for core.analysis_simulator module."""

import numpy as np

from core.analysis_simulator import AnalysisSimulator, CancelHandle
from core.utils import RawAnalysisOutput, SimulationConfig


class TestGenerateOutput:
    def test_ranges_over_many_draws(self, scheduler):
        sim = AnalysisSimulator(scheduler, rng=np.random.default_rng(7))
        for _ in range(5000):
            out = sim.generate_output()
            assert 85.0 <= out.accuracy_pct < 100.0
            assert 75.0 <= out.confidence_pct < 95.0
            assert isinstance(out.is_positive, bool)

    def test_positive_rate_near_forty_percent(self, scheduler):
        sim = AnalysisSimulator(scheduler, rng=np.random.default_rng(99))
        positives = sum(sim.generate_output().is_positive for _ in range(20000))
        assert 0.37 < positives / 20000 < 0.43

    def test_law_applied_to_draws(self, scheduler):
        class _Rng:
            def __init__(self, values):
                self._values = iter(values)

            def random(self):
                return next(self._values)

        sim = AnalysisSimulator(scheduler, rng=_Rng([0.5, 0.25, 0.6]))
        out = sim.generate_output()
        assert out.accuracy_pct == 92.5
        assert out.confidence_pct == 80.0
        # 0.6 is not strictly above the cut-off
        assert out.is_positive is False

    def test_default_config(self, simulator):
        assert simulator.config == SimulationConfig(200, 10, 2000)


class TestRun:
    def test_progress_sequence(self, scheduler, simulator):
        progress, results = [], []
        simulator.run(progress.append, results.append)
        scheduler.advance(5000)
        assert progress == [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]
        assert len(results) == 1

    def test_progress_timing(self, scheduler, simulator):
        progress = []
        simulator.run(progress.append, lambda raw: None)
        scheduler.advance(199)
        assert progress == []
        scheduler.advance(1)
        assert progress == [10]
        scheduler.advance(1000)
        assert progress == [10, 20, 30, 40, 50, 60]

    def test_result_fires_at_delay(self, scheduler, simulator):
        results = []
        simulator.run(lambda p: None, results.append)
        scheduler.advance(1999)
        assert results == []
        scheduler.advance(1)
        assert len(results) == 1
        assert isinstance(results[0], RawAnalysisOutput)

    def test_no_timers_left_after_run(self, scheduler, simulator):
        simulator.run(lambda p: None, lambda raw: None)
        scheduler.advance(2000)
        assert scheduler.active_timers == []

    def test_progress_never_exceeds_hundred(self, scheduler):
        sim = AnalysisSimulator(scheduler, config=SimulationConfig(progress_step=30))
        progress = []
        sim.run(progress.append, lambda raw: None)
        scheduler.advance(10000)
        assert progress == [30, 60, 90, 100]

    def test_returns_cancel_handle(self, simulator):
        handle = simulator.run(lambda p: None, lambda raw: None)
        assert isinstance(handle, CancelHandle)
        assert not handle.cancelled


class TestCancel:
    def test_cancel_mid_run(self, scheduler, simulator):
        progress, results = [], []
        handle = simulator.run(progress.append, results.append)
        scheduler.advance(1000)
        handle.cancel()
        scheduler.advance(5000)
        assert progress == [10, 20, 30, 40, 50]
        assert results == []
        assert handle.cancelled
        assert scheduler.active_timers == []

    def test_cancel_before_first_tick(self, scheduler, simulator):
        progress, results = [], []
        handle = simulator.run(progress.append, results.append)
        handle.cancel()
        scheduler.advance(3000)
        assert progress == []
        assert results == []

    def test_cancel_is_idempotent(self, simulator):
        handle = simulator.run(lambda p: None, lambda raw: None)
        handle.cancel()
        handle.cancel()
        assert handle.cancelled

    def test_queued_callback_after_cancel_is_dropped(self, scheduler, simulator):
        results = []
        simulator.run(lambda p: None, results.append)
        # Simulates a timeout already dispatched by the event loop when cancel lands
        handle = simulator.run(lambda p: None, results.append)
        pending = [tm for tm in scheduler.active_timers if tm.interval is None][-1]
        handle.cancel()
        pending.callback()
        assert results == []

    def test_runs_are_independent(self, scheduler, simulator):
        first, second = [], []
        h1 = simulator.run(first.append, lambda raw: None)
        scheduler.advance(400)
        simulator.run(second.append, lambda raw: None)
        h1.cancel()
        scheduler.advance(2000)
        assert first == [10, 20]
        assert second == [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]
