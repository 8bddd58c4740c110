"""Tests for core.analysis_session module."""

import random

import pytest

from core.analysis_session import AnalysisSession, InvalidStateError
from core.risk_classifier import RECOMMENDATIONS, classify
from core.utils import RawAnalysisOutput, RiskTier, SessionState


def _snapshot(session):
    return (session.state, session.image, session.progress, session.result, session.run_id)


class _ScriptedSimulator:
    """Records callbacks so tests can deliver them by hand."""

    def __init__(self):
        self.runs = []

    def run(self, on_progress, on_complete):
        from core.analysis_simulator import CancelHandle
        handle = CancelHandle()
        self.runs.append((on_progress, on_complete, handle))
        return handle


class TestInitialState:
    def test_idle(self, session):
        assert session.state == SessionState.IDLE
        assert session.image is None
        assert session.progress == 0
        assert session.result is None
        assert not session.can_start


class TestStageImage:
    def test_moves_to_staged(self, session, image_ref):
        session.stage_image(image_ref)
        assert session.state == SessionState.STAGED
        assert session.image is image_ref
        assert session.can_start

    def test_replaces_image(self, session, image_ref, other_image_ref):
        session.stage_image(image_ref)
        session.stage_image(other_image_ref)
        assert session.image is other_image_ref
        assert session.state == SessionState.STAGED

    def test_discards_result(self, session, scheduler, image_ref, other_image_ref):
        session.stage_image(image_ref)
        session.start_analysis()
        scheduler.advance(2000)
        assert session.state == SessionState.RESULTED
        session.stage_image(other_image_ref)
        assert session.result is None
        assert session.progress == 0
        assert session.state == SessionState.STAGED

    def test_none_rejected(self, session):
        with pytest.raises(ValueError):
            session.stage_image(None)
        assert session.state == SessionState.IDLE

    def test_cancels_in_flight_run(self, session, scheduler, image_ref, other_image_ref):
        session.stage_image(image_ref)
        session.start_analysis()
        scheduler.advance(1000)
        session.stage_image(other_image_ref)
        scheduler.advance(3000)
        assert session.state == SessionState.STAGED
        assert session.image is other_image_ref
        assert session.progress == 0
        assert session.result is None


class TestStartAnalysis:
    def test_from_idle_rejected(self, session):
        before = _snapshot(session)
        with pytest.raises(InvalidStateError) as exc:
            session.start_analysis()
        assert exc.value.state == SessionState.IDLE
        assert _snapshot(session) == before

    def test_double_start_rejected(self, session, scheduler, image_ref):
        session.stage_image(image_ref)
        session.start_analysis()
        scheduler.advance(600)
        before = _snapshot(session)
        with pytest.raises(InvalidStateError):
            session.start_analysis()
        assert _snapshot(session) == before
        assert len(scheduler.active_timers) == 2

    def test_from_resulted_rejected(self, session, scheduler, image_ref):
        session.stage_image(image_ref)
        session.start_analysis()
        scheduler.advance(2000)
        before = _snapshot(session)
        with pytest.raises(InvalidStateError):
            session.start_analysis()
        assert _snapshot(session) == before

    def test_moves_to_analyzing(self, session, image_ref):
        session.stage_image(image_ref)
        session.start_analysis()
        assert session.state == SessionState.ANALYZING
        assert session.is_analyzing
        assert session.progress == 0
        assert session.run_id == 1
        assert not session.can_start

    def test_error_message_names_state(self, session):
        with pytest.raises(InvalidStateError, match="idle"):
            session.start_analysis()


class TestRun:
    def test_progress_observed(self, session, scheduler, image_ref):
        seen = []
        session.stage_image(image_ref)
        session.add_listener(lambda s: seen.append(s.progress) if s.is_analyzing else None)
        session.start_analysis()
        scheduler.advance(1900)
        assert seen == [0, 10, 20, 30, 40, 50, 60, 70, 80, 90]

    def test_end_to_end(self, session, scheduler, image_ref):
        session.stage_image(image_ref)
        session.start_analysis()
        scheduler.advance(2000)

        assert session.state == SessionState.RESULTED
        assert session.progress == 100
        assert session.image is image_ref

        result = session.result
        assert 85.0 <= result.accuracy_pct < 100.0
        assert 75.0 <= result.confidence_pct < 95.0
        raw = RawAnalysisOutput(result.accuracy_pct, result.confidence_pct,
                                result.risk_tier != RiskTier.LOW)
        expected = classify(raw)
        assert result.risk_tier == expected.risk_tier
        assert result.prediction_text == expected.prediction_text
        assert result.recommendations == RECOMMENDATIONS[result.risk_tier]

    def test_not_resulted_before_delay(self, session, scheduler, image_ref):
        session.stage_image(image_ref)
        session.start_analysis()
        scheduler.advance(1999)
        assert session.state == SessionState.ANALYZING
        assert session.result is None

    def test_second_run_after_restage(self, session, scheduler, image_ref):
        session.stage_image(image_ref)
        session.start_analysis()
        scheduler.advance(2000)
        session.stage_image(image_ref)
        session.start_analysis()
        assert session.run_id == 2
        assert session.progress == 0
        scheduler.advance(2000)
        assert session.state == SessionState.RESULTED


class TestReset:
    def test_clears_everything(self, session, scheduler, image_ref):
        session.stage_image(image_ref)
        session.start_analysis()
        scheduler.advance(2000)
        session.reset()
        assert session.state == SessionState.IDLE
        assert session.image is None
        assert session.result is None
        assert session.progress == 0

    def test_reset_mid_run_stays_idle(self, session, scheduler, image_ref):
        session.stage_image(image_ref)
        session.start_analysis()
        scheduler.advance(1000)
        session.reset()
        scheduler.advance(5000)
        assert session.state == SessionState.IDLE
        assert session.result is None
        assert session.progress == 0
        assert scheduler.active_timers == []

    def test_reset_from_idle(self, session):
        session.reset()
        assert session.state == SessionState.IDLE


class TestStaleCallbacks:
    def test_stale_run_ignored(self, image_ref, negative_output):
        sim = _ScriptedSimulator()
        session = AnalysisSession(sim)
        session.stage_image(image_ref)
        session.start_analysis()
        old_progress, old_complete, _ = sim.runs[0]

        session.stage_image(image_ref)
        session.start_analysis()
        old_progress(50)
        old_complete(negative_output)
        assert session.state == SessionState.ANALYZING
        assert session.progress == 0

    def test_cancelled_handle_on_restage(self, image_ref):
        sim = _ScriptedSimulator()
        session = AnalysisSession(sim)
        session.stage_image(image_ref)
        session.start_analysis()
        session.stage_image(image_ref)
        assert sim.runs[0][2].cancelled

    def test_out_of_order_progress_ignored(self, image_ref):
        sim = _ScriptedSimulator()
        session = AnalysisSession(sim)
        session.stage_image(image_ref)
        session.start_analysis()
        on_progress = sim.runs[0][0]
        on_progress(40)
        on_progress(30)
        on_progress(40)
        on_progress(120)
        assert session.progress == 40

    def test_progress_after_result_ignored(self, image_ref, negative_output):
        sim = _ScriptedSimulator()
        session = AnalysisSession(sim)
        session.stage_image(image_ref)
        session.start_analysis()
        on_progress, on_complete, handle = sim.runs[0]
        on_complete(negative_output)
        on_progress(90)
        assert session.state == SessionState.RESULTED
        assert session.progress == 100
        assert session.result.risk_tier == RiskTier.LOW
        assert handle.cancelled


class TestListeners:
    def test_notified_on_transitions(self, session, image_ref):
        states = []
        session.add_listener(lambda s: states.append(s.state))
        session.stage_image(image_ref)
        session.start_analysis()
        session.reset()
        assert states == [SessionState.STAGED, SessionState.ANALYZING, SessionState.IDLE]

    def test_remove_listener(self, session, image_ref):
        calls = []
        listener = calls.append
        session.add_listener(listener)
        session.remove_listener(listener)
        session.remove_listener(listener)
        session.stage_image(image_ref)
        assert calls == []

    def test_reset_from_listener_on_start_cancels_run(self, session, scheduler, image_ref):
        def reset_on_analyzing(s):
            if s.state == SessionState.ANALYZING:
                s.reset()

        session.add_listener(reset_on_analyzing)
        session.stage_image(image_ref)
        session.start_analysis()
        assert session.state == SessionState.IDLE
        assert scheduler.active_timers == []
        scheduler.advance(5000)
        assert session.state == SessionState.IDLE
        assert session.result is None

    def test_restage_from_listener_on_start_cancels_run(self, session, scheduler, image_ref, other_image_ref):
        def restage_on_analyzing(s):
            if s.state == SessionState.ANALYZING:
                s.stage_image(other_image_ref)

        session.add_listener(restage_on_analyzing)
        session.stage_image(image_ref)
        session.start_analysis()
        assert session.state == SessionState.STAGED
        assert session.image is other_image_ref
        assert scheduler.active_timers == []


class TestInvariants:
    def test_random_operation_sequences(self, session, scheduler, image_ref, other_image_ref):
        rnd = random.Random(2024)
        images = [image_ref, other_image_ref]
        for _ in range(2000):
            op = rnd.choice(["stage", "start", "reset", "wait"])
            if op == "stage":
                session.stage_image(rnd.choice(images))
            elif op == "start":
                if session.can_start:
                    session.start_analysis()
                else:
                    before = _snapshot(session)
                    with pytest.raises(InvalidStateError):
                        session.start_analysis()
                    assert _snapshot(session) == before
            elif op == "reset":
                session.reset()
            else:
                scheduler.advance(rnd.choice([100, 200, 700, 2000]))

            if session.state != SessionState.IDLE:
                assert session.image is not None
            else:
                assert session.image is None
            if session.state == SessionState.RESULTED:
                assert session.result is not None
                assert session.progress == 100
            else:
                assert session.result is None
            assert 0 <= session.progress <= 100
