"""Shared test fixtures for LungScan."""

import os
import tempfile
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from core.analysis_session import AnalysisSession
from core.analysis_simulator import AnalysisSimulator, Timer, TimerScheduler
from core.utils import ImageRef, RawAnalysisOutput

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class _FakeTimer(Timer):
    def __init__(self, scheduler, due, interval, callback, seq):
        self.scheduler = scheduler
        self.due = due
        self.interval = interval
        self.callback = callback
        self.seq = seq
        self.active = True

    def stop(self):
        self.active = False


class FakeScheduler(TimerScheduler):
    """Virtual clock. Timers fire only inside advance(), in due-time order."""

    def __init__(self):
        self.now = 0
        self._timers = []
        self._seq = 0

    def _add(self, ms, callback, interval):
        self._seq += 1
        timer = _FakeTimer(self, self.now + ms, interval, callback, self._seq)
        self._timers.append(timer)
        return timer

    def start_interval(self, interval_ms, callback):
        return self._add(interval_ms, callback, interval_ms)

    def start_single_shot(self, delay_ms, callback):
        return self._add(delay_ms, callback, None)

    @property
    def active_timers(self):
        return [tm for tm in self._timers if tm.active]

    def advance(self, ms):
        """Move the clock forward, firing every timer that comes due."""
        target = self.now + ms
        while True:
            due = [tm for tm in self._timers if tm.active and tm.due <= target]
            if not due:
                break
            timer = min(due, key=lambda tm: (tm.due, tm.seq))
            self.now = timer.due
            if timer.interval is None:
                timer.active = False
            else:
                timer.due += timer.interval
            timer.callback()
        self._timers = [tm for tm in self._timers if tm.active]
        self.now = target


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture
def sample_png(tmp_dir):
    """A 64x48 RGB PNG standing in for a chest X-ray."""
    img = Image.fromarray(np.random.randint(0, 255, (48, 64, 3), dtype=np.uint8))
    path = tmp_dir / "xray.png"
    img.save(path)
    return str(path)


@pytest.fixture
def sample_jpeg(tmp_dir):
    """A 32x32 grayscale JPEG."""
    img = Image.fromarray(np.random.randint(0, 255, (32, 32), dtype=np.uint8))
    path = tmp_dir / "scan.jpg"
    img.save(path, format="JPEG")
    return str(path)


@pytest.fixture
def image_ref():
    return ImageRef(data_uri="data:image/png;base64,AAAA", file_name="a.png", size_bytes=3)


@pytest.fixture
def other_image_ref():
    return ImageRef(data_uri="data:image/png;base64,BBBB", file_name="b.png", size_bytes=3)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def simulator(scheduler):
    return AnalysisSimulator(scheduler, rng=np.random.default_rng(1234))


@pytest.fixture
def session(simulator):
    return AnalysisSession(simulator)


@pytest.fixture
def negative_output():
    return RawAnalysisOutput(accuracy_pct=91.5, confidence_pct=93.0, is_positive=False)


@pytest.fixture(autouse=True)
def _init_i18n():
    """Initialize i18n for all tests."""
    import i18n
    i18n.init()


@pytest.fixture(scope="session")
def qt_app():
    """One QApplication for widget and timer tests."""
    from PyQt6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
