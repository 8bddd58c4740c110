"""QTimer-backed scheduler for running simulated analyses on the UI thread."""

from typing import Callable

from PyQt6.QtCore import QObject, QTimer

from core.analysis_simulator import Timer, TimerScheduler


class _QtTimer(Timer):
    def __init__(self, timer: QTimer):
        self._timer = timer
        self._stopped = False

    def stop(self):
        if self._stopped:
            return
        self._stopped = True
        self._timer.stop()
        self._timer.deleteLater()


class QtTimerScheduler(TimerScheduler):
    """Arms QTimers parented to a QObject so they die with the view."""

    def __init__(self, parent: QObject = None):
        self._parent = parent

    def _make_timer(self, ms: int, callback: Callable[[], None], single_shot: bool) -> Timer:
        timer = QTimer(self._parent)
        timer.setInterval(ms)
        timer.setSingleShot(single_shot)
        timer.timeout.connect(callback)
        timer.start()
        return _QtTimer(timer)

    def start_interval(self, interval_ms: int, callback: Callable[[], None]) -> Timer:
        return self._make_timer(interval_ms, callback, single_shot=False)

    def start_single_shot(self, delay_ms: int, callback: Callable[[], None]) -> Timer:
        return self._make_timer(delay_ms, callback, single_shot=True)
