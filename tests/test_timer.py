"""
Unit tests for the CountdownTimer.
"""

import pytest
from PySide6.QtCore import QCoreApplication
import sys


# Create QCoreApplication for Qt event loop (required for QTimer)
@pytest.fixture(scope="session")
def qapp():
    """Create a QCoreApplication instance for the test session."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv)
    yield app


class TestCountdownTimer:
    """Tests for the CountdownTimer class."""

    def test_default_interval_is_one_second(self, qapp):
        from engine.timer import CountdownTimer

        timer = CountdownTimer()

        assert timer.interval_ms == 1000
        assert not timer.is_running

    def test_custom_interval(self, qapp):
        from engine.timer import CountdownTimer

        timer = CountdownTimer(interval_ms=250)

        assert timer.interval_ms == 250

    def test_start_sets_running(self, qapp):
        from engine.timer import CountdownTimer

        timer = CountdownTimer()
        timer.start()

        assert timer.is_running
        timer.stop()

    def test_stop_clears_running(self, qapp):
        from engine.timer import CountdownTimer

        timer = CountdownTimer()
        timer.start()
        timer.stop()

        assert not timer.is_running

    def test_timeout_emits_tick(self, qapp):
        """Each timeout emits one tick."""
        from engine.timer import CountdownTimer

        timer = CountdownTimer()
        ticks = []
        timer.tick.connect(lambda: ticks.append(True))

        timer._on_timeout()
        timer._on_timeout()

        assert len(ticks) == 2
        assert timer.tick_count == 2

    def test_restart_resets_tick_count(self, qapp):
        """Starting again replaces the running countdown."""
        from engine.timer import CountdownTimer

        timer = CountdownTimer()
        timer.start()
        timer._on_timeout()
        timer.start()

        assert timer.tick_count == 0
        assert timer.is_running
        timer.stop()


class TestEngineWithTimer:
    """The engine driven by a real CountdownTimer."""

    def test_timer_ticks_drive_countdown(self, qapp):
        from engine.game import GameEngine
        from engine.timer import CountdownTimer

        timer = CountdownTimer()
        engine = GameEngine(timer=timer)
        engine.start("easy")

        assert timer.is_running

        timer._on_timeout()

        assert engine.time_remaining == 59
        engine.abandon()
        assert not timer.is_running

    def test_default_timer_is_created(self, qapp):
        from engine.game import GameEngine, GamePhase

        engine = GameEngine()
        engine.start("easy")

        assert engine.state == GamePhase.RUNNING
        engine.abandon()
