"""
Countdown Timer - One-second tick source for the game clock.

The timer only produces ticks; the GameEngine owns the remaining time
and decides when the game is over.
"""

from PySide6.QtCore import QObject, Qt, Signal, QTimer

from config import TIMER_SETTINGS


class CountdownTimer(QObject):
    """
    Repeating tick source for a running game.

    Usage:
        timer = CountdownTimer()
        timer.tick.connect(engine.tick)
        timer.start()
    """

    # Signals
    tick = Signal()                 # one game second elapsed

    def __init__(self, interval_ms: int = None, parent: QObject = None):
        """
        Initialize the countdown timer.

        Args:
            interval_ms: Tick interval in milliseconds (default: 1000)
            parent: Optional Qt parent
        """
        super().__init__(parent)

        self._interval_ms = interval_ms or TIMER_SETTINGS.tick_interval_ms
        self._tick_count = 0

        self._timer = QTimer(self)
        self._timer.setInterval(self._interval_ms)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def is_running(self) -> bool:
        """Check if the timer is currently running."""
        return self._timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def tick_count(self) -> int:
        """Ticks emitted since the last start()."""
        return self._tick_count

    def start(self) -> None:
        """Start ticking from a fresh interval, replacing any running countdown."""
        self._timer.stop()
        self._tick_count = 0
        self._timer.start()

    def stop(self) -> None:
        """Stop ticking."""
        self._timer.stop()

    def _on_timeout(self) -> None:
        self._tick_count += 1
        self.tick.emit()
