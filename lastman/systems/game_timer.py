"""
game_timer.py
-------------
Survival countdown. Frozen while the tutorial runs.
"""

from typing import Callable, Optional

from lastman.core.debug.debug_logger import DebugLogger
from lastman.core.runtime.game_settings import GameClock
from lastman.core.services.event_manager import GameTimerExpiredEvent


class GameTimer:
    """Counts down from `duration` while enabled; expires once."""

    def __init__(self, duration: float = GameClock.SURVIVAL_DURATION,
                 on_expired: Optional[Callable[[], None]] = None, events=None):
        self.duration = duration
        self.remaining = duration
        self.enabled = True
        self.expired = False
        self.on_expired = on_expired
        self.events = events

    @property
    def elapsed(self) -> float:
        return self.duration - self.remaining

    def reset(self):
        self.remaining = self.duration
        self.expired = False

    def update(self, dt: float):
        if not self.enabled or self.expired:
            return

        self.remaining = max(0.0, self.remaining - dt)
        if self.remaining > 0:
            return

        self.expired = True
        DebugLogger.state("Survival timer expired", category="game_timer")
        if self.on_expired:
            self.on_expired()
        if self.events:
            self.events.dispatch(GameTimerExpiredEvent(duration=self.duration))

    def format(self) -> str:
        """Remaining time as MM:SS, rounded up to the next whole second."""
        total = int(-(-self.remaining // 1))
        minutes = total // 60
        seconds = total % 60
        return f"{minutes:02d}:{seconds:02d}"
