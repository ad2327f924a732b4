"""
scheduler.py
------------
Tick-driven scheduler for deferred callbacks and bounded animations.

Responsibilities
----------------
- Arm one-shot callbacks that fire after a delay in game time.
- Run CutsceneAction-style animations until they report completion.
- Hand out handles that can be cancelled at any point; a cancelled
  handle never fires, even when cancelled earlier in the same update.

Everything runs on the caller's thread inside update(dt); nothing blocks.
"""

import itertools
from typing import Callable, List, Optional

from lastman.core.debug.debug_logger import DebugLogger
from lastman.core.runtime.game_settings import Physics


# ===========================================================
# Handles
# ===========================================================

class TimerHandle:
    """Deferred one-shot callback."""

    __slots__ = ("deadline", "callback", "label", "cancelled", "fired", "_order")

    def __init__(self, deadline: float, callback: Callable, label: str, order: int):
        self.deadline = deadline
        self.callback = callback
        self.label = label
        self.cancelled = False
        self.fired = False
        self._order = order

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self):
        self.cancelled = True

    def __repr__(self):
        return f"TimerHandle({self.label!r}, deadline={self.deadline:.3f}, active={self.active})"


class ActionHandle:
    """Running animation driven by the scheduler."""

    __slots__ = ("action", "on_complete", "label", "cancelled", "finished")

    def __init__(self, action, on_complete: Optional[Callable], label: str):
        self.action = action
        self.on_complete = on_complete
        self.label = label
        self.cancelled = False
        self.finished = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.finished)

    def cancel(self):
        self.cancelled = True


# ===========================================================
# Scheduler
# ===========================================================

class Scheduler:
    """
    Single-threaded timer wheel advanced by the game loop.

    Usage:
        handle = scheduler.schedule(8.0, on_timeout, label="step_timeout")
        scheduler.cancel(handle)
        scheduler.update(dt)   # once per frame
    """

    def __init__(self):
        self.now = 0.0
        self._timers: List[TimerHandle] = []
        self._actions: List[ActionHandle] = []
        self._order = itertools.count()

    # ===========================================================
    # Arming
    # ===========================================================

    def schedule(self, delay: float, callback: Callable, label: str = "timer") -> TimerHandle:
        """
        Arm a callback to fire after `delay` seconds of game time.

        Negative delays are clamped to zero; a zero delay fires on the
        next update, never synchronously.
        """
        handle = TimerHandle(self.now + max(0.0, delay), callback, label, next(self._order))
        self._timers.append(handle)
        DebugLogger.trace(f"Armed '{label}' for t={handle.deadline:.3f}")
        return handle

    def run_action(self, action, on_complete: Callable = None, label: str = "action") -> ActionHandle:
        """Start an animation; on_complete runs once when it finishes."""
        action.on_start()
        handle = ActionHandle(action, on_complete, label)
        self._actions.append(handle)
        DebugLogger.trace(f"Started '{label}'")
        return handle

    # ===========================================================
    # Cancellation
    # ===========================================================

    @staticmethod
    def cancel(handle) -> None:
        """Cancel a timer or action handle. None and finished handles are ignored."""
        if handle is not None and handle.active:
            handle.cancel()
            DebugLogger.trace(f"Cancelled '{handle.label}'")

    def cancel_all(self) -> None:
        for handle in self._timers:
            handle.cancel()
        for handle in self._actions:
            handle.cancel()
        self._timers.clear()
        self._actions.clear()

    # ===========================================================
    # Queries
    # ===========================================================

    @property
    def pending_timers(self) -> int:
        return sum(1 for h in self._timers if h.active)

    @property
    def running_actions(self) -> int:
        return sum(1 for h in self._actions if h.active)

    # ===========================================================
    # Frame Update
    # ===========================================================

    def update(self, dt: float) -> None:
        """
        Advance game time by dt.

        Timers fire in deadline order at their own deadline, so a
        callback that arms another timer sees the correct `now` and the
        new timer still fires within this update if it falls inside it.
        Animations started during this update begin ticking next update.
        """
        target = self.now + max(0.0, dt)
        running = list(self._actions)

        while True:
            handle = self._next_due(target)
            if handle is None:
                break
            self.now = max(self.now, handle.deadline)
            handle.fired = True
            self._timers.remove(handle)
            handle.callback()

        self.now = target

        for handle in running:
            if not handle.active:
                continue
            if handle.action.update(dt):
                handle.finished = True
                handle.action.on_end()
                if handle.on_complete:
                    handle.on_complete()

        self._actions = [h for h in self._actions if h.active]

    def _next_due(self, target: float) -> Optional[TimerHandle]:
        """Earliest live timer whose deadline falls inside this update."""
        self._timers = [h for h in self._timers if h.active]
        due = [h for h in self._timers if h.deadline <= target + Physics.TIME_EPSILON]
        if not due:
            return None
        return min(due, key=lambda h: (h.deadline, h._order))
