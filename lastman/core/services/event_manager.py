"""
event_manager.py
----------------
Tutorial progress events and the bus that carries them.

The HUD, audio and game systems subscribe here instead of holding a
reference to the sequencer. Subscribing to a base class receives every
subclass, so a BaseEvent subscriber sees the whole stream.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, List, Type

from lastman.core.debug.debug_logger import DebugLogger


# ===========================================================
# Event Definitions
# ===========================================================

@dataclass(frozen=True)
class BaseEvent:
    pass


@dataclass(frozen=True)
class TutorialStartedEvent(BaseEvent):
    step_count: int


@dataclass(frozen=True)
class TutorialStepEvent(BaseEvent):
    """A step became active; step_type is the StepType value."""
    index: int
    step_type: str


@dataclass(frozen=True)
class TutorialCompletedEvent(BaseEvent):
    """Sent once per run, whether finished or skipped."""
    skipped: bool = False


@dataclass(frozen=True)
class GameTimerExpiredEvent(BaseEvent):
    duration: float


# ===========================================================
# Event Manager
# ===========================================================

class EventManager:
    """Synchronous pub-sub keyed by event class."""

    def __init__(self):
        self._subscribers: Dict[Type[BaseEvent], List[Callable]] = defaultdict(list)
        DebugLogger.init("EventManager initialized", category="event_manager")

    def subscribe(self, event_type: Type[BaseEvent], callback: Callable) -> None:
        """Register `callback(event)` for `event_type` and its subclasses. Duplicates are ignored."""
        listeners = self._subscribers[event_type]
        if callback not in listeners:
            listeners.append(callback)
            DebugLogger.system(
                f"{getattr(callback, '__name__', callback)!s} -> {event_type.__name__}",
                category="event_manager",
            )

    def unsubscribe(self, event_type: Type[BaseEvent], callback: Callable) -> None:
        listeners = self._subscribers.get(event_type, [])
        if callback in listeners:
            listeners.remove(callback)

    def dispatch(self, event: BaseEvent) -> None:
        """
        Deliver `event` to subscribers of its class, then of each base class.

        A subscriber that raises is logged and skipped; delivery continues.
        """
        for event_type in type(event).__mro__:
            for callback in list(self._subscribers.get(event_type, ())):
                try:
                    callback(event)
                except Exception as e:
                    DebugLogger.warn(
                        f"{type(event).__name__} handler "
                        f"{getattr(callback, '__name__', callback)!s} failed: {e}",
                        category="event_manager",
                    )

    def clear_all(self) -> None:
        """Drop every subscriber (scene exit)."""
        self._subscribers.clear()

    def get_subscriber_count(self, event_type: Type[BaseEvent] = None) -> int:
        if event_type is not None:
            return len(self._subscribers.get(event_type, ()))
        return sum(len(listeners) for listeners in self._subscribers.values())


# ===========================================================
# Singleton Access
# ===========================================================

_EVENTS = None


def get_events() -> EventManager:
    """Shared EventManager, created on first use."""
    global _EVENTS
    if _EVENTS is None:
        _EVENTS = EventManager()
    return _EVENTS


def reset_events() -> None:
    """Drop the shared EventManager (full game restart, tests)."""
    global _EVENTS
    _EVENTS = None
