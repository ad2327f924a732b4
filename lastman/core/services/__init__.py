"""
Core services exports.

Provides the event system, configuration loading and input polling.
"""

from lastman.core.services.config_manager import load_config
from lastman.core.services.event_manager import (
    get_events,
    reset_events,
    EventManager,
    BaseEvent,
    TutorialStartedEvent,
    TutorialStepEvent,
    TutorialCompletedEvent,
    GameTimerExpiredEvent,
)
from lastman.core.services.input_manager import (
    InputManager,
    InputSnapshot,
    Direction,
)

__all__ = [
    # Config
    'load_config',
    # Events
    'get_events',
    'reset_events',
    'EventManager',
    'BaseEvent',
    'TutorialStartedEvent',
    'TutorialStepEvent',
    'TutorialCompletedEvent',
    'GameTimerExpiredEvent',
    # Input
    'InputManager',
    'InputSnapshot',
    'Direction',
]
