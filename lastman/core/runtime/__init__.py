"""
Runtime exports.

Game constants and the tick-driven scheduler.
"""

from lastman.core.runtime.scheduler import Scheduler, TimerHandle, ActionHandle

__all__ = [
    'Scheduler',
    'TimerHandle',
    'ActionHandle',
]
