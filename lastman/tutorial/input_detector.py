"""
input_detector.py
-----------------
Decides whether one frame of input satisfies the active tutorial step.

Each step type maps to a StepBehavior: the predicate that reads the
snapshot, whether its side effect may only fire once per step, and
whether the player keeps control while the step is shown. New step
types are added by registering a behavior, not by editing the sequencer.

The detector is pure: it reports what should happen and the sequencer
performs it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Callable, Dict, Optional

from lastman.core.services.input_manager import Direction, InputSnapshot
from lastman.tutorial.steps import StepType


# ===========================================================
# Results
# ===========================================================

class SideEffect(Enum):
    """One-time demonstration requested by a satisfied step."""
    NONE = "none"
    DEMO_MOVE = "demo_move"
    DEMO_SHOT = "demo_shot"


@dataclass(frozen=True)
class Detection:
    satisfied: bool
    side_effect: SideEffect = SideEffect.NONE
    direction: Optional[Direction] = None


NOT_SATISFIED = Detection(False)


@dataclass(frozen=True)
class StepBehavior:
    predicate: Callable[[InputSnapshot], Detection]
    once_per_step: bool = False
    player_control: bool = True


# ===========================================================
# Predicates
# ===========================================================

def detect_movement(snapshot: InputSnapshot) -> Detection:
    """First directional key-down of the frame; order follows the snapshot."""
    if not snapshot.directions_pressed:
        return NOT_SATISFIED
    return Detection(True, SideEffect.DEMO_MOVE, snapshot.directions_pressed[0])


def detect_aiming(snapshot: InputSnapshot) -> Detection:
    dx, dy = snapshot.pointer_delta
    return Detection(True) if (dx or dy) else NOT_SATISFIED


def detect_shooting(snapshot: InputSnapshot) -> Detection:
    return Detection(True, SideEffect.DEMO_SHOT) if snapshot.fire_pressed else NOT_SATISFIED


def detect_pickup(snapshot: InputSnapshot) -> Detection:
    return Detection(True) if snapshot.interact_pressed else NOT_SATISFIED


def never(snapshot: InputSnapshot) -> Detection:
    return NOT_SATISFIED


DEFAULT_BEHAVIORS: Dict[StepType, StepBehavior] = {
    StepType.MOVEMENT: StepBehavior(detect_movement, once_per_step=True, player_control=False),
    StepType.AIMING: StepBehavior(detect_aiming),
    StepType.SHOOTING: StepBehavior(detect_shooting, once_per_step=True),
    StepType.PICKUP: StepBehavior(detect_pickup),
    StepType.COMPLETE: StepBehavior(never, player_control=False),
}

# Unregistered step types wait for their timeout with the player locked
FALLBACK_BEHAVIOR = StepBehavior(never, player_control=False)


# ===========================================================
# Detector
# ===========================================================

class InputDetector:
    """Lookup table from step type to StepBehavior."""

    def __init__(self, behaviors: Dict[StepType, StepBehavior] = None):
        self._behaviors = dict(DEFAULT_BEHAVIORS)
        if behaviors:
            self._behaviors.update(behaviors)

    def register(self, step_type, behavior: StepBehavior) -> None:
        self._behaviors[step_type] = behavior

    def behavior(self, step_type) -> StepBehavior:
        return self._behaviors.get(step_type, FALLBACK_BEHAVIOR)

    def player_control_enabled(self, step_type) -> bool:
        return self.behavior(step_type).player_control

    def evaluate(self, step_type, acted: AbstractSet, snapshot: InputSnapshot) -> Detection:
        """
        Check one frame against the step's completion condition.

        Args:
            step_type: Type of the active step
            acted: Step types that already fired their one-time effect this step
            snapshot: This frame's input

        Returns:
            Detection; NOT_SATISFIED when a once-per-step behavior has already acted.
        """
        behavior = self.behavior(step_type)
        if behavior.once_per_step and step_type in acted:
            return NOT_SATISFIED
        return behavior.predicate(snapshot)
