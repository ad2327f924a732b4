"""
input_manager.py
----------------
Per-frame input polling for the tutorial.

Provides:
- Edge detection (pressed, held, released) for bound actions
- Directional key-down edges for the movement step
- Pointer delta tracking for the aiming step
- An immutable InputSnapshot handed to the tutorial each frame
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import pygame

from lastman.core.debug.debug_logger import DebugLogger
from lastman.core.runtime.game_settings import Input


# ===========================================================
# Snapshot Types
# ===========================================================

class Direction(Enum):
    """Four axis directions in screen space (y grows downward)."""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def vector(self) -> Tuple[int, int]:
        return self.value


@dataclass(frozen=True)
class InputSnapshot:
    """One frame of input, reduced to what the tutorial asks about."""
    directions_pressed: Tuple[Direction, ...] = ()
    pointer_delta: Tuple[int, int] = (0, 0)
    fire_pressed: bool = False
    interact_pressed: bool = False
    skip_pressed: bool = False


# ===========================================================
# Default Key Bindings
# ===========================================================

DEFAULT_KEY_BINDINGS = {
    "move_up": [pygame.K_w, pygame.K_UP],
    "move_down": [pygame.K_s, pygame.K_DOWN],
    "move_left": [pygame.K_a, pygame.K_LEFT],
    "move_right": [pygame.K_d, pygame.K_RIGHT],
    "attack": [pygame.K_SPACE],
    "interact": [pygame.K_c],
    "skip_tutorial": [pygame.K_TAB],
}

DIRECTION_ACTIONS = (
    ("move_up", Direction.UP),
    ("move_down", Direction.DOWN),
    ("move_left", Direction.LEFT),
    ("move_right", Direction.RIGHT),
)


class InputManager:
    """
    Polls keyboard and mouse once per frame.

    Usage:
        input_manager.update()
        snapshot = input_manager.snapshot()
        if input_manager.action_pressed("interact"):
            ...
    """

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self, key_bindings=None):
        DebugLogger.init_entry("InputManager")

        self.key_bindings = key_bindings or DEFAULT_KEY_BINDINGS
        self._actions = {
            name: {"pressed": False, "held": False, "released": False, "prev_held": False}
            for name in self.key_bindings
        }
        self._mouse_fire = {"pressed": False, "prev_held": False}
        self._pointer_delta = (0, 0)

    # ===========================================================
    # Public API: Action Queries
    # ===========================================================

    def action_pressed(self, action: str) -> bool:
        """Check if action was just pressed this frame (rising edge)."""
        state = self._actions.get(action)
        return state["pressed"] if state else False

    def action_held(self, action: str) -> bool:
        """Check if action is currently held down."""
        state = self._actions.get(action)
        return state["held"] if state else False

    def action_released(self, action: str) -> bool:
        """Check if action was just released this frame (falling edge)."""
        state = self._actions.get(action)
        return state["released"] if state else False

    def snapshot(self) -> InputSnapshot:
        """Freeze this frame's edges into an InputSnapshot."""
        directions = tuple(
            direction for action, direction in DIRECTION_ACTIONS
            if self.action_pressed(action)
        )
        return InputSnapshot(
            directions_pressed=directions,
            pointer_delta=self._pointer_delta,
            fire_pressed=self.action_pressed("attack") or self._mouse_fire["pressed"],
            interact_pressed=self.action_pressed("interact"),
            skip_pressed=self.action_pressed("skip_tutorial"),
        )

    # ===========================================================
    # Frame Update
    # ===========================================================

    def update(self):
        """Poll all input sources. Call once per frame."""
        keys = pygame.key.get_pressed()
        for action in self._actions:
            self._update_action_state(action, keys)

        buttons = pygame.mouse.get_pressed()
        self._update_mouse_fire(bool(buttons[Input.PRIMARY_MOUSE_BUTTON]))

        dx, dy = pygame.mouse.get_rel()
        deadzone = Input.POINTER_DEADZONE
        self._pointer_delta = (
            dx if abs(dx) > deadzone else 0,
            dy if abs(dy) > deadzone else 0,
        )

    def _update_action_state(self, action: str, keys):
        """
        Update action state with edge detection.

        Compares current frame to previous frame to detect:
        - pressed: False -> True (rising edge)
        - released: True -> False (falling edge)
        - held: current state
        """
        state = self._actions[action]
        current_held = any(keys[key] for key in self.key_bindings[action])
        prev_held = state["prev_held"]

        state["pressed"] = current_held and not prev_held
        state["released"] = not current_held and prev_held
        state["held"] = current_held
        state["prev_held"] = current_held

        if state["pressed"]:
            DebugLogger.trace(f"Action pressed: {action}", category="input")

    def _update_mouse_fire(self, held: bool):
        state = self._mouse_fire
        state["pressed"] = held and not state["prev_held"]
        state["prev_held"] = held
