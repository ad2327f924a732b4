"""
game_settings.py
----------------
Constants for the tutorial and the systems it drives.
Values a designer tunes per build live in lastman/config/tutorial.json.
"""


# ===========================================================
# Screen
# ===========================================================

class Display:
    WIDTH: int = 1280
    HEIGHT: int = 720


class Fonts:
    DEFAULT: str = None  # pygame default font
    SIZE: int = 32
    LINE_SPACING: int = 8


class Layers:
    """Draw order; higher draws on top."""
    OVERLAY: int = 700


# ===========================================================
# Timing
# ===========================================================

class Physics:
    # Deadlines closer than this to the end of a tick fire in that tick
    TIME_EPSILON: float = 1e-9


class TutorialTiming:
    """Default tutorial pacing (seconds, pixels)."""
    TRANSITION_PAUSE: float = 1.0      # after a step times out
    INPUT_SETTLE_DELAY: float = 0.5    # after a qualifying input
    DEMO_MOVE_DISTANCE: float = 120.0
    DEMO_MOVE_DURATION: float = 0.4
    DEMO_BULLET_SPEED: float = 900.0


class GameClock:
    SURVIVAL_DURATION: float = 600.0   # "survive for 10 minutes"


# ===========================================================
# Input
# ===========================================================

class Input:
    POINTER_DEADZONE: int = 0          # pixels of mouse motion ignored per frame
    PRIMARY_MOUSE_BUTTON: int = 0      # index into pygame.mouse.get_pressed()
