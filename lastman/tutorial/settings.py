"""
settings.py
-----------
Tutorial pacing and the loader for tutorial.json.
"""

from dataclasses import dataclass
from typing import Mapping, Tuple

from lastman.core.runtime.game_settings import TutorialTiming
from lastman.core.services.config_manager import load_config
from lastman.tutorial.steps import StepCatalog


DEFAULT_CONFIG = {
    "skip_tutorial": False,
    "timing": {
        "transition_pause": TutorialTiming.TRANSITION_PAUSE,
        "input_settle_delay": TutorialTiming.INPUT_SETTLE_DELAY,
        "demo_move_distance": TutorialTiming.DEMO_MOVE_DISTANCE,
        "demo_move_duration": TutorialTiming.DEMO_MOVE_DURATION,
    },
}


@dataclass(frozen=True)
class TutorialSettings:
    skip_tutorial: bool = False
    transition_pause: float = TutorialTiming.TRANSITION_PAUSE
    input_settle_delay: float = TutorialTiming.INPUT_SETTLE_DELAY
    demo_move_distance: float = TutorialTiming.DEMO_MOVE_DISTANCE
    demo_move_duration: float = TutorialTiming.DEMO_MOVE_DURATION

    @classmethod
    def from_config(cls, cfg: Mapping) -> "TutorialSettings":
        timing = cfg.get("timing", {})
        return cls(
            skip_tutorial=bool(cfg.get("skip_tutorial", False)),
            transition_pause=float(timing.get("transition_pause", cls.transition_pause)),
            input_settle_delay=float(timing.get("input_settle_delay", cls.input_settle_delay)),
            demo_move_distance=float(timing.get("demo_move_distance", cls.demo_move_distance)),
            demo_move_duration=float(timing.get("demo_move_duration", cls.demo_move_duration)),
        )


def load_tutorial(filename: str = "tutorial.json") -> Tuple[TutorialSettings, StepCatalog]:
    """Read tutorial.json (falling back to built-in defaults) into settings and catalog."""
    cfg = load_config(filename, DEFAULT_CONFIG)
    return TutorialSettings.from_config(cfg), StepCatalog.from_config(cfg)
