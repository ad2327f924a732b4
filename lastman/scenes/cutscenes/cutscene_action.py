"""
cutscene_action.py
------------------
Timed scripted actions, and the entity move the tutorial demonstrates.

Actions are driven from outside (see Scheduler.run_action): on_start()
once, update(dt) every tick until it returns True, then on_end().
"""

from abc import ABC, abstractmethod
from typing import Tuple
import pygame


EASINGS = {
    "linear": lambda t: t,
    "ease_in": lambda t: t * t,
    "ease_out": lambda t: 1 - (1 - t) ** 2,
    "ease_in_out": lambda t: t * t * (3 - 2 * t),
}


class CutsceneAction(ABC):
    """Single timed step."""

    def __init__(self, duration: float = 0):
        self.duration = duration
        self.elapsed = 0.0

    @property
    def progress(self) -> float:
        """Fraction of the duration elapsed, clamped to [0, 1]."""
        if self.duration <= 0:
            return 1.0
        return min(self.elapsed / self.duration, 1.0)

    def on_start(self):
        pass

    def on_end(self):
        pass

    @abstractmethod
    def update(self, dt: float) -> bool:
        """Advance by dt. Returns True when finished."""


class MoveEntityAction(CutsceneAction):
    """
    Slide an entity between two points, ignoring its own movement code.

    Works on anything with a pygame.Rect `rect`; `virtual_pos` is set to
    the unrounded position so the entity's physics can pick up from it.
    """

    def __init__(self, entity, start_pos: Tuple[float, float],
                 end_pos: Tuple[float, float], duration: float = 1.0,
                 easing: str = "ease_out"):
        super().__init__(duration)
        self.entity = entity
        self.start_pos = pygame.Vector2(start_pos)
        self.end_pos = pygame.Vector2(end_pos)
        self.ease = EASINGS.get(easing, EASINGS["linear"])

    def on_start(self):
        self._place(self.start_pos)

    def update(self, dt: float) -> bool:
        self.elapsed += dt
        self._place(self.start_pos.lerp(self.end_pos, self.ease(self.progress)))
        return self.elapsed >= self.duration

    def _place(self, pos: pygame.Vector2):
        self.entity.rect.center = (round(pos.x), round(pos.y))
        self.entity.virtual_pos = pygame.Vector2(pos)

    @classmethod
    def nudge(cls, entity, offset: Tuple[float, float], duration: float,
              easing: str = "ease_out") -> "MoveEntityAction":
        """Move `entity` by `offset` from wherever it currently stands."""
        pos = getattr(entity, "virtual_pos", None)
        start = pygame.Vector2(entity.rect.center if pos is None else pos)
        return cls(entity, start, start + pygame.Vector2(offset), duration, easing)
