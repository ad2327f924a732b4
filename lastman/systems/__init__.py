"""Game systems that run alongside the tutorial."""

from lastman.systems.game_timer import GameTimer

__all__ = ["GameTimer"]
