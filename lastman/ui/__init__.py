"""Overlay widgets."""

from lastman.ui.tutorial_overlay import TutorialOverlay

__all__ = ["TutorialOverlay"]
