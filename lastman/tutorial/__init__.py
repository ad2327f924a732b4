"""
Tutorial exports.

Step catalog, input detection, game gates and the sequencer that runs them.
"""

from lastman.tutorial.steps import StepCatalog, StepDefinition, StepType
from lastman.tutorial.input_detector import (
    InputDetector,
    StepBehavior,
    Detection,
    SideEffect,
)
from lastman.tutorial.gates import ExternalGates, GameGates
from lastman.tutorial.settings import TutorialSettings, load_tutorial
from lastman.tutorial.sequencer import TutorialSequencer

__all__ = [
    'StepCatalog',
    'StepDefinition',
    'StepType',
    'InputDetector',
    'StepBehavior',
    'Detection',
    'SideEffect',
    'ExternalGates',
    'GameGates',
    'TutorialSettings',
    'load_tutorial',
    'TutorialSequencer',
]
