"""
conftest.py
-----------
Shared pytest configuration and fixtures for the tutorial tests.

Contains:
- Console logging switched off for the whole run
- Mock gates and event manager fixtures
- A sequencer factory and input snapshot helpers
- A slow cutscene action for mid-animation tests
"""

import os
import sys
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.dirname(__file__))

from lastman.core.debug.debug_logger import LoggerConfig
from lastman.core.runtime.scheduler import Scheduler
from lastman.core.services.input_manager import InputSnapshot
from lastman.scenes.cutscenes.cutscene_action import CutsceneAction
from lastman.tutorial.gates import ExternalGates
from lastman.tutorial.sequencer import TutorialSequencer
from lastman.tutorial.settings import TutorialSettings
from lastman.tutorial.steps import StepCatalog, StepDefinition, StepType


@pytest.fixture(autouse=True)
def quiet_logger(monkeypatch):
    """Keep test output free of game console logs."""
    monkeypatch.setattr(LoggerConfig, "ENABLE_LOGGING", False)


# ===========================================================
# Collaborator Mocks
# ===========================================================

@pytest.fixture
def mock_gates():
    """ExternalGates mock; the demo move yields no animation by default."""
    gates = MagicMock(spec=ExternalGates)
    gates.perform_bounded_move.return_value = None
    return gates


@pytest.fixture
def mock_event_manager():
    """Mock for EventManager."""
    event_manager = MagicMock()
    event_manager.subscribe = MagicMock()
    event_manager.dispatch = MagicMock()
    return event_manager


@pytest.fixture
def on_complete():
    return MagicMock(name="on_complete")


@pytest.fixture
def make_sequencer(mock_gates, mock_event_manager, on_complete):
    """Factory building a sequencer around the shared mocks."""

    def _make(catalog=None, settings=None, gates=mock_gates, **kwargs):
        return TutorialSequencer(
            gates=gates,
            catalog=catalog,
            scheduler=Scheduler(),
            settings=settings or TutorialSettings(),
            events=mock_event_manager,
            on_complete=on_complete,
            **kwargs,
        )

    return _make


# ===========================================================
# Helpers
# ===========================================================

def make_catalog(*spec):
    """make_catalog((StepType.MOVEMENT, 8), (StepType.AIMING, 5), ...)"""
    return StepCatalog([
        StepDefinition(f"{step_type.value} step", step_type, float(timeout))
        for step_type, timeout in spec
    ])


def snapshot(**kwargs):
    return InputSnapshot(**kwargs)


def entered_steps(event_manager):
    """Indices of TutorialStepEvents dispatched so far, in order."""
    from lastman.core.services.event_manager import TutorialStepEvent
    return [
        call.args[0].index for call in event_manager.dispatch.call_args_list
        if isinstance(call.args[0], TutorialStepEvent)
    ]


class SlowAction(CutsceneAction):
    """Counts its updates; finishes after `duration` seconds."""

    def __init__(self, duration=5.0):
        super().__init__(duration)
        self.updates = 0
        self.started = False
        self.ended = False

    def on_start(self):
        self.started = True

    def on_end(self):
        self.ended = True

    def update(self, dt):
        self.updates += 1
        self.elapsed += dt
        return self.elapsed >= self.duration


DEFAULT_FIVE = (
    (StepType.MOVEMENT, 8),
    (StepType.AIMING, 5),
    (StepType.SHOOTING, 8),
    (StepType.PICKUP, 10),
    (StepType.COMPLETE, 3),
)


# Pytest configuration
def pytest_configure(config):
    """Custom pytest configuration."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
