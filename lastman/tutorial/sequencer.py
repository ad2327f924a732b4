"""
sequencer.py
------------
State machine that walks the player through the onboarding steps.

Flow
----
Idle -> Active(0) -> [input | timeout] -> pause -> Active(k+1) -> ... -> Completed

- A qualifying input cancels the step timeout, plays the step's one-time
  demonstration, and enters the next step after the settle delay.
- A timeout advances through the transition pause instead.
- skip() and complete() cancel every outstanding timer and animation
  before restoring the game, from any state.

The sequencer owns all session state. The input detector and the
scheduler only report back; the gates only receive commands.
"""

from typing import Callable, Optional

from lastman.core.debug.debug_logger import DebugLogger
from lastman.core.runtime.scheduler import Scheduler
from lastman.core.services.event_manager import (
    get_events,
    TutorialStartedEvent,
    TutorialStepEvent,
    TutorialCompletedEvent,
)
from lastman.core.services.input_manager import InputSnapshot
from lastman.tutorial.gates import ExternalGates, GameGates
from lastman.tutorial.input_detector import Detection, InputDetector, SideEffect
from lastman.tutorial.settings import TutorialSettings
from lastman.tutorial.steps import StepCatalog, StepDefinition, StepType


class TutorialSequencer:
    """Runs one tutorial session at a time over a fixed StepCatalog."""

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self, gates: ExternalGates = None, catalog: StepCatalog = None,
                 scheduler: Scheduler = None, settings: TutorialSettings = None,
                 detector: InputDetector = None, events=None,
                 on_complete: Optional[Callable[[], None]] = None):
        """
        Args:
            gates: Game switches; a GameGates with no collaborators if None
            catalog: Steps to run; the default catalog if None
            scheduler: Timer source; the sequencer advances it in update()
            settings: Pacing and the skip flag
            detector: Step-type behavior table
            events: EventManager for progress events; the global one if None
            on_complete: Called once per run when the tutorial ends
        """
        self.gates = gates if gates is not None else GameGates()
        self.catalog = catalog if catalog is not None else StepCatalog.default()
        self.scheduler = scheduler or Scheduler()
        self.settings = settings or TutorialSettings()
        self.detector = detector or InputDetector()
        self.events = events or get_events()
        self.on_complete = on_complete

        self.current_index = 0
        self.active = False
        self.waiting_for_input = False
        self._acted = set()
        self._resolving = False
        self._run_finished = False

        self._timeout = None
        self._pending = None
        self._animation = None

        DebugLogger.init_entry("TutorialSequencer")
        DebugLogger.init_sub(f"Steps: {len(self.catalog)}")

    # ===========================================================
    # Public API
    # ===========================================================

    def start(self):
        """Begin a run from step 0. Ignored while a run is active."""
        if self.active:
            return

        self._run_finished = False
        if self.settings.skip_tutorial:
            DebugLogger.state("Tutorial disabled by config", category="tutorial")
            self.complete()
            return

        self.active = True
        self.current_index = 0
        self.waiting_for_input = False

        self._gate("set_player_control_enabled", False)
        self._gate("set_game_timer_enabled", False)
        self._gate("show_overlay", True)

        DebugLogger.state(f"Tutorial started ({len(self.catalog)} steps)", category="tutorial")
        self.events.dispatch(TutorialStartedEvent(step_count=len(self.catalog)))

        self._enter_step(0)

    def skip(self):
        """End the run immediately from any step. No-op when inactive."""
        if not self.active:
            return
        DebugLogger.action(f"Tutorial skipped at step {self.current_index + 1}", category="tutorial")
        self._finish(skipped=True)

    def complete(self):
        """Terminal action; safe to call directly and idempotent per run."""
        self._finish(skipped=False)

    def update(self, dt: float, snapshot: InputSnapshot = None):
        """
        One tick: input first, then timers.

        Input that qualifies on the same tick a timeout falls due wins,
        because the timeout is cancelled before the scheduler runs.
        """
        if self.active and self.waiting_for_input and snapshot is not None:
            self._check_input(snapshot)
        self.scheduler.update(dt)

    # Names used by the rest of the game
    start_tutorial = start
    skip_tutorial = skip
    complete_tutorial = complete

    # ===========================================================
    # Queries
    # ===========================================================

    @property
    def current_step(self) -> Optional[StepDefinition]:
        if not self.active or self.current_index >= len(self.catalog):
            return None
        return self.catalog[self.current_index]

    def is_active(self) -> bool:
        return self.active

    def is_complete(self) -> bool:
        return self._run_finished and not self.active

    def is_in_movement_step(self) -> bool:
        return self._current_type() is StepType.MOVEMENT

    def is_in_shooting_step(self) -> bool:
        return self._current_type() is StepType.SHOOTING

    def should_block_player_input(self) -> bool:
        """True exactly while the movement step is on screen."""
        return self.is_in_movement_step()

    def has_acted(self, step_type) -> bool:
        return step_type in self._acted

    def _current_type(self):
        """Type of the step on screen; None during the pause between steps."""
        if not self.waiting_for_input:
            return None
        step = self.current_step
        return step.type if step else None

    # ===========================================================
    # Step Lifecycle
    # ===========================================================

    def _enter_step(self, index: int):
        self._pending = None
        if not self.active:
            return
        if index >= len(self.catalog):
            self.current_index = len(self.catalog)
            self.complete()
            return

        self.scheduler.cancel(self._timeout)
        self.scheduler.cancel(self._animation)
        self._animation = None
        self.current_index = index
        self._acted.clear()
        self._resolving = False

        step = self.catalog[index]
        self._gate("set_overlay_text", step.message)
        self._gate("set_player_control_enabled", self.detector.player_control_enabled(step.type))

        self.waiting_for_input = True
        self._timeout = self.scheduler.schedule(
            step.timeout_duration, self._on_timeout, label=f"timeout:{step.type.value}"
        )

        DebugLogger.state(f"Tutorial Step {index + 1}: {step.type.name}", category="tutorial")
        self.events.dispatch(TutorialStepEvent(index=index, step_type=step.type.value))

    def _advance(self, pause: float):
        """Leave the current step; enter the next one after `pause` seconds."""
        if not self.active:
            return

        self.scheduler.cancel(self._timeout)
        self._timeout = None
        self.waiting_for_input = False

        next_index = self.current_index + 1
        if next_index >= len(self.catalog):
            self.current_index = next_index
            self.complete()
            return

        if pause <= 0:
            self._enter_step(next_index)
            return

        self._pending = self.scheduler.schedule(
            pause, self._enter_next_step, label="transition_pause"
        )

    def _enter_next_step(self):
        self._enter_step(self.current_index + 1)

    def _on_timeout(self):
        self._timeout = None
        if not (self.active and self.waiting_for_input) or self._resolving:
            return
        DebugLogger.state(f"Step {self.current_index + 1} timed out", category="tutorial")
        self._advance(self.settings.transition_pause)

    def _on_settled(self):
        self._pending = None
        self._advance(0.0)

    # ===========================================================
    # Input
    # ===========================================================

    def _check_input(self, snapshot: InputSnapshot):
        step = self.catalog[self.current_index]
        detection = self.detector.evaluate(step.type, self._acted, snapshot)
        if not detection.satisfied or self._resolving:
            return

        if self.detector.behavior(step.type).once_per_step:
            self._acted.add(step.type)
        self._perform(detection)

        self._resolving = True
        self.scheduler.cancel(self._timeout)
        self._timeout = None
        self._pending = self.scheduler.schedule(
            self.settings.input_settle_delay, self._on_settled, label="input_settle"
        )
        DebugLogger.action(f"Step {self.current_index + 1} satisfied by input", category="tutorial")

    def _perform(self, detection: Detection):
        if detection.side_effect is SideEffect.DEMO_MOVE:
            self.scheduler.cancel(self._animation)
            self._animation = None
            action = self._gate(
                "perform_bounded_move",
                detection.direction,
                self.settings.demo_move_distance,
                self.settings.demo_move_duration,
            )
            if action is not None:
                self._animation = self.scheduler.run_action(
                    action, on_complete=self._on_animation_done, label="demo_move"
                )
        elif detection.side_effect is SideEffect.DEMO_SHOT:
            self._gate("fire_demo_shot")

    def _on_animation_done(self):
        self._animation = None

    # ===========================================================
    # Exit
    # ===========================================================

    def _finish(self, skipped: bool):
        if self._run_finished:
            return
        self._run_finished = True

        self._cancel_outstanding()
        self.active = False
        self.waiting_for_input = False

        self._gate("show_overlay", False)
        self._gate("set_player_control_enabled", True)
        self._gate("set_game_timer_enabled", True)

        DebugLogger.state("Tutorial completed!", category="tutorial")
        if self.on_complete:
            try:
                self.on_complete()
            except Exception as e:
                DebugLogger.warn(f"Completion callback failed: {e}", category="tutorial")
        self.events.dispatch(TutorialCompletedEvent(skipped=skipped))

    def _cancel_outstanding(self):
        for handle in (self._timeout, self._pending, self._animation):
            self.scheduler.cancel(handle)
        self._timeout = None
        self._pending = None
        self._animation = None

    def _gate(self, name: str, *args):
        """Call a gate; a failing collaborator is logged and skipped."""
        try:
            return getattr(self.gates, name)(*args)
        except Exception as e:
            DebugLogger.warn(f"Gate '{name}' failed: {e}", category="gates")
            return None
