"""
test_sequencer.py
-----------------
Tests for the TutorialSequencer state machine.

Covers:
- Timeout-only runs and their exact completion time
- Input-driven steps, settle delay and stale timeout cancellation
- Skip from every state: mid-timeout, mid-pause, mid-animation
- One-time demonstrations and per-step flag reset
- Query methods, idempotent start/complete and graceful degradation
"""

from unittest.mock import call

import pytest

from conftest import DEFAULT_FIVE, SlowAction, entered_steps, make_catalog, snapshot
from lastman.core.services.event_manager import TutorialCompletedEvent, TutorialStartedEvent
from lastman.core.services.input_manager import Direction
from lastman.tutorial.gates import GameGates
from lastman.tutorial.settings import TutorialSettings
from lastman.tutorial.steps import StepCatalog, StepType


def run_for(seq, seconds, dt=0.5, snap=None):
    """Tick the sequencer for `seconds` of game time."""
    for _ in range(int(round(seconds / dt))):
        seq.update(dt, snap)


# ===========================================================
# Timeout-Only Runs
# ===========================================================

class TestTimeoutRuns:

    def test_default_catalog_completes_at_38_seconds(self, make_sequencer, on_complete):
        seq = make_sequencer(make_catalog(*DEFAULT_FIVE))
        finished_at = []
        on_complete.side_effect = lambda: finished_at.append(seq.scheduler.now)

        seq.start()
        run_for(seq, 37.5)
        assert seq.is_active()
        on_complete.assert_not_called()

        run_for(seq, 0.5)
        assert finished_at == [38.0]
        assert not seq.is_active()

        run_for(seq, 20)
        on_complete.assert_called_once()

    @pytest.mark.parametrize("spec", [
        ((StepType.COMPLETE, 3),),
        ((StepType.MOVEMENT, 2), (StepType.PICKUP, 4)),
        ((StepType.AIMING, 1.5), (StepType.SHOOTING, 2.5), (StepType.COMPLETE, 0.25)),
        DEFAULT_FIVE,
    ])
    def test_no_input_total_time_is_timeouts_plus_pauses(self, make_sequencer, on_complete, spec):
        catalog = make_catalog(*spec)
        seq = make_sequencer(catalog)
        finished_at = []
        on_complete.side_effect = lambda: finished_at.append(seq.scheduler.now)

        seq.start()
        seq.update(1000.0)

        expected = catalog.total_timeout + (len(catalog) - 1) * 1.0
        assert finished_at == [pytest.approx(expected)]

    def test_steps_enter_in_order(self, make_sequencer, mock_event_manager):
        seq = make_sequencer(make_catalog(*DEFAULT_FIVE))
        seq.start()
        seq.update(100.0)
        assert entered_steps(mock_event_manager) == [0, 1, 2, 3, 4]

    def test_no_input_accepted_during_transition_pause(self, make_sequencer, mock_gates):
        seq = make_sequencer(make_catalog((StepType.PICKUP, 2), (StepType.MOVEMENT, 5)))
        seq.start()
        seq.update(2.5)

        assert seq.is_active()
        assert not seq.waiting_for_input
        seq.update(0.25, snapshot(interact_pressed=True, directions_pressed=(Direction.UP,)))
        mock_gates.perform_bounded_move.assert_not_called()
        assert seq.current_index == 0

        seq.update(0.25)
        assert seq.current_index == 1
        assert seq.waiting_for_input


# ===========================================================
# Input-Driven Steps
# ===========================================================

class TestInputSteps:

    def test_movement_input_enters_aiming_after_settle_delay(self, make_sequencer, mock_gates,
                                                             mock_event_manager):
        seq = make_sequencer(make_catalog(*DEFAULT_FIVE))
        seq.start()
        seq.update(1.0)

        seq.update(0.25, snapshot(directions_pressed=(Direction.LEFT,)))
        mock_gates.perform_bounded_move.assert_called_once_with(Direction.LEFT, 120.0, 0.4)
        assert seq.is_in_movement_step()
        assert seq.waiting_for_input

        seq.update(0.25)
        assert seq.scheduler.now == 1.5
        assert seq.current_step.type is StepType.AIMING

    def test_stale_movement_timeout_never_fires(self, make_sequencer, mock_event_manager):
        seq = make_sequencer(make_catalog(*DEFAULT_FIVE))
        seq.start()
        seq.update(1.0, snapshot(directions_pressed=(Direction.UP,)))

        # Input seen at t=0: Aiming 0.5 -> 5.5, pause, Shooting from 6.5
        run_for(seq, 9.0)
        assert seq.is_in_shooting_step()
        assert entered_steps(mock_event_manager) == [0, 1, 2]

    def test_input_wins_over_timeout_in_same_tick(self, make_sequencer, mock_event_manager):
        seq = make_sequencer(make_catalog((StepType.PICKUP, 1.0), (StepType.COMPLETE, 5)))
        seq.start()
        seq.update(0.5)

        # This tick spans the 1.0s timeout; the input is seen first
        seq.update(0.5, snapshot(interact_pressed=True))
        assert seq.current_index == 1
        assert seq.scheduler.now == 1.0

    def test_aiming_requires_nonzero_pointer_delta(self, make_sequencer):
        seq = make_sequencer(make_catalog((StepType.AIMING, 5), (StepType.COMPLETE, 3)))
        seq.start()

        seq.update(0.5, snapshot(pointer_delta=(0, 0)))
        seq.update(0.5)
        assert seq.current_index == 0

        seq.update(0.5, snapshot(pointer_delta=(0, -3)))
        seq.update(0.5)
        assert seq.current_index == 1

    def test_complete_step_ignores_all_input(self, make_sequencer, on_complete):
        seq = make_sequencer(make_catalog((StepType.COMPLETE, 3)))
        seq.start()
        busy = snapshot(directions_pressed=(Direction.UP,), pointer_delta=(4, 4),
                        fire_pressed=True, interact_pressed=True)
        for _ in range(5):
            seq.update(0.5, busy)
        on_complete.assert_not_called()

        seq.update(0.5)
        on_complete.assert_called_once()

    def test_last_step_input_completes_without_pause(self, make_sequencer, on_complete):
        seq = make_sequencer(make_catalog((StepType.PICKUP, 10)))
        finished_at = []
        on_complete.side_effect = lambda: finished_at.append(seq.scheduler.now)

        seq.start()
        seq.update(2.0, snapshot(interact_pressed=True))
        seq.update(2.0)
        assert finished_at == [0.5]


# ===========================================================
# One-Time Demonstrations
# ===========================================================

class TestDemonstrations:

    def test_demo_move_fires_once_per_step(self, make_sequencer, mock_gates):
        seq = make_sequencer(make_catalog(*DEFAULT_FIVE))
        seq.start()

        seq.update(0.1, snapshot(directions_pressed=(Direction.UP,)))
        seq.update(0.1, snapshot(directions_pressed=(Direction.DOWN,)))
        seq.update(0.1, snapshot(directions_pressed=(Direction.RIGHT,)))

        assert mock_gates.perform_bounded_move.call_count == 1
        assert seq.has_acted(StepType.MOVEMENT)

    def test_demo_shot_fires_once_per_step(self, make_sequencer, mock_gates):
        seq = make_sequencer(make_catalog((StepType.SHOOTING, 8), (StepType.COMPLETE, 3)))
        seq.start()

        for _ in range(3):
            seq.update(0.1, snapshot(fire_pressed=True))

        mock_gates.fire_demo_shot.assert_called_once()

    def test_reentering_step_resets_acted_flags(self, make_sequencer, mock_gates):
        seq = make_sequencer(make_catalog((StepType.MOVEMENT, 5), (StepType.MOVEMENT, 5)))
        seq.start()

        seq.update(0.25, snapshot(directions_pressed=(Direction.UP,)))
        assert seq.has_acted(StepType.MOVEMENT)

        seq.update(0.25)
        assert seq.current_index == 1
        assert not seq.has_acted(StepType.MOVEMENT)

        seq.update(0.5, snapshot(directions_pressed=(Direction.DOWN,)))
        assert mock_gates.perform_bounded_move.call_args_list == [
            call(Direction.UP, 120.0, 0.4),
            call(Direction.DOWN, 120.0, 0.4),
        ]

    def test_demo_move_runs_on_scheduler(self, make_sequencer, mock_gates):
        action = SlowAction(duration=0.4)
        mock_gates.perform_bounded_move.return_value = action
        seq = make_sequencer(make_catalog((StepType.MOVEMENT, 8), (StepType.AIMING, 5)))
        seq.start()

        seq.update(0.2, snapshot(directions_pressed=(Direction.RIGHT,)))
        assert action.started
        assert seq.scheduler.running_actions == 1

        seq.update(0.2)
        seq.update(0.2)
        assert action.ended
        assert seq.scheduler.running_actions == 0

    def test_next_step_stops_unfinished_demo_move(self, make_sequencer, mock_gates):
        action = SlowAction(duration=2.0)
        mock_gates.perform_bounded_move.return_value = action
        seq = make_sequencer(make_catalog((StepType.MOVEMENT, 8), (StepType.AIMING, 5)),
                             settings=TutorialSettings(demo_move_duration=2.0))
        seq.start()

        seq.update(0.25, snapshot(directions_pressed=(Direction.UP,)))
        seq.update(0.25)
        assert seq.current_step.type is StepType.AIMING
        assert seq.scheduler.running_actions == 0

        updates = action.updates
        seq.update(1.0)
        seq.update(1.0)
        assert action.updates == updates
        assert not action.ended

# ===========================================================
# Skip & Complete
# ===========================================================

class TestSkip:

    def test_skip_during_aiming_restores_game(self, make_sequencer, mock_gates, on_complete):
        seq = make_sequencer(make_catalog(*DEFAULT_FIVE))
        seq.start()
        seq.update(11.0)  # Aiming entered at t=9
        assert seq.current_step.type is StepType.AIMING

        mock_gates.reset_mock()
        seq.skip()

        assert not seq.is_active()
        assert seq.is_complete()
        on_complete.assert_called_once()
        mock_gates.show_overlay.assert_called_once_with(False)
        mock_gates.set_player_control_enabled.assert_called_once_with(True)
        mock_gates.set_game_timer_enabled.assert_called_once_with(True)
        assert seq.scheduler.pending_timers == 0

    def test_skip_during_transition_pause(self, make_sequencer, mock_gates, on_complete):
        seq = make_sequencer(make_catalog(*DEFAULT_FIVE))
        seq.start()
        seq.update(8.5)
        assert not seq.waiting_for_input

        seq.skip()
        mock_gates.set_overlay_text.reset_mock()
        seq.update(30.0)

        mock_gates.set_overlay_text.assert_not_called()
        on_complete.assert_called_once()

    def test_skip_during_settle_delay(self, make_sequencer, mock_event_manager, on_complete):
        seq = make_sequencer(make_catalog(*DEFAULT_FIVE))
        seq.start()
        seq.update(0.25, snapshot(directions_pressed=(Direction.UP,)))

        seq.skip()
        seq.update(5.0)
        assert entered_steps(mock_event_manager) == [0]
        on_complete.assert_called_once()

    def test_skip_mid_demo_animation_stops_it(self, make_sequencer, mock_gates, on_complete):
        action = SlowAction(duration=5.0)
        mock_gates.perform_bounded_move.return_value = action
        seq = make_sequencer(make_catalog(*DEFAULT_FIVE))
        seq.start()
        seq.update(0.25, snapshot(directions_pressed=(Direction.UP,)))
        seq.update(0.25)
        updates = action.updates

        seq.skip()
        seq.update(1.0)
        seq.update(1.0)

        assert action.updates == updates
        assert seq.scheduler.running_actions == 0
        on_complete.assert_called_once()

    def test_skip_twice_completes_once(self, make_sequencer, on_complete, mock_event_manager):
        seq = make_sequencer()
        seq.start()
        seq.skip()
        seq.skip()
        seq.complete()

        on_complete.assert_called_once()
        completed = [c.args[0] for c in mock_event_manager.dispatch.call_args_list
                     if isinstance(c.args[0], TutorialCompletedEvent)]
        assert completed == [TutorialCompletedEvent(skipped=True)]

    def test_skip_when_idle_is_noop(self, make_sequencer, mock_gates, on_complete):
        seq = make_sequencer()
        seq.skip()
        on_complete.assert_not_called()
        assert mock_gates.method_calls == []

    def test_complete_before_start_fires_once(self, make_sequencer, mock_gates, on_complete):
        seq = make_sequencer()
        seq.complete()
        seq.complete()

        on_complete.assert_called_once()
        mock_gates.set_player_control_enabled.assert_called_once_with(True)
        mock_gates.set_game_timer_enabled.assert_called_once_with(True)
        assert not seq.is_active()

    def test_skip_tutorial_setting_completes_on_start(self, make_sequencer, mock_gates, on_complete):
        seq = make_sequencer(settings=TutorialSettings(skip_tutorial=True))
        seq.start()

        on_complete.assert_called_once()
        assert not seq.is_active()
        mock_gates.set_overlay_text.assert_not_called()

    def test_restart_after_completion_is_a_new_run(self, make_sequencer, on_complete):
        seq = make_sequencer(make_catalog((StepType.COMPLETE, 1)))
        seq.start()
        seq.update(1.0)
        seq.start()
        assert seq.is_active()
        assert seq.current_index == 0
        seq.update(1.0)
        assert on_complete.call_count == 2


# ===========================================================
# Start & Step Entry
# ===========================================================

class TestStartAndEntry:

    def test_start_switches_game_off_and_shows_overlay(self, make_sequencer, mock_gates,
                                                      mock_event_manager):
        seq = make_sequencer(make_catalog(*DEFAULT_FIVE))
        seq.start()

        assert mock_gates.method_calls[:3] == [
            call.set_player_control_enabled(False),
            call.set_game_timer_enabled(False),
            call.show_overlay(True),
        ]
        mock_gates.set_overlay_text.assert_called_once_with("movement step")
        mock_event_manager.dispatch.assert_any_call(TutorialStartedEvent(step_count=5))
        assert seq.waiting_for_input

    def test_start_is_ignored_while_active(self, make_sequencer, mock_gates):
        seq = make_sequencer()
        seq.start()
        seq.update(2.0)
        seq.start()

        mock_gates.set_game_timer_enabled.assert_called_once_with(False)
        assert seq.scheduler.now == 2.0
        assert seq.current_index == 0

    @pytest.mark.parametrize("step_type, control", [
        (StepType.MOVEMENT, False),
        (StepType.AIMING, True),
        (StepType.SHOOTING, True),
        (StepType.PICKUP, True),
        (StepType.COMPLETE, False),
    ])
    def test_player_control_policy_on_entry(self, make_sequencer, mock_gates, step_type, control):
        seq = make_sequencer(make_catalog((step_type, 5)))
        seq.start()
        assert mock_gates.set_player_control_enabled.call_args == call(control)

    def test_empty_catalog_completes_on_start(self, make_sequencer, on_complete):
        seq = make_sequencer(StepCatalog([]))
        seq.start()
        on_complete.assert_called_once()
        assert not seq.is_active()

    def test_index_never_decreases(self, make_sequencer):
        seq = make_sequencer(make_catalog(*DEFAULT_FIVE))
        seq.start()
        seen = []
        for i in range(80):
            snap = snapshot(fire_pressed=True, interact_pressed=True) if i % 3 == 0 else None
            seq.update(0.5, snap)
            seen.append(seq.current_index)
        assert seen == sorted(seen)
        assert seen[-1] == 5


# ===========================================================
# Queries
# ===========================================================

class TestQueries:

    def test_block_player_input_only_in_movement(self, make_sequencer):
        seq = make_sequencer(make_catalog(*DEFAULT_FIVE))
        assert not seq.should_block_player_input()

        seq.start()
        assert seq.should_block_player_input()
        assert not seq.is_in_shooting_step()

        seq.update(9.0)  # Aiming
        assert not seq.should_block_player_input()

        seq.update(6.0)  # Shooting
        assert seq.is_in_shooting_step()

        seq.skip()
        assert not seq.should_block_player_input()
        assert not seq.is_in_shooting_step()
        assert seq.current_step is None

    def test_pause_after_movement_timeout_is_not_the_movement_step(self, make_sequencer):
        seq = make_sequencer(make_catalog((StepType.MOVEMENT, 2), (StepType.AIMING, 5)))
        seq.start()
        seq.update(2.5)

        assert seq.is_active()
        assert not seq.waiting_for_input
        assert not seq.is_in_movement_step()
        assert not seq.should_block_player_input()

        seq.update(0.5)
        assert seq.current_step.type is StepType.AIMING


# ===========================================================
# Degradation
# ===========================================================

class TestDegradation:

    def test_runs_without_any_collaborators(self, make_sequencer, on_complete):
        seq = make_sequencer(make_catalog(*DEFAULT_FIVE), gates=GameGates())
        seq.start()
        seq.update(0.5, snapshot(directions_pressed=(Direction.UP,)))
        seq.update(0.5, snapshot(fire_pressed=True))
        seq.update(100.0)
        on_complete.assert_called_once()

    def test_failing_gate_does_not_stop_the_run(self, make_sequencer, mock_gates, on_complete):
        mock_gates.set_player_control_enabled.side_effect = RuntimeError("player despawned")
        mock_gates.fire_demo_shot.side_effect = RuntimeError("no bullets")
        seq = make_sequencer(make_catalog((StepType.SHOOTING, 4), (StepType.COMPLETE, 1)))

        seq.start()
        seq.update(0.5, snapshot(fire_pressed=True))
        seq.update(10.0)

        on_complete.assert_called_once()
        mock_gates.set_game_timer_enabled.assert_called_with(True)

    def test_failing_completion_callback_still_sends_event(self, make_sequencer, on_complete,
                                                          mock_event_manager, mock_gates):
        on_complete.side_effect = RuntimeError("hud missing")
        seq = make_sequencer()
        seq.start()

        seq.skip()

        assert not seq.is_active()
        mock_gates.set_game_timer_enabled.assert_called_with(True)
        mock_event_manager.dispatch.assert_called_with(TutorialCompletedEvent(skipped=True))
