"""Tests for verno.services.progress: stage counter, estimates and listeners."""

import logging

import pytest

from verno.services.progress import ProgressIndicator, ProgressState, ProgressStatus, format_time


@pytest.fixture
def progress(clock):
    return ProgressIndicator(clock=clock)


# ── State machine ────────────────────────────────────────────────────────────


class TestStateTransitions:
    def test_initial_state(self, progress):
        state = progress.get_state()
        assert state.status == ProgressStatus.IDLE
        assert state.percentage == 0
        assert state.estimated_time_remaining is None

    def test_initialize_stays_idle(self, progress):
        progress.initialize(["a", "b", "c"])
        state = progress.get_state()
        assert state.total_stages == 3
        assert state.completed_stages == 0
        assert state.status == ProgressStatus.IDLE

    def test_start_stage_runs(self, progress):
        progress.initialize(["a"])
        progress.start_stage("a", "AgentA")
        state = progress.get_state()
        assert state.status == ProgressStatus.RUNNING
        assert state.current_stage == "a"
        assert state.current_agent == "AgentA"

    def test_complete_stage_keeps_current_stage(self, progress):
        progress.initialize(["a", "b"])
        progress.start_stage("a", "AgentA")
        progress.complete_stage()
        state = progress.get_state()
        assert state.current_stage == "a"
        assert state.current_agent == "AgentA"
        assert state.completed_stages == 1

    def test_complete_forces_100(self, progress):
        progress.initialize(["a", "b", "c"])
        progress.start_stage("a", "AgentA")
        progress.complete()
        state = progress.get_state()
        assert state.status == ProgressStatus.COMPLETED
        assert state.percentage == 100
        assert state.estimated_time_remaining == 0

    def test_error_records_message(self, progress):
        progress.initialize(["a"])
        progress.start_stage("a", "AgentA")
        progress.error("boom")
        state = progress.get_state()
        assert state.status == ProgressStatus.ERROR
        assert state.error_message == "boom"

    def test_reset(self, progress, clock):
        progress.initialize(["a"])
        progress.start_stage("a", "AgentA")
        clock.advance(1)
        progress.complete_stage()
        progress.reset()
        assert progress.get_state().status == ProgressStatus.IDLE
        assert progress.get_stage_durations() == {}
        assert progress.get_state() == ProgressState()

    def test_get_state_is_a_copy(self, progress):
        progress.initialize(["a"])
        snapshot = progress.get_state()
        snapshot.total_stages = 99
        assert progress.get_state().total_stages == 1


# ── Percentage ───────────────────────────────────────────────────────────────


class TestPercentage:
    def test_one_of_three(self, progress):
        progress.initialize(["a", "b", "c"])
        progress.start_stage("a", "A")
        progress.complete_stage()
        assert progress.get_state().percentage == 33

    def test_two_of_three_rounds_half_up(self, progress):
        progress.initialize(["a", "b", "c"])
        for stage in ("a", "b"):
            progress.start_stage(stage, "A")
            progress.complete_stage()
        assert progress.get_state().percentage == 67

    def test_one_of_eight_rounds_half_up(self, progress):
        progress.initialize([str(i) for i in range(8)])
        progress.start_stage("0", "A")
        progress.complete_stage()
        # 12.5 rounds up, not to even
        assert progress.get_state().percentage == 13

    @pytest.mark.parametrize("n", [0, 1, 3, 8])
    def test_all_stages_completed(self, progress, n):
        progress.initialize([f"stage-{i}" for i in range(n)])
        assert progress.get_state().percentage == 0

        for i in range(n):
            progress.start_stage(f"stage-{i}", "A")
            progress.complete_stage()

        state = progress.get_state()
        assert state.completed_stages == n
        assert state.percentage == (100 if n > 0 else 0)

    def test_extra_completion_caps_at_100(self, progress):
        progress.initialize(["a"])
        progress.start_stage("a", "A")
        progress.complete_stage()
        progress.complete_stage()
        assert progress.get_state().percentage == 100

    def test_zero_stages(self, progress):
        progress.initialize([])
        progress.start_stage("x", "A")
        assert progress.get_state().percentage == 0


# ── Estimated time ───────────────────────────────────────────────────────────


class TestEstimatedTime:
    def test_absent_before_first_completion(self, progress):
        progress.initialize(["a", "b"])
        progress.start_stage("a", "A")
        assert progress.get_state().estimated_time_remaining is None

    def test_average_times_remaining(self, progress, clock):
        progress.initialize(["a", "b", "c", "d"])
        progress.start_stage("a", "A")
        clock.advance(2)
        progress.complete_stage()
        progress.start_stage("b", "B")
        clock.advance(4)
        progress.complete_stage()
        # Average 3s, two stages left
        assert progress.get_state().estimated_time_remaining == 6
        assert progress.get_stage_durations() == {"a": 2000.0, "b": 4000.0}

    def test_initialize_keeps_durations(self, progress, clock):
        progress.initialize(["a"])
        progress.start_stage("a", "A")
        clock.advance(5)
        progress.complete_stage()

        progress.initialize(["x", "y"])
        progress.start_stage("x", "X")

        assert progress.get_state().estimated_time_remaining == 10

    def test_complete_stage_without_start_records_nothing(self, progress):
        progress.initialize(["a"])
        progress.complete_stage()
        assert progress.get_stage_durations() == {}
        assert progress.get_state().completed_stages == 1


# ── Listeners ────────────────────────────────────────────────────────────────


class TestListeners:
    def test_called_in_registration_order(self, progress):
        calls = []
        progress.add_listener(lambda s: calls.append("first"))
        progress.add_listener(lambda s: calls.append("second"))
        progress.initialize(["a"])
        assert calls == ["first", "second"]

    def test_failing_listener_does_not_block_others(self, progress, caplog):
        seen = []

        def broken(state):
            raise RuntimeError("listener broke")

        progress.add_listener(broken)
        progress.add_listener(lambda s: seen.append(s.status))

        with caplog.at_level(logging.ERROR):
            progress.initialize(["a"])
            progress.start_stage("a", "A")

        assert seen == [ProgressStatus.IDLE, ProgressStatus.RUNNING]
        assert "Error in progress listener" in caplog.text

    def test_remove_listener(self, progress):
        calls = []
        listener = lambda s: calls.append(s)  # noqa: E731
        progress.add_listener(listener)
        progress.remove_listener(listener)
        progress.initialize(["a"])
        assert calls == []

    def test_remove_unknown_listener_is_noop(self, progress):
        progress.remove_listener(lambda s: None)

    def test_listener_receives_snapshot(self, progress):
        received = []
        progress.add_listener(received.append)
        progress.initialize(["a"])
        received[0].total_stages = 42
        assert progress.get_state().total_stages == 1


# ── format_time ──────────────────────────────────────────────────────────────


class TestFormatTime:
    def test_seconds(self):
        assert format_time(42) == "42s"

    def test_zero(self):
        assert format_time(0) == "0s"

    def test_minutes(self):
        assert format_time(125) == "2m 5s"

    def test_exact_minute(self):
        assert format_time(60) == "1m 0s"
