"""
Progress Indicator - Tracks agent pipeline execution progress.

RESPONSIBILITY:
A stage-counter state machine that listeners subscribe to. Independent of
agents: the orchestrator and workflow engine advance it at stage boundaries.

STATES:
    idle ──start_stage──► running ──start_stage──► running ...
                             │
                             ├──complete()──► completed
                             └──error()─────► error
    reset() returns to idle from anywhere.

ESTIMATES:
Average of recorded stage durations x stages not yet completed, in whole
seconds. Absent until at least one stage has completed.
"""

import logging
import math
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence


class ProgressStatus(str, Enum):
    """Pipeline status."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass
class ProgressState:
    """Snapshot of pipeline progress."""
    current_stage: str = ""
    current_agent: str = ""
    total_stages: int = 0
    completed_stages: int = 0
    percentage: int = 0
    estimated_time_remaining: Optional[int] = None
    status: ProgressStatus = ProgressStatus.IDLE
    error_message: Optional[str] = None


ProgressListener = Callable[[ProgressState], None]


class ProgressIndicator:
    """
    Service for tracking and reporting agent pipeline progress.

    Listeners are called synchronously, in registration order, on every
    state change. A listener that raises is logged and skipped; it never
    stops the remaining listeners.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            clock: Returns seconds; used to time stages
            logger: Logger for listener failures
        """
        self._clock = clock
        self._logger = logger or logging.getLogger(__name__)
        self._state = ProgressState()
        self._listeners: List[ProgressListener] = []
        self._stage_start_times: Dict[str, float] = {}
        self._stage_durations: Dict[str, float] = {}

    def initialize(self, stages: Sequence[str]) -> None:
        """Start tracking a pipeline of ``stages``; status stays idle."""
        self._state = ProgressState(total_stages=len(stages))
        self._stage_start_times.clear()
        self._notify_listeners()

    def start_stage(self, stage_name: str, agent_name: str) -> None:
        """Mark ``stage_name`` as running under ``agent_name``."""
        self._state.current_stage = stage_name
        self._state.current_agent = agent_name
        self._state.status = ProgressStatus.RUNNING
        self._stage_start_times[stage_name] = self._clock()

        self._update_percentage()
        self._calculate_estimated_time()
        self._notify_listeners()

    def complete_stage(self) -> None:
        """
        Complete the current stage.

        ``current_stage`` and ``current_agent`` are left in place until the
        next ``start_stage`` overwrites them.
        """
        stage_name = self._state.current_stage
        if stage_name and stage_name in self._stage_start_times:
            duration_ms = (self._clock() - self._stage_start_times[stage_name]) * 1000
            self._stage_durations[stage_name] = duration_ms

        self._state.completed_stages += 1
        self._update_percentage()
        self._calculate_estimated_time()
        self._notify_listeners()

    def complete(self) -> None:
        """Mark the pipeline as completed."""
        self._state.status = ProgressStatus.COMPLETED
        self._state.percentage = 100
        self._state.estimated_time_remaining = 0
        self._notify_listeners()

    def error(self, message: str) -> None:
        """Mark the pipeline as failed."""
        self._state.status = ProgressStatus.ERROR
        self._state.error_message = message
        self._logger.error(f"Pipeline failed: {message}")
        self._notify_listeners()

    def reset(self) -> None:
        """Return to the initial idle state and forget all timings."""
        self._state = ProgressState()
        self._stage_start_times.clear()
        self._stage_durations.clear()
        self._notify_listeners()

    def get_state(self) -> ProgressState:
        """Copy of the current state."""
        return replace(self._state)

    def get_stage_durations(self) -> Dict[str, float]:
        """Recorded stage durations in milliseconds."""
        return dict(self._stage_durations)

    def add_listener(self, listener: ProgressListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ProgressListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _update_percentage(self) -> None:
        if self._state.total_stages == 0:
            self._state.percentage = 0
            return
        self._state.percentage = min(
            _round_half_up(100 * self._state.completed_stages / self._state.total_stages), 100
        )

    def _calculate_estimated_time(self) -> None:
        if not self._stage_durations:
            self._state.estimated_time_remaining = None
            return

        avg_duration = sum(self._stage_durations.values()) / len(self._stage_durations)
        remaining_stages = max(self._state.total_stages - self._state.completed_stages, 0)
        self._state.estimated_time_remaining = _round_half_up(avg_duration * remaining_stages / 1000)

    def _notify_listeners(self) -> None:
        snapshot = self.get_state()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                self._logger.exception("Error in progress listener")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_time(seconds: int) -> str:
    """Format a duration for display: ``42s`` or ``2m 5s``."""
    if seconds < 60:
        return f"{seconds}s"
    minutes, remaining_seconds = divmod(seconds, 60)
    return f"{minutes}m {remaining_seconds}s"
