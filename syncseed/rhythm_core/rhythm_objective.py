"""
Rhythm Objective
================

A spawned target the player must hit. Each objective pulses on its own timer
and walks a one-way state machine:

    IDLE -> ACTIVE -> HIT -> DESTROYED

Pulses are cues only and never change state. A hit reports the objective's
score value, then destruction follows after a fixed delay measured in ticks.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np
from loguru import logger

from syncseed.rhythm_core.config_loader import GameConfig, get_config
from syncseed.rhythm_core.interfaces import FeedbackChannel, NullFeedbackChannel
from syncseed.rhythm_core.signals import Signal


class ObjectiveState(enum.Enum):
    IDLE = "idle"
    ACTIVE = "active"
    HIT = "hit"
    DESTROYED = "destroyed"


@dataclass(frozen=True)
class ObjectiveSpec:
    """Spawn-time description of an objective."""
    id: int
    position: Tuple[float, float, float]
    beat_interval: float    # Seconds, taken from the beat clock at spawn
    score_value: int

    def __repr__(self) -> str:
        x, y, z = (float(v) for v in self.position)
        return f"ObjectiveSpec({self.id}: ({x:.2f}, {y:.2f}, {z:.2f}) every {self.beat_interval:.2f}s)"


HitReporter = Callable[[int], None]


class RhythmObjective:
    """
    Runtime state of one objective.

    Signals:
        hit(score_value): a hit was accepted.
        pulse(): the objective's own beat elapsed.
        destroyed(): the objective reached DESTROYED.
    """

    def __init__(
        self,
        spec: ObjectiveSpec,
        config: Optional[GameConfig] = None,
        feedback: Optional[FeedbackChannel] = None,
        hit_reporter: Optional[HitReporter] = None
    ):
        """
        Initialize objective in the IDLE state.

        Args:
            spec: Spawn description (id, position, interval, score value).
            config: Game configuration. Uses default if None.
            feedback: Audio/haptics collaborator.
            hit_reporter: Called with score_value when a hit is accepted.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._feedback = feedback if feedback is not None else NullFeedbackChannel()
        self._hit_reporter = hit_reporter

        self._id = spec.id
        self._position = np.array(spec.position, dtype=np.float64)
        self._min_interval = config.objective.min_objective_interval
        self._beat_interval = max(self._min_interval, float(spec.beat_interval))
        self._score_value = max(0, int(spec.score_value))

        self._loop_pulses = config.objective.loop_pulses
        self._allow_repeat_hits = config.objective.allow_repeat_hits
        self._destroy_delay = config.objective.destroy_delay
        self._audio_enabled = config.feedback.audio_enabled
        self._haptics_enabled = config.feedback.haptics_enabled

        self._state = ObjectiveState.IDLE
        self._pulsing: bool = False
        self._timer: float = 0.0
        self._destroy_timer: float = 0.0
        self._hit_count: int = 0
        self._pulse_count: int = 0

        self.hit_signal = Signal("objective_hit")
        self.pulse_signal = Signal("objective_pulse")
        self.destroyed = Signal("objective_destroyed")

    # -- Properties -------------------------------------------------------------

    @property
    def id(self) -> int:
        return self._id

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @property
    def state(self) -> ObjectiveState:
        return self._state

    @property
    def beat_interval(self) -> float:
        return self._beat_interval

    @beat_interval.setter
    def beat_interval(self, value: float) -> None:
        self._beat_interval = max(self._min_interval, float(value))

    @property
    def score_value(self) -> int:
        return self._score_value

    @score_value.setter
    def score_value(self, value: int) -> None:
        self._score_value = max(0, int(value))

    @property
    def is_pulsing(self) -> bool:
        return self._pulsing

    @property
    def is_hit(self) -> bool:
        return self._state is ObjectiveState.HIT

    @property
    def is_destroyed(self) -> bool:
        return self._state is ObjectiveState.DESTROYED

    @property
    def timer(self) -> float:
        """Time accumulated towards the next pulse."""
        return self._timer

    @property
    def hit_count(self) -> int:
        return self._hit_count

    @property
    def pulse_count(self) -> int:
        return self._pulse_count

    def set_audio_enabled(self, enabled: bool) -> None:
        self._audio_enabled = bool(enabled)

    def set_haptics_enabled(self, enabled: bool) -> None:
        self._haptics_enabled = bool(enabled)

    def to_spec(self) -> ObjectiveSpec:
        """Current values as a spawn description."""
        return ObjectiveSpec(
            id=self._id,
            position=tuple(float(v) for v in self._position),
            beat_interval=self._beat_interval,
            score_value=self._score_value,
        )

    # -- Lifecycle --------------------------------------------------------------

    def start(self) -> bool:
        """Begin pulsing. Only valid from IDLE."""
        if self._state is not ObjectiveState.IDLE:
            logger.warning(f"Objective {self._id} cannot start from state {self._state.value}.")
            return False
        self._state = ObjectiveState.ACTIVE
        self._pulsing = True
        self._timer = 0.0
        return True

    def stop(self) -> bool:
        """Stop pulsing without leaving the ACTIVE state."""
        if not self._pulsing:
            logger.warning(f"Objective {self._id} is not pulsing.")
            return False
        self._pulsing = False
        return True

    def tick(self, delta_time: float) -> None:
        """
        Advance the objective by one host frame.

        Args:
            delta_time: Seconds since the previous tick. Negative values are ignored.
        """
        if delta_time < 0:
            return

        if self._state is ObjectiveState.ACTIVE and self._pulsing:
            self._timer += delta_time
            if self._timer >= self._beat_interval:
                self._timer = 0.0
                self.pulse()
                if not self._loop_pulses:
                    self._pulsing = False
        elif self._state is ObjectiveState.HIT:
            self._destroy_timer += delta_time
            if self._destroy_timer >= self._destroy_delay:
                self.destroy()

    def pulse(self) -> None:
        """Emit a beat cue. No state change."""
        if self._state is ObjectiveState.DESTROYED:
            logger.warning(f"Objective {self._id} is destroyed. Cannot pulse.")
            return
        self._pulse_count += 1
        self.pulse_signal.emit()
        if self._haptics_enabled:
            self._feedback.trigger_haptic_pulse()

    def hit(self) -> bool:
        """
        Register a player hit.

        Returns:
            True if the hit was accepted.
        """
        if self._state is ObjectiveState.DESTROYED:
            logger.warning(f"Objective {self._id} is already destroyed and cannot be hit.")
            return False
        if self._state is ObjectiveState.HIT and not self._allow_repeat_hits:
            logger.warning(f"Objective {self._id} already hit and cannot be hit multiple times.")
            return False

        first_hit = self._state is not ObjectiveState.HIT
        self._state = ObjectiveState.HIT
        self._pulsing = False
        self._hit_count += 1
        if first_hit:
            self._destroy_timer = 0.0

        if self._hit_reporter is not None:
            self._hit_reporter(self._score_value)
        if self._audio_enabled:
            self._feedback.play_hit_sound()
        if self._haptics_enabled:
            self._feedback.trigger_haptic_pulse()

        self.hit_signal.emit(self._score_value)
        return True

    def destroy(self) -> None:
        """Move straight to DESTROYED. Repeated calls are ignored."""
        if self._state is ObjectiveState.DESTROYED:
            return
        self._state = ObjectiveState.DESTROYED
        self._pulsing = False
        self.destroyed.emit()

    def __repr__(self) -> str:
        return f"RhythmObjective({self._id}, {self._state.value})"
