"""
Beat Clock
==========

The single shared beat interval plus a tick-driven pulse broadcaster.

LevelGenerator writes the interval once per level; objectives read it only
when they are constructed, so later changes never affect live objectives.
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from syncseed.rhythm_core.config_loader import GameConfig, get_config
from syncseed.rhythm_core.difficulty import clamp
from syncseed.rhythm_core.interfaces import FeedbackChannel, NullFeedbackChannel
from syncseed.rhythm_core.signals import Signal


class BeatClock:
    """
    Shared beat interval and active flag.

    Signals:
        pulse(): broadcast on every beat.
        interval_changed(interval): the clamped interval changed.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        feedback: Optional[FeedbackChannel] = None
    ):
        """
        Initialize beat clock.

        Args:
            config: Game configuration. Uses default if None.
            feedback: Haptics collaborator for beat pulses.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._feedback = feedback if feedback is not None else NullFeedbackChannel()
        self._min_interval = config.beat.min_beat_interval
        self._max_interval = config.beat.max_beat_interval

        self._interval: float = float(
            clamp(config.beat.base_beat_interval, self._min_interval, self._max_interval)
        )
        self._is_active: bool = False
        self._elapsed: float = 0.0
        self._pulse_count: int = 0

        self.pulse_signal = Signal("pulse")
        self.interval_changed = Signal("interval_changed")

    @property
    def interval(self) -> float:
        """Current beat interval in seconds."""
        return self._interval

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def elapsed(self) -> float:
        """Time accumulated towards the next beat."""
        return self._elapsed

    @property
    def pulse_count(self) -> int:
        """Number of pulses broadcast since construction."""
        return self._pulse_count

    def set_interval(self, value: float) -> None:
        """
        Set the beat interval, clamped into the configured bounds.

        Only notifies when the clamped value differs from the current one.
        """
        clamped = float(clamp(float(value), self._min_interval, self._max_interval))
        if clamped == self._interval:
            return
        self._interval = clamped
        logger.debug(f"Beat interval set to {clamped:.3f}s")
        self.interval_changed.emit(clamped)

    def start(self) -> None:
        if self._is_active:
            logger.warning("Beat clock is already active.")
            return
        self._is_active = True
        self._elapsed = 0.0

    def stop(self) -> None:
        if not self._is_active:
            logger.warning("Beat clock is not active.")
            return
        self._is_active = False

    def reset(self) -> None:
        """Zero the beat accumulator without changing the active flag."""
        self._elapsed = 0.0

    def tick(self, delta_time: float) -> int:
        """
        Advance the clock by one host frame.

        Args:
            delta_time: Seconds since the previous tick. Negative values are ignored.

        Returns:
            Number of pulses fired during this tick.
        """
        if not self._is_active or delta_time <= 0:
            return 0

        self._elapsed += delta_time
        fired = 0
        while self._is_active and self._elapsed >= self._interval:
            self._elapsed -= self._interval
            self.pulse()
            fired += 1
        return fired

    def pulse(self) -> None:
        """Broadcast a beat to every subscriber, then request a haptic pulse."""
        self._pulse_count += 1
        self.pulse_signal.emit()
        if self._config.feedback.haptics_enabled:
            self._feedback.trigger_haptic_pulse()
