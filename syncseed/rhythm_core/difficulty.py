"""
Difficulty Curve
================

Maps a level number to its difficulty parameters. Every curve has the same
shape: a linear term in (level - 1) followed by a hard clamp, so
out-of-range levels (including zero and negatives) are safe inputs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from syncseed.rhythm_core.config_loader import GameConfig, get_config


@dataclass(frozen=True)
class LevelPlan:
    """Difficulty parameters for a single level."""
    level: int
    target_count: int
    beat_interval: float
    placement_limit: int


def clamp(value, low, high):
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    # magnitude - whole is exact, floor(magnitude + 0.5) is not
    if magnitude - whole >= 0.5:
        whole += 1
    return int(math.copysign(whole, value))


def target_count(
    level: int,
    min_targets: int,
    max_targets: int,
    targets_increment: int
) -> int:
    """Number of objectives for a level."""
    targets = min_targets + (level - 1) * targets_increment
    return clamp(targets, min_targets, max_targets)


def beat_interval(
    level: int,
    base_beat_interval: float,
    min_beat_interval: float,
    max_beat_interval: float,
    beat_decrease_per_level: float
) -> float:
    """Seconds between pulses for a level."""
    interval = base_beat_interval - (level - 1) * beat_decrease_per_level
    return float(clamp(interval, min_beat_interval, max_beat_interval))


def placement_limit(
    level: int,
    base_limit: int,
    min_limit: int,
    max_limit: int,
    limit_decrease_per_level: float
) -> int:
    """Secondary placement bound for a level; the decrement is rounded before subtracting."""
    limit = base_limit - round_half_away_from_zero((level - 1) * limit_decrease_per_level)
    return clamp(limit, min_limit, max_limit)


class DifficultyCurve:
    """
    Difficulty functions bound to a game configuration.

    Stateless: every call is a pure function of the level and the config.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize difficulty curve.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config

    @property
    def config(self) -> GameConfig:
        return self._config

    def target_count(self, level: int) -> int:
        targets = self._config.targets
        return target_count(level, targets.min_targets, targets.max_targets, targets.targets_increment)

    def beat_interval(self, level: int) -> float:
        beat = self._config.beat
        return beat_interval(
            level,
            beat.base_beat_interval,
            beat.min_beat_interval,
            beat.max_beat_interval,
            beat.beat_decrease_per_level,
        )

    def placement_limit(self, level: int) -> int:
        placement = self._config.placement
        return placement_limit(
            level,
            placement.base_limit,
            placement.min_limit,
            placement.max_limit,
            placement.limit_decrease_per_level,
        )

    def plan(self, level: int) -> LevelPlan:
        """All difficulty parameters for a level."""
        return LevelPlan(
            level=level,
            target_count=self.target_count(level),
            beat_interval=self.beat_interval(level),
            placement_limit=self.placement_limit(level),
        )
