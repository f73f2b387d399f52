"""
Objective Placement
===================

Randomized placement of objectives on a horizontal disk around a spawn root.

Each objective gets a budget of rejection-sampling attempts against a minimum
separation. When the budget runs out one final unchecked sample is taken, so
placement always terminates even when the separation cannot be satisfied.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from syncseed.rhythm_core.config_loader import GameConfig, get_config


@dataclass(frozen=True)
class Placement:
    """Outcome of placing a single objective."""
    position: Tuple[float, float, float]    # y is height
    attempts: int           # Separation-checked samples drawn
    used_fallback: bool     # True if the separation check was abandoned


def _as_point(vector: np.ndarray) -> Tuple[float, float, float]:
    x, y, z = (float(v) for v in vector)
    return (x, y, z)


class DiskPlacer:
    """
    Samples objective positions uniformly inside a disk in the x/z plane.

    The height (y) of every sample is pinned to the spawn root's height.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        spawn_root: Optional[Sequence[float]] = None
    ):
        """
        Initialize placer.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducible layouts. Random if None.
            spawn_root: Disk centre; defaults to the configured spawn root.
        """
        if config is None:
            config = get_config()

        placement = config.placement
        self._rng = random.Random(seed)
        self._radius = placement.spawn_radius
        self._min_distance = placement.min_spawn_distance
        self._max_attempts = placement.max_spawn_attempts
        root = spawn_root if spawn_root is not None else placement.spawn_root
        self._spawn_root = np.asarray(root, dtype=np.float64).reshape(3)

    @property
    def spawn_root(self) -> np.ndarray:
        return self._spawn_root.copy()

    @spawn_root.setter
    def spawn_root(self, value: Sequence[float]) -> None:
        """Re-anchor the disk, e.g. after the host detects a new surface."""
        self._spawn_root = np.asarray(value, dtype=np.float64).reshape(3)

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def min_distance(self) -> float:
        return self._min_distance

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def reseed(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def sample(self) -> np.ndarray:
        """Draw one uniform point inside the disk."""
        # sqrt keeps the density uniform over the disk's area
        distance = self._radius * math.sqrt(self._rng.random())
        angle = self._rng.uniform(0.0, 2.0 * math.pi)
        offset = np.array([distance * math.cos(angle), 0.0, distance * math.sin(angle)])
        return self._spawn_root + offset

    def is_separated(self, candidate: Sequence[float], placed: Sequence[Sequence[float]]) -> bool:
        """True if candidate is at least min_distance from every placed position."""
        if len(placed) == 0:
            return True
        distances = np.linalg.norm(np.asarray(placed) - candidate, axis=1)
        return bool(np.all(distances >= self._min_distance))

    def place(self, placed: Sequence[Sequence[float]]) -> Placement:
        """
        Place one objective relative to the ones already placed this level.

        Args:
            placed: Positions already accepted for the current level.

        Returns:
            Placement with the chosen position and how it was found.
        """
        for attempt in range(1, self._max_attempts + 1):
            candidate = self.sample()
            if self.is_separated(candidate, placed):
                return Placement(position=_as_point(candidate), attempts=attempt, used_fallback=False)

        return Placement(position=_as_point(self.sample()), attempts=self._max_attempts, used_fallback=True)

    def place_many(self, count: int) -> List[Placement]:
        """Place count objectives from scratch."""
        placements: List[Placement] = []
        positions: List[Tuple[float, float, float]] = []
        for _ in range(max(0, count)):
            placement = self.place(positions)
            placements.append(placement)
            positions.append(placement.position)
        return placements
