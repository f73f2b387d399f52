"""
Level Generator
===============

Materializes a level: computes its difficulty plan, pushes the beat interval
into the shared BeatClock and spawns the level's objectives at randomized,
separated positions.

Generation is synchronous and never re-entrant. Any exception raised while
building a level is converted into a generation_error notification.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from loguru import logger

from syncseed.rhythm_core.beat_clock import BeatClock
from syncseed.rhythm_core.config_loader import GameConfig, get_config
from syncseed.rhythm_core.difficulty import DifficultyCurve, LevelPlan
from syncseed.rhythm_core.interfaces import FeedbackChannel, NullFeedbackChannel
from syncseed.rhythm_core.placement import DiskPlacer, Placement
from syncseed.rhythm_core.rhythm_objective import (
    HitReporter,
    ObjectiveSpec,
    ObjectiveState,
    RhythmObjective,
)
from syncseed.rhythm_core.signals import Signal


GENERATION_IN_PROGRESS = "generation in progress"

ScoreSource = Callable[[], int]


class LevelGenerator:
    """
    Owns the objectives of the current level.

    Signals:
        level_generated(level, objective_count): a level finished spawning.
        generation_error(message): generation was rejected or failed.
        objective_hit(objective): relayed from any tracked objective.
        objective_pulse(objective): relayed from any tracked objective.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        beat_clock: Optional[BeatClock] = None,
        feedback: Optional[FeedbackChannel] = None,
        hit_reporter: Optional[HitReporter] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize level generator.

        Args:
            config: Game configuration. Uses default if None.
            beat_clock: Shared beat clock. A private one is created if None.
            feedback: Audio/haptics collaborator handed to every objective.
            hit_reporter: Receives each accepted hit's score value.
            seed: Random seed for reproducible layouts.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._feedback = feedback if feedback is not None else NullFeedbackChannel()
        self._beat_clock = beat_clock if beat_clock is not None else BeatClock(config, self._feedback)
        self._hit_reporter = hit_reporter
        self._difficulty = DifficultyCurve(config)
        self._placer = DiskPlacer(config, seed)

        self._clear_previous = config.placement.clear_previous_level
        self._auto_start = config.objective.auto_start
        self._score_value = config.targets.points_per_target
        self._score_source: Optional[ScoreSource] = None

        self._objectives: List[RhythmObjective] = []
        self._placements: List[Placement] = []
        self._last_plan: Optional[LevelPlan] = None
        self._next_id: int = 0
        self._generating: bool = False

        self.level_generated = Signal("level_generated")
        self.generation_error = Signal("generation_error")
        self.objective_hit = Signal("objective_hit")
        self.objective_pulse = Signal("objective_pulse")

    # -- Properties -------------------------------------------------------------

    @property
    def beat_clock(self) -> BeatClock:
        return self._beat_clock

    @property
    def difficulty(self) -> DifficultyCurve:
        return self._difficulty

    @property
    def placer(self) -> DiskPlacer:
        return self._placer

    @property
    def objectives(self) -> List[RhythmObjective]:
        """Tracked objectives that have not been destroyed yet."""
        return list(self._objectives)

    @property
    def objective_count(self) -> int:
        return len(self._objectives)

    @property
    def placements(self) -> List[Placement]:
        """Placement records for the most recent level."""
        return list(self._placements)

    @property
    def last_plan(self) -> Optional[LevelPlan]:
        return self._last_plan

    @property
    def placement_limit(self) -> Optional[int]:
        """Placement limit of the most recent level, for the external placement collaborator."""
        return self._last_plan.placement_limit if self._last_plan is not None else None

    @property
    def is_generating(self) -> bool:
        return self._generating

    @property
    def score_value(self) -> int:
        """Score value the next spawned objective will advertise."""
        if self._score_source is not None:
            return max(0, int(self._score_source()))
        return self._score_value

    @score_value.setter
    def score_value(self, value: int) -> None:
        """Fixed score value, used while no score source is set."""
        self._score_value = max(0, int(value))

    def set_score_source(self, score_source: Optional[ScoreSource]) -> None:
        """Read each spawned objective's score value from score_source instead of a fixed value."""
        self._score_source = score_source

    def set_hit_reporter(self, hit_reporter: Optional[HitReporter]) -> None:
        """Set the hit reporter used for objectives spawned from now on."""
        self._hit_reporter = hit_reporter

    def set_spawn_root(self, spawn_root: Sequence[float]) -> None:
        self._placer.spawn_root = spawn_root

    # -- Generation -------------------------------------------------------------

    def generate(self, level: int) -> bool:
        """
        Build a level's objectives and configure the beat clock.

        Args:
            level: Level number. Out-of-range values are clamped by the curves.

        Returns:
            True if the level was generated.
        """
        if self._generating:
            logger.error(f"Cannot generate level {level}: {GENERATION_IN_PROGRESS}.")
            self.generation_error.emit(GENERATION_IN_PROGRESS)
            return False

        self._generating = True
        try:
            count = self._build_level(level)
        except Exception as exception:
            self._generating = False
            message = f"Level {level} generation failed: {exception}"
            logger.error(message)
            self.generation_error.emit(message)
            return False
        self._generating = False

        logger.info(
            f"Level {level} generated: {count} objectives, "
            f"beat {self._beat_clock.interval:.2f}s, placement limit {self._last_plan.placement_limit}"
        )
        self.level_generated.emit(level, count)
        return True

    def _build_level(self, level: int) -> int:
        if self._clear_previous:
            self.clear()

        plan = self._difficulty.plan(level)
        self._last_plan = plan
        self._beat_clock.set_interval(plan.beat_interval)

        self._placements = []
        positions: List[Tuple[float, float, float]] = []
        for _ in range(plan.target_count):
            placement = self._placer.place(positions)
            positions.append(placement.position)
            self._placements.append(placement)
            self._spawn(placement.position)

        return plan.target_count

    def _spawn(self, position: Tuple[float, float, float]) -> RhythmObjective:
        spec = ObjectiveSpec(
            id=self._next_id,
            position=position,
            beat_interval=self._beat_clock.interval,
            score_value=self.score_value,
        )
        self._next_id += 1

        objective = RhythmObjective(
            spec,
            config=self._config,
            feedback=self._feedback,
            hit_reporter=self._hit_reporter,
        )
        objective.hit_signal.connect(lambda _score_value: self.objective_hit.emit(objective))
        objective.pulse_signal.connect(lambda: self.objective_pulse.emit(objective))
        objective.destroyed.connect(lambda: self._forget(objective))
        self._objectives.append(objective)

        if self._auto_start:
            objective.start()
        logger.debug(f"Spawned {spec!r}")
        return objective

    def _forget(self, objective: RhythmObjective) -> None:
        try:
            self._objectives.remove(objective)
        except ValueError:
            pass

    # -- Runtime ----------------------------------------------------------------

    def clear(self) -> int:
        """
        Destroy every tracked objective.

        Returns:
            Number of objectives destroyed.
        """
        doomed = list(self._objectives)
        for objective in doomed:
            objective.destroy()
        self._objectives.clear()
        return len(doomed)

    def tick(self, delta_time: float) -> None:
        """Advance every tracked objective; destroyed ones drop out of tracking."""
        for objective in list(self._objectives):
            objective.tick(delta_time)

    def find(self, objective_id: int) -> Optional[RhythmObjective]:
        for objective in self._objectives:
            if objective.id == objective_id:
                return objective
        return None

    def count_in_state(self, state: ObjectiveState) -> int:
        return sum(1 for objective in self._objectives if objective.state is state)
