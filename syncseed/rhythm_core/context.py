"""
Game Context
============

Composition root: builds the beat clock, level generator and session once and
wires them together. Hosts keep one GameContext and drive it with tick().
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from syncseed.rhythm_core.beat_clock import BeatClock
from syncseed.rhythm_core.config_loader import GameConfig, get_config
from syncseed.rhythm_core.interfaces import (
    FeedbackChannel,
    LeaderboardSink,
    NullFeedbackChannel,
    ScoreDisplay,
    UiControl,
)
from syncseed.rhythm_core.level_generator import LevelGenerator
from syncseed.rhythm_core.session_state import SessionState


class GameContext:
    """
    Owns every core component for one game process.

    Wiring:
    - SessionState asks LevelGenerator to spawn each level
    - LevelGenerator writes the BeatClock interval
    - RhythmObjective hits are reported to SessionState
    - the BeatClock runs while a level is being played
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        score_display: Optional[ScoreDisplay] = None,
        leaderboard: Optional[LeaderboardSink] = None,
        ui: Optional[UiControl] = None,
        feedback: Optional[FeedbackChannel] = None
    ):
        """
        Initialize and wire all components.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for objective placement.
            score_display: Score readout collaborator.
            leaderboard: Score submission collaborator.
            ui: Menu/leaderboard screen collaborator.
            feedback: Audio/haptics collaborator.
        """
        if config is None:
            config = get_config()

        self._config = config
        feedback = feedback if feedback is not None else NullFeedbackChannel()

        self.beat_clock = BeatClock(config, feedback)
        self.level_generator = LevelGenerator(
            config=config,
            beat_clock=self.beat_clock,
            feedback=feedback,
            seed=seed,
        )
        self.session = SessionState(
            config=config,
            level_source=self.level_generator,
            score_display=score_display,
            leaderboard=leaderboard,
            ui=ui,
        )
        self.level_generator.set_hit_reporter(self.session.report_objective_hit)
        self.level_generator.set_score_source(lambda: self.session.points_per_target)
        self.session.game_started.connect(self._on_game_started)

        logger.debug("Game context initialized")

    @property
    def config(self) -> GameConfig:
        return self._config

    def _on_game_started(self) -> None:
        self.beat_clock.reset()
        if not self.beat_clock.is_active:
            self.beat_clock.start()

    def tick(self, delta_time: float) -> None:
        """Advance the clock and every live objective by one host frame."""
        self.beat_clock.tick(delta_time)
        self.level_generator.tick(delta_time)

    def reset_game(self) -> None:
        """Clear the level, stop the clock and reset the session."""
        self.level_generator.clear()
        if self.beat_clock.is_active:
            self.beat_clock.stop()
        self.session.reset_game()
