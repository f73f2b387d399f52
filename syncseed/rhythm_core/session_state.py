"""
Session State
=============

Owns player progress (score, level, remaining objectives, player name) and
orchestrates the level lifecycle:

    set_player_name -> start_level -> objective_hit ... -> end_level
                          ^                                   |
                          +-- restart_level / advance_to_next_level

Every numeric write is clamped first and only notifies when the stored value
actually changes. Invalid calls never raise: they log a warning and leave the
state untouched.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Protocol

from loguru import logger

from syncseed.rhythm_core.config_loader import GameConfig, get_config
from syncseed.rhythm_core.difficulty import DifficultyCurve
from syncseed.rhythm_core.interfaces import (
    LeaderboardSink,
    NullLeaderboardSink,
    NullScoreDisplay,
    NullUiControl,
    ScoreDisplay,
    UiControl,
)
from syncseed.rhythm_core.signals import Signal


class LevelSource(Protocol):
    """Anything that can materialize a level's objectives."""

    def generate(self, level: int) -> bool: ...


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of the session for UI and API consumers."""
    level: int
    score: int
    points_per_target: int
    objectives_remaining: int
    player_name: str
    is_game_active: bool
    is_level_complete: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SessionState:
    """
    Player progress and level flow.

    Signals:
        score_changed(score)
        level_changed(level)
        objectives_remaining_changed(count)
        level_completed()
        game_started()
        player_name_changed(name)
    """

    DEFAULT_LEVEL = 1
    DEFAULT_SCORE = 0
    DEFAULT_OBJECTIVES_REMAINING = 0
    DEFAULT_PLAYER_NAME = ""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        level_source: Optional[LevelSource] = None,
        score_display: Optional[ScoreDisplay] = None,
        leaderboard: Optional[LeaderboardSink] = None,
        ui: Optional[UiControl] = None
    ):
        """
        Initialize session with default values.

        Args:
            config: Game configuration. Uses default if None.
            level_source: Level generator asked to spawn each level.
            score_display: Receives every score change.
            leaderboard: Receives (player_name, score) when a level ends.
            ui: Menu and leaderboard screens.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._difficulty = DifficultyCurve(config)
        self._level_source = level_source
        self._score_display = score_display if score_display is not None else NullScoreDisplay()
        self._leaderboard = leaderboard if leaderboard is not None else NullLeaderboardSink()
        self._ui = ui if ui is not None else NullUiControl()

        self._default_points_per_target = max(1, config.targets.points_per_target)

        self._level: int = self.DEFAULT_LEVEL
        self._score: int = self.DEFAULT_SCORE
        self._points_per_target: int = self._default_points_per_target
        self._objectives_remaining: int = self.DEFAULT_OBJECTIVES_REMAINING
        self._player_name: str = self.DEFAULT_PLAYER_NAME

        self.score_changed = Signal("score_changed")
        self.level_changed = Signal("level_changed")
        self.objectives_remaining_changed = Signal("objectives_remaining_changed")
        self.level_completed = Signal("level_completed")
        self.game_started = Signal("game_started")
        self.player_name_changed = Signal("player_name_changed")

    # -- Properties -------------------------------------------------------------

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def difficulty(self) -> DifficultyCurve:
        return self._difficulty

    @property
    def level(self) -> int:
        return self._level

    @property
    def score(self) -> int:
        return self._score

    @property
    def points_per_target(self) -> int:
        return self._points_per_target

    @property
    def objectives_remaining(self) -> int:
        return self._objectives_remaining

    @property
    def player_name(self) -> str:
        return self._player_name

    @property
    def is_game_active(self) -> bool:
        """True while a player name is set."""
        return self._player_name != ""

    @property
    def is_level_complete(self) -> bool:
        return self._objectives_remaining <= 0

    def set_level_source(self, level_source: Optional[LevelSource]) -> None:
        self._level_source = level_source

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            level=self._level,
            score=self._score,
            points_per_target=self._points_per_target,
            objectives_remaining=self._objectives_remaining,
            player_name=self._player_name,
            is_game_active=self.is_game_active,
            is_level_complete=self.is_level_complete,
        )

    # -- Clamped setters --------------------------------------------------------

    def _set_level(self, value: int) -> None:
        value = max(1, int(value))
        if value == self._level:
            return
        self._level = value
        self.level_changed.emit(value)

    def _set_score(self, value: int) -> None:
        value = max(0, int(value))
        if value == self._score:
            return
        self._score = value
        self.score_changed.emit(value)
        self._score_display.update(value)

    def _set_objectives_remaining(self, value: int) -> None:
        value = max(0, int(value))
        if value == self._objectives_remaining:
            return
        self._objectives_remaining = value
        self.objectives_remaining_changed.emit(value)

    def _set_player_name(self, value: Optional[str]) -> None:
        value = value or ""
        if value == self._player_name:
            return
        self._player_name = value
        self.player_name_changed.emit(value)

    def set_points_per_target(self, value: int) -> None:
        """Points awarded per objective hit, floored at 1."""
        self._points_per_target = max(1, int(value))

    # -- Public operations ------------------------------------------------------

    def set_player_name(self, name: Optional[str]) -> bool:
        """
        Set the player name, which also activates the session.

        Args:
            name: Raw name; surrounding whitespace is trimmed.

        Returns:
            True if the name was accepted.
        """
        trimmed = (name or "").strip()
        if not trimmed:
            logger.warning("Player name cannot be empty or whitespace.")
            return False

        self._set_player_name(trimmed)
        logger.info(f"Player name set to: {trimmed}")
        return True

    def start_level(self) -> bool:
        """
        Start the current level: reset score, set the objective count and
        ask the level source to spawn objectives.

        Returns:
            True if the level started.
        """
        if not self.is_game_active:
            logger.warning("Cannot start level without setting player name.")
            return False

        self._set_score(0)
        self._set_objectives_remaining(self._difficulty.target_count(self._level))

        if self._level_source is not None:
            self._level_source.generate(self._level)

        logger.info(f"Level {self._level} started with {self._objectives_remaining} objectives.")
        self.game_started.emit()
        return True

    def objective_hit(self) -> bool:
        """
        Award points for one objective and end the level on the last one.

        Returns:
            True if the hit was counted.
        """
        if not self.is_game_active or self._objectives_remaining <= 0:
            logger.warning("Cannot hit objective: game not active or level already complete.")
            return False

        self._set_score(self._score + self._points_per_target)
        self._set_objectives_remaining(self._objectives_remaining - 1)

        if self.is_level_complete:
            self.end_level()
        return True

    def report_objective_hit(self, score_value: int) -> bool:
        """
        Hit report from a RhythmObjective.

        The level rules award points_per_target per hit; score_value is the
        objective's advertised value and is only logged.
        """
        logger.debug(f"Objective hit reported (value {score_value}).")
        return self.objective_hit()

    def add_score(self, amount: int) -> bool:
        """
        Add bonus points. Never changes objectives_remaining, so it can't
        complete a level on its own.

        Returns:
            True if the points were added.
        """
        if amount <= 0:
            logger.warning(f"Cannot add non-positive score: {amount}")
            return False

        self._set_score(self._score + amount)
        return True

    def advance_to_next_level(self) -> bool:
        self._set_level(self._level + 1)
        return self.start_level()

    def restart_level(self) -> bool:
        return self.start_level()

    def end_level(self) -> bool:
        """
        Finish the level: notify, submit the score and show the leaderboard.

        Calling it again while no objectives remain resubmits the score.

        Returns:
            True if the level was ended.
        """
        if not self.is_level_complete:
            logger.warning("Cannot end level: objectives still remaining.")
            return False

        logger.info(f"Level {self._level} ended. Final score: {self._score}")
        self.level_completed.emit()

        if self._player_name:
            self._leaderboard.submit(self._player_name, self._score)

        self._ui.show_leaderboard()
        return True

    def show_start_menu(self) -> None:
        self._ui.show_start_menu()

    def reset_game(self) -> None:
        """Restore construction defaults and return to the start menu."""
        self._set_level(self.DEFAULT_LEVEL)
        self._set_score(self.DEFAULT_SCORE)
        self._set_objectives_remaining(self.DEFAULT_OBJECTIVES_REMAINING)
        self._set_player_name(self.DEFAULT_PLAYER_NAME)
        self._points_per_target = self._default_points_per_target
        self.show_start_menu()
