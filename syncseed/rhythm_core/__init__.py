"""
Rhythm Core - gameplay state, difficulty scaling and level layout.

Main exports:
- GameContext: Composition root wiring every component together
- SessionState: Score, level and player progress
- LevelGenerator: Spawns a level's objectives
- RhythmObjective: A single hittable, pulsing objective
- BeatClock: Shared beat interval and pulse broadcaster
- DifficultyCurve: Level -> difficulty parameters
- GameConfig: Configuration loaded from game_config.yaml
"""

from syncseed.rhythm_core.config_loader import (
    GameConfig,
    default_config,
    get_config,
    load_config,
    reload_config,
    validate_config,
)
from syncseed.rhythm_core.signals import Signal
from syncseed.rhythm_core.difficulty import DifficultyCurve, LevelPlan
from syncseed.rhythm_core.beat_clock import BeatClock
from syncseed.rhythm_core.placement import DiskPlacer, Placement
from syncseed.rhythm_core.rhythm_objective import ObjectiveSpec, ObjectiveState, RhythmObjective
from syncseed.rhythm_core.level_generator import GENERATION_IN_PROGRESS, LevelGenerator
from syncseed.rhythm_core.session_state import SessionSnapshot, SessionState
from syncseed.rhythm_core.context import GameContext

__all__ = [
    "GameConfig",
    "default_config",
    "get_config",
    "load_config",
    "reload_config",
    "validate_config",
    "Signal",
    "DifficultyCurve",
    "LevelPlan",
    "BeatClock",
    "DiskPlacer",
    "Placement",
    "ObjectiveSpec",
    "ObjectiveState",
    "RhythmObjective",
    "GENERATION_IN_PROGRESS",
    "LevelGenerator",
    "SessionSnapshot",
    "SessionState",
    "GameContext",
]
