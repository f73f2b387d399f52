"""
Configuration Loader
====================

Loads game_config.yaml and validates it into typed, immutable config objects.
Out-of-range values are clamped rather than rejected (see validate_config).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from loguru import logger


@dataclass(frozen=True)
class TargetsConfig:
    """Objective count progression and scoring."""
    min_targets: int = 3
    max_targets: int = 30
    targets_increment: int = 2
    points_per_target: int = 10


@dataclass(frozen=True)
class BeatConfig:
    """Beat interval progression (seconds)."""
    base_beat_interval: float = 2.0
    min_beat_interval: float = 0.4
    max_beat_interval: float = 3.0
    beat_decrease_per_level: float = 0.1


@dataclass(frozen=True)
class PlacementConfig:
    """Placement limit progression and spawn geometry."""
    base_limit: int = 10
    min_limit: int = 3
    max_limit: int = 10
    limit_decrease_per_level: float = 0.5
    spawn_root: Tuple[float, float, float] = (0.0, 0.0, 2.0)
    spawn_radius: float = 1.5
    min_spawn_distance: float = 0.35
    max_spawn_attempts: int = 30
    clear_previous_level: bool = True


@dataclass(frozen=True)
class ObjectiveConfig:
    """Per-objective behaviour."""
    destroy_delay: float = 0.3
    loop_pulses: bool = True
    allow_repeat_hits: bool = False
    auto_start: bool = True
    min_objective_interval: float = 0.01


@dataclass(frozen=True)
class FeedbackConfig:
    """Audio and haptic request toggles."""
    audio_enabled: bool = True
    haptics_enabled: bool = True


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration.

    All values are immutable; use validate_config() to obtain a clamped copy.
    """
    targets: TargetsConfig = field(default_factory=TargetsConfig)
    beat: BeatConfig = field(default_factory=BeatConfig)
    placement: PlacementConfig = field(default_factory=PlacementConfig)
    objective: ObjectiveConfig = field(default_factory=ObjectiveConfig)
    feedback: FeedbackConfig = field(default_factory=FeedbackConfig)


def _clamped(name: str, value, floor=None, ceiling=None):
    """Clamp a single value, logging a warning when it had to change."""
    result = value
    if floor is not None and result < floor:
        result = floor
    if ceiling is not None and result > ceiling:
        result = ceiling
    if result != value:
        logger.warning(f"Config value {name}={value} out of range, clamped to {result}")
    return result


def validate_config(config: GameConfig) -> GameConfig:
    """
    Clamp every tunable into its valid range.

    Pure apart from warning logs: returns a new GameConfig and leaves the
    input untouched. Applying it twice yields the same result.

    Args:
        config: Configuration to validate.

    Returns:
        Clamped configuration.
    """
    t = config.targets
    min_targets = _clamped("targets.min_targets", t.min_targets, floor=1)
    targets = replace(
        t,
        min_targets=min_targets,
        max_targets=_clamped("targets.max_targets", t.max_targets, floor=min_targets),
        targets_increment=_clamped("targets.targets_increment", t.targets_increment, floor=0),
        points_per_target=_clamped("targets.points_per_target", t.points_per_target, floor=1),
    )

    b = config.beat
    min_beat = _clamped("beat.min_beat_interval", b.min_beat_interval, floor=0.01)
    max_beat = _clamped("beat.max_beat_interval", b.max_beat_interval, floor=min_beat)
    beat = replace(
        b,
        min_beat_interval=min_beat,
        max_beat_interval=max_beat,
        base_beat_interval=_clamped(
            "beat.base_beat_interval", b.base_beat_interval, floor=min_beat, ceiling=max_beat
        ),
        beat_decrease_per_level=_clamped("beat.beat_decrease_per_level", b.beat_decrease_per_level, floor=0.0),
    )

    p = config.placement
    min_limit = _clamped("placement.min_limit", p.min_limit, floor=0)
    max_limit = _clamped("placement.max_limit", p.max_limit, floor=min_limit)
    placement = replace(
        p,
        min_limit=min_limit,
        max_limit=max_limit,
        base_limit=_clamped("placement.base_limit", p.base_limit, floor=min_limit, ceiling=max_limit),
        limit_decrease_per_level=_clamped(
            "placement.limit_decrease_per_level", p.limit_decrease_per_level, floor=0.0
        ),
        spawn_radius=_clamped("placement.spawn_radius", p.spawn_radius, floor=0.0),
        min_spawn_distance=_clamped("placement.min_spawn_distance", p.min_spawn_distance, floor=0.0),
        max_spawn_attempts=_clamped("placement.max_spawn_attempts", p.max_spawn_attempts, floor=1),
    )

    o = config.objective
    objective = replace(
        o,
        destroy_delay=_clamped("objective.destroy_delay", o.destroy_delay, floor=0.0),
        min_objective_interval=_clamped("objective.min_objective_interval", o.min_objective_interval, floor=0.001),
    )

    return replace(config, targets=targets, beat=beat, placement=placement, objective=objective)


def _parse_vector3(data: Any) -> Tuple[float, float, float]:
    """Parse an [x, y, z] triple from YAML."""
    if not isinstance(data, (list, tuple)) or len(data) != 3:
        raise ValueError(f"spawn_root must have 3 values [x, y, z], got {data}")
    return (float(data[0]), float(data[1]), float(data[2]))


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Fetch an optional mapping section from the raw YAML document."""
    data = raw.get(name, {})
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config section '{name}' must be a mapping, got {type(data).__name__}")
    return data


def config_from_dict(raw: Dict[str, Any]) -> GameConfig:
    """
    Build a validated GameConfig from a parsed YAML mapping.

    Missing keys fall back to the dataclass defaults.
    """
    defaults = GameConfig()

    targets_data = _section(raw, "targets")
    targets = TargetsConfig(
        min_targets=int(targets_data.get("min_targets", defaults.targets.min_targets)),
        max_targets=int(targets_data.get("max_targets", defaults.targets.max_targets)),
        targets_increment=int(targets_data.get("targets_increment", defaults.targets.targets_increment)),
        points_per_target=int(targets_data.get("points_per_target", defaults.targets.points_per_target)),
    )

    beat_data = _section(raw, "beat")
    beat = BeatConfig(
        base_beat_interval=float(beat_data.get("base_beat_interval", defaults.beat.base_beat_interval)),
        min_beat_interval=float(beat_data.get("min_beat_interval", defaults.beat.min_beat_interval)),
        max_beat_interval=float(beat_data.get("max_beat_interval", defaults.beat.max_beat_interval)),
        beat_decrease_per_level=float(
            beat_data.get("beat_decrease_per_level", defaults.beat.beat_decrease_per_level)
        ),
    )

    placement_data = _section(raw, "placement")
    placement = PlacementConfig(
        base_limit=int(placement_data.get("base_limit", defaults.placement.base_limit)),
        min_limit=int(placement_data.get("min_limit", defaults.placement.min_limit)),
        max_limit=int(placement_data.get("max_limit", defaults.placement.max_limit)),
        limit_decrease_per_level=float(
            placement_data.get("limit_decrease_per_level", defaults.placement.limit_decrease_per_level)
        ),
        spawn_root=_parse_vector3(placement_data.get("spawn_root", defaults.placement.spawn_root)),
        spawn_radius=float(placement_data.get("spawn_radius", defaults.placement.spawn_radius)),
        min_spawn_distance=float(placement_data.get("min_spawn_distance", defaults.placement.min_spawn_distance)),
        max_spawn_attempts=int(placement_data.get("max_spawn_attempts", defaults.placement.max_spawn_attempts)),
        clear_previous_level=bool(
            placement_data.get("clear_previous_level", defaults.placement.clear_previous_level)
        ),
    )

    objective_data = _section(raw, "objective")
    objective = ObjectiveConfig(
        destroy_delay=float(objective_data.get("destroy_delay", defaults.objective.destroy_delay)),
        loop_pulses=bool(objective_data.get("loop_pulses", defaults.objective.loop_pulses)),
        allow_repeat_hits=bool(objective_data.get("allow_repeat_hits", defaults.objective.allow_repeat_hits)),
        auto_start=bool(objective_data.get("auto_start", defaults.objective.auto_start)),
        min_objective_interval=float(
            objective_data.get("min_objective_interval", defaults.objective.min_objective_interval)
        ),
    )

    feedback_data = _section(raw, "feedback")
    feedback = FeedbackConfig(
        audio_enabled=bool(feedback_data.get("audio_enabled", defaults.feedback.audio_enabled)),
        haptics_enabled=bool(feedback_data.get("haptics_enabled", defaults.feedback.haptics_enabled)),
    )

    config = GameConfig(
        targets=targets,
        beat=beat,
        placement=placement,
        objective=objective,
        feedback=feedback,
    )
    return validate_config(config)


def default_config() -> GameConfig:
    """Validated in-code defaults, without touching the filesystem."""
    return validate_config(GameConfig())


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If the file is not a YAML mapping or a value can't be parsed.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as exception:
            raise ValueError(f"Config file is not valid YAML: {config_path}. Error: {exception}") from exception

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file root must be a mapping: {config_path}")

    try:
        return config_from_dict(raw)
    except (TypeError, ValueError) as exception:
        raise ValueError(f"Config validation failed for {config_path}: {exception}") from exception


# Module-level cache for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
