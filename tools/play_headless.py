"""
Headless Play Mode
==================

Plays a SyncSeed session without any device: a fixed-timestep host loop
ticks the core and a scripted player hits one objective every few beats.
Collaborator calls are printed to the terminal.

Usage:
    python -m tools.play_headless [--levels N] [--seed SEED] [--player NAME] [--fps FPS]
"""

from __future__ import annotations

import argparse
import json
import random
import sys
from typing import List, Optional, Tuple

from loguru import logger

from syncseed.rhythm_core.config_loader import load_config
from syncseed.rhythm_core.context import GameContext


class ConsoleScoreDisplay:
    def __init__(self, verbose: bool):
        self._verbose = verbose

    def update(self, score: int) -> None:
        if self._verbose:
            print(f"  score: {score}")


class MemoryLeaderboard:
    """Keeps submitted scores, best first."""

    def __init__(self):
        self.entries: List[Tuple[str, int]] = []

    def submit(self, player_name: str, score: int) -> None:
        self.entries.append((player_name, score))
        self.entries.sort(key=lambda entry: entry[1], reverse=True)


class ConsoleUi:
    def __init__(self, verbose: bool):
        self._verbose = verbose

    def show_leaderboard(self) -> None:
        if self._verbose:
            print("  [leaderboard]")

    def show_start_menu(self) -> None:
        if self._verbose:
            print("  [start menu]")


class CountingFeedback:
    def __init__(self):
        self.hit_sounds = 0
        self.haptic_pulses = 0

    def play_hit_sound(self) -> None:
        self.hit_sounds += 1

    def trigger_haptic_pulse(self) -> None:
        self.haptic_pulses += 1


def play_session(
    levels: int = 3,
    seed: Optional[int] = 42,
    player: str = "Headless",
    fps: int = 60,
    beats_per_hit: int = 1,
    max_seconds_per_level: float = 600.0,
    config_path: Optional[str] = None,
    verbose: bool = False
) -> dict:
    """
    Play levels 1..levels and return a summary.

    Args:
        levels: Number of levels to play.
        seed: Seed for placement and the scripted player.
        player: Player name.
        fps: Host loop rate.
        beats_per_hit: Beat-clock pulses between scripted hits.
        max_seconds_per_level: Simulated time cap per level.
        config_path: Optional alternative game_config.yaml.
        verbose: Print collaborator calls.
    """
    config = load_config(config_path)
    leaderboard = MemoryLeaderboard()
    feedback = CountingFeedback()
    context = GameContext(
        config=config,
        seed=seed,
        score_display=ConsoleScoreDisplay(verbose),
        leaderboard=leaderboard,
        ui=ConsoleUi(verbose),
        feedback=feedback,
    )
    player_rng = random.Random(seed)
    dt = 1.0 / max(1, fps)

    counters = {"beats": 0, "completed": 0}

    def on_beat() -> None:
        counters["beats"] += 1

    def on_level_completed() -> None:
        counters["completed"] += 1

    context.beat_clock.pulse_signal.connect(on_beat)
    context.session.level_completed.connect(on_level_completed)

    if not context.session.set_player_name(player):
        raise ValueError(f"Invalid player name: {player!r}")

    level_results = []
    for level_index in range(levels):
        if level_index == 0:
            context.session.start_level()
        else:
            context.session.advance_to_next_level()

        level = context.session.level
        if verbose:
            print(f"Level {level}: {context.session.objectives_remaining} objectives, "
                  f"beat {context.beat_clock.interval:.2f}s")

        elapsed = 0.0
        completed_before = counters["completed"]
        while counters["completed"] == completed_before and elapsed < max_seconds_per_level:
            context.tick(dt)
            elapsed += dt

            if counters["beats"] >= beats_per_hit:
                counters["beats"] = 0
                live = [o for o in context.level_generator.objectives if not o.is_hit]
                if live:
                    player_rng.choice(live).hit()

        level_results.append({
            "level": level,
            "score": context.session.score,
            "objectives_remaining": context.session.objectives_remaining,
            "beat_interval": context.beat_clock.interval,
            "placement_limit": context.level_generator.placement_limit,
            "seconds": round(elapsed, 3),
            "completed": counters["completed"] > completed_before,
        })

    return {
        "player": player,
        "levels": level_results,
        "leaderboard": leaderboard.entries,
        "hit_sounds": feedback.hit_sounds,
        "haptic_pulses": feedback.haptic_pulses,
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Play SyncSeed headlessly")
    parser.add_argument("--levels", type=int, default=3, help="Levels to play")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--player", type=str, default="Headless", help="Player name")
    parser.add_argument("--fps", type=int, default=60, help="Host loop rate")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--verbose", action="store_true", help="Print collaborator calls")
    args = parser.parse_args()

    if not args.verbose:
        logger.remove()
        logger.add(sys.stderr, level="WARNING")

    summary = play_session(
        levels=args.levels,
        seed=args.seed,
        player=args.player,
        fps=args.fps,
        config_path=args.config,
        verbose=args.verbose,
    )
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
