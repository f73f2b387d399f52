"""
Placement Benchmark
===================

Measures level generation throughput and how often placement had to fall
back to an unchecked sample.

Usage:
    python -m tools.benchmark_placement [--levels N] [--repeats R] [--seed S]
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from typing import Optional

import numpy as np

from syncseed.rhythm_core.config_loader import load_config
from syncseed.rhythm_core.level_generator import LevelGenerator


def benchmark_generation(
    levels: int = 20,
    repeats: int = 50,
    seed: int = 42,
    config_path: Optional[str] = None
) -> dict:
    """
    Benchmark LevelGenerator.generate across a range of levels.

    Args:
        levels: Highest level to generate (starting from 1).
        repeats: Generations per level.
        seed: Random seed.
        config_path: Optional alternative game_config.yaml.

    Returns:
        Dict with timing and separation results.
    """
    config = load_config(config_path)
    generator = LevelGenerator(config=config, seed=seed)

    total_objectives = 0
    fallbacks = 0
    min_separation = np.inf

    start = time.perf_counter()
    for level in range(1, levels + 1):
        for _ in range(repeats):
            generator.generate(level)
            placements = generator.placements
            total_objectives += len(placements)
            fallbacks += sum(1 for placement in placements if placement.used_fallback)

            if len(placements) > 1:
                positions = np.array([placement.position for placement in placements])
                deltas = positions[:, None, :] - positions[None, :, :]
                distances = np.linalg.norm(deltas, axis=-1)
                np.fill_diagonal(distances, np.inf)
                min_separation = min(min_separation, float(distances.min()))
    elapsed = time.perf_counter() - start

    generations = max(0, levels) * max(0, repeats)
    return {
        "levels": levels,
        "repeats": repeats,
        "generations": generations,
        "objectives": total_objectives,
        "elapsed_seconds": elapsed,
        "ms_per_generation": (elapsed * 1000) / generations if generations else 0.0,
        "fallback_rate": fallbacks / total_objectives if total_objectives else 0.0,
        "min_separation": None if np.isinf(min_separation) else min_separation,
        "configured_separation": config.placement.min_spawn_distance,
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark objective placement")
    parser.add_argument("--levels", type=int, default=20, help="Highest level to generate")
    parser.add_argument("--repeats", type=int, default=50, help="Generations per level")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    args = parser.parse_args()

    results = benchmark_generation(
        levels=args.levels,
        repeats=args.repeats,
        seed=args.seed,
        config_path=args.config,
    )
    print(json.dumps(results, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
